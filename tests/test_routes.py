"""End-to-end tests for the HTTP interface."""

import inspect

from util import STUDENT, TEACHER, bearer

from quizplatform import routes, tokens
from quizplatform.domain import Principal, Role
from quizplatform.factory import create_app

from fastapi.testclient import TestClient

QUIZ = {
    "title": "Primes",
    "passing_score": 2,
    "questions": [
        {"text": "2?", "options": ["composite", "prime"], "correct_index": 1},
        {"text": "4?", "options": ["composite", "prime"], "correct_index": 0},
        {"text": "7?", "options": ["a", "b", "prime"], "correct_index": 2},
    ],
}


def _create(client):
    res = client.post("/quiz/create", json=QUIZ, headers=bearer(TEACHER))
    assert res.status_code == 200
    return res.json()


def test_register_and_login(client):
    res = client.post("/auth/register",
                      json={"identity": "new@example.com", "password": "pw"})
    assert res.status_code == 201
    assert res.json() == {"identity": "new@example.com",
                          "role": "ROLE_STUDENT"}

    res = client.post("/auth/register",
                      json={"identity": "new@example.com", "password": "pw"})
    assert res.status_code == 409

    res = client.post("/auth/login",
                      json={"identity": "new@example.com", "password": "no"})
    assert res.status_code == 401

    res = client.post("/auth/login",
                      json={"identity": "new@example.com", "password": "pw"})
    assert res.status_code == 200
    token = res.json()["token"]

    res = client.get("/auth/me", headers={"Authorization": "Bearer " + token})
    assert res.json() == {"identity": "new@example.com",
                          "role": "ROLE_STUDENT"}


def test_password_hashing_handlers_are_sync():
    # Plain functions are run in the threadpool, off the event loop.
    assert not inspect.iscoroutinefunction(routes.register)
    assert not inspect.iscoroutinefunction(routes.login)


def test_register_bad_identity(client):
    res = client.post("/auth/register",
                      json={"identity": "a:b", "password": "pw"})
    assert res.status_code == 400


def test_me_requires_principal(client):
    assert client.get("/auth/me").status_code == 403
    res = client.get("/auth/me", headers={"Authorization": "Bearer BOGUS"})
    assert res.status_code == 403
    assert res.json() == {"reason": "Access denied"}


def test_create_quiz_is_teacher_only(client):
    assert client.post("/quiz/create", json=QUIZ).status_code == 403
    res = client.post("/quiz/create", json=QUIZ, headers=bearer(STUDENT))
    assert res.status_code == 403

    quiz = _create(client)
    assert quiz["teacher_identity"] == TEACHER.identity
    assert len(quiz["code"]) == 6


def test_get_quiz_hides_answers(client):
    code = _create(client)["code"]

    anonymous = client.get(f"/quiz/{code}").json()
    assert all("correct_index" not in q for q in anonymous["questions"])

    as_student = client.get(f"/quiz/{code.lower()}",
                            headers=bearer(STUDENT)).json()
    assert all("correct_index" not in q for q in as_student["questions"])

    as_owner = client.get(f"/quiz/{code}", headers=bearer(TEACHER)).json()
    assert [q["correct_index"] for q in as_owner["questions"]] == [1, 0, 2]


def test_get_missing_quiz(client):
    res = client.get("/quiz/NOPE22")
    assert res.status_code == 404
    assert "reason" in res.json()


def test_submit_and_results(client):
    code = _create(client)["code"]

    res = client.post(f"/quiz/{code}/submit", json={"0": 1, "1": 0},
                      headers=bearer(STUDENT))
    assert res.status_code == 200
    submission = res.json()
    assert (submission["score"], submission["total"], submission["passed"]) \
        == (2, 3, True)

    res = client.post(f"/quiz/{code}/submit", json={"0": 0, "9": 1},
                      headers=bearer(STUDENT))
    assert res.json()["score"] == 0
    assert res.json()["passed"] is False

    res = client.get(f"/quiz/{code}/results", headers=bearer(TEACHER))
    assert res.status_code == 200
    assert [s["score"] for s in res.json()] == [2, 0]

    res = client.get(f"/quiz/{code}/summary", headers=bearer(TEACHER))
    assert res.json()["attempts"] == 2
    assert res.json()["pass_rate"] == 0.5

    res = client.get("/student/progress", headers=bearer(STUDENT))
    assert [s["quiz_code"] for s in res.json()] == [code, code]


def test_submit_rejects_non_integer_answers(client):
    code = _create(client)["code"]
    for answers in ({"0": True}, {"0": "1"}, {"0": 1.5}):
        res = client.post(f"/quiz/{code}/submit", json=answers,
                          headers=bearer(STUDENT))
        assert res.status_code == 422, answers
    res = client.post(f"/quiz/{code}/submit", json={"0": None, "1": 0},
                      headers=bearer(STUDENT))
    assert res.status_code == 200
    assert res.json()["score"] == 1


def test_my_quizzes(client):
    first = _create(client)["code"]
    second = _create(client)["code"]
    res = client.get("/quiz/mine", headers=bearer(TEACHER))
    assert res.status_code == 200
    assert [q["code"] for q in res.json()] == sorted([first, second])
    assert res.json()[0]["questions"][0]["correct_index"] is not None

    other = Principal(identity="other@example.com", role=Role.TEACHER)
    assert client.get("/quiz/mine", headers=bearer(other)).json() == []
    assert client.get("/quiz/mine",
                      headers=bearer(STUDENT)).status_code == 403
    assert client.get("/quiz/mine").status_code == 403


def test_role_gates(client):
    code = _create(client)["code"]
    assert client.post(f"/quiz/{code}/submit", json={},
                       headers=bearer(TEACHER)).status_code == 403
    assert client.post(f"/quiz/{code}/submit",
                       json={}).status_code == 403
    assert client.get(f"/quiz/{code}/results",
                      headers=bearer(STUDENT)).status_code == 403
    assert client.get("/student/progress",
                      headers=bearer(TEACHER)).status_code == 403


def test_results_for_other_teacher(client):
    code = _create(client)["code"]
    other = Principal(identity="other@example.com", role=Role.TEACHER)
    res = client.get(f"/quiz/{code}/results", headers=bearer(other))
    assert res.status_code == 403


def test_submit_to_missing_quiz(client):
    res = client.post("/quiz/NOPE22/submit", json={},
                      headers=bearer(STUDENT))
    assert res.status_code == 404


def test_response_headers(client):
    res = client.get("/quiz/NOPE22")
    assert res.headers["X-Frame-Options"] == "DENY"


def test_signed_tokens(repo, secret):
    client = TestClient(create_app(repository=repo, TOKEN_SCHEME="signed",
                                   JWT_SECRET=secret))
    forged = bearer(TEACHER)
    assert client.get("/auth/me", headers=forged).status_code == 403

    client.post("/auth/register",
                json={"identity": "new@example.com", "password": "pw"})
    token = client.post("/auth/login", json={
        "identity": "new@example.com", "password": "pw"}).json()["token"]
    assert tokens.SignedTokenCodec(secret).decode(token).role is Role.STUDENT
    res = client.get("/auth/me", headers={"Authorization": "Bearer " + token})
    assert res.status_code == 200


def test_database_backed_app(db_repo):
    client = TestClient(create_app(repository=db_repo))
    code = _create(client)["code"]
    client.post(f"/quiz/{code}/submit", json={"0": 1, "1": 0, "2": 2},
                headers=bearer(STUDENT))
    res = client.get(f"/quiz/{code}/results", headers=bearer(TEACHER))
    assert res.json()[0]["score"] == 3
    assert res.json()[0]["submitted_answers"] == {"0": 1, "1": 0, "2": 2}
