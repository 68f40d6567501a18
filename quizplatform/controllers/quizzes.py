"""Quiz creation, retrieval, submission and results."""

import logging
import secrets
from datetime import datetime, timezone
from typing import Any, List, Mapping

from .. import scoring
from ..domain import Principal, Quiz, QuizDraft, QuizSummary, Submission
from ..exceptions import AuthorizationError, NotFoundError
from ..services import Repository

logger = logging.getLogger(__name__)

CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
"""No 0/O or 1/I, so codes survive being read aloud."""

MAX_CODE_ATTEMPTS = 20


def generate_code(length: int = 6) -> str:
    """Random quiz join code."""
    return ''.join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def create_quiz(repo: Repository, principal: Principal, draft: QuizDraft,
                code_length: int = 6) -> Quiz:
    """Publish a quiz owned by ``principal`` under a fresh join code."""
    for _ in range(MAX_CODE_ATTEMPTS):
        code = generate_code(code_length)
        if repo.find_quiz_by_code(code) is None:
            break
    else:
        raise RuntimeError('Could not allocate an unused quiz code')

    quiz = Quiz(code=code, teacher_identity=principal.identity,
                **draft.model_dump())
    repo.save_quiz(quiz)
    logger.info('Created quiz %s with %i questions', code,
                len(quiz.questions))
    return quiz


def get_quiz(repo: Repository, code: str) -> Quiz:
    """Look up a quiz by join code, ignoring case."""
    quiz = repo.find_quiz_by_code(code.upper())
    if quiz is None:
        raise NotFoundError(f'No such quiz: {code}')
    return quiz


def list_quizzes(repo: Repository, principal: Principal) -> List[Quiz]:
    """Quizzes owned by the requesting teacher."""
    return repo.list_quizzes_by_teacher(principal.identity)


def submit_quiz(repo: Repository, principal: Principal, code: str,
                answers: Mapping[int, Any]) -> Submission:
    """Score a student's answers and store the result."""
    quiz = get_quiz(repo, code)
    result = scoring.score(quiz.answer_key(), answers, quiz.passing_score)
    submission = Submission(
        quiz_code=quiz.code,
        student_identity=principal.identity,
        submitted_answers=dict(answers),
        score=result.score,
        total=result.total,
        passed=result.passed,
        timestamp=datetime.now(timezone.utc),
    )
    submission = repo.save_submission(submission)
    logger.info('Scored submission to %s: %i/%i', quiz.code, result.score,
                result.total)
    return submission


def _owned_quiz(repo: Repository, principal: Principal, code: str) -> Quiz:
    quiz = get_quiz(repo, code)
    if quiz.teacher_identity != principal.identity:
        logger.debug('Results for %s requested by a non-owner', quiz.code)
        raise AuthorizationError('Access denied')
    return quiz


def get_results(repo: Repository, principal: Principal,
                code: str) -> List[Submission]:
    """All submissions to a quiz. Only the quiz's owner may see them."""
    quiz = _owned_quiz(repo, principal, code)
    return repo.list_submissions_by_quiz_code(quiz.code)


def summarize_results(repo: Repository, principal: Principal,
                      code: str) -> QuizSummary:
    """Attempt count, average score and pass rate for a quiz."""
    submissions = get_results(repo, principal, code)
    attempts = len(submissions)
    passed = sum(1 for s in submissions if s.passed)
    if attempts:
        average = sum(s.score for s in submissions) / attempts
        pass_rate = passed / attempts
    else:
        average = pass_rate = 0.0
    return QuizSummary(quiz_code=code.upper(), attempts=attempts,
                       passed=passed, average_score=average,
                       pass_rate=pass_rate)
