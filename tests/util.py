"""Helpers for tests."""

from quizplatform import tokens
from quizplatform.domain import Principal, Role

TEACHER = Principal(identity="teacher@example.com", role=Role.TEACHER)
STUDENT = Principal(identity="student@example.com", role=Role.STUDENT)


def bearer(principal: Principal) -> dict:
    """Authorization header for ``principal`` using opaque tokens."""
    return {"Authorization": "Bearer " + tokens.encode(principal.identity,
                                                       principal.role)}
