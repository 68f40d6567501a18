"""Student progress."""

from typing import List

from ..domain import Principal, Submission
from ..services import Repository


def get_progress(repo: Repository, principal: Principal) -> List[Submission]:
    """Submissions made by the requesting student."""
    return repo.list_submissions_by_identity(principal.identity)
