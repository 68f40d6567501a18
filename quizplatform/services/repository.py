"""Storage boundary for users, quizzes and submissions."""

from abc import ABC, abstractmethod
from threading import RLock
from typing import Dict, List, Optional

from ..domain import Quiz, Submission, User
from ..exceptions import AlreadyExistsError


class Repository(ABC):
    """Lookups and writes used by the request handlers."""

    @abstractmethod
    def find_user_by_identity(self, identity: str) -> Optional[User]:
        """Get a user by identity."""

    @abstractmethod
    def add_user(self, user: User) -> User:
        """
        Create a user.

        Raises
        ------
        :class:`.AlreadyExistsError`
            Raised when a user with the same identity exists.

        """

    @abstractmethod
    def find_quiz_by_code(self, code: str) -> Optional[Quiz]:
        """Get a quiz by its join code."""

    @abstractmethod
    def save_quiz(self, quiz: Quiz) -> Quiz:
        """Create or replace a quiz."""

    @abstractmethod
    def list_quizzes_by_teacher(self, identity: str) -> List[Quiz]:
        """Quizzes owned by a teacher, ordered by code."""

    @abstractmethod
    def save_submission(self, submission: Submission) -> Submission:
        """Store a submission, returning it with its ``submission_id``."""

    @abstractmethod
    def list_submissions_by_quiz_code(self, code: str) -> List[Submission]:
        """Submissions for a quiz, oldest first."""

    @abstractmethod
    def list_submissions_by_identity(self, identity: str) -> List[Submission]:
        """Submissions made by a student, oldest first."""


class InMemoryRepository(Repository):
    """Keeps everything in process memory. Safe to share between threads."""

    def __init__(self):
        self._lock = RLock()
        self._users: Dict[str, User] = {}
        self._quizzes: Dict[str, Quiz] = {}
        self._submissions: List[Submission] = []

    def find_user_by_identity(self, identity: str) -> Optional[User]:
        with self._lock:
            return self._users.get(identity)

    def add_user(self, user: User) -> User:
        with self._lock:
            if user.identity in self._users:
                raise AlreadyExistsError('Identity is already registered')
            self._users[user.identity] = user
        return user

    def find_quiz_by_code(self, code: str) -> Optional[Quiz]:
        with self._lock:
            return self._quizzes.get(code)

    def save_quiz(self, quiz: Quiz) -> Quiz:
        with self._lock:
            self._quizzes[quiz.code] = quiz
        return quiz

    def list_quizzes_by_teacher(self, identity: str) -> List[Quiz]:
        with self._lock:
            return sorted((q for q in self._quizzes.values()
                           if q.teacher_identity == identity),
                          key=lambda q: q.code)

    def save_submission(self, submission: Submission) -> Submission:
        with self._lock:
            stored = submission.model_copy(
                update={'submission_id': len(self._submissions) + 1})
            self._submissions.append(stored)
        return stored

    def list_submissions_by_quiz_code(self, code: str) -> List[Submission]:
        with self._lock:
            return [s for s in self._submissions if s.quiz_code == code]

    def list_submissions_by_identity(self, identity: str) -> List[Submission]:
        with self._lock:
            return [s for s in self._submissions
                    if s.student_identity == identity]
