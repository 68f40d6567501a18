"""Domain types for users, quizzes and submissions."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """The two roles a principal may hold. Values are the wire labels."""

    STUDENT = 'ROLE_STUDENT'
    TEACHER = 'ROLE_TEACHER'


class Principal(BaseModel):
    """The authenticated identity and role attached to a single request."""

    model_config = ConfigDict(frozen=True)

    identity: str
    """Identity of the caller; an e-mail address for registered users."""

    role: Role


class User(BaseModel):
    """A registered account."""

    identity: str
    password_hash: str
    """See :mod:`quizplatform.passwords`. Never the plaintext password."""

    role: Role = Role.STUDENT


class Question(BaseModel):
    """A multiple choice question."""

    text: str
    options: List[str] = []
    correct_index: int


class PublicQuestion(BaseModel):
    """A question as shown to someone taking the quiz."""

    text: str
    options: List[str] = []


class QuizDraft(BaseModel):
    """The fields a teacher supplies when creating a quiz."""

    title: str
    passing_score: int = 0
    """Minimum (inclusive) number of correct answers required to pass."""

    time_limit_minutes: int = 0
    """Advisory time limit for clients; ``0`` means no limit."""

    questions: List[Question] = []


class PublicQuiz(BaseModel):
    """A quiz without its answer key."""

    code: str
    title: str
    teacher_identity: str
    passing_score: int
    time_limit_minutes: int = 0
    questions: List[PublicQuestion] = []


class Quiz(QuizDraft):
    """A published quiz, addressed by its join code."""

    code: str
    teacher_identity: str

    def answer_key(self) -> List[int]:
        """Correct option index for each question, in question order."""
        return [question.correct_index for question in self.questions]

    def public(self) -> PublicQuiz:
        """Strip the answer key."""
        return PublicQuiz(
            code=self.code,
            title=self.title,
            teacher_identity=self.teacher_identity,
            passing_score=self.passing_score,
            time_limit_minutes=self.time_limit_minutes,
            questions=[PublicQuestion(text=q.text, options=q.options)
                       for q in self.questions],
        )


class ScoreResult(BaseModel):
    """Outcome of evaluating one submission against an answer key."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0)
    total: int = Field(ge=0)
    passed: bool

    @property
    def percentage(self) -> int:
        """Score as a rounded percentage of the total; 0 for empty quizzes."""
        if self.total == 0:
            return 0
        return round(self.score / self.total * 100)


class Submission(BaseModel):
    """A scored attempt at a quiz."""

    submission_id: Optional[int] = None
    quiz_code: str
    student_identity: str
    submitted_answers: Dict[int, Optional[int]] = {}
    """Question index -> selected option index."""

    score: int
    total: int
    passed: bool
    timestamp: datetime


class QuizSummary(BaseModel):
    """Aggregate results for a quiz."""

    quiz_code: str
    attempts: int
    passed: int
    average_score: float
    pass_rate: float
