"""SQLAlchemy-backed :class:`.Repository`."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String, \
    create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base, sessionmaker

from .repository import Repository
from ..domain import Question, Quiz, Role, Submission, User
from ..exceptions import AlreadyExistsError

log = logging.getLogger(__name__)

Base = declarative_base()


class DBUser(Base):
    """Persistence for :class:`domain.User`."""

    __tablename__ = 'users'

    identity = Column(String(255), primary_key=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)
    created = Column(DateTime, default=datetime.now)


class DBQuiz(Base):
    """Persistence for :class:`domain.Quiz`."""

    __tablename__ = 'quizzes'

    code = Column(String(32), primary_key=True)
    title = Column(String(255), nullable=False)
    teacher_identity = Column(String(255), index=True)
    passing_score = Column(Integer, default=0)
    time_limit_minutes = Column(Integer, default=0)
    questions = Column(JSON)
    created = Column(DateTime, default=datetime.now)


class DBSubmission(Base):
    """Persistence for :class:`domain.Submission`."""

    __tablename__ = 'submissions'

    submission_id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_code = Column(String(32), index=True)
    student_identity = Column(String(255), index=True)
    submitted_answers = Column(JSON)
    score = Column(Integer)
    total = Column(Integer)
    passed = Column(Boolean)
    timestamp = Column(DateTime(timezone=True))


def create_all(engine: Engine) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine)


def _to_user(row: DBUser) -> User:
    return User(identity=row.identity, password_hash=row.password_hash,
                role=Role(row.role))


def _to_quiz(row: DBQuiz) -> Quiz:
    return Quiz(code=row.code, title=row.title,
                teacher_identity=row.teacher_identity,
                passing_score=row.passing_score,
                time_limit_minutes=row.time_limit_minutes,
                questions=[Question(**q) for q in row.questions or []])


def _to_submission(row: DBSubmission) -> Submission:
    # JSON object keys come back as strings.
    answers = {int(k): v for k, v in (row.submitted_answers or {}).items()}
    return Submission(submission_id=row.submission_id,
                      quiz_code=row.quiz_code,
                      student_identity=row.student_identity,
                      submitted_answers=answers, score=row.score,
                      total=row.total, passed=row.passed,
                      timestamp=row.timestamp)


class DatabaseRepository(Repository):
    """Stores users, quizzes and submissions in a relational database."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False,
                                         bind=engine)

    @classmethod
    def from_uri(cls, uri: str) -> 'DatabaseRepository':
        """Connect to ``uri`` and create any missing tables."""
        if 'sqlite' in uri:
            args = {"check_same_thread": False}
        else:
            args = {}
        engine = create_engine(uri, connect_args=args)
        create_all(engine)
        return cls(engine)

    def find_user_by_identity(self, identity: str) -> Optional[User]:
        with self.SessionLocal() as db:
            row = db.get(DBUser, identity)
            return _to_user(row) if row else None

    def add_user(self, user: User) -> User:
        with self.SessionLocal() as db:
            db.add(DBUser(identity=user.identity,
                          password_hash=user.password_hash,
                          role=user.role.value))
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise AlreadyExistsError(
                    'Identity is already registered') from e
        return user

    def find_quiz_by_code(self, code: str) -> Optional[Quiz]:
        with self.SessionLocal() as db:
            row = db.get(DBQuiz, code)
            return _to_quiz(row) if row else None

    def save_quiz(self, quiz: Quiz) -> Quiz:
        with self.SessionLocal() as db:
            db.merge(DBQuiz(code=quiz.code, title=quiz.title,
                            teacher_identity=quiz.teacher_identity,
                            passing_score=quiz.passing_score,
                            time_limit_minutes=quiz.time_limit_minutes,
                            questions=[q.model_dump()
                                       for q in quiz.questions]))
            db.commit()
        return quiz

    def list_quizzes_by_teacher(self, identity: str) -> List[Quiz]:
        query = select(DBQuiz) \
            .where(DBQuiz.teacher_identity == identity) \
            .order_by(DBQuiz.code)
        with self.SessionLocal() as db:
            return [_to_quiz(row) for row in db.scalars(query)]

    def save_submission(self, submission: Submission) -> Submission:
        with self.SessionLocal() as db:
            row = DBSubmission(
                quiz_code=submission.quiz_code,
                student_identity=submission.student_identity,
                submitted_answers={str(k): v for k, v
                                   in submission.submitted_answers.items()},
                score=submission.score,
                total=submission.total,
                passed=submission.passed,
                timestamp=submission.timestamp,
            )
            db.add(row)
            db.commit()
            log.debug('Stored submission %s', row.submission_id)
            return submission.model_copy(
                update={'submission_id': row.submission_id})

    def list_submissions_by_quiz_code(self, code: str) -> List[Submission]:
        query = select(DBSubmission) \
            .where(DBSubmission.quiz_code == code) \
            .order_by(DBSubmission.submission_id)
        with self.SessionLocal() as db:
            return [_to_submission(row) for row in db.scalars(query)]

    def list_submissions_by_identity(self, identity: str) -> List[Submission]:
        query = select(DBSubmission) \
            .where(DBSubmission.student_identity == identity) \
            .order_by(DBSubmission.submission_id)
        with self.SessionLocal() as db:
            return [_to_submission(row) for row in db.scalars(query)]
