"""Provides the HTTP interface of the quiz platform."""

import logging
from typing import Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, StrictInt

from .auth.decorators import RoleGuard, current_principal
from .controllers import authentication, quizzes, students
from .domain import Principal, PublicQuiz, Quiz, QuizDraft, QuizSummary, \
    Role, Submission
from .services import Repository

logger = logging.getLogger(__name__)

router = APIRouter()

any_user = RoleGuard(Role.STUDENT, Role.TEACHER)
teacher_only = RoleGuard(Role.TEACHER)
student_only = RoleGuard(Role.STUDENT)


class Credentials(BaseModel):
    identity: str
    password: str


class Registered(BaseModel):
    identity: str
    role: Role


class IssuedToken(BaseModel):
    token: str
    token_type: str = 'bearer'


def get_repository(request: Request) -> Repository:
    return request.app.extra['repository']


def get_codec(request: Request):
    return request.app.extra['codec']


@router.post('/auth/register', status_code=status.HTTP_201_CREATED,
             response_model=Registered)
def register(credentials: Credentials,
             repo: Repository = Depends(get_repository)) -> Registered:
    """Anyone can register; new accounts are students."""
    try:
        user = authentication.register(repo, credentials.identity,
                                       credentials.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail=str(e)) from e
    return Registered(identity=user.identity, role=user.role)


@router.post('/auth/login', response_model=IssuedToken)
def login(credentials: Credentials,
          repo: Repository = Depends(get_repository),
          codec=Depends(get_codec)) -> IssuedToken:
    token = authentication.login(repo, codec, credentials.identity,
                                 credentials.password)
    return IssuedToken(token=token)


@router.get('/auth/me', response_model=Principal)
async def me(principal: Principal = Depends(any_user)) -> Principal:
    return principal


@router.post('/quiz/create', response_model=Quiz)
async def create_quiz(draft: QuizDraft, request: Request,
                      principal: Principal = Depends(teacher_only),
                      repo: Repository = Depends(get_repository)) -> Quiz:
    code_length = request.app.extra.get('QUIZ_CODE_LENGTH', 6)
    return quizzes.create_quiz(repo, principal, draft, code_length)


@router.get('/quiz/mine', response_model=List[Quiz])
async def my_quizzes(principal: Principal = Depends(teacher_only),
                     repo: Repository = Depends(get_repository)
                     ) -> List[Quiz]:
    """Lets a teacher recover the join codes of their quizzes."""
    return quizzes.list_quizzes(repo, principal)


@router.get('/quiz/{code}', response_model=None)
async def get_quiz(code: str,
                   principal: Optional[Principal] = Depends(current_principal),
                   repo: Repository = Depends(get_repository)
                   ) -> Union[Quiz, PublicQuiz]:
    """The owner sees the answer key; everyone else gets the public view."""
    quiz = quizzes.get_quiz(repo, code)
    if principal and principal.role is Role.TEACHER \
            and principal.identity == quiz.teacher_identity:
        return quiz
    return quiz.public()


@router.post('/quiz/{code}/submit', response_model=Submission)
async def submit_quiz(code: str, answers: Dict[int, Optional[StrictInt]],
                      principal: Principal = Depends(student_only),
                      repo: Repository = Depends(get_repository)
                      ) -> Submission:
    return quizzes.submit_quiz(repo, principal, code, answers)


@router.get('/quiz/{code}/results', response_model=List[Submission])
async def get_results(code: str,
                      principal: Principal = Depends(teacher_only),
                      repo: Repository = Depends(get_repository)
                      ) -> List[Submission]:
    return quizzes.get_results(repo, principal, code)


@router.get('/quiz/{code}/summary', response_model=QuizSummary)
async def get_summary(code: str,
                      principal: Principal = Depends(teacher_only),
                      repo: Repository = Depends(get_repository)
                      ) -> QuizSummary:
    return quizzes.summarize_results(repo, principal, code)


@router.get('/student/progress', response_model=List[Submission])
async def get_progress(principal: Principal = Depends(student_only),
                       repo: Repository = Depends(get_repository)
                       ) -> List[Submission]:
    return students.get_progress(repo, principal)
