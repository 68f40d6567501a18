"""Special pytest fixture configuration file.

This file automatically provides all fixtures defined in it to all
pytest tests in this directory and sub directories.
"""
import pytest

from fastapi.testclient import TestClient

from quizplatform import tokens
from quizplatform.controllers import authentication
from quizplatform.domain import Role
from quizplatform.factory import create_app
from quizplatform.services.repository import InMemoryRepository
from quizplatform.services.datastore import DatabaseRepository

from util import STUDENT, TEACHER


@pytest.fixture
def secret():
    return "testing_secret_that_is_long_enough_for_hs256"


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def db_repo(tmp_path):
    return DatabaseRepository.from_uri(f"sqlite:///{tmp_path / 'pytest.db'}")


@pytest.fixture
def codec():
    return tokens.OpaqueTokenCodec()


@pytest.fixture
def app(repo, codec):
    return create_app(repository=repo, codec=codec, LOG_LEVEL="DEBUG")


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def teacher(repo):
    authentication.register(repo, TEACHER.identity, "chalk", Role.TEACHER)
    return TEACHER


@pytest.fixture
def student(repo):
    authentication.register(repo, STUDENT.identity, "crayon")
    return STUDENT
