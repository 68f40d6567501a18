"""Registration and login."""

import logging

from .. import passwords
from ..domain import Principal, Role, User
from ..exceptions import AlreadyExistsError, InvalidCredentialsError
from ..services import Repository

logger = logging.getLogger(__name__)


def register(repo: Repository, identity: str, password: str,
             role: Role = Role.STUDENT) -> User:
    """
    Create a new user account.

    Self-registered accounts are always students; ``role`` exists for
    operator tooling such as ``create_user.py``.

    Raises
    ------
    :class:`.AlreadyExistsError`
        Raised when ``identity`` is already registered.
    :class:`ValueError`
        Raised when ``identity`` cannot be carried in a token.

    """
    if not identity or ':' in identity:
        raise ValueError('Identity must be non-empty and may not contain ":"')
    if repo.find_user_by_identity(identity) is not None:
        raise AlreadyExistsError('Identity is already registered')
    user = User(identity=identity,
                password_hash=passwords.hash_password(password), role=role)
    repo.add_user(user)
    logger.info('Registered new %s account', role.value)
    return user


def login(repo: Repository, codec, identity: str, password: str) -> str:
    """
    Check a user's credentials and mint a bearer token.

    Raises
    ------
    :class:`.InvalidCredentialsError`
        Raised when the identity is unknown or the password does not match.

    """
    user = repo.find_user_by_identity(identity)
    if user is None:
        logger.debug('Login failed: no such user')
        raise InvalidCredentialsError('Invalid credentials')
    try:
        passwords.check_password(password, user.password_hash)
    except InvalidCredentialsError as e:
        logger.debug('Login failed: %s', e)
        raise InvalidCredentialsError('Invalid credentials') from e
    return codec.encode(Principal(identity=user.identity, role=user.role))
