"""Configuration for the quiz platform service."""

import os

TOKEN_SCHEME = os.environ.get('TOKEN_SCHEME', 'opaque')
"""``opaque`` (unsigned, reversible) or ``signed`` (HS256 JWT)."""

JWT_SECRET = os.environ.get('JWT_SECRET', 'foosecret')
"""Used only when ``TOKEN_SCHEME`` is ``signed``."""

TOKEN_TTL_SECONDS = int(os.environ.get('TOKEN_TTL_SECONDS', '7200'))

DATABASE_URI = os.environ.get('DATABASE_URI')
"""SQLAlchemy URI. If unset, data is kept in memory for the process life."""

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

SERVER_ROOT_PATH = os.environ.get('SERVER_ROOT_PATH', '')

QUIZ_CODE_LENGTH = int(os.environ.get('QUIZ_CODE_LENGTH', '6'))

AUTH_HEADER = 'Authorization'
AUTH_SCHEME_PREFIX = 'Bearer '


def defaults() -> dict:
    """Current configuration values, keyed by name."""
    return {
        'TOKEN_SCHEME': TOKEN_SCHEME,
        'JWT_SECRET': JWT_SECRET,
        'TOKEN_TTL_SECONDS': TOKEN_TTL_SECONDS,
        'DATABASE_URI': DATABASE_URI,
        'LOG_LEVEL': LOG_LEVEL,
        'SERVER_ROOT_PATH': SERVER_ROOT_PATH,
        'QUIZ_CODE_LENGTH': QUIZ_CODE_LENGTH,
    }
