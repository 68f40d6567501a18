"""Salted password hashes for the login flow."""

import hashlib
import hmac
import secrets
from base64 import b64decode, b64encode
import binascii

from .exceptions import InvalidCredentialsError

SALT_BYTES = 16
ITERATIONS = 260000


def _hash_salt_and_password(salt: bytes, password: str) -> bytes:
    return hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt,
                               ITERATIONS)


def hash_password(password: str) -> str:
    """Generate a salted one-way hash of a password."""
    salt = secrets.token_bytes(SALT_BYTES)
    hashed = _hash_salt_and_password(salt, password)
    return b64encode(salt + hashed).decode('ascii')


def check_password(password: str, encrypted: str) -> bool:
    """Check a password against a stored hash."""
    try:
        decoded = b64decode(encrypted, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidCredentialsError('Stored hash is unreadable') from e
    salt = decoded[:SALT_BYTES]
    enc_hashed = decoded[SALT_BYTES:]
    pass_hashed = _hash_salt_and_password(salt, password)
    if not hmac.compare_digest(pass_hashed, enc_hashed):
        raise InvalidCredentialsError('Incorrect password')
    return True
