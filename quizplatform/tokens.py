"""
Functions for working with bearer tokens on user requests.

The default, opaque scheme is a reversible encoding of ``identity:role`` and
carries **no integrity protection**: anyone who knows the scheme can mint a
token for any identity and role. It must not be used where that matters.
:class:`SignedTokenCodec` provides the same interface backed by an HS256 JWT
with an expiry, and is selected with ``TOKEN_SCHEME=signed``.
"""

import binascii
import logging
from base64 import b64decode, urlsafe_b64encode
from datetime import datetime, timedelta, timezone

import jwt

from .domain import Principal, Role
from .exceptions import MalformedTokenError

log = logging.getLogger(__name__)

SEPARATOR = ':'
"""Reserved between the identity and the role label."""

FIELD_COUNT = 2

ALGORITHM = 'HS256'


def encode(identity: str, role: Role) -> str:
    """Encode an identity and role as an opaque, header-safe token."""
    if not identity:
        raise ValueError('Identity may not be empty')
    if SEPARATOR in identity:
        raise ValueError(f'Identity may not contain {SEPARATOR!r}')
    raw = f'{identity}{SEPARATOR}{Role(role).value}'
    return urlsafe_b64encode(raw.encode('utf-8')).decode('ascii')


def decode(token: str) -> Principal:
    """Decode an opaque token back to the principal it was minted for."""
    try:
        raw = b64decode(token.encode('ascii'), altchars=b'-_', validate=True)
        payload = raw.decode('utf-8')
    except (UnicodeError, binascii.Error) as e:
        raise MalformedTokenError('Not a valid token') from e

    fields = payload.split(SEPARATOR)
    if len(fields) != FIELD_COUNT:
        raise MalformedTokenError(f'Expected {FIELD_COUNT} fields, '
                                  f'got {len(fields)}')
    identity, label = fields
    if not identity:
        raise MalformedTokenError('Token has no identity')
    try:
        role = Role(label)
    except ValueError as e:
        raise MalformedTokenError('Token has an unknown role') from e
    return Principal(identity=identity, role=role)


def is_well_formed(token: str) -> bool:
    """Whether :func:`decode` would succeed for ``token``."""
    try:
        decode(token)
    except MalformedTokenError:
        return False
    return True


class OpaqueTokenCodec:
    """Unsigned, reversible tokens. See the module docstring."""

    scheme = 'opaque'

    def encode(self, principal: Principal) -> str:
        return encode(principal.identity, principal.role)

    def decode(self, token: str) -> Principal:
        return decode(token)

    def is_well_formed(self, token: str) -> bool:
        return is_well_formed(token)


class SignedTokenCodec:
    """HS256 JWTs carrying the identity, role and an expiry."""

    scheme = 'signed'

    def __init__(self, secret: str, ttl: int = 7200):
        self.secret = secret
        self.ttl = ttl

    def encode(self, principal: Principal) -> str:
        """Encode a principal as a signed JWT."""
        now = datetime.now(timezone.utc)
        claims = {
            'sub': principal.identity,
            'role': principal.role.value,
            'iat': now,
            'exp': now + timedelta(seconds=self.ttl),
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> Principal:
        """Verify a JWT and return the principal it names."""
        try:
            data = dict(jwt.decode(token, self.secret, algorithms=[ALGORITHM],
                                   options={'require': ['sub', 'role', 'exp']}))
        except jwt.exceptions.InvalidTokenError as e:
            raise MalformedTokenError('Not a valid token') from e
        try:
            return Principal(identity=data['sub'], role=Role(data['role']))
        except ValueError as e:
            raise MalformedTokenError('Token has an unknown role') from e

    def is_well_formed(self, token: str) -> bool:
        try:
            self.decode(token)
        except MalformedTokenError:
            return False
        return True


def codec_from_config(scheme: str, secret: str = '', ttl: int = 7200):
    """Build the codec named by ``scheme``."""
    if scheme == OpaqueTokenCodec.scheme:
        log.warning('Using unsigned opaque tokens; these can be forged')
        return OpaqueTokenCodec()
    if scheme == SignedTokenCodec.scheme:
        if not secret:
            raise ValueError('JWT_SECRET is required for signed tokens')
        return SignedTokenCodec(secret, ttl)
    raise ValueError(f'Unknown token scheme: {scheme}')
