"""Middleware for unpacking bearer tokens on requests."""

import logging
from typing import Optional

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from .. import config
from ..domain import Principal
from ..exceptions import MalformedTokenError
from ..tokens import OpaqueTokenCodec

log = logging.getLogger(__name__)

PRINCIPAL_KEY = 'principal'
"""Key in the ASGI scope under which the principal is stored."""


def authenticate(header: Optional[str], codec=None) -> Optional[Principal]:
    """
    Get the principal named by an ``Authorization`` header value, if any.

    Never raises for bad input: a missing header, a header without the
    ``Bearer`` scheme, or a token that does not decode all yield ``None``.
    Rejecting the request is left to the route's guard.
    """
    codec = codec or OpaqueTokenCodec()
    if not header:
        log.debug('No auth header')
        return None
    if not header.startswith(config.AUTH_SCHEME_PREFIX):
        log.debug('Authorization header lacked bearer scheme')
        return None

    token = header[len(config.AUTH_SCHEME_PREFIX):]
    if not codec.is_well_formed(token):
        log.warning('Auth token not valid')
        return None
    try:
        principal: Principal = codec.decode(token)
    except MalformedTokenError:
        log.warning('Auth token not valid')
        return None
    log.debug('Authenticated %s as %s', principal.identity,
              principal.role.value)
    return principal


class AuthMiddleware:
    """
    Attach the requesting principal to the ASGI scope.

    Before the request is handled by the application, the ``Authorization``
    header is parsed for a bearer token. If it decodes, the resulting
    :class:`.Principal` is stored at ``scope['principal']``; otherwise that
    value is ``None`` and the request continues unauthenticated.
    """

    def __init__(self, app: ASGIApp, codec=None):
        self.app = app
        self.codec = codec or OpaqueTokenCodec()

    async def __call__(self, scope: Scope, receive: Receive,
                       send: Send) -> None:
        if scope['type'] in ('http', 'websocket'):
            header = Headers(scope=scope).get(config.AUTH_HEADER)
            scope[PRINCIPAL_KEY] = authenticate(header, self.codec)
        await self.app(scope, receive, send)
