"""Application factory for the quiz platform service."""

import logging
from typing import Any, Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from . import config, tokens
from .app_logging import setup_logger
from .auth.middleware import AuthMiddleware
from .exceptions import AlreadyExistsError, AuthorizationError, \
    InvalidCredentialsError, NotFoundError
from .routes import router
from .services import Repository, repository_from_config

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
}


def _error_handler(code: int) -> Callable:
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        logger.debug('%s: %s', type(exc).__name__, exc)
        return JSONResponse(status_code=code, content={'reason': str(exc)})
    return handle


def create_app(repository: Optional[Repository] = None, codec=None,
               **overrides: Any) -> FastAPI:
    """
    Build the quiz platform application.

    Parameters
    ----------
    repository : :class:`.Repository`
        Storage for users, quizzes and submissions. Built from
        ``DATABASE_URI`` if not given.
    codec
        Bearer token codec. Built from ``TOKEN_SCHEME`` if not given.
    overrides
        Values that replace those in :mod:`quizplatform.config`.

    """
    settings = config.defaults()
    settings.update(overrides)
    setup_logger(settings['LOG_LEVEL'])

    if codec is None:
        if settings['TOKEN_SCHEME'] == tokens.SignedTokenCodec.scheme \
                and settings['JWT_SECRET'] == 'foosecret':
            logger.warning('JWT_SECRET is the development default')
        codec = tokens.codec_from_config(settings['TOKEN_SCHEME'],
                                         settings['JWT_SECRET'],
                                         settings['TOKEN_TTL_SECONDS'])
    if repository is None:
        repository = repository_from_config(settings['DATABASE_URI'])

    logger.info('TOKEN_SCHEME: %s', codec.scheme)
    logger.info('Repository: %s', type(repository).__name__)

    app = FastAPI(
        title='quizplatform',
        root_path=settings['SERVER_ROOT_PATH'],
        repository=repository,
        codec=codec,
        QUIZ_CODE_LENGTH=settings['QUIZ_CODE_LENGTH'],
    )
    app.add_middleware(AuthMiddleware, codec=codec)
    for exc_class, code in ERROR_STATUS.items():
        app.add_exception_handler(exc_class, _error_handler(code))
    app.include_router(router)

    @app.middleware("http")
    async def apply_response_headers(request: Request,
                                     call_next: Callable) -> Response:
        """Prevent UI redress attacks."""
        response: Response = await call_next(request)
        response.headers['Content-Security-Policy'] = "frame-ancestors 'none'"
        response.headers['X-Frame-Options'] = 'DENY'
        return response

    return app
