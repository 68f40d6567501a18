"""Exceptions."""


class MalformedTokenError(RuntimeError):
    """A bearer token does not decode to an identity and role."""


class AuthorizationError(RuntimeError):
    """The request has no principal, or its role is not permitted."""


class NotFoundError(RuntimeError):
    """A referenced user, quiz, or submission does not exist."""


class InvalidCredentialsError(RuntimeError):
    """Failed to authenticate user with provided credentials."""


class AlreadyExistsError(RuntimeError):
    """A user with the requested identity already exists."""
