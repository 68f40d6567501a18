"""Authentication and authorization of requests."""

from . import decorators, middleware
