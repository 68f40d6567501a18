"""Adapters for the storage boundary."""

from typing import Optional

from .repository import Repository, InMemoryRepository


def repository_from_config(uri: Optional[str]) -> Repository:
    """Database-backed repository for ``uri``, or in-memory if not set."""
    if not uri:
        return InMemoryRepository()
    from .datastore import DatabaseRepository
    return DatabaseRepository.from_uri(uri)
