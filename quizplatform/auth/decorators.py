"""
Role-based authorization of user requests.

This module provides :class:`RoleGuard`, a FastAPI dependency used to protect
routes for which authorization is required. The allowed roles are declared
per route; membership is exact, there is no role hierarchy.

.. code-block:: python

   from fastapi import Depends
   from quizplatform.auth.decorators import RoleGuard
   from quizplatform.domain import Principal, Role

   teacher_only = RoleGuard(Role.TEACHER)

   @router.get('/quiz/{code}/results')
   async def results(code: str,
                     principal: Principal = Depends(teacher_only)):
       ...

When the guarded route is called...

- If no principal was attached by the auth middleware, an
  :class:`.AuthorizationError` is raised.
- If the principal's role is not among the allowed roles, an
  :class:`.AuthorizationError` is raised.
- Otherwise the principal is handed to the route.

"""

import logging
from typing import FrozenSet, Optional

from fastapi import Depends, Request

from .middleware import PRINCIPAL_KEY
from ..domain import Principal, Role
from ..exceptions import AuthorizationError

log = logging.getLogger(__name__)


def current_principal(request: Request) -> Optional[Principal]:
    """The principal attached to this request, or ``None``."""
    return request.scope.get(PRINCIPAL_KEY)


def authorize(principal: Optional[Principal],
              allowed: FrozenSet[Role]) -> Principal:
    """Check that ``principal`` holds one of the ``allowed`` roles."""
    if principal is None:
        log.debug('No principal; aborting')
        raise AuthorizationError('Access denied')
    if principal.role not in allowed:
        log.debug('Role %s is not authorized', principal.role.value)
        raise AuthorizationError('Access denied')
    log.debug('Request is authorized, proceeding')
    return principal


class RoleGuard:
    """Dependency that admits only principals holding an allowed role."""

    def __init__(self, *roles: Role):
        self.allowed: FrozenSet[Role] = frozenset(roles)

    def __call__(self, principal: Optional[Principal] = Depends(
            current_principal)) -> Principal:
        return authorize(principal, self.allowed)
