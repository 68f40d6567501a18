"""
Quiz platform service: bearer-token authentication, role gating, and scoring.

Requests pass through :class:`.auth.middleware.AuthMiddleware`, which unpacks
the ``Authorization: Bearer <token>`` header and attaches a
:class:`.domain.Principal` to the ASGI scope of that request only. Route
dependencies built from :class:`.auth.decorators.RoleGuard` then decide
whether the principal may call the endpoint. Submissions are scored by
:func:`.scoring.score`.

Quick start
-----------

.. code-block:: python

   from quizplatform.factory import create_app

   app = create_app()    # Reads configuration from the environment.

"""

from .domain import Role, Principal, ScoreResult
