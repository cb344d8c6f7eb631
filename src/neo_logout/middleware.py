"""ASGI middleware installing the logout filter into a FastAPI application."""

import logging
from typing import Any, Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .filter import LogoutFilter

logger = logging.getLogger(__name__)

PrincipalResolver = Callable[[Request], Optional[Any]]


def resolve_principal(request: Request) -> Optional[Any]:
    """Find the authenticated principal for a request.

    Prefers ``request.state.user_context`` set by the authentication
    middleware, then an authenticated ``scope["user"]`` from Starlette's
    AuthenticationMiddleware.
    """
    user_context = getattr(request.state, "user_context", None)
    if user_context is not None:
        return user_context

    user = request.scope.get("user")
    if user is not None and getattr(user, "is_authenticated", False):
        return user

    return None


class LogoutMiddleware(BaseHTTPMiddleware):
    """Runs the logout filter ahead of the application routes."""

    def __init__(
        self,
        app,
        logout_filter: LogoutFilter,
        principal_resolver: PrincipalResolver = resolve_principal,
    ):
        super().__init__(app)
        self.logout_filter = logout_filter
        self.principal_resolver = principal_resolver

    async def dispatch(self, request: Request, call_next) -> Response:
        """Answer logout requests; pass everything else through."""
        principal = self.principal_resolver(request)
        response = await self.logout_filter.process(request, principal)
        if response is None:
            return await call_next(request)
        return response
