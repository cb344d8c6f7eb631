"""Session invalidation and principal clearing."""

import logging
from typing import Any, Optional

from starlette.authentication import UnauthenticatedUser
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class SecurityContextLogoutHandler:
    """Invalidates the HTTP session and clears the authenticated principal.

    The session is the one managed by Starlette's SessionMiddleware; requests
    without a session are left alone. The principal is cleared both from
    ``request.state.user_context`` and from ``scope["user"]`` so downstream
    code sees an anonymous request.
    """

    def __init__(self, invalidate_session: bool = True, clear_authentication: bool = True):
        self.invalidate_session = invalidate_session
        self.clear_authentication = clear_authentication

    async def logout(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        if self.invalidate_session and "session" in request.scope:
            request.session.clear()
            logger.debug("Invalidated HTTP session")

        if self.clear_authentication:
            request.state.user_context = None
            if "user" in request.scope:
                request.scope["user"] = UnauthenticatedUser()
