"""Cookie removal on logout."""

from typing import Any, Optional

from starlette.requests import Request
from starlette.responses import Response

from ..core.exceptions import InvalidLogoutArgument


class CookieClearingLogoutHandler:
    """Expires the named cookies on the logout response."""

    def __init__(self, *cookie_names: str, path: str = "/", domain: Optional[str] = None):
        if any(not name for name in cookie_names):
            raise InvalidLogoutArgument("cookie_names", "Cookie names cannot be empty")
        self.cookie_names = tuple(cookie_names)
        self.path = path
        self.domain = domain

    async def logout(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        for name in self.cookie_names:
            response.delete_cookie(name, path=self.path, domain=self.domain)
