"""CSRF token removal on logout."""

from typing import Any, Optional

from starlette.requests import Request
from starlette.responses import Response

from ..core.exceptions import require
from ..core.protocols import CsrfTokenRepository


class CsrfLogoutHandler:
    """Discards the CSRF token so a new one is issued for the next session."""

    def __init__(self, token_repository: CsrfTokenRepository):
        self.token_repository = require(token_repository, "token_repository")

    async def logout(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        await self.token_repository.clear_token(request, response)
