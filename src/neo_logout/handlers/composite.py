"""Ordered logout handler chain."""

import logging
from typing import Any, Iterable, Optional

from starlette.requests import Request
from starlette.responses import Response

from ..core.exceptions import require
from ..core.protocols import LogoutHandler

logger = logging.getLogger(__name__)


class CompositeLogoutHandler:
    """Runs every registered handler in registration order.

    Unlike a middleware chain this never short-circuits: each handler gets
    the same request, response and principal, and the chain only ends after
    the last one. Handler errors propagate unchanged.
    """

    def __init__(self, handlers: Iterable[LogoutHandler]):
        self.handlers = tuple(require(handler, "handler") for handler in handlers)

    async def logout(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        for handler in self.handlers:
            logger.debug(f"Running logout handler {type(handler).__name__}")
            await handler.logout(request, response, principal)

    def __len__(self) -> int:
        return len(self.handlers)

    def __iter__(self):
        return iter(self.handlers)
