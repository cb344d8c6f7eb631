"""Logout event publication."""

from typing import Any, Optional

from starlette.requests import Request
from starlette.responses import Response

from ..core.events import LogoutSucceeded
from ..core.exceptions import require
from ..core.protocols import EventPublisher


class EventPublishingLogoutHandler:
    """Publishes LogoutSucceeded once the other handlers have run."""

    def __init__(self, publisher: EventPublisher):
        self.publisher = require(publisher, "publisher")

    async def logout(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        event = LogoutSucceeded(
            principal=principal,
            path=request.url.path,
            method=request.method,
            client_host=request.client.host if request.client else None,
        )
        await self.publisher.publish(event)
