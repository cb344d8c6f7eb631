"""Logout filter.

Two states: an unmatched request passes through untouched; a matched request
runs the whole handler chain and then exactly one success handler.
"""

import logging
from typing import Any, Optional

from starlette.requests import Request
from starlette.responses import Response

from .core.configuration import LogoutConfiguration
from .core.exceptions import require
from .handlers.composite import CompositeLogoutHandler
from .success import DelegatingLogoutSuccessHandler

logger = logging.getLogger(__name__)


class LogoutFilter:
    """Recognizes logout requests and produces the logout response.

    Holds only read-only state derived from a LogoutConfiguration, so one
    instance serves concurrent requests without locking.
    """

    def __init__(self, configuration: LogoutConfiguration):
        self.configuration = require(configuration, "configuration")
        self.request_matcher = configuration.request_matcher
        self.handler = CompositeLogoutHandler(configuration.handlers)
        self.success_handler = DelegatingLogoutSuccessHandler(
            configuration.success_routes,
            configuration.default_success_handler,
        )

    def requires_logout(self, request: Request) -> bool:
        return self.request_matcher.matches(request)

    async def process(self, request: Request, principal: Optional[Any] = None) -> Optional[Response]:
        """Handle ``request`` if it is a logout request.

        Returns:
            The written logout response, or None when the request should
            continue down the pipeline.
        """
        if not self.requires_logout(request):
            return None

        logger.debug(f"Logging out principal={principal!r} via {request.method} {request.url.path}")

        response = Response()
        await self.handler.logout(request, response, principal)
        await self.success_handler.on_logout_success(request, response, principal)

        logger.info(
            f"Logout completed: path={request.url.path}, method={request.method}, "
            f"status={response.status_code}"
        )
        return response

    def __repr__(self) -> str:
        return (
            f"LogoutFilter(matcher={self.request_matcher!r}, "
            f"handlers={len(self.handler)})"
        )
