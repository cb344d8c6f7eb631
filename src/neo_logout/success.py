"""Logout success handlers and the dispatch strategy that selects one."""

import logging
from typing import Any, Optional, Sequence, Tuple

from fastapi import status
from starlette.requests import Request
from starlette.responses import Response

from .core.configuration import DEFAULT_LOGIN_PATH
from .core.exceptions import InvalidLogoutArgument, require
from .core.protocols import LogoutSuccessHandler, RequestMatcher
from .negotiation import LogoutOutcome, REQUESTED_WITH_HEADER, negotiate_logout_outcome

logger = logging.getLogger(__name__)


def write_redirect(response: Response, location: str) -> None:
    """Turn ``response`` into a 302 redirect to ``location``."""
    response.status_code = status.HTTP_302_FOUND
    response.headers["location"] = location


def write_no_content(response: Response, status_code: int = status.HTTP_204_NO_CONTENT) -> None:
    """Turn ``response`` into a bodiless status response."""
    response.status_code = status_code
    response.body = b""
    if status_code == status.HTTP_204_NO_CONTENT and "content-length" in response.headers:
        del response.headers["content-length"]


class RedirectLogoutSuccessHandler:
    """Redirects to a fixed target URL."""

    def __init__(self, target_url: str):
        self.target_url = require(target_url, "target_url")

    async def on_logout_success(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        write_redirect(response, self.target_url)


class HttpStatusReturningLogoutSuccessHandler:
    """Returns a bare status code, 204 by default."""

    def __init__(self, status_code: int = status.HTTP_204_NO_CONTENT):
        self.status_code = status_code

    async def on_logout_success(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        write_no_content(response, self.status_code)


class ContentNegotiatingLogoutSuccessHandler:
    """Default success handler.

    Redirects browsers to ``{login_path}?logout`` and answers script-driven
    clients with 204 No Content. See negotiate_logout_outcome for the exact
    rules.
    """

    def __init__(self, login_path: str = DEFAULT_LOGIN_PATH):
        self.login_path = require(login_path, "login_path")
        self.redirect = RedirectLogoutSuccessHandler(f"{self.login_path}?logout")
        self.no_content = HttpStatusReturningLogoutSuccessHandler()

    def resolve(self, request: Request) -> LogoutOutcome:
        return negotiate_logout_outcome(
            request.headers.get("accept"),
            request.headers.get(REQUESTED_WITH_HEADER),
        )

    async def on_logout_success(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        outcome = self.resolve(request)
        logger.debug(f"Negotiated logout outcome {outcome.value} for {request.url.path}")
        if outcome is LogoutOutcome.NO_CONTENT:
            await self.no_content.on_logout_success(request, response, principal)
        else:
            await self.redirect.on_logout_success(request, response, principal)


class DelegatingLogoutSuccessHandler:
    """First-match-wins dispatch over (matcher, handler) routes.

    The default handler runs when no route matches, so exactly one success
    handler is invoked per logout.
    """

    def __init__(
        self,
        routes: Sequence[Tuple[RequestMatcher, LogoutSuccessHandler]],
        default_handler: LogoutSuccessHandler,
    ):
        for matcher, handler in routes:
            if matcher is None:
                raise InvalidLogoutArgument("matcher")
            if handler is None:
                raise InvalidLogoutArgument("handler")
        self.routes = tuple(routes)
        self.default_handler = require(default_handler, "default_handler")

    def select(self, request: Request) -> LogoutSuccessHandler:
        for matcher, handler in self.routes:
            if matcher.matches(request):
                return handler
        return self.default_handler

    async def on_logout_success(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        handler = self.select(request)
        await handler.on_logout_success(request, response, principal)
