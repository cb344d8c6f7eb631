"""Logout core protocols.

Contract definitions for the logout stage. Each protocol defines exactly one
capability; collaborators are checked against these named protocols when the
stage is assembled.
"""

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

from starlette.requests import Request
from starlette.responses import Response

if TYPE_CHECKING:
    from ..filter import LogoutFilter


@runtime_checkable
class RequestMatcher(Protocol):
    """Pure predicate over an inbound request."""

    def matches(self, request: Request) -> bool:
        """Return True when the request is selected by this matcher."""
        ...


@runtime_checkable
class LogoutHandler(Protocol):
    """Performs one logout side effect.

    Handlers may write to the response (for example to expire a cookie) but
    never end the chain; every registered handler runs.
    """

    async def logout(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        """Perform the side effect for the given request and principal."""
        ...


@runtime_checkable
class LogoutSuccessHandler(Protocol):
    """Writes the response once the logout chain has completed."""

    async def on_logout_success(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        """Write the outcome of a successful logout to ``response``."""
        ...


@runtime_checkable
class RememberMeServices(Protocol):
    """Persistent-login collaborator owned by the authentication layer.

    Some implementations also satisfy LogoutHandler; only those take part
    in the logout chain.
    """

    async def auto_login(self, request: Request) -> Optional[Any]:
        """Resolve a principal from a remember-me token, if any."""
        ...


@runtime_checkable
class CsrfTokenRepository(Protocol):
    """Storage for CSRF tokens, owned by the request-forgery layer."""

    async def clear_token(self, request: Request, response: Response) -> None:
        """Discard the token bound to the current request."""
        ...


@runtime_checkable
class EventPublisher(Protocol):
    """Publishes domain events to interested listeners."""

    async def publish(self, event: Any) -> None:
        """Publish a single event."""
        ...


@runtime_checkable
class ObjectPostProcessor(Protocol):
    """Hook that may wrap or replace a freshly built logout filter.

    The returned object is installed instead of the original; it must expose
    the same async ``process(request, principal)`` method.
    """

    def post_process(self, logout_filter: "LogoutFilter") -> "LogoutFilter":
        """Return the filter that should be used in place of ``logout_filter``."""
        ...
