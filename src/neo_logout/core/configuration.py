"""Immutable logout configuration built at startup."""

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from .protocols import LogoutHandler, LogoutSuccessHandler, RequestMatcher

DEFAULT_LOGOUT_PATH = "/logout"
DEFAULT_LOGIN_PATH = "/login"

CSRF_PROTECTED_METHODS: FrozenSet[str] = frozenset({"POST"})
UNPROTECTED_METHODS: FrozenSet[str] = frozenset({"GET", "POST", "PUT", "DELETE"})


def allowed_methods_for(csrf_enabled: bool) -> FrozenSet[str]:
    """Methods that may trigger logout.

    Only POST is accepted while request-forgery protection is active, so a
    crafted link cannot force a logout.
    """
    return CSRF_PROTECTED_METHODS if csrf_enabled else UNPROTECTED_METHODS


@dataclass(frozen=True)
class LogoutConfiguration:
    """Snapshot of everything the logout filter needs at request time.

    Built once by SecurityChainBuilder and never mutated afterwards, so it is
    safe to share between concurrent requests.
    """

    logout_path: str
    allowed_methods: FrozenSet[str]
    request_matcher: RequestMatcher
    handlers: Tuple[LogoutHandler, ...]
    success_routes: Tuple[Tuple[RequestMatcher, LogoutSuccessHandler], ...]
    default_success_handler: LogoutSuccessHandler
    login_path: str = DEFAULT_LOGIN_PATH

    def __post_init__(self) -> None:
        if any(handler is None for handler in self.handlers):
            raise ValueError("Logout handlers cannot contain None")
        for matcher, handler in self.success_routes:
            if matcher is None or handler is None:
                raise ValueError("Success routes cannot contain None")
        if self.default_success_handler is None:
            raise ValueError("Default success handler is required")
