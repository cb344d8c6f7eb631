"""Logout core: protocols, value objects, configuration snapshot and exceptions."""

from .configuration import (
    DEFAULT_LOGIN_PATH,
    DEFAULT_LOGOUT_PATH,
    LogoutConfiguration,
    allowed_methods_for,
)
from .events import LogoutSucceeded
from .exceptions import (
    InvalidLogoutArgument,
    LogoutConfigurationError,
    NeoLogoutError,
    create_error_response,
)
from .media_type import MediaType, parse_accept_header
from .protocols import (
    CsrfTokenRepository,
    EventPublisher,
    LogoutHandler,
    LogoutSuccessHandler,
    ObjectPostProcessor,
    RememberMeServices,
    RequestMatcher,
)

__all__ = [
    "DEFAULT_LOGIN_PATH",
    "DEFAULT_LOGOUT_PATH",
    "LogoutConfiguration",
    "allowed_methods_for",
    "LogoutSucceeded",
    "InvalidLogoutArgument",
    "LogoutConfigurationError",
    "NeoLogoutError",
    "create_error_response",
    "MediaType",
    "parse_accept_header",
    "CsrfTokenRepository",
    "EventPublisher",
    "LogoutHandler",
    "LogoutSuccessHandler",
    "ObjectPostProcessor",
    "RememberMeServices",
    "RequestMatcher",
]
