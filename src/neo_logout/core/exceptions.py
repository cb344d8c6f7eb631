"""Exceptions for neo-logout.

All exceptions inherit from NeoLogoutError and carry an error code and
structured details. Configuration problems are raised while the logout stage
is being assembled and never while requests are served.
"""

from typing import Any, Dict, Optional


class NeoLogoutError(Exception):
    """Base exception for all neo-logout errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class InvalidLogoutArgument(NeoLogoutError, ValueError):
    """Raised when a configuration call receives a missing or malformed value.

    Subclasses ValueError so callers that only care about "bad argument"
    semantics can catch it without importing neo-logout types.
    """

    def __init__(self, argument: str, message: Optional[str] = None):
        super().__init__(
            message or f"{argument} cannot be None",
            error_code="INVALID_LOGOUT_ARGUMENT",
            details={"argument": argument},
        )
        self.argument = argument


class LogoutConfigurationError(NeoLogoutError):
    """Raised when the logout stage cannot be constructed.

    The underlying problem, if any, is available as ``__cause__``.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="LOGOUT_CONFIGURATION_ERROR", details=details)


def require(value: Any, argument: str) -> Any:
    """Return ``value`` or raise InvalidLogoutArgument when it is None."""
    if value is None:
        raise InvalidLogoutArgument(argument)
    return value


def create_error_response(exception: NeoLogoutError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-logout exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
