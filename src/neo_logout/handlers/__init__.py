"""Logout handlers.

Each handler performs exactly one logout side effect. CompositeLogoutHandler
runs them in order.
"""

from .composite import CompositeLogoutHandler
from .cookie_clearing import CookieClearingLogoutHandler
from .csrf import CsrfLogoutHandler
from .event_publishing import EventPublishingLogoutHandler
from .redis_session import RedisSessionLogoutHandler
from .security_context import SecurityContextLogoutHandler

__all__ = [
    "CompositeLogoutHandler",
    "CookieClearingLogoutHandler",
    "CsrfLogoutHandler",
    "EventPublishingLogoutHandler",
    "RedisSessionLogoutHandler",
    "SecurityContextLogoutHandler",
]
