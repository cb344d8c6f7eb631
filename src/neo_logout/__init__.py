"""neo-logout - logout stage for FastAPI applications.

Recognizes logout requests, runs an ordered chain of cleanup handlers and
answers with a response negotiated from the client's Accept preferences.
"""

from .__version__ import __version__
from .configurers import LogoutConfigurer, SecurityChainBuilder
from .core import (
    DEFAULT_LOGIN_PATH,
    DEFAULT_LOGOUT_PATH,
    CsrfTokenRepository,
    EventPublisher,
    InvalidLogoutArgument,
    LogoutConfiguration,
    LogoutConfigurationError,
    LogoutHandler,
    LogoutSucceeded,
    LogoutSuccessHandler,
    MediaType,
    NeoLogoutError,
    ObjectPostProcessor,
    RememberMeServices,
    RequestMatcher,
)
from .filter import LogoutFilter
from .handlers import (
    CompositeLogoutHandler,
    CookieClearingLogoutHandler,
    CsrfLogoutHandler,
    EventPublishingLogoutHandler,
    RedisSessionLogoutHandler,
    SecurityContextLogoutHandler,
)
from .matchers import (
    AndRequestMatcher,
    AnyRequestMatcher,
    HeaderRequestMatcher,
    LogoutRequestMatcher,
    MediaTypeRequestMatcher,
    NegatedRequestMatcher,
    OrRequestMatcher,
    PathRequestMatcher,
)
from .middleware import LogoutMiddleware, resolve_principal
from .negotiation import LogoutOutcome, negotiate_logout_outcome
from .success import (
    ContentNegotiatingLogoutSuccessHandler,
    DelegatingLogoutSuccessHandler,
    HttpStatusReturningLogoutSuccessHandler,
    RedirectLogoutSuccessHandler,
)

__all__ = [
    "__version__",
    # Builder
    "LogoutConfigurer",
    "SecurityChainBuilder",
    # Core
    "DEFAULT_LOGIN_PATH",
    "DEFAULT_LOGOUT_PATH",
    "CsrfTokenRepository",
    "EventPublisher",
    "InvalidLogoutArgument",
    "LogoutConfiguration",
    "LogoutConfigurationError",
    "LogoutHandler",
    "LogoutSucceeded",
    "LogoutSuccessHandler",
    "MediaType",
    "NeoLogoutError",
    "ObjectPostProcessor",
    "RememberMeServices",
    "RequestMatcher",
    # Filter and middleware
    "LogoutFilter",
    "LogoutMiddleware",
    "resolve_principal",
    # Handlers
    "CompositeLogoutHandler",
    "CookieClearingLogoutHandler",
    "CsrfLogoutHandler",
    "EventPublishingLogoutHandler",
    "RedisSessionLogoutHandler",
    "SecurityContextLogoutHandler",
    # Matchers
    "AndRequestMatcher",
    "AnyRequestMatcher",
    "HeaderRequestMatcher",
    "LogoutRequestMatcher",
    "MediaTypeRequestMatcher",
    "NegatedRequestMatcher",
    "OrRequestMatcher",
    "PathRequestMatcher",
    # Negotiation and success handlers
    "LogoutOutcome",
    "negotiate_logout_outcome",
    "ContentNegotiatingLogoutSuccessHandler",
    "DelegatingLogoutSuccessHandler",
    "HttpStatusReturningLogoutSuccessHandler",
    "RedirectLogoutSuccessHandler",
]
