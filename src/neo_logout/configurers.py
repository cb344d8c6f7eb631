"""Declarative assembly of the logout stage.

SecurityChainBuilder collects collaborator settings (CSRF protection, login
path, remember-me services, post-processing) and one LogoutConfigurer that
accumulates logout options across repeated ``logout()`` calls. ``build()``
snapshots everything into an immutable LogoutConfiguration and returns the
LogoutFilter that serves requests.

Example:
    builder = (
        SecurityChainBuilder()
        .csrf(enabled=False)
        .logout(lambda logout: logout.set_path("/custom/logout").delete_cookies("SESSION"))
    )
    builder.install(app)
"""

import inspect
import logging
from typing import Any, Callable, List, Optional, Tuple

from fastapi import FastAPI

from .config.settings import LogoutSettings, get_logout_settings
from .core.configuration import (
    DEFAULT_LOGIN_PATH,
    DEFAULT_LOGOUT_PATH,
    LogoutConfiguration,
    allowed_methods_for,
)
from .core.exceptions import (
    InvalidLogoutArgument,
    LogoutConfigurationError,
    require,
)
from .core.protocols import (
    CsrfTokenRepository,
    EventPublisher,
    LogoutHandler,
    LogoutSuccessHandler,
    ObjectPostProcessor,
    RememberMeServices,
    RequestMatcher,
)
from .filter import LogoutFilter
from .handlers import (
    CookieClearingLogoutHandler,
    CsrfLogoutHandler,
    EventPublishingLogoutHandler,
    RedisSessionLogoutHandler,
    SecurityContextLogoutHandler,
)
from .matchers import LogoutRequestMatcher
from .middleware import LogoutMiddleware, PrincipalResolver, resolve_principal
from .success import ContentNegotiatingLogoutSuccessHandler, RedirectLogoutSuccessHandler

logger = logging.getLogger(__name__)


def _has_async_method(obj: Any, name: str) -> bool:
    return inspect.iscoroutinefunction(getattr(obj, name, None))


def _require_handler(handler: Any, argument: str = "handler") -> LogoutHandler:
    require(handler, argument)
    if not isinstance(handler, LogoutHandler) or not _has_async_method(handler, "logout"):
        raise InvalidLogoutArgument(
            argument,
            f"{type(handler).__name__} must define async logout(request, response, principal)",
        )
    return handler


def _require_success_handler(handler: Any, argument: str = "handler") -> LogoutSuccessHandler:
    require(handler, argument)
    if not isinstance(handler, LogoutSuccessHandler) or not _has_async_method(handler, "on_logout_success"):
        raise InvalidLogoutArgument(
            argument,
            f"{type(handler).__name__} must define async on_logout_success(request, response, principal)",
        )
    return handler


def _require_matcher(matcher: Any, argument: str = "matcher") -> RequestMatcher:
    require(matcher, argument)
    if not isinstance(matcher, RequestMatcher):
        raise InvalidLogoutArgument(argument, f"{type(matcher).__name__} must define matches(request)")
    return matcher


class LogoutConfigurer:
    """Mutable logout options, merged across repeated configuration calls.

    The logout path is set-once: the first explicit value wins and later
    calls can only add handlers and success routes. Every method rejects
    None immediately with InvalidLogoutArgument.
    """

    def __init__(self):
        self._path: Optional[str] = None
        self._request_matcher: Optional[RequestMatcher] = None
        self._handlers: List[LogoutHandler] = []
        self._success_routes: List[Tuple[RequestMatcher, LogoutSuccessHandler]] = []
        self._default_success_handler: Optional[LogoutSuccessHandler] = None
        self._success_url: Optional[str] = None
        self._invalidate_session = True
        self._clear_authentication = True

    @property
    def path(self) -> str:
        """Effective logout path."""
        return self._path or DEFAULT_LOGOUT_PATH

    def set_path(self, path: str) -> "LogoutConfigurer":
        """Set the logout path; ignored if a different path was already set."""
        require(path, "path")
        if not path.startswith("/"):
            raise InvalidLogoutArgument("path", f"Logout path must start with '/': {path!r}")

        if self._path is None:
            self._path = path
        elif path != self._path:
            logger.warning(f"Ignoring logout path {path!r}; already configured as {self._path!r}")
        return self

    def set_request_matcher(self, matcher: RequestMatcher) -> "LogoutConfigurer":
        """Use a custom matcher instead of the logout path and method gate."""
        self._request_matcher = _require_matcher(matcher)
        return self

    def add_handler(self, handler: LogoutHandler) -> "LogoutConfigurer":
        """Append a handler to the logout chain."""
        self._handlers.append(_require_handler(handler))
        return self

    def delete_cookies(self, *cookie_names: str) -> "LogoutConfigurer":
        """Expire the named cookies on logout."""
        return self.add_handler(CookieClearingLogoutHandler(*cookie_names))

    def add_session_store(self, redis_client: Any, **options) -> "LogoutConfigurer":
        """Remove the server-side session record from Redis on logout."""
        return self.add_handler(RedisSessionLogoutHandler(require(redis_client, "redis_client"), **options))

    def invalidate_session(self, enabled: bool = True) -> "LogoutConfigurer":
        self._invalidate_session = enabled
        return self

    def clear_authentication(self, enabled: bool = True) -> "LogoutConfigurer":
        self._clear_authentication = enabled
        return self

    def add_success_route(
        self,
        handler: LogoutSuccessHandler,
        matcher: RequestMatcher,
    ) -> "LogoutConfigurer":
        """Use ``handler`` for logout requests selected by ``matcher``.

        Routes are tried in registration order ahead of the default handler.
        """
        _require_success_handler(handler)
        _require_matcher(matcher)
        self._success_routes.append((matcher, handler))
        return self

    def set_default_success_handler(self, handler: LogoutSuccessHandler) -> "LogoutConfigurer":
        """Replace the content-negotiating default success handler."""
        self._default_success_handler = _require_success_handler(handler)
        return self

    def set_success_url(self, url: str) -> "LogoutConfigurer":
        """Redirect to ``url`` by default instead of negotiating."""
        self._success_url = require(url, "url")
        return self

    def _default_handler(self, login_path: str) -> LogoutSuccessHandler:
        if self._default_success_handler is not None:
            return self._default_success_handler
        if self._success_url is not None:
            return RedirectLogoutSuccessHandler(self._success_url)
        return ContentNegotiatingLogoutSuccessHandler(login_path)

    def build(
        self,
        csrf_enabled: bool = True,
        login_path: str = DEFAULT_LOGIN_PATH,
        csrf_token_repository: Optional[CsrfTokenRepository] = None,
        remember_me_services: Optional[RememberMeServices] = None,
        event_publisher: Optional[EventPublisher] = None,
    ) -> LogoutConfiguration:
        """Snapshot the accumulated options into a LogoutConfiguration.

        Chain order: handlers added through this configurer, CSRF token
        removal, remember-me services (only if they implement LogoutHandler),
        session invalidation and principal clearing, event publication.
        """
        allowed_methods = allowed_methods_for(csrf_enabled)
        request_matcher = self._request_matcher or LogoutRequestMatcher(self.path, allowed_methods)

        handlers: List[LogoutHandler] = list(self._handlers)

        if csrf_enabled and csrf_token_repository is not None:
            handlers.append(CsrfLogoutHandler(csrf_token_repository))

        if remember_me_services is not None:
            if isinstance(remember_me_services, LogoutHandler):
                handlers.append(_require_handler(remember_me_services, "remember_me_services"))
            else:
                logger.debug(
                    f"{type(remember_me_services).__name__} does not implement LogoutHandler; "
                    "not adding it to the logout chain"
                )

        handlers.append(
            SecurityContextLogoutHandler(
                invalidate_session=self._invalidate_session,
                clear_authentication=self._clear_authentication,
            )
        )

        if event_publisher is not None:
            handlers.append(EventPublishingLogoutHandler(event_publisher))

        return LogoutConfiguration(
            logout_path=self.path,
            allowed_methods=allowed_methods,
            request_matcher=request_matcher,
            handlers=tuple(handlers),
            success_routes=tuple(self._success_routes),
            default_success_handler=self._default_handler(login_path),
            login_path=login_path,
        )


class SecurityChainBuilder:
    """Builds and installs the logout stage.

    Startup-only and single-threaded. Configuration errors surface as
    LogoutConfigurationError with the offending InvalidLogoutArgument as
    ``__cause__``, so an application never starts with a broken stage.
    """

    def __init__(self):
        self._logout: Optional[LogoutConfigurer] = None
        self._csrf_enabled = True
        self._csrf_token_repository: Optional[CsrfTokenRepository] = None
        self._remember_me_services: Optional[RememberMeServices] = None
        self._login_path = DEFAULT_LOGIN_PATH
        self._event_publisher: Optional[EventPublisher] = None
        self._object_post_processor: Optional[ObjectPostProcessor] = None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[LogoutSettings] = None,
        redis_client: Optional[Any] = None,
    ) -> "SecurityChainBuilder":
        """Create a builder pre-configured from LogoutSettings.

        With a ``redis_client`` the server-side session record is removed on
        logout, using ``settings.session_key_prefix`` for its keys.
        """
        settings = settings or get_logout_settings()
        builder = cls().csrf(enabled=settings.csrf_enabled).login_path(settings.login_path)

        def apply(logout: LogoutConfigurer) -> None:
            if settings.logout_path != DEFAULT_LOGOUT_PATH:
                logout.set_path(settings.logout_path)
            logout.invalidate_session(settings.invalidate_session)
            logout.clear_authentication(settings.clear_authentication)
            if settings.delete_cookies:
                logout.delete_cookies(*settings.delete_cookies)
            if redis_client is not None:
                logout.add_session_store(redis_client, key_prefix=settings.session_key_prefix)

        return builder.logout(apply)

    def logout(self, customizer: Optional[Callable[[LogoutConfigurer], Any]] = None) -> "SecurityChainBuilder":
        """Enable logout and optionally customize it.

        Repeated calls share one LogoutConfigurer, so a later call never
        discards options set by an earlier one.
        """
        if self._logout is None:
            self._logout = LogoutConfigurer()

        if customizer is not None:
            try:
                customizer(self._logout)
            except InvalidLogoutArgument as e:
                raise LogoutConfigurationError(
                    f"Invalid logout configuration: {e.message}",
                    details=e.details,
                ) from e
        return self

    def csrf(
        self,
        enabled: bool = True,
        token_repository: Optional[CsrfTokenRepository] = None,
    ) -> "SecurityChainBuilder":
        """Declare whether request-forgery protection is active."""
        self._csrf_enabled = enabled
        if token_repository is not None:
            self._csrf_token_repository = token_repository
        return self

    def remember_me(self, services: RememberMeServices) -> "SecurityChainBuilder":
        self._remember_me_services = self._required(services, "services")
        return self

    def login_path(self, path: str) -> "SecurityChainBuilder":
        self._login_path = self._required(path, "login_path")
        return self

    def event_publisher(self, publisher: EventPublisher) -> "SecurityChainBuilder":
        self._event_publisher = self._required(publisher, "publisher")
        return self

    def object_post_processor(self, processor: ObjectPostProcessor) -> "SecurityChainBuilder":
        """Register a hook invoked once with each built LogoutFilter."""
        self._required(processor, "processor")
        if not isinstance(processor, ObjectPostProcessor):
            raise LogoutConfigurationError(
                f"{type(processor).__name__} does not implement ObjectPostProcessor"
            )
        self._object_post_processor = processor
        return self

    def _required(self, value: Any, argument: str) -> Any:
        try:
            return require(value, argument)
        except InvalidLogoutArgument as e:
            raise LogoutConfigurationError(
                f"Invalid security configuration: {e.message}",
                details=e.details,
            ) from e

    def build_configuration(self) -> LogoutConfiguration:
        """Build the immutable LogoutConfiguration."""
        if self._logout is None:
            raise LogoutConfigurationError("Logout is not enabled; call logout() before build()")

        try:
            return self._logout.build(
                csrf_enabled=self._csrf_enabled,
                login_path=self._login_path,
                csrf_token_repository=self._csrf_token_repository,
                remember_me_services=self._remember_me_services,
                event_publisher=self._event_publisher,
            )
        except ValueError as e:
            raise LogoutConfigurationError(f"Failed to build logout configuration: {e}") from e

    def build(self) -> LogoutFilter:
        """Build the LogoutFilter, passing it through the post-processor."""
        configuration = self.build_configuration()
        logout_filter = LogoutFilter(configuration)

        if self._object_post_processor is not None:
            logout_filter = self._object_post_processor.post_process(logout_filter)
            if not callable(getattr(logout_filter, "process", None)):
                raise LogoutConfigurationError(
                    f"{type(self._object_post_processor).__name__}.post_process returned "
                    f"{type(logout_filter).__name__}, not a logout filter"
                )

        logger.info(
            f"Logout stage built: path={configuration.logout_path}, "
            f"methods={sorted(configuration.allowed_methods)}, "
            f"handlers={len(configuration.handlers)}, "
            f"routes={len(configuration.success_routes)}"
        )
        return logout_filter

    def install(
        self,
        app: FastAPI,
        principal_resolver: PrincipalResolver = resolve_principal,
    ) -> LogoutFilter:
        """Build the stage and add it to ``app`` as middleware."""
        logout_filter = self.build()
        app.add_middleware(
            LogoutMiddleware,
            logout_filter=logout_filter,
            principal_resolver=principal_resolver,
        )
        return logout_filter
