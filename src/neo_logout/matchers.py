"""Request matchers.

Pure predicates over a Starlette request. The logout stage uses
LogoutRequestMatcher to recognize logout requests; the remaining matchers are
building blocks for per-route success handlers.
"""

from typing import Iterable, Optional, Sequence

from starlette.requests import Request

from .core.exceptions import InvalidLogoutArgument, require
from .core.media_type import ALL, MediaType, parse_accept_header
from .core.protocols import RequestMatcher


class LogoutRequestMatcher:
    """Matches the logout path for an allowed set of HTTP methods."""

    def __init__(self, path: str, methods: Iterable[str]):
        self.path = require(path, "path")
        self.methods = frozenset(method.upper() for method in methods)

    def matches(self, request: Request) -> bool:
        return request.url.path == self.path and request.method.upper() in self.methods

    def __repr__(self) -> str:
        return f"LogoutRequestMatcher(path={self.path!r}, methods={sorted(self.methods)})"


class PathRequestMatcher:
    """Matches an exact path, optionally restricted to one method."""

    def __init__(self, path: str, method: Optional[str] = None):
        self.path = require(path, "path")
        self.method = method.upper() if method else None

    def matches(self, request: Request) -> bool:
        if self.method and request.method.upper() != self.method:
            return False
        return request.url.path == self.path

    def __repr__(self) -> str:
        return f"PathRequestMatcher(path={self.path!r}, method={self.method!r})"


class AnyRequestMatcher:
    """Matches every request."""

    def matches(self, request: Request) -> bool:
        return True

    def __repr__(self) -> str:
        return "AnyRequestMatcher()"


class HeaderRequestMatcher:
    """Matches when a header is present, or present with an exact value."""

    def __init__(self, name: str, value: Optional[str] = None):
        self.name = require(name, "name")
        self.value = value

    def matches(self, request: Request) -> bool:
        actual = request.headers.get(self.name)
        if actual is None:
            return False
        return self.value is None or actual == self.value

    def __repr__(self) -> str:
        return f"HeaderRequestMatcher(name={self.name!r}, value={self.value!r})"


class MediaTypeRequestMatcher:
    """Matches requests whose Accept header is compatible with given media types.

    With ``use_equals`` the accepted type must equal one of the configured
    types instead of merely being compatible. Accepted types listed in
    ``ignored`` are disregarded. A missing Accept header counts as ``*/*``.
    """

    def __init__(
        self,
        *media_types: str,
        use_equals: bool = False,
        ignored: Sequence[str] = (),
    ):
        if not media_types:
            raise InvalidLogoutArgument("media_types", "At least one media type is required")
        self.media_types = self._parse(media_types)
        self.use_equals = use_equals
        self.ignored = self._parse(ignored)

    @staticmethod
    def _parse(values: Sequence[str]) -> list:
        try:
            return [MediaType.of(value) for value in values]
        except ValueError as e:
            raise InvalidLogoutArgument("media_types", str(e)) from e

    def _accepted(self, request: Request) -> list:
        accepted = [
            media_type
            for media_type in parse_accept_header(request.headers.get("accept"))
            if media_type.quality > 0
        ]
        return accepted or [ALL]

    def matches(self, request: Request) -> bool:
        for accepted in sorted(self._accepted(request), key=MediaType.sort_key):
            if any(accepted.essence == ignored.essence for ignored in self.ignored):
                continue
            for candidate in self.media_types:
                if self.use_equals:
                    if accepted.essence == candidate.essence:
                        return True
                elif candidate.is_compatible_with(accepted):
                    return True
        return False

    def __repr__(self) -> str:
        types = ", ".join(media_type.essence for media_type in self.media_types)
        return f"MediaTypeRequestMatcher({types}, use_equals={self.use_equals})"


class AndRequestMatcher:
    """Matches when every delegate matches."""

    def __init__(self, *matchers: RequestMatcher):
        if not matchers:
            raise InvalidLogoutArgument("matchers", "At least one matcher is required")
        self.matchers = tuple(require(matcher, "matcher") for matcher in matchers)

    def matches(self, request: Request) -> bool:
        return all(matcher.matches(request) for matcher in self.matchers)


class OrRequestMatcher:
    """Matches when any delegate matches."""

    def __init__(self, *matchers: RequestMatcher):
        if not matchers:
            raise InvalidLogoutArgument("matchers", "At least one matcher is required")
        self.matchers = tuple(require(matcher, "matcher") for matcher in matchers)

    def matches(self, request: Request) -> bool:
        return any(matcher.matches(request) for matcher in self.matchers)


class NegatedRequestMatcher:
    """Inverts a delegate matcher."""

    def __init__(self, matcher: RequestMatcher):
        self.matcher = require(matcher, "matcher")

    def matches(self, request: Request) -> bool:
        return not self.matcher.matches(request)
