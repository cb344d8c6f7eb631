"""Shared test doubles and request builders for neo-logout tests."""

from typing import Any, Dict, List, Optional, Tuple

from starlette.requests import Request
from starlette.responses import Response

CHROME_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


def build_request(
    path: str = "/logout",
    method: str = "POST",
    headers: Optional[Dict[str, str]] = None,
    session: Optional[Dict[str, Any]] = None,
    user: Any = None,
) -> Request:
    """Build a bare Starlette request without running an application."""
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "root_path": "",
        "query_string": b"",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 50000),
    }
    if session is not None:
        scope["session"] = session
    if user is not None:
        scope["user"] = user
    return Request(scope)


class RecordingLogoutHandler:
    """Logout handler that records each invocation into a shared list."""

    def __init__(self, name: str, calls: List[Tuple]):
        self.name = name
        self.calls = calls

    async def logout(self, request: Request, response: Response, principal: Optional[Any]) -> None:
        self.calls.append((self.name, request, response, principal))


class RecordingSuccessHandler:
    """Success handler that records invocations and writes a fixed status."""

    def __init__(self, name: str, calls: List[Tuple], status_code: int = 200):
        self.name = name
        self.calls = calls
        self.status_code = status_code

    async def on_logout_success(self, request: Request, response: Response, principal: Optional[Any]) -> None:
        self.calls.append((self.name, request, response, principal))
        response.status_code = self.status_code


class ReflectingPostProcessor:
    """Object post-processor that records what it saw and returns it unchanged."""

    def __init__(self):
        self.processed: List[Any] = []

    def post_process(self, obj):
        self.processed.append(obj)
        return obj
