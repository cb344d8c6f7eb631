"""Server-side session cleanup in Redis."""

import logging
from typing import Any, Optional

from redis.asyncio import Redis
from starlette.requests import Request
from starlette.responses import Response

from ..core.exceptions import require

logger = logging.getLogger(__name__)


class RedisSessionLogoutHandler:
    """Deletes the server-side session record for the current request.

    The session id is read from the Starlette session under ``session_key``
    and, failing that, from the ``cookie_name`` cookie. Handles ONLY the
    Redis records; the client-side session is cleared by
    SecurityContextLogoutHandler, which must run after this handler.
    """

    def __init__(
        self,
        redis_client: Redis,
        key_prefix: str = "auth_session",
        session_key: str = "session_id",
        cookie_name: Optional[str] = None,
    ):
        self.redis = require(redis_client, "redis_client")
        self.key_prefix = key_prefix
        self.session_key = session_key
        self.cookie_name = cookie_name

    def _make_session_key(self, session_id: str) -> str:
        return f"{self.key_prefix}:{session_id}"

    def _make_user_sessions_key(self, user_id: Any) -> str:
        return f"{self.key_prefix}:user:{user_id}:global"

    def _session_id(self, request: Request) -> Optional[str]:
        if "session" in request.scope:
            session_id = request.session.get(self.session_key)
            if session_id:
                return str(session_id)
        if self.cookie_name:
            return request.cookies.get(self.cookie_name)
        return None

    async def logout(
        self,
        request: Request,
        response: Response,
        principal: Optional[Any],
    ) -> None:
        session_id = self._session_id(request)
        if not session_id:
            logger.debug("No server-side session to remove")
            return

        deleted = await self.redis.delete(self._make_session_key(session_id))

        user_id = getattr(principal, "user_id", None)
        if user_id is not None:
            await self.redis.srem(self._make_user_sessions_key(user_id), session_id)

        logger.info(f"Removed server-side session (deleted={deleted})")
