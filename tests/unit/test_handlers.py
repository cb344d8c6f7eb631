"""Tests for logout handlers and the handler chain."""

from unittest.mock import AsyncMock

import pytest
from starlette.authentication import SimpleUser, UnauthenticatedUser
from starlette.responses import Response

from neo_logout.core.events import LogoutSucceeded
from neo_logout.core.exceptions import InvalidLogoutArgument
from neo_logout.core.protocols import LogoutHandler
from neo_logout.handlers import (
    CompositeLogoutHandler,
    CookieClearingLogoutHandler,
    CsrfLogoutHandler,
    EventPublishingLogoutHandler,
    RedisSessionLogoutHandler,
    SecurityContextLogoutHandler,
)
from tests.helpers import RecordingLogoutHandler


class FailingLogoutHandler:
    async def logout(self, request, response, principal):
        raise RuntimeError("session store unavailable")


class TestCompositeLogoutHandler:
    """The chain runs every handler, in order, with the same arguments."""

    @pytest.mark.asyncio
    async def test_runs_all_handlers_in_order(self, make_request, calls, principal):
        chain = CompositeLogoutHandler(
            RecordingLogoutHandler(name, calls) for name in ("first", "second", "third")
        )
        request = make_request()
        response = Response()

        await chain.logout(request, response, principal)

        assert [call[0] for call in calls] == ["first", "second", "third"]
        for _, seen_request, seen_response, seen_principal in calls:
            assert seen_request is request
            assert seen_response is response
            assert seen_principal is principal

    @pytest.mark.asyncio
    async def test_handler_writing_response_does_not_stop_chain(self, make_request, calls):
        chain = CompositeLogoutHandler([
            CookieClearingLogoutHandler("SESSION"),
            RecordingLogoutHandler("after", calls),
        ])

        await chain.logout(make_request(), Response(), None)

        assert [call[0] for call in calls] == ["after"]

    @pytest.mark.asyncio
    async def test_handler_errors_propagate(self, make_request, calls):
        chain = CompositeLogoutHandler([FailingLogoutHandler(), RecordingLogoutHandler("after", calls)])

        with pytest.raises(RuntimeError, match="session store unavailable"):
            await chain.logout(make_request(), Response(), None)

        assert calls == []

    def test_rejects_none(self, calls):
        with pytest.raises(InvalidLogoutArgument):
            CompositeLogoutHandler([RecordingLogoutHandler("a", calls), None])

    def test_len_and_iter(self, calls):
        handlers = [RecordingLogoutHandler("a", calls), RecordingLogoutHandler("b", calls)]
        chain = CompositeLogoutHandler(handlers)

        assert len(chain) == 2
        assert list(chain) == handlers


class TestSecurityContextLogoutHandler:
    """Test session invalidation and principal clearing."""

    @pytest.mark.asyncio
    async def test_clears_session_and_principal(self, make_request, principal):
        session = {"session_id": "abc", "cart": [1, 2]}
        request = make_request(session=session, user=SimpleUser("user"))
        request.state.user_context = principal

        await SecurityContextLogoutHandler().logout(request, Response(), principal)

        assert session == {}
        assert request.state.user_context is None
        assert isinstance(request.scope["user"], UnauthenticatedUser)

    @pytest.mark.asyncio
    async def test_respects_flags(self, make_request, principal):
        session = {"session_id": "abc"}
        request = make_request(session=session)
        request.state.user_context = principal

        handler = SecurityContextLogoutHandler(invalidate_session=False, clear_authentication=False)
        await handler.logout(request, Response(), principal)

        assert session == {"session_id": "abc"}
        assert request.state.user_context is principal

    @pytest.mark.asyncio
    async def test_request_without_session(self, make_request):
        request = make_request()
        await SecurityContextLogoutHandler().logout(request, Response(), None)
        assert "session" not in request.scope

    def test_satisfies_protocol(self):
        assert isinstance(SecurityContextLogoutHandler(), LogoutHandler)


class TestCookieClearingLogoutHandler:
    """Test cookie expiry."""

    @pytest.mark.asyncio
    async def test_expires_each_cookie(self, make_request):
        response = Response()

        await CookieClearingLogoutHandler("SESSION", "remember-me").logout(make_request(), response, None)

        cookies = response.headers.getlist("set-cookie")
        assert len(cookies) == 2
        assert cookies[0].startswith("SESSION=")
        assert cookies[1].startswith("remember-me=")
        assert all("Max-Age=0" in cookie for cookie in cookies)

    def test_rejects_empty_names(self):
        with pytest.raises(InvalidLogoutArgument):
            CookieClearingLogoutHandler("SESSION", None)
        with pytest.raises(InvalidLogoutArgument):
            CookieClearingLogoutHandler("")


class TestCsrfLogoutHandler:
    """Test CSRF token removal."""

    @pytest.mark.asyncio
    async def test_clears_token(self, make_request):
        repository = AsyncMock()
        request = make_request()
        response = Response()

        await CsrfLogoutHandler(repository).logout(request, response, None)

        repository.clear_token.assert_awaited_once_with(request, response)

    def test_requires_repository(self):
        with pytest.raises(InvalidLogoutArgument):
            CsrfLogoutHandler(None)


class TestRedisSessionLogoutHandler:
    """Test server-side session removal."""

    @pytest.fixture
    def redis_client(self):
        client = AsyncMock()
        client.delete.return_value = 1
        client.srem.return_value = 1
        return client

    @pytest.mark.asyncio
    async def test_deletes_session_and_user_index(self, make_request, redis_client, principal):
        request = make_request(session={"session_id": "abc123"})

        await RedisSessionLogoutHandler(redis_client).logout(request, Response(), principal)

        redis_client.delete.assert_awaited_once_with("auth_session:abc123")
        redis_client.srem.assert_awaited_once_with("auth_session:user:user-123:global", "abc123")

    @pytest.mark.asyncio
    async def test_cookie_fallback_and_prefix(self, make_request, redis_client):
        request = make_request(headers={"Cookie": "sid=xyz789"})
        handler = RedisSessionLogoutHandler(redis_client, key_prefix="sessions", cookie_name="sid")

        await handler.logout(request, Response(), None)

        redis_client.delete.assert_awaited_once_with("sessions:xyz789")
        redis_client.srem.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_session_is_noop(self, make_request, redis_client):
        await RedisSessionLogoutHandler(redis_client).logout(make_request(session={}), Response(), None)

        redis_client.delete.assert_not_awaited()

    def test_requires_client(self):
        with pytest.raises(InvalidLogoutArgument):
            RedisSessionLogoutHandler(None)


class TestEventPublishingLogoutHandler:
    """Test logout event publication."""

    @pytest.mark.asyncio
    async def test_publishes_event(self, make_request, principal):
        publisher = AsyncMock()

        await EventPublishingLogoutHandler(publisher).logout(make_request(), Response(), principal)

        publisher.publish.assert_awaited_once()
        event = publisher.publish.await_args.args[0]
        assert isinstance(event, LogoutSucceeded)
        assert event.principal is principal
        assert event.path == "/logout"
        assert event.method == "POST"
        assert event.client_host == "127.0.0.1"
        assert event.to_dict()["event_type"] == "logout_succeeded"

    def test_requires_publisher(self):
        with pytest.raises(InvalidLogoutArgument):
            EventPublishingLogoutHandler(None)
