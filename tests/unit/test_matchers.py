"""Tests for request matchers."""

import pytest

from neo_logout.core.exceptions import InvalidLogoutArgument
from neo_logout.core.protocols import RequestMatcher
from neo_logout.matchers import (
    AndRequestMatcher,
    AnyRequestMatcher,
    HeaderRequestMatcher,
    LogoutRequestMatcher,
    MediaTypeRequestMatcher,
    NegatedRequestMatcher,
    OrRequestMatcher,
    PathRequestMatcher,
)


class TestLogoutRequestMatcher:
    """Test path and method gate."""

    def test_matches_path_and_allowed_method(self, make_request):
        matcher = LogoutRequestMatcher("/logout", {"POST"})

        assert matcher.matches(make_request("/logout", "POST"))
        assert not matcher.matches(make_request("/logout", "GET"))
        assert not matcher.matches(make_request("/logout/", "POST"))
        assert not matcher.matches(make_request("/other", "POST"))

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
    def test_all_methods_when_unprotected(self, make_request, method):
        matcher = LogoutRequestMatcher("/logout", {"GET", "POST", "PUT", "DELETE"})
        assert matcher.matches(make_request("/logout", method))

    def test_patch_never_matches(self, make_request):
        matcher = LogoutRequestMatcher("/logout", {"GET", "POST", "PUT", "DELETE"})
        assert not matcher.matches(make_request("/logout", "PATCH"))

    def test_methods_normalized(self, make_request):
        matcher = LogoutRequestMatcher("/logout", ["post"])
        assert matcher.matches(make_request("/logout", "POST"))

    def test_satisfies_protocol(self):
        assert isinstance(LogoutRequestMatcher("/logout", {"POST"}), RequestMatcher)

    def test_none_path_rejected(self):
        with pytest.raises(InvalidLogoutArgument):
            LogoutRequestMatcher(None, {"POST"})


class TestSimpleMatchers:
    """Test path, header and any matchers."""

    def test_path_matcher(self, make_request):
        assert PathRequestMatcher("/api/logout").matches(make_request("/api/logout", "GET"))
        assert PathRequestMatcher("/api/logout", "post").matches(make_request("/api/logout", "POST"))
        assert not PathRequestMatcher("/api/logout", "POST").matches(make_request("/api/logout", "GET"))

    def test_header_matcher(self, make_request):
        present = HeaderRequestMatcher("X-Requested-With")
        exact = HeaderRequestMatcher("X-Requested-With", "XMLHttpRequest")

        xhr = make_request(headers={"X-Requested-With": "XMLHttpRequest"})
        other = make_request(headers={"X-Requested-With": "fetch"})
        bare = make_request()

        assert present.matches(xhr) and present.matches(other)
        assert exact.matches(xhr)
        assert not exact.matches(other)
        assert not present.matches(bare)

    def test_any_matcher(self, make_request):
        assert AnyRequestMatcher().matches(make_request("/anything", "PATCH"))


class TestMediaTypeRequestMatcher:
    """Test Accept-based matching."""

    def test_compatible_type(self, make_request):
        matcher = MediaTypeRequestMatcher("application/json")

        assert matcher.matches(make_request(headers={"Accept": "application/json"}))
        assert matcher.matches(make_request(headers={"Accept": "application/*"}))
        assert not matcher.matches(make_request(headers={"Accept": "text/html"}))

    def test_missing_accept_counts_as_all(self, make_request):
        assert MediaTypeRequestMatcher("application/json").matches(make_request())

    def test_use_equals(self, make_request):
        matcher = MediaTypeRequestMatcher("*/*", use_equals=True)

        assert matcher.matches(make_request(headers={"Accept": "*/*"}))
        assert not matcher.matches(make_request(headers={"Accept": "application/json"}))

    def test_ignored_types(self, make_request):
        matcher = MediaTypeRequestMatcher("application/json", ignored=["*/*"])

        assert not matcher.matches(make_request(headers={"Accept": "*/*"}))
        assert matcher.matches(make_request(headers={"Accept": "*/*, application/json"}))

    def test_requires_media_types(self):
        with pytest.raises(InvalidLogoutArgument):
            MediaTypeRequestMatcher()

    @pytest.mark.parametrize("value", ["json", "*/json"])
    def test_malformed_media_type(self, value):
        with pytest.raises(InvalidLogoutArgument) as exc_info:
            MediaTypeRequestMatcher(value)

        assert exc_info.value.details == {"argument": "media_types"}

    def test_malformed_ignored_type(self):
        with pytest.raises(InvalidLogoutArgument):
            MediaTypeRequestMatcher("application/json", ignored=["html"])


class TestCompositeMatchers:
    """Test and/or/not composition."""

    def test_and_or_not(self, make_request):
        is_logout = PathRequestMatcher("/logout")
        is_xhr = HeaderRequestMatcher("X-Requested-With", "XMLHttpRequest")
        request = make_request("/logout", headers={"X-Requested-With": "XMLHttpRequest"})
        plain = make_request("/logout")

        assert AndRequestMatcher(is_logout, is_xhr).matches(request)
        assert not AndRequestMatcher(is_logout, is_xhr).matches(plain)
        assert OrRequestMatcher(is_xhr, is_logout).matches(plain)
        assert NegatedRequestMatcher(is_xhr).matches(plain)
        assert not NegatedRequestMatcher(is_xhr).matches(request)

    def test_none_delegates_rejected(self):
        with pytest.raises(InvalidLogoutArgument):
            AndRequestMatcher(AnyRequestMatcher(), None)
        with pytest.raises(InvalidLogoutArgument):
            OrRequestMatcher()
        with pytest.raises(InvalidLogoutArgument):
            NegatedRequestMatcher(None)
