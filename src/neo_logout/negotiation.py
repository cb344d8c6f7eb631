"""Content negotiation for the default logout response.

Browsers navigating through links and forms get a redirect to the login page;
script-driven clients get a bare 204 they can branch on. Everything here is a
pure function of the request headers.
"""

from enum import Enum
from typing import List, Optional

from .core.media_type import (
    APPLICATION_JSON,
    APPLICATION_XHTML_XML,
    TEXT_HTML,
    MediaType,
    parse_accept_header,
)

REQUESTED_WITH_HEADER = "X-Requested-With"
XML_HTTP_REQUEST = "XMLHttpRequest"

HTML_TYPES = frozenset({TEXT_HTML.essence, APPLICATION_XHTML_XML.essence})

STRUCTURED_TYPES = frozenset({
    APPLICATION_JSON.essence,
    "application/xml",
    "text/xml",
    "application/atom+xml",
    "application/x-www-form-urlencoded",
    "application/octet-stream",
    "multipart/form-data",
})

STRUCTURED_SUFFIXES = frozenset({"json", "xml"})


class LogoutOutcome(str, Enum):
    """Response shape chosen for a successful logout."""
    REDIRECT = "redirect"
    NO_CONTENT = "no_content"


def is_xhr(requested_with: Optional[str]) -> bool:
    """Check the script-origin marker value."""
    return bool(requested_with) and requested_with.strip().lower() == XML_HTTP_REQUEST.lower()


def acceptable_media_types(accept: Optional[str]) -> List[MediaType]:
    """Acceptable media types from an Accept header, best first.

    Entries with ``q=0`` are dropped. Ordering is by quality, then
    specificity (concrete over ``type/*`` over ``*/*``), then declaration
    order.
    """
    acceptable = [media_type for media_type in parse_accept_header(accept) if media_type.quality > 0]
    return sorted(acceptable, key=MediaType.sort_key)


def is_html_compatible(media_type: MediaType) -> bool:
    if media_type.essence in HTML_TYPES:
        return True
    # text/* can be satisfied by text/html
    return media_type.type == "text" and media_type.is_wildcard_subtype


def is_structured(media_type: MediaType) -> bool:
    if media_type.essence in STRUCTURED_TYPES:
        return True
    if media_type.structured_suffix in STRUCTURED_SUFFIXES:
        return True
    return media_type.type == "application" and media_type.is_wildcard_subtype


def outcome_for(media_type: MediaType) -> LogoutOutcome:
    """Outcome for the winning media type."""
    if is_html_compatible(media_type):
        return LogoutOutcome.REDIRECT
    if media_type.is_wildcard_type:
        return LogoutOutcome.NO_CONTENT
    if is_structured(media_type):
        return LogoutOutcome.NO_CONTENT
    return LogoutOutcome.REDIRECT


def negotiate_logout_outcome(
    accept: Optional[str],
    requested_with: Optional[str] = None,
) -> LogoutOutcome:
    """Choose between redirect and no-content for a successful logout.

    Args:
        accept: Raw Accept header value, if any
        requested_with: Raw X-Requested-With header value, if any

    Returns:
        LogoutOutcome.NO_CONTENT for XHR requests regardless of Accept,
        otherwise the outcome for the highest-priority acceptable media type.
        A missing or empty Accept header means browser navigation.
    """
    if is_xhr(requested_with):
        return LogoutOutcome.NO_CONTENT

    acceptable = acceptable_media_types(accept)
    if not acceptable:
        return LogoutOutcome.REDIRECT

    return outcome_for(acceptable[0])
