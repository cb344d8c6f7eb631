"""Media type value object and Accept header parsing."""

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass(frozen=True)
class MediaType:
    """Media type as declared in an Accept header.

    Handles ONLY representation, ordering and compatibility. Negotiation
    decisions live in neo_logout.negotiation.
    """

    type: str
    subtype: str
    quality: float = 1.0
    order: int = 0
    parameters: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    MAX_QUALITY: ClassVar[float] = 1.0
    MIN_QUALITY: ClassVar[float] = 0.0

    def __post_init__(self) -> None:
        """Normalize case and validate the quality value."""
        object.__setattr__(self, "type", self.type.strip().lower())
        object.__setattr__(self, "subtype", self.subtype.strip().lower())

        if not self.type or not self.subtype:
            raise ValueError("Media type and subtype cannot be empty")

        if self.type == WILDCARD and self.subtype != WILDCARD:
            raise ValueError(f"Invalid wildcard media type: {self.type}/{self.subtype}")

        if not self.MIN_QUALITY <= self.quality <= self.MAX_QUALITY:
            raise ValueError(f"Quality value out of range: {self.quality}")

    @property
    def essence(self) -> str:
        """Type and subtype without parameters, e.g. ``text/html``."""
        return f"{self.type}/{self.subtype}"

    @property
    def is_wildcard_type(self) -> bool:
        return self.type == WILDCARD

    @property
    def is_wildcard_subtype(self) -> bool:
        return self.subtype == WILDCARD

    @property
    def specificity(self) -> int:
        """0 for a concrete type, 1 for ``type/*``, 2 for ``*/*``."""
        if self.is_wildcard_type:
            return 2
        if self.is_wildcard_subtype:
            return 1
        return 0

    @property
    def structured_suffix(self) -> Optional[str]:
        """Structured syntax suffix, e.g. ``json`` for ``application/ld+json``."""
        if "+" in self.subtype:
            return self.subtype.rsplit("+", 1)[1]
        return None

    def sort_key(self) -> tuple:
        """Ordering key: highest quality, then most specific, then declaration order."""
        return (-self.quality, self.specificity, self.order)

    def includes(self, other: "MediaType") -> bool:
        """Check whether this (possibly wildcard) type covers ``other``."""
        if self.is_wildcard_type:
            return True
        if self.type != other.type:
            return False
        return self.is_wildcard_subtype or self.subtype == other.subtype

    def is_compatible_with(self, other: "MediaType") -> bool:
        """Check compatibility in either direction."""
        return self.includes(other) or other.includes(self)

    @classmethod
    def of(cls, value: str) -> "MediaType":
        """Parse a single media type such as ``application/json``."""
        parsed = parse_accept_header(value)
        if len(parsed) != 1:
            raise ValueError(f"Invalid media type: {value!r}")
        return parsed[0]

    def __str__(self) -> str:
        if self.quality < self.MAX_QUALITY:
            return f"{self.essence};q={self.quality:g}"
        return self.essence


ALL = MediaType("*", "*")
TEXT_HTML = MediaType("text", "html")
APPLICATION_XHTML_XML = MediaType("application", "xhtml+xml")
APPLICATION_JSON = MediaType("application", "json")


def _parse_quality(raw: str) -> float:
    quality = float(raw)
    if quality != quality:  # NaN
        raise ValueError("Quality value is not a number")
    return quality


def parse_accept_header(header: Optional[str]) -> List[MediaType]:
    """Parse an Accept header into media types in declaration order.

    Malformed entries are skipped rather than failing the whole header.
    Entries declared with ``q=0`` are kept; callers decide whether they count
    as acceptable.

    Args:
        header: Raw Accept header value, possibly None

    Returns:
        List of MediaType, one per well-formed entry
    """
    if not header:
        return []

    media_types: List[MediaType] = []
    for position, entry in enumerate(header.split(",")):
        entry = entry.strip()
        if not entry:
            continue

        essence, *raw_params = [part.strip() for part in entry.split(";")]
        if essence == WILDCARD:
            essence = "*/*"

        if essence.count("/") != 1:
            logger.debug(f"Skipping malformed media type: {entry!r}")
            continue

        media_type, subtype = essence.split("/")
        parameters: Dict[str, str] = {}
        quality = 1.0

        try:
            for param in raw_params:
                if not param:
                    continue
                name, _, value = param.partition("=")
                name = name.strip().lower()
                value = value.strip().strip('"')
                if name == "q":
                    quality = _parse_quality(value)
                else:
                    parameters[name] = value

            media_types.append(
                MediaType(
                    type=media_type,
                    subtype=subtype,
                    quality=quality,
                    order=position,
                    parameters=parameters,
                )
            )
        except ValueError as e:
            logger.debug(f"Skipping malformed media type {entry!r}: {e}")

    return media_types
