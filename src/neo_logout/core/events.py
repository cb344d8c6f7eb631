"""Logout events."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LogoutSucceeded:
    """Event fired after the logout chain has run for a request.

    Carries the principal that was logged out (None for anonymous logouts)
    and enough request context for audit.
    """

    principal: Optional[Any]
    path: str
    method: str
    client_host: Optional[str] = None
    event_timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_source: str = "neo_logout"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": "logout_succeeded",
            "principal": str(self.principal) if self.principal is not None else None,
            "path": self.path,
            "method": self.method,
            "client_host": self.client_host,
            "event_timestamp": self.event_timestamp.isoformat(),
            "event_source": self.event_source,
            "metadata": self.metadata,
        }
