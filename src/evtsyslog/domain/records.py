"""Per-event value objects travelling through the forwarding pipeline.

Purpose
-------
Provide the immutable projection of a host event (:class:`EventRecord`) and
the bounded wire payload built from it (:class:`SyslogLine`).

System Role
-----------
Both objects are created inside one subscription callback and discarded after
the send attempt; nothing retains them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

MAX_PAYLOAD_BYTES = 2047
"""Largest datagram payload emitted for a single event."""


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class EventRecord:
    """Structured projection of one delivered event.

    Attributes
    ----------
    timestamp:
        Creation time of the event, timezone-aware UTC.
    provider_name:
        Name of the publisher that raised the event.
    computer_name:
        Host the event was recorded on.
    process_id:
        Process that raised the event (32-bit unsigned).
    event_id:
        Publisher-specific event identifier (16-bit unsigned).
    message:
        Human-readable message rendered from the publisher metadata.
    """

    timestamp: datetime
    provider_name: str
    computer_name: str
    process_id: int
    event_id: int
    message: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        if not 0 <= self.process_id <= 0xFFFFFFFF:
            raise ValueError(f"process_id out of range: {self.process_id}")
        if not 0 <= self.event_id <= 0xFFFF:
            raise ValueError(f"event_id out of range: {self.event_id}")


@dataclass(slots=True, frozen=True)
class SyslogLine:
    """One formatted syslog message ready for the wire.

    Examples
    --------
    >>> SyslogLine("<3>1 hello").payload
    b'<3>1 hello'
    >>> len(SyslogLine("x" * 5000).payload)
    2047
    >>> len(SyslogLine("\\u00e9" * 1100).payload)
    2046
    """

    text: str

    @property
    def payload(self) -> bytes:
        """UTF-8 bytes capped at :data:`MAX_PAYLOAD_BYTES` without splitting a character."""

        encoded = self.text.encode("utf-8", errors="replace")
        if len(encoded) <= MAX_PAYLOAD_BYTES:
            return encoded
        return encoded[:MAX_PAYLOAD_BYTES].decode("utf-8", errors="ignore").encode("utf-8")


__all__ = ["EventRecord", "MAX_PAYLOAD_BYTES", "SyslogLine"]
