"""Port for the datagram transport that ships syslog lines."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from evtsyslog.domain.destination import Destination
from evtsyslog.domain.records import SyslogLine


@runtime_checkable
class TransportPort(Protocol):
    """Deliver one formatted line to the destination, best effort."""

    def send(self, destination: Destination, line: SyslogLine) -> None:
        """Send ``line``; raise :class:`~evtsyslog.domain.errors.TransportError` on failure."""


__all__ = ["TransportPort"]
