"""Port describing the queue between subscription callbacks and senders."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from evtsyslog.domain.records import EventRecord


@runtime_checkable
class QueuePort(Protocol):
    """Bridge between host delivery threads and the sender workers."""

    def start(self) -> None:
        """Start the queue workers."""

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the queue workers, optionally draining queued records within ``timeout``."""

    def put(self, record: EventRecord) -> bool:
        """Enqueue ``record`` for asynchronous processing."""


__all__ = ["QueuePort"]
