"""Shutdown orchestration for the forwarding pipeline.

Purpose
-------
Provide a unified teardown routine: close every subscription first so no new
events arrive, then stop the delivery queue without draining.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from evtsyslog.application.ports.queue import QueuePort

logger = logging.getLogger(__name__)


class _Closable(Protocol):
    def close_all(self) -> None: ...


def create_shutdown(
    *,
    subscriptions: _Closable,
    queue: QueuePort | None,
    stop_timeout: float | None = 2.0,
) -> Callable[[], None]:
    """Return a callable performing the shutdown sequence; repeated calls are harmless."""

    def shutdown() -> None:
        """Close subscriptions, then abandon queued records."""
        subscriptions.close_all()
        if queue is None:
            return
        try:
            queue.stop(drain=False, timeout=stop_timeout)
        except RuntimeError as exc:
            logger.warning("Delivery workers did not stop in time: %s", exc)

    return shutdown


__all__ = ["create_shutdown"]
