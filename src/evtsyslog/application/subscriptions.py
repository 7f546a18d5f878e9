"""Subscription manager owning every live channel subscription.

Purpose
-------
Open one future-events subscription per channel, tolerate channels that
refuse subscriptions, and guarantee each native handle is released exactly
once on teardown.

Contents
--------
* :class:`Subscription` – idempotent wrapper around one native handle.
* :class:`SubscribeReport` – outcome of :meth:`SubscriptionManager.subscribe_all`.
* :class:`SubscriptionManager` – fan-in owner used by the startup sequence.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from evtsyslog.application.ports.event_source import DeliveryCallback, EventSourcePort
from evtsyslog.domain.errors import ChannelNotSupportedError, SubscriptionError

logger = logging.getLogger(__name__)


class Subscription:
    """One live subscription binding a channel to the delivery callback."""

    def __init__(self, channel: str, handle: Any, source: EventSourcePort) -> None:
        self.channel = channel
        self._handle = handle
        self._source = source
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        """Return ``True`` once the native handle has been released."""

        return self._closed

    def close(self) -> None:
        """Release the native handle; further calls are no-ops."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
            handle, self._handle = self._handle, None
        self._source.close(handle)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "live"
        return f"Subscription({self.channel!r}, {state})"


@dataclass(slots=True)
class SubscribeReport:
    """Summary of a :meth:`SubscriptionManager.subscribe_all` run."""

    subscriptions: list[Subscription] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """``False`` when at least one channel failed for a reason other than "not supported"."""

        return not self.failed


class SubscriptionManager:
    """Create and tear down the set of channel subscriptions.

    Examples
    --------
    >>> class Source:
    ...     def subscribe(self, channel, callback):
    ...         return channel.upper()
    ...     def close(self, handle):
    ...         print("closed", handle)
    >>> manager = SubscriptionManager(Source())
    >>> report = manager.subscribe_all(["a"], lambda event: None)
    >>> report.ok, len(manager)
    (True, 1)
    >>> manager.close_all()
    closed A
    >>> manager.close_all()
    """

    def __init__(self, source: EventSourcePort) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for item in self._subscriptions if not item.closed)

    def subscribe_all(self, channels: Iterable[str], on_event: DeliveryCallback) -> SubscribeReport:
        """Subscribe ``on_event`` to future events on every channel in ``channels``."""

        report = SubscribeReport()
        for channel in channels:
            try:
                handle = self._source.subscribe(channel, on_event)
            except ChannelNotSupportedError:
                logger.debug("Channel %s does not support subscriptions; skipped", channel)
                report.skipped.append(channel)
                continue
            except SubscriptionError as exc:
                logger.warning("Failed to subscribe to %s: %s", channel, exc)
                report.failed.append((channel, str(exc)))
                continue
            subscription = Subscription(channel, handle, self._source)
            with self._lock:
                self._subscriptions.append(subscription)
            report.subscriptions.append(subscription)

        logger.info(
            "Subscribed to %d channels (%d skipped, %d failed)",
            len(report.subscriptions),
            len(report.skipped),
            len(report.failed),
        )
        return report

    def close_all(self) -> None:
        """Close every tracked subscription exactly once; safe to call repeatedly."""

        with self._lock:
            subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            try:
                subscription.close()
            except Exception as exc:  # noqa: BLE001
                logger.warning("Closing subscription for %s failed", subscription.channel, exc_info=exc)


__all__ = ["SubscribeReport", "Subscription", "SubscriptionManager"]
