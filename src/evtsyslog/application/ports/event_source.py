"""Event source port describing the host event-log subsystem.

Purpose
-------
Expose the four capabilities the forwarder needs from the host: enumerate
channels, subscribe to future events, render system values, and format the
publisher message. Adapters translate platform failures into the domain
errors documented on each method.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol, runtime_checkable

EventHandle = Any
"""Opaque per-event handle, only valid for the duration of a delivery callback."""

DeliveryCallback = Callable[[EventHandle], None]
RenderedValue = tuple[Any, int]


@runtime_checkable
class EventSourcePort(Protocol):
    """Opaque source of structured event records."""

    def list_channels(self) -> Iterable[str]:
        """Return every channel name registered on the host.

        Raises :class:`~evtsyslog.domain.errors.EnumerationError` when the
        enumerator cannot be opened.
        """

    def subscribe(self, channel: str, callback: DeliveryCallback) -> Any:
        """Subscribe ``callback`` to future events on ``channel`` and return the native handle.

        Raises :class:`~evtsyslog.domain.errors.ChannelNotSupportedError` for
        channels that refuse subscriptions and
        :class:`~evtsyslog.domain.errors.SubscriptionError` otherwise.
        """

    def close(self, handle: Any) -> None:
        """Release a handle returned by :meth:`subscribe`."""

    def render_system_values(self, event: EventHandle) -> Sequence[RenderedValue]:
        """Render the system properties of ``event`` as ``(value, variant_type)`` pairs."""

    def format_message(self, provider_name: str, event: EventHandle) -> str:
        """Return the publisher-formatted message for ``event``."""


__all__ = ["DeliveryCallback", "EventHandle", "EventSourcePort", "RenderedValue"]
