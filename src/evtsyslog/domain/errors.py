"""Exception hierarchy shared by every layer of the forwarder.

Purpose
-------
Name the failure classes the pipeline distinguishes so callers can decide
whether an error is fatal at startup, degrades a single channel, or merely
drops one event.

Contents
--------
* :class:`ForwarderError` – common base class.
* Startup failures: :class:`ConfigError`, :class:`EnumerationError`.
* Per-channel failures: :class:`SubscriptionError`,
  :class:`ChannelNotSupportedError`.
* Per-event failures: :class:`EventSourceError`, :class:`TransportError`.
"""

from __future__ import annotations


class ForwarderError(Exception):
    """Base class for all errors raised by the forwarder."""


class ConfigError(ForwarderError):
    """No usable syslog destination could be loaded."""


class EnumerationError(ForwarderError):
    """The host refused to enumerate its event-log channels."""


class SubscriptionError(ForwarderError):
    """Subscribing to a single channel failed."""

    def __init__(self, channel: str, message: str) -> None:
        super().__init__(f"{channel}: {message}")
        self.channel = channel


class ChannelNotSupportedError(SubscriptionError):
    """The channel does not accept live subscriptions (expected for some system channels)."""


class EventSourceError(ForwarderError):
    """Rendering or formatting an individual event failed."""


class TransportError(ForwarderError):
    """Sending a datagram to the destination failed."""


__all__ = [
    "ChannelNotSupportedError",
    "ConfigError",
    "EnumerationError",
    "EventSourceError",
    "ForwarderError",
    "SubscriptionError",
    "TransportError",
]
