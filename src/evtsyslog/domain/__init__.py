"""Domain entities and value objects used by the forwarding pipeline."""

from __future__ import annotations

from .destination import DEFAULT_SYSLOG_PORT, Destination, parse_port
from .errors import (
    ChannelNotSupportedError,
    ConfigError,
    EnumerationError,
    EventSourceError,
    ForwarderError,
    SubscriptionError,
    TransportError,
)
from .lifecycle import ControlRequest, ServiceState
from .properties import SystemProperty, VariantType, filetime_to_datetime
from .records import MAX_PAYLOAD_BYTES, EventRecord, SyslogLine

__all__ = [
    "ChannelNotSupportedError",
    "ConfigError",
    "ControlRequest",
    "DEFAULT_SYSLOG_PORT",
    "Destination",
    "EnumerationError",
    "EventRecord",
    "EventSourceError",
    "ForwarderError",
    "MAX_PAYLOAD_BYTES",
    "ServiceState",
    "SubscriptionError",
    "SyslogLine",
    "SystemProperty",
    "TransportError",
    "VariantType",
    "filetime_to_datetime",
    "parse_port",
]
