"""Application-layer ports (protocols) implemented by the adapters."""

from __future__ import annotations

from .event_source import DeliveryCallback, EventHandle, EventSourcePort, RenderedValue
from .formatter import FormatterPort
from .lifecycle import LifecyclePort, StatusReporterPort
from .queue import QueuePort
from .settings import ResolverPort, SettingsStorePort
from .transport import TransportPort

__all__ = [
    "DeliveryCallback",
    "EventHandle",
    "EventSourcePort",
    "FormatterPort",
    "LifecyclePort",
    "QueuePort",
    "RenderedValue",
    "ResolverPort",
    "SettingsStorePort",
    "StatusReporterPort",
    "TransportPort",
]
