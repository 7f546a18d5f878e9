"""Test doubles for the application ports."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from evtsyslog.domain.errors import ChannelNotSupportedError, EnumerationError, EventSourceError, SubscriptionError
from evtsyslog.domain.properties import SystemProperty, VariantType
from evtsyslog.domain.records import SyslogLine

# 2024-03-01T12:00:00.500Z as FILETIME ticks.
SCENARIO_FILETIME = 133537680005000000


def rendered_values(
    *,
    provider_name: Any = "Kernel-General",
    time_created: Any = SCENARIO_FILETIME,
    process_id: Any = 1234,
    computer_name: Any = "HOST1",
    event_id: Any = 16,
    overrides: dict[SystemProperty, tuple[Any, int]] | None = None,
    length: int = len(SystemProperty),
) -> list[tuple[Any, int]]:
    """Build a system render the way ``EvtRender`` returns it."""

    values: list[tuple[Any, int]] = [(None, VariantType.NULL)] * len(SystemProperty)
    values[SystemProperty.PROVIDER_NAME] = (provider_name, VariantType.STRING)
    values[SystemProperty.TIME_CREATED] = (time_created, VariantType.FILE_TIME)
    values[SystemProperty.PROCESS_ID] = (process_id, VariantType.UINT32)
    values[SystemProperty.COMPUTER] = (computer_name, VariantType.STRING)
    values[SystemProperty.EVENT_ID] = (event_id, VariantType.UINT16)
    for index, pair in (overrides or {}).items():
        values[index] = pair
    return values[:length]


class FakeHandle:
    def __init__(self, channel: str) -> None:
        self.channel = channel
        self.close_calls = 0

    def __repr__(self) -> str:
        return f"FakeHandle({self.channel!r})"


class FakeEventSource:
    """In-memory :class:`EventSourcePort` driven by the tests.

    Events are plain dicts: ``{"values": [...], "message": "..."}``. A missing
    ``values`` key makes rendering fail; a missing ``message`` makes formatting fail.
    """

    def __init__(
        self,
        channels: list[str] | None = None,
        *,
        not_supported: set[str] | None = None,
        failing: set[str] | None = None,
        fail_enumeration: bool = False,
    ) -> None:
        self.channels = list(channels or [])
        self.not_supported = set(not_supported or ())
        self.failing = set(failing or ())
        self.fail_enumeration = fail_enumeration
        self.callbacks: dict[str, Callable[[Any], None]] = {}
        self.handles: list[FakeHandle] = []
        self.closed: list[FakeHandle] = []
        self.format_calls: list[str] = []

    def list_channels(self) -> list[str]:
        if self.fail_enumeration:
            raise EnumerationError("enumerator unavailable")
        return list(self.channels)

    def subscribe(self, channel: str, callback: Callable[[Any], None]) -> FakeHandle:
        if channel in self.not_supported:
            raise ChannelNotSupportedError(channel, "not supported")
        if channel in self.failing:
            raise SubscriptionError(channel, "access denied")
        handle = FakeHandle(channel)
        self.handles.append(handle)
        self.callbacks[channel] = callback
        return handle

    def close(self, handle: FakeHandle) -> None:
        handle.close_calls += 1
        self.closed.append(handle)

    def render_system_values(self, event: dict[str, Any]) -> list[tuple[Any, int]]:
        if "values" not in event:
            raise EventSourceError("render failed")
        return list(event["values"])

    def format_message(self, provider_name: str, event: dict[str, Any]) -> str:
        self.format_calls.append(provider_name)
        if "message" not in event:
            raise EventSourceError("no message")
        return event["message"]

    def deliver(self, channel: str, event: dict[str, Any]) -> None:
        self.callbacks[channel](event)


class RecordingTransport:
    def __init__(self, *, fail: Exception | None = None) -> None:
        self.sent: list[tuple[Any, SyslogLine]] = []
        self.fail = fail

    def send(self, destination: Any, line: SyslogLine) -> None:
        if self.fail is not None:
            raise self.fail
        self.sent.append((destination, line))


class StaticResolver:
    def __init__(self, table: dict[str, list[str]]) -> None:
        self.table = table
        self.calls: list[str] = []

    def __call__(self, host: str) -> list[str]:
        self.calls.append(host)
        if host not in self.table:
            raise OSError(f"cannot resolve {host}")
        return list(self.table[host])


__all__ = [
    "FakeEventSource",
    "FakeHandle",
    "RecordingTransport",
    "SCENARIO_FILETIME",
    "StaticResolver",
    "rendered_values",
]
