"""Shared fixtures: fake event source, rendered-value builder, and records."""

from __future__ import annotations

import io
import sys
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest
from rich.console import Console

from evtsyslog.domain.records import EventRecord
from tests.fakes import FakeEventSource, RecordingTransport, rendered_values


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if sys.platform == "win32":
        return
    skip = pytest.mark.skip(reason="requires Windows")
    for item in items:
        if "windows_only" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def fake_source() -> FakeEventSource:
    return FakeEventSource(["Application", "System", "Security"])


@pytest.fixture
def source_factory() -> Callable[..., FakeEventSource]:
    return FakeEventSource


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def event_factory() -> Callable[..., dict[str, Any]]:
    def _make(message: str | None = "Process 1234 terminated", **fields: Any) -> dict[str, Any]:
        event: dict[str, Any] = {"values": rendered_values(**fields)}
        if message is not None:
            event["message"] = message
        return event

    return _make


@pytest.fixture
def record_factory() -> Callable[..., EventRecord]:
    def _make(**overrides: Any) -> EventRecord:
        payload: dict[str, Any] = {
            "timestamp": datetime(2024, 3, 1, 12, 0, 0, 500000, tzinfo=timezone.utc),
            "provider_name": "Kernel-General",
            "computer_name": "HOST1",
            "process_id": 1234,
            "event_id": 16,
            "message": "Process 1234 terminated",
        }
        payload.update(overrides)
        return EventRecord(**payload)

    return _make


@pytest.fixture
def record_console() -> Console:
    return Console(file=io.StringIO(), record=True, width=120, color_system=None)
