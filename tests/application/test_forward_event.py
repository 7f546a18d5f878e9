from __future__ import annotations

from typing import Any, Callable

from evtsyslog.adapters.syslog_format import SyslogFormatter
from evtsyslog.application.use_cases.forward_event import create_deliver_event, create_send_record
from evtsyslog.application.use_cases.render_event import create_render_event
from evtsyslog.domain.destination import Destination
from evtsyslog.domain.errors import TransportError
from evtsyslog.domain.records import EventRecord
from tests.fakes import FakeEventSource, RecordingTransport
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]

DESTINATION = Destination("10.0.0.5", 5140)


def test_send_record_emits_one_formatted_datagram(record_factory: Callable[..., EventRecord], recording_transport: RecordingTransport) -> None:
    send = create_send_record(formatter=SyslogFormatter(), transport=recording_transport, destination=DESTINATION)

    assert send(record_factory()) is True

    assert len(recording_transport.sent) == 1
    destination, line = recording_transport.sent[0]
    assert destination is DESTINATION
    assert line.text == "<3>1 2024-03-01T12:00:00.500Z HOST1 Kernel-General 16 1234 - Process 1234 terminated"


def test_transport_errors_are_swallowed_and_not_retried(record_factory: Callable[..., EventRecord]) -> None:
    attempts: list[int] = []

    class Failing:
        def send(self, destination: Destination, line: Any) -> None:
            attempts.append(1)
            raise TransportError("network unreachable")

    send = create_send_record(formatter=SyslogFormatter(), transport=Failing(), destination=DESTINATION)

    assert send(record_factory()) is False
    assert attempts == [1]


def test_deliver_pipeline_renders_formats_and_sends(
    fake_source: FakeEventSource, event_factory: Callable[..., dict[str, Any]], recording_transport: RecordingTransport
) -> None:
    send = create_send_record(formatter=SyslogFormatter(), transport=recording_transport, destination=DESTINATION)
    deliver = create_deliver_event(render=create_render_event(fake_source), dispatch=send)

    deliver(event_factory())

    assert [line.payload for _, line in recording_transport.sent] == [
        b"<3>1 2024-03-01T12:00:00.500Z HOST1 Kernel-General 16 1234 - Process 1234 terminated"
    ]


def test_dropped_events_produce_no_datagram(fake_source: FakeEventSource, recording_transport: RecordingTransport) -> None:
    send = create_send_record(formatter=SyslogFormatter(), transport=recording_transport, destination=DESTINATION)
    deliver = create_deliver_event(render=create_render_event(fake_source), dispatch=send)

    deliver({"message": "no values"})

    assert recording_transport.sent == []


def test_unexpected_errors_never_escape_the_callback(record_factory: Callable[..., EventRecord]) -> None:
    def dispatch(record: EventRecord) -> None:
        raise RuntimeError("worker exploded")

    deliver = create_deliver_event(render=lambda event: record_factory(), dispatch=dispatch)

    deliver(object())
