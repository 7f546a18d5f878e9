"""Use cases wiring render → format → send for each delivered event.

Purpose
-------
Provide the per-event callback handed to every subscription. The callback is
self-contained: the only state it reads is the immutable destination captured
at construction.

Contents
--------
* :func:`create_send_record` – format one record and ship it.
* :func:`create_deliver_event` – render on the delivery thread, then dispatch.

System Role
-----------
Errors never cross from here into the lifecycle controller. Transport errors
are logged at ``DEBUG`` only: in service mode warnings end up in the Windows
Event Log, which this forwarder is subscribed to.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from evtsyslog.application.ports.event_source import EventHandle
from evtsyslog.application.ports.formatter import FormatterPort
from evtsyslog.application.ports.transport import TransportPort
from evtsyslog.domain.destination import Destination
from evtsyslog.domain.errors import TransportError
from evtsyslog.domain.records import EventRecord

from .render_event import RenderCallable

logger = logging.getLogger(__name__)

SendCallable = Callable[[EventRecord], bool]
DeliverCallable = Callable[[EventHandle], None]


def create_send_record(
    *,
    formatter: FormatterPort,
    transport: TransportPort,
    destination: Destination,
) -> SendCallable:
    """Return a callable formatting ``record`` and sending one datagram.

    The callable returns ``True`` when the datagram left the host and
    ``False`` when the send failed; it never retries.
    """

    def send_record(record: EventRecord) -> bool:
        line = formatter.format(record)
        try:
            transport.send(destination, line)
        except TransportError as exc:
            logger.debug("Sending event %s/%s to %s failed: %s", record.provider_name, record.event_id, destination, exc)
            return False
        return True

    return send_record


def create_deliver_event(
    *,
    render: RenderCallable,
    dispatch: Callable[[EventRecord], object],
) -> DeliverCallable:
    """Return the subscription callback.

    Parameters
    ----------
    render:
        Renderer produced by :func:`create_render_event`; ``None`` means drop.
    dispatch:
        Either the send callable itself (inline mode) or a queue ``put``.
    """

    def deliver(event: EventHandle) -> None:
        try:
            record = render(event)
            if record is None:
                return
            dispatch(record)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Event delivery failed; event dropped", exc_info=exc)

    return deliver


__all__ = ["DeliverCallable", "SendCallable", "create_deliver_event", "create_send_record"]
