"""Use case turning an opaque event handle into an :class:`EventRecord`.

Purpose
-------
Apply the strict rendering policy: every required system field must be
present with exactly the expected type, otherwise the event is dropped.

Contents
--------
* :data:`REQUIRED_FIELDS` – property index and type expected for each field.
* :func:`extract_record_fields` – validation over rendered values.
* :func:`create_render_event` – factory binding the policy to an event source.

System Role
-----------
Runs on the host delivery thread because the event handle is only valid for
the duration of the callback. Drops are expected noise in a high-volume
stream and are therefore logged at ``DEBUG`` only.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from evtsyslog.application.ports.event_source import EventHandle, EventSourcePort, RenderedValue
from evtsyslog.domain.errors import EventSourceError
from evtsyslog.domain.properties import SystemProperty, VariantType, filetime_to_datetime
from evtsyslog.domain.records import EventRecord

logger = logging.getLogger(__name__)

RenderCallable = Callable[[EventHandle], EventRecord | None]

REQUIRED_FIELDS: dict[str, tuple[SystemProperty, VariantType]] = {
    "provider_name": (SystemProperty.PROVIDER_NAME, VariantType.STRING),
    "time_created": (SystemProperty.TIME_CREATED, VariantType.FILE_TIME),
    "process_id": (SystemProperty.PROCESS_ID, VariantType.UINT32),
    "computer_name": (SystemProperty.COMPUTER, VariantType.STRING),
    "event_id": (SystemProperty.EVENT_ID, VariantType.UINT16),
}


def extract_record_fields(values: Sequence[RenderedValue]) -> dict[str, Any] | None:
    """Return the required fields from rendered ``values`` or ``None`` to drop.

    Examples
    --------
    >>> extract_record_fields([("x", 1)] * 5) is None
    True
    """

    if len(values) <= SystemProperty.USER_ID:
        return None
    fields: dict[str, Any] = {}
    for name, (index, expected) in REQUIRED_FIELDS.items():
        value, variant_type = values[index]
        if variant_type != expected:
            return None
        fields[name] = value
    return fields


def create_render_event(source: EventSourcePort) -> RenderCallable:
    """Build the renderer bound to ``source``.

    The returned callable never raises: any failure yields ``None``.
    """

    def render(event: EventHandle) -> EventRecord | None:
        try:
            values = source.render_system_values(event)
        except EventSourceError as exc:
            logger.debug("Dropping event: render failed: %s", exc)
            return None

        fields = extract_record_fields(values)
        if fields is None:
            logger.debug("Dropping event: missing or mistyped system properties")
            return None

        try:
            timestamp = filetime_to_datetime(fields["time_created"])
        except (TypeError, ValueError, OverflowError) as exc:
            logger.debug("Dropping event: bad timestamp: %s", exc)
            return None

        provider_name = fields["provider_name"]
        try:
            message = source.format_message(provider_name, event)
        except EventSourceError as exc:
            logger.debug("Dropping event from %s: message formatting failed: %s", provider_name, exc)
            return None

        try:
            return EventRecord(
                timestamp=timestamp,
                provider_name=provider_name,
                computer_name=fields["computer_name"],
                process_id=fields["process_id"],
                event_id=fields["event_id"],
                message=message,
            )
        except (TypeError, ValueError) as exc:
            logger.debug("Dropping event from %s: %s", provider_name, exc)
            return None

    return render


__all__ = ["REQUIRED_FIELDS", "RenderCallable", "create_render_event", "extract_record_fields"]
