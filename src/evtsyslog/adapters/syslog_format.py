"""RFC 5424 style formatter for event records.

Why
---
The collector expects one self-contained line per datagram. Building the
header in one place keeps the wire format, its documentation, and the tests in
sync.

Contents
--------
* :data:`SYSLOG_PRI` – fixed priority value (facility/severity are not mapped).
* :func:`format_timestamp` – zero-padded UTC timestamp with milliseconds.
* :class:`SyslogFormatter` – :class:`FormatterPort` implementation.

Alignment Notes
---------------
Text fields are emitted verbatim. A message containing line breaks is sent as
is and will span several lines at the collector.
"""

from __future__ import annotations

from datetime import datetime, timezone

from evtsyslog.application.ports.formatter import FormatterPort
from evtsyslog.domain.records import EventRecord, SyslogLine

SYSLOG_PRI = 3
SYSLOG_VERSION = 1
NIL_VALUE = "-"


def format_timestamp(ts: datetime) -> str:
    """Render ``ts`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Examples
    --------
    >>> format_timestamp(datetime(2024, 3, 1, 12, 0, 0, 500000, tzinfo=timezone.utc))
    '2024-03-01T12:00:00.500Z'
    >>> format_timestamp(datetime(9, 1, 2, 3, 4, 5, 6000, tzinfo=timezone.utc))
    '0009-01-02T03:04:05.006Z'
    """
    utc = ts.astimezone(timezone.utc)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}.{utc.microsecond // 1000:03d}Z"
    )


class SyslogFormatter(FormatterPort):
    """Serialise :class:`EventRecord` instances into syslog lines.

    Examples
    --------
    >>> record = EventRecord(
    ...     datetime(2024, 3, 1, 12, 0, 0, 500000, tzinfo=timezone.utc),
    ...     'Kernel-General', 'HOST1', 1234, 16, 'Process 1234 terminated',
    ... )
    >>> SyslogFormatter().format(record).text
    '<3>1 2024-03-01T12:00:00.500Z HOST1 Kernel-General 16 1234 - Process 1234 terminated'
    """

    def __init__(self, *, pri: int = SYSLOG_PRI) -> None:
        self._pri = pri

    def format(self, record: EventRecord) -> SyslogLine:
        """Return the syslog line for ``record``; the payload is capped on encoding."""

        header = " ".join(
            (
                f"<{self._pri}>{SYSLOG_VERSION}",
                format_timestamp(record.timestamp),
                record.computer_name,
                record.provider_name,
                str(record.event_id),
                str(record.process_id),
                NIL_VALUE,
            )
        )
        return SyslogLine(f"{header} {record.message}")


__all__ = ["NIL_VALUE", "SYSLOG_PRI", "SYSLOG_VERSION", "SyslogFormatter", "format_timestamp"]
