"""Port for serialising event records into syslog lines."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from evtsyslog.domain.records import EventRecord, SyslogLine


@runtime_checkable
class FormatterPort(Protocol):
    """Turn an :class:`EventRecord` into a :class:`SyslogLine`."""

    def format(self, record: EventRecord) -> SyslogLine:
        """Return the wire representation of ``record``."""


__all__ = ["FormatterPort"]
