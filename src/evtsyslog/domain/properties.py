"""Constants describing rendered system properties of a host event.

Purpose
-------
Mirror the ``EVT_SYSTEM_PROPERTY_ID`` and ``EVT_VARIANT_TYPE`` enumerations of
the Windows Event Log API so the renderer can validate rendered values without
importing platform modules.

Contents
--------
* :class:`SystemProperty` – index of each value in a system render.
* :class:`VariantType` – type tag attached to every rendered value.
* :func:`filetime_to_datetime` – FILETIME tick conversion to UTC.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import IntEnum


class SystemProperty(IntEnum):
    """Positions of the values produced by a system-context render."""

    PROVIDER_NAME = 0
    PROVIDER_GUID = 1
    EVENT_ID = 2
    QUALIFIERS = 3
    LEVEL = 4
    TASK = 5
    OPCODE = 6
    KEYWORDS = 7
    TIME_CREATED = 8
    EVENT_RECORD_ID = 9
    ACTIVITY_ID = 10
    RELATED_ACTIVITY_ID = 11
    PROCESS_ID = 12
    THREAD_ID = 13
    CHANNEL = 14
    COMPUTER = 15
    USER_ID = 16
    VERSION = 17


class VariantType(IntEnum):
    """Type tags of rendered event values."""

    NULL = 0
    STRING = 1
    ANSI_STRING = 2
    SBYTE = 3
    BYTE = 4
    INT16 = 5
    UINT16 = 6
    INT32 = 7
    UINT32 = 8
    INT64 = 9
    UINT64 = 10
    SINGLE = 11
    DOUBLE = 12
    BOOLEAN = 13
    BINARY = 14
    GUID = 15
    SIZE_T = 16
    FILE_TIME = 17
    SYS_TIME = 18
    SID = 19
    HEX_INT32 = 20
    HEX_INT64 = 21


_FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)


def filetime_to_datetime(value: int | datetime) -> datetime:
    """Convert a FILETIME value to a UTC datetime truncated to milliseconds.

    ``value`` is either the raw count of 100-nanosecond ticks since 1601 or a
    datetime already decoded by the platform binding; naive datetimes are
    taken as UTC.

    Examples
    --------
    >>> filetime_to_datetime(133537680005001234).isoformat()
    '2024-03-01T12:00:00.500000+00:00'
    >>> filetime_to_datetime(datetime(2024, 3, 1, 12, 0, 0, 500999)).isoformat()
    '2024-03-01T12:00:00.500000+00:00'
    """
    if isinstance(value, datetime):
        moment = value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
        moment = moment.astimezone(timezone.utc)
    elif isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ValueError(f"FILETIME must not be negative: {value}")
        moment = _FILETIME_EPOCH + timedelta(microseconds=value // 10)
    else:
        raise TypeError(f"unsupported FILETIME value: {value!r}")
    return moment.replace(microsecond=(moment.microsecond // 1000) * 1000)


__all__ = ["SystemProperty", "VariantType", "filetime_to_datetime"]
