"""Syslog destination value object and port parsing policy.

Purpose
-------
Represent the resolved remote collector as an immutable value computed once
at startup and handed to every send by closure.

Contents
--------
* :data:`DEFAULT_SYSLOG_PORT` – the well-known syslog UDP port.
* :func:`parse_port` – lenient port parsing with default fallback.
* :class:`Destination` – frozen ``(address, port)`` pair.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

DEFAULT_SYSLOG_PORT = 514

_MAX_PORT = 65535


def parse_port(raw: str | None) -> tuple[int, bool]:
    """Parse ``raw`` as a UDP port, falling back to :data:`DEFAULT_SYSLOG_PORT`.

    Returns a ``(port, valid)`` pair. ``valid`` is ``False`` whenever the
    fallback was applied so callers can report the degraded configuration.

    Examples
    --------
    >>> parse_port("5140")
    (5140, True)
    >>> parse_port(" 514 ")
    (514, True)
    >>> parse_port("0")
    (514, False)
    >>> parse_port("70000")
    (514, False)
    >>> parse_port("-1")
    (514, False)
    >>> parse_port(None)
    (514, False)
    >>> parse_port("9" * 5000)
    (514, False)
    """
    if raw is None:
        return DEFAULT_SYSLOG_PORT, False
    text = raw.strip()
    if not text.isascii() or not text.isdigit():
        return DEFAULT_SYSLOG_PORT, False
    digits = text.lstrip("0")
    if len(digits) > len(str(_MAX_PORT)):
        return DEFAULT_SYSLOG_PORT, False
    value = int(digits or "0")
    if value == 0 or value > _MAX_PORT:
        return DEFAULT_SYSLOG_PORT, False
    return value, True


@dataclass(slots=True, frozen=True)
class Destination:
    """Resolved IPv4 address and port of the remote syslog collector.

    Examples
    --------
    >>> Destination("10.0.0.5", 5140).as_sockaddr()
    ('10.0.0.5', 5140)
    >>> Destination("::1", 514)
    Traceback (most recent call last):
    ...
    ValueError: destination address must be IPv4: '::1'
    """

    address: str
    port: int = DEFAULT_SYSLOG_PORT

    def __post_init__(self) -> None:
        try:
            ipaddress.IPv4Address(self.address)
        except ValueError as exc:
            raise ValueError(f"destination address must be IPv4: {self.address!r}") from exc
        if not 1 <= self.port <= _MAX_PORT:
            raise ValueError(f"destination port out of range: {self.port}")

    def as_sockaddr(self) -> tuple[str, int]:
        """Return the ``(host, port)`` tuple accepted by :meth:`socket.sendto`."""

        return self.address, self.port

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


__all__ = ["DEFAULT_SYSLOG_PORT", "Destination", "parse_port"]
