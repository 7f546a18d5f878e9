"""Host name resolution returning IPv4 addresses in resolver order."""

from __future__ import annotations

import socket
from collections.abc import Callable, Sequence
from typing import Any

from evtsyslog.application.ports.settings import ResolverPort

AddrInfo = Callable[..., list[tuple[Any, ...]]]


class SystemResolver(ResolverPort):
    """Resolve names through :func:`socket.getaddrinfo`, keeping only ``AF_INET`` results.

    Examples
    --------
    >>> fake = lambda host, port, family: [
    ...     (socket.AF_INET6, 2, 17, '', ('::1', 0, 0, 0)),
    ...     (socket.AF_INET, 2, 17, '', ('10.0.0.5', 0)),
    ...     (socket.AF_INET, 2, 17, '', ('10.0.0.6', 0)),
    ... ]
    >>> SystemResolver(getaddrinfo=fake)("syslog.example.com")
    ['10.0.0.5', '10.0.0.6']
    """

    def __init__(self, *, getaddrinfo: AddrInfo | None = None) -> None:
        self._getaddrinfo = getaddrinfo or socket.getaddrinfo

    def __call__(self, host: str) -> Sequence[str]:
        """Return every IPv4 address of ``host``; raises :class:`OSError` when resolution fails."""
        results = self._getaddrinfo(host, None, socket.AF_UNSPEC)
        addresses: list[str] = []
        for family, _type, _proto, _canon, sockaddr in results:
            if family != socket.AF_INET:
                continue
            address = sockaddr[0]
            if address not in addresses:
                addresses.append(address)
        return addresses


__all__ = ["SystemResolver"]
