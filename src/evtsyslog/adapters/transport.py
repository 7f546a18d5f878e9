"""UDP transport shipping one syslog line per datagram.

Purpose
-------
Best-effort, at-most-once delivery: every send opens a transient datagram
socket, performs a single ``sendto``, and closes the socket again. Nothing is
read back and nothing is retried.
"""

from __future__ import annotations

import socket
from collections.abc import Callable

from evtsyslog.application.ports.transport import TransportPort
from evtsyslog.domain.destination import Destination
from evtsyslog.domain.errors import TransportError
from evtsyslog.domain.records import SyslogLine

SocketFactory = Callable[[], socket.socket]


def _default_socket() -> socket.socket:
    return socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)


class UdpTransport(TransportPort):
    """Send syslog lines as UDP datagrams."""

    def __init__(self, *, socket_factory: SocketFactory | None = None) -> None:
        """Initialise the transport with an optional socket factory (tests inject fakes)."""
        self._socket_factory = socket_factory or _default_socket

    def send(self, destination: Destination, line: SyslogLine) -> None:
        """Send ``line`` to ``destination`` as a single datagram."""
        try:
            with self._socket_factory() as sock:
                sock.sendto(line.payload, destination.as_sockaddr())
        except OSError as exc:
            raise TransportError(f"sendto {destination} failed: {exc}") from exc


__all__ = ["SocketFactory", "UdpTransport"]
