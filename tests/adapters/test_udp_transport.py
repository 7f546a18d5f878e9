from __future__ import annotations

import socket
from collections.abc import Iterator

import pytest

from evtsyslog.adapters.transport import UdpTransport
from evtsyslog.domain.destination import Destination
from evtsyslog.domain.errors import TransportError
from evtsyslog.domain.records import SyslogLine
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.fixture
def receiver() -> Iterator[socket.socket]:
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5.0)
    try:
        yield sock
    finally:
        sock.close()


def test_each_send_is_one_datagram(receiver: socket.socket) -> None:
    destination = Destination("127.0.0.1", receiver.getsockname()[1])
    transport = UdpTransport()

    transport.send(destination, SyslogLine("<3>1 first"))
    transport.send(destination, SyslogLine("<3>1 second"))

    assert receiver.recvfrom(4096)[0] == b"<3>1 first"
    assert receiver.recvfrom(4096)[0] == b"<3>1 second"


def test_payload_is_capped(receiver: socket.socket) -> None:
    destination = Destination("127.0.0.1", receiver.getsockname()[1])

    UdpTransport().send(destination, SyslogLine("x" * 9000))

    assert len(receiver.recvfrom(65535)[0]) == 2047


def test_socket_is_closed_after_every_send() -> None:
    sockets: list[FakeSocket] = []

    class FakeSocket:
        def __init__(self) -> None:
            self.closed = False
            self.sent: list[tuple[bytes, tuple[str, int]]] = []

        def __enter__(self) -> "FakeSocket":
            return self

        def __exit__(self, *exc: object) -> None:
            self.closed = True

        def sendto(self, payload: bytes, address: tuple[str, int]) -> int:
            self.sent.append((payload, address))
            return len(payload)

    def factory() -> FakeSocket:
        sockets.append(FakeSocket())
        return sockets[-1]

    transport = UdpTransport(socket_factory=factory)  # type: ignore[arg-type]
    transport.send(Destination("10.0.0.5", 5140), SyslogLine("a"))
    transport.send(Destination("10.0.0.5", 5140), SyslogLine("b"))

    assert [sock.closed for sock in sockets] == [True, True]
    assert sockets[0].sent == [(b"a", ("10.0.0.5", 5140))]


def test_os_errors_become_transport_errors() -> None:
    def factory() -> socket.socket:
        raise OSError("too many open files")

    with pytest.raises(TransportError, match="too many open files"):
        UdpTransport(socket_factory=factory).send(Destination("10.0.0.5", 514), SyslogLine("x"))
