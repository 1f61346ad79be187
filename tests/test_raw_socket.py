# tests/test_raw_socket.py
import socket

import pytest

from tracert.codec.packet import echo_reply_buffer, encode_echo_request
from tracert.prober import raw_socket
from tracert.prober.raw_socket import RawSocketTransport


class FakeSocket:
    instances = []

    def __init__(self, *args, recv=None, recv_exc=None):
        self.args = args
        self.opts = {}
        self.timeout = None
        self.sent = []
        self.closed = False
        self._recv = recv
        self._recv_exc = recv_exc
        FakeSocket.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def setsockopt(self, level, name, value):
        self.opts[(level, name)] = value

    def settimeout(self, value):
        self.timeout = value

    def sendto(self, data, addr):
        self.sent.append((data, addr))

    def recvfrom(self, size):
        if self._recv_exc is not None:
            raise self._recv_exc
        return self._recv[:size], ("10.1.1.1", 0)


@pytest.fixture(autouse=True)
def _reset():
    FakeSocket.instances = []


def _patch(monkeypatch, **kw):
    monkeypatch.setattr(raw_socket.socket, "socket", lambda *a: FakeSocket(*a, **kw))


def test_received_reply(monkeypatch):
    data = echo_reply_buffer(1, 2)
    _patch(monkeypatch, recv=data)
    packet = encode_echo_request(1, 2)

    reply = RawSocketTransport().probe_once(packet, "10.1.1.1", 7, 0.5)

    assert reply.status == "received"
    assert reply.data == data
    assert reply.length == len(data)
    assert reply.address == "10.1.1.1"
    assert reply.rtt_ms is not None and reply.rtt_ms >= 0

    sock = FakeSocket.instances[0]
    assert sock.args == (socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
    assert sock.opts[(socket.IPPROTO_IP, socket.IP_TTL)] == 7
    assert sock.timeout == 0.5
    assert sock.sent == [(packet, ("10.1.1.1", 0))]
    assert sock.closed


def test_timeout_is_a_reply_not_an_exception(monkeypatch):
    _patch(monkeypatch, recv_exc=socket.timeout("timed out"))
    reply = RawSocketTransport().probe_once(b"x" * 8, "10.1.1.1", 1, 0.01)
    assert reply.status == "timeout"
    assert reply.address is None and reply.rtt_ms is None
    assert FakeSocket.instances[0].closed


def test_socket_error_is_contained(monkeypatch):
    _patch(monkeypatch, recv_exc=OSError(113, "No route to host"))
    reply = RawSocketTransport().probe_once(b"x" * 8, "10.1.1.1", 1, 0.01)
    assert reply.status == "error"
    assert "No route to host" in reply.error
    assert FakeSocket.instances[0].closed


def test_permission_error_on_open(monkeypatch):
    def refuse(*a):
        raise PermissionError(1, "Operation not permitted")

    monkeypatch.setattr(raw_socket.socket, "socket", refuse)
    reply = RawSocketTransport().probe_once(b"x" * 8, "10.1.1.1", 1, 0.01)
    assert reply.status == "error"


def test_recv_buffer_size_is_honoured(monkeypatch):
    _patch(monkeypatch, recv=bytes(3000))
    reply = RawSocketTransport(recv_buffer=1500).probe_once(b"x" * 8, "10.1.1.1", 1, 0.01)
    assert reply.length == 1500
