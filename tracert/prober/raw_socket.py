# tracert/prober/raw_socket.py
import logging
import socket
import time

from tracert.prober.base import ProbeTransport, TransportReply

logger = logging.getLogger(__name__)


class RawSocketTransport(ProbeTransport):
    """
    One raw ICMP socket per probe: set TTL, send, block for one datagram, close.
    Needs root (or CAP_NET_RAW) on most systems; a refused socket becomes an
    "error" reply rather than an exception.
    """

    def __init__(self, recv_buffer: int = 1500):
        self.recv_buffer = recv_buffer

    def probe_once(self, packet: bytes, dest: str, ttl: int, timeout_s: float) -> TransportReply:
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP) as sock:
                sock.setsockopt(socket.IPPROTO_IP, socket.IP_TTL, ttl)
                sock.settimeout(timeout_s)

                start = time.perf_counter()
                sock.sendto(packet, (dest, 0))
                data, addr = sock.recvfrom(self.recv_buffer)
                rtt_ms = (time.perf_counter() - start) * 1000.0
        except socket.timeout:
            return TransportReply(status="timeout")
        except OSError as e:
            logger.warning("probe to %s (ttl=%d) failed: %s", dest, ttl, e)
            return TransportReply(status="error", error=str(e))

        return TransportReply(status="received", data=data, address=addr[0], rtt_ms=rtt_ms)
