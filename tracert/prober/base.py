# tracert/prober/base.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from tracert.schemas import ReplyStatus


@dataclass(frozen=True)
class TransportReply:
    status: ReplyStatus            # "received" | "timeout" | "error"
    data: bytes = b""
    address: Optional[str] = None
    rtt_ms: Optional[float] = None
    error: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.data)


class ProbeTransport(ABC):
    @abstractmethod
    def probe_once(self, packet: bytes, dest: str, ttl: int, timeout_s: float) -> TransportReply:
        """Send one ICMP packet with the given TTL and wait for a single reply."""
        raise NotImplementedError
