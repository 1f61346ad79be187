# tracert/config.py
import os
from dataclasses import dataclass, field

# rtt column is four digits wide
MAX_TIMEOUT_MS = 9999


def _default_identifier() -> int:
    return os.getpid() & 0xFFFF


@dataclass
class Settings:
    max_hops: int = 30
    timeout_ms: int = 3000
    probes_per_hop: int = 3
    # echo identifier shared by every probe of a run
    identifier: int = field(default_factory=_default_identifier)
    recv_buffer: int = 1500
    resolve_names: bool = True

    def __post_init__(self):
        if not 1 <= self.max_hops <= 255:
            raise ValueError(f"max_hops must be in 1..255, got {self.max_hops}")
        if self.probes_per_hop < 1:
            raise ValueError(f"probes_per_hop must be >= 1, got {self.probes_per_hop}")
        # highest sequence is max_hops * probes_per_hop + probes_per_hop - 1
        if (self.max_hops + 1) * self.probes_per_hop - 1 > 0xFFFF:
            raise ValueError(
                f"{self.max_hops} hops x {self.probes_per_hop} probes overflows 16-bit sequence numbers")
        if not 0 < self.timeout_ms <= MAX_TIMEOUT_MS:
            raise ValueError(f"timeout_ms must be in 1..{MAX_TIMEOUT_MS}, got {self.timeout_ms}")
        if not 0 <= self.identifier <= 0xFFFF:
            raise ValueError(f"identifier must fit in 16 bits, got {self.identifier}")
        if self.recv_buffer < 28:
            raise ValueError(f"recv_buffer too small to hold a reply: {self.recv_buffer}")

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0
