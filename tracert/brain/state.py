# tracert/brain/state.py
from dataclasses import dataclass, field
from typing import Optional

from tracert.schemas import ProbeStatus, StopReason


@dataclass(frozen=True)
class ProbeResult:
    status: ProbeStatus = "timeout"
    rtt_ms: Optional[float] = None
    address: Optional[str] = None

    @property
    def answered(self) -> bool:
        return self.address is not None


@dataclass
class HopRecord:
    ttl: int
    results: list[ProbeResult] = field(default_factory=list)
    # distinct responders, first-seen order
    responders: list[str] = field(default_factory=list)
    reached: bool = False

    def add(self, result: ProbeResult) -> None:
        self.results.append(result)
        if result.address is not None and result.address not in self.responders:
            self.responders.append(result.address)

    def to_dict(self) -> dict:
        return {
            "ttl": self.ttl,
            "rtt_ms": [r.rtt_ms for r in self.results],
            "status": [r.status for r in self.results],
            "responders": list(self.responders),
            "reached": self.reached,
        }


@dataclass
class RunState:
    target: str
    address: str
    max_hops: int
    ttl: int = 1
    probes_used: int = 0
    stop_reason: StopReason | None = None
    dest_reached: bool = False
    hops: list[HopRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "address": self.address,
            "max_hops": self.max_hops,
            "probes_used": self.probes_used,
            "stop_reason": self.stop_reason,
            "dest_reached": self.dest_reached,
            "hops": [h.to_dict() for h in self.hops],
        }
