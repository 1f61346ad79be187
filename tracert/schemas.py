# tracert/schemas.py
from dataclasses import dataclass
from typing import Literal, Union

ProbeStatus = Literal["ok", "timeout", "error", "invalid"]
ReplyStatus = Literal["received", "timeout", "error"]
StopReason = Literal["dest_reached", "max_hops"]


@dataclass(frozen=True)
class EchoReply:
    identifier: int
    sequence: int


@dataclass(frozen=True)
class TimeExceeded:
    # identity of the probe quoted back inside the ICMP error
    embedded_identifier: int
    embedded_sequence: int


@dataclass(frozen=True)
class Unrecognized:
    reason: str = ""


Classification = Union[EchoReply, TimeExceeded, Unrecognized]
