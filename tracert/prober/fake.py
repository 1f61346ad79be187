# tracert/prober/fake.py
import struct
from collections import deque

from tracert.codec.packet import echo_reply_buffer, time_exceeded_buffer
from tracert.prober.base import ProbeTransport, TransportReply


class ScriptedTransport(ProbeTransport):
    """
    script: dict[ttl] -> list of step dicts, consumed one per probe at that ttl.
    Step "kind" is one of:
      "time_exceeded" / "echo_reply": build a matching response from hop_ip
      "raw": return step["data"] verbatim from hop_ip
    hop_ip defaults to 0.0.0.0 so a received step always has a responder.
      "timeout" / "error"
    If no scripted step is left, the probe times out.
    """

    def __init__(self, script=None):
        self.script = {}
        self.calls = []   # (ttl, identifier, sequence) per probe, in order
        if script:
            for k, v in script.items():
                self.script[k] = deque(v)

    def probe_once(self, packet: bytes, dest: str, ttl: int, timeout_s: float) -> TransportReply:
        identifier, sequence = struct.unpack_from("!HH", packet, 4)
        self.calls.append((ttl, identifier, sequence))

        dq = self.script.get(ttl)
        if not dq:
            return TransportReply(status="timeout")
        step = dq.popleft()
        kind = step.get("kind", "timeout")
        hop_ip = step.get("hop_ip", "0.0.0.0")
        rtt_ms = step.get("rtt_ms", 1.0)

        if kind == "time_exceeded":
            data = time_exceeded_buffer(identifier, sequence, src=hop_ip)
        elif kind == "echo_reply":
            data = echo_reply_buffer(identifier, sequence, src=hop_ip)
        elif kind == "raw":
            data = step["data"]
        elif kind == "error":
            return TransportReply(status="error", error=step.get("error", "scripted error"))
        else:
            return TransportReply(status="timeout")
        return TransportReply(status="received", data=data, address=hop_ip, rtt_ms=rtt_ms)
