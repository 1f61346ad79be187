# tracert/brain/hop.py
import logging

from tracert.brain.state import HopRecord, ProbeResult
from tracert.codec.packet import decode_and_validate, encode_echo_request, probe_sequence
from tracert.prober.base import ProbeTransport, TransportReply

logger = logging.getLogger(__name__)


class HopProbe:
    """Runs every probe for a single TTL, strictly one after another."""

    def __init__(self, transport: ProbeTransport, settings):
        self.transport = transport
        self.s = settings

    def run(self, dest_addr: str, ttl: int) -> HopRecord:
        record = HopRecord(ttl=ttl)

        for index in range(self.s.probes_per_hop):
            seq = probe_sequence(ttl, self.s.probes_per_hop, index)
            packet = encode_echo_request(self.s.identifier, seq)
            logger.debug("ttl=%d probe=%d seq=%d -> %s", ttl, index, seq, dest_addr)

            reply = self.transport.probe_once(packet, dest_addr, ttl, self.s.timeout_s)
            result = self._evaluate(reply, seq)
            record.add(result)

            if result.address is not None and result.address == dest_addr:
                record.reached = True

        logger.info("ttl=%d done: %s", ttl, ", ".join(record.responders) or "no replies")
        return record

    def _evaluate(self, reply: TransportReply, seq: int) -> ProbeResult:
        if reply.status == "timeout":
            return ProbeResult(status="timeout")
        if reply.status == "error":
            return ProbeResult(status="error")

        if not decode_and_validate(reply.data, reply.length, self.s.identifier, seq):
            logger.debug("discarding reply from %s: does not match seq=%d", reply.address, seq)
            return ProbeResult(status="invalid")
        return ProbeResult(status="ok", rtt_ms=reply.rtt_ms, address=reply.address)
