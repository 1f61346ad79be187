# tracert/brain/controller.py
import logging
from typing import Callable, Optional

from tracert.brain.hop import HopProbe
from tracert.brain.state import HopRecord, RunState
from tracert.resolver import resolve_destination

logger = logging.getLogger(__name__)


class TracerouteController:
    def __init__(self, transport, settings, resolver: Callable[[str], str] = resolve_destination):
        self.transport = transport
        self.s = settings
        self.resolver = resolver

    def resolve(self, dest: str) -> str:
        # ResolutionFailure propagates: nothing is probed for an unknown host
        return self.resolver(dest)

    def trace(self, dest: str, address: str,
              on_hop: Optional[Callable[[HopRecord], None]] = None) -> RunState:
        run = RunState(target=dest, address=address, max_hops=self.s.max_hops)
        hop_probe = HopProbe(self.transport, self.s)

        while run.ttl <= run.max_hops and not run.dest_reached:
            record = hop_probe.run(address, run.ttl)
            run.hops.append(record)
            run.probes_used += len(record.results)

            if on_hop is not None:
                on_hop(record)

            # only checked once the whole hop has been probed
            if record.reached:
                run.dest_reached = True
                run.stop_reason = "dest_reached"
                logger.info("destination %s reached at ttl=%d", address, run.ttl)
                break
            run.ttl += 1

        if run.stop_reason is None:
            run.stop_reason = "max_hops"
        return run

    def run(self, dest: str, on_hop: Optional[Callable[[HopRecord], None]] = None) -> RunState:
        return self.trace(dest, self.resolve(dest), on_hop=on_hop)
