# tracert/report.py
from typing import Callable, Optional

from tracert.brain.state import HopRecord, ProbeResult
from tracert.resolver import reverse_lookup

NO_INFO_SYM = "*"


def format_rtt(result: ProbeResult) -> str:
    if result.rtt_ms is None:
        return f"{NO_INFO_SYM:>4}   "
    return f"{min(int(result.rtt_ms), 9999):4d} ms"


class Reporter:
    """Turns hop records into console lines, resolving responder names on the way."""

    def __init__(self, resolve_names: bool = True,
                 lookup: Callable[[str], Optional[str]] = reverse_lookup,
                 write: Callable[[str], None] = print):
        self.resolve_names = resolve_names
        self.lookup = lookup
        self.write = write
        self._names: dict[str, Optional[str]] = {}

    def describe(self, address: str) -> str:
        if not self.resolve_names:
            return address
        if address not in self._names:
            self._names[address] = self.lookup(address)
        name = self._names[address]
        if name and name != address:
            return f"{name} [{address}]"
        return address

    def format_hop(self, record: HopRecord) -> str:
        times = "  ".join(format_rtt(r) for r in record.results)
        if record.responders:
            who = " ".join(self.describe(a) for a in record.responders)
        else:
            who = NO_INFO_SYM
        return f"{record.ttl:2d}  {times}    {who}"

    def header(self, dest: str, address: str, max_hops: int) -> None:
        self.write(f"Tracing route to {dest} [{address}]")
        self.write(f"over a maximum of {max_hops} hops:")
        self.write("")

    def hop(self, record: HopRecord) -> None:
        self.write(self.format_hop(record))

    def footer(self) -> None:
        self.write("")
        self.write("Trace complete.")
