# tools/run_trace.py
# Usage examples:
#   sudo python3 -m tools.run_trace example.com
#   sudo python3 -m tools.run_trace 8.8.8.8 --max-hops 20 --timeout-ms 1000 --probes 3
#   python3 -m tools.run_trace fake --json

import argparse
import json
import logging

from tracert.brain.controller import TracerouteController
from tracert.config import Settings
from tracert.errors import ResolutionFailure
from tracert.log import setup_logging
from tracert.report import Reporter

logger = logging.getLogger(__name__)

FAKE_TARGET = "192.0.2.1"


def fake_script(target: str = FAKE_TARGET, probes: int = 3) -> dict:
    script = {}
    for ttl in range(1, 4):
        script[ttl] = [{"kind": "time_exceeded", "hop_ip": f"10.0.0.{ttl}", "rtt_ms": 10.0 + ttl}
                       for _ in range(probes)]
    script[2][-1] = {"kind": "timeout"}
    script[4] = [{"kind": "echo_reply", "hop_ip": target, "rtt_ms": 40.0} for _ in range(probes)]
    return script


def build_transport(args, settings: Settings):
    if args.target == "fake":
        from tracert.prober.fake import ScriptedTransport
        return ScriptedTransport(script=fake_script(probes=settings.probes_per_hop))
    from tracert.prober.raw_socket import RawSocketTransport
    return RawSocketTransport(recv_buffer=settings.recv_buffer)


def run(args) -> None:
    settings = Settings(
        max_hops=args.max_hops,
        timeout_ms=args.timeout_ms,
        probes_per_hop=args.probes,
        resolve_names=not args.no_resolve,
    )
    transport = build_transport(args, settings)
    if args.target == "fake":
        ctrl = TracerouteController(transport, settings, resolver=lambda _: FAKE_TARGET)
        reporter = Reporter(resolve_names=False)
    else:
        ctrl = TracerouteController(transport, settings)
        reporter = Reporter(resolve_names=settings.resolve_names)

    try:
        address = ctrl.resolve(args.target)
    except ResolutionFailure as e:
        print(e)
        return

    if args.json:
        res = ctrl.trace(args.target, address)
        print(json.dumps(res.to_dict(), indent=2))
        return

    reporter.header(args.target, address, settings.max_hops)
    ctrl.trace(args.target, address, on_hop=reporter.hop)
    reporter.footer()


def build_argparser():
    ap = argparse.ArgumentParser(prog="tracert", description="ICMP echo traceroute")
    ap.add_argument("target", help="Destination host/IP (or 'fake' to use a scripted transport)")
    ap.add_argument("-m", "--max-hops", type=int, default=30, help="Maximum TTL to probe")
    ap.add_argument("-w", "--timeout-ms", type=int, default=3000, help="Per-probe reply timeout (milliseconds, max 9999)")
    ap.add_argument("-q", "--probes", type=int, default=3, help="Probes sent per hop")
    ap.add_argument("-n", "--no-resolve", action="store_true", help="Do not resolve hop addresses to names")
    ap.add_argument("--json", action="store_true", help="Print a JSON summary instead of the hop table")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                    type=str.upper, help="Diagnostics level on stderr")
    return ap


def main(argv=None) -> None:
    args = build_argparser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        run(args)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.exception("trace aborted")
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
