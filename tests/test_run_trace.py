# tests/test_run_trace.py
import json
import socket

from tools import run_trace


def test_fake_run_prints_table(capsys):
    run_trace.main(["fake", "-q", "3"])
    out = capsys.readouterr().out.splitlines()

    assert out[0] == f"Tracing route to fake [{run_trace.FAKE_TARGET}]"
    assert out[1] == "over a maximum of 30 hops:"
    hop_lines = out[3:-2]
    assert [line[:2] for line in hop_lines] == [" 1", " 2", " 3", " 4"]
    assert hop_lines[0].endswith("10.0.0.1")
    assert "   *   " in hop_lines[1]
    assert hop_lines[3].endswith(run_trace.FAKE_TARGET)
    assert out[-1] == "Trace complete."


def test_fake_run_json(capsys):
    run_trace.main(["fake", "--json", "-q", "2"])
    res = json.loads(capsys.readouterr().out)
    assert res["stop_reason"] == "dest_reached"
    assert len(res["hops"]) == 4
    assert res["probes_used"] == 8
    assert res["hops"][-1]["responders"] == [run_trace.FAKE_TARGET]


def test_fake_run_respects_max_hops(capsys):
    run_trace.main(["fake", "--json", "-m", "2"])
    res = json.loads(capsys.readouterr().out)
    assert res["stop_reason"] == "max_hops"
    assert [h["ttl"] for h in res["hops"]] == [1, 2]


def test_unresolvable_target(monkeypatch, capsys):
    def fail(*a, **kw):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(socket, "getaddrinfo", fail)
    run_trace.main(["no-such-host.invalid"])
    out = capsys.readouterr().out
    assert "Unable to resolve target system name no-such-host.invalid." in out
    assert "Tracing route" not in out


def test_unexpected_failure_is_reported(capsys):
    # invalid settings surface as a ValueError from inside the run
    run_trace.main(["fake", "-q", "0"])
    out = capsys.readouterr().out
    assert out.startswith("Error: probes_per_hop must be >= 1")


def test_sequence_overflowing_probe_count_is_rejected(capsys):
    run_trace.main(["fake", "-m", "255", "-q", "300"])
    out = capsys.readouterr().out
    assert out.startswith("Error: 255 hops x 300 probes overflows 16-bit sequence numbers")
