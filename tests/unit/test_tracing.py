from __future__ import annotations

import json

import pytest

from bankcheck.probes import from_predicate
from bankcheck.tracing import JsonlTraceSink, Tracer
from bankcheck.verification import RetryVerifier, VerificationPlan


def test_jsonl_sink_writes_one_event_per_line(tmp_path) -> None:
    path = tmp_path / "traces" / "run.jsonl"
    with JsonlTraceSink(path) as sink:
        tracer = Tracer(run_id="run-1", sink=sink)
        tracer.emit("verification", data={"passed": True}, step_id="step-0")
        tracer.emit("verification", data={"passed": False})

    lines = path.read_text().splitlines()
    events = [json.loads(line) for line in lines]
    assert [e["seq"] for e in events] == [1, 2]
    assert events[0]["run_id"] == "run-1"
    assert events[0]["step_id"] == "step-0"
    assert events[1]["data"] == {"passed": False}


def test_tracer_swallows_sink_errors() -> None:
    class BrokenSink:
        def write(self, event) -> None:
            raise OSError("disk full")

        def close(self) -> None:
            return None

    Tracer(run_id="r", sink=BrokenSink()).emit("verification", data={})


@pytest.mark.asyncio
async def test_verifier_writes_trace(tmp_path) -> None:
    path = tmp_path / "trace.jsonl"
    sink = JsonlTraceSink(path)
    verifier = RetryVerifier(tracer=Tracer(run_id="transfer", sink=sink), step_id="history")

    plan = VerificationPlan.of(from_predicate("ok", lambda: True), max_attempts=1, label="history")
    await verifier.run(plan)
    sink.close()

    events = [json.loads(line) for line in path.read_text().splitlines()]
    assert len(events) == 2
    assert events[-1]["data"]["final"] is True
    assert events[-1]["data"]["status"] == "succeeded"
    assert all(e["step_id"] == "history" for e in events)
