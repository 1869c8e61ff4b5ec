from __future__ import annotations

import asyncio

import pytest

from bankcheck.exceptions import FatalProbeError
from bankcheck.probes import ConditionProbe, ProbeStatus, evaluate_probe, from_predicate, probe


@pytest.mark.asyncio
async def test_from_predicate_accepts_sync_and_async_callables() -> None:
    async def async_check() -> int:
        return 1

    sync_probe = from_predicate("sync", lambda: "Banking-Project-Demo.html" in "x/Banking-Project-Demo.html")
    async_probe = from_predicate("async", async_check)

    assert (await evaluate_probe(sync_probe)).status is ProbeStatus.PASSED
    assert await async_probe.evaluate() is True


@pytest.mark.asyncio
async def test_evaluate_probe_classifies_results() -> None:
    async def falsy() -> bool:
        return False

    async def boom() -> bool:
        raise ValueError("element detached")

    async def fatal() -> bool:
        raise FatalProbeError("no such page")

    unsatisfied = await evaluate_probe(probe("f", falsy))
    transient = await evaluate_probe(probe("t", boom))
    aborted = await evaluate_probe(probe("x", fatal))

    assert unsatisfied.status is ProbeStatus.UNSATISFIED
    assert unsatisfied.status.retryable
    assert transient.status is ProbeStatus.TRANSIENT
    assert transient.error == "ValueError: element detached"
    assert aborted.status is ProbeStatus.FATAL
    assert not aborted.status.retryable


@pytest.mark.asyncio
async def test_evaluate_probe_timeout_is_transient() -> None:
    async def hang() -> bool:
        await asyncio.sleep(10)
        return True

    result = await evaluate_probe(ConditionProbe("hang", hang), timeout_s=0.01)

    assert result.status is ProbeStatus.TRANSIENT
    assert "exceeded" in (result.error or "")


@pytest.mark.asyncio
async def test_task_cancellation_propagates() -> None:
    started = asyncio.Event()

    async def hang() -> bool:
        started.set()
        await asyncio.sleep(10)
        return True

    task = asyncio.create_task(evaluate_probe(ConditionProbe("hang", hang)))
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


def test_probe_repr_shows_name() -> None:
    async def check() -> bool:
        return True

    assert repr(probe("history_section_visible", check)) == "ConditionProbe(name='history_section_visible')"
