"""
Condition probes: single, side-effect-free checks of current UI state.

A probe answers one question ("is the history section visible?", "does the
history contain 100.00?") and nothing else. Probes never click, fill or
submit; they only observe.

Example:
    from bankcheck.probes import from_predicate, probe

    async def section_visible() -> bool:
        return await page.locator("#history-section").is_visible()

    visible = probe("history_section_visible", section_visible)
    on_banking = from_predicate("on_banking_url", lambda: "Banking" in page.url)
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import FatalProbeError

ProbeFn = Callable[[], Awaitable[bool]]


class ProbeStatus(str, Enum):
    """Classified result of one probe evaluation."""

    PASSED = "passed"
    UNSATISFIED = "unsatisfied"
    TRANSIENT = "transient"
    FATAL = "fatal"

    @property
    def retryable(self) -> bool:
        return self in (ProbeStatus.UNSATISFIED, ProbeStatus.TRANSIENT)


@dataclass(frozen=True)
class ConditionProbe:
    """
    A named, idempotent check against live UI state.

    Attributes:
        name: Identifier reported as `failed_probe_name` in outcomes
        evaluate: No-argument coroutine function returning True/False.
                  Raising FatalProbeError means the condition can never hold;
                  any other exception means "not yet".
    """

    name: str
    evaluate: ProbeFn

    def __repr__(self) -> str:
        return f"ConditionProbe(name={self.name!r})"


@dataclass(frozen=True)
class ProbeResult:
    probe: ConditionProbe
    status: ProbeStatus
    error: str | None = None

    @property
    def passed(self) -> bool:
        return self.status is ProbeStatus.PASSED


def probe(name: str, evaluate: ProbeFn) -> ConditionProbe:
    return ConditionProbe(name=name, evaluate=evaluate)


def from_predicate(name: str, fn: Callable[[], bool | Awaitable[bool]]) -> ConditionProbe:
    """
    Wrap a sync or async zero-argument callable as a probe.

    The return value is coerced with bool().
    """

    async def _evaluate() -> bool:
        result: Any = fn()
        if inspect.isawaitable(result):
            result = await result
        return bool(result)

    return ConditionProbe(name=name, evaluate=_evaluate)


async def evaluate_probe(probe: ConditionProbe, *, timeout_s: float | None = None) -> ProbeResult:
    """
    Evaluate a probe once and classify the result.

    Exceeding `timeout_s` is TRANSIENT. Task cancellation propagates.
    """
    try:
        if timeout_s is None:
            ok = await probe.evaluate()
        else:
            ok = await asyncio.wait_for(probe.evaluate(), timeout=timeout_s)
    except FatalProbeError as e:
        return ProbeResult(probe, ProbeStatus.FATAL, error=str(e) or type(e).__name__)
    except asyncio.TimeoutError as e:
        error = f"evaluation exceeded {timeout_s:.3f}s" if timeout_s is not None else repr(e)
        return ProbeResult(probe, ProbeStatus.TRANSIENT, error=error)
    except Exception as e:  # pylint: disable=broad-exception-caught
        return ProbeResult(probe, ProbeStatus.TRANSIENT, error=f"{type(e).__name__}: {e}")

    if ok:
        return ProbeResult(probe, ProbeStatus.PASSED)
    return ProbeResult(probe, ProbeStatus.UNSATISFIED)
