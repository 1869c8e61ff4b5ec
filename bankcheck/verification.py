"""
Eventual-consistency verification.

After a flow submits an action (a transfer, a deposit) the UI catches up
asynchronously. RetryVerifier polls an ordered list of ConditionProbes until
all of them hold within one attempt, the attempt budget runs out, a probe
reports a fatal condition, or the caller cancels.

Example:
    plan = VerificationPlan(
        probes=(section_visible, has_entries, contains_amount),
        max_attempts=8,
        delay_s=1.0,
        attempt_timeout_s=5.0,
        label="transfer_in_history",
    )
    outcome = await RetryVerifier().run(plan)
    if not outcome.succeeded:
        print(outcome.failed_probe_name, outcome.attempts_used, outcome.elapsed_s)

Probes are ordered coarse -> fine. Evaluation stops at the first probe that
does not hold, so `failed_probe_name` names the most basic condition that
was still missing on the final attempt.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .exceptions import PlanInvalidError
from .models import OutcomeStatus, VerificationOutcome
from .probes import ConditionProbe, ProbeResult, ProbeStatus, evaluate_probe

if TYPE_CHECKING:
    from .tracing import Tracer

logger = logging.getLogger(__name__)

SleepFn = Callable[[float, "asyncio.Event | None"], Awaitable[None]]


async def cancellable_sleep(seconds: float, cancellation: asyncio.Event | None = None) -> None:
    """Suspend for `seconds`, waking early if `cancellation` is set."""
    if seconds <= 0:
        # Still yield to the loop so other runs make progress.
        await asyncio.sleep(0)
        return
    if cancellation is None:
        await asyncio.sleep(seconds)
        return
    try:
        await asyncio.wait_for(cancellation.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        pass


@dataclass(frozen=True)
class VerificationPlan:
    """
    What "eventually consistent" means for one verification call.

    Attributes:
        probes: Ordered probes; all must hold within one attempt
        max_attempts: Attempt budget (>= 1)
        delay_s: Delay between attempts in seconds (>= 0)
        attempt_timeout_s: Optional bound on a single probe evaluation
        backoff_multiplier: 1.0 for a fixed delay, > 1.0 for exponential backoff
        max_delay_s: Optional cap on the backoff delay
        label: Diagnostic label carried into the outcome
    """

    probes: tuple[ConditionProbe, ...]
    max_attempts: int
    delay_s: float = 0.0
    attempt_timeout_s: float | None = None
    backoff_multiplier: float = 1.0
    max_delay_s: float | None = None
    label: str | None = None

    def __post_init__(self) -> None:
        probes = tuple(self.probes)
        object.__setattr__(self, "probes", probes)

        if not probes:
            raise PlanInvalidError.empty_probes()
        for p in probes:
            if not isinstance(p, ConditionProbe):
                raise PlanInvalidError.bad_value("probes", p, "a sequence of ConditionProbe")
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
            raise PlanInvalidError.bad_value("max_attempts", self.max_attempts, "an int")
        if self.max_attempts < 1:
            raise PlanInvalidError.bad_value("max_attempts", self.max_attempts, ">= 1")
        if self.delay_s < 0:
            raise PlanInvalidError.bad_value("delay_s", self.delay_s, ">= 0")
        if self.attempt_timeout_s is not None and self.attempt_timeout_s <= 0:
            raise PlanInvalidError.bad_value("attempt_timeout_s", self.attempt_timeout_s, "> 0")
        if self.backoff_multiplier < 1.0:
            raise PlanInvalidError.bad_value(
                "backoff_multiplier", self.backoff_multiplier, ">= 1.0"
            )
        if self.max_delay_s is not None and self.max_delay_s < 0:
            raise PlanInvalidError.bad_value("max_delay_s", self.max_delay_s, ">= 0")

    @classmethod
    def of(cls, *probes: ConditionProbe, max_attempts: int, **kwargs: Any) -> VerificationPlan:
        return cls(probes=probes, max_attempts=max_attempts, **kwargs)

    def delay_after(self, attempt: int) -> float:
        """Delay to wait after attempt `attempt` (1-based) fails."""
        delay = self.delay_s * (self.backoff_multiplier ** max(0, attempt - 1))
        if self.max_delay_s is not None:
            delay = min(delay, self.max_delay_s)
        return delay


@dataclass
class RetryVerifier:
    """
    Runs VerificationPlans.

    Holds only injected collaborators; every run owns its own attempt
    counter and timer, so one verifier can serve many concurrent runs.

    Attributes:
        sleep: Coroutine `(seconds, cancellation) -> None`, must honor cancellation
        clock: Monotonic clock in seconds
        tracer: Optional tracer receiving `verification` events
    """

    sleep: SleepFn = cancellable_sleep
    clock: Callable[[], float] = time.monotonic
    tracer: Tracer | None = None
    step_id: str | None = None

    async def run(
        self,
        plan: VerificationPlan,
        cancellation: asyncio.Event | None = None,
    ) -> VerificationOutcome:
        """
        Execute `plan` and return its outcome.

        Never raises for an expected verification failure. Raises
        PlanInvalidError if `plan` is not a VerificationPlan.
        """
        if not isinstance(plan, VerificationPlan):
            raise PlanInvalidError.bad_value("plan", plan, "a VerificationPlan")

        start = self.clock()
        attempt = 0
        last: ProbeResult | None = None

        while True:
            if _is_cancelled(cancellation):
                return self._finish(plan, "cancelled", attempt, start, last)

            attempt += 1
            last, cancelled = await self._attempt(plan, attempt, cancellation)
            if cancelled:
                # Cancelled between probes of this attempt.
                return self._finish(plan, "cancelled", attempt, start, last)

            if last.passed:
                return self._finish(plan, "succeeded", attempt, start, None)
            if last.status is ProbeStatus.FATAL:
                return self._finish(plan, "aborted", attempt, start, last)
            if attempt >= plan.max_attempts:
                return self._finish(plan, "exhausted", attempt, start, last)

            delay = plan.delay_after(attempt)
            logger.debug(
                "%s: attempt %d/%d failed on %s, retrying in %.3fs",
                plan.label or "verification",
                attempt,
                plan.max_attempts,
                last.probe.name,
                delay,
            )
            await self.sleep(delay, cancellation)

    async def _attempt(
        self,
        plan: VerificationPlan,
        attempt: int,
        cancellation: asyncio.Event | None,
    ) -> tuple[ProbeResult | None, bool]:
        """
        Evaluate probes in order, stopping at the first one that does not hold.

        Returns the last evaluated result (the failing one, or the final
        passing one) and whether cancellation interrupted the attempt.
        """
        result: ProbeResult | None = None
        for p in plan.probes:
            if _is_cancelled(cancellation):
                return result, True
            result = await evaluate_probe(p, timeout_s=plan.attempt_timeout_s)
            self._emit_attempt(plan, attempt, result)
            if not result.passed:
                break
        return result, False

    def _finish(
        self,
        plan: VerificationPlan,
        status: OutcomeStatus,
        attempt: int,
        start: float,
        last: ProbeResult | None,
    ) -> VerificationOutcome:
        failed = None
        last_error = None
        if status != "succeeded" and last is not None and not last.passed:
            failed = last.probe.name
            last_error = last.error

        outcome = VerificationOutcome(
            succeeded=status == "succeeded",
            status=status,
            attempts_used=attempt,
            max_attempts=plan.max_attempts,
            failed_probe_name=failed,
            elapsed_s=max(0.0, self.clock() - start),
            fatal=status == "aborted",
            cancelled=status == "cancelled",
            last_error=last_error,
            label=plan.label,
        )

        name = plan.label or "verification"
        if outcome.succeeded:
            logger.info("%s: consistent after %d attempt(s)", name, attempt)
        else:
            logger.warning(
                "%s: %s after %d/%d attempt(s), failed probe=%s",
                name,
                status,
                attempt,
                plan.max_attempts,
                failed,
            )
        self._emit(
            {
                "kind": "eventually",
                "label": plan.label,
                "passed": outcome.succeeded,
                "status": status,
                "attempt": attempt,
                "max_attempts": plan.max_attempts,
                "failed_probe": failed,
                "elapsed_s": round(outcome.elapsed_s, 4),
                "reason": last_error or "",
                "final": True,
            }
        )
        return outcome

    def _emit_attempt(self, plan: VerificationPlan, attempt: int, result: ProbeResult) -> None:
        self._emit(
            {
                "kind": "eventually",
                "label": plan.label,
                "passed": result.passed,
                "probe": result.probe.name,
                "probe_status": result.status.value,
                "attempt": attempt,
                "reason": result.error or "",
            }
        )

    def _emit(self, data: dict[str, Any]) -> None:
        if self.tracer is None:
            return
        try:
            self.tracer.emit("verification", data=data, step_id=self.step_id)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.debug("Tracer failed to emit verification event", exc_info=True)


def _is_cancelled(cancellation: asyncio.Event | None) -> bool:
    return cancellation is not None and cancellation.is_set()


async def verify_eventually(
    probes: Sequence[ConditionProbe],
    *,
    max_attempts: int,
    delay_s: float = 0.0,
    attempt_timeout_s: float | None = None,
    label: str | None = None,
    cancellation: asyncio.Event | None = None,
    verifier: RetryVerifier | None = None,
) -> VerificationOutcome:
    """Build a plan and run it with a default (or given) verifier."""
    plan = VerificationPlan(
        probes=tuple(probes),
        max_attempts=max_attempts,
        delay_s=delay_s,
        attempt_timeout_s=attempt_timeout_s,
        label=label,
    )
    return await (verifier or RetryVerifier()).run(plan, cancellation)
