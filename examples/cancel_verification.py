"""
Cancel a pending verification from another task.

A RetryVerifier run suspended between attempts wakes as soon as the
cancellation event is set and reports status="cancelled".
"""

import asyncio

from bankcheck import RetryVerifier, VerificationPlan, from_predicate


async def main() -> None:
    never = from_predicate("history_contains_amount", lambda: False)
    plan = VerificationPlan.of(never, max_attempts=5, delay_s=10.0, label="demo")
    cancel = asyncio.Event()

    async def give_up_soon() -> None:
        await asyncio.sleep(0.5)
        cancel.set()

    asyncio.create_task(give_up_soon())
    outcome = await RetryVerifier().run(plan, cancel)
    print(outcome.status, outcome.attempts_used, f"{outcome.elapsed_s:.2f}s")


if __name__ == "__main__":
    asyncio.run(main())
