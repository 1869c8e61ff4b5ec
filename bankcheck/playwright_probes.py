"""
Playwright-backed condition probes.

Each constructor turns a Playwright Locator or Page into a ConditionProbe.
The checks are non-waiting (`is_visible`, `count`, `text_content` with a
short timeout); polling belongs to the RetryVerifier, not to Playwright's
auto-wait.

Error mapping:
- Playwright TimeoutError / Error      -> TransientProbeError (retry)
- page, context or browser closed      -> FatalProbeError (abort)
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .exceptions import FatalProbeError, TransientProbeError
from .probes import ConditionProbe

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

T = TypeVar("T")

# Upper bound for a single text read; the verifier's attempt timeout is the real budget.
TEXT_READ_TIMEOUT_MS = 2_000


def _is_target_closed_error(e: Exception) -> bool:
    """
    Playwright raises these once the page under test is gone. No amount of
    retrying will bring the condition back.
    """
    msg = str(e).lower()
    return (
        "has been closed" in msg
        or "target closed" in msg
        or "browser has disconnected" in msg
    )


async def _guarded(name: str, fn: Callable[[], Awaitable[T]]) -> T:
    try:
        return await fn()
    except PlaywrightTimeoutError as e:
        raise TransientProbeError(f"{name}: timed out ({e.message})") from e
    except PlaywrightError as e:
        if _is_target_closed_error(e):
            raise FatalProbeError(f"{name}: page under test is closed") from e
        raise TransientProbeError(f"{name}: {e.message}") from e


def locator_visible(name: str, locator: Locator) -> ConditionProbe:
    """Holds when the first element matching `locator` is visible."""

    async def _evaluate() -> bool:
        return await _guarded(name, lambda: locator.first.is_visible())

    return ConditionProbe(name=name, evaluate=_evaluate)


def locator_count_at_least(name: str, locator: Locator, minimum: int = 1) -> ConditionProbe:
    async def _evaluate() -> bool:
        count = await _guarded(name, locator.count)
        return count >= minimum

    return ConditionProbe(name=name, evaluate=_evaluate)


def locator_text_contains(name: str, locator: Locator, expected: str) -> ConditionProbe:
    """Holds when the first match's text contains `expected` (case-sensitive)."""

    async def _evaluate() -> bool:
        text = await _guarded(
            name, lambda: locator.first.text_content(timeout=TEXT_READ_TIMEOUT_MS)
        )
        return expected in (text or "")

    return ConditionProbe(name=name, evaluate=_evaluate)


def locator_text_matches(
    name: str, locator: Locator, pattern: str | re.Pattern[str]
) -> ConditionProbe:
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    async def _evaluate() -> bool:
        text = await _guarded(
            name, lambda: locator.first.text_content(timeout=TEXT_READ_TIMEOUT_MS)
        )
        return regex.search(text or "") is not None

    return ConditionProbe(name=name, evaluate=_evaluate)


def url_matches(name: str, page: Page, pattern: str | re.Pattern[str]) -> ConditionProbe:
    """Holds when the page URL matches `pattern`. A closed page is fatal."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    async def _evaluate() -> bool:
        if page.is_closed():
            raise FatalProbeError(f"{name}: page under test is closed")
        return regex.search(page.url) is not None

    return ConditionProbe(name=name, evaluate=_evaluate)
