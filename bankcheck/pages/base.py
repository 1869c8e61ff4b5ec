from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from ..models import Timeouts

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page


def money_pattern(value: str | int | float | Decimal) -> re.Pattern[str]:
    """
    Regex matching an amount the way the demo app may render it:
    9900, 9,900, 9900.00, $9,900.00.
    """
    try:
        amount = abs(Decimal(str(value).replace(",", "").replace("$", "").strip()))
    except InvalidOperation as e:
        raise ValueError(f"not a monetary amount: {value!r}") from e

    whole = int(amount)
    grouped = re.escape(f"{whole:,}").replace(",", ",?")
    cents = amount - whole
    if cents:
        fraction = f"{cents:.2f}"[1:]  # ".50"
        return re.compile(rf"(?<![\d,]){grouped}{re.escape(fraction)}(?!\d)")
    return re.compile(rf"(?<![\d,]){grouped}(?:\.00)?(?![\d,]|\.\d)")


class BasePage:
    """Shared Playwright helpers for the demo app's page objects."""

    def __init__(self, page: Page, timeouts: Timeouts | None = None) -> None:
        self.page = page
        self.timeouts = timeouts or Timeouts()

    async def goto(self, url: str, wait_until: str = "load") -> None:
        await self.page.goto(url, wait_until=wait_until)

    def apply_timeouts(self) -> None:
        self.page.set_default_timeout(self.timeouts.page)
        self.page.set_default_navigation_timeout(self.timeouts.navigation)

    @property
    def url(self) -> str:
        return self.page.url

    async def fill_text_by_role(self, name: str | re.Pattern[str], value: str) -> None:
        textbox = self.page.get_by_role("textbox", name=name)
        await textbox.wait_for(state="visible", timeout=self.timeouts.element)
        await textbox.fill(value, timeout=self.timeouts.element)

    async def fill_by_label(self, label: str | re.Pattern[str], value: str) -> None:
        field = self.page.get_by_label(label)
        await field.wait_for(state="visible", timeout=self.timeouts.element)
        await field.fill(value, timeout=self.timeouts.element)

    async def select_option_by_label(self, label: str | re.Pattern[str], value: str) -> None:
        await self.page.get_by_label(label).select_option(value, timeout=self.timeouts.action)

    async def click_button(self, name: str | re.Pattern[str]) -> None:
        await self.page.get_by_role("button", name=name).click(timeout=self.timeouts.action)

    async def click_link(self, name: str | re.Pattern[str]) -> None:
        await self.page.get_by_role("link", name=name).click(timeout=self.timeouts.action)

    async def text_of(self, locator: Locator) -> str:
        return (await locator.first.text_content(timeout=self.timeouts.element)) or ""

    def heading(self, name: str | re.Pattern[str]) -> Locator:
        return self.page.get_by_role("heading", name=name)
