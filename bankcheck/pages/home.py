from __future__ import annotations

import re

from ..constants import BANKING_URL_FRAGMENT, HOME_HEADING, WELCOME_TEXT
from ..playwright_probes import locator_visible, url_matches
from ..probes import ConditionProbe
from .base import BasePage


class HomePage(BasePage):
    """Landing page after login."""

    def loaded_probes(self) -> tuple[ConditionProbe, ...]:
        return (
            url_matches("banking_url", self.page, re.escape(BANKING_URL_FRAGMENT)),
            locator_visible("home_heading_visible", self.heading(HOME_HEADING)),
            locator_visible("welcome_text_visible", self.page.get_by_text(WELCOME_TEXT)),
        )

    async def navigate_to_quick_transactions(self) -> None:
        await self.click_link(re.compile(r"💳 Quick Transactions"))

    async def navigate_to_transaction_history(self) -> None:
        await self.click_link(re.compile(r"📊 Transaction History"))

    async def logout(self) -> None:
        await self.click_link("Logout")
