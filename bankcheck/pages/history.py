"""
Transaction History page.

The history list updates some time after a transaction succeeds, so its
checks are exposed as ordered probes for the RetryVerifier:

    history_section_visible  -> the page/section rendered at all
    history_has_transactions -> at least one entry is listed
    history_contains_amount  -> the submitted amount is listed
    history_contains_type    -> the transaction type is listed
    history_contains_*       -> optional description / reference
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..constants import HISTORY_ENTRY_TEXT, HISTORY_HEADING, HISTORY_SECTION
from ..models import TransactionData
from ..playwright_probes import locator_count_at_least, locator_text_contains, locator_visible
from ..probes import ConditionProbe
from .base import BasePage, money_pattern

if TYPE_CHECKING:
    from playwright.async_api import Locator


class TransactionHistoryPage(BasePage):
    @property
    def section(self) -> Locator:
        return self.page.locator(HISTORY_SECTION).first

    @property
    def entries(self) -> Locator:
        return self.section.locator("div").filter(has=self.page.get_by_text(HISTORY_ENTRY_TEXT))

    def history_probes(
        self,
        transaction: TransactionData,
        *,
        reference: str | None = None,
    ) -> tuple[ConditionProbe, ...]:
        probes: list[ConditionProbe] = [
            locator_visible("history_section_visible", self.heading(HISTORY_HEADING).first),
            locator_count_at_least("history_has_transactions", self.entries, 1),
            locator_visible(
                "history_contains_amount",
                self.section.get_by_text(money_pattern(transaction.amount)),
            ),
        ]
        if transaction.type:
            probes.append(
                locator_visible(
                    "history_contains_type",
                    self.section.get_by_text(
                        re.compile(re.escape(transaction.type), re.IGNORECASE)
                    ),
                )
            )
        if transaction.description:
            probes.append(
                locator_text_contains(
                    "history_contains_description", self.section, transaction.description
                )
            )
        if reference:
            probes.append(
                locator_text_contains("history_contains_reference", self.section, reference)
            )
        return tuple(probes)
