from __future__ import annotations

import re
from decimal import Decimal
from typing import TYPE_CHECKING

from ..constants import (
    CONFIRMATION_HEADING,
    QUICK_TRANSACTIONS_HEADING,
    SUCCESS_HEADING,
    TRANSACTION_REFERENCE,
)
from ..models import TransactionData
from ..playwright_probes import locator_text_contains, locator_text_matches, locator_visible
from ..probes import ConditionProbe
from .base import BasePage, money_pattern

if TYPE_CHECKING:
    from playwright.async_api import Locator


class QuickTransactionPage(BasePage):
    """Quick Transactions form: select type, fill, submit, confirm."""

    def section_probes(self) -> tuple[ConditionProbe, ...]:
        return (
            locator_visible(
                "quick_transactions_visible", self.heading(QUICK_TRANSACTIONS_HEADING)
            ),
        )

    async def select_transaction_type(self, transaction_type: str) -> None:
        dropdown = self.page.get_by_label(re.compile(r"Transaction Type:", re.IGNORECASE))
        await dropdown.wait_for(state="attached", timeout=self.timeouts.element)
        await dropdown.select_option(transaction_type)

    async def fill_amount(self, amount: str) -> None:
        field = self.page.get_by_role("spinbutton", name=re.compile(r"Amount", re.IGNORECASE))
        await field.clear()
        await field.fill(amount)

    async def fill_transfer_to_account(self, account_number: str) -> None:
        label = re.compile(r"Transfer to Account:", re.IGNORECASE)
        await self.page.get_by_label(label).wait_for(timeout=self.timeouts.action)
        await self.fill_by_label(label, account_number)

    async def fill_description(self, description: str) -> None:
        await self.page.get_by_role(
            "textbox", name=re.compile(r"Description:", re.IGNORECASE)
        ).fill(description)

    async def fill_transaction(self, transaction: TransactionData) -> None:
        await self.fill_amount(transaction.amount)
        if transaction.to_account:
            await self.fill_transfer_to_account(transaction.to_account)
        if transaction.description:
            await self.fill_description(transaction.description)

    async def submit(self) -> None:
        await self.click_button("Submit")

    async def confirm(self) -> None:
        await self.click_button(re.compile(r"Confirm", re.IGNORECASE))

    async def view_history(self) -> None:
        await self.click_button(re.compile(r"View History", re.IGNORECASE))

    @property
    def confirmation_container(self) -> Locator:
        return self.page.locator("div").filter(has_text=re.compile(r"Transaction Type")).first

    @property
    def success_container(self) -> Locator:
        return self.page.locator("div").filter(has_text=re.compile(r"Transaction Reference")).first

    def confirmation_probes(
        self,
        transaction: TransactionData,
        *,
        current_balance: str | Decimal | None = None,
        expected_balance: str | Decimal | None = None,
    ) -> tuple[ConditionProbe, ...]:
        """
        Confirmation page checks, coarse to fine: heading, then each
        submitted field, then balances when given.
        """
        container = self.confirmation_container
        probes: list[ConditionProbe] = [
            locator_visible(
                "confirmation_visible", self.heading(CONFIRMATION_HEADING).first
            ),
            locator_text_contains("confirmation_type", container, transaction.type),
            locator_text_matches(
                "confirmation_amount", container, money_pattern(transaction.amount)
            ),
        ]
        if transaction.description:
            probes.append(
                locator_text_contains(
                    "confirmation_description", container, transaction.description
                )
            )
        if transaction.to_account:
            probes.append(
                locator_text_contains(
                    "confirmation_to_account", container, transaction.to_account
                )
            )
        if current_balance is not None:
            probes.append(
                locator_text_matches(
                    "confirmation_current_balance", container, money_pattern(current_balance)
                )
            )
        if expected_balance is not None:
            probes.append(
                locator_text_matches(
                    "confirmation_new_balance", container, money_pattern(expected_balance)
                )
            )
        return tuple(probes)

    def success_probes(self) -> tuple[ConditionProbe, ...]:
        return (locator_visible("success_visible", self.heading(SUCCESS_HEADING).first),)

    async def transaction_reference(self) -> str | None:
        """Reference shown on the success page, or None if the page shows none."""
        match = TRANSACTION_REFERENCE.search(await self.text_of(self.success_container))
        return match.group(1) if match else None
