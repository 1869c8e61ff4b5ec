from __future__ import annotations

import re

from ..constants import (
    BILL_CONFIRMATION_HEADING,
    BILL_PAYMENTS_HEADING,
    BILL_SUCCESS_HEADING,
    PAYMENT_REFERENCES,
)
from ..models import BillPaymentData
from ..playwright_probes import locator_text_matches, locator_visible
from ..probes import ConditionProbe
from .base import BasePage, money_pattern


class BillPaymentPage(BasePage):
    async def open(self) -> None:
        await self.click_button("Bill Payments")

    def section_probes(self) -> tuple[ConditionProbe, ...]:
        heading = self.heading(BILL_PAYMENTS_HEADING).first
        return (locator_visible("bill_payments_visible", heading),)

    async def fill_payment(self, bill: BillPaymentData) -> None:
        await self.page.get_by_role(
            "combobox", name=re.compile(r"Bill Type", re.IGNORECASE)
        ).select_option(bill.bill_type)
        await self.page.get_by_placeholder("Enter service provider name").fill(bill.provider)

        account = self.page.get_by_placeholder("Enter account or reference number")
        if not await account.count():
            account = self.page.locator("#billAccountNumber").first
        await account.fill(bill.account_number)

        await self.page.get_by_role(
            "spinbutton", name=re.compile(r"Amount", re.IGNORECASE)
        ).fill(bill.amount)

        if bill.payment_method:
            method = self.page.get_by_role(
                "combobox", name=re.compile(r"Payment Method", re.IGNORECASE)
            )
            # Not every variant of the form offers a payment method.
            if await method.count():
                await method.select_option(label=bill.payment_method)

    async def submit(self) -> None:
        await self.click_button("Submit")

    async def confirm_if_shown(self) -> bool:
        """Click Confirm when this variant shows a confirmation step."""
        if not await self.heading(BILL_CONFIRMATION_HEADING).count():
            return False
        await self.click_button("Confirm")
        return True

    def success_probes(self) -> tuple[ConditionProbe, ...]:
        heading = self.heading(BILL_SUCCESS_HEADING).first
        return (locator_visible("bill_payment_success_visible", heading),)

    def balance_probes(self, expected_balance: str) -> tuple[ConditionProbe, ...]:
        return (
            locator_text_matches(
                "balance_shown", self.page.locator("body"), money_pattern(expected_balance)
            ),
        )

    async def payment_reference(self) -> str | None:
        body = await self.text_of(self.page.locator("body"))
        for pattern in PAYMENT_REFERENCES:
            match = pattern.search(body)
            if match:
                return match.group(0)
        return None

    async def view_history(self) -> None:
        await self.click_button("View History")
