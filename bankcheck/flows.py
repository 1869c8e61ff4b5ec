"""
Transaction-flow driver for the demo banking app.

Each flow submits an action through the page objects and then verifies its
post-conditions with the RetryVerifier. A post-condition that never holds
raises VerificationFailedError (an AssertionError), so flows read naturally
inside pytest tests:

    flow = BankingFlow(page, config)
    await flow.login()
    result = await flow.transfer(TransactionData(amount="100", to_account="123456789"))
    await flow.open_history()
    await flow.verify_history(result.transaction, reference=result.reference)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from .models import BillPaymentData, HarnessConfig, TransactionData, VerificationOutcome
from .pages import (
    BillPaymentPage,
    HomePage,
    LoginPage,
    QuickTransactionPage,
    TransactionHistoryPage,
)
from .probes import ConditionProbe
from .verification import RetryVerifier

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


@dataclass
class FlowResult:
    transaction: TransactionData | BillPaymentData
    reference: str | None = None
    outcomes: list[VerificationOutcome] = field(default_factory=list)


class BankingFlow:
    def __init__(
        self,
        page: Page,
        config: HarnessConfig,
        *,
        verifier: RetryVerifier | None = None,
        cancellation: asyncio.Event | None = None,
    ) -> None:
        self.page = page
        self.config = config
        self.verifier = verifier or RetryVerifier()
        self.cancellation = cancellation

        timeouts = config.timeout
        self.login_page = LoginPage(page, timeouts)
        self.home = HomePage(page, timeouts)
        self.quick = QuickTransactionPage(page, timeouts)
        self.history = TransactionHistoryPage(page, timeouts)
        self.bills = BillPaymentPage(page, timeouts)
        self.outcomes: list[VerificationOutcome] = []

    async def verify(self, *probes: ConditionProbe, label: str) -> VerificationOutcome:
        """Run the probes under the configured retry policy; raise if they never hold."""
        plan = self.config.verification.plan(*probes, label=label)
        outcome = await self.verifier.run(plan, self.cancellation)
        self.outcomes.append(outcome)
        return outcome.raise_for_failure()

    async def login(self) -> None:
        self.login_page.apply_timeouts()
        await self.login_page.navigate_to(self.config.url)
        await self.verify(*self.login_page.loaded_probes(), label="login_page_loaded")

        credentials = self.config.credentials
        logger.info("Logging in as %s (app %s)", credentials.username, credentials.app_name)
        await self.login_page.login(credentials)
        await self.verify(*self.home.loaded_probes(), label="home_page_loaded")

    async def submit_transaction(
        self,
        transaction: TransactionData,
        *,
        current_balance: str | Decimal | None = None,
        expected_balance: str | Decimal | None = None,
    ) -> FlowResult:
        """Quick Transactions: select, fill, submit, confirm, capture reference."""
        start = len(self.outcomes)

        await self.home.navigate_to_quick_transactions()
        await self.verify(*self.quick.section_probes(), label="quick_transactions_visible")

        await self.quick.select_transaction_type(transaction.type)
        await self.quick.fill_transaction(transaction)
        await self.quick.submit()
        await self.verify(
            *self.quick.confirmation_probes(
                transaction,
                current_balance=current_balance,
                expected_balance=expected_balance,
            ),
            label=f"{transaction.type.lower()}_confirmation",
        )

        await self.quick.confirm()
        await self.verify(
            *self.quick.success_probes(), label=f"{transaction.type.lower()}_success"
        )

        reference = await self.quick.transaction_reference()
        logger.info(
            "%s %s submitted, reference=%s", transaction.type, transaction.amount, reference
        )
        return FlowResult(transaction, reference, self.outcomes[start:])

    async def transfer(
        self, transaction: TransactionData, **balances: str | Decimal | None
    ) -> FlowResult:
        return await self.submit_transaction(
            transaction.model_copy(update={"type": "Transfer"}), **balances
        )

    async def deposit(
        self, transaction: TransactionData, **balances: str | Decimal | None
    ) -> FlowResult:
        return await self.submit_transaction(
            transaction.model_copy(update={"type": "Deposit", "to_account": None}), **balances
        )

    async def withdraw(
        self, transaction: TransactionData, **balances: str | Decimal | None
    ) -> FlowResult:
        return await self.submit_transaction(
            transaction.model_copy(update={"type": "Withdrawal", "to_account": None}), **balances
        )

    async def pay_bill(
        self, bill: BillPaymentData, *, expected_balance: str | Decimal | None = None
    ) -> FlowResult:
        start = len(self.outcomes)

        await self.bills.open()
        await self.verify(*self.bills.section_probes(), label="bill_payments_visible")
        await self.bills.fill_payment(bill)
        await self.bills.submit()
        await self.bills.confirm_if_shown()
        await self.verify(*self.bills.success_probes(), label="bill_payment_success")

        reference = await self.bills.payment_reference()
        if expected_balance is not None:
            await self.verify(
                *self.bills.balance_probes(str(expected_balance)), label="bill_payment_balance"
            )
        return FlowResult(bill, reference, self.outcomes[start:])

    async def open_history(self, *, from_home: bool = False) -> None:
        """Follow the success page's View History button, or the home page link."""
        if from_home:
            await self.home.navigate_to_transaction_history()
        else:
            await self.quick.view_history()

    async def logout(self) -> None:
        await self.home.logout()
        await self.verify(*self.login_page.loaded_probes(), label="logged_out")

    async def verify_history(
        self,
        transaction: TransactionData | BillPaymentData,
        *,
        reference: str | None = None,
    ) -> VerificationOutcome:
        if isinstance(transaction, BillPaymentData):
            transaction = TransactionData(amount=transaction.amount, type="")
        return await self.verify(
            *self.history.history_probes(transaction, reference=reference),
            label="transaction_in_history",
        )
