from __future__ import annotations

from decimal import Decimal

import pytest

from bankcheck.config import get_transfer_data, load_test_data
from bankcheck.models import BillPaymentData, TransactionData

pytestmark = [pytest.mark.e2e, pytest.mark.asyncio]

OPENING_BALANCE = Decimal("10000")
TEST_DATA = "test-data/Transfer_TestData.json"


@pytest.mark.parametrize("data_set", ["transferTransaction", "smallTransfer"])
async def test_transfer_reaches_history(flow, data_set: str) -> None:
    tx = get_transfer_data(load_test_data(TEST_DATA), data_set)

    result = await flow.transfer(
        tx,
        current_balance=OPENING_BALANCE,
        expected_balance=OPENING_BALANCE - Decimal(tx.amount),
    )
    await flow.open_history()
    outcome = await flow.verify_history(result.transaction, reference=result.reference)

    assert outcome.succeeded


async def test_deposit_reaches_history(flow) -> None:
    tx = TransactionData(amount="100", description="We deposit $100")

    result = await flow.deposit(tx, current_balance=OPENING_BALANCE, expected_balance="10100")
    await flow.open_history()
    await flow.verify_history(result.transaction, reference=result.reference)


async def test_withdrawal_reaches_history(flow) -> None:
    tx = TransactionData(amount="100", description="Withdrawal 100")

    result = await flow.withdraw(tx, current_balance=OPENING_BALANCE, expected_balance="9900")
    await flow.open_history()
    await flow.verify_history(result.transaction, reference=result.reference)


async def test_electricity_bill_payment(flow) -> None:
    bill = BillPaymentData(
        bill_type="Electricity",
        provider="Local council",
        account_number="123456789",
        amount="1200",
    )

    result = await flow.pay_bill(bill)
    await flow.bills.view_history()
    await flow.verify_history(bill, reference=result.reference)
    await flow.verify(*flow.bills.balance_probes("8800"), label="bill_payment_balance")
