"""
Page objects for the demo banking app.

Actions (fill, click, select) are delegated to Playwright. Checks are
exposed as ConditionProbes so callers verify them through a RetryVerifier.
"""

from .base import BasePage, money_pattern
from .bill_payment import BillPaymentPage
from .history import TransactionHistoryPage
from .home import HomePage
from .login import LoginPage
from .quick_transaction import QuickTransactionPage

__all__ = [
    "BasePage",
    "money_pattern",
    "LoginPage",
    "HomePage",
    "QuickTransactionPage",
    "TransactionHistoryPage",
    "BillPaymentPage",
]
