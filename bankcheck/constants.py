"""bankcheck constants."""

import re

# Retry budget used by the history check of the demo app.
DEFAULT_MAX_ATTEMPTS = 8
DEFAULT_DELAY_S = 1.0
DEFAULT_ATTEMPT_TIMEOUT_S = 5.0

DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_TEST_DATA_PATH = "test-data/Transfer_TestData.json"
CONFIG_PATH_ENV = "BANKCHECK_CONFIG"

# Demo app page text.
BANKING_URL_FRAGMENT = "Banking-Project-Demo.html"
LOGIN_URL_PATTERN = re.compile(r"Testers-Talk-Practice-Site")
HOME_HEADING = re.compile(r"🏦 Sample Banking Application")
WELCOME_TEXT = "Welcome to the Testers Talk Banking Application"
QUICK_TRANSACTIONS_HEADING = re.compile(r"💳 Quick Transactions")
CONFIRMATION_HEADING = re.compile(r"Confirmation", re.IGNORECASE)
SUCCESS_HEADING = re.compile(r"Success", re.IGNORECASE)
HISTORY_HEADING = re.compile(r"Transaction History", re.IGNORECASE)
HISTORY_SECTION = "#history-section, #transactionHistory"
HISTORY_ENTRY_TEXT = re.compile(r"Transfer|Initial Balance|Deposit|Withdrawal|Bill Payment")
TRANSACTION_REFERENCE = re.compile(r"Transaction Reference:\s*([A-Z0-9\-]+)")
# Tried in order: a TXN id takes precedence over a REF id.
PAYMENT_REFERENCES = (
    re.compile(r"TXN-?[A-Z0-9]*\d[-A-Z0-9]*", re.IGNORECASE),
    re.compile(r"REF-?[A-Z0-9]*\d[-A-Z0-9]*", re.IGNORECASE),
)

BILL_PAYMENTS_HEADING = "💳 Bill Payments"
BILL_CONFIRMATION_HEADING = re.compile(
    r"Confirmation|Bill Payment Confirmation|Confirm Payment", re.IGNORECASE
)
BILL_SUCCESS_HEADING = re.compile(
    r"Bill Payment Successful|Payment Successful|Bill Payment Completed", re.IGNORECASE
)
