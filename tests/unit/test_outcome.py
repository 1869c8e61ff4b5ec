from __future__ import annotations

import pytest
from pydantic import ValidationError

from bankcheck.exceptions import VerificationFailedError
from bankcheck.models import VerificationOutcome


def make_outcome(**overrides) -> VerificationOutcome:
    fields = {
        "succeeded": False,
        "status": "exhausted",
        "attempts_used": 8,
        "max_attempts": 8,
        "failed_probe_name": "history_contains_amount",
        "elapsed_s": 7.2,
    }
    fields.update(overrides)
    return VerificationOutcome(**fields)


def test_success_cannot_name_failed_probe() -> None:
    with pytest.raises(ValidationError):
        make_outcome(succeeded=True, status="succeeded", failed_probe_name="a")


def test_attempts_cannot_exceed_budget() -> None:
    with pytest.raises(ValidationError):
        make_outcome(attempts_used=9)


def test_zero_attempts_only_when_cancelled() -> None:
    with pytest.raises(ValidationError):
        make_outcome(attempts_used=0)
    outcome = make_outcome(attempts_used=0, status="cancelled", cancelled=True, failed_probe_name=None)
    assert outcome.cancelled is True


def test_flags_must_match_status() -> None:
    with pytest.raises(ValidationError):
        make_outcome(status="aborted")
    with pytest.raises(ValidationError):
        make_outcome(fatal=True)


def test_outcome_is_frozen() -> None:
    outcome = make_outcome()
    with pytest.raises(ValidationError):
        outcome.attempts_used = 1  # type: ignore[misc]


def test_raise_for_failure_returns_successful_outcome() -> None:
    outcome = make_outcome(succeeded=True, status="succeeded", failed_probe_name=None, attempts_used=2)
    assert outcome.raise_for_failure() is outcome


def test_raise_for_failure_message_localizes_failure() -> None:
    outcome = make_outcome(label="transaction_in_history", last_error="TimeoutError: 5000ms")

    with pytest.raises(VerificationFailedError) as exc:
        outcome.raise_for_failure()

    message = str(exc.value)
    assert exc.value.outcome is outcome
    assert "transaction_in_history" in message
    assert "history_contains_amount" in message
    assert "8/8" in message
    assert "7.20s" in message
    assert "TimeoutError: 5000ms" in message


def test_fatal_and_cancelled_messages() -> None:
    fatal = make_outcome(status="aborted", fatal=True, attempts_used=2)
    cancelled = make_outcome(
        status="cancelled", cancelled=True, attempts_used=1, failed_probe_name=None
    )

    with pytest.raises(VerificationFailedError, match="can never hold"):
        fatal.raise_for_failure()
    with pytest.raises(VerificationFailedError, match="cancelled"):
        cancelled.raise_for_failure()


def test_verification_failed_is_an_assertion_error() -> None:
    with pytest.raises(AssertionError):
        make_outcome().raise_for_failure()
