"""
Error taxonomy for bankcheck.

Only plan construction, config loading and the opt-in
`VerificationOutcome.raise_for_failure()` raise. Probe errors are folded
into a `VerificationOutcome` by the `RetryVerifier`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import VerificationOutcome


class BankcheckError(Exception):
    """Base class for all bankcheck errors."""


class PlanInvalidError(BankcheckError, ValueError):
    """A VerificationPlan was built that can never run (programmer error)."""

    def __init__(self, reason_code: str, message: str) -> None:
        super().__init__(message)
        self.reason_code = reason_code

    @classmethod
    def empty_probes(cls) -> PlanInvalidError:
        return cls("empty_probes", "VerificationPlan requires at least one probe")

    @classmethod
    def bad_value(cls, field: str, value: Any, expected: str) -> PlanInvalidError:
        return cls(
            f"invalid_{field}", f"VerificationPlan.{field} must be {expected}, got {value!r}"
        )


class TransientProbeError(BankcheckError):
    """
    The probe could not complete its check right now.

    Treated exactly like `False`: the verifier retries.
    """


class FatalProbeError(BankcheckError):
    """
    The probe's condition can never become true.

    Aborts the remaining attempts of the run.
    """


class VerificationFailedError(BankcheckError, AssertionError):
    """Raised by `VerificationOutcome.raise_for_failure()`."""

    def __init__(self, outcome: VerificationOutcome, message: str) -> None:
        super().__init__(message)
        self.outcome = outcome

    @classmethod
    def from_outcome(cls, outcome: VerificationOutcome) -> VerificationFailedError:
        label = f"{outcome.label}: " if outcome.label else ""
        if outcome.cancelled:
            detail = "cancelled"
        elif outcome.fatal:
            detail = f"probe '{outcome.failed_probe_name}' can never hold"
        else:
            detail = f"probe '{outcome.failed_probe_name}' never held"
        message = (
            f"{label}{detail} after {outcome.attempts_used}/{outcome.max_attempts} "
            f"attempt(s) in {outcome.elapsed_s:.2f}s"
        )
        if outcome.last_error:
            message += f" (last error: {outcome.last_error})"
        return cls(outcome, message)


class ConfigError(BankcheckError):
    """Configuration or test data could not be loaded."""

    @classmethod
    def from_load_failure(cls, path: str, error: Exception) -> ConfigError:
        return cls(f"Failed to load configuration file {path}: {error}")

    @classmethod
    def missing_data_set(cls, name: str, source: str) -> ConfigError:
        return cls(f"Transaction data set '{name}' not found in {source}")

    @classmethod
    def missing_field(cls, field: str, name: str) -> ConfigError:
        return cls(f"Field '{field}' not found in transaction data set '{name}'")
