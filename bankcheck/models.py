"""
Pydantic models for bankcheck: verification outcomes and harness configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import DEFAULT_ATTEMPT_TIMEOUT_S, DEFAULT_DELAY_S, DEFAULT_MAX_ATTEMPTS
from .exceptions import VerificationFailedError

if TYPE_CHECKING:
    from .probes import ConditionProbe
    from .verification import VerificationPlan

OutcomeStatus = Literal["succeeded", "exhausted", "aborted", "cancelled"]


class VerificationOutcome(BaseModel):
    """Immutable result of one RetryVerifier.run call"""

    model_config = ConfigDict(frozen=True)

    succeeded: bool
    status: OutcomeStatus
    attempts_used: int = Field(ge=0)
    max_attempts: int = Field(ge=1)
    failed_probe_name: Optional[str] = None
    elapsed_s: float = Field(ge=0.0)
    fatal: bool = False
    cancelled: bool = False
    last_error: Optional[str] = None
    label: Optional[str] = None

    @model_validator(mode="after")
    def _check_invariants(self) -> VerificationOutcome:
        if self.succeeded != (self.status == "succeeded"):
            raise ValueError("succeeded must match status")
        if self.succeeded and self.failed_probe_name is not None:
            raise ValueError("a successful outcome has no failed probe")
        if self.attempts_used > self.max_attempts:
            raise ValueError("attempts_used cannot exceed max_attempts")
        if self.attempts_used == 0 and self.status != "cancelled":
            raise ValueError("only a cancelled run may use zero attempts")
        if self.fatal != (self.status == "aborted"):
            raise ValueError("fatal must match status 'aborted'")
        if self.cancelled != (self.status == "cancelled"):
            raise ValueError("cancelled must match status 'cancelled'")
        return self

    def raise_for_failure(self) -> VerificationOutcome:
        """Raise VerificationFailedError unless the outcome succeeded."""
        if not self.succeeded:
            raise VerificationFailedError.from_outcome(self)
        return self


class TransactionData(BaseModel):
    """A transaction fixture (transfer, deposit, withdrawal)"""

    model_config = ConfigDict(populate_by_name=True)

    amount: str
    type: str = "Transfer"
    description: Optional[str] = None
    to_account: Optional[str] = Field(default=None, alias="toAccount")


class BillPaymentData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bill_type: str = Field(default="Electricity", alias="billType")
    provider: str
    account_number: str = Field(alias="accountNumber")
    amount: str
    payment_method: Optional[str] = Field(default="Savings Account", alias="paymentMethod")


class LoginCredentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    password: str
    app_name: str = Field(default="Banking", alias="appName")


class Timeouts(BaseModel):
    """Browser timeouts in milliseconds"""

    page: int = 30_000
    navigation: int = 30_000
    element: int = 15_000
    action: int = 5_000


class RetryPolicy(BaseModel):
    """Configured retry budget for eventual-consistency checks"""

    model_config = ConfigDict(populate_by_name=True)

    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, alias="maxAttempts")
    delay_s: float = Field(default=DEFAULT_DELAY_S, alias="delaySeconds")
    attempt_timeout_s: Optional[float] = Field(
        default=DEFAULT_ATTEMPT_TIMEOUT_S, alias="attemptTimeoutSeconds"
    )
    backoff_multiplier: float = Field(default=1.0, alias="backoffMultiplier")
    max_delay_s: Optional[float] = Field(default=None, alias="maxDelaySeconds")

    def plan(self, *probes: ConditionProbe, label: str | None = None) -> VerificationPlan:
        """Build a VerificationPlan from this policy (validation happens in the plan)."""
        from .verification import VerificationPlan

        return VerificationPlan(
            probes=probes,
            max_attempts=self.max_attempts,
            delay_s=self.delay_s,
            attempt_timeout_s=self.attempt_timeout_s,
            backoff_multiplier=self.backoff_multiplier,
            max_delay_s=self.max_delay_s,
            label=label,
        )


class HarnessConfig(BaseModel):
    """Top-level harness configuration (config.json)"""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    banking_url: Optional[str] = Field(default=None, alias="bankingUrl")
    username: str
    password: str
    app_name: str = Field(default="Banking", alias="appName")
    timeout: Timeouts = Field(default_factory=Timeouts)
    transaction: Optional[TransactionData] = None
    verification: RetryPolicy = Field(default_factory=RetryPolicy)

    @property
    def credentials(self) -> LoginCredentials:
        return LoginCredentials(
            username=self.username, password=self.password, app_name=self.app_name
        )
