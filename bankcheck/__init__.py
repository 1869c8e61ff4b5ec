"""
bankcheck - eventual-consistency verification for the demo banking UI.
"""

from .exceptions import (
    BankcheckError,
    ConfigError,
    FatalProbeError,
    PlanInvalidError,
    TransientProbeError,
    VerificationFailedError,
)
from .models import (
    BillPaymentData,
    HarnessConfig,
    LoginCredentials,
    RetryPolicy,
    Timeouts,
    TransactionData,
    VerificationOutcome,
)
from .probes import ConditionProbe, ProbeStatus, from_predicate, probe
from .tracing import JsonlTraceSink, Tracer
from .verification import RetryVerifier, VerificationPlan, cancellable_sleep, verify_eventually

__version__ = "0.1.0"

__all__ = [
    # Core
    "ConditionProbe",
    "ProbeStatus",
    "probe",
    "from_predicate",
    "VerificationPlan",
    "RetryVerifier",
    "VerificationOutcome",
    "verify_eventually",
    "cancellable_sleep",
    # Errors
    "BankcheckError",
    "PlanInvalidError",
    "TransientProbeError",
    "FatalProbeError",
    "VerificationFailedError",
    "ConfigError",
    # Config
    "HarnessConfig",
    "LoginCredentials",
    "Timeouts",
    "RetryPolicy",
    "TransactionData",
    "BillPaymentData",
    # Tracing
    "Tracer",
    "JsonlTraceSink",
]
