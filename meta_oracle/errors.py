"""
Error types for the Meta-Oracle engine.

The engine recovers from source outages and oracle stalls locally, but
exposes the typed reason to its caller instead of collapsing failures
into a generic error.
"""

from enum import Enum


class FailureReason(str, Enum):
    """Why an oracle call did not contribute to a phase."""
    TIMEOUT = "timeout"
    UNAVAILABLE_SOURCE = "unavailable_source"
    CONTRACT_VIOLATION = "contract_violation"
    ERROR = "error"


class MetaOracleError(Exception):
    """Base class for all engine errors."""

    reason: FailureReason = FailureReason.ERROR


class OracleTimeoutError(MetaOracleError):
    """Raised when an oracle call exceeds its time budget."""

    reason = FailureReason.TIMEOUT

    def __init__(self, oracle_id: str, timeout_seconds: float):
        self.oracle_id = oracle_id
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Oracle {oracle_id} timed out after {timeout_seconds}s")


class SourceUnavailableError(MetaOracleError):
    """Raised when an external market data source cannot be reached."""

    reason = FailureReason.UNAVAILABLE_SOURCE

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"[{source}] {message}")


class ContractViolationError(MetaOracleError):
    """
    Raised when a verdict cannot be traced back to a registered oracle.

    Verdicts are only built from the registry's own oracle list, so this
    always points at a bug and is never turned into an abstention.
    """

    reason = FailureReason.CONTRACT_VIOLATION


class RegistrationError(MetaOracleError):
    """Raised when the registry is changed while a run is in flight."""
