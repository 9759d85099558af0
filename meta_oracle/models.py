"""
Data models for the Meta-Oracle engine.

These models define the records that flow through one pipeline run:
signals observed by signal oracles, verdicts produced by reasoning and
verification oracles, and the consensus result built from them.
"""

import time
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from meta_oracle.canonical import calculate_data_hash
from meta_oracle.errors import FailureReason


class OracleRole(str, Enum):
    """Pipeline phase an oracle takes part in."""
    SIGNAL = "signal"                # Observes raw market data
    REASONING = "reasoning"          # Judges the signal set
    VERIFICATION = "verification"    # Judges the signal set adversarially


class Signal(BaseModel):
    """A single raw observation produced during the signal phase."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="Origin identifier")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Self-reported reliability")
    payload: dict[str, Any] = Field(default_factory=dict, description="Observed data, e.g. price/volume")
    timestamp: float = Field(default_factory=time.time, description="Capture instant (epoch seconds)")
    hash: str = Field(..., description="SHA256 of the canonical payload")

    @classmethod
    def create(
        cls,
        source: str,
        confidence: float,
        payload: dict[str, Any],
        timestamp: Optional[float] = None,
        hash: Optional[str] = None,
    ) -> "Signal":
        """Build a signal, hashing the payload unless a digest is given."""
        return cls(
            source=source,
            confidence=confidence,
            payload=payload,
            timestamp=timestamp if timestamp is not None else time.time(),
            hash=hash or calculate_data_hash(payload),
        )

    @property
    def price(self) -> float:
        """
        Payload price coerced with ``float()``; missing or falsy reads as 0.0.

        ``has_price`` only checks truthiness, so a non-numeric string such as
        ``"abc"`` passes it and raises ``ValueError`` here. Numeric strings
        coerce normally.
        """
        return float(self.payload.get("price") or 0.0)

    @property
    def volume(self) -> float:
        return float(self.payload.get("volume") or 0.0)

    @property
    def has_price(self) -> bool:
        return bool(self.payload.get("price"))

    @property
    def has_volume(self) -> bool:
        return bool(self.payload.get("volume"))


class Judgment(BaseModel):
    """What an oracle behavior concludes, before it is attributed to an oracle."""

    model_config = ConfigDict(frozen=True)

    prediction: float = Field(..., ge=0.0, le=1.0)
    uncertainty: float = Field(..., ge=0.0, le=1.0)
    reasoning: str = Field(default="")


class Verdict(BaseModel):
    """A judgment attributed to the registered oracle that produced it."""

    model_config = ConfigDict(frozen=True)

    prediction: float = Field(..., ge=0.0, le=1.0, description="Normalized estimate")
    uncertainty: float = Field(..., ge=0.0, le=1.0, description="Self-reported doubt")
    oracle_id: str = Field(..., description="Producing oracle")
    reasoning: str = Field(default="", description="Human-readable justification")


class Abstention(BaseModel):
    """An oracle call dropped from its phase."""

    oracle_id: str
    role: OracleRole
    reason: FailureReason
    detail: str = ""


class ConsensusResult(BaseModel):
    """Outcome of one pipeline run."""

    oracle_consensus: float = Field(..., ge=0.0, le=1.0, description="Aggregated prediction")
    confidence: float = Field(default=0.0, ge=0.0, description="Aggregate trust after adversarial penalty")
    divergence: float = Field(default=0.0, ge=0.0, description="Mean absolute deviation from consensus")
    timestamp: float = Field(default_factory=time.time)

    # Diagnostics
    adversarial_penalty: float = Field(default=0.0, ge=0.0)
    total_effective_weight: float = Field(default=0.0, ge=0.0)
    signal_count: int = Field(default=0)
    reasoning_count: int = Field(default=0)
    verification_count: int = Field(default=0)
    abstentions: list[Abstention] = Field(default_factory=list)
    degenerate: bool = Field(default=False, description="Neutral fallback was used")


class OracleHealth(BaseModel):
    """Read-only snapshot of one oracle's adaptive state."""

    id: str
    role: OracleRole
    weight: float
    accuracy: float
