"""
Health reporting and consensus interpretation.

Pure projections of engine state for presentation: nothing here mutates
oracles, so querying twice without a run or outcome in between yields
identical reports.
"""

from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field

from meta_oracle.models import ConsensusResult, OracleHealth


class OracleStatus(str, Enum):
    ELITE = "ELITE"
    HEALTHY = "HEALTHY"
    STABLE = "STABLE"
    DEGRADED = "DEGRADED"
    CRITICAL = "CRITICAL"


class NetworkStatus(str, Enum):
    OPTIMAL = "OPTIMAL"
    STABLE = "STABLE"
    UNSTABLE = "UNSTABLE"
    CRITICAL = "CRITICAL"


class OracleHealthReport(OracleHealth):
    """Oracle health with presentation fields."""

    status: OracleStatus
    influence: float = Field(..., ge=0.0, description="Share of total weight, percent")


class NetworkHealth(BaseModel):
    total_oracles: int = 0
    avg_accuracy: float = 0.0
    stability: float = Field(default=0.0, description="min(weight) / max(weight)")
    status: NetworkStatus = NetworkStatus.CRITICAL


class HealthReport(BaseModel):
    oracles: list[OracleHealthReport] = Field(default_factory=list)
    network: NetworkHealth = Field(default_factory=NetworkHealth)


class Interpretation(BaseModel):
    """Human-facing reading of a consensus result."""

    signal: str
    risk: str
    strength: float


def oracle_status(weight: float, accuracy: float) -> OracleStatus:
    if weight > 1.5 and accuracy > 0.7:
        return OracleStatus.ELITE
    if weight > 1.0 and accuracy > 0.6:
        return OracleStatus.HEALTHY
    if weight > 0.5 and accuracy > 0.4:
        return OracleStatus.STABLE
    if weight > 0.2:
        return OracleStatus.DEGRADED
    return OracleStatus.CRITICAL


def network_status(avg_accuracy: float, stability: float) -> NetworkStatus:
    if avg_accuracy > 0.7 and stability > 0.6:
        return NetworkStatus.OPTIMAL
    if avg_accuracy > 0.6 and stability > 0.4:
        return NetworkStatus.STABLE
    if avg_accuracy > 0.4:
        return NetworkStatus.UNSTABLE
    return NetworkStatus.CRITICAL


class HealthReporter:
    """Builds HealthReport objects from oracle health snapshots."""

    def report(self, health: Sequence[OracleHealth]) -> HealthReport:
        if not health:
            return HealthReport()

        weights = [h.weight for h in health]
        total_weight = sum(weights)
        avg_accuracy = sum(h.accuracy for h in health) / len(health)
        stability = min(weights) / max(weights)

        oracles = [
            OracleHealthReport(
                **h.model_dump(),
                status=oracle_status(h.weight, h.accuracy),
                influence=h.weight / total_weight * 100,
            )
            for h in health
        ]

        return HealthReport(
            oracles=oracles,
            network=NetworkHealth(
                total_oracles=len(health),
                avg_accuracy=avg_accuracy,
                stability=stability,
                status=network_status(avg_accuracy, stability),
            ),
        )


def interpret_consensus(result: ConsensusResult) -> Interpretation:
    consensus, confidence, divergence = result.oracle_consensus, result.confidence, result.divergence

    signal = "NEUTRAL"
    if consensus > 0.7 and confidence > 0.6:
        signal = "STRONG BULLISH"
    elif consensus > 0.6:
        signal = "BULLISH"
    elif consensus < 0.3 and confidence > 0.6:
        signal = "STRONG BEARISH"
    elif consensus < 0.4:
        signal = "BEARISH"

    risk = "MEDIUM"
    if divergence > 0.3:
        risk = "HIGH"
    elif divergence < 0.1:
        risk = "LOW"

    return Interpretation(signal=signal, risk=risk, strength=confidence)
