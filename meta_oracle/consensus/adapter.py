"""
Weight Adapter

Once the realized outcome of a previous run is known, one global reward
is computed from that run's consensus and applied to every registered
oracle, whatever its role:

    correctness = 1 - |actual - consensus|
    reward = a * correctness - b * divergence - c * latency + d * confidence

There is no per-oracle attribution: reasoning, signal and verification
oracles are all nudged together by the same reward.
"""

from typing import Iterable

import structlog
from pydantic import BaseModel, Field

from meta_oracle.models import ConsensusResult
from meta_oracle.oracles.base import Oracle

logger = structlog.get_logger()


class RewardWeights(BaseModel):
    """Coefficients of the reward function."""

    correctness: float = Field(default=1.0, description="a: reward for matching the outcome")
    volatility: float = Field(default=0.3, description="b: penalty on divergence")
    latency: float = Field(default=0.1, description="c: penalty on latency (reserved)")
    consensus: float = Field(default=0.2, description="d: reward for confidence")


class WeightAdapter:
    """Computes the reward for an outcome and applies it to oracles."""

    def __init__(self, weights: RewardWeights | None = None):
        self.weights = weights or RewardWeights()

    def compute_reward(
        self,
        last: ConsensusResult,
        actual_outcome: float,
        latency: float = 0.0,
    ) -> float:
        # Latency is not measured yet and always enters as 0
        correctness = 1 - abs(actual_outcome - last.oracle_consensus)
        w = self.weights
        return (
            w.correctness * correctness
            - w.volatility * last.divergence
            - w.latency * latency
            + w.consensus * last.confidence
        )

    def apply(
        self,
        oracles: Iterable[Oracle],
        last: ConsensusResult,
        actual_outcome: float,
    ) -> float:
        """Apply the outcome's reward to every oracle and return it."""
        reward = self.compute_reward(last, actual_outcome)

        updated = 0
        for oracle in oracles:
            oracle.update_weight(reward)
            updated += 1

        logger.info(
            "Oracle weights updated",
            actual_outcome=actual_outcome,
            last_consensus=round(last.oracle_consensus, 4),
            reward=round(reward, 4),
            oracles=updated,
        )
        return reward
