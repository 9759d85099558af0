"""
Meta-Oracle Engine

Owns the oracle registry and drives one consensus run at a time:

    Registry -> Pipeline -> Aggregator -> ConsensusResult (history)
    outcome  -> WeightAdapter -> Registry (weights mutated in place)

Runs and outcome reports are serialized by a single lock so a run never
reads a weight halfway through an update. Changing the registry while
either is in flight is rejected.
"""

import asyncio
import os
from collections import deque
from typing import Optional

import structlog
from pydantic import BaseModel, Field

from meta_oracle.consensus.adapter import RewardWeights, WeightAdapter
from meta_oracle.consensus.aggregator import WeightedAggregator
from meta_oracle.consensus.pipeline import DEFAULT_TIMEOUT_SECONDS, Pipeline
from meta_oracle.consensus.registry import OracleRegistry
from meta_oracle.errors import RegistrationError
from meta_oracle.models import ConsensusResult, OracleHealth, OracleRole
from meta_oracle.oracles import (
    DEFAULT_ASSETS,
    AdversarialVerification,
    ConsistencyVerification,
    MomentumReasoning,
    Oracle,
    PriceSignal,
    TrendReasoning,
    VolumeSignal,
)
from meta_oracle.tools import COINGECKO_BASE, BaseMarketFeed, CoinGeckoFeed

logger = structlog.get_logger()


class EngineConfig(BaseModel):
    """Configuration for the Meta-Oracle engine."""

    # Per-call budget for observe()/reason()
    oracle_timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    # Number of consensus results kept in memory
    history_size: int = Field(default=100, ge=1)

    # Market data
    assets: list[str] = Field(default_factory=lambda: list(DEFAULT_ASSETS))
    coingecko_base_url: str = Field(default=COINGECKO_BASE)
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    # Reward function
    reward_weights: RewardWeights = Field(default_factory=RewardWeights)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from META_ORACLE_* environment variables."""
        defaults = cls()
        assets = os.getenv("META_ORACLE_ASSETS")
        return cls(
            oracle_timeout_seconds=float(
                os.getenv("META_ORACLE_TIMEOUT_SECONDS", str(defaults.oracle_timeout_seconds))
            ),
            history_size=int(os.getenv("META_ORACLE_HISTORY_SIZE", str(defaults.history_size))),
            assets=[a.strip() for a in assets.split(",") if a.strip()] if assets else defaults.assets,
            coingecko_base_url=os.getenv("META_ORACLE_COINGECKO_URL", defaults.coingecko_base_url),
            http_timeout_seconds=float(
                os.getenv("META_ORACLE_HTTP_TIMEOUT_SECONDS", str(defaults.http_timeout_seconds))
            ),
        )


class MetaOracleEngine:
    """
    Oracle consensus engine with online reputation.

    Usage:
        engine = MetaOracleEngine.with_default_oracles()
        result = await engine.run_consensus()
        ...
        await engine.report_outcome(1.0)
    """

    def __init__(
        self,
        oracles: Optional[list[Oracle]] = None,
        config: Optional[EngineConfig] = None,
        feed: Optional[BaseMarketFeed] = None,
    ):
        self.config = config or EngineConfig()
        self.registry = OracleRegistry(oracles)
        self.pipeline = Pipeline(timeout_seconds=self.config.oracle_timeout_seconds)
        self.aggregator = WeightedAggregator()
        self.adapter = WeightAdapter(self.config.reward_weights)
        self.feed = feed

        self._history: deque[ConsensusResult] = deque(maxlen=self.config.history_size)
        self._lock = asyncio.Lock()

        logger.info(
            "Initialized meta-oracle engine",
            oracles=len(self.registry),
            timeout_seconds=self.config.oracle_timeout_seconds,
            history_size=self.config.history_size,
        )

    @classmethod
    def with_default_oracles(
        cls,
        feed: Optional[BaseMarketFeed] = None,
        config: Optional[EngineConfig] = None,
    ) -> "MetaOracleEngine":
        """Engine with two signal, two reasoning and two verification oracles."""
        config = config or EngineConfig()
        feed = feed or CoinGeckoFeed(
            base_url=config.coingecko_base_url,
            timeout_seconds=config.http_timeout_seconds,
        )
        oracles = [
            Oracle(PriceSignal(feed, config.assets)),
            Oracle(VolumeSignal(feed, config.assets)),
            Oracle(TrendReasoning()),
            Oracle(MomentumReasoning()),
            Oracle(AdversarialVerification()),
            Oracle(ConsistencyVerification()),
        ]
        return cls(oracles=oracles, config=config, feed=feed)

    # -- Registration ------------------------------------------------------

    def register(self, oracle: Oracle) -> None:
        """Register an oracle, replacing any oracle with the same id."""
        self._ensure_idle("register")
        self.registry.register(oracle)

    def unregister(self, oracle_id: str) -> Optional[Oracle]:
        self._ensure_idle("unregister")
        return self.registry.unregister(oracle_id)

    def _ensure_idle(self, action: str) -> None:
        if self._lock.locked():
            raise RegistrationError(f"Cannot {action} while a consensus run or outcome report is in flight")

    # -- Consensus ---------------------------------------------------------

    async def run_consensus(self) -> ConsensusResult:
        """Run the three phases, aggregate, and append the result to history."""
        async with self._lock:
            output = await self.pipeline.run(
                self.registry.by_role(OracleRole.SIGNAL),
                self.registry.by_role(OracleRole.REASONING),
                self.registry.by_role(OracleRole.VERIFICATION),
            )
            result = self.aggregator.aggregate(
                output.verdicts,
                output.verifications,
                lookup=self.registry.get,
                registry_size=len(self.registry),
                signal_count=len(output.signals),
                abstentions=output.abstentions,
            )
            self._history.append(result)
            return result

    async def report_outcome(self, actual_outcome: float) -> Optional[float]:
        """
        Credit or blame every oracle for the most recent consensus.

        Args:
            actual_outcome: Realized ground truth in [0, 1]

        Returns:
            The reward applied, or None if no consensus has been run yet.
        """
        if not 0.0 <= actual_outcome <= 1.0:
            raise ValueError(f"actual_outcome must be within [0, 1], got {actual_outcome}")

        async with self._lock:
            last = self.last_result
            if last is None:
                logger.info("Outcome reported before any consensus, ignoring", actual_outcome=actual_outcome)
                return None
            return self.adapter.apply(self.registry.all(), last, actual_outcome)

    # -- Read-only views ---------------------------------------------------

    def get_oracle_health(self) -> list[OracleHealth]:
        return self.registry.health()

    @property
    def history(self) -> list[ConsensusResult]:
        return list(self._history)

    @property
    def last_result(self) -> Optional[ConsensusResult]:
        return self._history[-1] if self._history else None

    async def close(self) -> None:
        """Clean up resources."""
        if self.feed:
            await self.feed.close()
