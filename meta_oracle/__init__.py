"""
Meta-Oracle Consensus Engine

Computes a single trust-weighted estimate from many imperfect oracles and
re-weights those oracles online as realized outcomes come in.

Components:
- MetaOracleEngine: Registry, three-phase pipeline, aggregation, adaptation
- Oracle + behaviors: Signal, reasoning and verification variants
- HealthReporter: Read-only network health projection
- Market feeds: CoinGecko and static feeds for signal oracles

Version: 0.1.0
"""

from meta_oracle.consensus import (
    EngineConfig,
    MetaOracleEngine,
    OracleRegistry,
    RewardWeights,
    WeightAdapter,
    WeightedAggregator,
)
from meta_oracle.errors import (
    ContractViolationError,
    FailureReason,
    MetaOracleError,
    OracleTimeoutError,
    RegistrationError,
    SourceUnavailableError,
)
from meta_oracle.models import (
    Abstention,
    ConsensusResult,
    Judgment,
    OracleHealth,
    OracleRole,
    Signal,
    Verdict,
)
from meta_oracle.oracles import (
    AdversarialVerification,
    ConsistencyVerification,
    MomentumReasoning,
    Oracle,
    OracleBehavior,
    PriceSignal,
    TrendReasoning,
    VolumeSignal,
)
from meta_oracle.reporting import HealthReport, HealthReporter, interpret_consensus

__version__ = "0.1.0"
__all__ = [
    # Engine
    "MetaOracleEngine",
    "EngineConfig",
    "OracleRegistry",
    "WeightedAggregator",
    "WeightAdapter",
    "RewardWeights",
    # Oracles
    "Oracle",
    "OracleBehavior",
    "PriceSignal",
    "VolumeSignal",
    "TrendReasoning",
    "MomentumReasoning",
    "AdversarialVerification",
    "ConsistencyVerification",
    # Models
    "Signal",
    "Judgment",
    "Verdict",
    "ConsensusResult",
    "Abstention",
    "OracleRole",
    "OracleHealth",
    # Reporting
    "HealthReporter",
    "HealthReport",
    "interpret_consensus",
    # Errors
    "MetaOracleError",
    "OracleTimeoutError",
    "SourceUnavailableError",
    "ContractViolationError",
    "RegistrationError",
    "FailureReason",
]
