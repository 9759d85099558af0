"""
Consensus Engine for the Meta-Oracle.

Components:
- OracleRegistry: Registered oracles keyed by id
- Pipeline: Three-phase signal / reasoning / verification run
- WeightedAggregator: Weighted consensus, penalty, confidence, divergence
- WeightAdapter: Outcome-driven weight and accuracy updates
- MetaOracleEngine: Orchestrates all of the above
"""

from meta_oracle.consensus.adapter import RewardWeights, WeightAdapter
from meta_oracle.consensus.aggregator import NEUTRAL_CONSENSUS, WeightedAggregator
from meta_oracle.consensus.engine import EngineConfig, MetaOracleEngine
from meta_oracle.consensus.pipeline import Pipeline, PipelineOutput
from meta_oracle.consensus.registry import OracleRegistry

__all__ = [
    "OracleRegistry",
    "Pipeline",
    "PipelineOutput",
    "WeightedAggregator",
    "NEUTRAL_CONSENSUS",
    "WeightAdapter",
    "RewardWeights",
    "EngineConfig",
    "MetaOracleEngine",
]
