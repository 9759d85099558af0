"""
Oracles for the Meta-Oracle engine.

Components:
- Oracle: Registered participant (id, role, weight, accuracy)
- OracleBehavior: Capability interface (observe / reason)
- Signal behaviors: PriceSignal, VolumeSignal
- Reasoning behaviors: TrendReasoning, MomentumReasoning
- Verification behaviors: AdversarialVerification, ConsistencyVerification
"""

from meta_oracle.oracles.base import (
    LEARNING_RATE,
    WEIGHT_FLOOR,
    Oracle,
    OracleBehavior,
    ReasoningBehavior,
    SignalBehavior,
    VerificationBehavior,
)
from meta_oracle.oracles.reasoning import MomentumReasoning, TrendReasoning
from meta_oracle.oracles.signal import DEFAULT_ASSETS, PriceSignal, VolumeSignal
from meta_oracle.oracles.verification import (
    DUPLICATE_PENALTY,
    AdversarialVerification,
    ConsistencyVerification,
)

__all__ = [
    # Base
    "Oracle",
    "OracleBehavior",
    "SignalBehavior",
    "ReasoningBehavior",
    "VerificationBehavior",
    "LEARNING_RATE",
    "WEIGHT_FLOOR",
    # Signal
    "PriceSignal",
    "VolumeSignal",
    "DEFAULT_ASSETS",
    # Reasoning
    "TrendReasoning",
    "MomentumReasoning",
    # Verification
    "AdversarialVerification",
    "ConsistencyVerification",
    "DUPLICATE_PENALTY",
]
