"""
Oracle - Registered participant and the behavior interface it delegates to.

An Oracle carries the identity and adaptive state the engine cares about
(id, role, weight, accuracy). What it actually does in a run is supplied
by an OracleBehavior, one of a closed set of variants selected by role:

- signal behaviors observe, and answer ``reason`` with a sentinel
- reasoning behaviors judge the signal set
- verification behaviors judge the signal set looking for manipulation

Behaviors may keep private rolling state (e.g. a price window). That
state lives on the behavior instance owned by a single Oracle and is
never visible to the engine.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from meta_oracle.models import Judgment, OracleHealth, OracleRole, Signal, Verdict

LEARNING_RATE = 0.1
WEIGHT_FLOOR = 0.1
INITIAL_WEIGHT = 1.0
INITIAL_ACCURACY = 0.5

SIGNAL_SENTINEL = Judgment(
    prediction=0.0,
    uncertainty=1.0,
    reasoning="Signal oracle - no reasoning",
)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class OracleBehavior(ABC):
    """Capability interface shared by every oracle variant."""

    role: OracleRole
    default_id: str = ""

    @abstractmethod
    async def observe(self) -> list[Signal]:
        """Produce raw observations for this run."""
        ...

    @abstractmethod
    async def reason(self, signals: Sequence[Signal]) -> Judgment:
        """Judge the full signal set of this run."""
        ...


class SignalBehavior(OracleBehavior):
    """Observe-only variant."""

    role = OracleRole.SIGNAL

    async def reason(self, signals: Sequence[Signal]) -> Judgment:
        return SIGNAL_SENTINEL


class ReasoningBehavior(OracleBehavior):
    """Judge-only variant feeding the consensus."""

    role = OracleRole.REASONING

    async def observe(self) -> list[Signal]:
        return []


class VerificationBehavior(OracleBehavior):
    """Judge-only variant feeding the adversarial penalty."""

    role = OracleRole.VERIFICATION

    async def observe(self) -> list[Signal]:
        return []


class Oracle:
    """
    A registered participant in the consensus network.

    Weight and accuracy persist across runs for the lifetime of the
    engine and are only changed through ``update_weight``.
    """

    def __init__(
        self,
        behavior: OracleBehavior,
        oracle_id: Optional[str] = None,
        weight: float = INITIAL_WEIGHT,
        accuracy: float = INITIAL_ACCURACY,
    ):
        self.behavior = behavior
        self.id = oracle_id or behavior.default_id
        if not self.id:
            raise ValueError(f"{type(behavior).__name__} needs an explicit oracle_id")
        self.role = behavior.role
        self.weight = max(WEIGHT_FLOOR, weight)
        self.accuracy = clamp(accuracy)

    @property
    def effective_weight(self) -> float:
        return self.weight * self.accuracy

    async def observe(self) -> list[Signal]:
        return await self.behavior.observe()

    async def reason(self, signals: Sequence[Signal]) -> Verdict:
        judgment = await self.behavior.reason(signals)
        return Verdict(
            prediction=judgment.prediction,
            uncertainty=judgment.uncertainty,
            oracle_id=self.id,
            reasoning=judgment.reasoning,
        )

    def update_weight(self, reward: float) -> None:
        """Single-step nudge: floor the weight at 0.1, clamp accuracy to [0, 1]."""
        self.weight = max(WEIGHT_FLOOR, self.weight + LEARNING_RATE * reward)
        self.accuracy = clamp(self.accuracy + LEARNING_RATE * reward * 0.1)

    def health(self) -> OracleHealth:
        return OracleHealth(
            id=self.id,
            role=self.role,
            weight=self.weight,
            accuracy=self.accuracy,
        )

    def __repr__(self) -> str:
        return (
            f"Oracle(id={self.id!r}, role={self.role.value}, "
            f"weight={self.weight:.3f}, accuracy={self.accuracy:.3f})"
        )
