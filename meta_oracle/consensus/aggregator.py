"""
Weighted Consensus Aggregator

Combines reasoning verdicts into a consensus score and verification
verdicts into an adversarial penalty:

    effective_weight_i  = weight_i * accuracy_i
    consensus           = sum(prediction_i * effective_weight_i) / sum(effective_weight_i)
    adversarial_penalty = sum(|prediction_j - consensus| * weight_j)
    confidence          = max(0, sum(effective_weight_i) / registry_size - 0.1 * adversarial_penalty)
    divergence          = mean(|prediction_i - consensus|)

registry_size counts every registered oracle, whatever its role, so
registering more signal or verification oracles dilutes confidence.

When there are no reasoning verdicts, or their total effective weight is
zero, the consensus is undefined. The aggregator then returns the neutral
result (consensus 0.5, confidence 0, divergence 0, penalty 0) flagged as
degenerate.
"""

from typing import Callable, Optional, Sequence

import structlog

from meta_oracle.errors import ContractViolationError
from meta_oracle.models import Abstention, ConsensusResult, OracleRole, Verdict
from meta_oracle.oracles.base import Oracle

logger = structlog.get_logger()

NEUTRAL_CONSENSUS = 0.5
PENALTY_FACTOR = 0.1

OracleLookup = Callable[[str], Optional[Oracle]]


class WeightedAggregator:
    """Turns one run's verdicts into a ConsensusResult."""

    def aggregate(
        self,
        verdicts: Sequence[Verdict],
        verifications: Sequence[Verdict],
        lookup: OracleLookup,
        registry_size: int,
        signal_count: int = 0,
        abstentions: Optional[list[Abstention]] = None,
    ) -> ConsensusResult:
        """
        Aggregate reasoning and verification verdicts.

        Args:
            verdicts: Verdicts from reasoning oracles
            verifications: Verdicts from verification oracles
            lookup: Resolves an oracle id to the registered oracle
            registry_size: Number of registered oracles across all roles
            signal_count: Signals observed this run (diagnostic only)
            abstentions: Oracles dropped from this run (diagnostic only)

        Raises:
            ContractViolationError: If a verdict's oracle id is not registered
                or belongs to an oracle of another role.
        """
        reasoning = [(v, self._resolve(v, lookup, OracleRole.REASONING)) for v in verdicts]
        verifying = [(v, self._resolve(v, lookup, OracleRole.VERIFICATION)) for v in verifications]

        diagnostics = dict(
            signal_count=signal_count,
            reasoning_count=len(reasoning),
            verification_count=len(verifying),
            abstentions=list(abstentions or []),
        )

        total_weight = sum(o.effective_weight for _, o in reasoning)
        if not reasoning or total_weight <= 0:
            logger.warning(
                "No effective reasoning weight, using neutral consensus",
                reasoning_count=len(reasoning),
                total_weight=total_weight,
            )
            return ConsensusResult(
                oracle_consensus=NEUTRAL_CONSENSUS,
                confidence=0.0,
                divergence=0.0,
                adversarial_penalty=0.0,
                total_effective_weight=0.0,
                degenerate=True,
                **diagnostics,
            )

        score = sum(v.prediction * o.effective_weight for v, o in reasoning)
        consensus = min(1.0, max(0.0, score / total_weight))

        penalty = sum(abs(v.prediction - consensus) * o.weight for v, o in verifying)
        confidence = max(0.0, total_weight / max(registry_size, 1) - penalty * PENALTY_FACTOR)
        divergence = sum(abs(v.prediction - consensus) for v, _ in reasoning) / len(reasoning)

        logger.info(
            "Consensus computed",
            consensus=round(consensus, 4),
            confidence=round(confidence, 4),
            divergence=round(divergence, 4),
            adversarial_penalty=round(penalty, 4),
        )

        return ConsensusResult(
            oracle_consensus=consensus,
            confidence=confidence,
            divergence=divergence,
            adversarial_penalty=penalty,
            total_effective_weight=total_weight,
            **diagnostics,
        )

    @staticmethod
    def _resolve(verdict: Verdict, lookup: OracleLookup, role: OracleRole) -> Oracle:
        oracle = lookup(verdict.oracle_id)
        if oracle is None:
            raise ContractViolationError(f"Verdict from unregistered oracle {verdict.oracle_id!r}")
        if oracle.role != role:
            raise ContractViolationError(
                f"Verdict from {verdict.oracle_id!r} ({oracle.role.value}) "
                f"found in the {role.value} phase"
            )
        return oracle
