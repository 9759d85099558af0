"""
Verification oracles - assess the raw signal set for manipulation.

They look at the same signals the reasoning oracles see, not at the
reasoning verdicts. Their prediction is a trust level in the signals.
"""

from collections import deque
from typing import Sequence

import structlog

from meta_oracle.models import Judgment, Signal
from meta_oracle.oracles.base import VerificationBehavior, clamp

logger = structlog.get_logger()

DUPLICATE_PENALTY = 0.3
OUTLIER_WEIGHT = 0.2
CLUSTER_WEIGHT = 0.1
OUTLIER_DISTANCE = 0.4
CLUSTER_WINDOW_SECONDS = 1.0


def risk_label(suspicion: float) -> str:
    if suspicion > 0.5:
        return "HIGH RISK - Potential manipulation detected"
    if suspicion > 0.2:
        return "MEDIUM RISK - Some anomalies found"
    return "LOW RISK - Signals appear legitimate"


class AdversarialVerification(VerificationBehavior):
    """
    Suspicion score from three independent checks.

    - duplicate content hashes (replayed observations): fixed +0.3
    - confidence outliers further than 0.4 from the mean: up to +0.2
    - timestamps within one second of their neighbour: up to +0.1
    """

    default_id = "adversarial-verification"

    def __init__(self, pattern_log_size: int = 20):
        self._patterns: deque[str] = deque(maxlen=pattern_log_size)

    @property
    def suspicious_patterns(self) -> list[str]:
        return list(self._patterns)

    def suspicion_score(self, signals: Sequence[Signal]) -> float:
        total = len(signals)
        if total == 0:
            return 0.0

        score = 0.0

        hashes = [s.hash for s in signals]
        if len(set(hashes)) < len(hashes):
            score += DUPLICATE_PENALTY
            self._patterns.append("duplicate_hash")

        confidences = [s.confidence for s in signals]
        avg_confidence = sum(confidences) / total
        outliers = [c for c in confidences if abs(c - avg_confidence) > OUTLIER_DISTANCE]
        if outliers:
            score += len(outliers) / total * OUTLIER_WEIGHT
            self._patterns.append("confidence_outlier")

        timestamps = sorted(s.timestamp for s in signals)
        clusters = sum(
            1 for prev, cur in zip(timestamps, timestamps[1:])
            if cur - prev < CLUSTER_WINDOW_SECONDS
        )
        if clusters:
            score += clusters / total * CLUSTER_WEIGHT
            self._patterns.append("timestamp_cluster")

        return score

    async def reason(self, signals: Sequence[Signal]) -> Judgment:
        suspicion = self.suspicion_score(signals)
        if suspicion > 0.5:
            logger.warning("High manipulation risk in signal set", suspicion=suspicion, signals=len(signals))

        return Judgment(
            prediction=max(0.0, 1 - suspicion),
            uncertainty=clamp(suspicion),
            reasoning=f"Adversarial check: {risk_label(suspicion)}",
        )


class ConsistencyVerification(VerificationBehavior):
    """Cross-source price agreement via coefficient of variation."""

    default_id = "consistency-verification"
    min_price_signals = 2

    def __init__(self, history_size: int = 20):
        self._scores: deque[float] = deque(maxlen=history_size)

    @property
    def historical_scores(self) -> list[float]:
        return list(self._scores)

    async def reason(self, signals: Sequence[Signal]) -> Judgment:
        prices = [s.price for s in signals if s.has_price]

        if len(prices) < self.min_price_signals:
            return Judgment(prediction=0.5, uncertainty=0.8, reasoning="Insufficient signals for consistency check")

        avg_price = sum(prices) / len(prices)
        variance = sum((p - avg_price) ** 2 for p in prices) / len(prices)
        std_dev = variance ** 0.5
        cv = std_dev / abs(avg_price) if avg_price else 0.0

        consistency = max(0.0, 1 - cv * 10)
        self._scores.append(consistency)

        return Judgment(
            prediction=consistency,
            uncertainty=clamp(cv),
            reasoning=f"Consistency score: {consistency * 100:.1f}% (CV: {cv * 100:.2f}%)",
        )
