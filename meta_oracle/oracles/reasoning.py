"""
Reasoning oracles - turn the signal set into a bullishness estimate.
"""

from collections import deque
from typing import Sequence

import structlog

from meta_oracle.models import Judgment, Signal
from meta_oracle.oracles.base import ReasoningBehavior, clamp

logger = structlog.get_logger()

HIGH_VOLUME_THRESHOLD = 1e9


class TrendReasoning(ReasoningBehavior):
    """
    Confidence-weighted trend read of 24h price changes.

    Each price signal lands in one of four bands by percent change
    (> 5, > 0, > -5, otherwise) scored 0.8 / 0.6 / 0.4 / 0.2. The weighted
    band score is scaled up when average volume is high and down otherwise.
    """

    default_id = "trend-reasoning"

    async def reason(self, signals: Sequence[Signal]) -> Judgment:
        price_signals = [s for s in signals if s.has_price]
        volume_signals = [s for s in signals if s.has_volume]

        if not price_signals:
            return Judgment(prediction=0.5, uncertainty=0.9, reasoning="Insufficient price data")

        bullish_score = 0.0
        total_weight = 0.0
        for signal in price_signals:
            change = float(signal.payload.get("change") or 0.0)
            weight = signal.confidence

            if change > 5:
                bullish_score += 0.8 * weight
            elif change > 0:
                bullish_score += 0.6 * weight
            elif change > -5:
                bullish_score += 0.4 * weight
            else:
                bullish_score += 0.2 * weight
            total_weight += weight

        if total_weight == 0:
            return Judgment(prediction=0.5, uncertainty=0.9, reasoning="Price signals carry no confidence")

        avg_volume = (
            sum(s.volume for s in volume_signals) / len(volume_signals)
            if volume_signals else 0.0
        )
        volume_multiplier = 1.1 if avg_volume > HIGH_VOLUME_THRESHOLD else 0.9

        prediction = clamp(bullish_score / total_weight * volume_multiplier)
        uncertainty = clamp(1 - total_weight / len(signals))

        return Judgment(
            prediction=prediction,
            uncertainty=uncertainty,
            reasoning=f"Trend analysis: {prediction * 100:.1f}% bullish confidence",
        )


class MomentumReasoning(ReasoningBehavior):
    """
    Price momentum over a private rolling window.

    Records the first observed price of every run (at most ``window_size``
    values kept) and compares the mean of the last three against the mean
    of everything older.
    """

    default_id = "momentum-reasoning"
    min_samples = 3
    recent_samples = 3

    def __init__(self, window_size: int = 10):
        self._prices: deque[float] = deque(maxlen=window_size)

    @property
    def price_history(self) -> list[float]:
        return list(self._prices)

    async def reason(self, signals: Sequence[Signal]) -> Judgment:
        price_signals = [s for s in signals if s.has_price]

        if not price_signals:
            return Judgment(prediction=0.5, uncertainty=0.8, reasoning="No price data for momentum analysis")

        self._prices.append(price_signals[0].price)

        if len(self._prices) < self.min_samples:
            return Judgment(prediction=0.5, uncertainty=0.7, reasoning="Insufficient history for momentum")

        history = list(self._prices)
        recent = history[-self.recent_samples:]
        older = history[:-self.recent_samples]

        recent_avg = sum(recent) / len(recent)
        older_avg = sum(older) / len(older) if older else 0.0
        momentum = (recent_avg - older_avg) / older_avg if older_avg else 0.0

        prediction = clamp(0.5 + momentum * 2)
        logger.debug("Momentum computed", samples=len(history), momentum=momentum)

        return Judgment(
            prediction=prediction,
            uncertainty=0.3,
            reasoning=f"Momentum: {momentum * 100:.2f}% price velocity",
        )
