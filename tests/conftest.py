"""
Pytest fixtures for Meta-Oracle tests.
"""

import asyncio

import pytest

from meta_oracle.models import Judgment, OracleRole, Signal
from meta_oracle.oracles import Oracle, ReasoningBehavior, SignalBehavior, VerificationBehavior
from meta_oracle.tools import MarketQuote, StaticMarketFeed


class FixedReasoning(ReasoningBehavior):
    """Always predicts the same value."""

    def __init__(self, prediction: float, uncertainty: float = 0.1):
        self.prediction = prediction
        self.uncertainty = uncertainty
        self.seen: list[int] = []

    async def reason(self, signals):
        self.seen.append(len(signals))
        return Judgment(prediction=self.prediction, uncertainty=self.uncertainty, reasoning="fixed")


class FixedVerification(VerificationBehavior):
    """Always reports the same trust level."""

    def __init__(self, prediction: float):
        self.prediction = prediction

    async def reason(self, signals):
        return Judgment(prediction=self.prediction, uncertainty=0.0, reasoning="fixed")


class FixedSignal(SignalBehavior):
    """Emits the given signals every run."""

    def __init__(self, signals: list[Signal]):
        self.signals = signals

    async def observe(self):
        return list(self.signals)


class SlowReasoning(ReasoningBehavior):
    """Stalls far longer than any test timeout."""

    async def reason(self, signals):
        await asyncio.sleep(30)
        return Judgment(prediction=1.0, uncertainty=0.0)


class BrokenReasoning(ReasoningBehavior):
    """Raises an unexpected error."""

    async def reason(self, signals):
        raise RuntimeError("model crashed")


@pytest.fixture
def quotes():
    return [
        MarketQuote(asset="bitcoin", symbol="BTC", price=65000.0, change_24h=6.0, volume_24h=3e10),
        MarketQuote(asset="ethereum", symbol="ETH", price=3400.0, change_24h=-1.5, volume_24h=1.5e10),
    ]


@pytest.fixture
def static_feed(quotes):
    return StaticMarketFeed(quotes)


@pytest.fixture
def failing_feed():
    return StaticMarketFeed(fail=True)


@pytest.fixture
def make_signal():
    """Factory for signals with explicit, well-separated timestamps."""
    counter = {"n": 0}

    def _make(payload, confidence=0.9, source="test", timestamp=None, hash=None):
        counter["n"] += 1
        return Signal.create(
            source=source,
            confidence=confidence,
            payload=payload,
            timestamp=timestamp if timestamp is not None else counter["n"] * 10.0,
            hash=hash,
        )

    return _make


@pytest.fixture
def make_oracle():
    """Factory for oracles with fixed predictions."""

    def _make(oracle_id, prediction, role=OracleRole.REASONING, weight=1.0, accuracy=0.5):
        if role == OracleRole.REASONING:
            behavior = FixedReasoning(prediction)
        elif role == OracleRole.VERIFICATION:
            behavior = FixedVerification(prediction)
        else:
            behavior = FixedSignal([])
        return Oracle(behavior, oracle_id=oracle_id, weight=weight, accuracy=accuracy)

    return _make


@pytest.fixture
def scenario_oracles(make_oracle):
    """Two reasoning oracles: 0.8 at 1.0/0.5 and 0.4 at 2.0/1.0."""
    return [
        make_oracle("bull", 0.8, weight=1.0, accuracy=0.5),
        make_oracle("bear", 0.4, weight=2.0, accuracy=1.0),
    ]


@pytest.fixture
def slow_oracle():
    return Oracle(SlowReasoning(), oracle_id="slow")


@pytest.fixture
def broken_oracle():
    return Oracle(BrokenReasoning(), oracle_id="broken")


@pytest.fixture
def make_signal_oracle():
    def _make(oracle_id, signals):
        return Oracle(FixedSignal(signals), oracle_id=oracle_id)

    return _make
