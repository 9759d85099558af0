"""
Tests for health reporting and consensus interpretation.
"""

import pytest

from meta_oracle.models import ConsensusResult, OracleHealth, OracleRole
from meta_oracle.reporting import (
    HealthReporter,
    NetworkStatus,
    OracleStatus,
    interpret_consensus,
    network_status,
    oracle_status,
)


def health(oracle_id, weight, accuracy, role=OracleRole.REASONING):
    return OracleHealth(id=oracle_id, role=role, weight=weight, accuracy=accuracy)


class TestOracleStatus:

    @pytest.mark.parametrize(
        "weight,accuracy,expected",
        [
            (1.6, 0.8, OracleStatus.ELITE),
            (1.6, 0.65, OracleStatus.HEALTHY),
            (1.2, 0.5, OracleStatus.STABLE),
            (1.0, 0.5, OracleStatus.STABLE),
            (0.6, 0.3, OracleStatus.DEGRADED),
            (0.1, 0.9, OracleStatus.CRITICAL),
        ],
    )
    def test_tiers(self, weight, accuracy, expected):
        assert oracle_status(weight, accuracy) == expected

    @pytest.mark.parametrize(
        "avg_accuracy,stability,expected",
        [
            (0.8, 0.9, NetworkStatus.OPTIMAL),
            (0.65, 0.5, NetworkStatus.STABLE),
            (0.5, 0.1, NetworkStatus.UNSTABLE),
            (0.3, 1.0, NetworkStatus.CRITICAL),
        ],
    )
    def test_network_tiers(self, avg_accuracy, stability, expected):
        assert network_status(avg_accuracy, stability) == expected


class TestHealthReporter:

    def test_influence_and_network_metrics(self):
        report = HealthReporter().report([
            health("a", 1.0, 0.5),
            health("b", 3.0, 0.7, role=OracleRole.VERIFICATION),
        ])

        a, b = report.oracles
        assert a.influence == pytest.approx(25.0)
        assert b.influence == pytest.approx(75.0)
        assert b.role == OracleRole.VERIFICATION
        assert report.network.total_oracles == 2
        assert report.network.avg_accuracy == pytest.approx(0.6)
        assert report.network.stability == pytest.approx(1 / 3)
        assert report.network.status == NetworkStatus.UNSTABLE

    def test_empty_network(self):
        report = HealthReporter().report([])

        assert report.oracles == []
        assert report.network.total_oracles == 0
        assert report.network.status == NetworkStatus.CRITICAL

    def test_report_is_pure(self):
        snapshot = [health("a", 1.2, 0.6), health("b", 0.4, 0.3)]
        reporter = HealthReporter()

        assert reporter.report(snapshot) == reporter.report(snapshot)


class TestInterpretation:

    @pytest.mark.parametrize(
        "consensus,confidence,expected",
        [
            (0.8, 0.7, "STRONG BULLISH"),
            (0.8, 0.2, "BULLISH"),
            (0.5, 0.9, "NEUTRAL"),
            (0.35, 0.9, "BEARISH"),
            (0.2, 0.7, "STRONG BEARISH"),
            (0.2, 0.1, "BEARISH"),
        ],
    )
    def test_signal(self, consensus, confidence, expected):
        result = ConsensusResult(oracle_consensus=consensus, confidence=confidence, divergence=0.2)

        assert interpret_consensus(result).signal == expected

    @pytest.mark.parametrize("divergence,expected", [(0.35, "HIGH"), (0.2, "MEDIUM"), (0.05, "LOW")])
    def test_risk(self, divergence, expected):
        result = ConsensusResult(oracle_consensus=0.5, confidence=0.4, divergence=divergence)

        interpretation = interpret_consensus(result)
        assert interpretation.risk == expected
        assert interpretation.strength == 0.4
