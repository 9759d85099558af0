#!/usr/bin/env python3
"""
Basic usage example for the Meta-Oracle engine.

Runs a few consensus rounds against live CoinGecko data, reports whether
the market actually went up after each round, and prints how the oracle
weights adapt.

Usage:
    python examples/basic_usage.py
"""

import asyncio

from dotenv import load_dotenv

load_dotenv()

from meta_oracle import EngineConfig, HealthReporter, MetaOracleEngine, interpret_consensus


async def main():
    print("🔮 Meta-Oracle Consensus Engine")
    print("=" * 50)

    engine = MetaOracleEngine.with_default_oracles(config=EngineConfig.from_env())

    # Realized outcomes for each round: 1.0 = market went up, 0.0 = down
    outcomes = [1.0, 0.0, 1.0]

    try:
        for i, outcome in enumerate(outcomes, 1):
            result = await engine.run_consensus()
            reading = interpret_consensus(result)

            print(f"\nRound {i}")
            print(f"  Consensus:  {result.oracle_consensus:.3f} ({reading.signal})")
            print(f"  Confidence: {result.confidence:.3f}")
            print(f"  Divergence: {result.divergence:.3f} (risk {reading.risk})")
            for abstention in result.abstentions:
                print(f"  ⚠️ {abstention.oracle_id} abstained: {abstention.reason.value}")

            reward = await engine.report_outcome(outcome)
            print(f"  Outcome {outcome:.0f} -> reward {reward:+.4f}")
    finally:
        await engine.close()

    report = HealthReporter().report(engine.get_oracle_health())
    print(f"\nNetwork: {report.network.status.value}")
    for oracle in report.oracles:
        print(
            f"  {oracle.id:<26} {oracle.role.value:<13} "
            f"w={oracle.weight:.3f} acc={oracle.accuracy:.1%} {oracle.status.value}"
        )


if __name__ == "__main__":
    asyncio.run(main())
