"""
Command Line Interface for the Meta-Oracle engine.

Usage:
    meta-oracle run --rounds 3 --outcome 1 --outcome 0
    meta-oracle health --offline
"""

import asyncio
import json
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

app = typer.Typer(
    name="meta-oracle",
    help="Meta-Oracle consensus engine CLI",
    add_completion=False,
)

console = Console()

SIGNAL_COLORS = {
    "STRONG BULLISH": "bold green",
    "BULLISH": "green",
    "NEUTRAL": "yellow",
    "BEARISH": "red",
    "STRONG BEARISH": "bold red",
}

STATUS_COLORS = {
    "ELITE": "bold green",
    "HEALTHY": "green",
    "STABLE": "yellow",
    "DEGRADED": "red",
    "CRITICAL": "bold red",
    "OPTIMAL": "bold green",
    "UNSTABLE": "red",
}


def _build_engine(offline: bool):
    from meta_oracle.consensus import EngineConfig, MetaOracleEngine
    from meta_oracle.tools import MarketQuote, StaticMarketFeed

    load_dotenv()
    config = EngineConfig.from_env()

    feed = None
    if offline:
        feed = StaticMarketFeed(
            [
                MarketQuote(asset="bitcoin", symbol="BTC", price=65000.0, change_24h=2.4, volume_24h=3.1e10),
                MarketQuote(asset="ethereum", symbol="ETH", price=3400.0, change_24h=-1.2, volume_24h=1.4e10),
            ]
        )
    return MetaOracleEngine.with_default_oracles(feed=feed, config=config)


@app.command()
def run(
    rounds: int = typer.Option(1, "--rounds", "-r", min=1, help="Number of consensus rounds"),
    outcome: Optional[list[float]] = typer.Option(
        None, "--outcome", "-o", help="Realized outcome to report after each round (repeatable)"
    ),
    offline: bool = typer.Option(False, "--offline", help="Use a static market feed"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Run consensus rounds, optionally reporting an outcome after each.

    Example:
        meta-oracle run -r 3 -o 1 -o 0 -o 1
    """
    asyncio.run(_run_async(rounds, outcome or [], offline, output_json))


async def _run_async(rounds: int, outcomes: list[float], offline: bool, output_json: bool):
    from meta_oracle.errors import MetaOracleError
    from meta_oracle.reporting import HealthReporter, interpret_consensus

    engine = _build_engine(offline)
    records = []

    try:
        for i in range(rounds):
            result = await engine.run_consensus()
            reward = None
            if i < len(outcomes):
                reward = await engine.report_outcome(outcomes[i])
            records.append((result, reward))
    except (MetaOracleError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    finally:
        await engine.close()

    health = HealthReporter().report(engine.get_oracle_health())

    if output_json:
        console.print_json(
            data={
                "rounds": [
                    {
                        **result.model_dump(mode="json"),
                        "interpretation": interpret_consensus(result).model_dump(),
                        "reward": reward,
                    }
                    for result, reward in records
                ],
                "health": health.model_dump(mode="json"),
            }
        )
        return

    for i, (result, reward) in enumerate(records, 1):
        interpretation = interpret_consensus(result)
        color = SIGNAL_COLORS.get(interpretation.signal, "white")

        table = Table(show_header=False, box=None)
        table.add_column("Label", style="bold")
        table.add_column("Value")
        table.add_row("Consensus", f"{result.oracle_consensus:.3f}")
        table.add_row("Confidence", f"{result.confidence:.3f}")
        table.add_row("Divergence", f"{result.divergence:.3f}")
        table.add_row("Adversarial penalty", f"{result.adversarial_penalty:.3f}")
        table.add_row("Signal", f"[{color}]{interpretation.signal}[/{color}]")
        table.add_row("Risk", interpretation.risk)
        if result.degenerate:
            table.add_row("Note", "[yellow]No effective reasoning weight, neutral fallback[/yellow]")
        for a in result.abstentions:
            table.add_row("Abstained", f"{a.oracle_id} ({a.reason.value})")
        if reward is not None:
            table.add_row("Reward", f"{reward:+.4f}")

        console.print(Panel.fit(table, title=f"🔮 Round {i}"))

    _print_health(health)


@app.command()
def health(
    offline: bool = typer.Option(False, "--offline", help="Use a static market feed"),
):
    """
    Run one round and show oracle network health.
    """
    asyncio.run(_health_async(offline))


async def _health_async(offline: bool):
    from meta_oracle.reporting import HealthReporter

    engine = _build_engine(offline)
    try:
        await engine.run_consensus()
    finally:
        await engine.close()

    _print_health(HealthReporter().report(engine.get_oracle_health()))


def _print_health(report):
    table = Table(title="Oracle Network")
    table.add_column("Oracle", style="bold")
    table.add_column("Role")
    table.add_column("Weight", justify="right")
    table.add_column("Accuracy", justify="right")
    table.add_column("Influence", justify="right")
    table.add_column("Status")

    for o in report.oracles:
        color = STATUS_COLORS.get(o.status.value, "white")
        table.add_row(
            o.id,
            o.role.value,
            f"{o.weight:.3f}",
            f"{o.accuracy:.1%}",
            f"{o.influence:.1f}%",
            f"[{color}]{o.status.value}[/{color}]",
        )

    console.print(table)

    network = report.network
    color = STATUS_COLORS.get(network.status.value, "white")
    console.print(
        f"Network: [{color}]{network.status.value}[/{color}]  "
        f"avg accuracy {network.avg_accuracy:.1%}  stability {network.stability:.1%}"
    )


@app.command()
def config():
    """
    Show current configuration.
    """
    from meta_oracle.consensus import EngineConfig

    load_dotenv()
    settings = EngineConfig.from_env()

    table = Table(title="Meta-Oracle Configuration")
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    for name, value in settings.model_dump().items():
        display = json.dumps(value) if isinstance(value, (list, dict)) else str(value)
        table.add_row(name, display)

    console.print(table)


@app.command()
def version():
    """
    Show version information.
    """
    from meta_oracle import __version__

    console.print(f"[bold]Meta-Oracle Consensus Engine[/bold] v{__version__}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
