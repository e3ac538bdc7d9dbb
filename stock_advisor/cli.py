"""Command-line interface for the stock advisor with rich output."""

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .configs.advisor_config import AdvisorConfig, load_config
from .exceptions import AdvisorError, ConfigurationError
from .integration.daily_analysis_service import DailyAnalysisOrchestrator, RunResult
from .logging import setup_logging
from .models.recommendation import Recommendation, RecommendationType, price_change_pct
from .scheduler.cron_runner import CronRunner

# Global console instance
console = Console()

RECOMMENDATION_STYLES = {
    RecommendationType.STRONG_BUY: "bold green",
    RecommendationType.BUY: "green",
    RecommendationType.HOLD: "yellow",
    RecommendationType.SELL: "red",
    RecommendationType.STRONG_SELL: "bold red",
}


def print_success(message: str) -> None:
    """Print success message with green color."""
    console.print(f"[bold green]✓[/bold green] {message}")


def print_error(message: str) -> None:
    """Print error message with red color."""
    console.print(f"[bold red]✗[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print warning message with yellow color."""
    console.print(f"[bold yellow]⚠[/bold yellow] {message}")


def build_recommendations_table(recommendations: Sequence[Recommendation], title: str) -> Table:
    """Build a rich table of recommendations.

    Args:
        recommendations: Recommendations to display
        title: Title for the table

    Returns:
        Populated rich Table
    """
    table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("Symbol", style="cyan", no_wrap=True)
    table.add_column("Company")
    table.add_column("Price", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("Recommendation")
    table.add_column("Target", justify="right")
    table.add_column("Stop", justify="right")
    table.add_column("Risk", justify="right")
    table.add_column("Generated")

    for rec in recommendations:
        change = price_change_pct(rec)
        style = RECOMMENDATION_STYLES.get(rec.recommendation, "")
        table.add_row(
            rec.symbol,
            rec.company_name,
            f"${rec.current_price:.2f}",
            f"{change:+.2f}%" if change is not None else "-",
            f"[{style}]{rec.recommendation.value}[/{style}]" if style else rec.recommendation.value,
            f"${rec.target_price:.2f}",
            f"${rec.stop_loss:.2f}",
            f"{rec.risk_level:.1f}/10",
            rec.generated_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def display_recommendations(recommendations: Sequence[Recommendation], title: str) -> None:
    if not recommendations:
        print_warning("No recommendations found")
        return
    console.print(build_recommendations_table(recommendations, title))


def display_status(status: Dict[str, Any]) -> None:
    """Display orchestrator status as a metric/value table."""
    table = Table(title="Advisor Status", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    for key, value in status.items():
        if key == "recommendation_breakdown":
            formatted_value = ", ".join(f"{k}: {v}" for k, v in sorted(value.items())) or "-"
        elif value is None:
            formatted_value = "-"
        else:
            formatted_value = str(value)
        table.add_row(key.replace("_", " ").title(), formatted_value)

    console.print(table)


def display_run_result(result: RunResult) -> None:
    if result.rejected:
        print_warning("A run is already in progress; trigger rejected")
        return

    console.print(
        Panel(
            f"Analysed [bold]{result.analyses_count}[/bold] of {len(result.symbols)} symbols, "
            f"generated [bold]{result.recommendation_count}[/bold] recommendations"
            + (f" in {result.duration_seconds:.1f}s" if result.duration_seconds is not None else ""),
            title=f"Run #{result.run_number}",
            border_style="cyan",
        )
    )
    display_recommendations(result.recommendations, "Daily Stock Recommendations")
    if result.report_path:
        print_success(f"Report written to {result.report_path}")


async def _run_once(orchestrator: DailyAnalysisOrchestrator) -> RunResult:
    try:
        return await orchestrator.trigger_manual_run()
    finally:
        await orchestrator.close()


def cmd_run(args: argparse.Namespace, config: AdvisorConfig) -> int:
    """Run one analysis batch now."""
    if args.max_symbols is not None:
        config.orchestrator.max_symbols_per_run = args.max_symbols

    orchestrator = DailyAnalysisOrchestrator(config)
    result = asyncio.run(_run_once(orchestrator))
    display_run_result(result)
    return 1 if result.rejected else 0


async def _serve(runner: CronRunner, stop_event: asyncio.Event) -> None:
    runner.register_jobs()
    runner.start()
    try:
        await stop_event.wait()
    finally:
        runner.stop()


def cmd_schedule(args: argparse.Namespace, config: AdvisorConfig) -> int:
    """Run the cron scheduler until interrupted."""
    if not config.scheduler.enabled:
        print_warning("Scheduler is disabled in configuration")
        return 1

    orchestrator = DailyAnalysisOrchestrator(config)
    runner = CronRunner(config.scheduler, orchestrator)
    console.print(
        f"[cyan]ℹ[/cyan] Daily analysis scheduled at "
        f"{config.scheduler.hour:02d}:{config.scheduler.minute:02d} {config.scheduler.timezone}. "
        "Press Ctrl+C to stop."
    )

    async def serve() -> None:
        try:
            await _serve(runner, asyncio.Event())
        finally:
            await orchestrator.close()

    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        print_success("Scheduler stopped")
    return 0


def cmd_latest(args: argparse.Namespace, config: AdvisorConfig) -> int:
    """Show the most recent stored recommendations."""
    orchestrator = DailyAnalysisOrchestrator(config)
    try:
        stored = orchestrator.latest_recommendations(args.limit)
    finally:
        orchestrator.store.close()
    display_recommendations([s.recommendation for s in stored], f"Latest {args.limit} Recommendations")
    return 0


def cmd_symbol(args: argparse.Namespace, config: AdvisorConfig) -> int:
    """Show stored recommendations for one symbol."""
    symbol = args.symbol.upper()
    orchestrator = DailyAnalysisOrchestrator(config)
    try:
        stored = orchestrator.recommendations_for(symbol)
    finally:
        orchestrator.store.close()
    display_recommendations([s.recommendation for s in stored], f"Recommendations for {symbol}")
    return 0


def cmd_status(args: argparse.Namespace, config: AdvisorConfig) -> int:
    """Show the advisor status and the latest batch breakdown."""
    orchestrator = DailyAnalysisOrchestrator(config)
    try:
        display_status(orchestrator.status())
    finally:
        orchestrator.store.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stock-advisor",
        description="Stock Advisor CLI - daily news-driven stock recommendations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:

  stock-advisor run --max-symbols 5
  stock-advisor schedule --config advisor.yaml
  stock-advisor latest --limit 20
  stock-advisor symbol AAPL
  stock-advisor status
        """,
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to advisor YAML config")
    parser.add_argument("--log-level", type=str, default=None, help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", help="Command to run", metavar="COMMAND")

    run_parser = subparsers.add_parser("run", help="Run the daily analysis now")
    run_parser.add_argument("--max-symbols", type=int, default=None, help="Analyse at most this many symbols")
    run_parser.set_defaults(func=cmd_run)

    schedule_parser = subparsers.add_parser("schedule", help="Run the daily analysis on its cron schedule")
    schedule_parser.set_defaults(func=cmd_schedule)

    latest_parser = subparsers.add_parser("latest", help="Show the latest stored recommendations")
    latest_parser.add_argument("--limit", "-n", type=int, default=10, help="Number of rows (default: 10)")
    latest_parser.set_defaults(func=cmd_latest)

    symbol_parser = subparsers.add_parser("symbol", help="Show stored recommendations for a symbol")
    symbol_parser.add_argument("symbol", type=str, help="Ticker symbol, e.g. AAPL")
    symbol_parser.set_defaults(func=cmd_symbol)

    status_parser = subparsers.add_parser("status", help="Show advisor status")
    status_parser.set_defaults(func=cmd_status)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
        if args.log_level:
            config.output.log_level = args.log_level
        setup_logging(config.output)
        return args.func(args, config)
    except ConfigurationError as e:
        print_error(str(e))
        if e.config_path:
            console.print(f"\n[cyan]Configuration file:[/cyan] {e.config_path}")
        for error in e.errors:
            loc = ".".join(str(part) for part in error.get("loc", ()))
            console.print(f"  • {loc}: {error.get('msg')}")
        return 2
    except AdvisorError as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print_warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
