"""
Main CLI application for the Privacy Intelligence System.

Provides the command-line interface for:
- Analyzing a single website
- Batch analysis from a URL file
- Viewing system status
- Managing configuration
"""

import asyncio
import json
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from privacy_intel import __version__
from privacy_intel.analysis import (
    AnalysisOptions,
    BatchItem,
    BatchResult,
    SiteAnalysis,
    analyze_website,
    analyze_websites,
    load_urls,
)
from privacy_intel.config import Settings, get_default_config_path, load_config
from privacy_intel.core.exceptions import BatchError, PrivacyIntelError
from privacy_intel.extraction.models import SignalCategory
from privacy_intel.fetch.models import FetchOptions
from privacy_intel.llm.summarizer import AnthropicSummarizer
from privacy_intel.utils.logging import get_logger, setup_logging

# Initialize Typer app
app = typer.Typer(
    name="privacy-intel",
    help="Privacy Intelligence System - Analyze website privacy, trust and compliance signals",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(
            f"[bold blue]Privacy Intelligence System[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """
    Privacy Intelligence System - Website privacy and trust analysis.

    Use 'privacy-intel --help' for command list.
    """
    try:
        settings = load_config(config_file or get_default_config_path())
    except PrivacyIntelError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.logging, level="DEBUG" if verbose else None)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else load_config()


def _build_options(
    settings: Settings,
    ai: bool,
    timeout: Optional[int],
) -> AnalysisOptions:
    fetch = FetchOptions.from_settings(settings.fetch)
    if timeout is not None:
        fetch = replace(fetch, timeout_ms=timeout)
    return AnalysisOptions(fetch=fetch, use_ai=ai)


@app.command()
def analyze(
    ctx: typer.Context,
    url: str = typer.Argument(
        ...,
        help="Website URL to analyze",
    ),
    ai: bool = typer.Option(
        True,
        "--ai/--no-ai",
        help="Request an AI summary when an API key is configured",
    ),
    headless: Optional[bool] = typer.Option(
        None,
        "--headless/--no-headless",
        help="Run browser in headless mode",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Per-attempt fetch timeout in milliseconds",
        min=1000,
        max=180000,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the analysis as JSON",
    ),
) -> None:
    """
    Analyze one website's privacy policy and trust center.

    Example:
        privacy-intel analyze example.com --no-ai
    """
    settings = _settings(ctx).model_copy(deep=True)
    if headless is not None:
        settings.browser.headless = headless
    options = _build_options(settings, ai, timeout)

    if not json_output:
        console.print(Panel(
            f"[bold]Analyzing:[/bold] {url}\n"
            f"[dim]AI: {'on' if ai else 'off'} | Timeout: {options.fetch.timeout_ms}ms | "
            f"Retries: {options.fetch.max_retries}[/dim]",
            title="Privacy Intelligence",
            border_style="blue",
        ))

    try:
        analysis = asyncio.run(analyze_website(url, settings, options))
    except KeyboardInterrupt:
        console.print("\n[yellow]Analysis cancelled by user[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        logger.exception("Analysis failed")
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(analysis.to_dict(), indent=2))
    else:
        _print_analysis(analysis)


def _print_analysis(analysis: SiteAnalysis) -> None:
    """Display a single-site analysis."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Company", f"[bold]{analysis.company_name}[/bold]")
    table.add_row("URL", analysis.main_url)
    table.add_row("Privacy policy", analysis.links.privacy_policy or "[yellow]not found[/yellow]")
    table.add_row("Trust center", analysis.links.trust_center or "[yellow]not found[/yellow]")
    table.add_row("Terms of service", analysis.links.terms_of_service or "[dim]-[/dim]")
    table.add_row("Data collection", str(analysis.signal_count(SignalCategory.DATA_COLLECTION)))
    table.add_row("Security", str(analysis.signal_count(SignalCategory.SECURITY_MEASURES)))
    table.add_row("Compliance", str(analysis.signal_count(SignalCategory.COMPLIANCE)))

    if analysis.contact.emails:
        table.add_row("Emails", ", ".join(analysis.contact.emails))

    table.add_row("Processing time", f"{analysis.processing_time_ms}ms")
    console.print(table)

    console.print(f"\n[bold]Privacy:[/bold] {analysis.privacy_summary}")
    console.print(f"[bold]Trust:[/bold] {analysis.trust_summary}")

    for verdict in analysis.verdicts:
        if not verdict.passed:
            console.print(f"[yellow]⚠ {verdict.validator}:[/yellow] {verdict.reason}")

    ai_summary = analysis.ai_summary
    if ai_summary is None:
        console.print("\n[dim]No AI summary[/dim]")
        return

    scores = Table(title="AI Assessment", show_header=True)
    scores.add_column("Privacy", justify="right")
    scores.add_column("Security", justify="right")
    scores.add_column("Compliance", justify="right")
    scores.add_row(
        f"{ai_summary.privacy_score}/10",
        f"{ai_summary.security_score}/10",
        f"{ai_summary.compliance_score}/10",
    )
    console.print()
    console.print(scores)
    console.print(Panel(ai_summary.summary, title="Summary", border_style="green"))

    if ai_summary.key_findings:
        console.print("[bold]Key findings:[/bold]")
        for finding in ai_summary.key_findings:
            console.print(f"  • {finding}")


@app.command()
def batch(
    ctx: typer.Context,
    file: Path = typer.Argument(
        ...,
        help="File with one URL per line (# comments allowed)",
    ),
    ai: bool = typer.Option(
        True,
        "--ai/--no-ai",
        help="Request AI summaries when an API key is configured",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Per-attempt fetch timeout in milliseconds",
        min=1000,
        max=180000,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the batch result as JSON",
    ),
) -> None:
    """
    Analyze every website listed in FILE, one after another.

    Example:
        privacy-intel batch sites.txt --no-ai
    """
    try:
        urls = load_urls(file)
    except BatchError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)

    settings = _settings(ctx)
    options = _build_options(settings, ai, timeout)

    def report(item: BatchItem) -> None:
        if not json_output:
            console.print(f"[green]✓[/green] {item.url}: {item.analysis.company_name}")

    if not json_output:
        console.print(Panel(
            f"[bold]Batch:[/bold] {len(urls)} websites from {file}\n"
            f"[dim]Delay: {settings.batch.inter_request_delay_seconds}s between sites[/dim]",
            title="Privacy Intelligence",
            border_style="blue",
        ))

    try:
        result = asyncio.run(analyze_websites(urls, settings, options, output_sink=report))
    except KeyboardInterrupt:
        console.print("\n[yellow]Batch cancelled by user[/yellow]")
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_batch(result)


def _format_score(score: float | None) -> str:
    return "N/A" if score is None else f"{score:.1f}"


def _print_batch(result: BatchResult) -> None:
    """Display batch totals, failures and aggregate scores."""
    for item in result.items:
        if not item.success:
            console.print(f"[red]✗[/red] {item.url}: {item.error}")

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="bold")

    aggregate = result.aggregate
    table.add_row("Total", str(result.total))
    table.add_row("Successful", f"[green]{result.successful}[/green]")
    table.add_row("Failed", f"[red]{result.failed}[/red]" if result.failed else "0")
    table.add_row("Avg privacy score", _format_score(aggregate.avg_privacy_score))
    table.add_row("Avg security score", _format_score(aggregate.avg_security_score))
    table.add_row("Avg compliance score", _format_score(aggregate.avg_compliance_score))
    table.add_row("Companies", ", ".join(aggregate.top_company_names) or "-")

    console.print()
    console.print(table)


@app.command()
def status(ctx: typer.Context) -> None:
    """
    Show system status.

    Displays AI availability and the effective fetch settings.
    """
    settings = _settings(ctx)

    console.print(Panel(
        f"[bold]Privacy Intelligence System[/bold] v{__version__}",
        border_style="blue",
    ))

    summarizer = AnthropicSummarizer(settings.llm)

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row(
        "AI summaries",
        "✓ Available" if summarizer.is_available()
        else f"✗ Unavailable (set {settings.llm.api_key_env_var})",
    )
    table.add_row("AI model", settings.llm.model_name)
    table.add_row("Browser", f"{settings.browser.browser_type} (headless={settings.browser.headless})")
    table.add_row("Prefer rendering", str(settings.fetch.prefer_rendering))
    table.add_row("Timeout", f"{settings.fetch.timeout_ms}ms")
    table.add_row("Max retries", str(settings.fetch.max_retries))
    table.add_row("Batch delay", f"{settings.batch.inter_request_delay_seconds}s")

    console.print(table)


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(
        False,
        "--show",
        "-s",
        help="Show current configuration",
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Create default configuration file",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path for config file",
    ),
) -> None:
    """
    Configuration management.

    View or initialize configuration files.

    Examples:
        privacy-intel config --show
        privacy-intel config --init --output ./my-config.yaml
    """
    if init:
        _init_config(output)
    elif show:
        _show_config(_settings(ctx))
    else:
        console.print(
            "Use --show to view config or --init to create default config")


def _show_config(settings: Settings) -> None:
    """Show current configuration."""
    config_dict = settings.model_dump(mode="json")

    console.print(Panel(
        "[bold]Current Configuration[/bold]",
        border_style="blue",
    ))

    for section, values in config_dict.items():
        console.print(f"\n[bold cyan]{section}:[/bold cyan]")
        if isinstance(values, dict):
            for key, value in values.items():
                console.print(f"  {key}: [dim]{value}[/dim]")
        else:
            console.print(f"  {values}")


def _init_config(output: Optional[Path]) -> None:
    """Create default configuration file."""
    import yaml

    config_dict = Settings().model_dump(mode="json")
    output_path = output or Path("config.yaml")

    if output_path.exists():
        if not typer.confirm(f"File {output_path} exists. Overwrite?"):
            raise typer.Exit(0)

    with open(output_path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    console.print(f"[green]✓[/green] Configuration saved to: {output_path}")


if __name__ == "__main__":
    app()
