"""CLI interface for domain SEO analysis."""

import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .accounts import AccountService, SQLiteUserRepository
from .analytics import TIME_FRAMES, AnalyticsService
from .checkers.pricing_service import PROVIDERS, build_pricing_service
from .config import load_config
from .exceptions import AccountError, InvalidDomainError
from .llm_client import LLMClient
from .scoring import AnalysisResult, DomainAnalyzer
from .utils.cache import AvailabilityCache
from .utils.results_store import ResultsStore

console = Console()


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # Suppress noisy lookup libraries
    for noisy in ("whois", "dns", "httpx"):
        logging.getLogger(noisy).setLevel(logging.CRITICAL)


def _account_service(config: dict) -> AccountService:
    acc = config['accounts']
    return AccountService(
        SQLiteUserRepository(acc['db_file']),
        trial_days=acc['trial_days'],
        free_daily_limit=acc['free_daily_limit'],
        free_compare_limit=acc['free_compare_limit'],
        max_compare=acc['max_compare'],
    )


def _analyzer(config: dict, pricing: Optional[str], seed: Optional[int]) -> DomainAnalyzer:
    return DomainAnalyzer(pricing_service=build_pricing_service(config, provider=pricing, seed=seed))


def _fmt(value: float) -> str:
    return f"{value:.1f}" if isinstance(value, float) else str(value)


def _print_insights(title: str, insights, style: str, details: bool):
    if not insights:
        return
    console.print(f"\n[bold {style}]{title}:[/bold {style}]")
    for insight in insights:
        console.print(f"  - {insight.message}")
        if details:
            console.print(f"    [dim]{insight.detail}[/dim]")


def print_analysis(result: AnalysisResult, details: bool = False):
    m = result.metrics
    console.print(f"\n[bold]Domain:[/bold] {result.domain}")
    console.print(f"[bold green]Overall Score:[/bold green] {m.overall_score}/10")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Metric")
    table.add_column("Score", justify="right")
    table.add_row("Length", _fmt(m.length))
    table.add_row("Keywords", "yes" if m.has_keywords else "no")
    table.add_row("Memorability", _fmt(m.memorability))
    table.add_row("Brandability", _fmt(m.brandability))
    table.add_row("Keyword placement", _fmt(m.keyword_placement))
    table.add_row("Extension", _fmt(m.domain_extension))
    console.print(table)

    _print_insights("Strengths", result.strengths, "green", details)
    _print_insights("Weaknesses", result.weaknesses, "red", details)
    _print_insights("Recommendations", result.recommendations, "cyan", details)

    if result.pricing:
        p = result.pricing
        status = "[green]available[/green]" if p.available else "[red]registered[/red]"
        price = f"{p.price:,.0f} {p.currency}" if p.price is not None else "-"
        console.print(f"\n[bold]Pricing:[/bold] {status}, {price}, registrar: {p.registrar or '-'} "
                      f"[dim]({p.source})[/dim]")


def _gate(ctx, config: dict, email: Optional[str], domain_count: int):
    """Apply tier limits when a user is given."""
    if not email:
        return
    accounts = _account_service(config)
    user = accounts.sign_in(email)

    limit = accounts.max_compare_domains(user)
    if domain_count > limit:
        console.print(f"[red]Your plan can compare up to {limit} domains at a time.[/red]")
        ctx.exit(1)

    if not accounts.record_usage(user):
        console.print(f"[red]Daily limit reached: free users can analyze up to "
                      f"{accounts.free_daily_limit} domains per day.[/red]")
        ctx.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--config', 'config_path', default=None, help='Path to YAML config file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """domainseo - score domain names for SEO friendliness."""
    setup_logging(verbose)
    ctx.obj = load_config(config_path)


@cli.command()
@click.argument('domain')
@click.option('--pricing', type=click.Choice(PROVIDERS), default=None, help='Pricing provider')
@click.option('--seed', type=int, default=None, help='Seed for estimated pricing')
@click.option('--details/--no-details', default=False, help='Show explanation text')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON instead of a report')
@click.option('--save/--no-save', default=True, help='Store the analysis in the history database')
@click.option('--user', 'email', default=None, help='Count usage against this account')
@click.pass_context
def analyze(ctx, domain, pricing, seed, details, as_json, save, email):
    """Analyze a single domain."""
    config = ctx.obj
    try:
        analyzer = _analyzer(config, pricing, seed)
        result = analyzer.evaluate(domain)
        _gate(ctx, config, email, 1)
        analyzer.enrich(result)
    except (InvalidDomainError, AccountError) as e:
        console.print(f"[red]{e}[/red]")
        ctx.exit(1)

    if save:
        ResultsStore(config['store']['db_file']).add(result)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        print_analysis(result, details=details)


@cli.command()
@click.argument('domains', nargs=-1, required=True)
@click.option('--pricing', type=click.Choice(PROVIDERS), default=None, help='Pricing provider')
@click.option('--seed', type=int, default=None, help='Seed for estimated pricing')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON instead of a table')
@click.option('--save/--no-save', default=True, help='Store the analyses in the history database')
@click.option('--user', 'email', default=None, help='Apply this account\'s comparison limits')
@click.pass_context
def compare(ctx, domains, pricing, seed, as_json, save, email):
    """Compare several domains and pick the best."""
    config = ctx.obj
    try:
        analyzer = _analyzer(config, pricing, seed)
        for domain in domains:
            analyzer.evaluate(domain)
        _gate(ctx, config, email, len(domains))
        comparison = analyzer.compare(list(domains))
    except (InvalidDomainError, AccountError) as e:
        console.print(f"[red]{e}[/red]")
        ctx.exit(1)

    if save:
        ResultsStore(config['store']['db_file']).add_batch(comparison.domains)

    if as_json:
        click.echo(json.dumps(comparison.to_dict(), indent=2))
        return

    table = Table(title="Domain Comparison")
    table.add_column("Domain", style="cyan")
    table.add_column("Overall", justify="right", style="green")
    table.add_column("Length", justify="right")
    table.add_column("Memorable", justify="right")
    table.add_column("Brand", justify="right")
    table.add_column("Placement", justify="right")
    table.add_column("TLD", justify="right")
    table.add_column("Price", justify="right", style="dim")

    for r in comparison.domains:
        m = r.metrics
        price = f"{r.pricing.price:,.0f}" if r.pricing and r.pricing.price is not None else "-"
        marker = " *" if r.domain == comparison.best_choice else ""
        table.add_row(r.domain + marker, str(m.overall_score), _fmt(m.length), _fmt(m.memorability),
                      _fmt(m.brandability), _fmt(m.keyword_placement), _fmt(m.domain_extension), price)

    console.print(table)
    console.print(f"\n[bold green]Best choice:[/bold green] {comparison.best_choice}")


@cli.command()
@click.argument('domain')
@click.option('--time-frame', '-t', type=click.Choice(TIME_FRAMES), default='daily')
@click.option('--seed', type=int, default=None, help='Seed for projected data')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON instead of a table')
@click.pass_context
def analytics(ctx, domain, time_frame, seed, as_json):
    """Show traffic and revenue projections for a domain."""
    llm_cfg = ctx.obj['llm']
    client = LLMClient(api_key=llm_cfg['api_key'], model=llm_cfg['model'], timeout=llm_cfg['timeout'])
    service = AnalyticsService(llm_client=client, seed=seed)
    report = asyncio.run(service.fetch_analytics(domain))

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    label = "measured" if report.domain_exists else "projected"
    table = Table(title=f"{domain} ({label}, {time_frame})")
    table.add_column("Period")
    table.add_column("Traffic", justify="right", style="cyan")
    table.add_column("Revenue", justify="right", style="green")
    for traffic, revenue in zip(report.traffic[time_frame], report.revenue[time_frame]):
        table.add_row(traffic.name, f"{traffic.value:,}", f"{revenue.value:,}")
    console.print(table)

    console.print("\n[bold]Key metrics:[/bold]")
    for key, value in report.metrics.items():
        console.print(f"  {key}: {value:,.2f}" if isinstance(value, float) else f"  {key}: {value}")


@cli.command()
@click.option('--min-score', default=None, type=int, help='Minimum overall score')
@click.option('--tld', default=None, help='Filter by extension')
@click.option('--limit', '-n', default=20, help='Number of results to show')
@click.pass_context
def history(ctx, min_score, tld, limit):
    """Show stored analyses."""
    store = ResultsStore(ctx.obj['store']['db_file'])
    stats = store.stats()

    console.print(f"\n[bold]Analyses stored:[/bold] {stats['total']}")
    if stats['total']:
        console.print(f"  Average: {stats['avg_score']}  Best: {stats['max_score']}  "
                      f"Worst: {stats['min_score']}")

    cache_cfg = ctx.obj['cache']
    if Path(cache_cfg['file']).exists():
        cached = AvailabilityCache(cache_file=cache_cfg['file'], ttl_hours=cache_cfg['ttl_hours']).stats()
        console.print(f"[bold]Cached lookups:[/bold] {cached['entries']} "
                      f"({cached['available']} available, {cached['registered']} registered)")

    rows = store.query(min_score=min_score, extension=tld, limit=limit)
    if not rows:
        console.print("[yellow]No analyses found.[/yellow]")
        return

    table = Table()
    table.add_column("Domain", style="cyan")
    table.add_column("Score", justify="right", style="green")
    table.add_column("Avail", justify="center")
    table.add_column("Price", justify="right")
    table.add_column("Runs", justify="right", style="dim")
    for row in rows:
        avail = {1: "[green]Y[/green]", 0: "[red]N[/red]"}.get(row['available'], "[yellow]?[/yellow]")
        price = f"{row['price']:,.0f}" if row['price'] is not None else "-"
        table.add_row(row['domain'], str(row['overall_score']), avail, price, str(row['analysis_count']))
    console.print(table)


@cli.command()
@click.argument('email')
@click.option('--name', default=None, help='Display name')
@click.pass_context
def signup(ctx, email, name):
    """Create an account with a premium trial."""
    accounts = _account_service(ctx.obj)
    try:
        user = accounts.sign_up(email, name=name)
    except AccountError as e:
        console.print(f"[red]{e}[/red]")
        ctx.exit(1)
    console.print(f"[green]Account created for {user.email}.[/green] "
                  f"Trial ends {user.trial_end_date:%Y-%m-%d}.")


@cli.command()
@click.argument('email')
@click.pass_context
def upgrade(ctx, email):
    """Upgrade an account to premium."""
    accounts = _account_service(ctx.obj)
    try:
        user = accounts.upgrade(accounts.get(email))
    except AccountError as e:
        console.print(f"[red]{e}[/red]")
        ctx.exit(1)
    console.print(f"[green]{user.email} is now premium.[/green]")


@cli.command()
@click.argument('email')
@click.pass_context
def whoami(ctx, email):
    """Show tier and usage for an account."""
    accounts = _account_service(ctx.obj)
    try:
        user = accounts.sign_in(email)
    except AccountError as e:
        console.print(f"[red]{e}[/red]")
        ctx.exit(1)

    console.print(f"[bold]{user.email}[/bold] ({user.tier.value})")
    if accounts.is_in_trial(user):
        console.print(f"  Trial: {accounts.trial_hours_remaining(user)} hours remaining")
    limit = "unlimited" if accounts.is_premium(user) else str(accounts.free_daily_limit)
    console.print(f"  Analyses today: {user.daily_usage} / {limit}")
    console.print(f"  Compare up to: {accounts.max_compare_domains(user)} domains")


def main(argv: Optional[List[str]] = None):
    cli(argv)


if __name__ == '__main__':
    main()
