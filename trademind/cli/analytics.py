"""Analytics commands for TradeMind CLI.

Displays dashboard metrics, the equity curve, the monthly
calendar and P&L breakdowns for the active ledger.
"""

from datetime import date

import click
from rich.panel import Panel
from rich.table import Table

from trademind.cli.utils import console, format_money, open_profile, score_color
from trademind.engine import build_equity_curve, calculate_metrics
from trademind.engine.analytics import pnl_by_setup, pnl_by_strategy, summarize_month
from trademind.engine.metrics import return_percent


@click.command()
@click.pass_context
def metrics(ctx: click.Context) -> None:
    """Display performance and discipline metrics.

    \b
    Examples:
      trademind metrics
    """
    profile = open_profile(ctx)
    result = calculate_metrics(profile.trades, profile.initial_capital)
    balance = profile.initial_capital + result.total_pnl
    color = score_color(result.discipline_score)

    text = (
        f"[bold]{profile.name}[/bold] (since {profile.start_date:%Y-%m-%d})\n\n"
        f"Balance:        ${balance:,.2f} "
        f"({return_percent(profile.trades, profile.initial_capital):+.2f}%)\n"
        f"Total P&L:      {format_money(result.total_pnl)}\n"
        f"Average P&L:    {format_money(result.average_pnl)}\n"
        f"Win Rate:       {result.win_rate:.1f}%\n"
        f"Max Drawdown:   [red]${result.max_drawdown:,.2f}[/red]\n"
        f"Discipline:     [{color}]{result.discipline_score:.0f}%[/{color}]\n\n"
        f"[dim]Trades: {result.total_trades}[/dim]"
    )

    console.print(Panel(
        text,
        title="[bold cyan]Performance Overview[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.pass_context
def equity(ctx: click.Context) -> None:
    """Display the account balance curve."""
    profile = open_profile(ctx)
    points = build_equity_curve(profile.trades, profile.initial_capital)

    table = Table(
        title="Equity Curve",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("P&L", justify="right")
    table.add_column("Balance", justify="right")

    for point in points:
        table.add_row(
            point.label,
            format_money(point.pnl) if point.timestamp is not None else "-",
            f"${point.balance:,.2f}",
        )

    console.print(table)


@click.command()
@click.option(
    "--month",
    type=click.DateTime(formats=["%Y-%m"]),
    default=None,
    help="Month to show (YYYY-MM). Defaults to the current month.",
)
@click.pass_context
def calendar(ctx: click.Context, month) -> None:
    """Display daily P&L for a month."""
    profile = open_profile(ctx)
    target = month.date() if month else date.today()
    summary = summarize_month(profile.trades, target.year, target.month)

    if not summary.days:
        console.print(Panel(
            "[dim]No trades this month[/dim]",
            title=f"[bold]{target:%B %Y}[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=f"{target:%B %Y}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Day", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("P&L", justify="right")

    for day, stats in summary.days.items():
        table.add_row(
            date(summary.year, summary.month, day).strftime("%a %d"),
            str(stats.count),
            str(stats.wins),
            format_money(stats.pnl),
        )

    console.print(table)
    console.print(
        f"\n[bold]Month P&L:[/bold] {format_money(summary.total_pnl)} | "
        f"[bold]Trades:[/bold] {summary.total_trades} | "
        f"[bold]Win Rate:[/bold] {summary.win_rate:.1f}%"
    )


@click.command()
@click.pass_context
def breakdown(ctx: click.Context) -> None:
    """Display realized P&L by strategy and by setup."""
    profile = open_profile(ctx)

    for title, stats in (
        ("P&L by Strategy", pnl_by_strategy(profile.trades)),
        ("P&L by Setup", pnl_by_setup(profile.trades)),
    ):
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Name", style="bold")
        table.add_column("P&L", justify="right")
        for name, value in sorted(stats.items(), key=lambda kv: kv[1], reverse=True):
            table.add_row(name, format_money(value))
        console.print(table)
