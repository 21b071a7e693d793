"""Session and settings commands for TradeMind CLI.

Handles profile creation, archiving a trading period and
resetting capital, archive history, and risk settings.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from trademind.cli.utils import (
    console,
    format_money,
    open_profile,
    print_error,
    resolve_profile_path,
    store_profile,
)
from trademind.config import create_template_config, get_config_path, load_config, settings_from_config
from trademind.engine import calculate_metrics, new_profile, reset_session, update_settings
from trademind.models import UserSettings


@click.command()
@click.argument("name")
@click.option("--capital", type=float, default=None, help="Starting capital (defaults from config).")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing profile.")
@click.pass_context
def init(ctx: click.Context, name: str, capital: Optional[float], force: bool) -> None:
    """Create a new trading profile.

    Writes a template config file on first run and uses its
    [settings] table for the new profile.

    \b
    Examples:
      trademind init "Demo Trader" --capital 10000
    """
    config = load_config()
    if config is None:
        config_path = create_template_config()
        console.print(f"[dim]Created config template at {config_path}[/dim]")
        config = load_config(config_path) or {}

    path = resolve_profile_path(ctx)
    if path.exists() and not force:
        console.print(Panel(
            f"[yellow]A profile already exists at {path}.[/yellow]\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
        ))
        raise SystemExit(1)

    if capital is None:
        capital = float(config.get("journal", {}).get("initial_capital", 10000.0))

    profile = new_profile(name, capital, settings=settings_from_config(config))
    store_profile(ctx, profile)

    console.print(Panel(
        f"Profile [bold]{profile.name}[/bold] created with ${capital:,.2f}\n"
        f"[dim]{path}[/dim]",
        title="[bold green]Ready[/bold green]",
        border_style="green",
    ))


@click.command()
@click.option("--capital", type=float, required=True, help="Starting capital for the new period.")
@click.option("--yes", is_flag=True, default=False, help="Skip confirmation.")
@click.pass_context
def reset(ctx: click.Context, capital: float, yes: bool) -> None:
    """Archive the current period and start fresh.

    The current trades are moved into an archived session and
    the ledger restarts with the given capital.

    \b
    Examples:
      trademind reset --capital 15000
    """
    profile = open_profile(ctx)

    if not yes:
        click.confirm(
            f"Archive {len(profile.trades)} trades and reset capital to ${capital:,.2f}?",
            abort=True,
        )

    updated = reset_session(profile, capital)
    store_profile(ctx, updated)
    archive = updated.archives[0]

    console.print(Panel(
        f"Archived {archive.trade_count} trades "
        f"({archive.start_date:%Y-%m-%d} to {archive.end_date:%Y-%m-%d})\n"
        f"Final balance: ${archive.final_balance:,.2f} | P&L: {format_money(archive.total_pnl)}\n\n"
        f"New period started with ${updated.initial_capital:,.2f}",
        title="[bold green]Session Archived[/bold green]",
        border_style="green",
    ))


@click.command()
@click.pass_context
def archives(ctx: click.Context) -> None:
    """Display archived trading sessions, newest first."""
    profile = open_profile(ctx)

    if not profile.archives:
        console.print(Panel(
            "[dim]No archived sessions[/dim]",
            title="[bold]Archives[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Archived Sessions",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Period", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Start Capital", justify="right")
    table.add_column("Final Balance", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Win Rate", justify="right")

    for archive in profile.archives:
        result = calculate_metrics(archive.trades, archive.initial_capital)
        table.add_row(
            f"{archive.start_date:%Y-%m-%d} → {archive.end_date:%Y-%m-%d}",
            str(archive.trade_count),
            f"${archive.initial_capital:,.2f}",
            f"${archive.final_balance:,.2f}",
            format_money(archive.total_pnl),
            f"{result.win_rate:.1f}%",
        )

    console.print(table)


@click.command()
@click.option("--target", "target_pct", type=float, default=None, help="Default profit target %.")
@click.option("--stop", "stop_pct", type=float, default=None, help="Default stop loss %.")
@click.option("--max-trades", type=float, default=None, help="Max trades per day (opens and closes count 0.5).")
@click.option("--max-risk", type=float, default=None, help="Max risk per trade as % of balance.")
@click.pass_context
def settings(
    ctx: click.Context,
    target_pct: Optional[float],
    stop_pct: Optional[float],
    max_trades: Optional[float],
    max_risk: Optional[float],
) -> None:
    """Display or update risk settings.

    \b
    Examples:
      trademind settings
      trademind settings --max-trades 4 --max-risk 2.5
    """
    profile = open_profile(ctx)
    changes = {
        "default_target_percent": target_pct,
        "default_stop_loss_percent": stop_pct,
        "max_trades_per_day": max_trades,
        "max_risk_per_trade_percent": max_risk,
    }
    changes = {k: v for k, v in changes.items() if v is not None}

    if changes:
        try:
            new_settings = UserSettings(**{**profile.settings.model_dump(), **changes})
        except ValidationError as e:
            print_error(f"Invalid settings: {e.errors()[0]['msg']}")
            raise SystemExit(1)
        profile = update_settings(profile, new_settings)
        store_profile(ctx, profile)

    current = profile.settings
    console.print(Panel(
        f"Profit Target:      {current.default_target_percent:g}%\n"
        f"Stop Loss:          {current.default_stop_loss_percent:g}%\n"
        f"Max Trades / Day:   {current.max_trades_per_day:g}\n"
        f"Max Risk / Trade:   {current.max_risk_per_trade_percent:g}%\n\n"
        f"[dim]Config: {get_config_path()}[/dim]",
        title="[bold cyan]Settings[/bold cyan]",
        border_style="cyan",
    ))
