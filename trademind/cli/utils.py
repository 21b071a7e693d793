"""Shared helpers for TradeMind CLI commands."""

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from trademind.config import get_profile_path, load_config
from trademind.exceptions import TradeMindError
from trademind.models import UserProfile
from trademind.snapshot import load_profile, save_profile

console = Console()


def print_error(message: str) -> None:
    """Print an error panel."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


def resolve_profile_path(ctx: click.Context) -> Path:
    """Profile path from the --profile option, config, or the default."""
    explicit = (ctx.obj or {}).get("profile_path")
    if explicit is not None:
        return explicit
    return get_profile_path(load_config())


def open_profile(ctx: click.Context) -> UserProfile:
    """Load the active profile or exit with an error panel."""
    path = resolve_profile_path(ctx)

    if not path.exists():
        console.print(Panel(
            f"[red]No profile found at {path}.[/red]\n\n"
            "Run [cyan]trademind init[/cyan] to create one.",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    try:
        return load_profile(path)
    except TradeMindError as e:
        print_error(str(e))
        raise SystemExit(1)


def store_profile(ctx: click.Context, profile: UserProfile) -> None:
    """Persist the profile returned by an engine operation."""
    save_profile(profile, resolve_profile_path(ctx))


def format_money(amount: float, signed: bool = True) -> str:
    """Format a dollar amount with color markup."""
    color = "green" if amount >= 0 else "red"
    sign = "+" if signed and amount >= 0 else ("-" if amount < 0 else "")
    return f"[{color}]{sign}${abs(amount):,.2f}[/{color}]"


def score_color(score: float) -> str:
    """Rich color for a discipline score."""
    if score >= 100:
        return "green"
    if score > 50:
        return "yellow"
    return "red"
