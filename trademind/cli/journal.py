"""Journal commands for TradeMind CLI.

Handles logging new trades through the discipline checklist,
closing and reopening positions, and listing the ledger.
"""

from datetime import datetime
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
    score_color,
    store_profile,
)
from trademind.engine import close_trade, find_trade, log_trade, reopen_trade, update_trade
from trademind.engine.analytics import format_contract_name
from trademind.engine.metrics import current_balance
from trademind.engine.risk import (
    default_stop_loss_price,
    default_target_price,
    is_risk_within_limit,
    max_risk_amount,
    trade_risk,
)
from trademind.exceptions import TradeMindError
from trademind.models import ChecklistAnswers, Emotion, OptionType, TradeDirection, TradeStatus

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%S"]


@click.command()
@click.argument("ticker")
@click.option(
    "--direction",
    type=click.Choice([d.value for d in TradeDirection]),
    default=TradeDirection.LONG.value,
    help="Position direction.",
)
@click.option(
    "--type",
    "option_type",
    type=click.Choice([o.value for o in OptionType]),
    default=OptionType.CALL.value,
    help="Option type.",
)
@click.option("--entry-price", type=float, required=True, help="Entry premium per share.")
@click.option("--quantity", type=int, default=1, help="Number of contracts.")
@click.option("--strike", type=float, default=None, help="Strike price.")
@click.option("--expiration", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Expiration date.")
@click.option("--entry-date", type=click.DateTime(formats=DATE_FORMATS), default=None, help="Entry time (defaults to now).")
@click.option("--exit-price", type=float, default=None, help="Log as a closed trade at this exit price.")
@click.option("--setup", type=str, default=None, help="Setup / strategy name.")
@click.option("--notes", type=str, default="", help="Trade notes.")
@click.option(
    "--emotion",
    type=click.Choice([e.value for e in Emotion]),
    default=Emotion.CALM.value,
    help="Emotion at entry.",
)
@click.option("--fees", type=float, default=0.0, help="Commissions and fees.")
@click.option("--target", type=float, default=None, help="Profit target (defaults from settings).")
@click.option("--stop", type=float, default=None, help="Stop loss (defaults from settings).")
@click.option("--strategy-match/--no-strategy-match", default=False, help="Trade is in my strategy plan.")
@click.option("--risk-defined/--no-risk-defined", default=False, help="Risk is strictly defined.")
@click.option("--size-ok/--no-size-ok", default=False, help="Position size is within my % rules.")
@click.option("--iv-ok/--no-iv-ok", default=False, help="IV / market conditions are favorable.")
@click.option("--calm/--no-calm", default=False, help="I am calm and not trading emotionally.")
@click.option("--reason", type=str, default=None, help="Violation note when rules are skipped.")
@click.pass_context
def log(
    ctx: click.Context,
    ticker: str,
    direction: str,
    option_type: str,
    entry_price: float,
    quantity: int,
    strike: Optional[float],
    expiration: Optional[datetime],
    entry_date: Optional[datetime],
    exit_price: Optional[float],
    setup: Optional[str],
    notes: str,
    emotion: str,
    fees: float,
    target: Optional[float],
    stop: Optional[float],
    strategy_match: bool,
    risk_defined: bool,
    size_ok: bool,
    iv_ok: bool,
    calm: bool,
    reason: Optional[str],
) -> None:
    """Log a new trade through the discipline checklist.

    Unchecked rules are recorded as violations and lower the
    discipline score; they never block the trade. The daily
    trade limit rule is checked automatically.

    \b
    Examples:
      trademind log SPY --direction Short --type Put --entry-price 2.5 \\
          --quantity 5 --strike 510 --strategy-match --risk-defined --size-ok --iv-ok --calm
      trademind log NVDA --entry-price 15 --exit-price 10 --reason "Chased breakout"
    """
    profile = open_profile(ctx)
    settings = profile.settings
    trade_direction = TradeDirection(direction)

    if target is None:
        target = default_target_price(entry_price, trade_direction, settings)
    if stop is None:
        stop = default_stop_loss_price(entry_price, trade_direction, settings)

    answers = ChecklistAnswers(
        strategy_match=strategy_match,
        risk_defined=risk_defined,
        size_within_limits=size_ok,
        iv_conditions_met=iv_ok,
        emotional_state_check=calm,
    )

    try:
        updated = log_trade(
            profile,
            answers,
            ticker=ticker,
            direction=trade_direction,
            option_type=OptionType(option_type),
            entry_date=entry_date or datetime.now(),
            entry_price=entry_price,
            quantity=quantity,
            status=TradeStatus.CLOSED if exit_price is not None else TradeStatus.OPEN,
            exit_price=exit_price,
            strike_price=strike,
            expiration_date=expiration.date() if expiration else None,
            setup=setup,
            notes=notes,
            entry_emotion=Emotion(emotion),
            fees=fees,
            target_price=target,
            stop_loss_price=stop,
            violation_reason=reason,
        )
    except TradeMindError as e:
        print_error(str(e))
        raise SystemExit(1)
    except ValidationError as e:
        print_error(f"Invalid trade: {e.errors()[0]['msg']}")
        raise SystemExit(1)

    store_profile(ctx, updated)
    trade = updated.trades[0]

    color = score_color(trade.discipline_score)
    lines = [
        f"[bold]{format_contract_name(trade.ticker, trade.strike_price, trade.option_type, trade.expiration_date)}[/bold] "
        f"{trade.direction.value} x{trade.quantity} @ ${trade.entry_price:.2f}",
        f"Discipline Score: [{color}]{trade.discipline_score}%[/{color}]",
        f"Target: ${trade.target_price:.2f} | Stop: ${trade.stop_loss_price:.2f}",
    ]
    if not trade.checklist.max_trades_respected:
        lines.append("[yellow]Daily trade limit exceeded[/yellow]")

    balance = current_balance(profile.trades, profile.initial_capital)
    if not is_risk_within_limit(trade, balance, settings):
        lines.append(
            f"[yellow]Risk ${trade_risk(trade):,.2f} exceeds "
            f"{settings.max_risk_per_trade_percent:g}% of balance (${max_risk_amount(balance, settings):,.2f})[/yellow]"
        )
    if trade.pnl is not None:
        lines.append(f"P&L: {format_money(trade.pnl)}")

    console.print(Panel(
        "\n".join(lines),
        title=f"[bold green]Trade {trade.id[:8]} logged[/bold green]",
        border_style="green" if trade.discipline_score == 100 else "yellow",
    ))


@click.command()
@click.argument("trade_id")
@click.option("--exit-price", type=float, required=True, help="Exit premium per share.")
@click.option("--exit-date", type=click.DateTime(formats=DATE_FORMATS), default=None, help="Exit time (defaults to now).")
@click.option(
    "--emotion",
    type=click.Choice([e.value for e in Emotion]),
    default=None,
    help="Emotion at exit.",
)
@click.pass_context
def close(
    ctx: click.Context,
    trade_id: str,
    exit_price: float,
    exit_date: Optional[datetime],
    emotion: Optional[str],
) -> None:
    """Close an open trade and realize its P&L.

    \b
    Examples:
      trademind close 3f2a9c --exit-price 1.20
    """
    profile = open_profile(ctx)

    try:
        trade = _match_trade(profile, trade_id)
        if trade.status == TradeStatus.CLOSED:
            print_error(f"Trade {trade.id} is already closed")
            raise SystemExit(1)
        closed = close_trade(
            trade,
            exit_price,
            exit_date or datetime.now(),
            Emotion(emotion) if emotion else None,
        )
        updated = update_trade(profile, closed)
    except TradeMindError as e:
        print_error(str(e))
        raise SystemExit(1)

    store_profile(ctx, updated)
    console.print(f"[bold]Closed {closed.ticker}[/bold] P&L: {format_money(closed.pnl)}")


@click.command()
@click.argument("trade_id")
@click.pass_context
def reopen(ctx: click.Context, trade_id: str) -> None:
    """Reopen a closed trade, clearing its exit data."""
    profile = open_profile(ctx)

    try:
        trade = _match_trade(profile, trade_id)
        updated = update_trade(profile, reopen_trade(trade))
    except TradeMindError as e:
        print_error(str(e))
        raise SystemExit(1)

    store_profile(ctx, updated)
    console.print(f"[bold]Reopened {trade.ticker}[/bold]")


@click.command()
@click.option("--open", "open_only", is_flag=True, default=False, help="Only show open trades.")
@click.pass_context
def trades(ctx: click.Context, open_only: bool) -> None:
    """Display the active trade ledger, newest first."""
    profile = open_profile(ctx)
    ledger = [t for t in profile.trades if t.is_open] if open_only else list(profile.trades)

    if not ledger:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trade Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Trade Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim")
    table.add_column("Date/Time", style="dim")
    table.add_column("Contract", style="bold")
    table.add_column("Dir", justify="center")
    table.add_column("Qty", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("Exit", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Status", justify="center")

    for trade in ledger:
        dir_color = "green" if trade.direction == TradeDirection.LONG else "red"
        color = score_color(trade.discipline_score)

        table.add_row(
            trade.id[:8],
            trade.entry_date.strftime("%Y-%m-%d %H:%M"),
            format_contract_name(trade.ticker, trade.strike_price, trade.option_type, trade.expiration_date),
            f"[{dir_color}]{trade.direction.value}[/{dir_color}]",
            str(trade.quantity),
            f"${trade.entry_price:.2f}",
            f"${trade.exit_price:.2f}" if trade.exit_price is not None else "-",
            format_money(trade.pnl) if trade.pnl is not None else "-",
            f"[{color}]{trade.discipline_score}%[/{color}]",
            trade.status.value,
        )

    console.print(table)


def _match_trade(profile, trade_id: str):
    """Find a trade by full id or unique id prefix."""
    matches = [t for t in profile.trades if t.id.startswith(trade_id)]
    if len(matches) == 1:
        return matches[0]
    return find_trade(profile, trade_id)
