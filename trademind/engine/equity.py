"""Equity curve reconstruction and drawdown.

The ledger is stored most-recent-first, so both functions sort a copy by
entry date before accumulating. Python's sort is stable, which keeps
trades entered at the same instant in ledger order.
"""

from typing import Iterable

from trademind.engine.validation import realized_pnl
from trademind.models import EquityPoint, Trade

START_LABEL = "Start"


def sort_chronologically(trades: Iterable[Trade]) -> list[Trade]:
    """Return a copy of the trades in ascending entry-date order."""
    return sorted(trades, key=lambda t: t.entry_date)


def _short_date(trade: Trade) -> str:
    return f"{trade.entry_date:%b} {trade.entry_date.day}"


def build_equity_curve(trades: Iterable[Trade], initial_capital: float) -> list[EquityPoint]:
    """Build the account balance curve for a ledger.

    Args:
        trades: Ledger in any order.
        initial_capital: Starting capital for the period.

    Returns:
        A 'Start' point at the initial capital followed by one point per
        trade with realized P&L, in chronological order.
    """
    points = [EquityPoint(label=START_LABEL, balance=initial_capital)]
    cumulative = 0.0

    for trade in sort_chronologically(trades):
        pnl = realized_pnl(trade)
        if pnl is None:
            continue
        cumulative += pnl
        points.append(
            EquityPoint(
                label=_short_date(trade),
                balance=initial_capital + cumulative,
                pnl=pnl,
                timestamp=trade.entry_date,
            )
        )

    return points


def calculate_max_drawdown(trades: Iterable[Trade]) -> float:
    """Calculate the largest peak-to-trough decline in cumulative P&L.

    The running peak starts at 0, so a ledger whose first closed trade is a
    loss already has a drawdown.

    Args:
        trades: Ledger in any order.

    Returns:
        Maximum drawdown (>= 0); 0 when there are no closed trades.
    """
    peak = 0.0
    cumulative = 0.0
    max_drawdown = 0.0

    for trade in sort_chronologically(trades):
        pnl = realized_pnl(trade)
        if pnl is None:
            continue
        cumulative += pnl
        if cumulative > peak:
            peak = cumulative
        drawdown = peak - cumulative
        if drawdown > max_drawdown:
            max_drawdown = drawdown

    return max_drawdown
