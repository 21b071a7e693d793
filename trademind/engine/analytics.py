"""Calendar and breakdown analytics for the journal views."""

import calendar
from datetime import date
from typing import Iterable, Optional

from trademind.engine.validation import realized_pnl
from trademind.models import DaySummary, MonthSummary, OptionType, Trade

NO_SETUP = "No Setup"


def summarize_month(trades: Iterable[Trade], year: int, month: int) -> MonthSummary:
    """Aggregate trades entered in a calendar month, day by day.

    Every trade entered that month is counted; P&L and wins only come from
    trades with realized P&L. The month win rate is wins over all trades
    entered, so open trades pull it down.

    Args:
        trades: Ledger in any order.
        year: Calendar year.
        month: Calendar month (1-12).

    Returns:
        MonthSummary with an entry for each day that has trades.
    """
    days: dict[int, dict] = {}
    total_pnl = 0.0
    total_trades = 0
    total_wins = 0

    for trade in trades:
        entered = trade.entry_date
        if entered.year != year or entered.month != month:
            continue

        day = days.setdefault(entered.day, {"pnl": 0.0, "count": 0, "wins": 0})
        day["count"] += 1
        total_trades += 1

        pnl = realized_pnl(trade)
        if pnl is not None:
            day["pnl"] += pnl
            total_pnl += pnl
            if pnl > 0:
                day["wins"] += 1
                total_wins += 1

    return MonthSummary(
        year=year,
        month=month,
        days_in_month=calendar.monthrange(year, month)[1],
        days={d: DaySummary(**values) for d, values in sorted(days.items())},
        total_pnl=total_pnl,
        total_trades=total_trades,
        win_rate=(total_wins / total_trades * 100) if total_trades > 0 else 0.0,
    )


def _group_pnl(trades: Iterable[Trade], key) -> dict[str, float]:
    stats: dict[str, float] = {}
    for trade in trades:
        pnl = realized_pnl(trade)
        if pnl is None:
            continue
        name = key(trade)
        stats[name] = stats.get(name, 0.0) + pnl
    return stats


def pnl_by_strategy(trades: Iterable[Trade]) -> dict[str, float]:
    """Realized P&L grouped by direction and option type (e.g. 'Long Call')."""
    return _group_pnl(trades, lambda t: f"{t.direction.value} {t.option_type.value}")


def pnl_by_setup(trades: Iterable[Trade]) -> dict[str, float]:
    """Realized P&L grouped by setup name."""
    return _group_pnl(trades, lambda t: t.setup or NO_SETUP)


def format_contract_name(
    ticker: str,
    strike: Optional[float],
    option_type: Optional[OptionType],
    expiration: Optional[date],
) -> str:
    """Format an OCC-style short contract name, e.g. 'SPY 510P 240515'.

    Falls back to the bare ticker when any part is missing.
    """
    if not strike or option_type is None or expiration is None:
        return ticker
    strike_str = f"{strike:g}"
    return f"{ticker} {strike_str}{option_type.value[0]} {expiration:%y%m%d}"
