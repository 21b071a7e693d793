"""Dashboard metrics aggregation."""

import logging
from typing import Iterable

from trademind.engine.equity import calculate_max_drawdown, sort_chronologically
from trademind.engine.validation import realized_pnl
from trademind.models import Metrics, Trade

logger = logging.getLogger(__name__)


def calculate_metrics(trades: Iterable[Trade], initial_capital: float) -> Metrics:
    """Fold a ledger into the dashboard summary statistics.

    Win rate and P&L come from closed trades only. The discipline score is
    averaged over every trade, open or closed, because it reflects entry
    behavior rather than outcome.

    Args:
        trades: Ledger in any order.
        initial_capital: Starting capital for the period.

    Returns:
        Metrics with every ratio resolving to 0 on an empty denominator.
    """
    ordered = sort_chronologically(trades)

    if not ordered:
        return Metrics()

    closed_pnls = [pnl for pnl in (realized_pnl(t) for t in ordered) if pnl is not None]

    total_pnl = 0.0
    for pnl in closed_pnls:
        total_pnl += pnl

    winning_trades = sum(1 for pnl in closed_pnls if pnl > 0)
    closed_count = len(closed_pnls)

    win_rate = (winning_trades / closed_count * 100) if closed_count > 0 else 0.0
    average_pnl = (total_pnl / closed_count) if closed_count > 0 else 0.0
    discipline_score = sum(t.discipline_score for t in ordered) / len(ordered)

    metrics = Metrics(
        total_trades=len(ordered),
        win_rate=win_rate,
        total_pnl=total_pnl,
        average_pnl=average_pnl,
        discipline_score=discipline_score,
        max_drawdown=calculate_max_drawdown(ordered),
    )

    logger.debug(
        "Metrics for %d trades (%d closed) on capital %.2f: %s",
        len(ordered), closed_count, initial_capital, metrics,
    )
    return metrics


def current_balance(trades: Iterable[Trade], initial_capital: float) -> float:
    """Initial capital plus realized P&L."""
    return initial_capital + calculate_metrics(trades, initial_capital).total_pnl


def return_percent(trades: Iterable[Trade], initial_capital: float) -> float:
    """Realized return on the period's starting capital, in percent.

    Returns:
        0 when the initial capital is 0.
    """
    if initial_capital == 0:
        return 0.0
    return calculate_metrics(trades, initial_capital).total_pnl / initial_capital * 100
