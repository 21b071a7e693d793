"""Trade record validation and lifecycle helpers.

Validation is applied when a trade enters the ledger. Read-side analytics
never raise on bad records; they go through ``realized_pnl`` and skip
anything that violates the open/closed invariant.
"""

import logging
from datetime import datetime
from typing import Optional

from trademind.engine.discipline import calculate_discipline_score
from trademind.exceptions import TradeValidationError
from trademind.models import Emotion, Trade, TradeDirection, TradeStatus
from trademind.models.trade import naive_utc

logger = logging.getLogger(__name__)

# Shares per option contract
CONTRACT_MULTIPLIER = 100


def calculate_trade_pnl(
    direction: TradeDirection,
    entry_price: float,
    exit_price: float,
    quantity: int,
) -> float:
    """Calculate realized P&L for an options position.

    Fees are recorded on the trade but not deducted here.

    Args:
        direction: Long or Short.
        entry_price: Entry premium per share.
        exit_price: Exit premium per share.
        quantity: Number of contracts.

    Returns:
        (exit - entry) * quantity * 100, negated for short positions.
    """
    multiplier = 1 if direction == TradeDirection.LONG else -1
    return (exit_price - entry_price) * quantity * CONTRACT_MULTIPLIER * multiplier


def is_consistent(trade: Trade) -> bool:
    """Check the open/closed invariant.

    A Closed trade must carry both an exit price and a pnl; an Open trade
    must carry neither.
    """
    if trade.status == TradeStatus.CLOSED:
        return trade.pnl is not None and trade.exit_price is not None
    return trade.pnl is None and trade.exit_price is None


def realized_pnl(trade: Trade) -> Optional[float]:
    """Return the trade's realized P&L, or None if it has none.

    Inconsistent records (e.g. an Open trade carrying a pnl) are treated as
    having no realized P&L.
    """
    if trade.pnl is None:
        return None
    if not is_consistent(trade):
        logger.debug("Skipping inconsistent trade %s (status %s)", trade.id, trade.status.value)
        return None
    return trade.pnl


def validate_trade(trade: Trade) -> Trade:
    """Validate and normalize a trade before it enters the ledger.

    Args:
        trade: Candidate trade.

    Returns:
        Normalized copy (ticker upper-cased, blank annotations dropped).

    Raises:
        TradeValidationError: If the trade violates a ledger invariant.
    """
    if trade.quantity == 0:
        raise TradeValidationError(f"Trade {trade.id}: quantity must be non-zero")

    if trade.status == TradeStatus.CLOSED:
        if trade.pnl is None:
            raise TradeValidationError(f"Trade {trade.id}: closed trade has no pnl")
        if trade.exit_price is None:
            raise TradeValidationError(f"Trade {trade.id}: closed trade has no exit price")
    else:
        if trade.pnl is not None:
            raise TradeValidationError(f"Trade {trade.id}: open trade cannot carry a realized pnl")
        if trade.exit_price is not None:
            raise TradeValidationError(f"Trade {trade.id}: open trade cannot carry an exit price")

    expected_score = calculate_discipline_score(trade.checklist)
    if trade.discipline_score != expected_score:
        raise TradeValidationError(
            f"Trade {trade.id}: discipline score {trade.discipline_score} "
            f"does not match checklist ({expected_score})"
        )

    reason = trade.violation_reason.strip() if trade.violation_reason else None
    if reason and trade.discipline_score == 100:
        raise TradeValidationError(
            f"Trade {trade.id}: violation reason given but every rule was satisfied"
        )

    return trade.model_copy(
        update={
            "ticker": trade.ticker.strip().upper(),
            "violation_reason": reason or None,
        }
    )


def close_trade(
    trade: Trade,
    exit_price: float,
    exit_date: datetime,
    exit_emotion: Optional[Emotion] = None,
) -> Trade:
    """Close an open trade at the given price.

    Args:
        trade: Trade to close.
        exit_price: Exit premium per share.
        exit_date: Exit timestamp.
        exit_emotion: Emotion at exit (defaults to the recorded one, or Calm).

    Returns:
        New Closed trade with pnl recomputed from the prices.
    """
    if exit_price < 0:
        raise TradeValidationError(f"Trade {trade.id}: exit price must be >= 0")

    pnl = calculate_trade_pnl(trade.direction, trade.entry_price, exit_price, trade.quantity)
    logger.info("Closing trade %s %s at %.2f (pnl %.2f)", trade.id, trade.ticker, exit_price, pnl)

    return trade.model_copy(
        update={
            "status": TradeStatus.CLOSED,
            "exit_price": exit_price,
            "exit_date": naive_utc(exit_date),
            "pnl": pnl,
            "exit_emotion": exit_emotion or trade.exit_emotion or Emotion.CALM,
        }
    )


def reopen_trade(trade: Trade) -> Trade:
    """Reopen a closed trade, clearing all exit data."""
    logger.info("Reopening trade %s %s", trade.id, trade.ticker)
    return trade.model_copy(
        update={
            "status": TradeStatus.OPEN,
            "exit_price": None,
            "exit_date": None,
            "pnl": None,
            "exit_emotion": None,
        }
    )
