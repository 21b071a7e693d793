"""Ledger operations on a UserProfile.

Every function takes a profile and returns a new one; the input is never
modified. Trades are prepended so the ledger reads most-recent-first.
"""

import logging
import uuid
from datetime import date, datetime
from typing import Optional

from trademind.engine.discipline import count_daily_trades, score_checklist
from trademind.engine.validation import calculate_trade_pnl, validate_trade
from trademind.exceptions import TradeNotFoundError, TradeValidationError
from trademind.models import (
    ChecklistAnswers,
    Emotion,
    OptionType,
    Trade,
    TradeDirection,
    TradeStatus,
    UserProfile,
    UserSettings,
)
from trademind.models.trade import naive_utc

logger = logging.getLogger(__name__)


def new_profile(
    name: str,
    initial_capital: float,
    start_date: Optional[datetime] = None,
    settings: Optional[UserSettings] = None,
    profile_id: Optional[str] = None,
) -> UserProfile:
    """Create an empty profile for a new trader."""
    return UserProfile(
        id=profile_id or uuid.uuid4().hex,
        name=name,
        initial_capital=initial_capital,
        start_date=start_date or datetime.now(),
        settings=settings or UserSettings(),
    )


def find_trade(profile: UserProfile, trade_id: str) -> Trade:
    """Look up a trade in the active ledger.

    Raises:
        TradeNotFoundError: If no trade has this id.
    """
    for trade in profile.trades:
        if trade.id == trade_id:
            return trade
    raise TradeNotFoundError(f"Trade {trade_id} not found")


def add_trade(profile: UserProfile, trade: Trade) -> UserProfile:
    """Validate a trade and prepend it to the ledger.

    Raises:
        TradeValidationError: If the trade is malformed or its id is taken.
    """
    trade = validate_trade(trade)
    if any(t.id == trade.id for t in profile.trades):
        raise TradeValidationError(f"Trade {trade.id} already exists")

    logger.info("Logged trade %s %s (score %d)", trade.id, trade.ticker, trade.discipline_score)
    return profile.model_copy(update={"trades": (trade,) + profile.trades})


def update_trade(profile: UserProfile, trade: Trade) -> UserProfile:
    """Validate a trade and replace the ledger entry with the same id.

    Raises:
        TradeValidationError: If the trade is malformed.
        TradeNotFoundError: If no trade has this id.
    """
    find_trade(profile, trade.id)
    trade = validate_trade(trade)

    logger.info("Updated trade %s %s", trade.id, trade.ticker)
    return profile.model_copy(
        update={"trades": tuple(trade if t.id == trade.id else t for t in profile.trades)}
    )


def update_settings(profile: UserProfile, settings: UserSettings) -> UserProfile:
    """Replace the profile's settings."""
    return profile.model_copy(update={"settings": settings})


def log_trade(
    profile: UserProfile,
    answers: ChecklistAnswers,
    *,
    ticker: str,
    direction: TradeDirection,
    option_type: OptionType,
    entry_date: datetime,
    entry_price: float,
    quantity: int,
    status: TradeStatus = TradeStatus.OPEN,
    exit_price: Optional[float] = None,
    exit_date: Optional[datetime] = None,
    strike_price: Optional[float] = None,
    expiration_date: Optional[date] = None,
    setup: Optional[str] = None,
    notes: str = "",
    entry_emotion: Emotion = Emotion.CALM,
    exit_emotion: Optional[Emotion] = None,
    fees: float = 0.0,
    target_price: Optional[float] = None,
    stop_loss_price: Optional[float] = None,
    violation_reason: Optional[str] = None,
    trade_id: Optional[str] = None,
) -> UserProfile:
    """Score the checklist for a new trade and add it to the ledger.

    The daily trade limit flag is computed from trades already logged on
    the new trade's entry day. A closed trade gets its pnl computed from
    the entry and exit prices.

    Args:
        profile: Current profile.
        answers: Manual checklist answers.
        violation_reason: Caller-supplied annotation; ignored if the
            checklist scores 100.

    Returns:
        New profile with the trade prepended.

    Raises:
        TradeValidationError: If the resulting trade is malformed.
    """
    entry_date = naive_utc(entry_date)
    exit_date = naive_utc(exit_date)
    daily_count = count_daily_trades(profile.trades, entry_date.date())
    result = score_checklist(answers, daily_count, profile.settings.max_trades_per_day)

    pnl = None
    if status == TradeStatus.CLOSED and exit_price is not None:
        pnl = calculate_trade_pnl(direction, entry_price, exit_price, quantity)
        if exit_date is None:
            exit_date = entry_date

    trade = Trade(
        id=trade_id or uuid.uuid4().hex,
        ticker=ticker,
        direction=direction,
        option_type=option_type,
        setup=setup,
        entry_date=entry_date,
        exit_date=exit_date if status == TradeStatus.CLOSED else None,
        expiration_date=expiration_date,
        status=status,
        entry_price=entry_price,
        exit_price=exit_price,
        strike_price=strike_price,
        quantity=quantity,
        fees=fees,
        target_price=target_price,
        stop_loss_price=stop_loss_price,
        pnl=pnl,
        notes=notes,
        entry_emotion=entry_emotion,
        exit_emotion=exit_emotion if status == TradeStatus.CLOSED else None,
        checklist=result.checklist,
        discipline_score=result.score,
        violation_reason=None if result.is_perfect else violation_reason,
    )

    if not result.is_perfect:
        logger.info("Trade %s logged with rule violations: %s", trade.id, ", ".join(result.violations))

    return add_trade(profile, trade)
