"""Risk planning helpers driven by UserSettings."""

from trademind.engine.validation import CONTRACT_MULTIPLIER
from trademind.models import Trade, TradeDirection, UserSettings


def default_target_price(
    entry_price: float, direction: TradeDirection, settings: UserSettings
) -> float:
    """Profit target at the configured percentage away from entry.

    Long positions profit when the premium rises, short positions when it
    falls.
    """
    pct = settings.default_target_percent / 100
    if direction == TradeDirection.LONG:
        return entry_price * (1 + pct)
    return max(0.0, entry_price * (1 - pct))


def default_stop_loss_price(
    entry_price: float, direction: TradeDirection, settings: UserSettings
) -> float:
    """Stop loss at the configured percentage against the position."""
    pct = settings.default_stop_loss_percent / 100
    if direction == TradeDirection.LONG:
        return max(0.0, entry_price * (1 - pct))
    return entry_price * (1 + pct)


def max_risk_amount(balance: float, settings: UserSettings) -> float:
    """Largest dollar risk allowed on one trade for a balance."""
    return max(0.0, balance) * settings.max_risk_per_trade_percent / 100


def trade_risk(trade: Trade) -> float:
    """Dollar amount at risk on a trade.

    With a stop loss this is the distance to the stop; without one it is
    the full premium.
    """
    contracts = abs(trade.quantity) * CONTRACT_MULTIPLIER
    if trade.stop_loss_price is not None:
        return abs(trade.entry_price - trade.stop_loss_price) * contracts
    return trade.entry_price * contracts


def is_risk_within_limit(trade: Trade, balance: float, settings: UserSettings) -> bool:
    """True if the trade risks no more than the configured % of balance."""
    return trade_risk(trade) <= max_risk_amount(balance, settings)
