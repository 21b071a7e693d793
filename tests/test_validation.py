"""Tests for trade record validation and lifecycle helpers."""

from datetime import datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from trademind.engine.validation import (
    calculate_trade_pnl,
    close_trade,
    is_consistent,
    realized_pnl,
    reopen_trade,
    validate_trade,
)
from trademind.exceptions import TradeValidationError
from trademind.models import (
    DisciplineChecklist,
    Emotion,
    OptionType,
    Trade,
    TradeDirection,
    TradeStatus,
)

PERFECT = DisciplineChecklist(
    strategy_match=True,
    risk_defined=True,
    size_within_limits=True,
    iv_conditions_met=True,
    emotional_state_check=True,
    max_trades_respected=True,
)


def make_trade(**overrides) -> Trade:
    """Build a valid open trade with a perfect checklist."""
    fields = dict(
        id="t1",
        ticker="spy",
        direction=TradeDirection.SHORT,
        option_type=OptionType.PUT,
        entry_date=datetime(2024, 5, 1, 10, 30),
        entry_price=2.50,
        strike_price=510,
        quantity=5,
        checklist=PERFECT,
        discipline_score=100,
    )
    fields.update(overrides)
    return Trade(**fields)


class TestTradePnL:
    """P&L is (exit - entry) * qty * 100, negated for short positions."""

    def test_short_put_profit(self):
        pnl = calculate_trade_pnl(TradeDirection.SHORT, 2.50, 1.20, 5)
        assert pnl == pytest.approx(650.0)

    def test_long_call_loss(self):
        pnl = calculate_trade_pnl(TradeDirection.LONG, 15.00, 10.00, 1)
        assert pnl == pytest.approx(-500.0)

    @given(
        entry=st.floats(min_value=0, max_value=1000, allow_nan=False),
        exit=st.floats(min_value=0, max_value=1000, allow_nan=False),
        qty=st.integers(min_value=1, max_value=100),
    )
    @settings(max_examples=100)
    def test_long_and_short_are_mirror_images(self, entry: float, exit: float, qty: int):
        long_pnl = calculate_trade_pnl(TradeDirection.LONG, entry, exit, qty)
        short_pnl = calculate_trade_pnl(TradeDirection.SHORT, entry, exit, qty)
        assert long_pnl == -short_pnl


class TestValidateTrade:
    """Trades are rejected before entering the ledger when malformed."""

    def test_valid_open_trade_is_normalized(self):
        trade = validate_trade(make_trade(violation_reason="   "))
        assert trade.ticker == "SPY"
        assert trade.violation_reason is None

    def test_valid_closed_trade(self):
        trade = make_trade(status=TradeStatus.CLOSED, exit_price=1.2, pnl=650.0)
        assert validate_trade(trade).pnl == 650.0

    def test_closed_without_pnl_rejected(self):
        with pytest.raises(TradeValidationError, match="no pnl"):
            validate_trade(make_trade(status=TradeStatus.CLOSED, exit_price=1.2))

    def test_closed_without_exit_price_rejected(self):
        with pytest.raises(TradeValidationError, match="no exit price"):
            validate_trade(make_trade(status=TradeStatus.CLOSED, pnl=650.0))

    def test_open_with_pnl_rejected(self):
        with pytest.raises(TradeValidationError, match="realized pnl"):
            validate_trade(make_trade(pnl=100.0))

    def test_open_with_exit_price_rejected(self):
        with pytest.raises(TradeValidationError, match="exit price"):
            validate_trade(make_trade(exit_price=1.0))

    def test_zero_quantity_rejected(self):
        with pytest.raises(TradeValidationError, match="quantity"):
            validate_trade(make_trade(quantity=0))

    def test_score_must_match_checklist(self):
        with pytest.raises(TradeValidationError, match="does not match"):
            validate_trade(make_trade(discipline_score=50))

    def test_violation_reason_on_perfect_trade_rejected(self):
        with pytest.raises(TradeValidationError, match="every rule"):
            validate_trade(make_trade(violation_reason="Chased it"))

    def test_violation_reason_kept_on_imperfect_trade(self):
        trade = make_trade(
            checklist=DisciplineChecklist(),
            discipline_score=0,
            violation_reason=" Chased it ",
        )
        assert validate_trade(trade).violation_reason == "Chased it"

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_trade(make_trade(pnl=1.0))

    def test_field_constraints_enforced_by_model(self):
        with pytest.raises(ValidationError):
            make_trade(fees=-1.0)
        with pytest.raises(ValidationError):
            make_trade(discipline_score=101)

    def test_trade_is_frozen(self):
        trade = make_trade()
        with pytest.raises(ValidationError):
            trade.pnl = 10.0


class TestConsistency:
    """Read-side accessors tolerate records that break the invariant."""

    def test_open_trade_has_no_realized_pnl(self):
        assert realized_pnl(make_trade()) is None

    def test_closed_trade_realized_pnl(self):
        trade = make_trade(status=TradeStatus.CLOSED, exit_price=1.2, pnl=650.0)
        assert is_consistent(trade)
        assert realized_pnl(trade) == 650.0

    def test_open_trade_with_pnl_is_skipped(self):
        trade = make_trade(pnl=999.0)
        assert not is_consistent(trade)
        assert realized_pnl(trade) is None

    def test_closed_trade_missing_exit_price_is_skipped(self):
        trade = make_trade(status=TradeStatus.CLOSED, pnl=10.0)
        assert realized_pnl(trade) is None


class TestCloseAndReopen:
    """Closing computes P&L; reopening clears exit data."""

    def test_close_trade(self):
        closed = close_trade(make_trade(), 1.20, datetime(2024, 5, 10, 15, 0))

        assert closed.status == TradeStatus.CLOSED
        assert closed.exit_price == 1.20
        assert closed.pnl == pytest.approx(650.0)
        assert closed.exit_emotion == Emotion.CALM
        assert validate_trade(closed) is not None

    def test_close_keeps_original_untouched(self):
        trade = make_trade()
        close_trade(trade, 1.20, datetime(2024, 5, 10, 15, 0))
        assert trade.status == TradeStatus.OPEN
        assert trade.pnl is None

    def test_close_with_negative_price_rejected(self):
        with pytest.raises(TradeValidationError):
            close_trade(make_trade(), -1.0, datetime(2024, 5, 10))

    def test_reopen_trade(self):
        closed = close_trade(make_trade(), 1.20, datetime(2024, 5, 10), Emotion.ANXIOUS)
        reopened = reopen_trade(closed)

        assert reopened.status == TradeStatus.OPEN
        assert reopened.pnl is None
        assert reopened.exit_price is None
        assert reopened.exit_date is None
        assert reopened.exit_emotion is None
        assert is_consistent(reopened)
