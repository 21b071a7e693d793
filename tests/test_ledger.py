"""Tests for ledger operations on a profile."""

from datetime import datetime, timezone

import pytest

from trademind.engine.ledger import (
    add_trade,
    find_trade,
    log_trade,
    new_profile,
    update_settings,
    update_trade,
)
from trademind.engine.validation import close_trade
from trademind.exceptions import TradeNotFoundError, TradeValidationError
from trademind.models import (
    ChecklistAnswers,
    OptionType,
    Trade,
    TradeDirection,
    TradeStatus,
    UserSettings,
)

ALL_YES = ChecklistAnswers(
    strategy_match=True,
    risk_defined=True,
    size_within_limits=True,
    iv_conditions_met=True,
    emotional_state_check=True,
)


@pytest.fixture
def profile():
    return new_profile(
        "Demo Trader",
        10000.0,
        start_date=datetime(2024, 5, 1),
        settings=UserSettings(max_trades_per_day=1),
        profile_id="demo",
    )


def log(profile, trade_id: str, when: datetime, answers: ChecklistAnswers = ALL_YES, **kwargs):
    fields = dict(
        ticker="spy",
        direction=TradeDirection.SHORT,
        option_type=OptionType.PUT,
        entry_date=when,
        entry_price=2.5,
        quantity=5,
        trade_id=trade_id,
    )
    fields.update(kwargs)
    return log_trade(profile, answers, **fields)


class TestLogTrade:
    """New trades are scored against the checklist and the daily limit."""

    def test_first_trade_of_day_is_perfect(self, profile):
        updated = log(profile, "1", datetime(2024, 5, 1, 10, 0))
        trade = updated.trades[0]

        assert trade.ticker == "SPY"
        assert trade.discipline_score == 100
        assert trade.checklist.max_trades_respected is True
        assert trade.violation_reason is None
        assert trade.status == TradeStatus.OPEN

    def test_daily_limit_uses_half_weights(self, profile):
        # Limit of 1: one open (0.5) still leaves room for a second entry.
        p = log(profile, "1", datetime(2024, 5, 1, 10, 0))
        p = log(p, "2", datetime(2024, 5, 1, 11, 0))
        p = log(p, "3", datetime(2024, 5, 1, 12, 0))

        scores = {t.id: t.checklist.max_trades_respected for t in p.trades}
        assert scores == {"1": True, "2": True, "3": False}
        assert p.trades[0].discipline_score == 83

    def test_other_days_do_not_count(self, profile):
        p = log(profile, "1", datetime(2024, 5, 1, 10, 0))
        p = log(p, "2", datetime(2024, 5, 1, 11, 0))
        p = log(p, "3", datetime(2024, 5, 2, 9, 30))
        assert p.trades[0].checklist.max_trades_respected is True

    def test_closed_trade_gets_pnl(self, profile):
        updated = log(
            profile, "1", datetime(2024, 5, 1, 10, 0),
            status=TradeStatus.CLOSED, exit_price=1.2,
        )
        trade = updated.trades[0]

        assert trade.pnl == pytest.approx(650.0)
        assert trade.exit_date == trade.entry_date

    def test_closed_without_exit_price_rejected(self, profile):
        with pytest.raises(TradeValidationError):
            log(profile, "1", datetime(2024, 5, 1, 10, 0), status=TradeStatus.CLOSED)

    def test_violation_reason_kept_when_rules_fail(self, profile):
        updated = log(
            profile, "1", datetime(2024, 5, 1, 10, 0),
            answers=ChecklistAnswers(risk_defined=True),
            violation_reason="Chasing momentum",
        )
        trade = updated.trades[0]

        assert trade.discipline_score == 33
        assert trade.violation_reason == "Chasing momentum"

    def test_violation_reason_dropped_when_perfect(self, profile):
        updated = log(profile, "1", datetime(2024, 5, 1, 10, 0), violation_reason="n/a")
        assert updated.trades[0].violation_reason is None

    def test_newest_first(self, profile):
        p = log(profile, "1", datetime(2024, 5, 3, 10, 0))
        p = log(p, "2", datetime(2024, 5, 1, 10, 0))
        assert [t.id for t in p.trades] == ["2", "1"]


class TestTimezones:
    """Aware timestamps are normalized before scoring and storage."""

    def test_naive_trade_after_imported_utc_trade(self, profile):
        p = log(profile, "1", datetime(2024, 5, 1, 14, 0, tzinfo=timezone.utc))
        p = log(p, "2", datetime(2024, 5, 1, 15, 0))

        assert [t.id for t in p.trades] == ["2", "1"]
        assert p.trades[1].entry_date == datetime(2024, 5, 1, 14, 0)
        # Both fall on the same UTC day, so the second uses the last slot.
        assert p.trades[0].checklist.max_trades_respected is True

    def test_close_with_aware_exit(self, profile):
        p = log(profile, "1", datetime(2024, 5, 1, 10, 0))
        closed = close_trade(
            find_trade(p, "1"), 1.2, datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc)
        )

        assert closed.exit_date == datetime(2024, 5, 1, 20, 0)
        assert closed.exit_date > closed.entry_date


class TestAddAndUpdate:
    """Ledger edits validate trades and never mutate the input profile."""

    def test_add_validates(self, profile):
        bad = Trade(
            id="x",
            ticker="SPY",
            direction=TradeDirection.LONG,
            option_type=OptionType.CALL,
            entry_date=datetime(2024, 5, 1),
            entry_price=1.0,
            quantity=1,
            pnl=10.0,
        )
        with pytest.raises(TradeValidationError):
            add_trade(profile, bad)
        assert profile.trades == ()

    def test_duplicate_id_rejected(self, profile):
        p = log(profile, "1", datetime(2024, 5, 1, 10, 0))
        with pytest.raises(TradeValidationError, match="already exists"):
            add_trade(p, p.trades[0])

    def test_update_replaces_by_id(self, profile):
        p = log(profile, "1", datetime(2024, 5, 1, 10, 0))
        p = log(p, "2", datetime(2024, 5, 2, 10, 0))

        closed = close_trade(find_trade(p, "1"), 1.2, datetime(2024, 5, 3, 15, 0))
        updated = update_trade(p, closed)

        assert [t.id for t in updated.trades] == ["2", "1"]
        assert find_trade(updated, "1").status == TradeStatus.CLOSED
        assert find_trade(p, "1").status == TradeStatus.OPEN

    def test_update_unknown_trade(self, profile):
        p = log(profile, "1", datetime(2024, 5, 1, 10, 0))
        ghost = p.trades[0].model_copy(update={"id": "ghost"})
        with pytest.raises(TradeNotFoundError):
            update_trade(p, ghost)

    def test_find_unknown_trade_is_lookup_error(self, profile):
        with pytest.raises(LookupError):
            find_trade(profile, "missing")

    def test_update_settings(self, profile):
        updated = update_settings(profile, UserSettings(max_trades_per_day=5))
        assert updated.settings.max_trades_per_day == 5
        assert profile.settings.max_trades_per_day == 1


class TestNewProfile:
    def test_defaults(self):
        profile = new_profile("Trader", 2500.0)

        assert profile.id
        assert profile.trades == ()
        assert profile.archives == ()
        assert profile.settings == UserSettings()
        assert profile.settings.max_trades_per_day == 3
