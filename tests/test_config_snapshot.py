"""Tests for config loading and profile snapshots."""

from datetime import datetime
from pathlib import Path

import pytest
import toml
from pydantic import ValidationError

from trademind.config import (
    CONFIG_ENV_VAR,
    create_template_config,
    get_config_path,
    get_profile_path,
    load_config,
    settings_from_config,
)
from trademind.engine import log_trade, new_profile, reset_session
from trademind.exceptions import SnapshotError
from trademind.models import ChecklistAnswers, OptionType, TradeDirection, UserSettings
from trademind.snapshot import load_profile, save_profile


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    return path


class TestConfig:
    """TOML configuration under TRADEMIND_CONFIG."""

    def test_env_var_overrides_path(self, config_path):
        assert get_config_path() == config_path

    def test_missing_config_is_none(self, config_path):
        assert load_config() is None

    def test_unreadable_config_is_none(self, config_path):
        config_path.write_text("[journal\nname = ")
        assert load_config() is None

    def test_template_round_trip(self, config_path):
        written = create_template_config()
        config = load_config()

        assert written == config_path
        assert config["journal"]["initial_capital"] == 10000.0
        assert settings_from_config(config) == UserSettings()

    def test_settings_partial_table(self):
        config = {"settings": {"max_trades_per_day": 5}}
        settings = settings_from_config(config)

        assert settings.max_trades_per_day == 5
        assert settings.default_target_percent == 40

    def test_settings_invalid_value(self):
        with pytest.raises(ValidationError):
            settings_from_config({"settings": {"max_trades_per_day": 0}})

    @pytest.mark.parametrize("field", sorted(UserSettings.model_fields))
    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_settings_reject_non_finite(self, field, value):
        with pytest.raises(ValidationError):
            settings_from_config({"settings": {field: value}})

    def test_toml_inf_daily_limit_rejected(self, config_path):
        config_path.write_text("[settings]\nmax_trades_per_day = inf\n")
        config = load_config()
        with pytest.raises(ValidationError):
            settings_from_config(config)

    def test_profile_path_from_config(self, tmp_path):
        target = tmp_path / "journal.json"
        assert get_profile_path({"journal": {"profile_path": str(target)}}) == target

    def test_profile_path_default(self):
        assert get_profile_path(None).name == "profile.json"

    def test_settings_written_as_toml(self, config_path):
        create_template_config()
        raw = toml.load(config_path)
        assert set(raw["settings"]) == set(UserSettings.model_fields)


class TestSnapshot:
    """JSON backups of a full profile."""

    def test_save_and_load(self, tmp_path: Path):
        profile = new_profile("Demo", 10000.0, start_date=datetime(2024, 5, 1), profile_id="p1")
        profile = log_trade(
            profile,
            ChecklistAnswers(strategy_match=True),
            ticker="SPY",
            direction=TradeDirection.SHORT,
            option_type=OptionType.PUT,
            entry_date=datetime(2024, 5, 1, 10, 0),
            entry_price=2.5,
            quantity=5,
            trade_id="t1",
        )
        profile = reset_session(profile, 12000.0, now=datetime(2024, 6, 1), archive_id="a1")

        path = tmp_path / "nested" / "profile.json"
        save_profile(profile, path)

        assert load_profile(path) == profile
        assert not path.with_suffix(".json.tmp").exists()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SnapshotError):
            load_profile(tmp_path / "missing.json")

    def test_invalid_file(self, tmp_path: Path):
        path = tmp_path / "profile.json"
        path.write_text('{"id": "x"}')
        with pytest.raises(SnapshotError, match="Invalid profile"):
            load_profile(path)
