"""UserSettings data model."""

from pydantic import BaseModel, Field


class UserSettings(BaseModel):
    """Per-profile risk and discipline configuration."""

    default_target_percent: float = Field(
        default=40.0, ge=0, allow_inf_nan=False, description="Default profit target as % of entry"
    )
    default_stop_loss_percent: float = Field(
        default=20.0, ge=0, allow_inf_nan=False, description="Default stop loss as % of entry"
    )
    max_trades_per_day: float = Field(
        default=3.0, gt=0, allow_inf_nan=False, description="Daily limit (opens and closes count 0.5 each)"
    )
    max_risk_per_trade_percent: float = Field(
        default=4.0, gt=0, allow_inf_nan=False, description="Max risk per trade as % of current balance"
    )

    model_config = {"frozen": True}
