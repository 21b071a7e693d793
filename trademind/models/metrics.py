"""Derived analytics models (never persisted)."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Metrics(BaseModel):
    """Dashboard summary statistics for a ledger."""

    total_trades: int = Field(default=0, ge=0, description="All trades, open or closed")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="% of closed trades with pnl > 0")
    total_pnl: float = Field(default=0.0, description="Sum of realized P&L")
    average_pnl: float = Field(default=0.0, description="Realized P&L per closed trade")
    discipline_score: float = Field(
        default=0.0, ge=0, le=100, description="Mean discipline score over all trades"
    )
    max_drawdown: float = Field(default=0.0, ge=0, description="Largest peak-to-trough P&L decline")

    model_config = {"frozen": True}


class EquityPoint(BaseModel):
    """One point on the account balance curve."""

    label: str = Field(..., description="Display label ('Start' or short date)")
    balance: float = Field(..., description="Account balance after this point")
    pnl: float = Field(default=0.0, description="Realized P&L contributed by this point")
    timestamp: Optional[datetime] = Field(default=None, description="Trade entry date")

    model_config = {"frozen": True}


class DaySummary(BaseModel):
    """Aggregated activity for one calendar day."""

    pnl: float = Field(default=0.0, description="Realized P&L of trades entered that day")
    count: int = Field(default=0, ge=0, description="Trades entered that day")
    wins: int = Field(default=0, ge=0, description="Winning trades entered that day")

    model_config = {"frozen": True}


class MonthSummary(BaseModel):
    """Calendar view of one month of trading."""

    year: int = Field(..., description="Calendar year")
    month: int = Field(..., ge=1, le=12, description="Calendar month")
    days_in_month: int = Field(..., ge=28, le=31, description="Number of days in the month")
    days: dict[int, DaySummary] = Field(default_factory=dict, description="Day of month -> summary")
    total_pnl: float = Field(default=0.0, description="Month realized P&L")
    total_trades: int = Field(default=0, ge=0, description="Trades entered in the month")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Wins over trades entered")

    model_config = {"frozen": True}
