"""ArchivedSession data model."""

from datetime import datetime

from pydantic import BaseModel, Field

from trademind.models.trade import Trade


class ArchivedSession(BaseModel):
    """Immutable snapshot of a completed trading period."""

    id: str = Field(..., min_length=1, description="Archive identifier")
    start_date: datetime = Field(..., description="Period start")
    end_date: datetime = Field(..., description="Period end (archive time)")
    initial_capital: float = Field(..., description="Capital at period start")
    final_balance: float = Field(..., description="Initial capital plus realized P&L")
    total_pnl: float = Field(..., description="Total realized P&L for the period")
    trade_count: int = Field(..., ge=0, description="Number of trades in the period")
    trades: tuple[Trade, ...] = Field(default=(), description="Frozen copy of the ledger")

    model_config = {"frozen": True}
