"""Trade and discipline checklist data models."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TradeDirection(str, Enum):
    """Position direction."""

    LONG = "Long"
    SHORT = "Short"


class OptionType(str, Enum):
    """Option contract type."""

    CALL = "Call"
    PUT = "Put"


class TradeStatus(str, Enum):
    """Lifecycle status of a trade."""

    OPEN = "Open"
    CLOSED = "Closed"


class Emotion(str, Enum):
    """Self-reported emotional state at entry or exit."""

    CALM = "Calm"
    ANXIOUS = "Anxious"
    CONFIDENT = "Confident"
    FOMO = "FOMO"
    BORED = "Bored"
    REVENGE = "Revenge"


class ChecklistAnswers(BaseModel):
    """Manual answers to the pre-trade checklist.

    The daily trade limit flag is absent; the discipline scorer computes it.
    """

    strategy_match: bool = Field(default=False, description="Trade is in the written strategy plan")
    risk_defined: bool = Field(default=False, description="Stop or max loss is defined")
    size_within_limits: bool = Field(default=False, description="Position size within % rules")
    iv_conditions_met: bool = Field(default=False, description="IV / market conditions favorable")
    emotional_state_check: bool = Field(default=False, description="Calm and not trading emotionally")

    model_config = {"frozen": True}


class DisciplineChecklist(BaseModel):
    """Complete checklist recorded on a trade, including the computed flag."""

    strategy_match: bool = Field(default=False, description="Trade is in the written strategy plan")
    risk_defined: bool = Field(default=False, description="Stop or max loss is defined")
    size_within_limits: bool = Field(default=False, description="Position size within % rules")
    iv_conditions_met: bool = Field(default=False, description="IV / market conditions favorable")
    emotional_state_check: bool = Field(default=False, description="Calm and not trading emotionally")
    max_trades_respected: bool = Field(
        default=False, description="Daily trade limit respected (engine-computed)"
    )

    model_config = {"frozen": True}

    def items(self) -> dict[str, bool]:
        """Return the checklist as an ordered name -> flag mapping."""
        return self.model_dump()


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware timestamp to naive UTC; naive values pass through."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class Trade(BaseModel):
    """Represents one journaled options position."""

    id: str = Field(..., min_length=1, description="Stable trade identifier")
    ticker: str = Field(..., min_length=1, description="Underlying symbol")
    direction: TradeDirection = Field(..., description="Long or Short")
    option_type: OptionType = Field(..., description="Call or Put")
    setup: Optional[str] = Field(default=None, description="Strategy/setup name (e.g. 'Bull Flag')")
    entry_date: datetime = Field(..., description="Entry timestamp")
    exit_date: Optional[datetime] = Field(default=None, description="Exit timestamp")
    expiration_date: Optional[date] = Field(default=None, description="Option expiration date")
    status: TradeStatus = Field(default=TradeStatus.OPEN, description="Open or Closed")
    entry_price: float = Field(..., ge=0, description="Premium paid/received per share")
    exit_price: Optional[float] = Field(default=None, ge=0, description="Exit premium per share")
    strike_price: Optional[float] = Field(default=None, gt=0, description="Strike price")
    quantity: int = Field(..., description="Contracts (negative for short)")
    fees: float = Field(default=0.0, ge=0, description="Commissions and fees")
    target_price: Optional[float] = Field(default=None, ge=0, description="Planned profit target")
    stop_loss_price: Optional[float] = Field(default=None, ge=0, description="Planned stop loss")
    pnl: Optional[float] = Field(default=None, description="Realized P&L (closed trades only)")
    notes: str = Field(default="", description="Free-text notes")
    entry_emotion: Emotion = Field(default=Emotion.CALM, description="Emotion at entry")
    exit_emotion: Optional[Emotion] = Field(default=None, description="Emotion at exit")
    checklist: DisciplineChecklist = Field(
        default_factory=DisciplineChecklist, description="Pre-trade checklist"
    )
    discipline_score: int = Field(default=0, ge=0, le=100, description="Checklist score (0-100)")
    violation_reason: Optional[str] = Field(default=None, description="Rule violation annotation")

    model_config = {"frozen": True}

    @field_validator("entry_date", "exit_date")
    @classmethod
    def to_naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Store timestamps as naive UTC.

        Imported backups carry aware UTC values while locally logged trades
        are naive; mixing the two would make the ledger unsortable.
        """
        return naive_utc(v)

    @property
    def is_open(self) -> bool:
        """True if the position has not been closed."""
        return self.status == TradeStatus.OPEN
