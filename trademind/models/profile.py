"""UserProfile aggregate root."""

from datetime import datetime

from pydantic import BaseModel, Field

from trademind.models.session import ArchivedSession
from trademind.models.settings import UserSettings
from trademind.models.trade import Trade


class UserProfile(BaseModel):
    """A trader's current ledger, archived sessions and settings.

    Trades are stored most-recent-first (insertion order). Nothing in the
    engine assumes that order is chronological.
    """

    id: str = Field(..., min_length=1, description="Profile identifier")
    name: str = Field(..., min_length=1, description="Display name")
    initial_capital: float = Field(..., description="Current period starting capital")
    start_date: datetime = Field(..., description="Current period start")
    trades: tuple[Trade, ...] = Field(default=(), description="Active ledger")
    archives: tuple[ArchivedSession, ...] = Field(default=(), description="Archived sessions, newest first")
    settings: UserSettings = Field(default_factory=UserSettings, description="Risk configuration")

    model_config = {"frozen": True}
