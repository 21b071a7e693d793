"""Data models for TradeMind."""

from trademind.models.metrics import DaySummary, EquityPoint, Metrics, MonthSummary
from trademind.models.profile import UserProfile
from trademind.models.session import ArchivedSession
from trademind.models.settings import UserSettings
from trademind.models.trade import (
    ChecklistAnswers,
    DisciplineChecklist,
    Emotion,
    OptionType,
    Trade,
    TradeDirection,
    TradeStatus,
)

__all__ = [
    "ArchivedSession",
    "ChecklistAnswers",
    "DaySummary",
    "DisciplineChecklist",
    "Emotion",
    "EquityPoint",
    "Metrics",
    "MonthSummary",
    "OptionType",
    "Trade",
    "TradeDirection",
    "TradeStatus",
    "UserProfile",
    "UserSettings",
]
