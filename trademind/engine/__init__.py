"""Trading performance and discipline analytics engine.

All functions are pure: they take trades, settings or a profile and return
new values without touching storage.
"""

from trademind.engine.archive import build_archive, reset_session
from trademind.engine.discipline import (
    DisciplineResult,
    build_checklist,
    calculate_discipline_score,
    count_daily_trades,
    is_daily_limit_respected,
    score_checklist,
)
from trademind.engine.equity import build_equity_curve, calculate_max_drawdown
from trademind.engine.ledger import (
    add_trade,
    find_trade,
    log_trade,
    new_profile,
    update_settings,
    update_trade,
)
from trademind.engine.metrics import calculate_metrics, current_balance, return_percent
from trademind.engine.validation import (
    calculate_trade_pnl,
    close_trade,
    is_consistent,
    realized_pnl,
    reopen_trade,
    validate_trade,
)

__all__ = [
    "DisciplineResult",
    "add_trade",
    "build_archive",
    "build_checklist",
    "build_equity_curve",
    "calculate_discipline_score",
    "calculate_max_drawdown",
    "calculate_metrics",
    "calculate_trade_pnl",
    "close_trade",
    "count_daily_trades",
    "current_balance",
    "find_trade",
    "is_consistent",
    "is_daily_limit_respected",
    "log_trade",
    "new_profile",
    "realized_pnl",
    "reopen_trade",
    "reset_session",
    "return_percent",
    "score_checklist",
    "update_settings",
    "update_trade",
    "validate_trade",
]
