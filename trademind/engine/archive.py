"""Session archival: close out a trading period and start a new one.

The transition is built entirely in memory. The caller receives the new
profile and is responsible for persisting it; if that fails, the old
profile is untouched and nothing has changed.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from trademind.engine.metrics import calculate_metrics
from trademind.models import ArchivedSession, UserProfile

logger = logging.getLogger(__name__)


def build_archive(
    profile: UserProfile,
    now: datetime,
    archive_id: Optional[str] = None,
) -> ArchivedSession:
    """Snapshot the profile's current period.

    Trades are deep-copied so the archive cannot observe later edits to
    the active ledger.

    Args:
        profile: Profile whose current period is being closed.
        now: End date for the period.
        archive_id: Identifier for the archive (random if omitted).

    Returns:
        Frozen ArchivedSession.
    """
    metrics = calculate_metrics(profile.trades, profile.initial_capital)

    return ArchivedSession(
        id=archive_id or uuid.uuid4().hex,
        start_date=profile.start_date,
        end_date=now,
        initial_capital=profile.initial_capital,
        final_balance=profile.initial_capital + metrics.total_pnl,
        total_pnl=metrics.total_pnl,
        trade_count=len(profile.trades),
        trades=tuple(t.model_copy(deep=True) for t in profile.trades),
    )


def reset_session(
    profile: UserProfile,
    new_capital: float,
    now: Optional[datetime] = None,
    archive_id: Optional[str] = None,
) -> UserProfile:
    """Archive the current period and reset the ledger.

    Any numeric capital is accepted, higher or lower than the current one.

    Args:
        profile: Current profile.
        new_capital: Starting capital for the new period.
        now: Transition time (defaults to the current time).
        archive_id: Identifier for the new archive (random if omitted).

    Returns:
        New profile with the snapshot prepended to ``archives``, an empty
        ledger, ``initial_capital == new_capital`` and ``start_date == now``.
    """
    if now is None:
        now = datetime.now()

    archive = build_archive(profile, now, archive_id)

    logger.info(
        "Archived session %s for profile %s: %d trades, P&L %.2f, new capital %.2f",
        archive.id, profile.id, archive.trade_count, archive.total_pnl, new_capital,
    )

    return profile.model_copy(
        update={
            "archives": (archive,) + profile.archives,
            "trades": (),
            "initial_capital": float(new_capital),
            "start_date": now,
        }
    )
