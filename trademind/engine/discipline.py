"""Discipline scoring for pre-trade checklists.

A trade's discipline score is the percentage of checklist rules that were
satisfied at entry. Five rules are answered by the trader; the sixth, the
daily trade limit, is computed here from the trades already logged that
day and cannot be toggled by the caller.
"""

import logging
import math
from datetime import date
from fractions import Fraction
from typing import Iterable, Union

from pydantic import BaseModel, Field

from trademind.models import ChecklistAnswers, DisciplineChecklist, Trade

logger = logging.getLogger(__name__)

# Opens and closes each consume half of one daily trade slot.
HALF_TRADE = Fraction(1, 2)

ROUND_HALF = Fraction(1, 2)

Number = Union[int, float, Fraction]


class DisciplineResult(BaseModel):
    """Outcome of scoring a checklist."""

    checklist: DisciplineChecklist = Field(..., description="Complete checklist")
    score: int = Field(..., ge=0, le=100, description="Discipline score (0-100)")
    violations: tuple[str, ...] = Field(default=(), description="Names of failed rules")

    model_config = {"frozen": True}

    @property
    def is_perfect(self) -> bool:
        """True if every rule was satisfied."""
        return self.score == 100


def count_daily_trades(trades: Iterable[Trade], day: date) -> Fraction:
    """Count the trade slots already consumed on a calendar day.

    Each trade entered on ``day`` counts 0.5 and each trade exited on
    ``day`` counts another 0.5, so a same-day round trip consumes one slot.

    Args:
        trades: Ledger to scan.
        day: Calendar day to count.

    Returns:
        Consumed slots as an exact half-integer.
    """
    count = Fraction(0)
    for trade in trades:
        if trade.entry_date.date() == day:
            count += HALF_TRADE
        if trade.exit_date is not None and trade.exit_date.date() == day:
            count += HALF_TRADE
    return count


def is_daily_limit_respected(existing_daily_count: Number, max_trades_per_day: Number) -> bool:
    """Check whether one more entry fits within the daily limit.

    Args:
        existing_daily_count: Slots already consumed today.
        max_trades_per_day: Configured daily limit.

    Returns:
        True if ``existing_daily_count + 0.5 <= max_trades_per_day``.
    """
    return Fraction(existing_daily_count) + HALF_TRADE <= Fraction(max_trades_per_day)


def build_checklist(
    answers: ChecklistAnswers,
    existing_daily_count: Number,
    max_trades_per_day: Number,
) -> DisciplineChecklist:
    """Combine manual answers with the computed daily limit flag."""
    return DisciplineChecklist(
        strategy_match=answers.strategy_match,
        risk_defined=answers.risk_defined,
        size_within_limits=answers.size_within_limits,
        iv_conditions_met=answers.iv_conditions_met,
        emotional_state_check=answers.emotional_state_check,
        max_trades_respected=is_daily_limit_respected(existing_daily_count, max_trades_per_day),
    )


def calculate_discipline_score(checklist: DisciplineChecklist) -> int:
    """Calculate the 0-100 score for a checklist.

    Rounds half up, so 4 of 6 rules gives 67.

    Args:
        checklist: Complete checklist.

    Returns:
        Integer score; 0 if the checklist has no items.
    """
    values = list(checklist.items().values())
    if not values:
        return 0
    ratio = Fraction(100 * sum(1 for v in values if v), len(values))
    return math.floor(ratio + ROUND_HALF)


def failed_rules(checklist: DisciplineChecklist) -> tuple[str, ...]:
    """Names of the checklist rules that were not satisfied."""
    return tuple(name for name, passed in checklist.items().items() if not passed)


def score_checklist(
    answers: ChecklistAnswers,
    existing_daily_count: Number,
    max_trades_per_day: Number,
) -> DisciplineResult:
    """Build and score the checklist for a new trade.

    Scoring is informational only; a score of 0 never blocks the trade.

    Args:
        answers: Trader's manual answers.
        existing_daily_count: Slots already consumed on the trade's day.
        max_trades_per_day: Configured daily limit.

    Returns:
        DisciplineResult with the checklist, score and failed rule names.
    """
    checklist = build_checklist(answers, existing_daily_count, max_trades_per_day)
    score = calculate_discipline_score(checklist)
    violations = failed_rules(checklist)

    logger.debug(
        "Scored checklist: %d (daily count %s of %s, violations %s)",
        score, existing_daily_count, max_trades_per_day, list(violations),
    )

    return DisciplineResult(checklist=checklist, score=score, violations=violations)
