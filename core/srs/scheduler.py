"""
Scheduler - Ease/Interval Updates

Pure scheduling update for one graded review (no storage calls).

Main workflow:
1. Load statistics (caller's responsibility, see StatisticsStore)
2. Apply the grade: counters, ease factor, interval, next review
3. Persist (StatisticsStore.record_grade does this after every grade)
"""

from __future__ import annotations
import logging
import math
from typing import Optional

from core.srs.constants import (
    DAY_MS,
    DIFFICULT_INTERVAL_MULTIPLIER,
    EASE_DELTA,
    EASE_MAX,
    EASE_MIN,
    EASY_INTERVAL_MULTIPLIER,
    Grade,
    SUCCESS_THRESHOLD,
)
from core.srs.memory_state import ReviewStatistics, now_ms

logger = logging.getLogger(__name__)


def validate_score(score: int) -> Grade:
    """
    Convert a raw score to a Grade.

    Raises:
        ValueError: if score is not one of 0, 1, 2, 3
    """
    if isinstance(score, bool):
        raise ValueError(f"Invalid score: {score!r}")
    try:
        return Grade(score)
    except ValueError:
        raise ValueError(f"Invalid score: {score!r} (expected 0-3)") from None


def grade(
    stats: ReviewStatistics,
    score: int,
    now: Optional[int] = None
) -> ReviewStatistics:
    """
    Apply a graded review to card statistics (modifies in place).

    Success (correct/easy) lowers the ease factor and grows the interval;
    failure (incorrect/difficult) raises the ease factor and shrinks it.
    In the "correct" branch the freshly clamped ease factor is the one
    used as the interval multiplier.

    Args:
        stats: ReviewStatistics to update
        score: 0=incorrect, 1=difficult, 2=correct, 3=easy
        now: Review timestamp in epoch ms (defaults to now)

    Returns:
        The same ReviewStatistics object, updated
    """
    grade_value = validate_score(score)
    if now is None:
        now = now_ms()

    stats.attempts += 1
    stats.last_review = now

    if grade_value >= SUCCESS_THRESHOLD:
        stats.successes += 1
        stats.ease_factor = max(EASE_MIN, stats.ease_factor + EASE_DELTA[grade_value])
        if grade_value == Grade.EASY:
            stats.interval = math.ceil(stats.interval * EASY_INTERVAL_MULTIPLIER)
        else:
            stats.interval = math.ceil(stats.interval * stats.ease_factor)
    else:
        stats.failures += 1
        stats.ease_factor = min(EASE_MAX, stats.ease_factor + EASE_DELTA[grade_value])
        if grade_value == Grade.INCORRECT:
            stats.interval = 1
        else:
            stats.interval = max(1, math.ceil(stats.interval * DIFFICULT_INTERVAL_MULTIPLIER))

    stats.next_review = now + stats.interval * DAY_MS

    logger.debug(
        "Graded %s: ease=%.2f interval=%d",
        grade_value.name, stats.ease_factor, stats.interval
    )
    return stats
