"""
Constants for the progress overview.
"""

from __future__ import annotations

from typing import Final

from core.srs.constants import (
    DIFFICULT_FAILURE_RATE,
    MASTERED_MIN_ATTEMPTS,
    MASTERED_SUCCESS_RATE,
)


STATISTICS_COLUMNS: Final[list[str]] = [
    "card_id",
    "attempts",
    "successes",
    "failures",
    "last_review",
    "ease_factor",
    "interval",
    "next_review",
]

DIFFICULT_RATE: Final[float] = DIFFICULT_FAILURE_RATE
MASTERED_ATTEMPTS: Final[int] = MASTERED_MIN_ATTEMPTS
MASTERED_RATE: Final[float] = MASTERED_SUCCESS_RATE
