"""
Cohort selectors for targeted review sessions.

Both selectors work on cards that already carry statistics (see
pool_utils.cards_with_statistics) and never touch storage:
1. Difficult: failure rate above 50%, worst first
2. Stale: not reviewed for 3 days, oldest first

An empty result means "nothing to review", never a fallback to other cards.
"""

from __future__ import annotations
from functools import cmp_to_key
from typing import Optional, Sequence

from core.session_builders.pool_types import SessionCard
from core.srs.constants import (
    DIFFICULT_FAILURE_RATE,
    DIFFICULT_MAX_CARDS,
    DIFFICULT_TIE_TOLERANCE,
    STALE_MAX_CARDS,
    STALE_THRESHOLD_MS,
    STALE_TIE_WINDOW_MS,
)
from core.srs.memory_state import now_ms


def is_difficult(card: SessionCard) -> bool:
    stats = card.stats
    if stats is None or stats.attempts == 0:
        return False
    return stats.failures / stats.attempts > DIFFICULT_FAILURE_RATE


def _compare_difficulty(a: SessionCard, b: SessionCard) -> float:
    a_rate = a.stats.failure_rate
    b_rate = b.stats.failure_rate
    # Near-equal rates: more absolute failures first
    if abs(a_rate - b_rate) < DIFFICULT_TIE_TOLERANCE:
        return b.stats.failures - a.stats.failures
    return b_rate - a_rate


def select_difficult(
    cards: Sequence[SessionCard],
    max_count: int = DIFFICULT_MAX_CARDS
) -> list[SessionCard]:
    """
    Select cards failed more often than not, hardest first.

    Args:
        cards: Cards with attached statistics
        max_count: Maximum number of cards returned

    Returns:
        Up to max_count cards sorted by failure rate (descending)
    """
    difficult = [card for card in cards if is_difficult(card)]
    difficult.sort(key=cmp_to_key(_compare_difficulty))
    return difficult[:max_count]


def is_stale(card: SessionCard, cutoff: int) -> bool:
    stats = card.stats
    if stats is None or stats.attempts == 0:
        return False
    return stats.last_review is not None and stats.last_review < cutoff


def _compare_staleness(a: SessionCard, b: SessionCard) -> int:
    a_last = a.stats.last_review or 0
    b_last = b.stats.last_review or 0
    # Reviewed within a day of each other: well-practised cards first
    if abs(a_last - b_last) < STALE_TIE_WINDOW_MS:
        return b.stats.attempts - a.stats.attempts
    return a_last - b_last


def select_stale(
    cards: Sequence[SessionCard],
    max_count: int = STALE_MAX_CARDS,
    stale_threshold_ms: int = STALE_THRESHOLD_MS,
    now: Optional[int] = None
) -> list[SessionCard]:
    """
    Select practised cards that have not been reviewed recently.

    Args:
        cards: Cards with attached statistics
        max_count: Maximum number of cards returned
        stale_threshold_ms: Minimum age of the last review
        now: Reference time in epoch ms (defaults to now)

    Returns:
        Up to max_count cards, least recently reviewed first
    """
    cutoff = (now_ms() if now is None else now) - stale_threshold_ms
    stale = [card for card in cards if is_stale(card, cutoff)]
    stale.sort(key=cmp_to_key(_compare_staleness))
    return stale[:max_count]
