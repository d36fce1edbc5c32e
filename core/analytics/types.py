"""
Types for progress overviews.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressOverview:
    """
    Lifetime totals over one user's review statistics.
    """
    cards_count: int
    total_attempts: int
    total_successes: int
    total_failures: int
    success_rate: int  # percent, 0-100
    difficult_cards: int
    mastered_cards: int
    due_cards: int
