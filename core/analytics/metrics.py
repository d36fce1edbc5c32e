"""
Metric computations over per-card statistics.
"""

from __future__ import annotations

import math

import pandas as pd

from core.analytics.constants import DIFFICULT_RATE, MASTERED_ATTEMPTS, MASTERED_RATE


def percent(numerator: int, denominator: int) -> int:
    """Half-up rounded percentage, 0 when the denominator is 0."""
    if denominator <= 0:
        return 0
    return int(math.floor(100 * numerator / denominator + 0.5))


def compute_difficult_count(stats_df: pd.DataFrame) -> int:
    """
    Cards failed more often than not.
    """
    if stats_df.empty:
        return 0
    practised = stats_df[stats_df["attempts"] > 0]
    rates = practised["failures"] / practised["attempts"]
    return int((rates > DIFFICULT_RATE).sum())


def compute_mastered_count(stats_df: pd.DataFrame) -> int:
    """
    Cards with enough attempts and a high success rate.
    """
    if stats_df.empty:
        return 0
    practised = stats_df[stats_df["attempts"] >= MASTERED_ATTEMPTS]
    rates = practised["successes"] / practised["attempts"]
    return int((rates > MASTERED_RATE).sum())


def compute_due_count(stats_df: pd.DataFrame, now: int) -> int:
    """
    Cards whose next review is at or before now.
    """
    if stats_df.empty:
        return 0
    return int((stats_df["next_review"] <= now).sum())
