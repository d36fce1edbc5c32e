"""
Service layer to assemble a user's progress overview.
"""

from __future__ import annotations

from typing import Mapping, Optional

from core.analytics.metrics import (
    compute_difficult_count,
    compute_due_count,
    compute_mastered_count,
    percent,
)
from core.analytics.queries import statistics_frame
from core.analytics.types import ProgressOverview
from core.srs.memory_state import ReviewStatistics, now_ms


def build_progress_overview(
    statistics: Mapping[str, ReviewStatistics],
    now: Optional[int] = None
) -> ProgressOverview:
    """
    Compute lifetime totals for the statistics panel.
    """
    now = now_ms() if now is None else now
    stats_df = statistics_frame(statistics)

    total_attempts = int(stats_df["attempts"].sum()) if not stats_df.empty else 0
    total_successes = int(stats_df["successes"].sum()) if not stats_df.empty else 0
    total_failures = int(stats_df["failures"].sum()) if not stats_df.empty else 0

    return ProgressOverview(
        cards_count=len(stats_df),
        total_attempts=total_attempts,
        total_successes=total_successes,
        total_failures=total_failures,
        success_rate=percent(total_successes, total_attempts),
        difficult_cards=compute_difficult_count(stats_df),
        mastered_cards=compute_mastered_count(stats_df),
        due_cards=compute_due_count(stats_df, now),
    )
