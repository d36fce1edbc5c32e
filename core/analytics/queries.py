"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

from typing import Mapping

import pandas as pd

from core.analytics.constants import STATISTICS_COLUMNS
from core.srs.memory_state import ReviewStatistics


def statistics_frame(statistics: Mapping[str, ReviewStatistics]) -> pd.DataFrame:
    """
    Load per-card statistics into a dataframe (one row per card identity).
    """
    if not statistics:
        return pd.DataFrame(columns=STATISTICS_COLUMNS)

    rows = [
        {
            "card_id": card_id,
            "attempts": stats.attempts,
            "successes": stats.successes,
            "failures": stats.failures,
            "last_review": stats.last_review,
            "ease_factor": stats.ease_factor,
            "interval": stats.interval,
            "next_review": stats.next_review,
        }
        for card_id, stats in statistics.items()
    ]
    df = pd.DataFrame(rows, columns=STATISTICS_COLUMNS)
    return df.sort_values("card_id").reset_index(drop=True)
