"""
Analytics package exports.
"""

from core.analytics.queries import statistics_frame
from core.analytics.service import build_progress_overview
from core.analytics.types import ProgressOverview

__all__ = [
    "build_progress_overview",
    "statistics_frame",
    "ProgressOverview",
]
