"""Session builder modules for the different review modes."""

from core.session_builders.cohorts import (
    select_difficult,
    select_stale,
)
from core.session_builders.pool_types import SessionCard
from core.session_builders.pool_utils import (
    cards_with_statistics,
    register_cards,
    shuffled,
)
from core.session_builders.stale_builder import StaleReviewPlan

__all__ = [
    "select_difficult",
    "select_stale",
    "SessionCard",
    "cards_with_statistics",
    "register_cards",
    "shuffled",
    "StaleReviewPlan",
]
