"""
Stale Words Session Builder.

Long-term review of words not seen for a while, in short series:
1. Pool: up to 1000 stale cards, oldest first
2. Series: the next 7 cards of the pool, shuffled
3. Repetition: cards missed during a series are drilled once more
   before the next series starts
"""

from __future__ import annotations
import logging
import random
from typing import Optional, Sequence

from core.session_builders.cohorts import select_stale
from core.session_builders.pool_types import SessionCard
from core.session_builders.pool_utils import shuffled
from core.srs.constants import (
    STALE_POOL_MAX_CARDS,
    STALE_SERIES_SIZE,
    STALE_THRESHOLD_MS,
)

logger = logging.getLogger(__name__)


class StaleReviewPlan:
    """
    Launch-scoped plan for a series-based stale review.

    `remaining` is consumed from the front; `to_repeat` holds the cards
    missed in the last closed series.
    """

    def __init__(
        self,
        remaining: list[SessionCard],
        series_size: int = STALE_SERIES_SIZE,
        rng: Optional[random.Random] = None
    ):
        self.remaining = remaining
        self.series_size = series_size
        self.rng = rng
        self.current_series: list[SessionCard] = []
        self.to_repeat: list[SessionCard] = []

    @classmethod
    def from_corpus(
        cls,
        cards: Sequence[SessionCard],
        now: Optional[int] = None,
        stale_threshold_ms: int = STALE_THRESHOLD_MS,
        pool_size: int = STALE_POOL_MAX_CARDS,
        series_size: int = STALE_SERIES_SIZE,
        rng: Optional[random.Random] = None
    ) -> StaleReviewPlan:
        pool = select_stale(cards, max_count=pool_size, stale_threshold_ms=stale_threshold_ms, now=now)
        logger.info("Stale review pool: %d cards", len(pool))
        return cls(pool, series_size=series_size, rng=rng)

    @property
    def total_remaining(self) -> int:
        return len(self.remaining)

    def has_next_series(self) -> bool:
        return bool(self.remaining)

    def next_series(self) -> list[SessionCard]:
        """
        Take the next series from the front of the pool (shuffled).

        Returns an empty list once the pool is exhausted.
        """
        count = min(self.series_size, len(self.remaining))
        series, self.remaining = self.remaining[:count], self.remaining[count:]
        self.current_series = shuffled(series, self.rng)
        self.to_repeat = []
        return self.current_series

    def close_series(self) -> list[SessionCard]:
        """
        Collect the cards of the current series that were missed at least once.
        """
        self.to_repeat = [card for card in self.current_series if card.needs_review]
        return self.to_repeat

    def take_repetition(self) -> list[SessionCard]:
        """
        Hand out the missed cards for a repetition round (clears the list).
        """
        cards, self.to_repeat = self.to_repeat, []
        return cards
