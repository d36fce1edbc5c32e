"""
Session lifecycle for review sessions.

Ties the statistics store, the sequencer and the session counters together.
A caller (any UI) starts a session, asks for the current card, submits a
grade and reads the final score when the session is complete.

Modes:
- selection: entries picked by level/theme/part
- custom: entries picked one by one
- numbers: generated numeral drill
- difficult: cards failed more often than not
- stale: series of cards not reviewed for a while
- stale_repeat: repetition of the cards missed in the last stale series
"""

from __future__ import annotations

import logging
import random
from typing import Literal, Optional, Sequence

from core import number_drill
from core.schemas import VocabEntry
from core.sequencer import SessionSequencer
from core.session_builders.cohorts import select_difficult
from core.session_builders.pool_types import SessionCard
from core.session_builders.pool_utils import cards_with_statistics, register_cards
from core.session_builders.stale_builder import StaleReviewPlan
from core.session_stats import SessionStatistics, final_score, record_grade
from core.srs.constants import DIFFICULT_MAX_CARDS
from core.srs.memory_state import now_ms
from core.srs.persistence import StatisticsStore

logger = logging.getLogger(__name__)

SessionMode = Literal["selection", "custom", "numbers", "difficult", "stale", "stale_repeat"]


class ReviewSession:
    """
    One learner's active review session.

    `clock` returns epoch milliseconds; tests pass a fixed clock.
    """

    def __init__(
        self,
        store: StatisticsStore,
        rng: Optional[random.Random] = None,
        clock=now_ms
    ):
        self.store = store
        self.rng = rng
        self.clock = clock
        self.sequencer = SessionSequencer(rng)
        self.stats = SessionStatistics()
        self.mode: Optional[SessionMode] = None
        self.cards: list[SessionCard] = []
        self.stale_plan: Optional[StaleReviewPlan] = None
        self.restart_args: tuple = ()

    # ---- Starting sessions ----

    def _begin(self, cards: list[SessionCard], mode: SessionMode) -> int:
        self.cards = cards
        self.mode = mode
        self.stats = SessionStatistics()
        self.sequencer.reset(cards)
        logger.info("Started %s session with %d cards", mode, len(cards))
        return len(cards)

    def start(self, entries: Sequence[VocabEntry], mode: SessionMode = "selection") -> int:
        """
        Start a session over entries, registering unseen cards.

        Returns:
            Number of unique cards in the session (0 = nothing started)
        """
        if not entries:
            logger.info("No entries for %s session", mode)
            return 0
        self.restart_args = (list(entries), mode)
        self.stale_plan = None
        cards = register_cards(entries, self.store, self.clock())
        return self._begin(cards, mode)

    def start_custom(self, entries: Sequence[VocabEntry]) -> int:
        return self.start(entries, mode="custom")

    def start_numbers(self, difficulty: str, count: int) -> int:
        entries = number_drill.build_number_entries(difficulty, count, self.rng)
        started = self.start(entries, mode="numbers")
        self.restart_args = ("numbers", difficulty, count)
        return started

    def start_difficult(
        self,
        corpus: Sequence[VocabEntry],
        max_count: int = DIFFICULT_MAX_CARDS
    ) -> int:
        """
        Start an intensive session over the hardest cards of the corpus.

        Returns 0 (and starts nothing) when no card qualifies.
        """
        self.restart_args = ("difficult", list(corpus), max_count)
        self.stale_plan = None
        difficult = select_difficult(cards_with_statistics(corpus, self.store), max_count)
        if not difficult:
            logger.info("No difficult cards found")
            return 0
        return self._begin(difficult, "difficult")

    def start_stale(self, corpus: Sequence[VocabEntry]) -> int:
        """
        Plan a stale review over the corpus and start its first series.

        Returns 0 (and starts nothing) when no card is stale.
        """
        self.restart_args = ("stale", list(corpus))
        self.stale_plan = StaleReviewPlan.from_corpus(
            cards_with_statistics(corpus, self.store),
            now=self.clock(),
            rng=self.rng,
        )
        if not self.stale_plan.has_next_series():
            self.stale_plan = None
            return 0
        return self.next_stale_series()

    def next_stale_series(self) -> int:
        """Start the next series of the stale plan (0 once the pool is exhausted)."""
        if self.stale_plan is None or not self.stale_plan.has_next_series():
            return 0
        return self._begin(self.stale_plan.next_series(), "stale")

    def finish_stale_series(self) -> int:
        """
        Close the current stale series.

        Returns:
            Number of missed cards waiting for a repetition round
        """
        if self.stale_plan is None:
            return 0
        return len(self.stale_plan.close_series())

    def start_stale_repetition(self) -> int:
        """Drill the cards missed in the last stale series."""
        if self.stale_plan is None:
            return 0
        missed = self.stale_plan.take_repetition()
        if not missed:
            return 0
        return self._begin(missed, "stale_repeat")

    def restart(self) -> int:
        """Start the same kind of session again."""
        if not self.restart_args:
            return 0
        kind = self.restart_args[0]
        if kind == "numbers":
            return self.start_numbers(*self.restart_args[1:])
        if kind == "difficult":
            return self.start_difficult(*self.restart_args[1:])
        if kind == "stale":
            return self.start_stale(*self.restart_args[1:])
        entries, mode = self.restart_args
        return self.start(entries, mode)

    # ---- Reviewing ----

    def current_card(self) -> Optional[SessionCard]:
        return self.sequencer.current()

    def submit_grade(self, score: int) -> bool:
        """
        Grade the current card, persist its statistics and move on.

        Returns:
            True while the session has more cards to present

        Raises:
            RuntimeError: if there is no card to grade
        """
        card = self.sequencer.current()
        if card is None:
            raise RuntimeError("No card to grade: session is complete or not started")

        self.store.record_grade(card.identity, score, self.clock())
        record_grade(self.stats, card, score, self.sequencer)
        return self.sequencer.advance()

    def is_complete(self) -> bool:
        return self.sequencer.is_complete()

    def progress(self) -> tuple[int, int, int]:
        """
        (completed, unique cards, attempts) for a progress bar.

        Repetition rounds count cards passed, other sessions cards seen.
        """
        completed = self.stats.correct if self.mode == "stale_repeat" else self.stats.total
        return completed, len(self.cards), self.stats.total_attempts

    def final_score(self) -> int:
        return final_score(self.stats)
