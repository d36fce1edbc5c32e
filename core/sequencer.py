"""
Session Sequencer - wave-based card ordering

A session presents cards in waves:
1. First wave: every card of the pool, shuffled
2. Cards graded incorrect/difficult are requeued into a backlog
3. When a wave is exhausted the backlog becomes the next wave (reshuffled)
4. The session is complete when a wave ends with an empty backlog

State machine:
    EMPTY -> WAVE_EXHAUSTED -(promote_wave)-> WAVE_ACTIVE -> WAVE_EXHAUSTED
    WAVE_EXHAUSTED with empty backlog -> COMPLETE
"""

from __future__ import annotations
from enum import Enum
import logging
import random
from typing import Optional, Sequence

from core.session_builders.pool_types import SessionCard
from core.session_builders.pool_utils import shuffled

logger = logging.getLogger(__name__)


class SequencerState(str, Enum):
    EMPTY = "empty"
    WAVE_ACTIVE = "wave_active"
    WAVE_EXHAUSTED = "wave_exhausted"
    COMPLETE = "complete"


class SessionSequencer:
    """
    Orders the cards of one session across waves.

    Randomness comes from `rng` so sessions can be replayed in tests.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng
        self.pool: list[SessionCard] = []
        self.current_wave: list[SessionCard] = []
        self.backlog: list[SessionCard] = []
        self.position = 0
        self.wave_number = 0

    @property
    def state(self) -> SequencerState:
        if not self.pool and not self.current_wave and not self.backlog:
            return SequencerState.EMPTY
        if self.position < len(self.current_wave):
            return SequencerState.WAVE_ACTIVE
        if self.backlog:
            return SequencerState.WAVE_EXHAUSTED
        return SequencerState.COMPLETE

    def reset(self, cards: Sequence[SessionCard]) -> None:
        """
        Start a new session over cards.

        Clears every card's session flags and queues the shuffled pool as
        the backlog; the first wave is built on the first promotion.
        """
        for card in cards:
            card.clear_flags()
        self.pool = shuffled(cards, self.rng)
        self.backlog = list(self.pool)
        self.current_wave = []
        self.position = 0
        self.wave_number = 0
        logger.info("Session reset with %d cards", len(self.pool))

    def peek(self) -> Optional[SessionCard]:
        """Card at the cursor of the current wave, without any transition."""
        if self.position < len(self.current_wave):
            return self.current_wave[self.position]
        return None

    def promote_wave(self) -> bool:
        """
        Turn the backlog into a freshly shuffled wave.

        Only acts when the current wave is exhausted and the backlog is not
        empty. Returns True if a new wave started.
        """
        if self.position < len(self.current_wave) or not self.backlog:
            return False
        self.current_wave = shuffled(self.backlog, self.rng)
        self.backlog = []
        self.position = 0
        self.wave_number += 1
        logger.debug("Wave %d: %d cards", self.wave_number, len(self.current_wave))
        return True

    def current(self) -> Optional[SessionCard]:
        """
        Card to present now, starting the next wave if needed.

        Returns None once the session is complete.
        """
        card = self.peek()
        if card is None and self.promote_wave():
            card = self.peek()
        return card

    def advance(self) -> bool:
        """
        Move past the current card.

        Returns:
            True while the session still has cards to present
        """
        self.position += 1
        return not self.is_complete()

    def requeue(self, card: SessionCard) -> None:
        """Mark card as missed and schedule it for the next wave."""
        card.needs_review = True
        self.backlog.append(card)

    def is_complete(self) -> bool:
        return self.position >= len(self.current_wave) and not self.backlog

    @property
    def remaining_in_wave(self) -> int:
        return max(0, len(self.current_wave) - self.position)
