"""
Typed card models shared across session builders.
"""

from __future__ import annotations
from dataclasses import dataclass

from core.schemas import VocabEntry
from core.srs.identity import CardIdentity
from core.srs.memory_state import ReviewStatistics


@dataclass(eq=False)
class SessionCard:
    """
    A card as seen by one session: content + statistics + session flags.

    The content record is shared and never mutated; the two flags only
    live here and are cleared whenever a session restarts over this card.
    """
    entry: VocabEntry
    identity: CardIdentity
    stats: ReviewStatistics
    needs_review: bool = False
    counted_in_total: bool = False

    def clear_flags(self) -> None:
        self.needs_review = False
        self.counted_in_total = False

    def __repr__(self) -> str:
        return f"<SessionCard({self.identity}, needs_review={self.needs_review})>"
