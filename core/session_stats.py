"""
Per-session grading statistics.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass
import math
from typing import TYPE_CHECKING, Optional

from core.session_builders.pool_types import SessionCard
from core.srs.constants import Grade
from core.srs.scheduler import validate_score

if TYPE_CHECKING:
    from core.sequencer import SessionSequencer


@dataclass
class SessionStatistics:
    """
    Counters for one session.

    `total` counts unique cards; `total_attempts` counts every grade,
    retries included.
    """
    correct: int = 0
    difficult: int = 0
    incorrect: int = 0
    total: int = 0
    total_attempts: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> SessionStatistics:
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")
        return cls(**{name: int(data.get(name, 0)) for name in cls.__dataclass_fields__})


def record_grade(
    session_stats: SessionStatistics,
    card: SessionCard,
    score: int,
    sequencer: Optional[SessionSequencer] = None
) -> bool:
    """
    Count a grade and requeue the card when it was missed.

    A card passed after an earlier miss in the same session is not counted
    as correct; every card enters `total` once.

    Returns:
        True if the card was requeued
    """
    grade = validate_score(score)
    session_stats.total_attempts += 1

    requeued = False
    if grade == Grade.INCORRECT:
        session_stats.incorrect += 1
        requeued = True
    elif grade == Grade.DIFFICULT:
        session_stats.difficult += 1
        requeued = True
    elif not card.needs_review:
        session_stats.correct += 1

    if requeued:
        if sequencer is not None:
            sequencer.requeue(card)
        else:
            card.needs_review = True

    if not card.counted_in_total:
        session_stats.total += 1
        card.counted_in_total = True

    return requeued


def final_score(session_stats: SessionStatistics) -> int:
    """Percentage of unique cards passed at the first try (0-100)."""
    if session_stats.total <= 0:
        return 0
    # Half-up rounding
    return int(math.floor(100 * session_stats.correct / session_stats.total + 0.5))
