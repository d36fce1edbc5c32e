"""
Memory State - Review statistics for a single card

Defines the persisted per-card record and its JSON shape.

Key concepts:
- Ease factor: growth multiplier for the interval, clamped to [1.3, 2.5]
- Interval: days until the card is due again
- Failure rate: failures / attempts, drives the "difficult" cohort
"""

from __future__ import annotations
from dataclasses import dataclass
import math
import time
from typing import Any, Optional

from core.srs.constants import EASE_MAX, EASE_MIN, INITIAL_EASE, INITIAL_INTERVAL


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class ReviewStatistics:
    """
    Scheduling statistics for one card identity.

    Timestamps are epoch milliseconds.
    """
    attempts: int = 0
    successes: int = 0
    failures: int = 0
    last_review: Optional[int] = None
    ease_factor: float = INITIAL_EASE
    interval: int = INITIAL_INTERVAL  # days
    next_review: int = 0

    @classmethod
    def new(cls, now: Optional[int] = None) -> ReviewStatistics:
        """Default record for a card seen for the first time (due immediately)."""
        return cls(next_review=now_ms() if now is None else now)

    @property
    def failure_rate(self) -> float:
        if self.attempts == 0:
            return 0.0
        return self.failures / self.attempts

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the persisted camelCase field names."""
        return {
            "attempts": self.attempts,
            "successes": self.successes,
            "failures": self.failures,
            "lastReview": self.last_review,
            "easeFactor": self.ease_factor,
            "interval": self.interval,
            "nextReview": self.next_review,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReviewStatistics:
        """
        Parse a persisted record.

        The ease factor is clamped to its bounds and the interval to at
        least one day.

        Raises:
            ValueError, TypeError, KeyError, OverflowError: if the record has
            the wrong shape
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")

        last_review = data.get("lastReview")
        return cls(
            attempts=_as_count(data["attempts"]),
            successes=_as_count(data.get("successes", 0)),
            failures=_as_count(data.get("failures", 0)),
            last_review=None if last_review is None else int(_as_number(last_review)),
            ease_factor=min(EASE_MAX, max(EASE_MIN, _as_number(data.get("easeFactor", INITIAL_EASE)))),
            interval=max(INITIAL_INTERVAL, int(_as_number(data.get("interval", INITIAL_INTERVAL)))),
            next_review=int(_as_number(data["nextReview"])),
        )


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("Boolean is not a number")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Not a finite number: {value!r}")
    return number


def _as_count(value: Any) -> int:
    count = int(_as_number(value))
    if count < 0:
        raise ValueError(f"Negative count: {count}")
    return count
