"""
Persistence Layer - Review statistics store

Holds the mapping card identity -> ReviewStatistics for one user and keeps
it in sync with a key-value backend.

Stored layout (one record per user):
    key:   "arabicVocabProgress" or "arabicVocabProgress_<user_id>"
    value: JSON object {cardIdentity: {attempts, successes, failures,
           lastReview, easeFactor, interval, nextReview}}
"""

from __future__ import annotations
import json
import logging
from typing import Optional

from core.srs import scheduler
from core.srs.constants import PROGRESS_KEY
from core.srs.database import KeyValueBackend
from core.srs.identity import CardIdentity
from core.srs.memory_state import ReviewStatistics

logger = logging.getLogger(__name__)

StatisticsMap = dict[CardIdentity, ReviewStatistics]


class UnknownCardError(KeyError):
    """Raised when grading a card whose statistics entry was never created."""


def namespaced_key(base_key: str, user_id: Optional[str] = None) -> str:
    """
    Storage key scoped to a user.

    An empty or missing user_id gives the bare key (single-user mode).
    """
    if not user_id:
        return base_key
    return f"{base_key}_{user_id}"


def parse_statistics(raw: Optional[str]) -> StatisticsMap:
    """
    Decode a stored progress document.

    Malformed data of any kind is treated as "no data".
    """
    if not raw:
        return {}
    try:
        document = json.loads(raw)
        if not isinstance(document, dict):
            raise TypeError(f"Expected a JSON object, got {type(document).__name__}")
        return {
            CardIdentity(str(card_id)): ReviewStatistics.from_dict(entry)
            for card_id, entry in document.items()
        }
    except (ValueError, TypeError, KeyError, OverflowError) as exc:
        logger.warning("Ignoring malformed progress data: %s", exc)
        return {}


def dump_statistics(statistics: StatisticsMap) -> str:
    """Encode a statistics mapping as a JSON document."""
    return json.dumps(
        {card_id: stats.to_dict() for card_id, stats in statistics.items()},
        ensure_ascii=False,
    )


class StatisticsStore:
    """
    Per-user review statistics backed by a key-value store.

    The mapping is loaded once at construction and written back
    synchronously after every change.
    """

    def __init__(self, backend: KeyValueBackend, user_id: Optional[str] = None):
        self.backend = backend
        self.user_id = user_id or ""
        self.key = namespaced_key(PROGRESS_KEY, self.user_id)
        self.statistics: StatisticsMap = self.load()

    def load(self) -> StatisticsMap:
        """Read the mapping from the backend (empty if absent or malformed)."""
        return parse_statistics(self.backend.get(self.key))

    def save(self, statistics: Optional[StatisticsMap] = None) -> None:
        """Serialize and write the mapping (defaults to the held one)."""
        if statistics is not None:
            self.statistics = statistics
        self.backend.set(self.key, dump_statistics(self.statistics))

    def get(self, identity: CardIdentity) -> Optional[ReviewStatistics]:
        return self.statistics.get(identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self.statistics

    def __len__(self) -> int:
        return len(self.statistics)

    def ensure(self, identity: CardIdentity, now: Optional[int] = None) -> ReviewStatistics:
        """
        Return the entry for identity, creating the default one if needed.

        New entries are held in memory; they reach the backend with the
        next save (i.e. the first grade).
        """
        stats = self.statistics.get(identity)
        if stats is None:
            stats = ReviewStatistics.new(now)
            self.statistics[identity] = stats
        return stats

    def record_grade(
        self,
        identity: CardIdentity,
        score: int,
        now: Optional[int] = None
    ) -> ReviewStatistics:
        """
        Apply a grade to a registered card and persist immediately.

        Raises:
            UnknownCardError: if identity was never registered via ensure()
            ValueError: if score is not 0-3
        """
        stats = self.statistics.get(identity)
        if stats is None:
            raise UnknownCardError(identity)
        scheduler.grade(stats, score, now)
        self.save()
        return stats

    def clear(self) -> None:
        """Forget all statistics and persist the empty state."""
        self.statistics.clear()
        self.save()
        logger.info("Cleared all progress for %s", self.key)


# ---- Functional API ----

def load_statistics(backend: KeyValueBackend, user_id: Optional[str] = None) -> StatisticsMap:
    return parse_statistics(backend.get(namespaced_key(PROGRESS_KEY, user_id)))


def save_statistics(
    backend: KeyValueBackend,
    statistics: StatisticsMap,
    user_id: Optional[str] = None
) -> None:
    backend.set(namespaced_key(PROGRESS_KEY, user_id), dump_statistics(statistics))


def ensure_entry(
    statistics: StatisticsMap,
    identity: CardIdentity,
    now: Optional[int] = None
) -> ReviewStatistics:
    if identity not in statistics:
        statistics[identity] = ReviewStatistics.new(now)
    return statistics[identity]


def clear_all(
    statistics: StatisticsMap,
    backend: KeyValueBackend,
    user_id: Optional[str] = None
) -> None:
    statistics.clear()
    save_statistics(backend, statistics, user_id)
