"""
Pool utilities for session builders.

These helpers join vocabulary content with stored statistics and shuffle
pools without enforcing a scheduling policy.
"""

from __future__ import annotations
import random
from typing import Iterable, Optional, TypeVar

from core.schemas import VocabEntry
from core.session_builders.pool_types import SessionCard
from core.srs.identity import identify
from core.srs.persistence import StatisticsStore


T = TypeVar("T")


def shuffled(items: Iterable[T], rng: Optional[random.Random] = None) -> list[T]:
    """
    Uniformly shuffled copy of items (Fisher-Yates).
    """
    result = list(items)
    (rng or random).shuffle(result)
    return result


def register_cards(
    entries: Iterable[VocabEntry],
    store: StatisticsStore,
    now: Optional[int] = None
) -> list[SessionCard]:
    """
    Wrap entries as session cards, creating default statistics for new ones.
    """
    cards = []
    for entry in entries:
        card_id = identify(entry)
        cards.append(SessionCard(entry=entry, identity=card_id, stats=store.ensure(card_id, now)))
    return cards


def cards_with_statistics(
    entries: Iterable[VocabEntry],
    store: StatisticsStore
) -> list[SessionCard]:
    """
    Wrap only the entries that already have statistics (no registration).

    This is the corpus the difficult and stale cohorts are selected from.
    """
    cards = []
    for entry in entries:
        card_id = identify(entry)
        stats = store.get(card_id)
        if stats is not None:
            cards.append(SessionCard(entry=entry, identity=card_id, stats=stats))
    return cards
