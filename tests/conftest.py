import random

import pytest

from core.schemas import CardKind, VocabEntry
from core.session_builders.pool_types import SessionCard
from core.srs.database import InMemoryBackend
from core.srs.identity import identify
from core.srs.memory_state import ReviewStatistics
from core.srs.persistence import StatisticsStore


NOW = 1_700_000_000_000


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def store(backend):
    return StatisticsStore(backend, user_id="amina")


def make_word(headword, translation="", level="Niveau 1", theme="Thématique 1 - La famille", part="Partie 1"):
    return VocabEntry(
        kind=CardKind.WORD,
        level=level,
        theme=theme,
        part=part,
        headword=headword,
        translation=translation,
    )


@pytest.fixture
def word():
    return make_word


@pytest.fixture
def words():
    return [
        make_word("أب", "père"),
        make_word("أم", "mère"),
        make_word("أخ", "frère"),
        make_word("أخت", "sœur", part="Partie 2"),
        make_word("بيت", "maison", theme="Thématique 2 - La maison"),
    ]



@pytest.fixture
def make_cards(now):
    """Factory for session cards with fresh statistics."""
    def _make(count):
        cards = []
        for index in range(count):
            entry = make_word(f"كلمة{index}", f"mot {index}")
            cards.append(SessionCard(entry=entry, identity=identify(entry), stats=ReviewStatistics.new(now)))
        return cards
    return _make
