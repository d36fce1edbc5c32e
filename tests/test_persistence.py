import json

import pytest
from sqlalchemy import create_engine

from core.srs.constants import Grade, INITIAL_EASE
from core.srs.database import InMemoryBackend, SqlBackend
from core.srs.identity import CardIdentity
from core.srs.memory_state import ReviewStatistics
from core.srs.persistence import (
    StatisticsStore,
    UnknownCardError,
    clear_all,
    ensure_entry,
    load_statistics,
    namespaced_key,
    save_statistics,
)


CARD = CardIdentity("word_Niveau 1_Thématique 1 - La famille_Partie 1_أب")


def test_namespaced_key():
    assert namespaced_key("arabicVocabProgress") == "arabicVocabProgress"
    assert namespaced_key("arabicVocabProgress", "") == "arabicVocabProgress"
    assert namespaced_key("arabicVocabProgress", "amina") == "arabicVocabProgress_amina"


def test_ensure_creates_default_entry(store, now):
    stats = store.ensure(CARD, now)

    assert stats == ReviewStatistics(
        attempts=0,
        successes=0,
        failures=0,
        last_review=None,
        ease_factor=INITIAL_EASE,
        interval=1,
        next_review=now,
    )
    assert store.ensure(CARD, now + 1) is stats


def test_record_grade_persists_immediately(backend, store, now):
    store.ensure(CARD, now)
    store.record_grade(CARD, Grade.CORRECT, now)

    stored = json.loads(backend.get("arabicVocabProgress_amina"))
    assert stored[CARD] == {
        "attempts": 1,
        "successes": 1,
        "failures": 0,
        "lastReview": now,
        "easeFactor": pytest.approx(1.3),
        "interval": 2,
        "nextReview": now + 2 * 24 * 60 * 60 * 1000,
    }

    reloaded = StatisticsStore(backend, user_id="amina")
    assert reloaded.get(CARD) == store.get(CARD)


def test_record_grade_on_unknown_card_raises(store, now):
    with pytest.raises(UnknownCardError):
        store.record_grade(CARD, Grade.CORRECT, now)


def test_record_grade_with_invalid_score_leaves_statistics(store, backend, now):
    store.ensure(CARD, now)
    with pytest.raises(ValueError):
        store.record_grade(CARD, 7, now)
    assert store.get(CARD).attempts == 0
    assert backend.get(store.key) is None


def test_users_do_not_share_progress(backend, now):
    amina = StatisticsStore(backend, user_id="amina")
    amina.ensure(CARD, now)
    amina.record_grade(CARD, Grade.EASY, now)

    assert CARD not in StatisticsStore(backend, user_id="youssef")
    assert CARD not in StatisticsStore(backend)
    assert len(StatisticsStore(backend, user_id="amina")) == 1


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2]",
        '{"card": {"attempts": "many"}}',
        '{"card": 3}',
        '{"card": {"attempts": 1e999, "nextReview": 0}}',
        '{"card": {"attempts": 1, "nextReview": NaN}}',
        '{"card": {"attempts": 1, "nextReview": 0, "interval": -Infinity}}',
    ],
)
def test_malformed_data_is_treated_as_empty(raw):
    backend = InMemoryBackend({"arabicVocabProgress": raw})
    assert StatisticsStore(backend).statistics == {}


def test_clear_empties_and_persists(backend, store, now):
    store.ensure(CARD, now)
    store.record_grade(CARD, Grade.INCORRECT, now)

    store.clear()

    assert len(store) == 0
    assert json.loads(backend.get(store.key)) == {}


def test_functional_api(backend, now):
    statistics = load_statistics(backend, "amina")
    assert statistics == {}

    stats = ensure_entry(statistics, CARD, now)
    assert ensure_entry(statistics, CARD, now) is stats
    save_statistics(backend, statistics, "amina")
    assert load_statistics(backend, "amina") == {CARD: stats}

    clear_all(statistics, backend, "amina")
    assert load_statistics(backend, "amina") == {}


def test_sql_backend_round_trip(now):
    backend = SqlBackend(create_engine("sqlite://"))
    assert backend.get("missing") is None

    store = StatisticsStore(backend, user_id="amina")
    store.ensure(CARD, now)
    store.record_grade(CARD, Grade.DIFFICULT, now)
    store.record_grade(CARD, Grade.EASY, now)

    restored = StatisticsStore(backend, user_id="amina").get(CARD)
    assert restored.attempts == 2
    assert restored.failures == 1
    assert backend.keys() == ["arabicVocabProgress_amina"]

    backend.delete("arabicVocabProgress_amina")
    assert backend.get("arabicVocabProgress_amina") is None


@pytest.mark.parametrize("stored,expected", [(9.0, 2.5), (0.2, 1.3), (1.8, 1.8)])
def test_loaded_ease_factor_is_clamped(stored, expected, now):
    raw = json.dumps({CARD: {"attempts": 3, "successes": 3, "easeFactor": stored, "interval": 4, "nextReview": now}})
    store = StatisticsStore(InMemoryBackend({"arabicVocabProgress": raw}))

    assert store.get(CARD).ease_factor == pytest.approx(expected)
    store.record_grade(CARD, Grade.CORRECT, now)
    assert 1.3 <= store.get(CARD).ease_factor <= 2.5
