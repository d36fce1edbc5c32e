import pytest

from core.session_controller import ReviewSession
from core.srs.constants import DAY_MS, Grade
from core.srs.identity import identify
from core.srs.persistence import StatisticsStore


@pytest.fixture
def session(store, rng, now):
    return ReviewSession(store, rng=rng, clock=lambda: now)


def play(session, grade_for):
    """Grade cards until the session completes; grade_for(card, seen_before) -> score."""
    seen = set()
    while not session.is_complete():
        card = session.current_card()
        session.submit_grade(grade_for(card, card.identity in seen))
        seen.add(card.identity)


def test_start_registers_cards(session, store, words):
    assert session.start(words) == 5
    assert len(store) == 5
    assert session.mode == "selection"


def test_start_with_no_entries_starts_nothing(session):
    assert session.start([]) == 0
    assert session.mode is None
    assert session.current_card() is None


def test_full_session_persists_every_grade(session, store, backend, words):
    session.start(words)
    first = words[0]

    play(session, lambda card, again: Grade.INCORRECT if card.entry == first and not again else Grade.CORRECT)

    assert session.stats.total == 5
    assert session.stats.total_attempts == 6
    assert session.stats.correct == 4
    assert session.final_score() == 80
    assert session.progress() == (5, 5, 6)

    reloaded = StatisticsStore(backend, user_id="amina")
    assert reloaded.get(identify(first)).attempts == 2
    assert reloaded.get(identify(first)).failures == 1


def test_submit_after_completion_raises(session, words):
    session.start(words[:1])
    session.submit_grade(Grade.EASY)
    assert session.is_complete()
    with pytest.raises(RuntimeError):
        session.submit_grade(Grade.EASY)


def test_restart_resets_counters(session, words):
    session.start_custom(words[:2])
    play(session, lambda card, again: Grade.DIFFICULT if not again else Grade.CORRECT)
    assert session.final_score() == 0

    assert session.restart() == 2
    assert session.mode == "custom"
    assert session.stats.total_attempts == 0
    assert not any(card.needs_review for card in session.cards)


def test_number_session(session, store):
    assert session.start_numbers("1", 4) == 4
    assert session.mode == "numbers"
    assert all(card_id.startswith("number_") for card_id in store.statistics)
    assert session.restart() == 4


def test_difficult_session(session, store, words, now):
    assert session.start_difficult(words) == 0

    for entry in words[:2]:
        store.ensure(identify(entry), now)
        store.record_grade(identify(entry), Grade.INCORRECT, now)

    assert session.start_difficult(words) == 2
    assert session.mode == "difficult"
    assert {card.entry for card in session.cards} == set(words[:2])


def test_stale_session_with_repetition(store, rng, now, words):
    past = now - 10 * DAY_MS
    for entry in words:
        store.ensure(identify(entry), past)
        store.record_grade(identify(entry), Grade.CORRECT, past)

    session = ReviewSession(store, rng=rng, clock=lambda: now)
    assert session.start_stale(words) == 5
    assert session.mode == "stale"

    missed = session.current_card().entry
    play(session, lambda card, again: Grade.INCORRECT if card.entry == missed and not again else Grade.EASY)

    assert session.finish_stale_series() == 1
    assert session.start_stale_repetition() == 1
    assert session.mode == "stale_repeat"
    assert session.current_card().entry == missed

    session.submit_grade(Grade.CORRECT)
    assert session.progress()[0] == 1
    assert session.next_stale_series() == 0


def test_stale_session_without_stale_cards(session, words):
    assert session.start_stale(words) == 0
    assert session.stale_plan is None
