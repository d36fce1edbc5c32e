from core.session_builders.cohorts import select_difficult, select_stale
from core.srs.constants import DAY_MS

HOUR_MS = 60 * 60 * 1000


def with_stats(card, attempts=0, failures=0, last_review=None):
    card.stats.attempts = attempts
    card.stats.failures = failures
    card.stats.successes = attempts - failures
    card.stats.last_review = last_review
    return card


# ---- Difficult ----

def test_difficult_requires_failure_rate_above_half(make_cards):
    half, above, unseen = make_cards(3)
    with_stats(half, attempts=4, failures=2)
    with_stats(above, attempts=4, failures=3)

    assert select_difficult([half, above, unseen]) == [above]


def test_difficult_sorted_by_failure_rate(make_cards):
    low, high, mid = make_cards(3)
    with_stats(low, attempts=10, failures=6)
    with_stats(high, attempts=10, failures=9)
    with_stats(mid, attempts=10, failures=7)

    assert select_difficult([low, high, mid]) == [high, mid, low]


def test_difficult_tie_prefers_more_failures(make_cards):
    few, many = make_cards(2)
    with_stats(few, attempts=3, failures=2)
    with_stats(many, attempts=30, failures=20)

    assert select_difficult([few, many]) == [many, few]


def test_difficult_is_capped(make_cards):
    cards = [with_stats(card, attempts=2, failures=2) for card in make_cards(25)]
    assert len(select_difficult(cards)) == 20
    assert len(select_difficult(cards, max_count=5)) == 5


def test_difficult_empty_when_nothing_qualifies(make_cards):
    assert select_difficult(make_cards(4)) == []
    assert select_difficult([]) == []


# ---- Stale ----

def test_stale_requires_old_review(make_cards, now):
    old, recent, unseen = make_cards(3)
    with_stats(old, attempts=2, last_review=now - 4 * DAY_MS)
    with_stats(recent, attempts=2, last_review=now - 2 * DAY_MS)

    assert select_stale([old, recent, unseen], now=now) == [old]


def test_stale_oldest_first(make_cards, now):
    older, oldest = make_cards(2)
    with_stats(older, attempts=1, last_review=now - 5 * DAY_MS)
    with_stats(oldest, attempts=1, last_review=now - 9 * DAY_MS)

    assert select_stale([older, oldest], now=now) == [oldest, older]


def test_stale_same_day_tie_prefers_more_attempts(make_cards, now):
    few, many = make_cards(2)
    with_stats(few, attempts=3, last_review=now - 5 * DAY_MS)
    with_stats(many, attempts=10, last_review=now - 5 * DAY_MS + 2 * HOUR_MS)

    assert select_stale([few, many], now=now) == [many, few]


def test_stale_threshold_and_cap_are_parameters(make_cards, now):
    cards = [with_stats(card, attempts=1, last_review=now - 2 * HOUR_MS) for card in make_cards(60)]

    assert select_stale(cards, now=now) == []
    assert len(select_stale(cards, stale_threshold_ms=HOUR_MS, now=now)) == 50
    assert len(select_stale(cards, max_count=1000, stale_threshold_ms=HOUR_MS, now=now)) == 60
