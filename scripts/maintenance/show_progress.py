"""
Print a learner's progress overview and hardest cards.

Usage:
    python -m scripts.maintenance.show_progress --user amina
    python -m scripts.maintenance.show_progress --user amina --words data/mots.csv --verbs data/verbes.csv
"""

import argparse

from core import lexicon_repo, srs
from core.analytics import build_progress_overview
from core.schemas import CardKind
from core.session_builders import cards_with_statistics, select_difficult, select_stale
from core.users import RecentUsers


def main():
    parser = argparse.ArgumentParser(description="Show stored review progress")
    parser.add_argument("--user", type=str, default=None, help="User id (default: DEFAULT_USER_ID)")
    parser.add_argument("--words", type=str, default=None, help="Words vocabulary file")
    parser.add_argument("--verbs", type=str, default=None, help="Verbs vocabulary file")
    parser.add_argument("--limit", type=int, default=10, help="Cards to list per cohort")
    args = parser.parse_args()

    user_id = args.user if args.user is not None else srs.get_default_user_id()
    backend = srs.SqlBackend()
    store = srs.StatisticsStore(backend, user_id)
    overview = build_progress_overview(store.statistics)

    print("=" * 60)
    print(f"Progress for '{user_id or '(default)'}'")
    print("=" * 60)
    print(f"Cards studied:    {overview.cards_count}")
    print(f"Attempts:         {overview.total_attempts}")
    print(f"Successes:        {overview.total_successes}")
    print(f"Failures:         {overview.total_failures}")
    print(f"Success rate:     {overview.success_rate}%")
    print(f"Difficult cards:  {overview.difficult_cards}")
    print(f"Mastered cards:   {overview.mastered_cards}")
    print(f"Due now:          {overview.due_cards}")

    recent = RecentUsers(backend).list_users()
    if recent:
        print(f"\nRecent users: {', '.join(user.name for user in recent)}")

    corpus = []
    if args.words:
        corpus.extend(lexicon_repo.load_vocabulary_file(args.words, CardKind.WORD))
    if args.verbs:
        corpus.extend(lexicon_repo.load_vocabulary_file(args.verbs, CardKind.VERB))
    if not corpus:
        return

    cards = cards_with_statistics(corpus, store)

    print(f"\nHardest cards (top {args.limit}):")
    difficult = select_difficult(cards, args.limit)
    if not difficult:
        print("  (none)")
    for card in difficult:
        rate = card.stats.failure_rate * 100
        print(f"  {card.entry.headword} - {card.entry.translation}: {rate:.0f}% failed ({card.stats.attempts} attempts)")

    print(f"\nStale cards (top {args.limit}):")
    stale = select_stale(cards, args.limit)
    if not stale:
        print("  (none)")
    for card in stale:
        print(f"  {card.entry.headword} - {card.entry.translation}: {card.stats.attempts} attempts")


if __name__ == "__main__":
    main()
