"""
Reset a learner's progress.

DANGEROUS: This deletes review statistics!
Only use when you want to start fresh.

Usage:
    python -m scripts.maintenance.reset_learning_db --user amina
    python -m scripts.maintenance.reset_learning_db --all
"""

import argparse

from core import srs
from core.session_snapshot import discard_snapshot


def main():
    parser = argparse.ArgumentParser(description="Reset stored review progress")
    parser.add_argument(
        "--user",
        type=str,
        default=None,
        help="User whose progress to clear (default: DEFAULT_USER_ID)"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Drop and recreate the whole store (every user, every saved session)"
    )
    args = parser.parse_args()

    print("=" * 60)
    print("WARNING: Reset Learning Progress")
    print("=" * 60)
    print()
    print(f"Database: {srs.get_database_url()}")
    if args.all:
        print("This will DELETE everything in the store:")
        print("  - Review statistics of every user")
        print("  - Saved sessions and the recent users list")
    else:
        user_id = args.user if args.user is not None else srs.get_default_user_id()
        print(f"This will DELETE the progress of user '{user_id or '(default)'}':")
        print("  - Attempts, successes and failures of every card")
        print("  - Ease factors and review intervals")
        print("  - Any interrupted session")
    print()

    response = input("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() != "yes":
        print("\nCancelled. No changes made.")
        return

    print("\nResetting...")
    if args.all:
        srs.reset_db()
    else:
        backend = srs.SqlBackend()
        srs.StatisticsStore(backend, user_id).clear()
        discard_snapshot(backend, user_id)
    print("✓ Reset complete!")


if __name__ == "__main__":
    main()
