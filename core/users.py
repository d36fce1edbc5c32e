"""
Local user directory.

Each learner's progress lives under their own storage namespace. The
directory only remembers recent logins on this device; there is no
remote user list.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Optional

from core.analytics.metrics import percent
from core.srs.constants import RECENT_USERS_KEY, RECENT_USERS_LIMIT
from core.srs.database import KeyValueBackend
from core.srs.memory_state import now_ms
from core.srs.persistence import load_statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecentUser:
    name: str
    last_login: int  # epoch ms


@dataclass(frozen=True)
class UserProgress:
    total_attempts: int
    total_successes: int
    success_rate: int  # percent
    cards_count: int


class RecentUsers:
    """
    Most recent logins, newest first, capped at ten.
    """

    def __init__(self, backend: KeyValueBackend, limit: int = RECENT_USERS_LIMIT):
        self.backend = backend
        self.limit = limit

    def _load(self) -> list[RecentUser]:
        raw = self.backend.get(RECENT_USERS_KEY)
        if not raw:
            return []
        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise TypeError(f"Expected a list, got {type(records).__name__}")
            users = []
            for record in records:
                # Older records stored bare names
                if isinstance(record, str):
                    users.append(RecentUser(name=record, last_login=0))
                else:
                    users.append(RecentUser(name=str(record["name"]), last_login=int(record.get("lastLogin") or 0)))
            return users
        except (ValueError, TypeError, KeyError, OverflowError) as exc:
            logger.warning("Ignoring malformed recent users list: %s", exc)
            return []

    def _save(self, users: list[RecentUser]) -> None:
        self.backend.set(
            RECENT_USERS_KEY,
            json.dumps([{"name": u.name, "lastLogin": u.last_login} for u in users], ensure_ascii=False),
        )

    def list_users(self) -> list[RecentUser]:
        return self._load()

    def user_exists(self, name: str) -> bool:
        return any(user.name == name for user in self._load())

    def record_login(self, name: str, now: Optional[int] = None) -> list[RecentUser]:
        """
        Move name to the front of the list with a fresh login time.
        """
        name = name.strip()
        if not name:
            raise ValueError("User name must not be empty")
        users = [user for user in self._load() if user.name != name]
        users.insert(0, RecentUser(name=name, last_login=now_ms() if now is None else now))
        users = users[:self.limit]
        self._save(users)
        return users


def user_progress(backend: KeyValueBackend, name: str) -> UserProgress:
    """
    Summary of a user's stored progress (for the login screen).
    """
    statistics = load_statistics(backend, name)
    total_attempts = sum(stats.attempts for stats in statistics.values())
    total_successes = sum(stats.successes for stats in statistics.values())
    return UserProgress(
        total_attempts=total_attempts,
        total_successes=total_successes,
        success_rate=percent(total_successes, total_attempts),
        cards_count=len(statistics),
    )
