"""
SRS - Spaced repetition scheduling for the vocabulary trainer

Main API for review statistics.

This package implements:
- Card identity derived from semantic content (level/theme/part/headword)
- Per-card statistics with an ease factor clamped to [1.3, 2.5]
- Interval updates from four self-assessment grades
- Per-user persistence on any key-value backend

Quick start:
    from core import srs

    store = srs.StatisticsStore(srs.SqlBackend(), user_id="amina")
    card_id = srs.identify(entry)
    store.ensure(card_id)
    store.record_grade(card_id, srs.Grade.CORRECT)
"""

# Core scheduler API (algorithm logic)
from core.srs.scheduler import grade, validate_score

# Identity
from core.srs.identity import CardIdentity, identify

# Memory state
from core.srs.memory_state import ReviewStatistics, now_ms

# Storage
from core.srs.database import (
    InMemoryBackend,
    KeyValueBackend,
    SqlBackend,
    get_database_url,
    get_default_user_id,
    init_db,
    is_test_mode,
    reset_db,
)
from core.srs.persistence import (
    StatisticsMap,
    StatisticsStore,
    UnknownCardError,
    clear_all,
    ensure_entry,
    load_statistics,
    namespaced_key,
    save_statistics,
)

# Constants and parameters
from core.srs.constants import (
    DAY_MS,
    EASE_MAX,
    EASE_MIN,
    Grade,
    INITIAL_EASE,
    INITIAL_INTERVAL,
)


__all__ = [
    # Core algorithm
    "grade",
    "validate_score",

    # Identity
    "CardIdentity",
    "identify",

    # Memory state
    "ReviewStatistics",
    "now_ms",

    # Storage
    "KeyValueBackend",
    "InMemoryBackend",
    "SqlBackend",
    "get_database_url",
    "get_default_user_id",
    "init_db",
    "is_test_mode",
    "reset_db",
    "StatisticsMap",
    "StatisticsStore",
    "UnknownCardError",
    "load_statistics",
    "save_statistics",
    "ensure_entry",
    "clear_all",
    "namespaced_key",

    # Enums
    "Grade",

    # Parameters
    "DAY_MS",
    "EASE_MIN",
    "EASE_MAX",
    "INITIAL_EASE",
    "INITIAL_INTERVAL",
]
