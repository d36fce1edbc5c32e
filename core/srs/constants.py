"""
SRS Constants and Parameters

All configurable parameters for the review scheduler in one place.
Cohort thresholds and caps are used as default arguments by the selectors.
"""

from enum import IntEnum


# ---- Grades ----

class Grade(IntEnum):
    """Self-assessed recall on a flashcard."""
    INCORRECT = 0   # Not recalled
    DIFFICULT = 1   # Recalled with high effort
    CORRECT = 2     # Recalled normally
    EASY = 3        # Recalled fluently


# Grades below this are failures and put the card back into the next wave
SUCCESS_THRESHOLD = Grade.CORRECT


# ---- Ease Factor ----

EASE_MIN = 1.3
EASE_MAX = 2.5
INITIAL_EASE = 1.3
INITIAL_INTERVAL = 1  # days

EASE_DELTA = {
    Grade.INCORRECT: +0.20,
    Grade.DIFFICULT: +0.15,
    Grade.CORRECT: -0.10,
    Grade.EASY: -0.15,
}

EASY_INTERVAL_MULTIPLIER = 2.5
DIFFICULT_INTERVAL_MULTIPLIER = 0.6


# ---- Time ----

DAY_MS = 24 * 60 * 60 * 1000


# ---- Cohorts ----

DIFFICULT_FAILURE_RATE = 0.5       # strictly greater than this qualifies
DIFFICULT_MAX_CARDS = 20
DIFFICULT_TIE_TOLERANCE = 0.01     # failure rates closer than this tie

STALE_THRESHOLD_MS = 3 * DAY_MS
STALE_MAX_CARDS = 50
STALE_POOL_MAX_CARDS = 1000        # pool for the series-based stale review
STALE_TIE_WINDOW_MS = DAY_MS       # fixed, independent of STALE_THRESHOLD_MS
STALE_SERIES_SIZE = 7


# ---- Progress overview ----

MASTERED_MIN_ATTEMPTS = 5
MASTERED_SUCCESS_RATE = 0.8


# ---- Storage keys ----

PROGRESS_KEY = "arabicVocabProgress"
SESSION_KEY = "arabicVocabSession"
RECENT_USERS_KEY = "recentUsers"
RECENT_USERS_LIMIT = 10

SESSION_MAX_AGE_MS = DAY_MS
