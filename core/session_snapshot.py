"""
Save and restore an interrupted review session.

The snapshot lives next to the progress record in the same backend:
    key:   "arabicVocabSession" or "arabicVocabSession_<user_id>"
    value: JSON {timestamp, mode, cards, currentWave, backlog, position,
           waveNumber, sessionStats, stalePlan, restart}

Wave order and backlog are stored as indices into `cards`. Statistics are
not part of the snapshot; they are re-joined from the store on restore.
"""

from __future__ import annotations

import json
import logging
import random
from typing import Optional

from pydantic import ValidationError

from core.schemas import VocabEntry
from core.session_builders.pool_types import SessionCard
from core.session_builders.stale_builder import StaleReviewPlan
from core.session_controller import ReviewSession
from core.session_stats import SessionStatistics
from core.srs.constants import SESSION_KEY, SESSION_MAX_AGE_MS
from core.srs.database import KeyValueBackend
from core.srs.identity import identify
from core.srs.memory_state import now_ms
from core.srs.persistence import StatisticsStore, namespaced_key

logger = logging.getLogger(__name__)


def snapshot_key(user_id: Optional[str] = None) -> str:
    return namespaced_key(SESSION_KEY, user_id)


def _dump_card(card: SessionCard) -> dict:
    return {
        "entry": card.entry.model_dump(mode="json"),
        "needsReview": card.needs_review,
        "countedInTotal": card.counted_in_total,
    }


def _dump_entries(entries) -> list[dict]:
    return [entry.model_dump(mode="json") for entry in entries]


def _load_entries(data: list) -> list[VocabEntry]:
    return [VocabEntry(**entry_data) for entry_data in data]


def _dump_restart(restart_args: tuple) -> Optional[dict]:
    if not restart_args:
        return None
    kind = restart_args[0]
    if kind == "numbers":
        return {"kind": kind, "difficulty": restart_args[1], "count": restart_args[2]}
    if kind == "difficult":
        return {"kind": kind, "entries": _dump_entries(restart_args[1]), "maxCount": restart_args[2]}
    if kind == "stale":
        return {"kind": kind, "entries": _dump_entries(restart_args[1])}
    entries, mode = restart_args
    return {"kind": mode, "entries": _dump_entries(entries)}


def _load_restart(data: Optional[dict]) -> tuple:
    if not data:
        return ()
    kind = data["kind"]
    if kind == "numbers":
        return (kind, str(data["difficulty"]), int(data["count"]))
    entries = _load_entries(data["entries"])
    if kind == "difficult":
        return (kind, entries, int(data["maxCount"]))
    if kind == "stale":
        return (kind, entries)
    return (entries, kind)


def dump_session(session: ReviewSession, now: Optional[int] = None) -> dict:
    """
    Build the JSON-serializable snapshot of an active session.
    """
    index_of = {id(card): index for index, card in enumerate(session.cards)}
    sequencer = session.sequencer

    snapshot = {
        "timestamp": now_ms() if now is None else now,
        "mode": session.mode,
        "cards": [_dump_card(card) for card in session.cards],
        "currentWave": [index_of[id(card)] for card in sequencer.current_wave],
        "backlog": [index_of[id(card)] for card in sequencer.backlog],
        "position": sequencer.position,
        "waveNumber": sequencer.wave_number,
        "sessionStats": session.stats.to_dict(),
        "stalePlan": None,
        "restart": _dump_restart(session.restart_args),
    }
    if session.stale_plan is not None:
        snapshot["stalePlan"] = {
            "remaining": _dump_entries(card.entry for card in session.stale_plan.remaining),
            "toRepeat": [index_of[id(card)] for card in session.stale_plan.to_repeat],
            "seriesSize": session.stale_plan.series_size,
        }
    return snapshot


def _load_card(data: dict, store: StatisticsStore) -> SessionCard:
    entry = VocabEntry(**data["entry"])
    card_id = identify(entry)
    return SessionCard(
        entry=entry,
        identity=card_id,
        stats=store.ensure(card_id),
        needs_review=bool(data.get("needsReview", False)),
        counted_in_total=bool(data.get("countedInTotal", False)),
    )


def load_session(
    snapshot: dict,
    store: StatisticsStore,
    rng: Optional[random.Random] = None,
    clock=now_ms
) -> ReviewSession:
    """
    Rebuild a ReviewSession from a snapshot.

    Raises:
        KeyError, TypeError, ValueError, IndexError: if the snapshot is malformed
    """
    session = ReviewSession(store, rng=rng, clock=clock)
    cards = [_load_card(data, store) for data in snapshot["cards"]]

    session.cards = cards
    session.mode = snapshot["mode"]
    session.stats = SessionStatistics.from_dict(snapshot["sessionStats"])

    sequencer = session.sequencer
    sequencer.pool = list(cards)
    sequencer.current_wave = [cards[index] for index in snapshot["currentWave"]]
    sequencer.backlog = [cards[index] for index in snapshot["backlog"]]
    sequencer.position = int(snapshot["position"])
    sequencer.wave_number = int(snapshot.get("waveNumber", 0))
    session.restart_args = _load_restart(snapshot.get("restart"))

    plan = snapshot.get("stalePlan")
    if plan:
        remaining = []
        for entry in _load_entries(plan["remaining"]):
            card_id = identify(entry)
            remaining.append(SessionCard(entry=entry, identity=card_id, stats=store.ensure(card_id)))
        session.stale_plan = StaleReviewPlan(remaining, series_size=int(plan["seriesSize"]), rng=rng)
        if session.mode == "stale":
            session.stale_plan.current_series = list(cards)
        session.stale_plan.to_repeat = [cards[index] for index in plan.get("toRepeat", [])]

    return session


def _stale_plan_pending(session: ReviewSession) -> bool:
    plan = session.stale_plan
    return plan is not None and (plan.has_next_series() or bool(plan.to_repeat))


def save_session(
    session: ReviewSession,
    backend: KeyValueBackend,
    now: Optional[int] = None
) -> bool:
    """
    Persist the session so it can be resumed; drops the snapshot when
    there is nothing left to resume. A finished stale series is kept
    while its plan still has a repetition or another series.

    Returns:
        True if a snapshot was written
    """
    key = snapshot_key(session.store.user_id)
    if session.mode is None or (session.is_complete() and not _stale_plan_pending(session)):
        backend.delete(key)
        return False
    backend.set(key, json.dumps(dump_session(session, now), ensure_ascii=False))
    return True


def discard_snapshot(backend: KeyValueBackend, user_id: Optional[str] = None) -> None:
    backend.delete(snapshot_key(user_id))


def restore_session(
    backend: KeyValueBackend,
    store: StatisticsStore,
    now: Optional[int] = None,
    rng: Optional[random.Random] = None,
    max_age_ms: int = SESSION_MAX_AGE_MS,
    clock=now_ms
) -> Optional[ReviewSession]:
    """
    Resume a saved session for the store's user.

    Snapshots older than max_age_ms, or that cannot be decoded, are
    discarded.

    Returns:
        The restored session, or None if there is nothing to resume
    """
    key = snapshot_key(store.user_id)
    raw = backend.get(key)
    if not raw:
        return None

    now = now_ms() if now is None else now
    try:
        snapshot = json.loads(raw)
        age = now - int(snapshot["timestamp"])
        if age > max_age_ms:
            logger.info("Discarding session snapshot older than %d ms", max_age_ms)
            backend.delete(key)
            return None
        return load_session(snapshot, store, rng=rng, clock=clock)
    except (ValueError, TypeError, KeyError, IndexError, OverflowError, ValidationError) as exc:
        logger.warning("Discarding unreadable session snapshot: %s", exc)
        backend.delete(key)
        return None
