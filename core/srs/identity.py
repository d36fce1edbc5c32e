"""
Card identity: the join key between flashcard content and its statistics.
"""

from __future__ import annotations

from typing import Any, Mapping, NewType


CardIdentity = NewType("CardIdentity", str)

NUMBER_KIND = "number"


def _field(card: Any, name: str) -> Any:
    if isinstance(card, Mapping):
        return card.get(name)
    return getattr(card, name, None)


def identify(card: Any) -> CardIdentity:
    """
    Build the identity of a card from its semantic fields.

    Accepts a VocabEntry, a SessionCard (anything with an `entry`), or a
    mapping with the same field names. Number drill items are keyed by their
    value only.
    """
    entry = getattr(card, "entry", card)

    kind = _field(entry, "kind")
    kind = getattr(kind, "value", kind)

    if kind == NUMBER_KIND:
        return CardIdentity(f"number_{_field(entry, 'number')}")

    # Fields are joined without escaping so keys match stored progress; fields
    # that themselves contain "_" can collide.
    return CardIdentity(
        f"{kind}_{_field(entry, 'level')}_{_field(entry, 'theme')}"
        f"_{_field(entry, 'part')}_{_field(entry, 'headword')}"
    )
