"""
Vocabulary repository.

Parses the semicolon-separated vocabulary files and provides the
selection helpers used to build sessions (level/theme/part hierarchy,
custom word lists).

File layout (one file per kind):
    Niveau 1;;
    Thématique 1 - La famille;;
    Partie 1;;
    أب;آباء;père
    ...
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from core.schemas import CardKind, VocabEntry
from core.srs.identity import CardIdentity, identify

logger = logging.getLogger(__name__)

# Section markers (the vocabulary files are labelled in French)
LEVEL_MARKER = "Niveau "
THEME_MARKER = "Thématique "
PART_MARKER = "Partie "

COLUMN_SEPARATOR = ";"
VERB_COLUMNS = 5


# ---- Parsing ----

def _build_entry(kind: CardKind, columns: list[str], level: str, theme: str, part: str) -> Optional[VocabEntry]:
    if kind == CardKind.WORD:
        return VocabEntry(
            kind=kind,
            level=level,
            theme=theme,
            part=part,
            headword=columns[0],
            plural=columns[1],
            translation=columns[2],
        )

    if len(columns) < VERB_COLUMNS:
        logger.warning("Skipping verb row with %d columns: %s", len(columns), columns[0])
        return None

    return VocabEntry(
        kind=kind,
        level=level,
        theme=theme,
        part=part,
        headword=columns[0],
        present=columns[1],
        imperative=columns[2],
        masdar=columns[3],
        translation=columns[4],
    )


def parse_vocabulary_csv(text: str, kind: CardKind | str) -> list[VocabEntry]:
    """
    Parse a vocabulary file into entries.

    Section lines set the current level, theme and part; data rows are only
    accepted once all three are known.

    Args:
        text: File content
        kind: CardKind.WORD or CardKind.VERB

    Returns:
        Entries in file order
    """
    kind = CardKind(kind)
    if kind == CardKind.NUMBER:
        raise ValueError("Number cards are generated, not parsed")

    entries: list[VocabEntry] = []
    level: Optional[str] = None
    theme: Optional[str] = None
    part: Optional[str] = None

    for line in text.splitlines():
        if not line.strip():
            continue
        columns = [column.strip() for column in line.split(COLUMN_SEPARATOR)]

        if LEVEL_MARKER in line:
            level = columns[0]
            continue
        if THEME_MARKER in line:
            theme = columns[0]
            continue
        if PART_MARKER in line:
            part = columns[0]
            continue

        if len(columns) >= 3 and columns[0] and level and theme and part:
            entry = _build_entry(kind, columns, level, theme, part)
            if entry is not None:
                entries.append(entry)

    return entries


def load_vocabulary_file(path: Path | str, kind: CardKind | str) -> list[VocabEntry]:
    """Read and parse a vocabulary file (UTF-8, BOM tolerated)."""
    path = Path(path)
    entries = parse_vocabulary_csv(path.read_text(encoding="utf-8-sig"), kind)
    logger.info("Loaded %d %s entries from %s", len(entries), CardKind(kind).value, path.name)
    return entries


# ---- Selection ----

def part_key(entry: VocabEntry) -> str:
    """Key of the level/theme/part section an entry belongs to."""
    return f"{entry.level}|{entry.theme}|{entry.part}"


def theme_key(entry: VocabEntry) -> str:
    return f"{entry.level} - {entry.theme}"


def build_hierarchy(entries: Iterable[VocabEntry]) -> dict[str, dict[str, list[str]]]:
    """
    Level -> theme -> parts, in first-seen order for levels and themes.
    """
    hierarchy: dict[str, dict[str, set[str]]] = {}
    for entry in entries:
        hierarchy.setdefault(entry.level, {}).setdefault(entry.theme, set()).add(entry.part)
    return {
        level: {theme: sorted(parts) for theme, parts in themes.items()}
        for level, themes in hierarchy.items()
    }


def filter_by_parts(entries: Iterable[VocabEntry], part_keys: Iterable[str]) -> list[VocabEntry]:
    """Entries whose section is one of the selected part keys."""
    selected = set(part_keys)
    return [entry for entry in entries if part_key(entry) in selected]


def list_themes(entries: Iterable[VocabEntry]) -> list[str]:
    """Sorted theme keys ("level - theme") for the custom word picker."""
    return sorted({theme_key(entry) for entry in entries})


def entries_for_theme(entries: Iterable[VocabEntry], key: str) -> list[VocabEntry]:
    level, _, theme = key.partition(" - ")
    return [entry for entry in entries if entry.level == level and entry.theme == theme]


def filter_by_identities(
    entries: Iterable[VocabEntry],
    identities: Iterable[CardIdentity]
) -> list[VocabEntry]:
    """Entries picked one by one (custom word list), in corpus order."""
    selected = set(identities)
    return [entry for entry in entries if identify(entry) in selected]


def summarize_selection(part_keys: Iterable[str]) -> dict[str, int]:
    """
    Count distinct levels, themes and parts in a selection.
    """
    keys = set(part_keys)
    levels = set()
    themes = set()
    for key in keys:
        level, theme, _ = key.split("|", 2)
        levels.add(level)
        themes.add((level, theme))
    return {"levels": len(levels), "themes": len(themes), "parts": len(keys)}
