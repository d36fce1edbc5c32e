"""
Pydantic models for the Arabic vocabulary lexicon.

Entries come from the semicolon-separated vocabulary files (words and verbs)
or from the number drill generator.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CardKind(str, Enum):
    """Kind of flashcard content."""
    WORD = "word"       # Noun or adjective with its plural
    VERB = "verb"       # Verb with present, imperative and masdar
    NUMBER = "number"   # Generated numeral drill item


class VocabEntry(BaseModel):
    """
    A single flashcard's content.

    Only kind/level/theme/part/headword take part in the card identity, so
    translations can be corrected without losing review statistics.
    """
    kind: CardKind
    level: str = Field(..., description="Niveau section the entry belongs to")
    theme: str = Field(..., description="Thématique section")
    part: str = Field(..., description="Partie section")
    headword: str = Field(..., description="Arabic form shown on the card front")
    translation: str = Field(default="", description="French translation")

    # Word-specific
    plural: Optional[str] = None

    # Verb-specific
    present: Optional[str] = None
    imperative: Optional[str] = None
    masdar: Optional[str] = None

    # Number drill
    number: Optional[int] = None

    class Config:
        use_enum_values = True
        frozen = True
