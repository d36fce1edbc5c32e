"""
Utilities for Arabic numeral drills.

Generates sets of distinct numbers to read in Eastern Arabic digits.
"""

from __future__ import annotations

import random
from typing import Optional

from core.schemas import CardKind, VocabEntry


ARABIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"

# difficulty -> inclusive range
DIFFICULTY_RANGES: dict[str, tuple[int, int]] = {
    "1": (1, 9),
    "2": (10, 99),
    "3": (100, 999),
    "mixed": (1, 999),
}
DEFAULT_RANGE = (10, 99)

NUMBER_LEVEL = "Chiffres"
NUMBER_THEME = "Nombres arabes"


def to_arabic_digits(number: int) -> str:
    """
    Write number with Eastern Arabic digits (e.g. 42 -> "٤٢").
    """
    return "".join(
        ARABIC_DIGITS[int(char)] if char.isdigit() else char
        for char in str(number)
    )


def number_range(difficulty: str) -> tuple[int, int]:
    return DIFFICULTY_RANGES.get(str(difficulty), DEFAULT_RANGE)


def random_number(difficulty: str, rng: Optional[random.Random] = None) -> int:
    low, high = number_range(difficulty)
    return (rng or random).randint(low, high)


def generate_number_set(
    difficulty: str,
    count: int,
    rng: Optional[random.Random] = None
) -> list[int]:
    """
    Draw `count` distinct numbers for a difficulty.

    Raises:
        ValueError: if count exceeds the size of the difficulty's range
    """
    low, high = number_range(difficulty)
    if count < 0 or count > high - low + 1:
        raise ValueError(f"Cannot draw {count} distinct numbers from {low}-{high}")

    numbers: list[int] = []
    used: set[int] = set()
    while len(numbers) < count:
        number = random_number(difficulty, rng)
        if number not in used:
            used.add(number)
            numbers.append(number)
    return numbers


def part_label(difficulty: str) -> str:
    if difficulty == "mixed":
        return "Mélange"
    plural = "s" if difficulty.isdigit() and int(difficulty) > 1 else ""
    return f"{difficulty} chiffre{plural}"


def build_number_entries(
    difficulty: str,
    count: int,
    rng: Optional[random.Random] = None
) -> list[VocabEntry]:
    """
    Generate number drill cards (Arabic digits on the front, value on the back).
    """
    return [
        VocabEntry(
            kind=CardKind.NUMBER,
            level=NUMBER_LEVEL,
            theme=NUMBER_THEME,
            part=part_label(difficulty),
            headword=to_arabic_digits(number),
            translation=str(number),
            number=number,
        )
        for number in generate_number_set(difficulty, count, rng)
    ]
