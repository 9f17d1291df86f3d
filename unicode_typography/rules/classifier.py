"""Classify straight quote characters from their immediate neighbours.

Only ``text[index - 1]`` and ``text[index + 1]`` are consulted. A missing
neighbour is reported as :data:`BOUNDARY` so every function is total over
valid indices.
"""

from __future__ import annotations

from enum import Enum
import re
from typing import List, Tuple


BOUNDARY = ""

RE_WORD = re.compile(r"\w", re.ASCII)
RE_DIGIT = re.compile(r"\d", re.ASCII)
RE_SPACE = re.compile(r"\s")

OPENING_BRACKETS = "([{"


class Role(str, Enum):
    """Disposition of a straight quote character."""

    APOSTROPHE = "apostrophe"
    YEAR = "year"
    PRIME = "prime"
    OPENING = "opening"
    CLOSING = "closing"


def neighbours(text: str, index: int) -> Tuple[str, str]:
    """Return the characters before and after ``index``."""
    prev_char = text[index - 1] if index > 0 else BOUNDARY
    next_char = text[index + 1] if index + 1 < len(text) else BOUNDARY
    return prev_char, next_char


def is_word(char: str) -> bool:
    return bool(char) and RE_WORD.match(char) is not None


def is_digit(char: str) -> bool:
    return bool(char) and RE_DIGIT.match(char) is not None


def is_space(char: str) -> bool:
    return bool(char) and RE_SPACE.match(char) is not None


def opens_quote(prev_char: str) -> bool:
    """Return whether a quote after ``prev_char`` starts a quotation."""
    return prev_char == BOUNDARY or is_space(prev_char) or prev_char in OPENING_BRACKETS


def classify_single(text: str, index: int) -> Role:
    """Classify the ``'`` found at ``index``.

    Rules are evaluated in priority order, the first match wins:

    1. between two word characters: apostrophe (``don't``, ``dog's``);
    2. after whitespace or the span start and before a digit: year
       abbreviation (``'99``);
    3. after a digit: prime (``5'``);
    4. otherwise a quote, opening after a boundary, whitespace or an
       opening bracket and closing anywhere else.

    Examples:
        >>> classify_single("don't", 3)
        <Role.APOSTROPHE: 'apostrophe'>
        >>> classify_single("in '85", 3)
        <Role.YEAR: 'year'>
        >>> classify_single("5' tall", 1)
        <Role.PRIME: 'prime'>
    """
    prev_char, next_char = neighbours(text, index)
    if is_word(prev_char) and is_word(next_char):
        return Role.APOSTROPHE
    if (prev_char == BOUNDARY or is_space(prev_char)) and is_digit(next_char):
        return Role.YEAR
    if is_digit(prev_char):
        return Role.PRIME
    return Role.OPENING if opens_quote(prev_char) else Role.CLOSING


def pair_double_quotes(text: str) -> List[Tuple[int, Role]]:
    """Pair every ``"`` of ``text`` by parity of occurrence.

    The first, third, fifth… occurrence opens and the others close. Nesting
    is not tracked, so spans holding an odd number of quotes leave the last
    one opening.
    """
    positions = [idx for idx, char in enumerate(text) if char == '"']
    return [
        (pos, Role.OPENING if order % 2 == 0 else Role.CLOSING)
        for order, pos in enumerate(positions)
    ]


def is_double_prime(text: str, index: int) -> bool:
    """Return whether the ``"`` at ``index`` directly follows a digit."""
    prev_char, _ = neighbours(text, index)
    return is_digit(prev_char)
