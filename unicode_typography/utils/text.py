"""Text helpers used within unicode-typography."""

from __future__ import annotations

from typing import Tuple


def line_column_for_offset(text: str, index: int) -> Tuple[int, int]:
    """Return the 1-based line and column for a string offset.

    Args:
        text: Full source the offset refers to.
        index: Character offset inside ``text``.

    Returns:
        A ``(line, column)`` tuple.
    """
    line = text.count("\n", 0, index) + 1
    last_newline = text.rfind("\n", 0, index)
    if last_newline == -1:
        column = index + 1
    else:
        column = index - last_newline
    return line, column
