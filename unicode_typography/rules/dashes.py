"""Rules replacing hyphen approximations with em and en dashes."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..constants import EMDASH, ENDASH
from .base import Edit, Kind, Rule, regex_finditer


if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from ..engine import Toggles


RE_DOUBLE_HYPHEN = re.compile(r"--")
RE_SPACED_HYPHEN = re.compile(r" - ")


class EmdashRule(Rule):
    """Replace every ``--`` with an em dash."""

    def __init__(self) -> None:
        super().__init__(name="emdash", toggle_attrs=("emdash",))

    def detect(self, text: str, toggles: Toggles) -> list[Edit]:
        """Return one edit per non-overlapping double hyphen.

        Args:
            text: Span content to inspect.
            toggles: Enabled replacement kinds (unused).

        Returns:
            Two-character edits, so ``---`` only reports its first pair.
        """
        return regex_finditer(text, RE_DOUBLE_HYPHEN, Kind.EMDASH, EMDASH)


class EndashRule(Rule):
    """Replace a hyphen surrounded by single spaces with an en dash.

    The edit swallows both spaces (``9am - 5pm`` becomes ``9am–5pm``).
    Hyphenated words such as ``well-known`` never match because the
    surrounding spaces are required.
    """

    def __init__(self) -> None:
        super().__init__(name="endash", toggle_attrs=("endash",))

    def detect(self, text: str, toggles: Toggles) -> list[Edit]:
        return regex_finditer(text, RE_SPACED_HYPHEN, Kind.ENDASH, ENDASH)
