"""Rule converting straight quotes to curly quotes, apostrophes, and primes."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..constants import (
    DOUBLE_PRIME,
    LEFT_DOUBLE,
    LEFT_SINGLE,
    PRIME,
    RIGHT_DOUBLE,
    RIGHT_SINGLE,
)
from .base import Edit, Kind, Rule
from .classifier import Role, classify_single, is_double_prime, pair_double_quotes


if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from ..engine import Toggles


class QuotesRule(Rule):
    """Classify ``'`` and ``"`` and emit one edit per accepted character.

    Quotes, apostrophes, and primes share detection but are toggled
    independently. A disabled apostrophe or prime is still classified so it
    never falls back to being reported as a quote.
    """

    def __init__(self) -> None:
        super().__init__(
            name="quotes", toggle_attrs=("quotes", "apostrophes", "primes")
        )

    def detect(self, text: str, toggles: Toggles) -> List[Edit]:
        """Return quote, apostrophe, and prime edits for ``text``.

        Args:
            text: Span content to inspect.
            toggles: Enabled replacement kinds.

        Returns:
            Double quote edits first, then single quote edits, each group in
            text order.
        """
        edits: List[Edit] = []

        if toggles.quotes:
            for pos, role in pair_double_quotes(text):
                char = LEFT_DOUBLE if role is Role.OPENING else RIGHT_DOUBLE
                edits.append(_single_char_edit(Kind.QUOTE, pos, char))

        for pos, char in enumerate(text):
            if char != "'":
                continue
            edit = self._single_quote_edit(text, pos, toggles)
            if edit is not None:
                edits.append(edit)

        if toggles.primes:
            # Quote pairing already ran; digits turn the quote into a double prime.
            edits = [
                _single_char_edit(Kind.PRIME, edit.start, DOUBLE_PRIME)
                if edit.kind is Kind.QUOTE
                and text[edit.start] == '"'
                and is_double_prime(text, edit.start)
                else edit
                for edit in edits
            ]

        return edits

    @staticmethod
    def _single_quote_edit(text: str, pos: int, toggles: Toggles) -> Edit | None:
        role = classify_single(text, pos)
        if role in (Role.APOSTROPHE, Role.YEAR):
            if not toggles.apostrophes:
                return None
            return _single_char_edit(Kind.APOSTROPHE, pos, RIGHT_SINGLE)
        if role is Role.PRIME:
            if not toggles.primes:
                return None
            return _single_char_edit(Kind.PRIME, pos, PRIME)
        if not toggles.quotes:
            return None
        char = LEFT_SINGLE if role is Role.OPENING else RIGHT_SINGLE
        return _single_char_edit(Kind.QUOTE, pos, char)


def _single_char_edit(kind: Kind, pos: int, replacement: str) -> Edit:
    return Edit(kind=kind, start=pos, end=pos + 1, replacement=replacement)
