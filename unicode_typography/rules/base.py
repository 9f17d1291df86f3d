r"""Shared abstractions and helpers for typographic rules.

This module defines the :class:`Rule` base class used by every concrete rule,
the :class:`Edit` value produced by detection, and a small regex helper to
build consistent candidate edits.

Typical usage:
    >>> import re
    >>> from unicode_typography.rules.base import Kind, regex_finditer
    >>> regex_finditer("a--b", re.compile(r"--"), Kind.EMDASH, "—")
    [Edit(kind=<Kind.EMDASH: 'emdash'>, start=1, end=3, replacement='—')]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
import re
from typing import TYPE_CHECKING, List


if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from ..engine import Toggles


class Kind(str, Enum):
    """Families of ASCII approximations the rules know how to replace."""

    ELLIPSIS = "ellipsis"
    EMDASH = "emdash"
    ENDASH = "endash"
    QUOTE = "quote"
    APOSTROPHE = "apostrophe"
    PRIME = "prime"


@dataclass(frozen=True)
class Edit:
    """Replacement of the half-open range ``[start, end)`` by ``replacement``.

    Attributes:
        kind: Family of the replaced approximation.
        start: First replaced index.
        end: Index just past the replaced range.
        replacement: Unicode text substituted for the range.
    """

    kind: Kind
    start: int
    end: int
    replacement: str

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(f"empty edit range [{self.start}, {self.end})")

    def shifted(self, offset: int) -> Edit:
        """Return a copy whose offsets are moved by ``offset``."""
        return replace(self, start=self.start + offset, end=self.end + offset)

    def overlaps(self, other: Edit) -> bool:
        """Return whether both ranges share at least one index."""
        return self.start < other.end and other.start < self.end


class Rule(ABC):
    """Abstract base class for every typographic rule."""

    name: str
    toggle_attrs: tuple[str, ...]

    def __init__(self, name: str, toggle_attrs: tuple[str, ...]) -> None:
        """Initialize a rule.

        Args:
            name: Human readable identifier for the rule.
            toggle_attrs: Names of the :class:`~unicode_typography.engine.Toggles`
                fields that control the rule. The rule runs when any of them
                is enabled.
        """
        self.name = name
        self.toggle_attrs = toggle_attrs

    def enabled(self, toggles: Toggles) -> bool:
        """Return whether at least one controlling toggle is switched on."""
        return any(getattr(toggles, attr) for attr in self.toggle_attrs)

    @abstractmethod
    def detect(self, text: str, toggles: Toggles) -> List[Edit]:
        """Return candidate edits for the provided text.

        Args:
            text: Span content to inspect.
            toggles: Enabled replacement kinds.

        Returns:
            Candidate edits with offsets relative to ``text``. Candidates may
            overlap; the resolver settles collisions.
        """
        raise NotImplementedError


def regex_finditer(
    text: str,
    pattern: re.Pattern,
    kind: Kind,
    replacement: str,
) -> List[Edit]:
    """Collect regex occurrences and standardize them into candidate edits.

    Args:
        text: The string in which to look for matches.
        pattern: Compiled regular expression used for detection.
        kind: Kind attached to every produced edit.
        replacement: Text replacing each whole match.

    Returns:
        One edit per non-overlapping match, scanned left to right.
    """
    return [
        Edit(kind=kind, start=match.start(), end=match.end(), replacement=replacement)
        for match in pattern.finditer(text)
    ]
