"""Run the enabled typographic rules over one text span."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence, Tuple

from .base import Edit, Rule


if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from ..engine import Toggles


class TypographyScanner:
    """Coordinate the independent sub-scans of every typographic rule."""

    def __init__(self, rules: Sequence[Rule]) -> None:
        """Store the rule list for later processing.

        Args:
            rules: Iterable of rule instances, run in order.
        """
        self._rules: Tuple[Rule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Tuple of rules managed by the scanner."""
        return self._rules

    def scan(self, text: str, toggles: Toggles) -> List[Edit]:
        """Collect candidate edits from every enabled rule.

        Args:
            text: Span content to inspect.
            toggles: Enabled replacement kinds.

        Returns:
            Span-relative candidates, grouped by rule in registration order.
            Candidates from different rules may overlap.

        Examples:
            >>> from unicode_typography.engine import Toggles
            >>> from unicode_typography.rules.ellipsis import EllipsisRule
            >>> scanner = TypographyScanner((EllipsisRule(),))
            >>> [(e.start, e.end) for e in scanner.scan("wait...", Toggles())]
            [(4, 7)]
        """
        candidates: List[Edit] = []
        for rule in self._rules:
            if not rule.enabled(toggles):
                continue
            candidates.extend(rule.detect(text, toggles))
        return candidates
