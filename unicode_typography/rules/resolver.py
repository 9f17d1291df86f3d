"""Turn overlapping candidate edits into a non-overlapping edit list."""

from __future__ import annotations

from typing import Iterable, List

from .base import Edit


def resolve(candidates: Iterable[Edit], base_offset: int = 0) -> List[Edit]:
    """Rebase, order, and de-overlap candidate edits.

    Candidates are shifted by ``base_offset`` and stable-sorted by start. A
    single left-to-right sweep then keeps a candidate only when it starts at
    or after the end of the last kept one, so the earliest candidate wins
    and ties keep the order in which rules emitted them.

    Args:
        candidates: Span-relative edits in emission order.
        base_offset: Absolute position of the span's first character.

    Returns:
        Absolute, sorted, pairwise disjoint edits.

    Examples:
        >>> from unicode_typography.rules.base import Kind
        >>> first = Edit(Kind.ELLIPSIS, 0, 3, "…")
        >>> second = Edit(Kind.ELLIPSIS, 1, 4, "…")
        >>> [(e.start, e.end) for e in resolve([second, first], 10)]
        [(10, 13)]
    """
    rebased = sorted(
        (candidate.shifted(base_offset) for candidate in candidates),
        key=lambda edit: edit.start,
    )

    kept: List[Edit] = []
    for edit in rebased:
        # Kept edits are disjoint and sorted, so only the last one can collide.
        if not kept or not edit.overlaps(kept[-1]):
            kept.append(edit)
    return kept
