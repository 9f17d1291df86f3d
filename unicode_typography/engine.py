"""Single entry point evaluating one text span.

:func:`evaluate_span` composes the scope gate, the typography scanner, and
the edit resolver. Hosts call it once per extracted span and report or apply
the returned edits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .rules import ALL_RULES, Edit, Kind, TypographyScanner, resolve
from .scope import ContextFacts, ScopeConfig, allows


MESSAGE_IDS: Dict[Kind, str] = {
    Kind.ELLIPSIS: "preferEllipsis",
    Kind.EMDASH: "preferEmdash",
    Kind.ENDASH: "preferEndash",
    Kind.QUOTE: "preferQuotes",
    Kind.APOSTROPHE: "preferApostrophe",
    Kind.PRIME: "preferPrime",
}

MESSAGES: Dict[str, str] = {
    "preferEllipsis": "Use ellipsis character (…) instead of three dots (...)",
    "preferEmdash": "Use em dash (—) instead of double hyphen (--)",
    "preferEndash": "Use en dash (–) instead of spaced hyphen ( - )",
    "preferQuotes": "Use smart quotes (“” or ‘’) instead of straight quotes",
    "preferApostrophe": "Use smart apostrophe (’) instead of straight apostrophe",
    "preferPrime": "Use prime (′) or double prime (″) for measurements",
}


@dataclass(frozen=True)
class Toggles:
    """Replacement kinds that may be emitted. Everything is on by default."""

    ellipsis: bool = True
    emdash: bool = True
    endash: bool = True
    quotes: bool = True
    apostrophes: bool = True
    primes: bool = True


@dataclass(frozen=True)
class TypographyOptions:
    """Decoded configuration of an analysis run."""

    toggles: Toggles = field(default_factory=Toggles)
    scope: ScopeConfig = field(default_factory=ScopeConfig)


@dataclass(frozen=True)
class TextSpan:
    """Contiguous source text and the absolute offset of its first character."""

    text: str
    base_offset: int = 0


DEFAULT_SCANNER = TypographyScanner(ALL_RULES)


def message_id_for(kind: Kind) -> str:
    return MESSAGE_IDS[kind]


def message_for(kind: Kind) -> str:
    return MESSAGES[MESSAGE_IDS[kind]]


def evaluate_span(
    text: str,
    base_offset: int,
    options: TypographyOptions,
    facts: ContextFacts,
    scanner: TypographyScanner = DEFAULT_SCANNER,
) -> List[Edit]:
    """Return the edits for one span, or an empty list when out of scope.

    Args:
        text: Span content.
        base_offset: Absolute offset of ``text[0]`` in the host source.
        options: Decoded toggles and scope options.
        facts: Location of the span as reported by the host.
        scanner: Scanner running the rules, mostly overridden in tests.

    Returns:
        Sorted, non-overlapping edits with absolute offsets.

    Examples:
        >>> from unicode_typography.scope import ContextFacts, SpanKind
        >>> facts = ContextFacts(SpanKind.CHILDREN, elements=("p",))
        >>> [(e.start, e.end, e.replacement) for e in evaluate_span(
        ...     "wait...", 3, TypographyOptions(), facts)]
        [(7, 10, '…')]
    """
    if not allows(facts, options.scope):
        return []
    return resolve(scanner.scan(text, options.toggles), base_offset)


def evaluate(
    span: TextSpan,
    options: TypographyOptions,
    facts: ContextFacts,
) -> List[Edit]:
    """Shortcut of :func:`evaluate_span` for a :class:`TextSpan`."""
    return evaluate_span(span.text, span.base_offset, options, facts)


def apply_edits(text: str, edits: Sequence[Edit]) -> str:
    """Apply sorted, non-overlapping edits to ``text``.

    Args:
        text: Source the edit offsets refer to.
        edits: Edits as returned by :func:`evaluate_span`.

    Returns:
        The text with every range replaced.
    """
    if not edits:
        return text

    pieces: List[str] = []
    last_idx = 0
    for edit in sorted(edits, key=lambda item: item.start):
        pieces.append(text[last_idx : edit.start])
        pieces.append(edit.replacement)
        last_idx = edit.end
    pieces.append(text[last_idx:])
    return "".join(pieces)
