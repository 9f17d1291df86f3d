"""Decide whether a text span is in scope for typography checks.

Every scope option is a :class:`Trinary`: ``off``, ``on``, or ``restricted``
to an allowlist. Options are decoded once by :mod:`unicode_typography.config`
and the gates below only look at the decoded mode.

Typical usage:
    >>> from unicode_typography.scope import ContextFacts, ScopeConfig, SpanKind, allows
    >>> allows(ContextFacts(SpanKind.CHILDREN, elements=("p",)), ScopeConfig())
    True
    >>> allows(ContextFacts(SpanKind.STRING_LITERAL), ScopeConfig())
    False
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Callable,
    Dict,
    FrozenSet,
    Generic,
    List,
    Optional,
    Tuple,
    TypeVar,
    cast,
)

from .constants import DEFAULT_CHECKED_ATTRIBUTES


class SpanKind(str, Enum):
    """Syntactic origin of a span."""

    STRING_LITERAL = "string_literal"
    TEMPLATE_LITERAL = "template_literal"
    ATTRIBUTE = "attribute"
    CHILDREN = "children"


class Mode(str, Enum):
    """Tag of a trinary scope option."""

    off = "off"
    on = "on"
    restricted = "restricted"


@dataclass(frozen=True)
class FunctionAllowlist:
    """Call names whose string arguments are checked."""

    only_functions: FrozenSet[str]


@dataclass(frozen=True)
class TemplateAllowlist:
    """Template tags to check, and whether untagged templates are checked."""

    tags: FrozenSet[str] = frozenset()
    untagged: bool = False


@dataclass(frozen=True)
class AttributeAllowlist:
    """Attribute names whose values are checked."""

    only_attributes: FrozenSet[str]


@dataclass(frozen=True)
class ComponentAllowlist:
    """Element names whose text content is checked."""

    only_components: FrozenSet[str]


A = TypeVar("A")


@dataclass(frozen=True)
class Trinary(Generic[A]):
    """Scope option that is disabled, enabled, or restricted to an allowlist."""

    mode: Mode
    allowlist: Optional[A] = None

    def __post_init__(self) -> None:
        if (self.mode is Mode.restricted) != (self.allowlist is not None):
            raise ValueError(
                f"an allowlist is required for, and only for, restricted scopes "
                f"(mode={self.mode.value})"
            )

    @classmethod
    def off(cls) -> Trinary[A]:
        return cls(Mode.off)

    @classmethod
    def on(cls) -> Trinary[A]:
        return cls(Mode.on)

    @classmethod
    def restricted(cls, allowlist: A) -> Trinary[A]:
        return cls(Mode.restricted, allowlist)


def _default_attributes() -> Trinary[AttributeAllowlist]:
    return Trinary.restricted(AttributeAllowlist(frozenset(DEFAULT_CHECKED_ATTRIBUTES)))


@dataclass(frozen=True)
class ScopeConfig:
    """The four scope options.

    Attributes:
        string_literals: Plain string literals, off by default.
        template_literals: Template literal chunks, off by default.
        attributes: Markup attribute values, restricted to
            :data:`~unicode_typography.constants.DEFAULT_CHECKED_ATTRIBUTES`
            by default.
        children: Markup text content, the only scope enabled by default.
    """

    string_literals: Trinary[FunctionAllowlist] = field(default_factory=Trinary.off)
    template_literals: Trinary[TemplateAllowlist] = field(default_factory=Trinary.off)
    attributes: Trinary[AttributeAllowlist] = field(default_factory=_default_attributes)
    children: Trinary[ComponentAllowlist] = field(default_factory=Trinary.on)


@dataclass(frozen=True)
class ContextFacts:
    """Host-supplied facts about where a span sits.

    Attributes:
        span_kind: Syntactic origin of the span.
        call_names: Names of the enclosing call expressions, innermost first.
        elements: Names of the enclosing markup elements, innermost last.
        attribute: Attribute name for attribute values.
        tagged: Whether a template literal carries a tag.
        tag: Resolved tag name of a tagged template.
    """

    span_kind: SpanKind
    call_names: Tuple[str, ...] = ()
    elements: Tuple[str, ...] = ()
    attribute: Optional[str] = None
    tagged: bool = False
    tag: Optional[str] = None

    @property
    def innermost_element(self) -> Optional[str]:
        return self.elements[-1] if self.elements else None


class ElementStack:
    """Names of the markup elements enclosing the traversal position.

    The host pushes a name when entering an element and pops it on exit;
    gates only read :meth:`snapshot`.
    """

    def __init__(self) -> None:
        self._names: List[str] = []

    def push(self, name: str) -> None:
        self._names.append(name)

    def pop(self) -> str:
        return self._names.pop()

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._names)


def _gate(option: Trinary[A], predicate: Callable[[A], bool]) -> bool:
    if option.mode is Mode.off:
        return False
    if option.mode is Mode.on:
        return True
    # Restricted options always carry an allowlist.
    return predicate(cast(A, option.allowlist))


def allows_string_literal(option: Trinary[FunctionAllowlist], facts: ContextFacts) -> bool:
    """Check a string literal when any enclosing call is allowlisted."""
    return _gate(
        option,
        lambda allow: any(name in allow.only_functions for name in facts.call_names),
    )


def allows_template_literal(
    option: Trinary[TemplateAllowlist], facts: ContextFacts
) -> bool:
    """Check tagged templates by tag name and untagged ones by flag.

    A tagged template whose tag is not allowlisted is never checked, even
    when ``untagged`` is set.
    """

    def predicate(allow: TemplateAllowlist) -> bool:
        if facts.tagged:
            return facts.tag is not None and facts.tag in allow.tags
        return allow.untagged

    return _gate(option, predicate)


def allows_attribute(option: Trinary[AttributeAllowlist], facts: ContextFacts) -> bool:
    return _gate(
        option,
        lambda allow: facts.attribute is not None
        and facts.attribute in allow.only_attributes,
    )


def allows_children(option: Trinary[ComponentAllowlist], facts: ContextFacts) -> bool:
    """Check markup text keyed on the innermost enclosing element only."""

    def predicate(allow: ComponentAllowlist) -> bool:
        current = facts.innermost_element
        if not current:
            return False
        return current in allow.only_components or current.lower() in allow.only_components

    return _gate(option, predicate)


_GATES: Dict[SpanKind, Callable[[ScopeConfig, ContextFacts], bool]] = {
    SpanKind.STRING_LITERAL: lambda s, f: allows_string_literal(s.string_literals, f),
    SpanKind.TEMPLATE_LITERAL: lambda s, f: allows_template_literal(s.template_literals, f),
    SpanKind.ATTRIBUTE: lambda s, f: allows_attribute(s.attributes, f),
    SpanKind.CHILDREN: lambda s, f: allows_children(s.children, f),
}


def allows(facts: ContextFacts, scope: ScopeConfig) -> bool:
    """Return whether the span described by ``facts`` should be scanned."""
    return _GATES[facts.span_kind](scope, facts)
