"""Check string literals, template chunks, and JSX text in JavaScript sources.

Sources are parsed with :mod:`esprima` (JSX enabled, ranges recorded) and the
resulting ESTree is walked depth-first. Each extractable unit becomes a
:class:`~unicode_typography.engine.TextSpan` paired with the
:class:`~unicode_typography.scope.ContextFacts` describing where it sits:

* string literals: body only, offset ``start + 1``;
* template chunks: raw text, offset ``start + 1``;
* JSX text: whole node, offset ``start``;
* JSX attribute strings: body only, offset ``start + 1``.

esprima implements ECMAScript 2017 plus JSX. JSX fragments (``<>...</>``),
optional chaining (``a?.b``) and TypeScript syntax are rejected and reported
as :class:`SourceParseError`.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

import esprima
from esprima.error_handler import Error as EsprimaError

from ..engine import (
    TextSpan,
    TypographyOptions,
    apply_edits,
    evaluate,
    message_for,
    message_id_for,
)
from ..rules import Edit
from ..scope import ContextFacts, ElementStack, SpanKind
from ..utils.text import line_column_for_offset


log = logging.getLogger("mkdocs.plugins.unicode_typography")

Node = Dict[str, Any]


class SourceParseError(Exception):
    """Raised when esprima rejects a source file."""

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


@dataclass(frozen=True)
class Finding:
    """Edit located in a source file.

    Attributes:
        edit: Absolute edit.
        line: 1-based line of the edit start.
        column: 1-based column of the edit start.
    """

    edit: Edit
    line: int
    column: int

    @property
    def message_id(self) -> str:
        return message_id_for(self.edit.kind)

    @property
    def message(self) -> str:
        return message_for(self.edit.kind)


def _as_tree(value: Any) -> Any:
    """Convert esprima node objects into plain dictionaries and lists.

    Containers are rebuilt from an explicit work list instead of
    recursively, so the depth of the tree is not bounded by the
    interpreter's recursion limit.
    """
    holder: List[Any] = [value]
    pending: List[Tuple[Any, Any]] = [(holder, 0)]
    while pending:
        container, key = pending.pop()
        item = container[key]
        if isinstance(item, list):
            converted: Any = list(item)
            pending.extend((converted, index) for index in range(len(converted)))
        elif hasattr(item, "__dict__") and not isinstance(item, type):
            converted = dict(vars(item))
            pending.extend((converted, name) for name in converted)
        else:
            continue
        container[key] = converted
    return holder[0]


def parse_source(source: str) -> Node:
    """Parse ``source`` as a module, falling back to a classic script.

    Raises:
        SourceParseError: If neither source type parses.
    """
    options = {"jsx": True, "range": True}
    try:
        program = esprima.parseModule(source, options)
    except EsprimaError:
        log.debug("Module parse failed, retrying as script")
        try:
            program = esprima.parseScript(source, options)
        except EsprimaError as exc:
            raise SourceParseError(
                getattr(exc, "description", None) or str(exc),
                getattr(exc, "lineNumber", None),
                getattr(exc, "column", None),
            ) from exc
    return _as_tree(program)


def _is_node(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("type"), str)


def _children(node: Node) -> Iterator[Node]:
    for value in node.values():
        if _is_node(value):
            yield value
        elif isinstance(value, list):
            for item in value:
                if _is_node(item):
                    yield item


def member_name(node: Optional[Node]) -> Optional[str]:
    """Return ``name`` or ``a.b.name`` for an identifier or member chain.

    Computed members (``a[b]``) and non-identifier properties are left out of
    the dotted path.

    Examples:
        >>> member_name({"type": "Identifier", "name": "t"})
        't'
    """
    if node is None:
        return None
    if node["type"] == "Identifier":
        return node["name"]
    if node["type"] != "MemberExpression":
        return None

    parts: List[str] = []
    current = node
    while current["type"] == "MemberExpression":
        prop = current["property"]
        if not current.get("computed") and prop["type"] == "Identifier":
            parts.insert(0, prop["name"])
        current = current["object"]
    if current["type"] == "Identifier":
        parts.insert(0, current["name"])
    return ".".join(parts)


def element_name(node: Node) -> str:
    """Return the name of a JSX element (``div``, ``Foo.Bar``, ``svg:rect``)."""
    if node["type"] == "JSXIdentifier":
        return node["name"]
    if node["type"] == "JSXMemberExpression":
        return f"{element_name(node['object'])}.{node['property']['name']}"
    if node["type"] == "JSXNamespacedName":
        return f"{node['namespace']['name']}:{node['name']['name']}"
    return ""


def _string_literal(node: Optional[Node]) -> bool:
    return (
        node is not None
        and node["type"] == "Literal"
        and isinstance(node.get("value"), str)
    )


def _call_names(ancestors: List[Node]) -> Tuple[str, ...]:
    names = []
    for ancestor in reversed(ancestors):
        if ancestor["type"] == "CallExpression":
            name = member_name(ancestor["callee"])
            if name:
                names.append(name)
    return tuple(names)


def _template_facts(ancestors: List[Node]) -> ContextFacts:
    literal = ancestors[-1] if ancestors else None
    owner = ancestors[-2] if len(ancestors) > 1 else None
    if (
        literal is not None
        and owner is not None
        and owner["type"] == "TaggedTemplateExpression"
        and owner["quasi"] is literal
    ):
        return ContextFacts(
            SpanKind.TEMPLATE_LITERAL, tagged=True, tag=member_name(owner["tag"])
        )
    return ContextFacts(SpanKind.TEMPLATE_LITERAL)


class JavaScriptHost:
    """Run the typography engine over JavaScript and JSX sources."""

    def __init__(self, options: Optional[TypographyOptions] = None) -> None:
        self.options = options or TypographyOptions()

    def spans(self, source: str) -> Iterator[Tuple[TextSpan, ContextFacts]]:
        """Yield every extractable span of ``source`` with its context facts.

        The tree is walked with an explicit stack of ``(node, entering)``
        frames, so deeply nested expressions do not exhaust the interpreter
        stack.

        Raises:
            SourceParseError: If the source cannot be parsed.
        """
        tree = parse_source(source)
        ancestors: List[Node] = []
        elements = ElementStack()
        frames: List[Tuple[Node, bool]] = [(tree, True)]

        while frames:
            node, entering = frames.pop()
            if not entering:
                ancestors.pop()
                if node["type"] == "JSXElement":
                    elements.pop()
                continue

            if node["type"] == "JSXElement":
                elements.push(element_name(node["openingElement"]["name"]))
            yield from self._node_spans(node, ancestors, elements, source)

            ancestors.append(node)
            frames.append((node, False))
            frames.extend((child, True) for child in reversed(list(_children(node))))

    @staticmethod
    def _node_spans(
        node: Node,
        ancestors: List[Node],
        elements: ElementStack,
        source: str,
    ) -> Iterator[Tuple[TextSpan, ContextFacts]]:
        kind = node["type"]
        start, end = node["range"]
        parent = ancestors[-1] if ancestors else None

        if kind == "Literal" and _string_literal(node):
            if parent is None or parent["type"] != "JSXAttribute":
                yield TextSpan(source[start + 1 : end - 1], start + 1), ContextFacts(
                    SpanKind.STRING_LITERAL, call_names=_call_names(ancestors)
                )
        elif kind == "TemplateElement":
            yield TextSpan(node["value"]["raw"], start + 1), _template_facts(ancestors)
        elif kind == "JSXText":
            yield TextSpan(source[start:end], start), ContextFacts(
                SpanKind.CHILDREN, elements=elements.snapshot()
            )
        elif kind == "JSXAttribute" and _string_literal(node.get("value")):
            name_node = node["name"]
            value_start, value_end = node["value"]["range"]
            yield TextSpan(
                source[value_start + 1 : value_end - 1], value_start + 1
            ), ContextFacts(
                SpanKind.ATTRIBUTE,
                elements=elements.snapshot(),
                attribute=element_name(name_node),
            )

    def edits(self, source: str) -> List[Edit]:
        """Return every edit for ``source`` sorted by offset."""
        edits: List[Edit] = []
        for span, facts in self.spans(source):
            edits.extend(evaluate(span, self.options, facts))
        edits.sort(key=lambda edit: edit.start)
        return edits

    def check(self, source: str) -> List[Finding]:
        """Return the findings of ``source`` with line and column positions."""
        findings = []
        for edit in self.edits(source):
            line, column = line_column_for_offset(source, edit.start)
            findings.append(Finding(edit=edit, line=line, column=column))
        return findings

    def fix(self, source: str) -> Tuple[str, List[Finding]]:
        """Return the fixed source together with the applied findings."""
        findings = self.check(source)
        return apply_edits(source, [finding.edit for finding in findings]), findings
