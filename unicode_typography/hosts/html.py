"""Apply the typography engine to rendered HTML with BeautifulSoup.

Text nodes are checked as ``children`` spans keyed on their enclosing tags and
string attribute values as ``attribute`` spans. Content can be opted out:

* anything inside ``code``, ``pre``, ``kbd``, ``samp``, ``var``, ``script``,
  ``style`` or ``math``;
* elements carrying the ``typography-ignore`` class or
  ``data-typography="ignore"``;
* siblings enclosed by ``<!-- typography-ignore-start -->`` and
  ``<!-- typography-ignore-end -->``;
* the next element after a ``<!-- typography-ignore -->`` comment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple, cast

from bs4 import BeautifulSoup, Comment
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from ..constants import IGNORE_CLASS, IGNORE_DIRECTIVE, SKIP_TAGS
from ..engine import (
    TypographyOptions,
    apply_edits,
    evaluate_span,
    message_for,
    message_id_for,
)
from ..rules import Edit
from ..scope import ContextFacts, SpanKind


@dataclass(frozen=True)
class HtmlFinding:
    """Edit found inside one text node or attribute value.

    Attributes:
        edit: Edit relative to ``text``.
        span_kind: Whether the text is element content or an attribute value.
        element: Innermost enclosing element name.
        text: The checked text, before any fix.
        attribute: Attribute name for attribute values.
    """

    edit: Edit
    span_kind: SpanKind
    element: Optional[str]
    text: str
    attribute: Optional[str] = None

    @property
    def message_id(self) -> str:
        return message_id_for(self.edit.kind)

    @property
    def message(self) -> str:
        return message_for(self.edit.kind)

    @property
    def excerpt(self) -> str:
        """Original text around the edit, at most 20 characters each side."""
        start = max(0, self.edit.start - 20)
        end = min(len(self.text), self.edit.end + 20)
        return " ".join(self.text[start:end].split())

    @property
    def preview(self) -> str:
        """Excerpt with the edit applied."""
        start = max(0, self.edit.start - 20)
        end = min(len(self.text), self.edit.end + 20)
        fixed = (
            self.text[start : self.edit.start]
            + self.edit.replacement
            + self.text[self.edit.end : end]
        )
        return " ".join(fixed.split())


def _element_chain(node: PageElement) -> Tuple[str, ...]:
    """Return enclosing tag names from the outermost to the innermost."""
    names = [
        parent.name
        for parent in cast(Iterable[Tag], node.parents)
        if not isinstance(parent, BeautifulSoup)
    ]
    names.reverse()
    return tuple(names)


class HtmlHost:
    """Check and optionally fix typography in an HTML document."""

    def __init__(self, options: Optional[TypographyOptions] = None) -> None:
        self.options = options or TypographyOptions()

    def process(self, html: str, fix: bool = False) -> Tuple[str, List[HtmlFinding]]:
        """Collect findings and, when ``fix`` is set, rewrite the document.

        Args:
            html: HTML document or fragment.
            fix: Apply the edits to the returned markup.

        Returns:
            The (possibly fixed) HTML and the findings in document order.
        """
        soup = BeautifulSoup(html, "html.parser")
        skipped = self._ignored_ids(soup)
        findings: List[HtmlFinding] = []

        for tag in soup.find_all(True):
            if self._is_skipped(tag, skipped):
                continue
            findings.extend(self._process_attributes(tag, fix))

        text_nodes = [
            node
            for node in soup.find_all(string=True)
            if not isinstance(node, PreformattedString)
        ]
        for node in text_nodes:
            parent = node.parent
            if parent is None or id(node) in skipped:
                continue
            if self._is_skipped(parent, skipped):
                continue
            text = str(node)
            if not text.strip():
                continue

            facts = ContextFacts(SpanKind.CHILDREN, elements=_element_chain(node))
            edits = evaluate_span(text, 0, self.options, facts)
            findings.extend(
                HtmlFinding(
                    edit=edit,
                    span_kind=SpanKind.CHILDREN,
                    element=facts.innermost_element,
                    text=text,
                )
                for edit in edits
            )
            if fix and edits:
                node.replace_with(NavigableString(apply_edits(text, edits)))

        if not fix:
            return html, findings
        return str(soup), findings

    def _process_attributes(self, tag: Tag, fix: bool) -> List[HtmlFinding]:
        findings: List[HtmlFinding] = []
        elements = _element_chain(tag) + (tag.name,)
        for name, value in list(tag.attrs.items()):
            # Multi-valued attributes such as ``class`` hold token lists.
            if not isinstance(value, str):
                continue
            facts = ContextFacts(SpanKind.ATTRIBUTE, elements=elements, attribute=name)
            edits = evaluate_span(value, 0, self.options, facts)
            findings.extend(
                HtmlFinding(
                    edit=edit,
                    span_kind=SpanKind.ATTRIBUTE,
                    element=tag.name,
                    text=value,
                    attribute=name,
                )
                for edit in edits
            )
            if fix and edits:
                tag[name] = apply_edits(value, edits)
        return findings

    @staticmethod
    def _is_skipped(tag: Tag, skipped: Set[int]) -> bool:
        if tag.name in SKIP_TAGS or id(tag) in skipped:
            return True
        return any(
            parent.name in SKIP_TAGS or id(parent) in skipped
            for parent in cast(Iterable[Tag], tag.parents)
        )

    @staticmethod
    def _ignored_ids(soup: BeautifulSoup) -> Set[int]:
        """Return ids of nodes opted out through comments, classes, or data."""
        ignored: Set[int] = set()

        def mark(node: Optional[PageElement]) -> None:
            if node is None:
                return
            ignored.add(id(node))
            for descendant in cast(Iterable[PageElement], getattr(node, "descendants", ())):
                ignored.add(id(descendant))

        comments = list(soup.find_all(string=lambda t: isinstance(t, Comment)))
        for index, comment in enumerate(comments):
            directive = str(comment).strip().lower()
            if directive == f"{IGNORE_DIRECTIVE}-start":
                for closing in comments[index + 1 :]:
                    if str(closing).strip().lower() == f"{IGNORE_DIRECTIVE}-end":
                        node = comment.next_sibling
                        while node is not None and node is not closing:
                            mark(node)
                            node = node.next_sibling
                        break
            elif directive == IGNORE_DIRECTIVE:
                nxt = comment.next_sibling
                while isinstance(nxt, NavigableString) and not nxt.strip():
                    nxt = nxt.next_sibling
                mark(nxt)

        for element in soup.select(f".{IGNORE_CLASS}, [data-typography='ignore']"):
            mark(element)
        return ignored
