import pytest

from unicode_typography.constants import DEFAULT_CHECKED_ATTRIBUTES
from unicode_typography.scope import (
    AttributeAllowlist,
    ComponentAllowlist,
    ContextFacts,
    ElementStack,
    FunctionAllowlist,
    Mode,
    ScopeConfig,
    SpanKind,
    TemplateAllowlist,
    Trinary,
    allows,
    allows_attribute,
    allows_children,
    allows_string_literal,
    allows_template_literal,
)


def test_default_scopes():
    scope = ScopeConfig()
    assert scope.string_literals.mode is Mode.off
    assert scope.template_literals.mode is Mode.off
    assert scope.children.mode is Mode.on
    assert scope.attributes.mode is Mode.restricted
    assert scope.attributes.allowlist == AttributeAllowlist(
        frozenset(DEFAULT_CHECKED_ATTRIBUTES)
    )


def test_trinary_requires_allowlist_only_when_restricted():
    with pytest.raises(ValueError):
        Trinary(Mode.restricted)
    with pytest.raises(ValueError):
        Trinary(Mode.on, FunctionAllowlist(frozenset({"t"})))


def test_string_literal_gate():
    only_t = Trinary.restricted(FunctionAllowlist(frozenset({"t"})))
    inside_t = ContextFacts(SpanKind.STRING_LITERAL, call_names=("t",))
    inside_log = ContextFacts(SpanKind.STRING_LITERAL, call_names=("console.log",))
    nested = ContextFacts(SpanKind.STRING_LITERAL, call_names=("t", "console.log"))

    assert allows_string_literal(only_t, inside_t)
    assert not allows_string_literal(only_t, inside_log)
    assert allows_string_literal(only_t, nested)
    assert not allows_string_literal(only_t, ContextFacts(SpanKind.STRING_LITERAL))
    assert allows_string_literal(Trinary.on(), inside_log)
    assert not allows_string_literal(Trinary.off(), inside_t)


def test_dotted_call_names_must_match_exactly():
    facts = ContextFacts(SpanKind.STRING_LITERAL, call_names=("i18n.t",))
    assert not allows_string_literal(
        Trinary.restricted(FunctionAllowlist(frozenset({"t"}))), facts
    )
    assert allows_string_literal(
        Trinary.restricted(FunctionAllowlist(frozenset({"i18n.t"}))), facts
    )


def test_template_literal_gate():
    option = Trinary.restricted(TemplateAllowlist(tags=frozenset({"t"}), untagged=True))
    tagged_t = ContextFacts(SpanKind.TEMPLATE_LITERAL, tagged=True, tag="t")
    tagged_css = ContextFacts(SpanKind.TEMPLATE_LITERAL, tagged=True, tag="css")
    untagged = ContextFacts(SpanKind.TEMPLATE_LITERAL)

    assert allows_template_literal(option, tagged_t)
    assert not allows_template_literal(option, tagged_css)
    assert allows_template_literal(option, untagged)

    tags_only = Trinary.restricted(TemplateAllowlist(tags=frozenset({"t"})))
    assert not allows_template_literal(tags_only, untagged)
    assert allows_template_literal(Trinary.on(), tagged_css)
    assert not allows_template_literal(Trinary.off(), untagged)


def test_attribute_gate():
    option = ScopeConfig().attributes
    assert allows_attribute(option, ContextFacts(SpanKind.ATTRIBUTE, attribute="title"))
    assert not allows_attribute(
        option, ContextFacts(SpanKind.ATTRIBUTE, attribute="className")
    )
    namespaced = Trinary.restricted(AttributeAllowlist(frozenset({"xlink:title"})))
    assert allows_attribute(
        namespaced, ContextFacts(SpanKind.ATTRIBUTE, attribute="xlink:title")
    )


def test_children_gate_uses_innermost_element():
    only_p = Trinary.restricted(ComponentAllowlist(frozenset({"p"})))
    assert allows_children(only_p, ContextFacts(SpanKind.CHILDREN, elements=("div", "p")))
    assert not allows_children(
        only_p, ContextFacts(SpanKind.CHILDREN, elements=("p", "div"))
    )
    assert allows_children(only_p, ContextFacts(SpanKind.CHILDREN, elements=("P",)))
    assert not allows_children(only_p, ContextFacts(SpanKind.CHILDREN))
    assert allows_children(Trinary.on(), ContextFacts(SpanKind.CHILDREN))


def test_allows_dispatches_on_span_kind():
    scope = ScopeConfig()
    assert allows(ContextFacts(SpanKind.CHILDREN, elements=("div",)), scope)
    assert not allows(ContextFacts(SpanKind.TEMPLATE_LITERAL), scope)
    assert allows(ContextFacts(SpanKind.ATTRIBUTE, attribute="alt"), scope)
    assert not allows(ContextFacts(SpanKind.STRING_LITERAL, call_names=("t",)), scope)


def test_element_stack_push_pop():
    stack = ElementStack()
    assert stack.snapshot() == ()
    stack.push("div")
    stack.push("Foo.Bar")
    assert stack.snapshot() == ("div", "Foo.Bar")
    assert stack.pop() == "Foo.Bar"
    assert stack.snapshot() == ("div",)
