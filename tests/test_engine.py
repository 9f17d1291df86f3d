import pytest

from unicode_typography.constants import (
    DOUBLE_PRIME,
    ELLIPSIS,
    EMDASH,
    ENDASH,
    LEFT_SINGLE,
    PRIME,
    RIGHT_SINGLE,
)
from unicode_typography.engine import (
    MESSAGES,
    TextSpan,
    Toggles,
    TypographyOptions,
    apply_edits,
    evaluate,
    evaluate_span,
    message_for,
    message_id_for,
)
from unicode_typography.rules import Kind
from unicode_typography.scope import ContextFacts, SpanKind


IN_PARAGRAPH = ContextFacts(SpanKind.CHILDREN, elements=("p",))


def run(text, base_offset=0, **toggles):
    options = TypographyOptions(toggles=Toggles(**toggles))
    return evaluate_span(text, base_offset, options, IN_PARAGRAPH)


def fixed(text, **toggles):
    return apply_edits(text, run(text, **toggles))


def test_already_typographic_text_yields_no_edits():
    text = (
        f"wait{ELLIPSIS} a{EMDASH}b 9am{ENDASH}5pm “q” ‘q’ "
        f"don{RIGHT_SINGLE}t 5{PRIME} 6{DOUBLE_PRIME}"
    )
    assert run(text) == []


def test_ellipsis_edit_is_absolute():
    (edit,) = run("wait...", base_offset=10)
    assert (edit.kind, edit.start, edit.end, edit.replacement) == (
        Kind.ELLIPSIS,
        14,
        17,
        ELLIPSIS,
    )


def test_four_periods_give_one_ellipsis():
    edits = run("....")
    assert [(edit.start, edit.end) for edit in edits] == [(0, 3)]
    assert fixed("....") == f"{ELLIPSIS}."


def test_emdash_and_toggle():
    assert fixed("a--b") == f"a{EMDASH}b"
    assert run("a--b", emdash=False) == []


def test_endash_replaces_spaces_too():
    (edit,) = run("9am - 5pm")
    assert (edit.start, edit.end, edit.replacement) == (3, 6, ENDASH)
    assert fixed("9am - 5pm") == f"9am{ENDASH}5pm"
    assert run("well-known") == []


@pytest.mark.parametrize(
    ("text", "kind", "start"),
    [
        ("don't", Kind.APOSTROPHE, 3),
        ("back in '85", Kind.APOSTROPHE, 8),
        ("5' tall", Kind.PRIME, 1),
    ],
)
def test_single_quote_dispositions(text, kind, start):
    (edit,) = run(text)
    assert (edit.kind, edit.start) == (kind, start)


def test_single_quotes_open_then_close():
    edits = run("'quoted'")
    assert [(edit.kind, edit.replacement) for edit in edits] == [
        (Kind.QUOTE, LEFT_SINGLE),
        (Kind.QUOTE, RIGHT_SINGLE),
    ]


def test_measurements_use_primes():
    assert fixed("5' 6\"") == f"5{PRIME} 6{DOUBLE_PRIME}"
    assert fixed("He is 5' 6\" tall") == f"He is 5{PRIME} 6{DOUBLE_PRIME} tall"
    assert fixed("The room is 10' x 12'") == f"The room is 10{PRIME} x 12{PRIME}"


def test_mixed_replacements():
    assert fixed("Wait... and I'm here") == f"Wait{ELLIPSIS} and I{RIGHT_SINGLE}m here"
    assert fixed('"Hello," she said') == "“Hello,” she said"


def test_out_of_scope_span_yields_nothing():
    facts = ContextFacts(SpanKind.STRING_LITERAL, call_names=("t",))
    assert evaluate_span("hello...", 0, TypographyOptions(), facts) == []


def test_evaluate_text_span():
    edits = evaluate(TextSpan("a--b", 5), TypographyOptions(), IN_PARAGRAPH)
    assert [(edit.start, edit.end) for edit in edits] == [(6, 8)]


def test_message_ids():
    assert message_id_for(Kind.ELLIPSIS) == "preferEllipsis"
    assert message_id_for(Kind.QUOTE) == "preferQuotes"
    assert message_id_for(Kind.PRIME) == "preferPrime"
    assert message_for(Kind.EMDASH) == MESSAGES["preferEmdash"]
    assert len(MESSAGES) == len(Kind)


def test_apply_edits_without_edits_returns_text():
    assert apply_edits("plain", []) == "plain"
