"""Convenience imports and factories for the built-in typography rules."""

from .base import Edit, Kind, Rule
from .dashes import EmdashRule, EndashRule
from .ellipsis import EllipsisRule
from .orchestrator import TypographyScanner
from .quotes import QuotesRule
from .resolver import resolve


def build_rules() -> tuple[Rule, ...]:
    """Return the rule chain in emission order."""

    return (
        EllipsisRule(),
        EmdashRule(),
        EndashRule(),
        QuotesRule(),
    )


ALL_RULES = build_rules()

__all__ = [
    "ALL_RULES",
    "Edit",
    "Kind",
    "Rule",
    "TypographyScanner",
    "build_rules",
    "resolve",
]
