"""Public package exports for ``unicode_typography``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .cli import main
from .config import ConfigError, load_options, parse_options
from .engine import (
    TextSpan,
    Toggles,
    TypographyOptions,
    apply_edits,
    evaluate_span,
    message_id_for,
)
from .rules import Edit, Kind
from .scope import ContextFacts, ElementStack, ScopeConfig, SpanKind, Trinary


if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .plugin import Level, TypographyPlugin

__all__ = [
    "ConfigError",
    "ContextFacts",
    "Edit",
    "ElementStack",
    "Kind",
    "Level",
    "ScopeConfig",
    "SpanKind",
    "TextSpan",
    "Toggles",
    "Trinary",
    "TypographyOptions",
    "TypographyPlugin",
    "apply_edits",
    "evaluate_span",
    "load_options",
    "main",
    "message_id_for",
    "parse_options",
]


def __getattr__(name: str) -> Any:
    """
    Lazily import the MkDocs plugin.

    ``unicode_typography.plugin`` pulls in MkDocs, BeautifulSoup, and rich
    during import; the engine and the CLI do not need them.
    """
    if name in {"TypographyPlugin", "Level"}:
        from .plugin import Level, TypographyPlugin

        return {"TypographyPlugin": TypographyPlugin, "Level": Level}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
