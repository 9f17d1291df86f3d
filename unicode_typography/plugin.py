"""MkDocs plugin replacing ASCII typography approximations in rendered pages."""

# pylint: disable=invalid-name
from __future__ import annotations

from enum import Enum
import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Any, cast

from mkdocs.config import config_options as c
from mkdocs.config.base import Config
from mkdocs.config.defaults import MkDocsConfig
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin
from mkdocs.structure.files import Files
from mkdocs.structure.pages import Page
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ConfigError, parse_options
from .constants import DEFAULT_CHECKED_ATTRIBUTES
from .engine import TypographyOptions
from .hosts.html import HtmlFinding, HtmlHost


WarningEntry = dict[str, Any]

log = logging.getLogger("mkdocs.plugins.unicode_typography")

OPTION_KEYS = (
    "ellipsis",
    "emdash",
    "endash",
    "quotes",
    "apostrophes",
    "primes",
    "check_string_literals",
    "check_template_literals",
    "check_attributes",
    "check_children",
)

# ---------- Class-based config ----------


class Level(str, Enum):  # pylint: disable=invalid-name
    """Severity levels controlling how findings are handled."""

    ignore = "ignore"
    warn = "warn"
    fix = "fix"


class TypographyPluginConfig(Config):
    """Configuration schema for the typography plugin."""

    level = c.Choice((Level.ignore, Level.warn, Level.fix), default=Level.fix)

    # replacement toggles
    ellipsis = c.Type(bool, default=True)
    emdash = c.Type(bool, default=True)
    endash = c.Type(bool, default=True)
    quotes = c.Type(bool, default=True)
    apostrophes = c.Type(bool, default=True)
    primes = c.Type(bool, default=True)

    # scopes: a boolean or an allowlist mapping
    check_string_literals = c.Type((bool, dict), default=False)
    check_template_literals = c.Type((bool, dict), default=False)
    check_attributes = c.Type(
        (bool, dict), default={"only_attributes": list(DEFAULT_CHECKED_ATTRIBUTES)}
    )
    check_children = c.Type((bool, dict), default=True)

    summary = c.Type(bool, default=False)


# ---------- Plugin ----------


class TypographyPlugin(BasePlugin[TypographyPluginConfig]):
    """MkDocs plugin that fixes typography and reports remaining issues."""

    def __init__(self):
        """Initialize runtime state."""
        super().__init__()
        self._collected_warnings: list[WarningEntry] = []
        self._options: TypographyOptions = TypographyOptions()
        self._host = HtmlHost(self._options)

    def on_config(self, config: MkDocsConfig) -> MkDocsConfig | None:
        """Decode the typography options once per build.

        Args:
            config: MkDocs configuration object.

        Returns:
            The unchanged configuration object.

        Raises:
            PluginError: If a scope option has an invalid shape.
        """
        raw = {key: getattr(self.config, key) for key in OPTION_KEYS}
        try:
            self._options = parse_options(raw)
        except ConfigError as exc:
            raise PluginError(f"unicode-typography: {exc}") from exc
        self._host = HtmlHost(self._options)
        self._collected_warnings = []
        return config

    def on_page_content(
        self,
        html: str,
        page: Page,
        config: MkDocsConfig,
        files: Files,
    ) -> str:
        """Process the generated HTML of a page.

        Args:
            html: Rendered HTML string produced by MkDocs.
            page: MkDocs page instance currently being processed.
            config: MkDocs configuration object (unused).
            files: MkDocs files collection (unused).

        Returns:
            Updated HTML string with typography fixes applied.
        """
        del config, files
        level = Level(getattr(self.config.level, "value", self.config.level))
        if level == Level.ignore:
            return html

        src_path = self._source_path_for_page(page)
        processed, findings = self._host.process(html, fix=level == Level.fix)

        if level == Level.warn:
            self._emit_warnings(findings, src_path)
        elif findings:
            log.debug(
                "[typography] %s: %d replacement(s) applied", src_path, len(findings)
            )
        return processed

    def on_post_build(self, config: MkDocsConfig) -> None:
        """Print the summary of collected warnings after the build."""
        del config
        if self.config.summary and self._collected_warnings:
            self._print_summary()

    def _emit_warnings(self, findings: list[HtmlFinding], src_path: str) -> None:
        """Log findings and optionally store them for the summary.

        Args:
            findings: Findings of one page.
            src_path: Source path associated with the processed page.
        """
        for finding in findings:
            log.warning(
                "[typography:%s] '%s' <%s>: %s: «%s» → «%s»",
                finding.message_id,
                src_path,
                finding.element or "",
                finding.message,
                finding.excerpt,
                finding.preview,
            )
            if self.config.summary:
                self._collected_warnings.append(
                    {
                        "rule": finding.message_id,
                        "file": src_path,
                        "element": finding.element,
                        "message": finding.message,
                        "preview": finding.preview,
                    }
                )

    @staticmethod
    def _source_path_for_page(page: Page) -> str:
        """Return the best-effort source path for the given MkDocs page."""
        file_obj = getattr(page, "file", None)
        if file_obj is None:
            return "<page>"
        raw_src = cast(str | None, getattr(file_obj, "src_path", None))
        if not raw_src:
            return "<page>"
        return str(Path(raw_src))

    def _print_summary(self):
        """Display a formatted summary of collected warnings."""
        table = Table(
            title="Typography warnings",
            title_style="bold bright_white",
            header_style="bold magenta",
            show_lines=True,
            box=box.ROUNDED,
            border_style="grey50",
            row_styles=["grey35", ""],
            pad_edge=False,
            padding=(0, 1),
        )
        table.add_column("Rule", style="cyan", no_wrap=True)
        table.add_column("File", style="green")
        table.add_column("Element", style="green")
        table.add_column("Message", style="white")
        table.add_column("Suggestion", style="dim")

        for entry in self._collected_warnings:
            suggestion = f"«{entry['preview']}»" if entry["preview"] else ""
            table.add_row(
                entry["rule"],
                entry["file"],
                entry["element"] or "",
                entry["message"],
                suggestion,
            )

        console = Console()
        console.print(table)


def make_plugin_config(**overrides: Any) -> SimpleNamespace:
    """Create a lightweight configuration namespace for standalone usage."""

    defaults: dict[str, Any] = {
        "level": Level.fix,
        "ellipsis": True,
        "emdash": True,
        "endash": True,
        "quotes": True,
        "apostrophes": True,
        "primes": True,
        "check_string_literals": False,
        "check_template_literals": False,
        "check_attributes": {"only_attributes": list(DEFAULT_CHECKED_ATTRIBUTES)},
        "check_children": True,
        "summary": False,
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)
