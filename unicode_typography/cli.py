"""Command-line entry point for unicode-typography."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Iterable, List, Optional, Sequence

from .config import ConfigError, load_options
from .constants import SOURCE_SUFFIXES
from .engine import TypographyOptions
from .hosts.javascript import JavaScriptHost, SourceParseError


def main(argv: Iterable[str] | None = None) -> int:
    """Execute the command-line interface.

    Args:
        argv: Optional iterable overriding ``sys.argv``.

    Returns:
        Exit code (zero on success, non-zero on findings, error, or misuse).
    """
    parser = argparse.ArgumentParser(
        prog="unicode-typography",
        description="Replace ASCII typography in JavaScript and JSX sources.",
        epilog=(
            "Sources are parsed as ECMAScript 2017 with JSX. JSX fragments, "
            "optional chaining and TypeScript syntax are reported as parse errors."
        ),
    )
    subparsers = parser.add_subparsers(dest="command")

    _configure_check_parser(subparsers)
    _configure_fix_parser(subparsers)

    args = parser.parse_args(list(argv) if argv is not None else None)

    if not getattr(args, "handler", None):
        parser.print_help(sys.stderr)
        return 1

    return args.handler(args)


def _add_common_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Source files or directories to scan.",
    )
    sub.add_argument(
        "--config",
        type=Path,
        help="JSON file holding the options (top level or under 'unicode-typography').",
    )


def _configure_check_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    """Register the ``check`` sub-command listing pending replacements."""

    check_parser = subparsers.add_parser(
        "check", help="List typography replacements without modifying files."
    )
    _add_common_arguments(check_parser)
    check_parser.set_defaults(handler=_run_check)


def _configure_fix_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    """Register the ``fix`` sub-command rewriting sources in place."""

    fix_parser = subparsers.add_parser(
        "fix", help="Rewrite source files with typography replacements applied."
    )
    _add_common_arguments(fix_parser)
    fix_parser.set_defaults(handler=_run_fix)


def _load_cli_options(config_path: Optional[Path]) -> TypographyOptions | None:
    """Return decoded options, or ``None`` after reporting an error."""
    if config_path is None:
        return TypographyOptions()
    if not config_path.exists():
        print(f"Configuration not found: {config_path}", file=sys.stderr)
        return None
    try:
        return load_options(config_path)
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return None


def _run_check(args: argparse.Namespace) -> int:
    """Display the replacements that would be applied without modifying files."""

    options = _load_cli_options(args.config)
    if options is None:
        return 1
    files = _collect_files(args.paths)
    if files is None:
        return 1

    host = JavaScriptHost(options)
    issues_found = False
    failed = False
    for path in files:
        try:
            source = path.read_text(encoding="utf-8")
            findings = host.check(source)
        except SourceParseError as exc:
            _report_parse_error(path, exc)
            failed = True
            continue
        except (OSError, UnicodeDecodeError) as exc:
            _report_read_error(path, exc)
            failed = True
            continue

        rel_path = _format_relative(path)
        for finding in findings:
            issues_found = True
            print(
                f"{rel_path}:{finding.line}:{finding.column} "
                f"[{finding.message_id}] {finding.message}"
            )

    if issues_found or failed:
        return 1

    print("No replacements needed.")
    return 0


def _run_fix(args: argparse.Namespace) -> int:
    """Apply replacements in place."""

    options = _load_cli_options(args.config)
    if options is None:
        return 1
    files = _collect_files(args.paths)
    if files is None:
        return 1

    host = JavaScriptHost(options)
    updated_files: List[Path] = []
    failed = False
    for path in files:
        try:
            original = path.read_text(encoding="utf-8")
            fixed, findings = host.fix(original)
        except SourceParseError as exc:
            _report_parse_error(path, exc)
            failed = True
            continue
        except (OSError, UnicodeDecodeError) as exc:
            _report_read_error(path, exc)
            failed = True
            continue
        if fixed == original:
            continue
        path.write_text(fixed, encoding="utf-8")
        updated_files.append(path)
        print(f"Fixed: {_format_relative(path)} ({len(findings)} replacement(s))")

    if not updated_files:
        print("No replacements applied: files were already compliant.")
    else:
        print(f"{len(updated_files)} file(s) updated.")
    return 1 if failed else 0


def _report_parse_error(path: Path, exc: SourceParseError) -> None:
    location = _format_relative(path)
    if exc.line is not None:
        location += f":{exc.line}"
        if exc.column is not None:
            location += f":{exc.column}"
    print(f"{location}: parse error: {exc}", file=sys.stderr)


def _report_read_error(path: Path, exc: Exception) -> None:
    print(f"{_format_relative(path)}: read error: {exc}", file=sys.stderr)


def _collect_files(paths: Sequence[Path]) -> List[Path] | None:
    """Expand directories into source files; report missing paths."""
    files: List[Path] = []
    for path in paths:
        if not path.exists():
            print(f"Path not found: {path}", file=sys.stderr)
            return None
        if path.is_dir():
            files.extend(_iter_source_files(path))
        else:
            files.append(path)
    return files


def _iter_source_files(root: Path) -> Sequence[Path]:
    """Return JavaScript sources contained within ``root`` sorted by path."""
    return sorted(
        path
        for path in root.rglob("*")
        if path.is_file()
        and path.suffix in SOURCE_SUFFIXES
        and "node_modules" not in path.parts
    )


def _format_relative(path: Path) -> str:
    """Return a path relative to the current working directory when possible."""
    root = Path.cwd().resolve()
    abs_path = path.resolve()
    try:
        return str(abs_path.relative_to(root))
    except ValueError:
        return str(abs_path)
