"""Decode user configuration into immutable :class:`TypographyOptions`.

The accepted mapping mirrors the options of the MkDocs plugin::

    {
        "ellipsis": True,
        "quotes": False,
        "check_string_literals": {"only_functions": ["t", "i18n.t"]},
        "check_template_literals": {"tags": ["t"], "untagged": False},
        "check_attributes": True,
        "check_children": {"only_components": ["p", "Text"]},
    }

Every scope option accepts a boolean or a mapping; a mapping restricts the
scope to its allowlist.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional

from .engine import Toggles, TypographyOptions
from .scope import (
    AttributeAllowlist,
    ComponentAllowlist,
    FunctionAllowlist,
    ScopeConfig,
    TemplateAllowlist,
    Trinary,
)


CONFIG_SECTION = "unicode-typography"

TOGGLE_KEYS = ("ellipsis", "emdash", "endash", "quotes", "apostrophes", "primes")


class ConfigError(ValueError):
    """Raised when a configuration mapping cannot be decoded."""


def _string_set(option: str, key: str, value: Any) -> FrozenSet[str]:
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(item, str) for item in value
    ):
        raise ConfigError(f"{option}.{key} must be a list of strings")
    return frozenset(value)


def _check_keys(option: str, raw: Mapping[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ConfigError(f"{option}: unknown key(s) {', '.join(unknown)}")


def _decode_trinary(
    option: str,
    raw: Any,
    default: Trinary[Any],
    decode_allowlist: Callable[[Mapping[str, Any]], Any],
) -> Trinary[Any]:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return Trinary.on() if raw else Trinary.off()
    if isinstance(raw, Mapping):
        return Trinary.restricted(decode_allowlist(raw))
    raise ConfigError(f"{option} must be a boolean or a mapping")


def _functions(raw: Mapping[str, Any]) -> FunctionAllowlist:
    option = "check_string_literals"
    _check_keys(option, raw, {"only_functions"})
    return FunctionAllowlist(
        _string_set(option, "only_functions", raw.get("only_functions", []))
    )


def _templates(raw: Mapping[str, Any]) -> TemplateAllowlist:
    option = "check_template_literals"
    _check_keys(option, raw, {"tags", "untagged"})
    untagged = raw.get("untagged", False)
    if not isinstance(untagged, bool):
        raise ConfigError(f"{option}.untagged must be a boolean")
    return TemplateAllowlist(
        tags=_string_set(option, "tags", raw.get("tags", [])), untagged=untagged
    )


def _attributes(raw: Mapping[str, Any]) -> AttributeAllowlist:
    option = "check_attributes"
    _check_keys(option, raw, {"only_attributes"})
    return AttributeAllowlist(
        _string_set(option, "only_attributes", raw.get("only_attributes", []))
    )


def _components(raw: Mapping[str, Any]) -> ComponentAllowlist:
    option = "check_children"
    _check_keys(option, raw, {"only_components"})
    return ComponentAllowlist(
        _string_set(option, "only_components", raw.get("only_components", []))
    )


def parse_options(raw: Optional[Mapping[str, Any]] = None) -> TypographyOptions:
    """Validate and decode a configuration mapping.

    Args:
        raw: User configuration. Missing keys keep their defaults and
            ``None`` values are treated as missing.

    Returns:
        The decoded options.

    Raises:
        ConfigError: If a key is unknown or a value has the wrong shape.

    Examples:
        >>> options = parse_options({"emdash": False, "check_children": False})
        >>> options.toggles.emdash, options.scope.children.mode.value
        (False, 'off')
    """
    raw = dict(raw or {})
    scope_defaults = ScopeConfig()
    _check_keys(
        "options",
        raw,
        set(TOGGLE_KEYS)
        | {
            "check_string_literals",
            "check_template_literals",
            "check_attributes",
            "check_children",
        },
    )

    toggle_values: Dict[str, bool] = {}
    for key in TOGGLE_KEYS:
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be a boolean")
        toggle_values[key] = value

    scope = ScopeConfig(
        string_literals=_decode_trinary(
            "check_string_literals",
            raw.get("check_string_literals"),
            scope_defaults.string_literals,
            _functions,
        ),
        template_literals=_decode_trinary(
            "check_template_literals",
            raw.get("check_template_literals"),
            scope_defaults.template_literals,
            _templates,
        ),
        attributes=_decode_trinary(
            "check_attributes",
            raw.get("check_attributes"),
            scope_defaults.attributes,
            _attributes,
        ),
        children=_decode_trinary(
            "check_children",
            raw.get("check_children"),
            scope_defaults.children,
            _components,
        ),
    )
    return TypographyOptions(toggles=Toggles(**toggle_values), scope=scope)


def load_options(path: Path) -> TypographyOptions:
    """Read options from a JSON file.

    The options may sit at the top level or under a ``"unicode-typography"``
    key, which lets projects share a settings file between tools.

    Raises:
        ConfigError: If the file is not valid JSON or holds invalid options.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object")
    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: {CONFIG_SECTION!r} must be a JSON object")
    return parse_options(section)
