"""Unicode characters and defaults shared by the rules, hosts, and plugin."""

ELLIPSIS = "\u2026"  # …
EMDASH = "\u2014"  # —
ENDASH = "\u2013"  # –
LEFT_DOUBLE = "\u201c"  # “
RIGHT_DOUBLE = "\u201d"  # ”
LEFT_SINGLE = "\u2018"  # ‘
RIGHT_SINGLE = "\u2019"  # ’, also used for apostrophes
PRIME = "\u2032"  # ′
DOUBLE_PRIME = "\u2033"  # ″

DEFAULT_CHECKED_ATTRIBUTES = (
    "title",
    "alt",
    "label",
    "aria-label",
    "aria-describedby",
)

SKIP_TAGS = {"code", "pre", "kbd", "samp", "var", "script", "style", "math"}

IGNORE_CLASS = "typography-ignore"
IGNORE_DIRECTIVE = "typography-ignore"

SOURCE_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs")
