"""Identifier helpers and the compiler-style warning printer."""

from __future__ import annotations

import sys

_RESET = "\x1b[0m"
_YELLOW_BOLD = "\x1b[1;93m"
_WHITE_BOLD = "\x1b[1;97m"
_WHITE = "\x1b[0;97m"
_BLUE_BOLD = "\x1b[1;94m"


def to_ts_ident(ident: str) -> str:
    """Turn an identifier, possibly written in raw form (``r#type``), into a TypeScript one."""
    while ident.startswith("r#"):
        ident = ident[2:]
    return ident


def raw_name_to_ts_field(value: str) -> str:
    """Return ``value`` as a TypeScript field name, quoting it if it holds special characters."""
    valid = all(c.isalnum() or c in "_$" for c in value) and not (
        value and value[0].isnumeric()
    )
    return value if valid else f'"{value}"'


def print_warning(title: object, content: object, note: object) -> None:
    """Print a message to stderr that looks like a compiler warning."""
    segments = [
        (_YELLOW_BOLD, "warning"),
        (_WHITE_BOLD, f": {title}\n"),
        (_BLUE_BOLD, "  | \n"),
        (_BLUE_BOLD, "  | "),
        (_WHITE, f"{content}\n"),
        (_BLUE_BOLD, "  | \n"),
        (_BLUE_BOLD, "  = "),
        (_WHITE_BOLD, "note: "),
        (_WHITE, f"{note}\n"),
    ]
    stream = sys.stderr
    isatty = getattr(stream, "isatty", None)
    colored = bool(isatty and isatty())
    if colored:
        text = "".join(style + part for style, part in segments) + _RESET
    else:
        text = "".join(part for _, part in segments)
    stream.write(text)
    stream.flush()