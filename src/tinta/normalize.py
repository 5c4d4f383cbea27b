"""Source normalization applied before tokenizing.

Snippets embedded in markup usually carry the indentation of the markup
around them. normalize_source strips that so offsets refer to the text the
reader actually sees:

- CRLF line endings become LF
- leading blank lines and trailing whitespace are removed
- tabs become single spaces
- the first line's indentation is removed from every line (lines indented
  less than that lose only what they have)

Example:
    >>> normalize_source("\\n    def f(a):\\n        return a\\n")
    'def f(a):\\n    return a'
"""

from __future__ import annotations

import re

_LEADING_NEWLINES = re.compile(r"\A\n+")
_LEADING_SPACES = re.compile(r"\A *")


def normalize_source(text: str) -> str:
    """Normalize line endings and strip the snippet's base indentation."""
    if not text:
        return ""

    text = text.replace("\r\n", "\n")
    text = _LEADING_NEWLINES.sub("", text).rstrip()
    if not text:
        return ""

    text = text.replace("\t", " ")
    lines = text.split("\n")
    base = len(_LEADING_SPACES.match(lines[0]).group())  # type: ignore[union-attr]
    if base == 0:
        return text

    return "\n".join(_dedent(line, base) for line in lines)


def _dedent(line: str, width: int) -> str:
    strip = len(line) - len(line.lstrip(" "))
    return line[min(strip, width) :]


__all__ = [
    "normalize_source",
]
