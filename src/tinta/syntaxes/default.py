"""Default syntax profile: HTML markup with embedded CSS.

Used when no profile is requested, for "html", and whenever a named profile
fails to load.
"""

import re

DEFAULT_SYNTAX: dict[str, object] = {
    "argument": re.compile(r"(?<=\()[^)]+(?=\))"),
    "operator": re.compile(r"[>~+*|=^$]"),
    "property": re.compile(r"(?<!@)\b[\w-]+(?=:)"),
    "number": re.compile(r"[+-]?\b\d*\.?\d+(?:e[+-]?\d+)?(?:%|[a-z]{1,4})?\b", re.IGNORECASE),
    "tag": re.compile(r"</?[\w-]+|/>|(?<=[\w\"'])>"),
    "comment": re.compile(r"(<!--|/\*)([\s\S]*?)(-->|\*/)"),
    "keyword": re.compile(r"@\w+\b"),
    "variable": re.compile(r"--[\w\d]+-?[\w\d]*"),
    "function": re.compile(r"[\w-]+\s*(?=\()"),
    "string": re.compile(r"([\"'])(?:\\.|[^\\])*?\1"),
}
