"""Rule kinds for syntax profiles.

A profile maps each token type name to exactly one rule. Rules form a closed
set; the extraction engine has one branch per kind:

- PatternRule: a compiled regular expression, applied in find-all mode
- KeywordRule: literal words matched as whole words
- ScannerRule: a procedural scanner ``(source, factory) -> ranges``
- InertRule: declared but produces nothing (reserves a color slot)

Profile authors rarely build these directly. ``coerce_rule`` converts the
raw values found in profile modules and data files:

    re.Pattern / str              -> PatternRule
    {"pattern": str, "flags": s}  -> PatternRule with flags
    list / tuple / set of str     -> KeywordRule
    callable                      -> ScannerRule
    {"scanner": "php"}            -> ScannerRule using a built-in scanner
    None / False                  -> InertRule

Thread Safety:
All rule objects are frozen dataclasses. Safe to share.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from tinta.errors import MalformedRuleError

if TYPE_CHECKING:
    from tinta.ranges import HighlightRange, RangeFactory

Scanner = Callable[[str, "RangeFactory"], Iterable[Union["HighlightRange", tuple[int, int]]]]

_FLAG_LETTERS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "a": re.ASCII,
}


@dataclass(frozen=True, slots=True)
class PatternRule:
    """Find every non-overlapping match of a regular expression."""

    pattern: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """Match literal words as whole words.

    ``words`` keeps authoring order; duplicates are removed at match time.
    """

    words: tuple[str, ...]

    def __post_init__(self) -> None:
        # Keyword patterns are cached by word tuple
        if not isinstance(self.words, tuple):
            object.__setattr__(self, "words", tuple(self.words))


@dataclass(frozen=True, slots=True)
class ScannerRule:
    """Delegate extraction to a procedural scanner."""

    scanner: Scanner

    @property
    def name(self) -> str:
        return getattr(self.scanner, "__name__", None) or repr(self.scanner)


@dataclass(frozen=True, slots=True)
class InertRule:
    """Declared but inert: produces no ranges."""


Rule = PatternRule | KeywordRule | ScannerRule | InertRule

INERT = InertRule()


def compile_flags(flags: str) -> re.RegexFlag:
    """Translate flag letters ("im") into re flags.

    Raises:
        ValueError: If a letter is not a supported flag
    """
    result = re.RegexFlag(0)
    for letter in flags.lower():
        if letter == "g":
            # find-all is always on
            continue
        if letter not in _FLAG_LETTERS:
            raise ValueError(f"unsupported regex flag {letter!r}")
        result |= _FLAG_LETTERS[letter]
    return result


def coerce_rule(token_type: str, value: object) -> Rule:
    """Convert a raw profile value into a Rule.

    Args:
        token_type: Name of the profile entry (used in error messages)
        value: Raw value from a profile module or data file

    Returns:
        The matching Rule

    Raises:
        MalformedRuleError: If the value is none of the recognized kinds
    """
    if isinstance(value, PatternRule):
        _check_text_pattern(token_type, value.pattern)
        return value
    if isinstance(value, (KeywordRule, ScannerRule, InertRule)):
        return value
    if value is None or value is False:
        return INERT
    if isinstance(value, re.Pattern):
        _check_text_pattern(token_type, value)
        return PatternRule(value)
    if isinstance(value, str):
        return PatternRule(_compile(token_type, value))
    if isinstance(value, Mapping):
        return _coerce_mapping(token_type, value)
    if isinstance(value, (list, tuple, set, frozenset)):
        words = tuple(value)
        for word in words:
            if not isinstance(word, str) or not word:
                raise MalformedRuleError(
                    token_type, f"keyword list contains {word!r}; expected non-empty strings"
                )
        return KeywordRule(words)
    if callable(value):
        return ScannerRule(value)
    raise MalformedRuleError(token_type, f"unsupported value of type {type(value).__name__}")


def _coerce_mapping(token_type: str, value: Mapping) -> Rule:
    if "pattern" in value:
        source = value["pattern"]
        if not isinstance(source, str):
            raise MalformedRuleError(token_type, "'pattern' must be a string")
        try:
            flags = compile_flags(str(value.get("flags", "")))
        except ValueError as e:
            raise MalformedRuleError(token_type, str(e)) from e
        return PatternRule(_compile(token_type, source, flags))

    if "scanner" in value:
        from tinta.scanning import BUILTIN_SCANNERS

        name = value["scanner"]
        scanner = BUILTIN_SCANNERS.get(name) if isinstance(name, str) else None
        if scanner is None:
            known = ", ".join(sorted(BUILTIN_SCANNERS))
            raise MalformedRuleError(token_type, f"unknown scanner {name!r} (known: {known})")
        return ScannerRule(scanner)

    raise MalformedRuleError(token_type, "mapping must contain 'pattern' or 'scanner'")


def _check_text_pattern(token_type: str, pattern: object) -> None:
    if not isinstance(pattern, re.Pattern) or not isinstance(pattern.pattern, str):
        raise MalformedRuleError(token_type, "pattern must be a compiled str pattern, not bytes")


def _compile(token_type: str, source: str, flags: re.RegexFlag = re.RegexFlag(0)) -> re.Pattern[str]:
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise MalformedRuleError(token_type, f"invalid pattern: {e}") from e


__all__ = [
    "INERT",
    "InertRule",
    "KeywordRule",
    "PatternRule",
    "Rule",
    "Scanner",
    "ScannerRule",
    "coerce_rule",
    "compile_flags",
]
