"""Token range extraction engine.

Turns one rule plus source text into an ordered tuple of HighlightRange.
Extraction is pure and total: nothing here raises to the caller. A rule that
is malformed, or whose scanner fails, is logged with its token type and
contributes no ranges; the other rules of the profile still run.

Example:
    >>> import re
    >>> from tinta.rules import PatternRule
    >>> [r.text("a1 b22") for r in extract(PatternRule(re.compile(r"\\d+")), "a1 b22")]
    ['1', '22']

Thread Safety:
Stateless apart from the compiled-keyword cache (lru_cache is thread-safe).

"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache

from tinta.errors import MalformedRuleError, RangeConstructionError, ScannerError
from tinta.profile import SyntaxProfile
from tinta.profiling import get_tokenize_accumulator
from tinta.ranges import HighlightRange, HighlightResult, RangeFactory
from tinta.rules import InertRule, PatternRule, Rule, ScannerRule, coerce_rule
from tinta.utils.logger import get_logger

logger = get_logger(__name__)

_IDENTIFIER_CHAR = re.compile(r"\w")


def extract(rule: Rule | object, source: str, *, token_type: str = "") -> tuple[HighlightRange, ...]:
    """Extract ranges for a single rule.

    Args:
        rule: A Rule, or a raw profile value that coerce_rule understands
        source: Text to tokenize
        token_type: Profile entry name, used in diagnostics

    Returns:
        Ranges sorted by start offset. Pattern and keyword rules never
        produce overlapping ranges; scanner ranges may overlap.
    """
    label = token_type or "<unnamed>"
    try:
        rule = coerce_rule(label, rule)
    except MalformedRuleError as e:
        logger.warning("%s", e)
        _record_failure()
        return ()

    if isinstance(rule, InertRule):
        return ()
    if isinstance(rule, ScannerRule):
        return _scan_ranges(rule, source, label)

    try:
        if isinstance(rule, PatternRule):
            return _match_ranges(rule.pattern, source)
        pattern = keyword_pattern(rule.words)
        if pattern is None:
            return ()
        return _match_ranges(pattern, source)
    except Exception as e:
        error = MalformedRuleError(label, f"{type(e).__name__}: {e}")
        logger.warning("%s", error)
        _record_failure()
        return ()


def extract_all(profile: SyntaxProfile, source: str, *, generation: int = 0) -> HighlightResult:
    """Run every rule of a profile against source, in declaration order.

    Args:
        profile: Syntax profile to apply
        source: Text to tokenize
        generation: RequestGeneration to stamp on the result

    Returns:
        HighlightResult with one entry per declared token type (inert and
        failing types map to an empty tuple)
    """
    acc = get_tokenize_accumulator()
    if acc is not None:
        acc.record_pass(len(source))

    ranges: dict[str, tuple[HighlightRange, ...]] = {}
    for token_type, rule in profile.items():
        found = extract(rule, source, token_type=token_type)
        ranges[token_type] = found
        if acc is not None:
            acc.record_rule(len(found))

    return HighlightResult(source=source, ranges=ranges, generation=generation)


@lru_cache(maxsize=256)
def keyword_pattern(words: tuple[str, ...]) -> re.Pattern[str] | None:
    """Build one alternation matching any word of the list as a whole word.

    Duplicates are removed and longer words are tried first. Words that
    contain identifier characters are guarded by ``(?<!\\w)`` and ``(?!\\w)``
    so they never match inside a longer identifier; punctuation-only words
    are matched literally.

    Returns:
        Compiled pattern, or None for an empty word list
    """
    unique = [w for w in dict.fromkeys(words) if w]
    if not unique:
        return None
    unique.sort(key=len, reverse=True)

    alternatives = []
    for word in unique:
        escaped = re.escape(word)
        if _IDENTIFIER_CHAR.search(word):
            escaped = rf"(?<!\w){escaped}(?!\w)"
        alternatives.append(escaped)
    return re.compile("|".join(alternatives))


def _match_ranges(pattern: re.Pattern[str], source: str) -> tuple[HighlightRange, ...]:
    # finditer resumes after each match end, so matches never overlap
    return tuple(
        HighlightRange(m.start(), m.end()) for m in pattern.finditer(source) if m.end() > m.start()
    )


def _scan_ranges(rule: ScannerRule, source: str, token_type: str) -> tuple[HighlightRange, ...]:
    factory = RangeFactory(source)
    try:
        produced = list(rule.scanner(source, factory))
    except Exception as e:
        error = ScannerError(token_type, e)
        logger.warning("%s", error, exc_info=e)
        _record_failure()
        return ()
    return tuple(sorted(_validated(produced, factory, token_type)))


def _validated(
    produced: Iterable[object], factory: RangeFactory, token_type: str
) -> Iterable[HighlightRange]:
    for item in produced:
        if item is None:
            continue
        try:
            if isinstance(item, HighlightRange):
                yield factory.checked(item.start, item.end)
            else:
                start, end = item  # type: ignore[misc]
                yield factory.checked(int(start), int(end))
        except RangeConstructionError as e:
            logger.debug("Scanner '%s': %s", token_type, e)
        except (TypeError, ValueError):
            logger.debug("Scanner '%s' produced a non-range value %r", token_type, item)


def _record_failure() -> None:
    acc = get_tokenize_accumulator()
    if acc is not None:
        acc.record_failure()


__all__ = [
    "extract",
    "extract_all",
    "keyword_pattern",
]
