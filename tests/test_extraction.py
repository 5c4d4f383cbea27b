"""Tests for the extraction engine.

Covers the four rule kinds, failure containment, and the range invariants
that every pattern and keyword rule must uphold.
"""

import re

from hypothesis import given, settings
from hypothesis import strategies as st

from tinta.extraction import extract, extract_all, keyword_pattern
from tinta.profile import SyntaxProfile
from tinta.profiling import profiled_tokenize
from tinta.ranges import HighlightRange
from tinta.rules import INERT, KeywordRule, PatternRule, ScannerRule


def texts(ranges, source: str) -> list[str]:
    return [r.text(source) for r in ranges]


# =========================================================================
# Pattern rules
# =========================================================================


class TestPatternExtraction:
    """Regular expressions applied in find-all mode."""

    def test_all_matches_in_order(self) -> None:
        ranges = extract(PatternRule(re.compile(r"\d+")), "a1 b22")
        assert ranges == (HighlightRange(1, 2), HighlightRange(4, 6))

    def test_string_value_is_compiled(self) -> None:
        source = "x = 'a' + 'b'"
        assert texts(extract(r"'[^']*'", source), source) == ["'a'", "'b'"]

    def test_zero_length_matches_produce_nothing(self) -> None:
        assert extract(re.compile(r"\b"), "two words") == ()
        assert extract(re.compile(r"x*"), "abc") == ()

    def test_no_match(self) -> None:
        assert extract(re.compile(r"\d"), "letters") == ()

    def test_empty_source(self) -> None:
        assert extract(re.compile(r"\w+"), "") == ()

    def test_flags_from_data_form(self) -> None:
        source = "SELECT x"
        rule = {"pattern": "select", "flags": "gi"}
        assert texts(extract(rule, source), source) == ["SELECT"]


# =========================================================================
# Keyword rules
# =========================================================================


class TestKeywordExtraction:
    """Literal words matched as whole words."""

    def test_whole_words_only(self) -> None:
        source = "int if inx in"
        ranges = extract(["if", "in", "int"], source)
        assert ranges == (HighlightRange(0, 3), HighlightRange(4, 6), HighlightRange(11, 13))

    def test_word_inside_identifier_is_skipped(self) -> None:
        source = "classic subclass class"
        assert texts(extract(["class"], source), source) == ["class"]

    def test_longer_word_wins_at_same_position(self) -> None:
        source = "include_once include"
        assert texts(extract(["include", "include_once"], source), source) == [
            "include_once",
            "include",
        ]

    def test_punctuation_words_match_literally(self) -> None:
        source = "a=>b->c"
        assert extract(KeywordRule(("=>", "->")), source) == (
            HighlightRange(1, 3),
            HighlightRange(4, 6),
        )

    def test_sigil_words(self) -> None:
        source = "$this->x; $thisThing"
        assert texts(extract(["$this"], source), source) == ["$this"]

    def test_duplicates_are_harmless(self) -> None:
        source = "if if"
        assert texts(extract(["if", "if"], source), source) == ["if", "if"]

    def test_regex_metacharacters_are_escaped(self) -> None:
        source = "a.b axb"
        assert texts(extract(["a.b"], source), source) == ["a.b"]

    def test_empty_word_list(self) -> None:
        assert extract([], "anything") == ()
        assert keyword_pattern(()) is None

    def test_keyword_pattern_is_cached(self) -> None:
        assert keyword_pattern(("a", "b")) is keyword_pattern(("a", "b"))


# =========================================================================
# Scanner and inert rules
# =========================================================================


class TestScannerExtraction:
    """Procedural scanners and their output validation."""

    def test_scanner_ranges_are_sorted(self) -> None:
        def scanner(source, factory):
            return [factory.make(4, 5), factory.make(0, 2)]

        assert extract(scanner, "abcdef") == (HighlightRange(0, 2), HighlightRange(4, 5))

    def test_tuples_are_accepted(self) -> None:
        assert extract(lambda source, factory: [(1, 3)], "abcd") == (HighlightRange(1, 3),)

    def test_invalid_offsets_are_dropped(self) -> None:
        def scanner(source, factory):
            yield (0, 1)
            yield (2, 2)
            yield (3, 99)
            yield None
            yield "garbage"

        assert extract(scanner, "abcd") == (HighlightRange(0, 1),)

    def test_scanner_ranges_may_overlap(self) -> None:
        ranges = extract(lambda source, factory: [(0, 4), (2, 6)], "abcdefg")
        assert ranges[0].overlaps(ranges[1])

    def test_failing_scanner_is_contained(self, caplog) -> None:
        def scanner(source, factory):
            raise RuntimeError("boom")

        assert extract(ScannerRule(scanner), "abc", token_type="argument") == ()
        assert "Scanner for 'argument' failed: RuntimeError: boom" in caplog.text

    def test_inert_rule(self) -> None:
        assert extract(INERT, "anything") == ()
        assert extract(None, "anything") == ()
        assert extract(False, "anything") == ()


class TestMalformedRules:
    """Malformed entries are skipped with a diagnostic."""

    def test_unsupported_value(self, caplog) -> None:
        assert extract(42, "abc", token_type="number") == ()
        assert "Invalid syntax definition for 'number'" in caplog.text

    def test_invalid_regex_string(self, caplog) -> None:
        assert extract("(unclosed", "abc", token_type="string") == ()
        assert "invalid pattern" in caplog.text

    def test_unknown_scanner_name(self, caplog) -> None:
        assert extract({"scanner": "cobol"}, "abc", token_type="argument") == ()
        assert "unknown scanner 'cobol'" in caplog.text

    def test_bytes_pattern_is_rejected(self, caplog) -> None:
        assert extract(re.compile(b"a"), "abc", token_type="string") == ()
        assert extract(PatternRule(re.compile(b"a")), "abc", token_type="string") == ()
        assert "not bytes" in caplog.text

    def test_keyword_rule_built_from_list(self) -> None:
        source = "if x else y"
        assert texts(extract(KeywordRule(["if", "else"]), source), source) == ["if", "else"]

    def test_unusable_keyword_is_contained(self, caplog) -> None:
        rule = KeywordRule((["if"],))
        assert extract(rule, "if", token_type="keyword") == ()
        assert "Invalid syntax definition for 'keyword': TypeError" in caplog.text

    def test_failure_is_counted(self) -> None:
        with profiled_tokenize() as acc:
            extract(object(), "abc", token_type="bad")
        assert acc.failures == 1


# =========================================================================
# Whole-profile extraction
# =========================================================================


class TestExtractAll:
    """Every declared type, in declaration order."""

    def test_declaration_order_and_empty_types(self) -> None:
        profile = SyntaxProfile.from_mapping(
            {"tag": r"<\w+>", "comment": None, "string": r'"[^"]*"', "number": r"\d+"}
        )
        result = extract_all(profile, '<a>"x"')
        assert result.token_types == ("tag", "comment", "string", "number")
        assert result.get("comment") == ()
        assert result.get("number") == ()
        assert result.texts("string") == ['"x"']

    def test_malformed_entry_does_not_abort_pass(self) -> None:
        profile = SyntaxProfile.from_mapping({"bad": 3.5, "number": r"\d+"})
        result = extract_all(profile, "a 12")
        assert result.get("bad") == ()
        assert result.texts("number") == ["12"]

    def test_generation_is_stamped(self) -> None:
        result = extract_all(SyntaxProfile.empty(), "x", generation=7)
        assert result.generation == 7
        assert len(result) == 0

    def test_source_is_kept_verbatim(self) -> None:
        source = "  a\r\n\tb"
        assert extract_all(SyntaxProfile.empty(), source).source == source


# =========================================================================
# Properties
# =========================================================================

source_text = st.text(alphabet="ab12 _.=", max_size=60)
keyword_words = st.lists(
    st.sampled_from(["a", "ab", "b1", "_a", "12", "==", "."]), min_size=1, max_size=5
)


class TestExtractionProperties:
    """Invariants for any source text."""

    @given(source=source_text)
    @settings(max_examples=100)
    def test_pattern_ranges_are_sorted_disjoint_and_matching(self, source: str) -> None:
        pattern = re.compile(r"\d+|[ab]+")
        ranges = extract(PatternRule(pattern), source)

        for r in ranges:
            assert 0 <= r.start < r.end <= len(source)
            assert pattern.fullmatch(r.text(source))
        for left, right in zip(ranges, ranges[1:]):
            assert left.end <= right.start

    @given(source=source_text, words=keyword_words)
    @settings(max_examples=100)
    def test_keyword_ranges_are_whole_words(self, source: str, words: list[str]) -> None:
        ranges = extract(KeywordRule(tuple(words)), source)

        for r in ranges:
            word = r.text(source)
            assert word in words
            if re.search(r"\w", word):
                before = source[r.start - 1] if r.start > 0 else " "
                after = source[r.end] if r.end < len(source) else " "
                assert not re.match(r"\w", before)
                assert not re.match(r"\w", after)
        for left, right in zip(ranges, ranges[1:]):
            assert left.end <= right.start

    @given(source=source_text)
    @settings(max_examples=50)
    def test_extraction_is_deterministic(self, source: str) -> None:
        profile = SyntaxProfile.from_mapping({"word": r"[ab]+", "kw": ["ab", "12"]})
        assert extract_all(profile, source) == extract_all(profile, source)
