"""Tests for rule coercion and syntax profiles."""

import re

import pytest

from tinta.errors import MalformedRuleError
from tinta.profile import SyntaxProfile
from tinta.rules import (
    INERT,
    InertRule,
    KeywordRule,
    PatternRule,
    ScannerRule,
    coerce_rule,
    compile_flags,
)
from tinta.scanning import php_arguments, python_arguments


class TestCoerceRule:
    """Raw profile values map onto the closed set of rule kinds."""

    def test_compiled_pattern(self) -> None:
        pattern = re.compile(r"\d+")
        assert coerce_rule("number", pattern) == PatternRule(pattern)

    def test_pattern_string(self) -> None:
        rule = coerce_rule("number", r"\d+")
        assert isinstance(rule, PatternRule)
        assert rule.pattern.pattern == r"\d+"

    def test_pattern_mapping_with_flags(self) -> None:
        rule = coerce_rule("tag", {"pattern": "<b>", "flags": "im"})
        assert isinstance(rule, PatternRule)
        assert rule.pattern.flags & re.IGNORECASE
        assert rule.pattern.flags & re.MULTILINE

    def test_keyword_list(self) -> None:
        assert coerce_rule("keyword", ["if", "else"]) == KeywordRule(("if", "else"))
        assert coerce_rule("keyword", ("if",)) == KeywordRule(("if",))

    def test_callable(self) -> None:
        rule = coerce_rule("argument", php_arguments)
        assert rule == ScannerRule(php_arguments)

    def test_named_builtin_scanner(self) -> None:
        rule = coerce_rule("argument", {"scanner": "python"})
        assert isinstance(rule, ScannerRule)
        assert rule.scanner is python_arguments

    def test_inert_values(self) -> None:
        assert coerce_rule("comment", None) is INERT
        assert coerce_rule("comment", False) is INERT
        assert isinstance(INERT, InertRule)

    def test_rules_pass_through(self) -> None:
        rule = KeywordRule(("x",))
        assert coerce_rule("keyword", rule) is rule

    def test_keyword_words_become_a_tuple(self) -> None:
        rule = KeywordRule(["if", "else"])
        assert rule.words == ("if", "else")
        assert rule == KeywordRule(("if", "else"))

    @pytest.mark.parametrize(
        "value",
        [
            42,
            3.5,
            True,
            ["if", 3],
            ["if", ""],
            {"flags": "i"},
            {"pattern": 5},
            {"pattern": "x", "flags": "q"},
            {"scanner": "cobol"},
            "[unclosed",
            re.compile(b"a"),
            PatternRule(re.compile(b"a")),
        ],
    )
    def test_malformed_values(self, value: object) -> None:
        with pytest.raises(MalformedRuleError) as exc_info:
            coerce_rule("entry", value)
        assert exc_info.value.token_type == "entry"
        assert str(exc_info.value).startswith("Invalid syntax definition for 'entry'")


class TestCompileFlags:
    def test_known_letters(self) -> None:
        assert compile_flags("is") == re.IGNORECASE | re.DOTALL

    def test_global_flag_is_ignored(self) -> None:
        assert compile_flags("g") == re.RegexFlag(0)

    def test_unknown_letter(self) -> None:
        with pytest.raises(ValueError, match="unsupported regex flag"):
            compile_flags("iy")


class TestScannerRuleName:
    def test_named_scanner(self) -> None:
        def my_scanner(source, factory):
            return []

        assert ScannerRule(my_scanner).name == "my_scanner"

    def test_callable_object(self) -> None:
        assert ScannerRule(php_arguments).name == "ArgumentScanner('php')"


class TestSyntaxProfile:
    """Ordered, immutable profiles."""

    def test_preserves_declaration_order(self) -> None:
        profile = SyntaxProfile.from_mapping(
            {"string": r'"[^"]*"', "keyword": ["if"], "argument": php_arguments}
        )
        assert profile.names == ("string", "keyword", "argument")
        assert list(profile) == ["string", "keyword", "argument"]

    def test_rules_are_coerced(self) -> None:
        profile = SyntaxProfile.from_mapping({"keyword": ["if"], "comment": None})
        assert profile.get("keyword") == KeywordRule(("if",))
        assert profile.get("comment") is INERT

    def test_malformed_entry_keeps_its_slot(self) -> None:
        profile = SyntaxProfile.from_mapping({"a": r"x", "bad": 42, "c": r"y"})
        assert profile.names == ("a", "bad", "c")
        assert profile.get("bad") == 42

    def test_membership_and_length(self) -> None:
        profile = SyntaxProfile.from_mapping({"a": r"x", "b": None}, name="demo")
        assert "a" in profile
        assert "z" not in profile
        assert len(profile) == 2
        assert profile.name == "demo"
        assert profile.get("z") is None

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(ValueError, match="declared twice"):
            SyntaxProfile((("a", INERT), ("a", INERT)))

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            SyntaxProfile((("", INERT),))

    def test_empty_profile(self) -> None:
        profile = SyntaxProfile.empty("nothing")
        assert len(profile) == 0
        assert profile.items() == ()

    def test_repr(self) -> None:
        profile = SyntaxProfile.from_mapping({"a": None}, name="demo")
        assert repr(profile) == "SyntaxProfile('demo', ['a'])"
