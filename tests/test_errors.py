"""Tests for error construction and formatting."""

import pytest

from tinta.errors import (
    MalformedRuleError,
    ProfileLoadError,
    RangeConstructionError,
    ScannerError,
    TintaError,
)


class TestErrorFormatting:
    """Each error names what failed and where."""

    def test_malformed_rule(self) -> None:
        err = MalformedRuleError("keyword", "unsupported value of type int")
        assert str(err) == "Invalid syntax definition for 'keyword': unsupported value of type int"
        assert err.token_type == "keyword"

    def test_scanner_error(self) -> None:
        cause = IndexError("string index out of range")
        err = ScannerError("argument", cause)
        assert str(err) == "Scanner for 'argument' failed: IndexError: string index out of range"
        assert err.cause is cause

    def test_profile_load_error_with_location(self) -> None:
        err = ProfileLoadError("php", "resource not found", "/srv/syntax.php.py")
        assert str(err) == (
            "Could not load syntax profile 'php' (/srv/syntax.php.py): resource not found"
        )
        assert err.identifier == "php"
        assert err.location == "/srv/syntax.php.py"

    def test_profile_load_error_location_same_as_identifier(self) -> None:
        err = ProfileLoadError("./x.json", "invalid json", "./x.json")
        assert str(err) == "Could not load syntax profile './x.json': invalid json"

    def test_range_construction_error(self) -> None:
        err = RangeConstructionError(3, 9, 5)
        assert str(err) == "Range [3, 9) is invalid for text of length 5"
        assert (err.start, err.end, err.length) == (3, 9, 5)


class TestHierarchy:
    @pytest.mark.parametrize(
        "err",
        [
            MalformedRuleError("x", "y"),
            ScannerError("x", ValueError()),
            ProfileLoadError("x", "y"),
            RangeConstructionError(0, 0, 0),
        ],
    )
    def test_all_errors_share_base(self, err: Exception) -> None:
        assert isinstance(err, TintaError)
        with pytest.raises(TintaError):
            raise err
