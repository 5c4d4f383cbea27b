"""Exception classes for Tinta.

Every failure kind is raised inside the component where it happens and
contained at that component's boundary: the pipeline logs it and carries on
with the remaining rules, ranges, or the default profile.
"""

from __future__ import annotations


class TintaError(Exception):
    """Base exception for all Tinta errors.

    Subclass this for specific error categories.
    """

    pass


class MalformedRuleError(TintaError):
    """A profile entry is none of the recognized rule kinds.

    Contained by the extraction engine: only the offending token type is
    skipped.
    """

    def __init__(self, token_type: str, message: str) -> None:
        """Initialize malformed rule error.

        Args:
            token_type: Name of the profile entry (e.g., "keyword")
            message: Description of what was wrong with the value
        """
        self.token_type = token_type
        super().__init__(f"Invalid syntax definition for '{token_type}': {message}")


class ScannerError(TintaError):
    """A custom scanner raised while producing ranges."""

    def __init__(self, token_type: str, cause: BaseException) -> None:
        """Initialize scanner error.

        Args:
            token_type: Name of the profile entry whose scanner failed
            cause: The exception raised by the scanner
        """
        self.token_type = token_type
        self.cause = cause
        super().__init__(
            f"Scanner for '{token_type}' failed: {type(cause).__name__}: {cause}"
        )


class ProfileLoadError(TintaError):
    """A syntax profile resource could not be found or has an invalid export.

    Contained by the profile registry, which falls back to the default
    profile.
    """

    def __init__(
        self,
        identifier: str,
        message: str,
        location: str | None = None,
    ) -> None:
        """Initialize profile load error.

        Args:
            identifier: Profile identifier as requested by the caller
            message: Description of the failure
            location: Resolved resource location (optional)
        """
        self.identifier = identifier
        self.location = location

        where = f" ({location})" if location and location != identifier else ""
        super().__init__(f"Could not load syntax profile '{identifier}'{where}: {message}")


class RangeConstructionError(TintaError):
    """Computed offsets fall outside the source text or are empty."""

    def __init__(self, start: int, end: int, length: int) -> None:
        """Initialize range construction error.

        Args:
            start: Requested start offset
            end: Requested end offset
            length: Length of the source text
        """
        self.start = start
        self.end = end
        self.length = length
        super().__init__(f"Range [{start}, {end}) is invalid for text of length {length}")
