"""Highlight ranges and tokenization results.

HighlightRange is the unit every rule produces: a half-open ``[start, end)``
interval of character offsets into the exact text that was tokenized.

Thread Safety:
HighlightRange and HighlightResult are frozen and safe to share.
RangeFactory is bound to one source string and holds no mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from tinta.errors import RangeConstructionError
from tinta.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True, order=True)
class HighlightRange:
    """Half-open character interval attributed to one token type.

    Ordering is by ``(start, end)`` so sorted() yields document order.

    Attributes:
        start: Offset of the first character (0-indexed)
        end: Offset one past the last character; always > start

    Example:
        >>> r = HighlightRange(4, 7)
        >>> len(r)
        3
        >>> r.text("def foo(a)")
        'foo'

    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"invalid range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        """Return the slice of source covered by this range."""
        return source[self.start : self.end]

    def overlaps(self, other: HighlightRange) -> bool:
        """True if the two ranges share at least one character."""
        return self.start < other.end and other.start < self.end


class RangeFactory:
    """Bounds-checked range constructor handed to custom scanners.

    Scanners receive one of these alongside the source text. ``make`` never
    raises: offsets outside the text or empty spans are logged and dropped.

    Example:
        >>> factory = RangeFactory("abc")
        >>> factory.make(0, 2)
        HighlightRange(start=0, end=2)
        >>> factory.make(2, 2) is None
        True
    """

    __slots__ = ("_length",)

    def __init__(self, source: str) -> None:
        self._length = len(source)

    @property
    def length(self) -> int:
        """Length of the bound source text."""
        return self._length

    def make(self, start: int, end: int) -> HighlightRange | None:
        """Create a range, or None when the offsets are unusable."""
        try:
            return self.checked(start, end)
        except RangeConstructionError as e:
            logger.debug("Dropping range: %s", e)
            return None

    def checked(self, start: int, end: int) -> HighlightRange:
        """Create a range or raise RangeConstructionError."""
        if start < 0 or end <= start or end > self._length:
            raise RangeConstructionError(start, end, self._length)
        return HighlightRange(start, end)


@dataclass(frozen=True, slots=True)
class HighlightResult:
    """Ranges produced for one tokenization pass.

    Token types appear in profile declaration order; that order is the
    layering priority (later wins where ranges overlap).

    Attributes:
        source: The exact text that was tokenized
        ranges: TokenTypeName -> ranges sorted by start offset
        generation: RequestGeneration of the pipeline run (0 outside a pipeline)

    """

    source: str
    ranges: Mapping[str, tuple[HighlightRange, ...]] = field(default_factory=dict)
    generation: int = 0

    @property
    def token_types(self) -> tuple[str, ...]:
        """Token type names in declaration order."""
        return tuple(self.ranges)

    def get(self, token_type: str) -> tuple[HighlightRange, ...]:
        """Ranges for token_type (empty if the type produced nothing)."""
        return self.ranges.get(token_type, ())

    def texts(self, token_type: str) -> list[str]:
        """Substrings covered by token_type, in document order."""
        return [r.text(self.source) for r in self.get(token_type)]

    def total(self) -> int:
        """Number of ranges across all token types."""
        return sum(len(rs) for rs in self.ranges.values())

    def __iter__(self) -> Iterator[tuple[str, tuple[HighlightRange, ...]]]:
        return iter(self.ranges.items())

    def __len__(self) -> int:
        return len(self.ranges)


__all__ = [
    "HighlightRange",
    "HighlightResult",
    "RangeFactory",
]
