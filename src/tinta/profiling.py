"""TokenizeAccumulator: opt-in profiling for tokenization passes.

This module provides accumulated metrics during extraction:
- Number of passes and rules evaluated
- Ranges emitted and rules that failed
- Total source length and elapsed time

Zero overhead when disabled (get_tokenize_accumulator() returns None).

Example:
    from tinta import tokenize
    from tinta.profiling import profiled_tokenize

    with profiled_tokenize() as metrics:
        tokenize(source, profile)

    print(metrics.summary())
    # {"total_ms": 0.4, "passes": 1, "rules": 9, "ranges": 57, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class TokenizeAccumulator:
    """Accumulated metrics during tokenization.

    Attributes:
        start_time: Profiling start timestamp.
        passes: Number of extract_all() calls recorded.
        rules: Number of rules evaluated.
        ranges: Number of ranges emitted.
        failures: Number of rules skipped because of an error.
        source_length: Total length of the sources tokenized.

    """

    start_time: float = field(default_factory=perf_counter)
    passes: int = 0
    rules: int = 0
    ranges: int = 0
    failures: int = 0
    source_length: int = 0

    def record_pass(self, source_length: int) -> None:
        self.passes += 1
        self.source_length += source_length

    def record_rule(self, range_count: int) -> None:
        self.rules += 1
        self.ranges += range_count

    def record_failure(self) -> None:
        self.failures += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of tokenization metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "passes": self.passes,
            "rules": self.rules,
            "ranges": self.ranges,
            "failures": self.failures,
            "source_length": self.source_length,
        }


_accumulator: ContextVar[TokenizeAccumulator | None] = ContextVar(
    "tokenize_accumulator",
    default=None,
)


def get_tokenize_accumulator() -> TokenizeAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_tokenize() -> Iterator[TokenizeAccumulator]:
    """Context manager for profiled tokenization.

    Creates a TokenizeAccumulator and makes it available via
    get_tokenize_accumulator() for the duration of the with block.
    Tasks created inside the block share the same accumulator.

    """
    acc = TokenizeAccumulator()
    token: Token[TokenizeAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = [
    "TokenizeAccumulator",
    "get_tokenize_accumulator",
    "profiled_tokenize",
]
