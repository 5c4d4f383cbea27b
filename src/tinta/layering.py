"""Highlight layering: resolving overlapping ranges across token types.

Declaration order is priority order. A token type declared later in the
profile visually overrides an earlier one wherever their ranges overlap.

Two ways to honor that rule:

1. Registration order (LayeringResolver). Each type's ranges are registered
   with the renderer in declaration order, and the renderer composites
   "last registered wins". Every pass first clears everything this
   resolver registered before, so stale ranges never bleed into a new
   result.
2. Explicit winners (resolve_winners / visible_spans). For renderers
   without last-registered-wins compositing, compute the winning token type
   for every character and hand over flat, non-overlapping spans.

Example:
    >>> from tinta import tokenize
    >>> result = tokenize('<a href="x">', {"tag": r"<\\w+", "string": r'"[^"]*"'})
    >>> renderer = MemoryRenderer()
    >>> resolver = LayeringResolver(renderer)
    >>> resolver.apply(result)
    >>> renderer.order
    ['tag', 'string']
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from tinta.ranges import HighlightRange, HighlightResult
from tinta.utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class Renderer(Protocol):
    """Boundary contract of the external highlight renderer.

    Contract:
        - register() for a name that is already registered replaces it
        - where ranges of different names overlap, the name registered
          last wins
        - clear_all() removes every registration made through this renderer
    """

    def register(self, type_name: str, ranges: Sequence[HighlightRange]) -> None:
        """Register the ranges of one token type."""
        ...

    def clear_all(self) -> None:
        """Remove every registered range."""
        ...


class LayeringResolver:
    """Registers a result with a renderer in profile declaration order.

    One resolver belongs to one tokenizer instance. It remembers which
    token types it registered so a pass can be undone or replaced as a
    whole.
    """

    __slots__ = ("_renderer", "_registered")

    def __init__(self, renderer: Renderer) -> None:
        self._renderer = renderer
        self._registered: tuple[str, ...] = ()

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    @property
    def registered(self) -> tuple[str, ...]:
        """Token types registered by the last apply(), in registration order."""
        return self._registered

    def apply(self, result: HighlightResult) -> None:
        """Replace everything registered so far with result.

        Types with no ranges are not registered. Exceptions from the
        renderer propagate; the pipeline decides how to recover.
        """
        self.clear()
        registered: list[str] = []
        for token_type, ranges in result:
            if not ranges:
                continue
            self._renderer.register(token_type, ranges)
            registered.append(token_type)
        self._registered = tuple(registered)
        logger.debug("Registered %d token types: %s", len(registered), ", ".join(registered))

    def clear(self) -> None:
        """Remove every range this resolver registered."""
        self._renderer.clear_all()
        self._registered = ()


def resolve_winners(result: HighlightResult) -> list[str | None]:
    """Winning token type for every character of result.source.

    Later declarations overwrite earlier ones; characters no range covers
    map to None.
    """
    winners: list[str | None] = [None] * len(result.source)
    for token_type, ranges in result:
        for r in ranges:
            end = min(r.end, len(winners))
            winners[r.start : end] = [token_type] * (end - r.start)
    return winners


def collapse_winners(winners: Sequence[str | None]) -> list[tuple[int, int, str]]:
    """Collapse a per-character winner array into ``(start, end, type)`` runs."""
    spans: list[tuple[int, int, str]] = []
    run_start = 0
    current: str | None = None
    for i, winner in enumerate(winners):
        if winner == current:
            continue
        if current is not None:
            spans.append((run_start, i, current))
        run_start = i
        current = winner
    if current is not None:
        spans.append((run_start, len(winners), current))
    return spans


def visible_spans(result: HighlightResult) -> list[tuple[int, int, str]]:
    """Flat, non-overlapping spans of what is actually visible."""
    return collapse_winners(resolve_winners(result))


class MemoryRenderer:
    """In-memory renderer implementing the Renderer contract.

    Keeps registrations in order and composites with last-registered-wins.
    Useful for tests and for callers that want flat spans instead of a
    platform highlight API.

    Thread Safety:
        Not thread-safe. Use one instance per tokenizer.
    """

    __slots__ = ("_layers", "register_calls", "clear_calls")

    def __init__(self) -> None:
        self._layers: dict[str, tuple[HighlightRange, ...]] = {}
        self.register_calls = 0
        self.clear_calls = 0

    def register(self, type_name: str, ranges: Sequence[HighlightRange]) -> None:
        # Re-registering moves the name to the top of the stack
        self._layers.pop(type_name, None)
        self._layers[type_name] = tuple(ranges)
        self.register_calls += 1

    def clear_all(self) -> None:
        self._layers.clear()
        self.clear_calls += 1

    @property
    def order(self) -> list[str]:
        """Registered names, lowest priority first."""
        return list(self._layers)

    def ranges(self, type_name: str) -> tuple[HighlightRange, ...]:
        return self._layers.get(type_name, ())

    def winner_at(self, offset: int) -> str | None:
        """Name that wins at offset under last-registered-wins."""
        for type_name in reversed(self._layers):
            if any(r.start <= offset < r.end for r in self._layers[type_name]):
                return type_name
        return None

    def spans(self, source: str) -> list[tuple[int, int, str]]:
        """Composite the registered layers over source into flat spans."""
        return visible_spans(HighlightResult(source=source, ranges=dict(self._layers)))

    def __len__(self) -> int:
        return len(self._layers)


__all__ = [
    "LayeringResolver",
    "MemoryRenderer",
    "Renderer",
    "collapse_winners",
    "resolve_winners",
    "visible_spans",
]
