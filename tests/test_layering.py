"""Tests for highlight layering and the in-memory renderer."""

import pytest

from tinta import tokenize
from tinta.layering import (
    LayeringResolver,
    MemoryRenderer,
    Renderer,
    collapse_winners,
    resolve_winners,
    visible_spans,
)
from tinta.ranges import HighlightRange, HighlightResult

SOURCE = '<a x="y">'
TAG = r"<[^>]+>"
STRING = r'"[^"]*"'


class BrokenRenderer(MemoryRenderer):
    def register(self, type_name, ranges) -> None:
        raise RuntimeError("renderer unavailable")


class TestLayeringOrder:
    """Later declarations win where ranges overlap."""

    def test_string_declared_after_tag_wins(self) -> None:
        renderer = MemoryRenderer()
        LayeringResolver(renderer).apply(tokenize(SOURCE, {"tag": TAG, "string": STRING}))

        assert renderer.order == ["tag", "string"]
        assert renderer.winner_at(6) == "string"
        assert renderer.winner_at(1) == "tag"

    def test_reversed_declaration_reverses_winner(self) -> None:
        renderer = MemoryRenderer()
        LayeringResolver(renderer).apply(tokenize(SOURCE, {"string": STRING, "tag": TAG}))

        assert renderer.order == ["string", "tag"]
        assert renderer.winner_at(6) == "tag"

    def test_visible_spans(self) -> None:
        result = tokenize(SOURCE, {"tag": TAG, "string": STRING})
        assert visible_spans(result) == [(0, 5, "tag"), (5, 8, "string"), (8, 9, "tag")]

    def test_renderer_spans_match_explicit_winners(self) -> None:
        result = tokenize(SOURCE, {"tag": TAG, "string": STRING})
        renderer = MemoryRenderer()
        LayeringResolver(renderer).apply(result)
        assert renderer.spans(SOURCE) == visible_spans(result)


class TestLayeringResolver:
    """Each apply replaces the previous registration as a whole."""

    def test_previous_types_are_cleared(self) -> None:
        renderer = MemoryRenderer()
        resolver = LayeringResolver(renderer)

        resolver.apply(tokenize("a1", {"word": r"[a-z]+", "number": r"\d+"}))
        resolver.apply(tokenize("b", {"word": r"[a-z]+", "number": r"\d+"}))

        assert renderer.order == ["word"]
        assert renderer.clear_calls == 2
        assert resolver.registered == ("word",)

    def test_empty_types_are_not_registered(self) -> None:
        renderer = MemoryRenderer()
        LayeringResolver(renderer).apply(
            tokenize("abc", {"number": r"\d+", "comment": None, "word": r"\w+"})
        )
        assert renderer.order == ["word"]
        assert renderer.register_calls == 1

    def test_clear(self) -> None:
        renderer = MemoryRenderer()
        resolver = LayeringResolver(renderer)
        resolver.apply(tokenize("abc", {"word": r"\w+"}))
        resolver.clear()

        assert len(renderer) == 0
        assert resolver.registered == ()

    def test_renderer_errors_propagate(self) -> None:
        resolver = LayeringResolver(BrokenRenderer())
        with pytest.raises(RuntimeError, match="renderer unavailable"):
            resolver.apply(tokenize("abc", {"word": r"\w+"}))

    def test_memory_renderer_satisfies_protocol(self) -> None:
        assert isinstance(MemoryRenderer(), Renderer)


class TestMemoryRenderer:
    def test_reregistering_moves_to_top(self) -> None:
        renderer = MemoryRenderer()
        renderer.register("a", [HighlightRange(0, 2)])
        renderer.register("b", [HighlightRange(0, 2)])
        renderer.register("a", [HighlightRange(0, 2)])

        assert renderer.order == ["b", "a"]
        assert renderer.winner_at(0) == "a"

    def test_uncovered_offset(self) -> None:
        renderer = MemoryRenderer()
        renderer.register("a", [HighlightRange(0, 1)])
        assert renderer.winner_at(5) is None
        assert renderer.ranges("missing") == ()


class TestWinners:
    def test_resolve_winners(self) -> None:
        result = HighlightResult(
            source="abcd",
            ranges={"x": (HighlightRange(0, 3),), "y": (HighlightRange(2, 4),)},
        )
        assert resolve_winners(result) == ["x", "x", "y", "y"]

    def test_gaps_are_none(self) -> None:
        result = HighlightResult(source="a b", ranges={"w": (HighlightRange(0, 1),)})
        assert resolve_winners(result) == ["w", None, None]
        assert visible_spans(result) == [(0, 1, "w")]

    def test_collapse_winners(self) -> None:
        assert collapse_winners(["a", "a", None, "b", "a"]) == [
            (0, 2, "a"),
            (3, 4, "b"),
            (4, 5, "a"),
        ]
        assert collapse_winners([]) == []
