"""Reactive tokenization pipeline.

A Tokenizer turns text snapshots into applied highlights:

    notify(text) -> (debounce) -> normalize -> no-op check -> new generation
        -> resolve profile (the only suspension point) -> extract -> apply

Each pass takes a generation number. Any pass whose generation is no longer
the newest when the profile resolves is discarded, so highlights are only
ever applied in increasing generation order and a slow profile load can
never overwrite a newer result.

Failures never reach callers: profile loading falls back to the default
profile inside the registry, rule failures are contained by extraction, and
a failing renderer is logged while the previous result is re-registered.

Example:
    >>> renderer = MemoryRenderer()
    >>> tokenizer = Tokenizer(renderer, "python")
    >>> result = await tokenizer.run("def f(a, b=1): pass")
    >>> result.texts("argument")
    ['a', 'b']
"""

from __future__ import annotations

import asyncio
from enum import Enum, auto

from tinta.config import TokenizerConfig, get_config
from tinta.extraction import extract_all
from tinta.layering import LayeringResolver, Renderer
from tinta.normalize import normalize_source
from tinta.ranges import HighlightResult
from tinta.registry import ProfileIdentifier, ProfileRegistry, get_default_registry
from tinta.utils.logger import get_logger

logger = get_logger(__name__)


class PipelineState(Enum):
    """Where the most recent pass currently is."""

    IDLE = auto()
    NORMALIZING = auto()
    RESOLVING_PROFILE = auto()
    EXTRACTING = auto()
    APPLYING = auto()
    CANCELLED = auto()


class Tokenizer:
    """Debounced, generation-ordered tokenizer bound to one renderer.

    Args:
        renderer: Receives ``register``/``clear_all`` calls for each applied result
        profile: Profile identifier (name, location, mapping, SyntaxProfile,
            or None for the default profile)
        registry: Profile registry (process-wide default registry if None)
        config: Tokenizer configuration (active context config if None)

    Thread Safety:
        Not thread-safe. Use one Tokenizer per event loop.
    """

    __slots__ = (
        "_config",
        "_registry",
        "_resolver",
        "_profile",
        "_text",
        "_state",
        "_generation",
        "_applied_generation",
        "_applied_text",
        "_last_result",
        "_pending",
        "_tasks",
        "_closed",
    )

    def __init__(
        self,
        renderer: Renderer,
        profile: ProfileIdentifier = None,
        *,
        registry: ProfileRegistry | None = None,
        config: TokenizerConfig | None = None,
    ) -> None:
        self._config = config if config is not None else get_config()
        self._registry = registry if registry is not None else get_default_registry()
        self._resolver = LayeringResolver(renderer)
        self._profile = profile
        self._text = ""
        self._state = PipelineState.IDLE
        self._generation = 0
        self._applied_generation = 0
        self._applied_text: str | None = None
        self._last_result: HighlightResult | None = None
        self._pending: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[HighlightResult | None]] = set()
        self._closed = False

    @property
    def text(self) -> str:
        """Latest normalized text, updated even when a pass fails."""
        return self._text

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_result(self) -> HighlightResult | None:
        """The result currently registered with the renderer."""
        return self._last_result

    @property
    def profile(self) -> ProfileIdentifier:
        return self._profile

    @property
    def registry(self) -> ProfileRegistry:
        return self._registry

    def notify(self, raw_text: str) -> None:
        """Schedule a pass for raw_text after the debounce delay.

        Triggers arriving within the delay replace each other; only the
        latest snapshot is tokenized. Must be called with a running loop.
        """
        if self._closed:
            return
        loop = asyncio.get_running_loop()
        if self._pending is not None:
            self._pending.cancel()
        self._pending = loop.call_later(self._config.debounce_delay, self._fire, raw_text)

    async def run(self, raw_text: str) -> HighlightResult | None:
        """Run one pass immediately.

        Returns:
            The applied result, or None when the pass was a no-op, was
            superseded by a newer pass, or could not be applied
        """
        if self._closed:
            return None

        self._state = PipelineState.NORMALIZING
        text = normalize_source(raw_text) if self._config.normalize else raw_text
        self._text = text

        if text == self._applied_text:
            if self._generation > self._applied_generation:
                # A pass for other text is still in flight; the applied one is current again
                self._generation += 1
            self._state = PipelineState.IDLE
            return None

        self._generation += 1
        generation = self._generation

        self._state = PipelineState.RESOLVING_PROFILE
        profile = await self._registry.resolve(self._profile)

        if generation != self._generation:
            logger.debug(
                "Discarding pass %d; generation %d is newer", generation, self._generation
            )
            self._state = PipelineState.CANCELLED
            return None

        self._state = PipelineState.EXTRACTING
        result = extract_all(profile, text, generation=generation)

        # Passes are synchronous from here on, so this only guards the invariant
        if generation <= self._applied_generation:
            self._state = PipelineState.CANCELLED
            return None

        self._state = PipelineState.APPLYING
        try:
            self._resolver.apply(result)
        except Exception as e:
            logger.error(
                "Renderer failed to apply generation %d: %s: %s",
                generation,
                type(e).__name__,
                e,
                exc_info=True,
            )
            self._restore()
            self._state = PipelineState.IDLE
            return None

        self._applied_text = text
        self._applied_generation = generation
        self._last_result = result
        self._state = PipelineState.IDLE
        return result

    async def settle(self) -> None:
        """Wait until no debounced trigger or pass is outstanding."""
        loop = asyncio.get_running_loop()
        while self._pending is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*tuple(self._tasks), return_exceptions=True)
            elif self._pending is not None:
                await asyncio.sleep(max(0.0, self._pending.when() - loop.time()))
                # Let the timer callback run before re-checking
                await asyncio.sleep(0)

    def set_profile(self, profile: ProfileIdentifier) -> None:
        """Switch profile; the next pass re-tokenizes even unchanged text."""
        self._profile = profile
        self._applied_text = None

    def close(self) -> None:
        """Cancel outstanding work and remove every applied highlight."""
        self._closed = True
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        for task in tuple(self._tasks):
            task.cancel()
        self._tasks.clear()
        # Any pass still awaiting its profile becomes stale
        self._generation += 1
        try:
            self._resolver.clear()
        except Exception as e:
            logger.warning("Renderer failed to clear highlights: %s: %s", type(e).__name__, e)
        self._applied_text = None
        self._last_result = None
        self._state = PipelineState.IDLE

    @property
    def closed(self) -> bool:
        return self._closed

    def _fire(self, raw_text: str) -> None:
        self._pending = None
        task = asyncio.ensure_future(self.run(raw_text))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _restore(self) -> None:
        if self._last_result is None:
            return
        try:
            self._resolver.apply(self._last_result)
        except Exception as e:
            logger.warning(
                "Could not restore generation %d: %s: %s",
                self._last_result.generation,
                type(e).__name__,
                e,
            )

    def __repr__(self) -> str:
        return (
            f"Tokenizer(profile={self._profile!r}, generation={self._generation}, "
            f"state={self._state.name})"
        )


__all__ = [
    "PipelineState",
    "Tokenizer",
]
