"""Profile registry: resolving identifiers to cached syntax profiles.

Identifiers come in three shapes:

- None, "", "html", "default": the built-in default profile
- a literal profile (SyntaxProfile or mapping): used directly; mappings are
  converted once and cached under their identity
- a name or location string: looked up in the cache, otherwise located and
  loaded exactly once

Location convention: path-like identifiers (``./x``, ``/x``, ``http...``)
are used verbatim; a bare name ``X`` maps to ``syntax.X.<ext>`` under the
configured base location.

Concurrent resolves of the same name share one in-flight load. A failed
load logs a warning and caches the default profile under that name, so a
missing resource is not fetched again until invalidate() is called.

Thread Safety:
The cache is append-only and is meant to be used from one event loop.
Profiles themselves are immutable and safe to share.

Example:
    >>> registry = ProfileRegistry()
    >>> profile = await registry.resolve("php")
    >>> "argument" in profile
    True
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path

from tinta.config import TokenizerConfig, get_config
from tinta.errors import ProfileLoadError
from tinta.loaders import is_path_like, is_remote, load_profile_resource
from tinta.profile import SyntaxProfile
from tinta.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ALIASES = frozenset({"", "html", "default"})

ProfileIdentifier = str | Mapping[str, object] | SyntaxProfile | None
Loader = Callable[[str, str], Awaitable[Mapping[str, object]]]


async def load_in_thread(location: str, identifier: str) -> Mapping[str, object]:
    """Default loader: read the resource on a worker thread."""
    return await asyncio.to_thread(load_profile_resource, location, identifier)


class ProfileRegistry:
    """Async, coalescing cache of syntax profiles.

    Args:
        config: Supplies the base location and extension for bare names
            (active context config if None)
        loader: Coroutine function ``(location, identifier) -> mapping``;
            defaults to reading files or URLs on a worker thread
    """

    __slots__ = ("_config", "_loader", "_profiles", "_literals", "_inflight")

    def __init__(
        self,
        config: TokenizerConfig | None = None,
        *,
        loader: Loader | None = None,
    ) -> None:
        self._config = config if config is not None else get_config()
        self._loader = loader if loader is not None else load_in_thread
        self._profiles: dict[str, SyntaxProfile] = {}
        # id(mapping) -> (mapping, profile); the mapping is kept alive so ids stay unique
        self._literals: dict[int, tuple[object, SyntaxProfile]] = {}
        self._inflight: dict[str, asyncio.Future[SyntaxProfile]] = {}

    @property
    def config(self) -> TokenizerConfig:
        return self._config

    async def resolve(self, identifier: ProfileIdentifier) -> SyntaxProfile:
        """Resolve an identifier to a profile. Never raises for bad input.

        Suspends only when a named profile is neither cached nor already
        loading; concurrent callers for the same name await one load.
        """
        if isinstance(identifier, SyntaxProfile):
            return identifier
        if identifier is None or (isinstance(identifier, str) and identifier in DEFAULT_ALIASES):
            return default_profile()
        if isinstance(identifier, Mapping):
            return self._literal(identifier)
        if not isinstance(identifier, str):
            logger.warning(
                "Unsupported profile identifier of type %s; using the default profile",
                type(identifier).__name__,
            )
            return default_profile()

        cached = self._profiles.get(identifier)
        if cached is not None:
            return cached

        pending = self._inflight.get(identifier)
        if pending is None:
            pending = asyncio.ensure_future(self._load(identifier))
            self._inflight[identifier] = pending
        # A cancelled waiter must not cancel the load other waiters share
        return await asyncio.shield(pending)

    def locate(self, identifier: str) -> str:
        """Resource location for a profile identifier."""
        if is_path_like(identifier):
            return identifier
        filename = f"syntax.{identifier}.{self._config.profile_extension}"
        base = self._config.base_location
        if is_remote(base):
            return f"{base.rstrip('/')}/{filename}"
        return str(Path(base) / filename)

    def cached(self, identifier: ProfileIdentifier) -> SyntaxProfile | None:
        """Cached profile for identifier, without loading."""
        if isinstance(identifier, Mapping):
            entry = self._literals.get(id(identifier))
            return entry[1] if entry is not None and entry[0] is identifier else None
        if isinstance(identifier, str):
            return self._profiles.get(identifier)
        return None

    def invalidate(self, identifier: ProfileIdentifier = None) -> None:
        """Drop one cached profile, or every cached profile when None.

        In-flight loads are not affected.
        """
        if identifier is None:
            self._profiles.clear()
            self._literals.clear()
        elif isinstance(identifier, Mapping):
            self._literals.pop(id(identifier), None)
        elif isinstance(identifier, str):
            self._profiles.pop(identifier, None)

    def is_loading(self, identifier: str) -> bool:
        return identifier in self._inflight

    async def _load(self, identifier: str) -> SyntaxProfile:
        location = self.locate(identifier)
        try:
            raw = await self._loader(location, identifier)
            profile = SyntaxProfile.from_mapping(raw, name=identifier)
        except ProfileLoadError as e:
            logger.warning("%s. Reverting to default.", e)
            profile = default_profile()
        except Exception as e:
            logger.warning(
                "Could not load syntax profile '%s' (%s): %s: %s. Reverting to default.",
                identifier,
                location,
                type(e).__name__,
                e,
            )
            profile = default_profile()
        else:
            logger.debug("Loaded syntax profile '%s' from %s", identifier, location)
        finally:
            self._inflight.pop(identifier, None)

        return self._profiles.setdefault(identifier, profile)

    def _literal(self, mapping: Mapping[str, object]) -> SyntaxProfile:
        key = id(mapping)
        entry = self._literals.get(key)
        if entry is not None and entry[0] is mapping:
            return entry[1]
        try:
            profile = SyntaxProfile.from_mapping(mapping, name="custom")
        except ValueError as e:
            logger.warning("Invalid literal syntax profile: %s. Reverting to default.", e)
            profile = default_profile()
        self._literals[key] = (mapping, profile)
        return profile

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier in self._profiles

    def __len__(self) -> int:
        return len(self._profiles) + len(self._literals)


_DEFAULT_PROFILE: SyntaxProfile | None = None


def default_profile() -> SyntaxProfile:
    """The built-in fallback profile (HTML and CSS oriented), cached."""
    global _DEFAULT_PROFILE
    if _DEFAULT_PROFILE is None:
        from tinta.syntaxes.default import DEFAULT_SYNTAX

        _DEFAULT_PROFILE = SyntaxProfile.from_mapping(DEFAULT_SYNTAX, name="default")
    return _DEFAULT_PROFILE


# Cached singleton shared by tokenizers created without a registry
_DEFAULT_REGISTRY: ProfileRegistry | None = None


def get_default_registry() -> ProfileRegistry:
    """Process-wide shared registry (created with the active config)."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = ProfileRegistry()
    return _DEFAULT_REGISTRY


__all__ = [
    "DEFAULT_ALIASES",
    "Loader",
    "ProfileIdentifier",
    "ProfileRegistry",
    "default_profile",
    "get_default_registry",
    "load_in_thread",
]
