"""ContextVar-based tokenizer configuration for Tinta.

Provides context-local configuration using Python's ContextVars (PEP 567).
A Tokenizer or ProfileRegistry created without an explicit config reads the
active one at construction time.

Usage:
    from tinta.config import TokenizerConfig, config_context

    with config_context(TokenizerConfig(profile_base="./syntaxes")):
        tokenizer = Tokenizer(renderer, "php")

    # Or set it for the whole context
    set_config(TokenizerConfig(debounce_delay=0.05))
    try:
        ...
    finally:
        reset_config()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path

BUILTIN_PROFILE_DIR = Path(__file__).parent / "syntaxes"


@dataclass(frozen=True, slots=True)
class TokenizerConfig:
    """Immutable tokenizer configuration.

    Attributes:
        debounce_delay: Seconds to wait after a content-change trigger
            before running the pipeline. Triggers within the window collapse
            into one run.
        profile_base: Directory (or URL prefix) that bare profile names are
            resolved against. None means the built-in syntaxes directory.
        profile_extension: File extension for bare profile names
            (``syntax.<name>.<ext>``).
        normalize: Normalize line endings and indentation before tokenizing.

    """

    debounce_delay: float = 0.01
    profile_base: str | None = None
    profile_extension: str = "py"
    normalize: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "TokenizerConfig":
        """Create TokenizerConfig from dictionary.

        Only includes keys that are valid TokenizerConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = TokenizerConfig.from_dict({
            ...     "debounce_delay": 0.05,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.debounce_delay
            0.05

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    @property
    def base_location(self) -> str:
        """Location bare profile names are resolved against."""
        if self.profile_base is None:
            return str(BUILTIN_PROFILE_DIR)
        return self.profile_base


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: TokenizerConfig = TokenizerConfig()

_tokenizer_config: ContextVar[TokenizerConfig] = ContextVar(
    "tokenizer_config",
    default=_DEFAULT_CONFIG,
)


def get_config() -> TokenizerConfig:
    """Get the active tokenizer configuration for this context."""
    return _tokenizer_config.get()


def set_config(config: TokenizerConfig) -> None:
    """Set tokenizer configuration for the current context."""
    _tokenizer_config.set(config)


def reset_config() -> None:
    """Reset to the default configuration."""
    _tokenizer_config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: TokenizerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with config_context(TokenizerConfig(normalize=False)):
        ...     get_config().normalize
        False

    """
    previous = _tokenizer_config.get()
    _tokenizer_config.set(config)
    try:
        yield
    finally:
        _tokenizer_config.set(previous)


__all__ = [
    "BUILTIN_PROFILE_DIR",
    "TokenizerConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
]
