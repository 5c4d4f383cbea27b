"""
Tinta: Overlapping-range tokenizer for source snippets

Tinta turns a snippet of source text into named, possibly overlapping
character ranges ("string", "keyword", "argument", ...) for render-time
coloring. It never rewrites the text: a renderer paints the ranges, and
where ranges of several token types cover the same character, the type
declared later in the syntax profile wins.

Quick Start:
    >>> from tinta import tokenize
    >>> result = tokenize("x = 'hi'", {"string": r"'[^']*'", "operator": r"="})
    >>> result.texts("string")
    ["'hi'"]

    >>> # Built-in profiles resolve by name
    >>> from tinta import highlight
    >>> result = await highlight("function f(&$a, ...$b) {}", "php")
    >>> result.texts("argument")
    ['$a', '$b']

Live content:
    >>> from tinta import MemoryRenderer, Tokenizer
    >>> renderer = MemoryRenderer()
    >>> tokenizer = Tokenizer(renderer, "python")
    >>> tokenizer.notify("def f(a, b=2): ...")
    >>> await tokenizer.settle()
    >>> renderer.order
    ['argument', 'operator', 'number', 'function', 'keyword']

Built-in profiles: default (HTML/CSS), php, python, javascript.
"""

from collections.abc import Mapping

from tinta.config import (
    TokenizerConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from tinta.errors import (
    MalformedRuleError,
    ProfileLoadError,
    RangeConstructionError,
    ScannerError,
    TintaError,
)
from tinta.extraction import extract, extract_all
from tinta.layering import (
    LayeringResolver,
    MemoryRenderer,
    Renderer,
    resolve_winners,
    visible_spans,
)
from tinta.normalize import normalize_source
from tinta.pipeline import PipelineState, Tokenizer
from tinta.profile import SyntaxProfile
from tinta.ranges import HighlightRange, HighlightResult, RangeFactory
from tinta.registry import (
    ProfileIdentifier,
    ProfileRegistry,
    default_profile,
    get_default_registry,
)
from tinta.rules import INERT, KeywordRule, PatternRule, ScannerRule, coerce_rule
from tinta.scanning import (
    ArgumentGrammar,
    ArgumentScanner,
    javascript_arguments,
    php_arguments,
    python_arguments,
)

__version__ = "0.1.0"


def tokenize(source: str, profile: SyntaxProfile | Mapping[str, object]) -> HighlightResult:
    """Tokenize source synchronously with an in-memory profile.

    No normalization, no loading: the text is tokenized exactly as given.

    Args:
        source: Text to tokenize
        profile: SyntaxProfile, or a mapping of token type -> rule value

    Returns:
        HighlightResult with one entry per declared token type

    Example:
        >>> tokenize("if x", {"keyword": ["if"]}).texts("keyword")
        ['if']
    """
    if not isinstance(profile, SyntaxProfile):
        profile = SyntaxProfile.from_mapping(profile, name="custom")
    return extract_all(profile, source)


async def highlight(
    source: str,
    identifier: ProfileIdentifier = None,
    *,
    registry: ProfileRegistry | None = None,
    normalize: bool | None = None,
) -> HighlightResult:
    """Resolve a profile by identifier and tokenize source with it.

    Args:
        source: Text to tokenize
        identifier: Profile name, location, mapping, SyntaxProfile, or None
            for the default profile
        registry: Profile registry (process-wide default if None)
        normalize: Normalize the text first (active config's setting if None)

    Returns:
        HighlightResult; an unknown profile falls back to the default one
    """
    if registry is None:
        registry = get_default_registry()
    if normalize is None:
        normalize = get_config().normalize
    if normalize:
        source = normalize_source(source)
    profile = await registry.resolve(identifier)
    return extract_all(profile, source)


__all__ = [
    # Main API
    "tokenize",
    "highlight",
    "Tokenizer",
    "PipelineState",
    "__version__",
    # Profiles
    "SyntaxProfile",
    "ProfileRegistry",
    "ProfileIdentifier",
    "default_profile",
    "get_default_registry",
    # Rules
    "INERT",
    "KeywordRule",
    "PatternRule",
    "ScannerRule",
    "coerce_rule",
    # Extraction
    "extract",
    "extract_all",
    "HighlightRange",
    "HighlightResult",
    "RangeFactory",
    # Scanners
    "ArgumentGrammar",
    "ArgumentScanner",
    "javascript_arguments",
    "php_arguments",
    "python_arguments",
    # Layering
    "LayeringResolver",
    "MemoryRenderer",
    "Renderer",
    "resolve_winners",
    "visible_spans",
    # Normalization
    "normalize_source",
    # Configuration
    "TokenizerConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
    # Errors
    "TintaError",
    "MalformedRuleError",
    "ProfileLoadError",
    "RangeConstructionError",
    "ScannerError",
]
