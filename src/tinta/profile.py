"""Syntax profiles: ordered, immutable token-type -> rule mappings.

Declaration order is rendering priority. A token type declared later wins
wherever its ranges overlap an earlier one, so a profile is never sorted or
otherwise reordered after it is authored.

Thread Safety:
SyntaxProfile is immutable after creation. Safe to share across tokenizers.

Example:
    >>> profile = SyntaxProfile.from_mapping({
    ...     "keyword": ["def", "return"],
    ...     "string": r"'[^']*'",
    ... }, name="mini")
    >>> profile.names
    ('keyword', 'string')
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from tinta.errors import MalformedRuleError
from tinta.rules import Rule, coerce_rule
from tinta.utils.logger import get_logger

logger = get_logger(__name__)


class SyntaxProfile:
    """Immutable ordered mapping of token type names to rules.

    Entries whose raw value is not a recognized rule kind are kept in their
    declared slot as-is; the extraction engine reports them on every pass
    and skips them.
    """

    __slots__ = ("_name", "_entries", "_index")

    def __init__(self, entries: tuple[tuple[str, Rule | object], ...], name: str = "") -> None:
        """Initialize profile from ordered entries.

        Use from_mapping() to build from raw profile values.

        Raises:
            ValueError: If a token type name is repeated or empty
        """
        index: dict[str, Rule | object] = {}
        for token_type, rule in entries:
            if not isinstance(token_type, str) or not token_type:
                raise ValueError(f"token type names must be non-empty strings, got {token_type!r}")
            if token_type in index:
                raise ValueError(f"token type '{token_type}' declared twice")
            index[token_type] = rule
        self._name = name
        self._entries = entries
        self._index = index

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object], name: str = "") -> SyntaxProfile:
        """Build a profile from raw values, preserving mapping order.

        Args:
            mapping: TokenTypeName -> raw rule value (pattern, keyword list,
                scanner callable, data-file form, or None)
            name: Identifier used in diagnostics

        Returns:
            New SyntaxProfile
        """
        entries: list[tuple[str, Rule | object]] = []
        for token_type, value in mapping.items():
            try:
                rule: Rule | object = coerce_rule(token_type, value)
            except MalformedRuleError as e:
                logger.debug("Profile %r keeps malformed entry: %s", name or "<literal>", e)
                rule = value
            entries.append((token_type, rule))
        return cls(tuple(entries), name=name)

    @classmethod
    def empty(cls, name: str = "") -> SyntaxProfile:
        """A profile with no rules; tokenizes to an empty result."""
        return cls((), name=name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def names(self) -> tuple[str, ...]:
        """Token type names in declaration order."""
        return tuple(token_type for token_type, _ in self._entries)

    def get(self, token_type: str) -> Rule | object | None:
        """Rule for token_type, or None if not declared."""
        return self._index.get(token_type)

    def items(self) -> tuple[tuple[str, Rule | object], ...]:
        """(token_type, rule) pairs in declaration order."""
        return self._entries

    def __contains__(self, token_type: object) -> bool:
        return token_type in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        label = self._name or "<literal>"
        return f"SyntaxProfile({label!r}, {list(self.names)!r})"


__all__ = [
    "SyntaxProfile",
]
