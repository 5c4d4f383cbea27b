"""Parameter-name scanner for function and method signatures.

Finds every definition header in a block of source text and highlights the
*name* of each declared parameter. Type hints, default values, reference and
variadic markers, and decorator or attribute noise are left out.

A parameter list cannot be split with a single regular expression: defaults
may contain nested calls, array and map literals, closures, and quoted
strings with escaped quotes. The scanner therefore:

1. Locates each header with a grammar-specific pattern ending at ``(``.
2. Walks forward one character at a time with a ScanState (paren depth 1,
   bracket and brace depth 0, no active quote), reset for every header.
3. Treats a comma as a separator only at the top level of the list; paren
   depth 0 ends the list and finalizes the last argument.
4. For each non-blank argument, truncates at the first top-level ``=`` seen
   outside strings and comments, then matches the grammar's parameter
   pattern; the ``name`` group becomes the range.

Arguments the parameter pattern does not recognize (destructuring, a bare
``*`` or ``/``) are skipped silently.

Example:
    >>> source = "function foo(&$a, int $b = [1,2], ...$c) {}"
    >>> [r.text(source) for r in php_arguments(source)]
    ['$a', '$b', '$c']

Thread Safety:
Scanners are stateless; each call creates its own ScanState.

"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from tinta.ranges import HighlightRange, RangeFactory
from tinta.scanning.states import Boundary, ScanState


@dataclass(frozen=True, slots=True)
class ArgumentGrammar:
    """Grammar-specific pieces of the argument scanner.

    Attributes:
        name: Grammar identifier ("php", "python", "javascript")
        header: Pattern whose match ends directly after the opening paren
            of a parameter list
        parameter: Pattern searched in the argument text before its default
            value; its ``name`` group is the highlighted identifier
        quotes: Characters that open string literals
        line_comment: Marker that starts a line comment ("" for none)
        block_comment: Opening and closing block comment markers

    """

    name: str
    header: re.Pattern[str]
    parameter: re.Pattern[str]
    quotes: frozenset[str] = frozenset({"'", '"'})
    line_comment: str = ""
    block_comment: tuple[str, str] = ("", "")


PHP = ArgumentGrammar(
    name="php",
    # function foo(, function &foo(, function (, fn(
    header=re.compile(
        r"\b(?:function\b\s*&?\s*(?:[A-Za-z_\x80-\uffff][\w\x80-\uffff]*\s*)?|fn\s*)\("
    ),
    # Optional &, ... or &... before a $-sigil variable; type hints may precede
    parameter=re.compile(
        r"(?:&\s*)?(?:\.\.\.\s*)?(?P<name>\$[A-Za-z_\x7f-\uffff][\w\x7f-\uffff]*)"
    ),
)

PYTHON = ArgumentGrammar(
    name="python",
    # def name(  and PEP 695 generics: def name[T](
    header=re.compile(r"\bdef\s+[^\W\d]\w*\s*(?:\[[^\]\n]*\]\s*)?\("),
    # Leading comment lines, optional * or **, then the bare identifier
    parameter=re.compile(r"\A(?:\s*#[^\n]*\n)*\s*(?:\*\*|\*)?\s*(?P<name>[^\W\d]\w*)"),
    line_comment="#",
)

JAVASCRIPT = ArgumentGrammar(
    name="javascript",
    header=re.compile(
        # function, function*, with or without a name
        r"\bfunction\b\s*\*?\s*(?:[A-Za-z_$][\w$]*\s*)?\("
        # arrow functions with a flat parameter list: (a, b) =>
        r"|(?<![\w$])\((?=[^()]*\)\s*=>)"
        # method shorthand: name(a, b) {
        r"|(?<![\w$.])(?!(?:if|for|while|switch|catch|with|return|function)\b)"
        r"[A-Za-z_$][\w$]*\s*\((?=[^()]*\)\s*\{)"
    ),
    # Leading line or block comments, optional rest marker, then the identifier
    parameter=re.compile(
        r"\A(?:\s*(?://[^\n]*\n|/\*[\s\S]*?\*/))*\s*(?:\.\.\.\s*)?(?P<name>[A-Za-z_$][\w$]*)"
    ),
    quotes=frozenset({"'", '"', "`"}),
    line_comment="//",
    block_comment=("/*", "*/"),
)


class ArgumentScanner:
    """Callable scanner that highlights parameter names for one grammar.

    Usable standalone (``scanner(source)``) or as a ScannerRule inside a
    syntax profile, where the engine passes its RangeFactory.
    """

    __slots__ = ("_grammar",)

    def __init__(self, grammar: ArgumentGrammar) -> None:
        self._grammar = grammar

    @property
    def grammar(self) -> ArgumentGrammar:
        return self._grammar

    def __call__(self, source: str, factory: RangeFactory | None = None) -> list[HighlightRange]:
        """Return one range per declared parameter name, in header order."""
        if factory is None:
            factory = RangeFactory(source)
        ranges: list[HighlightRange] = []
        for header in self._grammar.header.finditer(source):
            ranges.extend(self._scan_list(source, header.end(), factory))
        return ranges

    def _scan_list(self, source: str, start: int, factory: RangeFactory) -> Iterator[HighlightRange]:
        grammar = self._grammar
        state = ScanState(grammar.quotes, grammar.line_comment, grammar.block_comment)
        arg_start = start
        default_at = -1

        for i in range(start, len(source)):
            boundary = state.step(source[i])
            if boundary is Boundary.NONE:
                continue
            if boundary is Boundary.DEFAULT:
                if default_at < 0:
                    default_at = i
                continue

            found = self._argument_name(
                source, arg_start, i if default_at < 0 else default_at, factory
            )
            if found is not None:
                yield found
            if boundary is Boundary.END:
                return
            arg_start = i + 1
            default_at = -1

    def _argument_name(
        self, source: str, start: int, end: int, factory: RangeFactory
    ) -> HighlightRange | None:
        prefix = source[start:end]
        if not prefix.strip():
            # Empty list or trailing comma
            return None

        match = self._grammar.parameter.search(prefix)
        if match is None:
            return None
        return factory.make(start + match.start("name"), start + match.end("name"))

    def __repr__(self) -> str:
        return f"ArgumentScanner({self._grammar.name!r})"


php_arguments = ArgumentScanner(PHP)
python_arguments = ArgumentScanner(PYTHON)
javascript_arguments = ArgumentScanner(JAVASCRIPT)

BUILTIN_SCANNERS: dict[str, ArgumentScanner] = {
    "php": php_arguments,
    "python": python_arguments,
    "javascript": javascript_arguments,
}

__all__ = [
    "BUILTIN_SCANNERS",
    "JAVASCRIPT",
    "PHP",
    "PYTHON",
    "ArgumentGrammar",
    "ArgumentScanner",
    "javascript_arguments",
    "php_arguments",
    "python_arguments",
]
