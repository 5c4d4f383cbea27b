"""Scanner state machine for parameter lists.

The argument scanner walks a parameter list one character at a time. Its
state is four counters plus a mode:

- CODE: outside any string literal or comment; delimiters change depth
- QUOTED: inside a string literal opened by ``quote``
- ESCAPED: inside a string literal, directly after a backslash
- COMMENT: inside a line comment, until the next newline
- BLOCK_COMMENT: inside a block comment, until its closing marker

Only CODE characters can open or close delimiters, separate arguments, or
start a default value. Comment markers may be one or two characters long.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ScanMode(Enum):
    """Lexical mode of the parameter-list scanner."""

    CODE = auto()  # Delimiters and commas are significant
    QUOTED = auto()  # Inside a string literal
    ESCAPED = auto()  # Character after a backslash inside a string literal
    COMMENT = auto()  # Inside a line comment
    BLOCK_COMMENT = auto()  # Inside a block comment


class Boundary(Enum):
    """What a single character means for argument splitting."""

    NONE = auto()  # Part of the current argument
    SEPARATOR = auto()  # Top-level comma
    END = auto()  # Closing paren of the parameter list
    DEFAULT = auto()  # Top-level "=" introducing a default value


_OPENERS = {"(": "paren", "[": "bracket", "{": "brace"}
_CLOSERS = {")": "paren", "]": "bracket", "}": "brace"}


@dataclass(slots=True)
class ScanState:
    """Mutable state for scanning one parameter list.

    A fresh ScanState is created for every definition header, so quote and
    depth state never leak from one header into the next.

    Attributes:
        quotes: Characters that open a string literal in this grammar
        line_comment: Marker that starts a line comment ("" for none)
        block_comment: Opening and closing block comment markers
            (empty strings for none)
        mode: Current lexical mode
        quote: The character that opened the active string literal
        paren: Parenthesis depth; starts at 1 for the header's own paren
        bracket: Square bracket depth
        brace: Curly brace depth
        previous: Last character seen in the current mode, for two-character
            comment markers

    """

    quotes: frozenset[str]
    line_comment: str = ""
    block_comment: tuple[str, str] = ("", "")
    mode: ScanMode = ScanMode.CODE
    quote: str = ""
    paren: int = 1
    bracket: int = 0
    brace: int = 0
    previous: str = ""

    @property
    def top_level(self) -> bool:
        """True when outside every nested call, array, and map literal."""
        return self.paren == 1 and self.bracket == 0 and self.brace == 0

    def step(self, char: str) -> Boundary:
        """Advance by one character and report any argument boundary."""
        match self.mode:
            case ScanMode.ESCAPED:
                self.mode = ScanMode.QUOTED
                return Boundary.NONE
            case ScanMode.QUOTED:
                if char == "\\":
                    self.mode = ScanMode.ESCAPED
                elif char == self.quote:
                    self._enter(ScanMode.CODE)
                    self.quote = ""
                return Boundary.NONE
            case ScanMode.COMMENT:
                if char == "\n":
                    self._enter(ScanMode.CODE)
                return Boundary.NONE
            case ScanMode.BLOCK_COMMENT:
                if self.previous + char == self.block_comment[1]:
                    self._enter(ScanMode.CODE)
                else:
                    self.previous = char
                return Boundary.NONE
            case ScanMode.CODE:
                return self._step_code(char)

    def _enter(self, mode: ScanMode) -> None:
        self.mode = mode
        self.previous = ""

    def _step_code(self, char: str) -> Boundary:
        pair = self.previous + char
        self.previous = char

        if self.line_comment and self.line_comment in (char, pair):
            self._enter(ScanMode.COMMENT)
            return Boundary.NONE
        if self.block_comment[0] and self.block_comment[0] in (char, pair):
            self._enter(ScanMode.BLOCK_COMMENT)
            return Boundary.NONE

        if char in self.quotes:
            self._enter(ScanMode.QUOTED)
            self.quote = char
            return Boundary.NONE

        if char in _OPENERS:
            kind = _OPENERS[char]
            setattr(self, kind, getattr(self, kind) + 1)
            return Boundary.NONE

        if char in _CLOSERS:
            kind = _CLOSERS[char]
            if kind == "paren":
                self.paren -= 1
                return Boundary.END if self.paren == 0 else Boundary.NONE
            # A stray closer never drives bracket/brace depth negative
            setattr(self, kind, max(0, getattr(self, kind) - 1))
            return Boundary.NONE

        if self.top_level:
            if char == ",":
                return Boundary.SEPARATOR
            if char == "=":
                return Boundary.DEFAULT
        return Boundary.NONE


__all__ = [
    "Boundary",
    "ScanMode",
    "ScanState",
]
