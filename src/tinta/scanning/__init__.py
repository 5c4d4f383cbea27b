"""Procedural scanners for token types a single pattern cannot express.

The argument scanner highlights parameter names in function and method
signatures for PHP, Python, and JavaScript-family grammars. Scanners plug
into a syntax profile as callables (``"argument": php_arguments``) or, from
data-file profiles, by name (``{"scanner": "php"}``).
"""

from __future__ import annotations

from tinta.scanning.arguments import (
    BUILTIN_SCANNERS,
    JAVASCRIPT,
    PHP,
    PYTHON,
    ArgumentGrammar,
    ArgumentScanner,
    javascript_arguments,
    php_arguments,
    python_arguments,
)
from tinta.scanning.states import Boundary, ScanMode, ScanState

__all__ = [
    "BUILTIN_SCANNERS",
    "JAVASCRIPT",
    "PHP",
    "PYTHON",
    "ArgumentGrammar",
    "ArgumentScanner",
    "Boundary",
    "ScanMode",
    "ScanState",
    "javascript_arguments",
    "php_arguments",
    "python_arguments",
]
