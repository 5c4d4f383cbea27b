"""Python syntax profile."""

import re

from tinta.scanning import python_arguments

SYNTAX = {
    "argument": python_arguments,
    "operator": re.compile(
        r"\*\*|//|==|!=|<=|>=|->|:=|\+|-|\*|/|%|=|<|>|&|\||\^|~|!|:|(?<!\w)\.(?!\w)"
    ),
    "number": re.compile(
        r"\b0x[\da-f]+\b|\b0b[01]+\b|\b0o[0-7]+\b|\b\d+\.?\d*(?:e[+-]?\d+)?j?\b",
        re.IGNORECASE,
    ),
    # Definitions and calls: a name followed by "("
    "function": re.compile(r"\b[^\W\d]\w*(?=\s*\()"),
    # Decorators
    "tag": re.compile(r"@\s*[\w.]+"),
    "keyword": [
        # Logic and flow
        "and", "or", "not", "is", "in",
        "if", "elif", "else",
        "for", "while", "break", "continue",
        "try", "except", "finally", "raise", "assert",
        "with", "as", "pass",
        "return", "yield", "lambda",
        "match", "case",
        # Definition and scope
        "def", "class", "global", "nonlocal", "del",
        "import", "from",
        "async", "await",
        # Constants
        "True", "False", "None",
        "Ellipsis", "NotImplemented", "__debug__",
        # Built-in types
        "bool", "int", "float", "complex",
        "str", "bytes", "bytearray",
        "list", "tuple", "set", "frozenset", "dict",
        "object", "type",
        # Built-in functions
        "abs", "aiter", "all", "any", "anext", "ascii", "bin", "breakpoint",
        "callable", "chr", "classmethod", "compile", "delattr", "dir", "divmod",
        "enumerate", "eval", "exec", "filter", "format", "getattr", "globals",
        "hasattr", "hash", "help", "hex", "id", "input", "isinstance", "issubclass",
        "iter", "len", "locals", "map", "max", "memoryview", "min", "next",
        "oct", "open", "ord", "pow", "print", "property", "range", "repr",
        "reversed", "round", "setattr", "slice", "sorted", "staticmethod",
        "sum", "super", "vars", "zip", "__import__",
        # Built-in exceptions
        "BaseException", "Exception", "ArithmeticError", "BufferError", "LookupError",
        "AssertionError", "AttributeError", "EOFError", "FloatingPointError",
        "GeneratorExit", "ImportError", "ModuleNotFoundError", "IndexError",
        "KeyError", "KeyboardInterrupt", "MemoryError", "NameError",
        "NotImplementedError", "OSError", "OverflowError", "RecursionError",
        "ReferenceError", "RuntimeError", "StopIteration", "StopAsyncIteration",
        "SyntaxError", "IndentationError", "TabError", "SystemError", "SystemExit",
        "TypeError", "UnboundLocalError", "UnicodeError", "UnicodeEncodeError",
        "UnicodeDecodeError", "UnicodeTranslateError", "ValueError",
        "ZeroDivisionError", "BlockingIOError", "ChildProcessError",
        "ConnectionError", "BrokenPipeError", "ConnectionAbortedError",
        "ConnectionRefusedError", "ConnectionResetError", "FileExistsError",
        "FileNotFoundError", "InterruptedError", "IsADirectoryError",
        "NotADirectoryError", "PermissionError", "ProcessLookupError",
        "TimeoutError", "Warning", "UserWarning", "DeprecationWarning",
        "PendingDeprecationWarning", "SyntaxWarning", "RuntimeWarning",
        "FutureWarning", "ImportWarning", "UnicodeWarning", "BytesWarning",
        "ResourceWarning",
        # Module attributes
        "__name__", "__file__", "__doc__", "__package__",
        "__loader__", "__spec__", "__annotations__", "__builtins__",
        # collections.abc / typing
        "Container", "Hashable", "Iterable", "Iterator", "Reversible", "Generator",
        "Sized", "Callable", "Collection", "Sequence", "MutableSequence",
        "ByteString", "Set", "MutableSet", "Mapping", "MutableMapping",
        "MappingView", "ItemsView", "KeysView", "ValuesView",
        "Awaitable", "Coroutine", "AsyncIterable", "AsyncIterator", "AsyncGenerator",
    ],
    # Triple-quoted before single-line strings, with f/r/b/u prefixes
    "string": re.compile(
        r"(?:rb|br|fr|rf|r|u|f|b)?"
        r"(?:\"\"\"[\s\S]*?\"\"\"|'''[\s\S]*?'''|\"(?:\\.|[^\"\\])*\"|'(?:\\.|[^'\\])*')",
        re.IGNORECASE,
    ),
    # self, cls, and dunder names
    "variable": re.compile(r"\bself\b|\bcls\b|\b__[a-z_]+__\b"),
    "comment": re.compile(r"#.*"),
}
