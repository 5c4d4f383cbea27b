"""PHP syntax profile.

Heredoc and nowdoc strings are not recognized.
"""

import re

from tinta.scanning import php_arguments

SYNTAX = {
    # $variables; declared before "argument" so parameter names stay visible
    "variable": re.compile(r"\$[a-zA-Z_\x7f-\uffff][a-zA-Z0-9_\x7f-\uffff]*"),
    "argument": php_arguments,
    "operator": re.compile(
        r"===|!==|\?\?|\*\*|<<|>>|<=|>=|==|!=|->|=>|::"
        r"|\.|\?|!|\+|-|\*|/|%|=|<|>|&|\||\^|~"
        r"|(?<!\w)new(?!\w)|(?<!\w)instanceof(?!\w)"
    ),
    "number": re.compile(
        r"\b0b[01]+\b|\b0x[\da-f]+\b|\b0o[0-7]+\b|\b\d*\.?\d+(?:e[+-]?\d+)?\b",
        re.IGNORECASE,
    ),
    # Definitions and calls: a name followed by "("
    "function": re.compile(r"\b[a-zA-Z_\x80-\uffff]\w*(?=\s*\()"),
    "tag": re.compile(r"<\?(?:php|=)?|\?>", re.IGNORECASE),
    "keyword": [
        # Control flow
        "if", "else", "elseif", "endif",
        "while", "do", "for", "foreach", "as", "endwhile", "endfor", "endforeach",
        "switch", "case", "default", "break", "continue", "endswitch", "match",
        "return", "goto",
        # Exceptions
        "try", "catch", "finally", "throw",
        # Definitions and scope
        "function", "fn", "class", "interface", "trait", "enum",
        "extends", "implements", "abstract", "final", "const",
        "public", "protected", "private", "static", "var", "global", "readonly",
        "namespace", "use", "insteadof",
        # Language constructs
        "echo", "print", "include", "include_once", "require", "require_once",
        "isset", "empty", "unset", "die", "exit", "eval", "list", "clone", "declare",
        # Types
        "array", "string", "int", "float", "bool", "object", "callable", "iterable",
        "void", "mixed", "never", "null", "false", "true",
        # Magic constants
        "__LINE__", "__FILE__", "__DIR__", "__FUNCTION__", "__CLASS__", "__TRAIT__",
        "__METHOD__", "__NAMESPACE__",
        # Predefined interfaces
        "Traversable", "Iterator", "IteratorAggregate", "Throwable", "ArrayAccess",
        "Serializable", "Countable", "Stringable", "UnitEnum", "BackedEnum",
        "JsonSerializable", "Reflector", "DateTimeInterface", "SessionHandlerInterface",
        "InternalIterator",
        # SPL interfaces
        "OuterIterator", "RecursiveIterator", "SeekableIterator", "SplObserver", "SplSubject",
        # Superglobals
        "$GLOBALS", "$_SERVER", "$_GET", "$_POST", "$_FILES",
        "$_COOKIE", "$_SESSION", "$_REQUEST", "$_ENV",
        # Other globals
        "$argc", "$argv", "$this",
    ],
    # Double quotes, single quotes, and backticks (execution operator)
    "string": re.compile(r"([\"'`])(?:\\.|[^\\])*?\1"),
    "comment": re.compile(r"/\*[\s\S]*?\*/|(?://|#(?!\[)).*"),
}
