"""JavaScript syntax profile (also reasonable for TypeScript snippets)."""

import re

from tinta.scanning import javascript_arguments

SYNTAX = {
    "argument": javascript_arguments,
    "operator": re.compile(
        r"===|!==|=>|>=|<=|&&|\|\||\?\?|!=|\+\+|--|\+|-|\*|/|%|>|<|=|!|\?"
    ),
    "number": re.compile(
        r"\b0[xob][\da-f_]+n?\b|(?<![\w$])\d[\d_]*(?:\.\d+)?(?:e[+-]?\d+)?n?\b",
        re.IGNORECASE,
    ),
    "function": re.compile(r"(?<![\w$])[A-Za-z_$][\w$]*(?=\s*\()"),
    "tag": re.compile(r"</?[\w-]+|(?<=[\w\"])>"),
    "keyword": [
        # Reserved words
        "as", "async", "await", "break", "case", "catch", "class", "const", "continue",
        "debugger", "default", "delete", "do", "else", "enum", "export", "extends",
        "false", "finally", "for", "from", "function", "get", "if", "implements",
        "import", "in", "instanceof", "interface", "let", "new", "null", "of",
        "package", "private", "protected", "public", "return", "set", "static",
        "super", "switch", "this", "throw", "true", "try", "typeof", "undefined",
        "var", "void", "while", "with", "yield",
        # Core ECMAScript globals
        "AggregateError", "Array", "ArrayBuffer", "AsyncFunction", "Atomics",
        "BigInt", "BigInt64Array", "BigUint64Array", "Boolean", "DataView",
        "Date", "Error", "EvalError", "FinalizationRegistry", "Float32Array",
        "Float64Array", "Function", "Generator", "GeneratorFunction", "Infinity",
        "Int16Array", "Int32Array", "Int8Array", "Intl", "JSON",
        "Map", "Math", "NaN", "Number", "Object", "Promise", "Proxy", "RangeError",
        "ReferenceError", "Reflect", "RegExp", "Set", "SharedArrayBuffer", "String",
        "Symbol", "SyntaxError", "TypeError", "Uint16Array", "Uint32Array",
        "Uint8Array", "Uint8ClampedArray", "URIError", "WeakMap", "WeakRef",
        "WeakSet", "WebAssembly",
        # Web platform globals
        "alert", "caches", "clearInterval", "clearTimeout", "console", "crypto",
        "document", "fetch", "globalThis", "history", "indexedDB", "localStorage",
        "location", "matchMedia", "module", "navigator", "performance", "process",
        "prompt", "queueMicrotask", "requestAnimationFrame", "require", "screen",
        "sessionStorage", "setInterval", "setTimeout", "window",
        # Common DOM interfaces
        "AbortController", "AbortSignal", "Blob", "BroadcastChannel", "CustomEvent",
        "Document", "DOMException", "DOMParser", "DOMRect", "Element", "Event",
        "EventSource", "EventTarget", "File", "FileReader", "FormData", "Headers",
        "HTMLElement", "HTMLTemplateElement", "Image", "IntersectionObserver",
        "KeyboardEvent", "MessageChannel", "MouseEvent", "MutationObserver",
        "Node", "NodeList", "Range", "ReadableStream", "Request", "ResizeObserver",
        "Response", "ShadowRoot", "Text", "TextDecoder", "TextEncoder", "URL",
        "URLSearchParams", "WebSocket", "Worker", "WritableStream", "XMLHttpRequest",
    ],
    "string": re.compile(
        r"'(?:\\.|[^'\\\n])*'|\"(?:\\.|[^\"\\\n])*\"|`(?:\\.|[^`\\])*`"
    ),
    # Template literal substitutions
    "variable": re.compile(r"\$\s*\{[^}]+\}"),
    "comment": re.compile(r"#!.*|//.*|/\*[\s\S]*?\*/"),
}
