"""Identifier and comment helpers for TypeScript output."""

from __future__ import annotations

import json
import re

# Words that cannot be used as parameter names in a declaration file.
TYPESCRIPT_KEYWORDS: frozenset[str] = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "implements", "import", "in",
    "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this",
    "throw", "true", "try", "typeof", "var", "void", "while", "with", "yield",
})

# ASCII only; unicode identifiers are quoted as well.
_IDENTIFIER_RE = re.compile(r"[a-zA-Z$_][a-zA-Z$_0-9]*")


def quote_property(name: str) -> str:
    """Quote a member name unless it is a plain identifier."""
    if _IDENTIFIER_RE.fullmatch(name):
        return name
    return json.dumps(name)


def escape_param_name(name: str) -> str:
    return f"{name}_" if name in TYPESCRIPT_KEYWORDS else name


def doc_comment(text: str, url: str) -> str:
    """Single-line block comment carrying a short doc and its URL."""
    text = " ".join(text.split()).replace("*/", "*\\/")
    body = f"{text} {url}" if text else url
    return f"/* {body} */"
