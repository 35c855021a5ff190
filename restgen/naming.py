"""
Identifier helpers for generated Python code.
"""

import json
import keyword
import re

_NON_IDENT = re.compile(r"\W+")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def safe_identifier(name: str) -> str:
    """Turn a design name into a valid Python identifier, keeping its case."""
    ident = _NON_IDENT.sub("_", name).strip("_") or "_"
    if ident[0].isdigit():
        ident = f"_{ident}"
    if keyword.iskeyword(ident):
        ident += "_"
    return ident


def snake_case(name: str) -> str:
    """Convert a design name to snake_case, e.g. "ListBottleContext" -> "list_bottle_context"."""
    s = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    s = _CAMEL_BOUNDARY.sub(r"\1_\2", s)
    return safe_identifier(s.lower())


def class_case(name: str) -> str:
    """Convert a design name to CamelCase, e.g. "bottle_id" -> "BottleId"."""
    words = [w for w in _NON_IDENT.sub(" ", name).replace("_", " ").split() if w]
    return safe_identifier("".join(w[:1].upper() + w[1:] for w in words))


def quote(text: str) -> str:
    """Render text as a double-quoted Python string literal."""
    return json.dumps(text)


class Namer:
    """Hands out temporary variable names that are unique within one render."""

    def __init__(self, prefix: str = "tmp"):
        self.prefix = prefix
        self._count = 0

    def tempvar(self) -> str:
        self._count += 1
        return f"{self.prefix}{self._count}"
