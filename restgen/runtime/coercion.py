"""
Parsers used by generated code to coerce raw parameter values.

Every parser raises ``ValueError`` when the raw text is not a valid literal.
"""

import re
from datetime import datetime

_TRUE = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSE = frozenset(("0", "f", "F", "FALSE", "false", "False"))
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
# Hexadecimal mantissa with a mandatory binary exponent, e.g. "0x1p-2".
_HEX_NUMBER_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_RFC3339_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})"
)


def parse_bool(raw: str) -> bool:
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f"invalid boolean literal {raw!r}")


def parse_int(raw: str) -> int:
    """Parse a base 10 integer with an optional sign."""
    if not _INTEGER_RE.fullmatch(raw):
        raise ValueError(f"invalid integer literal {raw!r}")
    return int(raw, 10)


def parse_number(raw: str) -> float:
    """Parse a 64-bit floating point number, in decimal or hexadecimal notation."""
    if _HEX_NUMBER_RE.fullmatch(raw):
        return float.fromhex(raw)
    if not _NUMBER_RE.fullmatch(raw):
        raise ValueError(f"invalid number literal {raw!r}")
    return float(raw)


def parse_datetime(raw: str) -> datetime:
    """Parse an RFC 3339 timestamp, e.g. "2016-01-02T15:04:05Z"."""
    match = _RFC3339_RE.fullmatch(raw)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp {raw!r}")
    date, time, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    # fromisoformat only accepts 3 or 6 fractional digits on older interpreters.
    if fraction:
        fraction = (fraction[1:] + "000000")[:6]
        fraction = f".{fraction}"
    return datetime.fromisoformat(f"{date}T{time}{fraction or ''}{offset}")
