"""
Value helpers - CSS length formatting and value normalization.
"""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_SPACE_IN_PARENS = re.compile(r"\s*([(),])\s*")
_SHORT_HEX = re.compile(r"^#([0-9a-f]{3,4})$")


def number(value: float) -> str:
    """Format a number without a trailing ``.0``."""
    rounded = round(float(value), 3)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:g}"


def px(value: float) -> str:
    """Format a length in px; zero is unitless."""
    if round(float(value), 3) == 0:
        return "0"
    return f"{number(value)}px"


def padding_shorthand(top: float, right: float, bottom: float, left: float) -> str:
    """Collapse four padding sides into the shortest CSS shorthand."""
    t, r, b, l = px(top), px(right), px(bottom), px(left)
    if t == r == b == l:
        return t
    if t == b and r == l:
        return f"{t} {r}"
    if r == l:
        return f"{t} {r} {b}"
    return f"{t} {r} {b} {l}"


def normalize_value(value: str) -> str:
    """
    Normalize a literal for token matching.

    Lowercases, collapses whitespace, strips spaces around parentheses and
    commas, and expands short hex colors (``#FFF`` -> ``#ffffff``).
    """
    normalized = _WHITESPACE.sub(" ", value.strip().lower())
    normalized = _SPACE_IN_PARENS.sub(r"\1", normalized)
    match = _SHORT_HEX.match(normalized)
    if match:
        normalized = "#" + "".join(ch * 2 for ch in match.group(1))
    return normalized
