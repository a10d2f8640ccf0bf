"""
Value sanitizers shared by every ingestion path.

- to_safe_number: coerce messy numeric input ("$1,234.50", "(500)", "12%") to a finite number.
- clamp: bound a number to a closed range.
- sanitize_text: strip control characters and HTML-significant characters.
- safe_file_stem: turn free text into a conservative file-name stem.

None of these raise on bad input; callers pass the fallback that makes sense
for their context (0 for fresh extractions, the previous value for edits).
"""

from __future__ import annotations

import math
import re
from typing import Any, Union

Number = Union[int, float]

_CURRENCY_AND_SEPARATORS = re.compile(r"[$€£¥₹,%\s]")
_STRICT_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_EMBEDDED_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_MARKUP_CHARS = re.compile(r"[<>&]")
_UNSAFE_FILE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def _finite_or(value: float, fallback: Any) -> Any:
    return value if math.isfinite(value) else fallback


def to_safe_number(value: Any, fallback: Any = 0) -> Any:
    """Convert int/float or numeric-like strings to a finite number; return `fallback` otherwise."""
    if value is None or isinstance(value, bool):
        return fallback

    if isinstance(value, (int, float)):
        return _finite_or(value, fallback) if isinstance(value, float) else value

    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return fallback

        s = _CURRENCY_AND_SEPARATORS.sub("", trimmed)
        if len(s) >= 2 and s.startswith("(") and s.endswith(")"):
            s = f"-{s[1:-1]}"

        if _STRICT_NUMBER.match(s):
            return _finite_or(float(s), fallback)

        match = _EMBEDDED_NUMBER.search(s)
        if match:
            return _finite_or(float(match.group(0)), fallback)
        return fallback

    try:
        return _finite_or(float(value), fallback)
    except (TypeError, ValueError, OverflowError):
        return fallback


def clamp(value: Number, lo: Number, hi: Number) -> Number:
    return min(hi, max(lo, value))


def sanitize_text(value: Any, fallback: str = "") -> str:
    """Strip control characters and <, >, & from `value`; return `fallback` if nothing is left."""
    text = "" if value is None else str(value)
    text = _CONTROL_CHARS.sub("", text)
    text = _MARKUP_CHARS.sub("", text).strip()
    return text or fallback


def safe_file_stem(value: Any, fallback: str = "Store") -> str:
    stem = _UNSAFE_FILE_CHARS.sub("_", sanitize_text(value, fallback))
    stem = re.sub(r"_+", "_", stem).strip("_")
    return stem or fallback
