"""
Numeric normalisation for loosely formatted spreadsheet values.

Pure string processing. Never raises: unparseable input yields ``nan`` so
each caller can apply its own field default.

Known limitation: with a single separator followed by exactly three digits
("1,234" / "1.234") the value is read as a thousands group (1234). There is
no way to tell a three-decimal value apart without locale context.
"""
import math
import re
from typing import Any

_NOT_NUMERIC = re.compile(r"[^\d,.+\-]")
_WHITESPACE = re.compile(r"\s+")


def parse_number(raw: Any) -> float:
    """Parse "79 586 567,50", "1,270,192.34", "6,56", "12 kr" etc. into a float."""
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else math.nan

    s = str(raw).strip()
    if s in ("", "-", "+"):
        return math.nan

    # Spaces are thousands separators, anything else non-numeric is a unit ("kr", "SEK", "%")
    s = _WHITESPACE.sub("", s)
    s = _NOT_NUMERIC.sub("", s)
    if s in ("", "-", "+"):
        return math.nan

    last_comma = s.rfind(",")
    last_dot = s.rfind(".")

    if last_comma != -1 and last_dot != -1:
        if last_comma > last_dot:
            # "79.586.567,50"
            s = s.replace(".", "").replace(",", ".")
        else:
            # "79,586,567.50"
            s = s.replace(",", "")
    elif last_comma != -1:
        s = _resolve_single_separator(s, ",")
    elif last_dot != -1:
        s = _resolve_single_separator(s, ".")

    try:
        value = float(s)
    except ValueError:
        return math.nan
    return value if math.isfinite(value) else math.nan


def _resolve_single_separator(s: str, sep: str) -> str:
    """One separator with 1-2 trailing digits is decimal, otherwise thousands."""
    tail = s[s.rfind(sep) + 1:]
    digits_after = sum(ch.isdigit() for ch in tail)
    if digits_after <= 2 and s.count(sep) == 1:
        return s.replace(sep, ".")
    return s.replace(sep, "")


def number_or(raw: Any, default: float) -> float:
    """parse_number with a field-specific fallback for unparseable input."""
    value = parse_number(raw)
    return default if math.isnan(value) else value


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with exact halves going up (0.125 -> 0.13), unlike built-in round()."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
