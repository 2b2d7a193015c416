# wanderplan/services/cost_parser.py

"""
Best-effort conversion of display cost strings into numbers.

Periods and commas are both treated as thousands separators, so
"Rp 50.000" and "IDR 50,000" both read as 50000. A decimal-point currency
("USD 12.50") is therefore misread as 1250; the source text carries no
reliable locale, so this is accepted rather than guessed at.
"""

from math import isfinite
from re import compile as re_compile

NON_NUMERIC = re_compile(r"[^0-9,-]+")
LEADING_INTEGER = re_compile(r"-?\d+")


def parse_cost(cost: object) -> int | float:
    """
    Parse a display cost into a number, defaulting to 0.

    Only the leading number counts, so a range such as
    "Rp 50.000 - 100.000" yields its lower bound.

    Args:
        cost: Usually a string like "IDR 50,000", "Rp 50.000" or "Free".

    Returns:
        The parsed amount, or 0 when nothing numeric is found. Never raises.

    Examples:
        >>> parse_cost("IDR 1.234.567")
        1234567
        >>> parse_cost("Free")
        0
    """
    if isinstance(cost, bool):
        return 0
    if isinstance(cost, int | float):
        return cost if isfinite(cost) else 0
    if not isinstance(cost, str):
        return 0

    digits = NON_NUMERIC.sub("", cost.replace(".", "")).replace(",", "")
    if match := LEADING_INTEGER.match(digits):
        try:
            return int(match.group())
        except ValueError:
            # Digit run longer than the interpreter's int conversion limit
            return 0
    return 0
