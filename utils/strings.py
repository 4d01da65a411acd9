"""String processing utilities for the chart tools.

parse_amount() is strict: unlike a plain float() fallback it never guesses a
default, so a malformed cell surfaces as a typed error at the parse stage.
"""

import math

from utils.patterns import NUMERIC_NOISE, WHITESPACE


def parse_amount(val) -> float:
    """Convert a raw amount cell to a non-negative float.

    Handles:
    - Numeric types -> float
    - Strings with surrounding or embedded (thousands) whitespace
    - Quoted strings

    Args:
        val: Raw cell value

    Returns:
        float: Parsed value

    Raises:
        ValueError: If the cell is empty, not a number, not finite, or
            negative.
    """
    if val is None:
        raise ValueError("empty amount")
    if isinstance(val, bool):
        raise ValueError(f"not a number: {val!r}")
    if isinstance(val, (int, float)):
        number = float(val)
    else:
        s = NUMERIC_NOISE.sub('', str(val)).strip('"')
        if not s:
            raise ValueError("empty amount")
        try:
            number = float(s)
        except ValueError:
            raise ValueError(f"not a number: {val!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {val!r}")
    if number < 0:
        raise ValueError(f"negative amount: {val!r}")
    return number


def normalize_whitespace(s: str) -> str:
    """Normalize multiple whitespace characters to single spaces.

    Example:
        "Diseases of the\\n  circulatory system" -> "Diseases of the circulatory system"
    """
    return WHITESPACE.sub(' ', s).strip()
