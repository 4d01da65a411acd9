"""Output formatting utilities for the chart tools.

Provides reusable functions for:
- Formatting amounts and counts for tooltips and console summaries
- SI-prefixed axis tick labels ("5k", "45k", "1.5M")
"""

from typing import Callable, Optional

# SI prefixes from yocto (10^-24) to yotta (10^24), indexed by exponent // 3 + 8
SI_PREFIXES = ["y", "z", "a", "f", "p", "µ", "m", "", "k", "M", "G", "T", "P", "E", "Z", "Y"]


def decimal_exponent(value: float) -> int:
    """Return the base-10 exponent of value as written in scientific notation.

    Examples:
        decimal_exponent(46000) -> 4
        decimal_exponent(0.05) -> -2
        decimal_exponent(0) -> 0
    """
    return int(f"{abs(value):e}".split("e")[1])


def prefix_exponent(value: float) -> int:
    """Return the SI prefix exponent (a multiple of 3, clamped to ±24) for value."""
    return max(-8, min(8, decimal_exponent(value) // 3)) * 3


def prefix_precision(step: float, value: float) -> int:
    """Digits after the decimal point needed to tell ticks ``step`` apart.

    Labels share the SI prefix of the largest tick ``value``; the precision
    is however many decimals that prefix leaves for the step size.
    """
    return max(0, prefix_exponent(value) - decimal_exponent(abs(step)))


def si_formatter(step: float, value: float) -> Callable[[float], str]:
    """Build a tick label formatter with a fixed SI prefix.

    Args:
        step: Distance between consecutive ticks
        value: Largest absolute tick value (selects the prefix)

    Returns:
        Callable formatting one tick value, e.g. 45000 -> "45k"

    Examples:
        si_formatter(5000, 46000)(45000) -> "45k"
        si_formatter(500, 2500)(1500) -> "1.5k"
        si_formatter(100, 900)(300) -> "300"
    """
    exponent = prefix_exponent(value)
    precision = prefix_precision(step, value)
    scale = 10 ** -exponent
    suffix = SI_PREFIXES[8 + exponent // 3]

    def fmt(tick: float) -> str:
        return f"{tick * scale:.{precision}f}{suffix}"

    return fmt


def format_amount(value: Optional[float], precision: int = 0,
                  thousands_sep: bool = True) -> str:
    """Format an amount (a count of deaths) for display.

    Args:
        value: Amount (can be None)
        precision: Decimal places (default: 0)
        thousands_sep: Add thousands separator (default: True)

    Returns:
        Formatted string like "46,000"

    Examples:
        format_amount(46000) -> "46,000"
        format_amount(1234.5, precision=1) -> "1,234.5"
        format_amount(None) -> "-"
    """
    if value is None:
        return "-"
    if thousands_sep:
        return f"{value:,.{precision}f}"
    return f"{value:.{precision}f}"

