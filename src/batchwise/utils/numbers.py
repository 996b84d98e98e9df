"""Numeric helpers: decimal-safe rounding, display formatting, modular arithmetic."""

from __future__ import annotations

import math
from decimal import ROUND_FLOOR, Decimal

_HALF = Decimal("0.5")
_MAX_FRACTION_DIGITS = 3


def round_digits(num: float, scale: int) -> float:
    """Round num to `scale` decimal places, halves toward +infinity.

    Shifts the decimal point instead of multiplying, so values like 1.005
    round the way they read (1.01) rather than the way they are stored.
    A negative scale rounds to tens, hundreds, ...

    Example:
        >>> round_digits(1.005, 2)
        1.01
        >>> round_digits(-2.5, 0)
        -2.0
        >>> round_digits(1234.5, -2)
        1200.0
    """
    if not math.isfinite(num):
        return float(num)
    shifted = Decimal(repr(num)).scaleb(scale)
    return float((shifted + _HALF).to_integral_value(rounding=ROUND_FLOOR).scaleb(-scale))


def local_format_number(num: float, scale: int) -> str:
    """Round with round_digits, then render with thousands separators.

    At most three fraction digits are shown; trailing zeros are dropped.

    Example:
        >>> local_format_number(1234567.891, 2)
        '1,234,567.89'
        >>> local_format_number(1500, 0)
        '1,500'
    """
    value = round_digits(num, scale)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    text = f"{value:,.{_MAX_FRACTION_DIGITS}f}"
    return text.rstrip("0").rstrip(".")


def mod_with_neg(x: float, mod: float) -> float:
    """Modulo whose result takes the sign of mod, so negatives wrap around."""
    return ((x % mod) + mod) % mod


def roll(num: float, lo: float = 0, hi: float = 1) -> float:
    """Wrap num into the half-open range [lo, hi).

    Example:
        >>> roll(370, 0, 360)
        10
        >>> roll(-190, -180, 180)
        170
    """
    return mod_with_neg(num - lo, hi - lo) + lo


def clamp(num: float, lo: float = 0, hi: float = 1) -> float:
    return max(lo, min(hi, num))
