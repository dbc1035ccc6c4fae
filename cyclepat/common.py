"""Common time types and numeric utilities for cyclepat."""

from __future__ import annotations

from fractions import Fraction
from typing import NewType, Union

Numeric = Union[int, float, Fraction]
"""Type alias for numeric values that can be converted to Fraction."""

CycleTime = NewType("CycleTime", Fraction)
"""Absolute position in cycles. Integer values are cycle boundaries."""

CycleDelta = NewType("CycleDelta", Fraction)
"""Duration in cycles."""

Factor = NewType("Factor", Fraction)
"""Scaling factor relating query time to result time."""

type CycleTimeLike = Union[CycleTime, Numeric]
"""Type alias for values that can be converted to CycleTime."""

type CycleDeltaLike = Union[CycleDelta, Numeric]
"""Type alias for values that can be converted to CycleDelta."""


def numeric_frac(numeric: Numeric) -> Fraction:
    """Convert a numeric value to a Fraction.

    Args:
        numeric: The numeric value to convert

    Returns:
        The value as a Fraction

    Raises:
        ValueError: If the value cannot be converted to a Fraction
    """
    if isinstance(numeric, Fraction):
        return numeric
    elif isinstance(numeric, bool):
        raise ValueError(f"Cannot convert {type(numeric)} to Fraction")
    elif isinstance(numeric, int):
        return Fraction(numeric)
    elif isinstance(numeric, float):
        return Fraction(numeric).limit_denominator()
    else:
        raise ValueError(f"Cannot convert {type(numeric)} to Fraction")


def mk_cycle_time(value: CycleTimeLike) -> CycleTime:
    return CycleTime(numeric_frac(value))


def format_fraction(frac: Fraction) -> str:
    """Format a fraction for display.

    Whole numbers print bare, everything else prints as ``n%d``.

    Args:
        frac: The fraction to format

    Returns:
        String representation of the fraction
    """
    if frac.denominator == 1:
        return str(frac.numerator)
    else:
        return f"{frac.numerator}%{frac.denominator}"
