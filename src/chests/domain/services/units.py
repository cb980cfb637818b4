"""Length unit conversion and buildable-fraction rounding."""

from __future__ import annotations

import math

from chests.domain.constants import INCHES_TO_CM, MM_PER_INCH
from chests.domain.value_objects import Unit

__all__ = [
    "convert",
    "round_up_to_nearest_eighth",
    "to_cm",
    "to_inches",
    "to_mm",
]

# Float error allowed on a value already expressed in eighths.
_EIGHTHS_NOISE = 1e-9


def to_cm(inches: float) -> float:
    """Convert inches to centimeters."""
    return inches * INCHES_TO_CM


def to_inches(cm: float) -> float:
    """Convert centimeters to inches."""
    return cm / INCHES_TO_CM


def convert(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert a length between units.

    Args:
        value: Length expressed in ``from_unit``.
        from_unit: Source unit.
        to_unit: Target unit.

    Returns:
        The length in ``to_unit``; ``value`` unchanged when units match.
    """
    if from_unit == to_unit:
        return value
    return to_cm(value) if from_unit == Unit.INCHES else to_inches(value)


def to_mm(value: float, unit: Unit) -> float:
    """Express a length in millimeters."""
    return value * MM_PER_INCH if unit == Unit.INCHES else value * 10


def round_up_to_nearest_eighth(value: float) -> float:
    """Round up to the next 1/8 increment.

    Always rounds toward positive infinity so a derived opening can never
    come out smaller than required. The only tolerance is float noise: a
    value within a billionth of an eighth above an exact eighth is taken
    to be that eighth, so 6.0000000000001 stays 6.0.
    """
    return math.ceil(value * 8 - _EIGHTHS_NOISE) / 8
