"""Modular storage grid sizing.

Drawer openings can be sized so that a whole number of standard modular
bins fits inside the finished drawer box. The grid is 42 mm square per
unit; bin height follows ``height_mm = 7 * units + 4`` (4u = 32 mm,
6u = 46 mm).

Forward helpers answer "how many modules fit in this interior", reverse
helpers answer "what opening do I need for N modules". Reverse results are
rounded up to the nearest 1/8" so cut dimensions stay on buildable
fractions even with non-eighth stock such as 15/32" plywood.
"""

from __future__ import annotations

import math

from chests.domain.constants import MM_PER_INCH
from chests.domain.value_objects import ConstructionMethod

from .units import round_up_to_nearest_eighth

__all__ = [
    "BIN_HEIGHT_BASE_MM",
    "BIN_HEIGHT_UNIT_MM",
    "GRID_UNIT_MM",
    "MAX_BIN_UNITS",
    "bin_height_mm",
    "grid_units_for",
    "grid_units_to_length",
    "max_bin_units",
    "opening_height_for_bin_units",
    "opening_width_for_grid_units",
]

GRID_UNIT_MM = 42.0
BIN_HEIGHT_UNIT_MM = 7.0
BIN_HEIGHT_BASE_MM = 4.0
MAX_BIN_UNITS = 12


def grid_units_for(dimension_mm: float) -> int:
    """Number of whole grid cells that fit across ``dimension_mm``."""
    return math.floor(dimension_mm / GRID_UNIT_MM)


def bin_height_mm(units: int) -> float:
    """Height in millimeters of a bin of ``units`` height units."""
    return units * BIN_HEIGHT_UNIT_MM + BIN_HEIGHT_BASE_MM


def max_bin_units(interior_height_mm: float) -> int:
    """Tallest bin (in height units) that fits an interior height."""
    best = 0
    for units in range(1, MAX_BIN_UNITS + 1):
        if bin_height_mm(units) > interior_height_mm:
            break
        best = units
    return best


def grid_units_to_length(
    units: int,
    cell_size_mm: float,
    base_mm: float = 0.0,
    allowance: float = 0.0,
) -> float:
    """Map a module count to a length in inches, rounded up to 1/8".

    The module length is the linear formula ``units * cell_size_mm +
    base_mm``; ``allowance`` (inches) adds the construction material that
    surrounds the modules before rounding.

    Args:
        units: Module count.
        cell_size_mm: Millimeters per module.
        base_mm: Fixed millimeter offset of the formula.
        allowance: Inches added around the modules.

    Returns:
        Length in inches on a 1/8" increment, never less than required.
    """
    module_inches = (units * cell_size_mm + base_mm) / MM_PER_INCH
    return round_up_to_nearest_eighth(module_inches + allowance)


def opening_width_for_grid_units(
    grid_units: int,
    drawer_side_thickness: float,
    clearance_per_side: float,
) -> float:
    """Opening width whose drawer interior fits ``grid_units`` grid cells.

    usable interior = box width - 2 * side thickness and
    box width = opening - 2 * clearance, so the opening is the interior
    plus both drawer sides plus both slide clearances.
    """
    return grid_units_to_length(
        grid_units,
        GRID_UNIT_MM,
        allowance=2 * drawer_side_thickness + 2 * clearance_per_side,
    )


def opening_height_for_bin_units(
    bin_units: int,
    construction: ConstructionMethod,
    vertical_clearance: float,
    bottom_thickness: float,
    dado_groove_offset: float,
) -> float:
    """Opening height whose drawer interior fits a ``bin_units`` tall bin.

    Inverts the construction-specific usable interior height: every method
    loses the vertical clearance and the bottom; dado also loses the groove
    offset below the bottom.
    """
    allowance = bottom_thickness + vertical_clearance
    if construction == ConstructionMethod.DADO:
        allowance += dado_groove_offset
    return grid_units_to_length(
        bin_units,
        BIN_HEIGHT_UNIT_MM,
        base_mm=BIN_HEIGHT_BASE_MM,
        allowance=allowance,
    )
