"""Stock catalog and default tolerances for chest construction.

This module provides:
- The catalog of common material thicknesses (nominal vs. actual)
- Standard drawer slide lengths
- Default joinery and clearance tolerances
- Standard stock sheet sizes
"""

from __future__ import annotations

from chests.domain.value_objects import MaterialCategory, MaterialThickness

INCHES_TO_CM = 2.54
MM_PER_INCH = 25.4


# Plywood is sold by nominal size but machined thinner; actual values are
# what the dimension engine uses.
MATERIAL_THICKNESSES: tuple[MaterialThickness, ...] = (
    MaterialThickness("ply-1/4", '1/4" plywood', 0.25, MaterialCategory.PLYWOOD),
    MaterialThickness("ply-1/2", '1/2" plywood', 0.46875, MaterialCategory.PLYWOOD),
    MaterialThickness("ply-3/4", '3/4" plywood', 0.71875, MaterialCategory.PLYWOOD),
    MaterialThickness("bb-1/4", '1/4" Baltic birch', 0.236, MaterialCategory.PLYWOOD),
    MaterialThickness("bb-1/2", '1/2" Baltic birch', 0.472, MaterialCategory.PLYWOOD),
    MaterialThickness("bb-3/4", '3/4" Baltic birch', 0.709, MaterialCategory.PLYWOOD),
    MaterialThickness("hw-1/4", '1/4" hardwood', 0.25, MaterialCategory.HARDWOOD),
    MaterialThickness("hw-1/2", '1/2" hardwood', 0.5, MaterialCategory.HARDWOOD),
    MaterialThickness("hw-3/4", '3/4" hardwood (4/4 S2S)', 0.75, MaterialCategory.HARDWOOD),
    MaterialThickness("hw-1", '1" hardwood (5/4 S2S)', 1.0625, MaterialCategory.HARDWOOD),
    MaterialThickness("mdf-1/4", '1/4" MDF', 0.25, MaterialCategory.MDF),
    MaterialThickness("mdf-1/2", '1/2" MDF', 0.5, MaterialCategory.MDF),
    MaterialThickness("mdf-3/4", '3/4" MDF', 0.75, MaterialCategory.MDF),
)

STANDARD_SLIDE_LENGTHS: tuple[float, ...] = (
    10.0, 12.0, 14.0, 16.0, 18.0, 20.0, 22.0, 24.0, 26.0, 28.0,
)

# Default tolerances, in inches
DEFAULT_SLIDE_LENGTH = 18.0
DEFAULT_SLIDE_CLEARANCE_PER_SIDE = 0.5
DEFAULT_SLIDE_MIN_MOUNTING_HEIGHT = 1.75
DEFAULT_DADO_GROOVE_DEPTH = 0.25
DEFAULT_DADO_GROOVE_OFFSET = 0.375
DEFAULT_OVERLAY_OVERLAP = 0.375
DEFAULT_INSET_REVEAL_GAP = 0.125
DEFAULT_DRAWER_VERTICAL_CLEARANCE = 0.25
DEFAULT_DRAWER_BACK_CLEARANCE = 0.5
DEFAULT_KERF_WIDTH = 0.125
DEFAULT_HORIZONTAL_RAIL_WIDTH = 3.0

DEFAULT_GRID_WIDTH_UNITS = 7
DEFAULT_BIN_HEIGHT_UNITS = 4
DEFAULT_ROW_COUNT = 3

# Standard stock sheet sizes (label, width, height) in inches
STOCK_SHEET_SIZES: tuple[tuple[str, float, float], ...] = (
    ("4' x 8'", 48.0, 96.0),
    ("4' x 4'", 48.0, 48.0),
    ("2' x 4'", 24.0, 48.0),
    ("2' x 2'", 24.0, 24.0),
)


def find_thickness(thickness_id: str) -> MaterialThickness:
    """Look up a catalog thickness by id.

    Args:
        thickness_id: Catalog id such as ``"ply-3/4"``.

    Returns:
        The matching MaterialThickness.

    Raises:
        KeyError: If the id is not in the catalog.
    """
    for thickness in MATERIAL_THICKNESSES:
        if thickness.id == thickness_id:
            return thickness
    raise KeyError(f"Unknown material thickness '{thickness_id}'")
