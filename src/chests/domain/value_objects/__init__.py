"""Value objects for the chest-of-drawers domain.

This module provides immutable data types used throughout the chest
system. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Design options
from ._options import (
    ConstructionMethod,
    DrawerStyle,
    HeightMode,
    Unit,
    WarningType,
)

# Materials
from ._materials import (
    DrawerMaterialOverride,
    DrawerMaterials,
    MaterialAssignments,
    MaterialCategory,
    MaterialThickness,
)

# Hardware
from ._hardware import (
    HorizontalRailConfig,
    RailThresholds,
    SlideSpec,
)

# Derived dimensions
from ._dimensions import (
    CarcassDimensions,
    ConstraintViolation,
    DimensionName,
    Dimensions,
    DrawerBoxDimensions,
    DrawerWarning,
)

# Cut list
from ._pieces import (
    CutPiece,
    StockSheet,
)

__all__ = [
    # Options
    "ConstructionMethod",
    "DrawerStyle",
    "HeightMode",
    "Unit",
    "WarningType",
    # Materials
    "DrawerMaterialOverride",
    "DrawerMaterials",
    "MaterialAssignments",
    "MaterialCategory",
    "MaterialThickness",
    # Hardware
    "HorizontalRailConfig",
    "RailThresholds",
    "SlideSpec",
    # Dimensions
    "CarcassDimensions",
    "ConstraintViolation",
    "DimensionName",
    "Dimensions",
    "DrawerBoxDimensions",
    "DrawerWarning",
    # Cut list
    "CutPiece",
    "StockSheet",
]
