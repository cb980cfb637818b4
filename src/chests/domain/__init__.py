"""Domain layer - core business logic."""

from .entities import ChestConfig, Column, Row
from .services import (
    aggregate_cut_pieces,
    compute_all_drawer_boxes,
    compute_carcass,
    compute_drawer_box,
    create_default_config,
    should_recommend_rails,
)
from .value_objects import (
    CarcassDimensions,
    ConstructionMethod,
    CutPiece,
    Dimensions,
    DrawerBoxDimensions,
    DrawerStyle,
    MaterialThickness,
    StockSheet,
    Unit,
)

__all__ = [
    "CarcassDimensions",
    "ChestConfig",
    "Column",
    "ConstructionMethod",
    "CutPiece",
    "Dimensions",
    "DrawerBoxDimensions",
    "DrawerStyle",
    "MaterialThickness",
    "Row",
    "StockSheet",
    "Unit",
    "aggregate_cut_pieces",
    "compute_all_drawer_boxes",
    "compute_carcass",
    "compute_drawer_box",
    "create_default_config",
    "should_recommend_rails",
]
