"""Domain entities for a chest of drawers.

Entities are frozen: an edit produces a new configuration via
``dataclasses.replace`` and every derived dimension is recomputed from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .value_objects import (
    ConstructionMethod,
    Dimensions,
    DrawerMaterialOverride,
    DrawerStyle,
    HeightMode,
    HorizontalRailConfig,
    MaterialAssignments,
    RailThresholds,
    SlideSpec,
    Unit,
)


@dataclass(frozen=True)
class Row:
    """One drawer opening within a column.

    Attributes:
        id: Identifier unique within the column.
        opening_height: Clear height of the carcass opening.
        construction: Drawer box joinery method.
        bin_height_units: Module count the opening was sized for.
        height_mode: GRID when opening_height is derived from bin_height_units.
        material_override: Per-row drawer materials (advanced mode only).
    """

    id: str
    opening_height: float
    construction: ConstructionMethod = ConstructionMethod.DADO
    bin_height_units: int = 0
    height_mode: HeightMode = HeightMode.GRID
    material_override: DrawerMaterialOverride | None = None


@dataclass(frozen=True)
class Column:
    """A vertical stack of drawer rows sharing one opening width."""

    id: str
    opening_width: float
    rows: tuple[Row, ...] = ()
    grid_width_units: int = 0

    @property
    def row_count(self) -> int:
        """Number of drawers stacked in this column."""
        return len(self.rows)

    def row_index(self, row: Row) -> int:
        """Position of ``row`` within this column, matched by id."""
        for index, candidate in enumerate(self.rows):
            if candidate.id == row.id:
                return index
        raise ValueError(f"Row '{row.id}' is not part of column '{self.id}'")


@dataclass(frozen=True)
class ChestConfig:
    """Root aggregate describing a chest of drawers.

    Attributes:
        columns: Columns ordered left to right.
        materials: Material thickness per structural role.
        slide_spec: Drawer slide specification.
        horizontal_rails: Optional rails between rows.
        drawer_style: Overlay or inset drawer faces.
        unit: Unit every length in this configuration is expressed in.
        constraints: Optional maximum outer dimensions.
        advanced_material_mode: Enables per-row material overrides.
        kerf_width: Saw blade kerf.
        dado_groove_depth: Depth of the drawer bottom groove.
        dado_groove_offset: Groove distance from the bottom edge of drawer sides.
        overlay_overlap: Nominal overlay face overlap.
        inset_reveal_gap: Reveal between faces and the carcass.
        drawer_vertical_clearance: Opening height minus drawer box height.
        drawer_back_clearance: Space behind the slide inside the carcass.
        rail_thresholds: Limits above which rails are recommended.
    """

    name: str
    columns: tuple[Column, ...]
    materials: MaterialAssignments
    slide_spec: SlideSpec
    horizontal_rails: HorizontalRailConfig
    drawer_style: DrawerStyle = DrawerStyle.OVERLAY
    unit: Unit = Unit.INCHES
    constraints: Dimensions | None = None
    default_construction: ConstructionMethod = ConstructionMethod.DADO
    default_grid_width_units: int = 7
    default_bin_height_units: int = 4
    advanced_material_mode: bool = False
    kerf_width: float = 0.125
    dado_groove_depth: float = 0.25
    dado_groove_offset: float = 0.375
    overlay_overlap: float = 0.375
    inset_reveal_gap: float = 0.125
    drawer_vertical_clearance: float = 0.25
    drawer_back_clearance: float = 0.5
    rail_thresholds: RailThresholds = field(default_factory=RailThresholds)

    def __post_init__(self) -> None:
        if not self.columns:
            raise ValueError("A chest needs at least one column")
        if self.kerf_width < 0:
            raise ValueError("Kerf width must be non-negative")

    @property
    def column_count(self) -> int:
        """Number of columns in the chest."""
        return len(self.columns)

    def column_index(self, column: Column) -> int:
        """Position of ``column`` in this chest, matched by id."""
        for index, candidate in enumerate(self.columns):
            if candidate.id == column.id:
                return index
        raise ValueError(f"Column '{column.id}' is not part of this chest")
