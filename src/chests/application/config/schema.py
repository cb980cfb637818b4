"""Pydantic configuration schema models for chest designs.

This module defines the schema for JSON chest configuration files. It uses
Pydantic v2 for validation and serialization.

Lengths are expressed in the chest's ``unit``. Tolerance and slide fields
left unset fall back to the standard defaults, converted to that unit.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from chests.domain.constants import MATERIAL_THICKNESSES
from chests.domain.value_objects import (
    ConstructionMethod,
    DrawerStyle,
    MaterialCategory,
    Unit,
)

# Supported schema versions for configuration files
# Version 1.0: Initial chest schema with grid-unit sizing and stock sheets
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

_CATALOG_IDS: frozenset[str] = frozenset(t.id for t in MATERIAL_THICKNESSES)


def default_column_id(index: int) -> str:
    """Id given to the column at ``index`` when the file names none."""
    return f"col-{index + 1}"


def default_row_id(column_id: str, index: int) -> str:
    """Id given to the row at ``index`` of ``column_id`` when the file names none."""
    return f"{column_id}-row-{index + 1}"


class MaterialThicknessConfig(BaseModel):
    """A material thickness, either from the catalog or custom.

    Catalog thicknesses are referenced by id alone (``{"id": "ply-3/4"}``).
    A custom thickness gives its own ``actual`` value in the chest's unit.

    Attributes:
        id: Catalog id, or a new id for a custom thickness.
        nominal: Display label (custom thicknesses only).
        actual: Measured thickness (custom thicknesses only).
        material: Material category (custom thicknesses only).
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    nominal: str | None = None
    actual: float | None = Field(default=None, gt=0)
    material: MaterialCategory | None = None

    @model_validator(mode="after")
    def validate_catalog_or_custom(self) -> "MaterialThicknessConfig":
        """Require a known catalog id unless an actual thickness is given."""
        if self.actual is None and self.id not in _CATALOG_IDS:
            raise ValueError(
                f"Unknown material thickness '{self.id}'. Use a catalog id "
                f"({', '.join(sorted(_CATALOG_IDS))}) or give an 'actual' value."
            )
        return self


def _thickness(thickness_id: str) -> MaterialThicknessConfig:
    return MaterialThicknessConfig(id=thickness_id)


class MaterialsConfigSchema(BaseModel):
    """Material thickness per structural role.

    Defaults: 3/4" plywood carcass, rails and faces; 1/2" plywood drawer
    sides and fronts; 1/4" plywood back and drawer bottoms.
    """

    model_config = ConfigDict(extra="forbid")

    carcass_top_bottom: MaterialThicknessConfig = Field(default_factory=lambda: _thickness("ply-3/4"))
    carcass_sides: MaterialThicknessConfig = Field(default_factory=lambda: _thickness("ply-3/4"))
    carcass_dividers: MaterialThicknessConfig = Field(default_factory=lambda: _thickness("ply-3/4"))
    carcass_back: MaterialThicknessConfig = Field(default_factory=lambda: _thickness("ply-1/4"))
    horizontal_rails: MaterialThicknessConfig = Field(default_factory=lambda: _thickness("ply-3/4"))
    drawer_sides: MaterialThicknessConfig = Field(default_factory=lambda: _thickness("ply-1/2"))
    drawer_front_back: MaterialThicknessConfig = Field(default_factory=lambda: _thickness("ply-1/2"))
    drawer_bottom: MaterialThicknessConfig = Field(default_factory=lambda: _thickness("ply-1/4"))
    drawer_face: MaterialThicknessConfig = Field(default_factory=lambda: _thickness("ply-3/4"))


class DrawerMaterialOverrideConfig(BaseModel):
    """Per-row drawer material overrides (used in advanced material mode)."""

    model_config = ConfigDict(extra="forbid")

    sides: MaterialThicknessConfig | None = None
    front_back: MaterialThicknessConfig | None = None
    bottom: MaterialThicknessConfig | None = None
    face: MaterialThicknessConfig | None = None


class RowConfig(BaseModel):
    """Configuration for one drawer opening.

    A row is sized in one of two ways:
    1. Direct: ``opening_height`` gives the clear opening height
    2. Grid: ``bin_height_units`` sizes the opening for a storage bin that
       many units tall (the chest default is used when neither is given)

    Attributes:
        id: Row identifier (defaults to ``<column id>-row-<n>``)
        opening_height: Direct opening height
        bin_height_units: Bin height units for grid sizing (1 to 12)
        construction: Drawer box joinery (defaults to the chest default)
        materials: Per-row drawer material overrides
    """

    model_config = ConfigDict(extra="forbid")

    id: str | None = Field(default=None, min_length=1)
    opening_height: float | None = Field(default=None, gt=0)
    bin_height_units: int | None = Field(default=None, ge=1, le=12)
    construction: ConstructionMethod | None = None
    materials: DrawerMaterialOverrideConfig | None = None

    @model_validator(mode="after")
    def validate_single_height_source(self) -> "RowConfig":
        """Validate that direct and grid heights are mutually exclusive."""
        if self.opening_height is not None and self.bin_height_units is not None:
            raise ValueError(
                "Cannot specify both 'opening_height' and 'bin_height_units'"
            )
        return self


class ColumnConfig(BaseModel):
    """Configuration for a vertical stack of drawers.

    The column width is either a direct ``opening_width`` or derived from
    ``grid_width_units`` (the chest default is used when neither is given).

    Attributes:
        id: Column identifier (defaults to ``col-<n>``)
        opening_width: Direct opening width
        grid_width_units: Grid cells across the drawer interior (1 to 20)
        rows: Drawer rows from top to bottom
    """

    model_config = ConfigDict(extra="forbid")

    id: str | None = Field(default=None, min_length=1)
    opening_width: float | None = Field(default=None, gt=0)
    grid_width_units: int | None = Field(default=None, ge=1, le=20)
    rows: list[RowConfig] = Field(..., min_length=1, max_length=20)

    @model_validator(mode="after")
    def validate_single_width_source(self) -> "ColumnConfig":
        """Validate that direct and grid widths are mutually exclusive."""
        if self.opening_width is not None and self.grid_width_units is not None:
            raise ValueError(
                "Cannot specify both 'opening_width' and 'grid_width_units'"
            )
        return self

    def row_ids(self, column_id: str) -> list[str]:
        """Row ids, with ``<column>-row-<n>`` filled in where none is given."""
        return [row.id or default_row_id(column_id, n) for n, row in enumerate(self.rows)]


class ConstraintsConfigSchema(BaseModel):
    """Maximum outer dimensions for the carcass."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)


class SlideConfigSchema(BaseModel):
    """Drawer slide specification (defaults: 18" slides, 1/2" clearance)."""

    model_config = ConfigDict(extra="forbid")

    length: float | None = Field(default=None, gt=0)
    clearance_per_side: float | None = Field(default=None, ge=0)
    min_mounting_height: float | None = Field(default=None, ge=0)


class HorizontalRailConfigSchema(BaseModel):
    """Horizontal rails between rows.

    Attributes:
        enabled: Whether rails are built between rows
        thickness: Rail stock (defaults to the ``horizontal_rails`` material)
        width: Rail face width (default 3")
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    thickness: MaterialThicknessConfig | None = None
    width: float | None = Field(default=None, gt=0)


class RailThresholdsConfigSchema(BaseModel):
    """Chest size above which rails are recommended."""

    model_config = ConfigDict(extra="forbid")

    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    max_rows_before_recommend: int = Field(default=5, ge=1)


class TolerancesConfigSchema(BaseModel):
    """Joinery and clearance tolerances; unset values use the defaults."""

    model_config = ConfigDict(extra="forbid")

    kerf_width: float | None = Field(default=None, ge=0)
    dado_groove_depth: float | None = Field(default=None, ge=0)
    dado_groove_offset: float | None = Field(default=None, ge=0)
    overlay_overlap: float | None = Field(default=None, ge=0)
    inset_reveal_gap: float | None = Field(default=None, ge=0)
    drawer_vertical_clearance: float | None = Field(default=None, ge=0)
    drawer_back_clearance: float | None = Field(default=None, ge=0)


class ChestConfigSchema(BaseModel):
    """Chest structure, materials and hardware.

    Attributes:
        name: Chest name
        unit: Unit of every length in this configuration
        constraints: Optional maximum outer dimensions
        drawer_style: Overlay or inset drawer faces
        default_construction: Joinery for rows that do not set one
        default_grid_width_units: Grid width for columns without a width
        default_bin_height_units: Bin units for rows without a height
        columns: Columns from left to right
        materials: Material thickness per role
        advanced_material_mode: Enables per-row material overrides
        slides: Drawer slide specification
        horizontal_rails: Rails between rows
        rail_thresholds: Size limits for recommending rails
        tolerances: Joinery and clearance tolerances
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="Untitled Chest", min_length=1)
    unit: Unit = Unit.INCHES
    constraints: ConstraintsConfigSchema | None = None
    drawer_style: DrawerStyle = DrawerStyle.OVERLAY
    default_construction: ConstructionMethod = ConstructionMethod.DADO
    default_grid_width_units: int = Field(default=7, ge=1, le=20)
    default_bin_height_units: int = Field(default=4, ge=1, le=12)
    columns: list[ColumnConfig] = Field(..., min_length=1, max_length=10)
    materials: MaterialsConfigSchema = Field(default_factory=MaterialsConfigSchema)
    advanced_material_mode: bool = False
    slides: SlideConfigSchema = Field(default_factory=SlideConfigSchema)
    horizontal_rails: HorizontalRailConfigSchema = Field(
        default_factory=HorizontalRailConfigSchema
    )
    rail_thresholds: RailThresholdsConfigSchema = Field(
        default_factory=RailThresholdsConfigSchema
    )
    tolerances: TolerancesConfigSchema = Field(default_factory=TolerancesConfigSchema)

    def column_ids(self) -> list[str]:
        """Column ids, with ``col-<n>`` filled in where none is given."""
        return [column.id or default_column_id(i) for i, column in enumerate(self.columns)]

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "ChestConfigSchema":
        """Validate that column ids, and row ids per column, are unique.

        Generated ids count too, so an explicit ``col-2`` on the first
        column clashes with an unnamed second column.
        """
        column_ids = self.column_ids()
        if len(column_ids) != len(set(column_ids)):
            raise ValueError(f"Column ids must be unique, got {column_ids}")
        for column_id, column in zip(column_ids, self.columns):
            row_ids = column.row_ids(column_id)
            if len(row_ids) != len(set(row_ids)):
                raise ValueError(
                    f"Row ids must be unique within column '{column_id}', got {row_ids}"
                )
        return self


class StockSheetConfigSchema(BaseModel):
    """Stock sheet size for one material thickness."""

    model_config = ConfigDict(extra="forbid")

    thickness_id: str = Field(..., min_length=1)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    label: str | None = None


class StockConfigSchema(BaseModel):
    """Stock sheets and cutting options for sheet optimization.

    Attributes:
        sheets: Sheet size per thickness id; others use 4' x 8' sheets
        kerf: Saw kerf override (defaults to ``tolerances.kerf_width``)
        allow_rotation: Whether pieces may be turned 90 degrees
    """

    model_config = ConfigDict(extra="forbid")

    sheets: list[StockSheetConfigSchema] = Field(default_factory=list)
    kerf: float | None = Field(default=None, ge=0)
    allow_rotation: bool = True

    @field_validator("sheets")
    @classmethod
    def validate_one_sheet_per_thickness(
        cls, v: list[StockSheetConfigSchema]
    ) -> list[StockSheetConfigSchema]:
        """Validate that each thickness has at most one stock sheet."""
        ids = [sheet.thickness_id for sheet in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Only one stock sheet may be given per thickness_id")
        return v


class ChestConfiguration(BaseModel):
    """Root configuration model for chest designs.

    Example:
        >>> config = ChestConfiguration(
        ...     schema_version="1.0",
        ...     chest=ChestConfigSchema(columns=[ColumnConfig(rows=[RowConfig()])]),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    chest: ChestConfigSchema
    stock: StockConfigSchema = Field(default_factory=StockConfigSchema)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minor versions of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v
        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v
        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {', '.join(sorted(SUPPORTED_VERSIONS))}"
        )


__all__ = [
    "SUPPORTED_VERSIONS",
    "ChestConfigSchema",
    "ChestConfiguration",
    "ColumnConfig",
    "ConstraintsConfigSchema",
    "DrawerMaterialOverrideConfig",
    "HorizontalRailConfigSchema",
    "MaterialThicknessConfig",
    "MaterialsConfigSchema",
    "RailThresholdsConfigSchema",
    "RowConfig",
    "SlideConfigSchema",
    "StockConfigSchema",
    "StockSheetConfigSchema",
    "TolerancesConfigSchema",
    "default_column_id",
    "default_row_id",
]
