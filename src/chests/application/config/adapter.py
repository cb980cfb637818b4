"""Adapters between the configuration schema and domain objects.

``config_to_chest`` turns a validated ChestConfiguration into the immutable
domain ChestConfig. Grid-sized columns and rows get their openings derived
here, after materials and tolerances are known.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from chests.application.config.schema import (
    ChestConfigSchema,
    ChestConfiguration,
    ColumnConfig,
    ConstraintsConfigSchema,
    DrawerMaterialOverrideConfig,
    HorizontalRailConfigSchema,
    MaterialsConfigSchema,
    MaterialThicknessConfig,
    RailThresholdsConfigSchema,
    RowConfig,
    SlideConfigSchema,
    StockConfigSchema,
    StockSheetConfigSchema,
    TolerancesConfigSchema,
)
from chests.domain.constants import (
    DEFAULT_DADO_GROOVE_DEPTH,
    DEFAULT_DADO_GROOVE_OFFSET,
    DEFAULT_DRAWER_BACK_CLEARANCE,
    DEFAULT_DRAWER_VERTICAL_CLEARANCE,
    DEFAULT_HORIZONTAL_RAIL_WIDTH,
    DEFAULT_INSET_REVEAL_GAP,
    DEFAULT_KERF_WIDTH,
    DEFAULT_OVERLAY_OVERLAP,
    DEFAULT_SLIDE_CLEARANCE_PER_SIDE,
    DEFAULT_SLIDE_LENGTH,
    DEFAULT_SLIDE_MIN_MOUNTING_HEIGHT,
    MATERIAL_THICKNESSES,
    find_thickness,
)
from chests.domain.entities import ChestConfig, Column, Row
from chests.domain.services import all_cut_pieces, recompute_grid_openings, unique_thicknesses
from chests.domain.services.units import convert
from chests.domain.value_objects import (
    Dimensions,
    DrawerMaterialOverride,
    HeightMode,
    HorizontalRailConfig,
    MaterialAssignments,
    MaterialCategory,
    MaterialThickness,
    RailThresholds,
    SlideSpec,
    StockSheet,
    Unit,
)
from chests.infrastructure.bin_packing import default_sheet_for

logger = logging.getLogger(__name__)

__all__ = [
    "chest_to_config",
    "config_to_chest",
    "config_to_stock_sheets",
    "thickness_from_config",
]

_CATALOG = {t.id: t for t in MATERIAL_THICKNESSES}


def thickness_from_config(config: MaterialThicknessConfig, unit: Unit) -> MaterialThickness:
    """Resolve a configured thickness to a domain MaterialThickness in ``unit``.

    Catalog thicknesses are stored in inches and converted; custom
    thicknesses are taken as given.
    """
    if config.actual is not None:
        return MaterialThickness(
            id=config.id,
            nominal=config.nominal or config.id,
            actual=config.actual,
            material=config.material or MaterialCategory.CUSTOM,
        )
    catalog = find_thickness(config.id)
    return replace(catalog, actual=convert(catalog.actual, Unit.INCHES, unit))


def _length(value: float | None, default_inches: float, unit: Unit) -> float:
    if value is not None:
        return value
    return convert(default_inches, Unit.INCHES, unit)


def _materials(config: MaterialsConfigSchema, unit: Unit) -> MaterialAssignments:
    return MaterialAssignments(
        carcass_top_bottom=thickness_from_config(config.carcass_top_bottom, unit),
        carcass_sides=thickness_from_config(config.carcass_sides, unit),
        carcass_dividers=thickness_from_config(config.carcass_dividers, unit),
        carcass_back=thickness_from_config(config.carcass_back, unit),
        horizontal_rails=thickness_from_config(config.horizontal_rails, unit),
        drawer_sides=thickness_from_config(config.drawer_sides, unit),
        drawer_front_back=thickness_from_config(config.drawer_front_back, unit),
        drawer_bottom=thickness_from_config(config.drawer_bottom, unit),
        drawer_face=thickness_from_config(config.drawer_face, unit),
    )


def _override(
    config: DrawerMaterialOverrideConfig | None, unit: Unit
) -> DrawerMaterialOverride | None:
    if config is None:
        return None

    def resolve(thickness: MaterialThicknessConfig | None) -> MaterialThickness | None:
        return thickness_from_config(thickness, unit) if thickness is not None else None

    return DrawerMaterialOverride(
        sides=resolve(config.sides),
        front_back=resolve(config.front_back),
        bottom=resolve(config.bottom),
        face=resolve(config.face),
    )


def _row(row: RowConfig, row_id: str, chest: ChestConfigSchema) -> Row:
    construction = row.construction or chest.default_construction
    override = _override(row.materials, chest.unit)
    if row.opening_height is not None:
        return Row(
            id=row_id,
            opening_height=row.opening_height,
            construction=construction,
            height_mode=HeightMode.DIRECT,
            material_override=override,
        )
    # Opening height is derived from the bin units once the chest is assembled.
    return Row(
        id=row_id,
        opening_height=0.0,
        construction=construction,
        bin_height_units=row.bin_height_units or chest.default_bin_height_units,
        height_mode=HeightMode.GRID,
        material_override=override,
    )


def _column(column: ColumnConfig, column_id: str, chest: ChestConfigSchema) -> Column:
    rows = tuple(
        _row(row, row_id, chest) for row, row_id in zip(column.rows, column.row_ids(column_id))
    )
    if column.opening_width is not None:
        return Column(id=column_id, opening_width=column.opening_width, rows=rows)
    return Column(
        id=column_id,
        opening_width=0.0,
        rows=rows,
        grid_width_units=column.grid_width_units or chest.default_grid_width_units,
    )


def config_to_chest(config: ChestConfiguration) -> ChestConfig:
    """Convert a validated configuration to a domain ChestConfig.

    Args:
        config: A validated ChestConfiguration instance

    Returns:
        ChestConfig with every grid-sized opening derived
    """
    chest = config.chest
    unit = chest.unit
    materials = _materials(chest.materials, unit)

    rails = chest.horizontal_rails
    rail_thickness = (
        thickness_from_config(rails.thickness, unit)
        if rails.thickness is not None
        else materials.horizontal_rails
    )

    slides = chest.slides
    tolerances = chest.tolerances
    thresholds = chest.rail_thresholds
    defaults = RailThresholds()

    constraints = None
    if chest.constraints is not None:
        constraints = Dimensions(
            width=chest.constraints.width,
            height=chest.constraints.height,
            depth=chest.constraints.depth,
        )

    assembled = ChestConfig(
        name=chest.name,
        columns=tuple(
            _column(column, column_id, chest)
            for column, column_id in zip(chest.columns, chest.column_ids())
        ),
        materials=materials,
        slide_spec=SlideSpec(
            length=_length(slides.length, DEFAULT_SLIDE_LENGTH, unit),
            clearance_per_side=_length(
                slides.clearance_per_side, DEFAULT_SLIDE_CLEARANCE_PER_SIDE, unit
            ),
            min_mounting_height=_length(
                slides.min_mounting_height, DEFAULT_SLIDE_MIN_MOUNTING_HEIGHT, unit
            ),
        ),
        horizontal_rails=HorizontalRailConfig(
            enabled=rails.enabled,
            thickness=rail_thickness,
            width=_length(rails.width, DEFAULT_HORIZONTAL_RAIL_WIDTH, unit),
        ),
        drawer_style=chest.drawer_style,
        unit=unit,
        constraints=constraints,
        default_construction=chest.default_construction,
        default_grid_width_units=chest.default_grid_width_units,
        default_bin_height_units=chest.default_bin_height_units,
        advanced_material_mode=chest.advanced_material_mode,
        kerf_width=_length(tolerances.kerf_width, DEFAULT_KERF_WIDTH, unit),
        dado_groove_depth=_length(tolerances.dado_groove_depth, DEFAULT_DADO_GROOVE_DEPTH, unit),
        dado_groove_offset=_length(
            tolerances.dado_groove_offset, DEFAULT_DADO_GROOVE_OFFSET, unit
        ),
        overlay_overlap=_length(tolerances.overlay_overlap, DEFAULT_OVERLAY_OVERLAP, unit),
        inset_reveal_gap=_length(tolerances.inset_reveal_gap, DEFAULT_INSET_REVEAL_GAP, unit),
        drawer_vertical_clearance=_length(
            tolerances.drawer_vertical_clearance, DEFAULT_DRAWER_VERTICAL_CLEARANCE, unit
        ),
        drawer_back_clearance=_length(
            tolerances.drawer_back_clearance, DEFAULT_DRAWER_BACK_CLEARANCE, unit
        ),
        rail_thresholds=RailThresholds(
            width=_length(thresholds.width, defaults.width, unit),
            height=_length(thresholds.height, defaults.height, unit),
            max_rows_before_recommend=thresholds.max_rows_before_recommend,
        ),
    )

    logger.debug(
        "Adapted configuration %s: %d columns, unit %s",
        chest.name,
        assembled.column_count,
        unit.value,
    )
    return recompute_grid_openings(assembled)


def config_to_stock_sheets(
    config: ChestConfiguration,
    chest: ChestConfig,
) -> dict[str, StockSheet]:
    """Stock sheet for every thickness the chest's cut list uses.

    Thicknesses without a configured sheet get a full 4' x 8' sheet.

    Args:
        config: A validated ChestConfiguration instance
        chest: The domain configuration built from it

    Returns:
        Mapping of thickness id to StockSheet
    """
    configured = {sheet.thickness_id: sheet for sheet in config.stock.sheets}
    sheets: dict[str, StockSheet] = {}
    for thickness in unique_thicknesses(all_cut_pieces(chest)):
        entry = configured.get(thickness.id)
        if entry is None:
            sheets[thickness.id] = default_sheet_for(thickness, chest.unit)
            continue
        sheets[thickness.id] = StockSheet(
            id=f"sheet-{thickness.id}",
            label=entry.label or f"{entry.width:g} x {entry.height:g}",
            width=entry.width,
            height=entry.height,
            thickness=thickness,
        )

    unused = set(configured) - set(sheets)
    if unused:
        logger.debug("Stock sheets for unused thicknesses ignored: %s", sorted(unused))
    return sheets


def _thickness_to_config(thickness: MaterialThickness, unit: Unit) -> MaterialThicknessConfig:
    catalog = _CATALOG.get(thickness.id)
    if catalog is not None and replace(
        catalog, actual=convert(catalog.actual, Unit.INCHES, unit)
    ) == thickness:
        return MaterialThicknessConfig(id=thickness.id)
    return MaterialThicknessConfig(
        id=thickness.id,
        nominal=thickness.nominal,
        actual=thickness.actual,
        material=thickness.material,
    )


def _override_to_config(
    override: DrawerMaterialOverride | None, unit: Unit
) -> DrawerMaterialOverrideConfig | None:
    if override is None:
        return None

    def to_config(thickness: MaterialThickness | None) -> MaterialThicknessConfig | None:
        return _thickness_to_config(thickness, unit) if thickness is not None else None

    return DrawerMaterialOverrideConfig(
        sides=to_config(override.sides),
        front_back=to_config(override.front_back),
        bottom=to_config(override.bottom),
        face=to_config(override.face),
    )


def _row_to_config(row: Row, unit: Unit) -> RowConfig:
    materials = _override_to_config(row.material_override, unit)
    if row.height_mode == HeightMode.GRID and row.bin_height_units > 0:
        return RowConfig(
            id=row.id,
            bin_height_units=row.bin_height_units,
            construction=row.construction,
            materials=materials,
        )
    return RowConfig(
        id=row.id,
        opening_height=row.opening_height,
        construction=row.construction,
        materials=materials,
    )


def _column_to_config(column: Column, unit: Unit) -> ColumnConfig:
    rows = [_row_to_config(row, unit) for row in column.rows]
    if column.grid_width_units > 0:
        return ColumnConfig(id=column.id, grid_width_units=column.grid_width_units, rows=rows)
    return ColumnConfig(id=column.id, opening_width=column.opening_width, rows=rows)


def chest_to_config(
    chest: ChestConfig,
    stock_sheets: dict[str, StockSheet] | None = None,
) -> ChestConfiguration:
    """Express a domain ChestConfig as a configuration file model.

    Every tolerance is written out explicitly so the file is self-describing.
    """
    unit = chest.unit
    materials = chest.materials
    thresholds = chest.rail_thresholds

    constraints = None
    if chest.constraints is not None:
        constraints = ConstraintsConfigSchema(
            width=chest.constraints.width,
            height=chest.constraints.height,
            depth=chest.constraints.depth,
        )

    return ChestConfiguration(
        schema_version="1.0",
        chest=ChestConfigSchema(
            name=chest.name,
            unit=unit,
            constraints=constraints,
            drawer_style=chest.drawer_style,
            default_construction=chest.default_construction,
            default_grid_width_units=chest.default_grid_width_units,
            default_bin_height_units=chest.default_bin_height_units,
            columns=[_column_to_config(column, unit) for column in chest.columns],
            materials=MaterialsConfigSchema(
                carcass_top_bottom=_thickness_to_config(materials.carcass_top_bottom, unit),
                carcass_sides=_thickness_to_config(materials.carcass_sides, unit),
                carcass_dividers=_thickness_to_config(materials.carcass_dividers, unit),
                carcass_back=_thickness_to_config(materials.carcass_back, unit),
                horizontal_rails=_thickness_to_config(materials.horizontal_rails, unit),
                drawer_sides=_thickness_to_config(materials.drawer_sides, unit),
                drawer_front_back=_thickness_to_config(materials.drawer_front_back, unit),
                drawer_bottom=_thickness_to_config(materials.drawer_bottom, unit),
                drawer_face=_thickness_to_config(materials.drawer_face, unit),
            ),
            advanced_material_mode=chest.advanced_material_mode,
            slides=SlideConfigSchema(
                length=chest.slide_spec.length,
                clearance_per_side=chest.slide_spec.clearance_per_side,
                min_mounting_height=chest.slide_spec.min_mounting_height,
            ),
            horizontal_rails=HorizontalRailConfigSchema(
                enabled=chest.horizontal_rails.enabled,
                thickness=_thickness_to_config(chest.horizontal_rails.thickness, unit),
                width=chest.horizontal_rails.width,
            ),
            rail_thresholds=RailThresholdsConfigSchema(
                width=thresholds.width,
                height=thresholds.height,
                max_rows_before_recommend=thresholds.max_rows_before_recommend,
            ),
            tolerances=TolerancesConfigSchema(
                kerf_width=chest.kerf_width,
                dado_groove_depth=chest.dado_groove_depth,
                dado_groove_offset=chest.dado_groove_offset,
                overlay_overlap=chest.overlay_overlap,
                inset_reveal_gap=chest.inset_reveal_gap,
                drawer_vertical_clearance=chest.drawer_vertical_clearance,
                drawer_back_clearance=chest.drawer_back_clearance,
            ),
        ),
        stock=StockConfigSchema(
            sheets=[
                StockSheetConfigSchema(
                    thickness_id=thickness_id,
                    width=sheet.width,
                    height=sheet.height,
                    label=sheet.label,
                )
                for thickness_id, sheet in (stock_sheets or {}).items()
            ],
        ),
    )
