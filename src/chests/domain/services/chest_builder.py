"""Construction of chest configurations: defaults, grid sizing, unit switching.

Every function returns a new ChestConfig; nothing is modified in place.
Grid-derived openings are computed in inches (the module grid rounds to
1/8") and converted to the configuration's unit afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from chests.domain.constants import (
    DEFAULT_BIN_HEIGHT_UNITS,
    DEFAULT_DADO_GROOVE_DEPTH,
    DEFAULT_DADO_GROOVE_OFFSET,
    DEFAULT_DRAWER_BACK_CLEARANCE,
    DEFAULT_DRAWER_VERTICAL_CLEARANCE,
    DEFAULT_GRID_WIDTH_UNITS,
    DEFAULT_HORIZONTAL_RAIL_WIDTH,
    DEFAULT_INSET_REVEAL_GAP,
    DEFAULT_KERF_WIDTH,
    DEFAULT_OVERLAY_OVERLAP,
    DEFAULT_ROW_COUNT,
    DEFAULT_SLIDE_CLEARANCE_PER_SIDE,
    DEFAULT_SLIDE_LENGTH,
    DEFAULT_SLIDE_MIN_MOUNTING_HEIGHT,
    find_thickness,
)
from chests.domain.entities import ChestConfig, Column, Row
from chests.domain.value_objects import (
    ConstructionMethod,
    Dimensions,
    DrawerMaterialOverride,
    DrawerStyle,
    HeightMode,
    HorizontalRailConfig,
    MaterialAssignments,
    MaterialThickness,
    SlideSpec,
    Unit,
)

from .grid_units import opening_height_for_bin_units, opening_width_for_grid_units
from .units import convert

logger = logging.getLogger(__name__)

__all__ = [
    "convert_config_units",
    "create_default_config",
    "grid_opening_height",
    "grid_opening_width",
    "make_column",
    "make_row",
    "recompute_grid_openings",
]


def _in_inches(value: float, unit: Unit) -> float:
    return convert(value, unit, Unit.INCHES)


def _from_inches(value: float, unit: Unit) -> float:
    return convert(value, Unit.INCHES, unit)


def grid_opening_width(
    grid_units: int,
    materials: MaterialAssignments,
    slide_spec: SlideSpec,
    unit: Unit = Unit.INCHES,
) -> float:
    """Column opening width that fits ``grid_units`` grid cells, in ``unit``."""
    width = opening_width_for_grid_units(
        grid_units,
        _in_inches(materials.drawer_sides.actual, unit),
        _in_inches(slide_spec.clearance_per_side, unit),
    )
    return _from_inches(width, unit)


def grid_opening_height(
    bin_units: int,
    construction: ConstructionMethod,
    config: ChestConfig,
) -> float:
    """Row opening height that fits a ``bin_units`` tall bin, in the config's unit."""
    unit = config.unit
    height = opening_height_for_bin_units(
        bin_units,
        construction,
        _in_inches(config.drawer_vertical_clearance, unit),
        _in_inches(config.materials.drawer_bottom.actual, unit),
        _in_inches(config.dado_groove_offset, unit),
    )
    return _from_inches(height, unit)


def make_row(
    row_id: str,
    construction: ConstructionMethod,
    bin_units: int,
    config: ChestConfig,
) -> Row:
    """A grid-mode row sized for ``bin_units``."""
    return Row(
        id=row_id,
        opening_height=grid_opening_height(bin_units, construction, config),
        construction=construction,
        bin_height_units=bin_units,
        height_mode=HeightMode.GRID,
    )


def make_column(
    column_id: str,
    grid_units: int,
    row_count: int,
    construction: ConstructionMethod,
    bin_units: int,
    config: ChestConfig,
) -> Column:
    """A grid-sized column of ``row_count`` identical rows."""
    rows = tuple(
        make_row(f"{column_id}-row-{index + 1}", construction, bin_units, config)
        for index in range(row_count)
    )
    return Column(
        id=column_id,
        opening_width=grid_opening_width(
            grid_units, config.materials, config.slide_spec, config.unit
        ),
        rows=rows,
        grid_width_units=grid_units,
    )


def create_default_config(name: str = "Untitled Chest") -> ChestConfig:
    """Default chest: one column of three dado drawers in 3/4" plywood.

    Drawer boxes are 1/2" plywood with 1/4" bottoms on 18" slides; openings
    are sized for 7 grid cells wide and 4-unit bins.
    """
    materials = MaterialAssignments(
        carcass_top_bottom=find_thickness("ply-3/4"),
        carcass_sides=find_thickness("ply-3/4"),
        carcass_dividers=find_thickness("ply-3/4"),
        carcass_back=find_thickness("ply-1/4"),
        horizontal_rails=find_thickness("ply-3/4"),
        drawer_sides=find_thickness("ply-1/2"),
        drawer_front_back=find_thickness("ply-1/2"),
        drawer_bottom=find_thickness("ply-1/4"),
        drawer_face=find_thickness("ply-3/4"),
    )
    slide_spec = SlideSpec(
        length=DEFAULT_SLIDE_LENGTH,
        clearance_per_side=DEFAULT_SLIDE_CLEARANCE_PER_SIDE,
        min_mounting_height=DEFAULT_SLIDE_MIN_MOUNTING_HEIGHT,
    )
    # Placeholder column, replaced once tolerances are in place.
    placeholder = Column(
        id="col-1",
        opening_width=grid_opening_width(DEFAULT_GRID_WIDTH_UNITS, materials, slide_spec),
        grid_width_units=DEFAULT_GRID_WIDTH_UNITS,
    )
    config = ChestConfig(
        name=name,
        columns=(placeholder,),
        materials=materials,
        slide_spec=slide_spec,
        horizontal_rails=HorizontalRailConfig(
            enabled=False,
            thickness=find_thickness("ply-3/4"),
            width=DEFAULT_HORIZONTAL_RAIL_WIDTH,
        ),
        drawer_style=DrawerStyle.OVERLAY,
        unit=Unit.INCHES,
        default_construction=ConstructionMethod.DADO,
        default_grid_width_units=DEFAULT_GRID_WIDTH_UNITS,
        default_bin_height_units=DEFAULT_BIN_HEIGHT_UNITS,
        kerf_width=DEFAULT_KERF_WIDTH,
        dado_groove_depth=DEFAULT_DADO_GROOVE_DEPTH,
        dado_groove_offset=DEFAULT_DADO_GROOVE_OFFSET,
        overlay_overlap=DEFAULT_OVERLAY_OVERLAP,
        inset_reveal_gap=DEFAULT_INSET_REVEAL_GAP,
        drawer_vertical_clearance=DEFAULT_DRAWER_VERTICAL_CLEARANCE,
        drawer_back_clearance=DEFAULT_DRAWER_BACK_CLEARANCE,
    )
    column = make_column(
        "col-1",
        DEFAULT_GRID_WIDTH_UNITS,
        DEFAULT_ROW_COUNT,
        config.default_construction,
        DEFAULT_BIN_HEIGHT_UNITS,
        config,
    )
    return replace(config, columns=(column,))


def recompute_grid_openings(config: ChestConfig) -> ChestConfig:
    """Re-derive grid-sized openings after a material or tolerance change.

    Columns with a positive grid width and rows in GRID mode with a positive
    bin count are resized; directly-sized openings are left alone.
    """
    columns: list[Column] = []
    for column in config.columns:
        rows = tuple(
            replace(
                row,
                opening_height=grid_opening_height(
                    row.bin_height_units, row.construction, config
                ),
            )
            if row.height_mode == HeightMode.GRID and row.bin_height_units > 0
            else row
            for row in column.rows
        )
        width = column.opening_width
        if column.grid_width_units > 0:
            width = grid_opening_width(
                column.grid_width_units, config.materials, config.slide_spec, config.unit
            )
        columns.append(replace(column, opening_width=width, rows=rows))
    return replace(config, columns=tuple(columns))


def _convert_thickness(
    thickness: MaterialThickness, c: Callable[[float], float]
) -> MaterialThickness:
    return replace(thickness, actual=c(thickness.actual))


def convert_config_units(config: ChestConfig, to_unit: Unit) -> ChestConfig:
    """Express every length of a configuration in ``to_unit``.

    Material thicknesses are converted along with openings and tolerances
    so the engine keeps working in a single unit. Thickness ids are kept,
    so pieces still group by material.
    """
    from_unit = config.unit
    if from_unit == to_unit:
        return config

    def c(value: float) -> float:
        return convert(value, from_unit, to_unit)

    materials = config.materials
    converted_materials = MaterialAssignments(
        carcass_top_bottom=_convert_thickness(materials.carcass_top_bottom, c),
        carcass_sides=_convert_thickness(materials.carcass_sides, c),
        carcass_dividers=_convert_thickness(materials.carcass_dividers, c),
        carcass_back=_convert_thickness(materials.carcass_back, c),
        horizontal_rails=_convert_thickness(materials.horizontal_rails, c),
        drawer_sides=_convert_thickness(materials.drawer_sides, c),
        drawer_front_back=_convert_thickness(materials.drawer_front_back, c),
        drawer_bottom=_convert_thickness(materials.drawer_bottom, c),
        drawer_face=_convert_thickness(materials.drawer_face, c),
    )

    columns = tuple(
        replace(
            column,
            opening_width=c(column.opening_width),
            rows=tuple(
                replace(
                    row,
                    opening_height=c(row.opening_height),
                    material_override=_convert_override(row.material_override, c),
                )
                for row in column.rows
            ),
        )
        for column in config.columns
    )

    constraints = None
    if config.constraints is not None:
        constraints = Dimensions(
            width=c(config.constraints.width),
            height=c(config.constraints.height),
            depth=c(config.constraints.depth),
        )

    rails = config.horizontal_rails
    thresholds = config.rail_thresholds

    logger.debug("Converting %s from %s to %s", config.name, from_unit.value, to_unit.value)

    return replace(
        config,
        unit=to_unit,
        columns=columns,
        materials=converted_materials,
        constraints=constraints,
        slide_spec=SlideSpec(
            length=c(config.slide_spec.length),
            clearance_per_side=c(config.slide_spec.clearance_per_side),
            min_mounting_height=c(config.slide_spec.min_mounting_height),
        ),
        horizontal_rails=replace(
            rails,
            thickness=_convert_thickness(rails.thickness, c),
            width=c(rails.width),
        ),
        rail_thresholds=replace(
            thresholds,
            width=c(thresholds.width),
            height=c(thresholds.height),
        ),
        kerf_width=c(config.kerf_width),
        dado_groove_depth=c(config.dado_groove_depth),
        dado_groove_offset=c(config.dado_groove_offset),
        overlay_overlap=c(config.overlay_overlap),
        inset_reveal_gap=c(config.inset_reveal_gap),
        drawer_vertical_clearance=c(config.drawer_vertical_clearance),
        drawer_back_clearance=c(config.drawer_back_clearance),
    )


def _convert_override(
    override: DrawerMaterialOverride | None, c: Callable[[float], float]
) -> DrawerMaterialOverride | None:
    if override is None:
        return None
    return replace(
        override,
        sides=_convert_thickness(override.sides, c) if override.sides else None,
        front_back=_convert_thickness(override.front_back, c) if override.front_back else None,
        bottom=_convert_thickness(override.bottom, c) if override.bottom else None,
        face=_convert_thickness(override.face, c) if override.face else None,
    )
