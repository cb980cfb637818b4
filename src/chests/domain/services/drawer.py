"""Drawer box sizing, face sizing and drawer panel list.

Box width comes from the column opening less slide clearance, box depth
from the slide length. Height, bottom size and usable interior depend on
the construction method; each method is one pure sizing function looked
up from ``CONSTRUCTION_STRATEGIES``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable

from chests.domain.entities import ChestConfig, Column, Row
from chests.domain.value_objects import (
    ConstructionMethod,
    CutPiece,
    DrawerBoxDimensions,
    DrawerMaterials,
    DrawerStyle,
    DrawerWarning,
    WarningType,
)

from .units import round_up_to_nearest_eighth

logger = logging.getLogger(__name__)

__all__ = [
    "CONSTRUCTION_STRATEGIES",
    "BoxParams",
    "ConstructionResult",
    "compute_all_drawer_boxes",
    "compute_drawer_box",
    "compute_face_dimensions",
    "drawer_pieces",
    "resolve_drawer_materials",
]


@dataclass(frozen=True)
class BoxParams:
    """Inputs shared by every construction sizing function."""

    opening_height: float
    vertical_clearance: float
    box_outer_width: float
    box_outer_depth: float
    side_thickness: float
    front_back_thickness: float
    bottom_thickness: float
    dado_groove_depth: float
    dado_groove_offset: float

    @property
    def front_back_length(self) -> float:
        """Front and back fit between the sides."""
        return self.box_outer_width - 2 * self.side_thickness

    @property
    def interior_depth(self) -> float:
        """Depth between the inside faces of front and back."""
        return self.box_outer_depth - 2 * self.front_back_thickness


@dataclass(frozen=True)
class ConstructionResult:
    """Construction-dependent part of a drawer box's dimensions."""

    side_height: float
    box_outer_height: float
    bottom_width: float
    bottom_depth: float
    usable_interior_height: float
    usable_interior_depth: float


def _size_dado(p: BoxParams) -> ConstructionResult:
    # Bottom extends into grooves on all four walls.
    side_height = p.opening_height - p.vertical_clearance
    return ConstructionResult(
        side_height=side_height,
        box_outer_height=side_height,
        bottom_width=p.front_back_length + 2 * p.dado_groove_depth,
        bottom_depth=p.interior_depth + 2 * p.dado_groove_depth,
        usable_interior_height=side_height - p.dado_groove_offset - p.bottom_thickness,
        usable_interior_depth=p.interior_depth,
    )


def _size_butt_through_sides(p: BoxParams) -> ConstructionResult:
    side_height = p.opening_height - p.vertical_clearance
    return ConstructionResult(
        side_height=side_height,
        box_outer_height=side_height,
        bottom_width=p.box_outer_width - 2 * p.side_thickness,
        bottom_depth=p.interior_depth,
        usable_interior_height=side_height - p.bottom_thickness,
        usable_interior_depth=p.interior_depth,
    )


def _size_butt_through_bottom(p: BoxParams) -> ConstructionResult:
    # Walls sit on the bottom, so they are shorter by its thickness.
    side_height = p.opening_height - p.vertical_clearance - p.bottom_thickness
    return ConstructionResult(
        side_height=side_height,
        box_outer_height=side_height + p.bottom_thickness,
        bottom_width=p.box_outer_width,
        bottom_depth=p.box_outer_depth,
        usable_interior_height=side_height,
        usable_interior_depth=p.interior_depth,
    )


CONSTRUCTION_STRATEGIES: dict[ConstructionMethod, Callable[[BoxParams], ConstructionResult]] = {
    ConstructionMethod.DADO: _size_dado,
    ConstructionMethod.BUTT_THROUGH_SIDES: _size_butt_through_sides,
    ConstructionMethod.BUTT_THROUGH_BOTTOM: _size_butt_through_bottom,
}


def resolve_drawer_materials(row: Row, config: ChestConfig) -> DrawerMaterials:
    """Drawer materials for a row.

    Row overrides are honored only in advanced material mode; otherwise
    they are ignored even when present.
    """
    base = config.materials
    override = row.material_override if config.advanced_material_mode else None
    if override is None:
        return DrawerMaterials(
            sides=base.drawer_sides,
            front_back=base.drawer_front_back,
            bottom=base.drawer_bottom,
            face=base.drawer_face,
        )
    return DrawerMaterials(
        sides=override.sides or base.drawer_sides,
        front_back=override.front_back or base.drawer_front_back,
        bottom=override.bottom or base.drawer_bottom,
        face=override.face or base.drawer_face,
    )


def compute_drawer_box(
    row: Row,
    column: Column,
    config: ChestConfig,
) -> DrawerBoxDimensions:
    """Compute every dimension of the drawer box for one opening.

    Args:
        row: The drawer row (opening height and construction).
        column: The column containing ``row`` (opening width).
        config: Chest configuration.

    Returns:
        DrawerBoxDimensions with advisory warnings attached.
    """
    materials = resolve_drawer_materials(row, config)
    box_outer_width = column.opening_width - 2 * config.slide_spec.clearance_per_side
    box_outer_depth = config.slide_spec.length

    params = BoxParams(
        opening_height=row.opening_height,
        vertical_clearance=config.drawer_vertical_clearance,
        box_outer_width=box_outer_width,
        box_outer_depth=box_outer_depth,
        side_thickness=materials.sides.actual,
        front_back_thickness=materials.front_back.actual,
        bottom_thickness=materials.bottom.actual,
        dado_groove_depth=config.dado_groove_depth,
        dado_groove_offset=config.dado_groove_offset,
    )
    result = CONSTRUCTION_STRATEGIES[row.construction](params)

    face_width, face_height = compute_face_dimensions(
        row,
        column,
        column.row_index(row),
        config.column_index(column),
        config,
    )

    box = DrawerBoxDimensions(
        column_id=column.id,
        row_id=row.id,
        box_outer_width=box_outer_width,
        box_outer_height=result.box_outer_height,
        box_outer_depth=box_outer_depth,
        usable_interior_width=params.front_back_length,
        usable_interior_height=result.usable_interior_height,
        usable_interior_depth=result.usable_interior_depth,
        side_length=box_outer_depth,
        side_height=result.side_height,
        front_back_length=params.front_back_length,
        front_back_height=result.side_height,
        bottom_width=round_up_to_nearest_eighth(result.bottom_width),
        bottom_depth=round_up_to_nearest_eighth(result.bottom_depth),
        face_width=round_up_to_nearest_eighth(face_width),
        face_height=round_up_to_nearest_eighth(face_height),
    )
    box = replace(box, warnings=_collect_warnings(box, row, config))

    logger.debug(
        "Drawer %s-%s (%s): box %.4f x %.4f x %.4f, %d warnings",
        column.id,
        row.id,
        row.construction.value,
        box.box_outer_width,
        box.box_outer_height,
        box.box_outer_depth,
        len(box.warnings),
    )
    return box


def compute_all_drawer_boxes(config: ChestConfig) -> list[DrawerBoxDimensions]:
    """Drawer boxes for every row, columns left to right, rows in order."""
    return [
        compute_drawer_box(row, column, config)
        for column in config.columns
        for row in column.rows
    ]


def _collect_warnings(
    box: DrawerBoxDimensions,
    row: Row,
    config: ChestConfig,
) -> tuple[DrawerWarning, ...]:
    slides = config.slide_spec
    warnings: list[DrawerWarning] = []

    if row.opening_height < slides.min_mounting_height:
        warnings.append(
            DrawerWarning(
                type=WarningType.SLIDE_HEIGHT,
                message=(
                    f"Opening height {row.opening_height:g} is less than minimum "
                    f"slide mounting height {slides.min_mounting_height:g}"
                ),
            )
        )

    if box.box_outer_depth > slides.length:
        warnings.append(
            DrawerWarning(
                type=WarningType.SLIDE_LENGTH,
                message=(
                    f"Drawer box depth {box.box_outer_depth:g} exceeds slide length "
                    f"{slides.length:g}; use a longer slide"
                ),
            )
        )

    if any(value <= 0 for value in box.structural_dimensions):
        warnings.append(
            DrawerWarning(
                type=WarningType.NEGATIVE_DIMENSION,
                message="One or more calculated dimensions are zero or negative",
            )
        )

    return tuple(warnings)


def compute_face_dimensions(
    row: Row,
    column: Column,
    row_index: int,
    column_index: int,
    config: ChestConfig,
) -> tuple[float, float]:
    """Unrounded drawer face (width, height) for one opening.

    Inset faces sit inside the opening with a reveal on every side. Overlay
    faces cover the carcass edges: a face on an outer edge takes the full
    side (or top/bottom) thickness, a face next to a divider (or rail) takes
    half of it, and reveals are shared between neighbours.
    """
    reveal = config.inset_reveal_gap

    if config.drawer_style == DrawerStyle.INSET:
        return (
            column.opening_width - 2 * reveal,
            row.opening_height - 2 * reveal,
        )

    materials = config.materials
    rails = config.horizontal_rails
    rail_thickness = rails.thickness.actual if rails.enabled else 0.0

    width = _overlay_extent(
        column.opening_width,
        column_index,
        config.column_count,
        materials.carcass_sides.actual,
        materials.carcass_dividers.actual,
        reveal,
    )
    height = _overlay_extent(
        row.opening_height,
        row_index,
        column.row_count,
        materials.carcass_top_bottom.actual,
        rail_thickness,
        reveal,
    )
    return width, height


def _overlay_extent(
    opening: float,
    index: int,
    count: int,
    edge_thickness: float,
    between_thickness: float,
    reveal: float,
) -> float:
    if count == 1:
        return opening + 2 * edge_thickness - reveal
    if index == 0 or index == count - 1:
        return opening + edge_thickness + between_thickness / 2 - reveal / 2
    return opening + between_thickness - reveal


def drawer_pieces(
    box: DrawerBoxDimensions,
    row: Row,
    config: ChestConfig,
) -> list[CutPiece]:
    """Panels that make up one drawer: sides, front, back, bottom and face."""
    materials = resolve_drawer_materials(row, config)
    prefix = f"{box.column_id}-{box.row_id}"
    name = f"Drawer {prefix}"

    return [
        CutPiece(
            id=f"{prefix}-side",
            label=f"{name} Side",
            width=box.side_length,
            height=box.side_height,
            thickness=materials.sides,
            quantity=2,
        ),
        CutPiece(
            id=f"{prefix}-front",
            label=f"{name} Front",
            width=box.front_back_length,
            height=box.front_back_height,
            thickness=materials.front_back,
        ),
        CutPiece(
            id=f"{prefix}-back",
            label=f"{name} Back",
            width=box.front_back_length,
            height=box.front_back_height,
            thickness=materials.front_back,
        ),
        CutPiece(
            id=f"{prefix}-bottom",
            label=f"{name} Bottom",
            width=box.bottom_width,
            height=box.bottom_depth,
            thickness=materials.bottom,
        ),
        CutPiece(
            id=f"{prefix}-face",
            label=f"{name} Face",
            width=box.face_width,
            height=box.face_height,
            thickness=materials.face,
        ),
    ]
