"""Carcass sizing, constraint checks and carcass panel list."""

from __future__ import annotations

import logging

from chests.domain.entities import ChestConfig, Column
from chests.domain.value_objects import (
    CarcassDimensions,
    ConstraintViolation,
    CutPiece,
    DimensionName,
    Dimensions,
)

logger = logging.getLogger(__name__)

__all__ = [
    "carcass_pieces",
    "check_constraint_violations",
    "column_dead_space",
    "column_inner_height",
    "compute_carcass",
    "should_recommend_rails",
]

_CHECKED_DIMENSIONS: tuple[DimensionName, ...] = ("width", "height", "depth")


def column_inner_height(column: Column, config: ChestConfig) -> float:
    """Stacked height of a column's openings, including rails between rows."""
    total = sum(row.opening_height for row in column.rows)
    if not config.horizontal_rails.enabled or column.row_count <= 1:
        return total
    rail_count = column.row_count - 1
    return total + rail_count * config.horizontal_rails.thickness.actual


def compute_carcass(config: ChestConfig) -> CarcassDimensions:
    """Compute carcass dimensions for a chest configuration.

    The tallest column sets the carcass inner height; shorter columns leave
    dead space above them (see ``column_dead_space``).

    Args:
        config: Chest configuration.

    Returns:
        CarcassDimensions including any constraint violations.
    """
    materials = config.materials
    side = materials.carcass_sides.actual
    top_bottom = materials.carcass_top_bottom.actual
    divider = materials.carcass_dividers.actual
    back = materials.carcass_back.actual

    opening_widths = sum(column.opening_width for column in config.columns)
    inner_width = opening_widths + (config.column_count - 1) * divider
    outer_width = side + inner_width + side

    inner_height = max(column_inner_height(col, config) for col in config.columns)
    outer_height = top_bottom + inner_height + top_bottom

    inner_depth = config.slide_spec.length + config.drawer_back_clearance
    outer_depth = inner_depth + back

    violations = check_constraint_violations(
        {"width": outer_width, "height": outer_height, "depth": outer_depth},
        config.constraints,
    )

    logger.debug(
        "Carcass %s: %.4f x %.4f x %.4f (%d violations)",
        config.name,
        outer_width,
        outer_height,
        outer_depth,
        len(violations),
    )

    return CarcassDimensions(
        outer_width=outer_width,
        outer_height=outer_height,
        outer_depth=outer_depth,
        inner_width=inner_width,
        inner_height=inner_height,
        inner_depth=inner_depth,
        constraint_violations=violations,
    )


def check_constraint_violations(
    outer: dict[DimensionName, float],
    constraints: Dimensions | None,
) -> tuple[ConstraintViolation, ...]:
    """Compare outer dimensions against optional maximums.

    A dimension equal to its maximum is within limits; only a strictly
    larger value is a violation.
    """
    if constraints is None:
        return ()

    violations: list[ConstraintViolation] = []
    for name in _CHECKED_DIMENSIONS:
        maximum = constraints.get(name)
        if outer[name] > maximum:
            violations.append(
                ConstraintViolation(dimension=name, actual=outer[name], max=maximum)
            )
    return tuple(violations)


def column_dead_space(config: ChestConfig) -> dict[str, float]:
    """Unused height above each column, keyed by column id.

    Zero for the tallest column(s).
    """
    heights = {col.id: column_inner_height(col, config) for col in config.columns}
    tallest = max(heights.values())
    return {column_id: tallest - height for column_id, height in heights.items()}


def should_recommend_rails(config: ChestConfig) -> bool:
    """Whether the chest is large enough that horizontal rails are advisable."""
    thresholds = config.rail_thresholds
    carcass = compute_carcass(config)

    if carcass.outer_width > thresholds.width:
        return True
    if carcass.outer_height > thresholds.height:
        return True
    return any(
        column.row_count > thresholds.max_rows_before_recommend
        for column in config.columns
    )


def carcass_pieces(config: ChestConfig, carcass: CarcassDimensions) -> list[CutPiece]:
    """Panels that make up the carcass.

    Top and bottom sit between the sides; sides and dividers run between
    top and bottom; the back covers the full outer face.

    Args:
        config: Chest configuration.
        carcass: Dimensions previously computed for ``config``.

    Returns:
        Cut pieces for top, bottom, sides, dividers, back and rails.
    """
    materials = config.materials
    rails = config.horizontal_rails
    vertical_panel_height = carcass.outer_height - 2 * materials.carcass_top_bottom.actual

    pieces = [
        CutPiece(
            id="carcass-top",
            label="Carcass Top",
            width=carcass.inner_width,
            height=carcass.inner_depth,
            thickness=materials.carcass_top_bottom,
        ),
        CutPiece(
            id="carcass-bottom",
            label="Carcass Bottom",
            width=carcass.inner_width,
            height=carcass.inner_depth,
            thickness=materials.carcass_top_bottom,
        ),
        CutPiece(
            id="carcass-sides",
            label="Carcass Side",
            width=carcass.inner_depth,
            height=vertical_panel_height,
            thickness=materials.carcass_sides,
            quantity=2,
        ),
    ]

    divider_count = config.column_count - 1
    if divider_count > 0:
        pieces.append(
            CutPiece(
                id="carcass-dividers",
                label="Vertical Divider",
                width=carcass.inner_depth,
                height=vertical_panel_height,
                thickness=materials.carcass_dividers,
                quantity=divider_count,
            )
        )

    pieces.append(
        CutPiece(
            id="carcass-back",
            label="Back Panel",
            width=carcass.outer_width,
            height=carcass.outer_height,
            thickness=materials.carcass_back,
        )
    )

    if rails.enabled:
        for index, column in enumerate(config.columns):
            rail_count = max(0, column.row_count - 1)
            if rail_count == 0:
                continue
            label = (
                f"Horizontal Rail (Col {index + 1})"
                if config.column_count > 1
                else "Horizontal Rail"
            )
            pieces.append(
                CutPiece(
                    id=f"horizontal-rails-col-{index}",
                    label=label,
                    width=column.opening_width,
                    height=rails.width,
                    thickness=rails.thickness,
                    quantity=rail_count,
                )
            )

    return pieces
