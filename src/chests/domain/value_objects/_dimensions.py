"""Derived dimension records produced by the dimension engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ._options import WarningType

DimensionName = Literal["width", "height", "depth"]


@dataclass(frozen=True)
class Dimensions:
    """Width, height and depth triple, used for maximum-size constraints."""

    width: float
    height: float
    depth: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0 or self.depth <= 0:
            raise ValueError("All dimensions must be positive")

    def get(self, name: DimensionName) -> float:
        """Return the named dimension."""
        return getattr(self, name)


@dataclass(frozen=True)
class ConstraintViolation:
    """An outer carcass dimension that exceeds its configured maximum."""

    dimension: DimensionName
    actual: float
    max: float

    @property
    def excess(self) -> float:
        """Amount by which the dimension exceeds the maximum."""
        return self.actual - self.max


@dataclass(frozen=True)
class CarcassDimensions:
    """Overall carcass size derived from the chest configuration.

    Attributes:
        outer_width: Side to side including both carcass sides.
        outer_height: Floor to top including top and bottom panels.
        outer_depth: Front to back including the back panel.
        inner_width: Sum of openings plus dividers.
        inner_height: Tallest column's stacked opening height.
        inner_depth: Slide length plus drawer back clearance.
        constraint_violations: Dimensions exceeding configured maximums.
    """

    outer_width: float
    outer_height: float
    outer_depth: float
    inner_width: float
    inner_height: float
    inner_depth: float
    constraint_violations: tuple[ConstraintViolation, ...] = ()

    @property
    def outer(self) -> dict[DimensionName, float]:
        """Outer dimensions keyed by name."""
        return {
            "width": self.outer_width,
            "height": self.outer_height,
            "depth": self.outer_depth,
        }


@dataclass(frozen=True)
class DrawerWarning:
    """Non-fatal advisory attached to a drawer box."""

    type: WarningType
    message: str


@dataclass(frozen=True)
class DrawerBoxDimensions:
    """Box, interior, piece and face sizes for one drawer.

    The box is sized from its opening: width from the column opening less
    slide clearance, depth from the slide length, and height from the row
    opening according to the construction method.
    """

    column_id: str
    row_id: str
    box_outer_width: float
    box_outer_height: float
    box_outer_depth: float
    usable_interior_width: float
    usable_interior_height: float
    usable_interior_depth: float
    side_length: float
    side_height: float
    front_back_length: float
    front_back_height: float
    bottom_width: float
    bottom_depth: float
    face_width: float
    face_height: float
    warnings: tuple[DrawerWarning, ...] = field(default=())

    @property
    def structural_dimensions(self) -> tuple[float, ...]:
        """Dimensions that must be positive for the box to be buildable."""
        return (
            self.box_outer_width,
            self.box_outer_height,
            self.box_outer_depth,
            self.bottom_width,
            self.bottom_depth,
            self.side_height,
            self.front_back_height,
            self.usable_interior_width,
            self.usable_interior_height,
            self.usable_interior_depth,
        )

    @property
    def has_warnings(self) -> bool:
        """True if any advisory was raised for this box."""
        return bool(self.warnings)
