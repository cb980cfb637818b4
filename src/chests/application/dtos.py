"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chests.domain import CarcassDimensions, ChestConfig, CutPiece, DrawerBoxDimensions
from chests.domain.value_objects import DrawerWarning

if TYPE_CHECKING:
    from chests.infrastructure.bin_packing import PackingResult


@dataclass
class ChestReport:
    """Output DTO containing every derived result for one chest.

    Attributes:
        config: The chest configuration the report was computed from.
        carcass: Outer and inner carcass dimensions with constraint violations.
        drawer_boxes: One box per (column, row), in configuration order.
        cut_list: Aggregated cut pieces for the whole chest.
        packing_result: Sheet layouts per thickness, if optimization was run.
        rails_recommended: True if the chest is large enough to want rails.
        recommended_slide_length: Longest standard slide for the carcass depth.
        dead_space: Unused height per column id (shorter columns only).
        errors: Error messages if generation failed.
    """

    config: ChestConfig
    carcass: CarcassDimensions
    drawer_boxes: list[DrawerBoxDimensions]
    cut_list: list[CutPiece]
    packing_result: PackingResult | None = None
    rails_recommended: bool = False
    recommended_slide_length: float = 0.0
    dead_space: dict[str, float] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if generation completed without errors."""
        return not self.errors

    @property
    def drawer_warnings(self) -> list[tuple[DrawerBoxDimensions, DrawerWarning]]:
        """Every drawer warning paired with the box it belongs to."""
        return [(box, warning) for box in self.drawer_boxes for warning in box.warnings]

    @property
    def has_warnings(self) -> bool:
        """True if any drawer warning, constraint violation or unplaced piece exists."""
        return bool(
            self.drawer_warnings
            or self.carcass.constraint_violations
            or (self.packing_result is not None and self.packing_result.unplaced)
        )
