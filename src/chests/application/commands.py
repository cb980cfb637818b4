"""Application commands (use cases) for chest generation."""

from __future__ import annotations

import logging
from typing import Mapping

from chests.domain import ChestConfig, StockSheet
from chests.domain.services import (
    aggregate_cut_pieces,
    column_dead_space,
    compute_all_drawer_boxes,
    compute_carcass,
    recommend_slide_length,
    should_recommend_rails,
)
from chests.infrastructure.bin_packing import BinPackingService

from .dtos import ChestReport

logger = logging.getLogger(__name__)


class GenerateChestCommand:
    """Command to run the full dimensioning and cut list pipeline for a chest."""

    def __init__(self, bin_packing_service: BinPackingService | None = None) -> None:
        self.bin_packing_service = bin_packing_service or BinPackingService()

    def execute(
        self,
        config: ChestConfig,
        stock_sheets: Mapping[str, StockSheet] | None = None,
        kerf: float | None = None,
        allow_rotation: bool = True,
        optimize: bool = True,
    ) -> ChestReport:
        """Execute the generation command.

        Args:
            config: Chest configuration.
            stock_sheets: Stock sheet per thickness id. Thicknesses without a
                sheet are packed on a full 4' x 8' sheet.
            kerf: Saw kerf override; defaults to the configuration's kerf width.
            allow_rotation: Whether pieces may be turned 90 degrees on a sheet.
            optimize: Whether to run sheet packing at all.

        Returns:
            ChestReport with carcass, drawer boxes, cut list and packing.
        """
        carcass = compute_carcass(config)
        drawer_boxes = compute_all_drawer_boxes(config)
        cut_list = aggregate_cut_pieces(config)

        report = ChestReport(
            config=config,
            carcass=carcass,
            drawer_boxes=drawer_boxes,
            cut_list=cut_list,
            rails_recommended=should_recommend_rails(config),
            recommended_slide_length=recommend_slide_length(carcass.inner_depth),
            dead_space={
                column_id: space
                for column_id, space in column_dead_space(config).items()
                if space > 0
            },
        )

        if optimize:
            try:
                report.packing_result = self.bin_packing_service.optimize(
                    cut_list,
                    stock_sheets,
                    kerf=config.kerf_width if kerf is None else kerf,
                    allow_rotation=allow_rotation,
                    unit=config.unit,
                )
            except ValueError as e:
                report.errors.append(f"Sheet optimization failed: {e}")

        logger.info(
            "Generated %s: %d drawers, %d cut list entries",
            config.name,
            len(drawer_boxes),
            len(cut_list),
        )
        return report
