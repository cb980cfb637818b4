"""Infrastructure layer - sheet packing and output formatters."""

from .bin_packing import (
    BinPackingService,
    GuillotineBinPacker,
    PackingResult,
    PlacedPiece,
    SheetLayout,
    default_sheet_for,
)
from .cut_diagram_renderer import CutDiagramRenderer
from .formatters import CutListFormatter, JsonExporter, PlanFormatter

__all__ = [
    # Bin packing
    "BinPackingService",
    "GuillotineBinPacker",
    "PackingResult",
    "PlacedPiece",
    "SheetLayout",
    "default_sheet_for",
    # Formatters
    "CutDiagramRenderer",
    "CutListFormatter",
    "JsonExporter",
    "PlanFormatter",
]
