"""Guillotine bin packing of cut pieces onto stock sheets.

Pieces are packed per material thickness. Each sheet keeps a list of free
rectangles that starts as the whole sheet; every placement replaces the
rectangle it used with at most two guillotine remainders, so every layout
can be cut with edge-to-edge saw cuts.

All result dataclasses are frozen (immutable).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Mapping, Sequence

from chests.domain.services.cut_list import group_by_thickness
from chests.domain.services.units import convert
from chests.domain.value_objects import CutPiece, MaterialThickness, StockSheet, Unit

logger = logging.getLogger(__name__)

__all__ = [
    "BinPackingService",
    "GuillotineBinPacker",
    "PackingResult",
    "PlacedPiece",
    "SheetLayout",
    "default_sheet_for",
]

DEFAULT_SHEET_WIDTH = 48.0
DEFAULT_SHEET_HEIGHT = 96.0


def default_sheet_for(thickness: MaterialThickness, unit: Unit = Unit.INCHES) -> StockSheet:
    """A full 4' x 8' sheet of ``thickness``, expressed in ``unit``."""
    return StockSheet(
        id=f"sheet-{thickness.id}",
        label="4' x 8'",
        width=convert(DEFAULT_SHEET_WIDTH, Unit.INCHES, unit),
        height=convert(DEFAULT_SHEET_HEIGHT, Unit.INCHES, unit),
        thickness=thickness,
    )


@dataclass(frozen=True)
class PlacedPiece:
    """A cut piece placed at a specific position on a sheet.

    Attributes:
        piece: The individual piece being placed (quantity 1).
        x: Horizontal position of the piece's corner from the sheet origin.
        y: Vertical position of the piece's corner from the sheet origin.
        rotated: True if the piece is turned 90 degrees.
    """

    piece: CutPiece
    x: float
    y: float
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def placed_width(self) -> float:
        """Width of piece as placed (accounts for rotation)."""
        return self.piece.height if self.rotated else self.piece.width

    @property
    def placed_height(self) -> float:
        """Height of piece as placed (accounts for rotation)."""
        return self.piece.width if self.rotated else self.piece.height

    @property
    def right_edge(self) -> float:
        return self.x + self.placed_width

    @property
    def top_edge(self) -> float:
        return self.y + self.placed_height

    def overlaps(self, other: PlacedPiece) -> bool:
        """True if the two placements share any interior area."""
        return (
            self.x < other.right_edge
            and other.x < self.right_edge
            and self.y < other.top_edge
            and other.y < self.top_edge
        )


@dataclass(frozen=True)
class SheetLayout:
    """Layout of pieces on a single stock sheet.

    Attributes:
        sheet_index: Zero-based index of the sheet within its thickness group.
        sheet: The stock sheet being cut.
        placements: Pieces placed on this sheet.
    """

    sheet_index: int
    sheet: StockSheet
    placements: tuple[PlacedPiece, ...]

    def __post_init__(self) -> None:
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def total_area(self) -> float:
        return self.sheet.area

    @property
    def used_area(self) -> float:
        """Total area covered by placed pieces."""
        return sum(p.placed_width * p.placed_height for p in self.placements)

    @property
    def waste_percentage(self) -> float:
        """Percentage of the sheet not covered by pieces."""
        return (self.total_area - self.used_area) / self.total_area * 100

    @property
    def piece_count(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class PackingResult:
    """Complete result of bin packing, keyed by material thickness id.

    Attributes:
        layouts_by_thickness: Sheet layouts per thickness id, in first-seen order.
        unplaced: Individual pieces that fit on no sheet (oversized).
    """

    layouts_by_thickness: dict[str, tuple[SheetLayout, ...]] = field(default_factory=dict)
    unplaced: tuple[CutPiece, ...] = ()

    @property
    def layouts(self) -> tuple[SheetLayout, ...]:
        """Every layout across all thicknesses."""
        return tuple(
            layout for group in self.layouts_by_thickness.values() for layout in group
        )

    @property
    def total_sheets(self) -> int:
        return sum(len(group) for group in self.layouts_by_thickness.values())

    @property
    def total_pieces_placed(self) -> int:
        return sum(layout.piece_count for layout in self.layouts)

    @property
    def total_waste_percentage(self) -> float:
        """Overall waste across every sheet of every thickness."""
        layouts = self.layouts
        if not layouts:
            return 0.0
        total = sum(layout.total_area for layout in layouts)
        used = sum(layout.used_area for layout in layouts)
        return (total - used) / total * 100

    @property
    def has_unplaced(self) -> bool:
        return bool(self.unplaced)


@dataclass
class _FreeRect:
    """Internal free-space rectangle on the sheet being filled."""

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass
class _Fit:
    index: int
    rotated: bool
    leftover: float


class GuillotineBinPacker:
    """Best-area-fit guillotine packer over a list of free rectangles.

    For every piece, each free rectangle is tried in the piece's own
    orientation and then rotated; the candidate leaving the least unused
    area wins, and on a tie the first candidate evaluated is kept. The
    piece goes at the rectangle's origin and the rectangle is replaced
    in place by its guillotine remainders.

    The saw kerf is charged on every cut, including cuts that fall on the
    sheet edge, so layouts err on the conservative side.
    """

    def pack(
        self,
        pieces: Sequence[CutPiece],
        sheet: StockSheet,
        kerf: float,
        allow_rotation: bool = True,
    ) -> PackingResult:
        """Pack pieces onto as many copies of ``sheet`` as needed.

        Args:
            pieces: Cut pieces to pack (may have quantity > 1).
            sheet: Stock sheet every layout is cut from.
            kerf: Saw blade kerf width, in the sheet's unit.
            allow_rotation: Whether pieces may be turned 90 degrees.

        Returns:
            PackingResult with this sheet's thickness as the only group.
            Pieces too large for the sheet, and pieces with a zero or
            negative side, are listed in ``unplaced``.

        Raises:
            ValueError: If kerf is negative.
        """
        if kerf < 0:
            raise ValueError("Kerf must be non-negative")
        if not pieces:
            return PackingResult()

        remaining: list[CutPiece] = []
        degenerate: list[CutPiece] = []
        for piece in self._sort_by_area(self._expand_pieces(pieces)):
            if piece.width > 0 and piece.height > 0:
                remaining.append(piece)
            else:
                degenerate.append(piece)

        for piece in degenerate:
            logger.warning(
                "Piece '%s' has non-positive size %sx%s and cannot be cut",
                piece.label,
                piece.width,
                piece.height,
            )

        logger.debug(
            "Packing %d pieces onto %sx%s sheets (kerf %s)",
            len(remaining),
            sheet.width,
            sheet.height,
            kerf,
        )

        layouts: list[SheetLayout] = []
        while remaining:
            placements, deferred = self._fill_sheet(remaining, sheet, kerf, allow_rotation)
            if not placements:
                break

            layout = SheetLayout(
                sheet_index=len(layouts),
                sheet=sheet,
                placements=tuple(placements),
            )
            layouts.append(layout)
            logger.debug(
                "Sheet %d: %d pieces, %.1f%% waste",
                layout.sheet_index,
                layout.piece_count,
                layout.waste_percentage,
            )

            if len(deferred) == len(remaining):
                break
            remaining = deferred

        for piece in remaining:
            logger.warning(
                "Piece '%s' (%sx%s) does not fit on sheet %s (%sx%s)",
                piece.label,
                piece.width,
                piece.height,
                sheet.label,
                sheet.width,
                sheet.height,
            )

        return PackingResult(
            layouts_by_thickness={sheet.thickness.id: tuple(layouts)} if layouts else {},
            unplaced=tuple(degenerate + remaining),
        )

    def _expand_pieces(self, pieces: Sequence[CutPiece]) -> list[CutPiece]:
        """Expand pieces with quantity > 1 into individual pieces.

        Copies get a numbered id and label so each physical piece can be
        identified on a layout.
        """
        expanded: list[CutPiece] = []
        for piece in pieces:
            if piece.quantity == 1:
                expanded.append(piece)
                continue
            for i in range(piece.quantity):
                expanded.append(
                    replace(
                        piece,
                        id=f"{piece.id}-{i + 1}",
                        label=f"{piece.label} #{i + 1}",
                        quantity=1,
                    )
                )
        return expanded

    def _sort_by_area(self, pieces: list[CutPiece]) -> list[CutPiece]:
        """Largest area first; equal areas keep their input order."""
        return sorted(pieces, key=lambda p: p.width * p.height, reverse=True)

    def _fill_sheet(
        self,
        pieces: list[CutPiece],
        sheet: StockSheet,
        kerf: float,
        allow_rotation: bool,
    ) -> tuple[list[PlacedPiece], list[CutPiece]]:
        """Place as many pieces as fit on one sheet; return placements and leftovers."""
        free_rects = [_FreeRect(0.0, 0.0, sheet.width, sheet.height)]
        placements: list[PlacedPiece] = []
        deferred: list[CutPiece] = []

        for piece in pieces:
            fit = self._find_best_fit(piece, free_rects, allow_rotation)
            if fit is None:
                deferred.append(piece)
                continue

            rect = free_rects[fit.index]
            placed = PlacedPiece(piece=piece, x=rect.x, y=rect.y, rotated=fit.rotated)
            placements.append(placed)
            free_rects[fit.index : fit.index + 1] = self._split(
                rect, placed.placed_width, placed.placed_height, kerf
            )

        return placements, deferred

    def _find_best_fit(
        self,
        piece: CutPiece,
        free_rects: list[_FreeRect],
        allow_rotation: bool,
    ) -> _Fit | None:
        orientations = [(piece.width, piece.height, False)]
        if allow_rotation:
            orientations.append((piece.height, piece.width, True))

        best: _Fit | None = None
        for index, rect in enumerate(free_rects):
            for width, height, rotated in orientations:
                if width > rect.width or height > rect.height:
                    continue
                leftover = rect.area - width * height
                if best is None or leftover < best.leftover:
                    best = _Fit(index=index, rotated=rotated, leftover=leftover)
        return best

    def _split(
        self,
        rect: _FreeRect,
        placed_width: float,
        placed_height: float,
        kerf: float,
    ) -> list[_FreeRect]:
        """Guillotine remainders of ``rect`` after a piece at its origin.

        With room on both sides, the cut direction is chosen so that the
        larger of the two remainders is as large as possible; a tie goes to
        the horizontal cut (full-width strip above the piece).
        """
        right_width = rect.width - placed_width - kerf
        top_height = rect.height - placed_height - kerf

        if right_width <= 0 and top_height <= 0:
            return []
        if right_width <= 0:
            return [_FreeRect(rect.x, rect.y + placed_height + kerf, rect.width, top_height)]
        if top_height <= 0:
            return [_FreeRect(rect.x + placed_width + kerf, rect.y, right_width, rect.height)]

        horizontal_larger = max(rect.width * top_height, right_width * placed_height)
        vertical_larger = max(right_width * rect.height, placed_width * top_height)

        if horizontal_larger >= vertical_larger:
            remainders = [
                _FreeRect(rect.x, rect.y + placed_height + kerf, rect.width, top_height),
                _FreeRect(rect.x + placed_width + kerf, rect.y, right_width, placed_height),
            ]
        else:
            remainders = [
                _FreeRect(rect.x + placed_width + kerf, rect.y, right_width, rect.height),
                _FreeRect(rect.x, rect.y + placed_height + kerf, placed_width, top_height),
            ]
        return [r for r in remainders if r.width > 0 and r.height > 0]


class BinPackingService:
    """Coordinates packing across material thickness groups.

    A chest mixes thicknesses (3/4" carcass, 1/2" drawer sides, 1/4"
    bottoms and back). Pieces are grouped by thickness id and each group is
    packed on the stock sheet chosen for that thickness, falling back to a
    full 4' x 8' sheet.
    """

    def __init__(self, packer: GuillotineBinPacker | None = None) -> None:
        self.packer = packer or GuillotineBinPacker()

    def optimize(
        self,
        pieces: Sequence[CutPiece],
        sheets: Mapping[str, StockSheet] | None = None,
        kerf: float = 0.125,
        allow_rotation: bool = True,
        unit: Unit = Unit.INCHES,
    ) -> PackingResult:
        """Pack every thickness group and combine the results.

        Args:
            pieces: Aggregated cut pieces of any thicknesses.
            sheets: Stock sheet per thickness id; missing ids use a 4' x 8'
                sheet in ``unit``.
            kerf: Saw blade kerf width.
            allow_rotation: Whether pieces may be turned 90 degrees.
            unit: Unit of the default sheets.

        Returns:
            PackingResult with layouts per thickness id and all unplaced pieces.
        """
        sheets = sheets or {}
        groups = group_by_thickness(list(pieces))

        logger.info(
            "Optimizing %d pieces across %d thickness groups",
            len(pieces),
            len(groups),
        )

        layouts_by_thickness: dict[str, tuple[SheetLayout, ...]] = {}
        unplaced: list[CutPiece] = []
        for thickness_id, group in groups.items():
            sheet = sheets.get(thickness_id) or default_sheet_for(group[0].thickness, unit)
            result = self.packer.pack(group, sheet, kerf, allow_rotation)

            logger.info(
                "Thickness %s: %d pieces -> %d sheets, %d unplaced",
                thickness_id,
                len(group),
                result.total_sheets,
                len(result.unplaced),
            )

            if result.layouts:
                layouts_by_thickness[thickness_id] = result.layouts
            unplaced.extend(result.unplaced)

        return PackingResult(
            layouts_by_thickness=layouts_by_thickness,
            unplaced=tuple(unplaced),
        )
