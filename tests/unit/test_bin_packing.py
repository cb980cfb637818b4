"""Tests for bin packing data models and GuillotineBinPacker algorithm.

Tests cover:
- Data model validation and properties
- Best-area-fit placement and guillotine splitting
- Kerf handling between pieces
- Sheet overflow, oversized pieces and multi-sheet packing
- BinPackingService per-thickness coordination
"""

from __future__ import annotations

import pytest

from chests.domain.constants import find_thickness
from chests.domain.value_objects import CutPiece, StockSheet, Unit
from chests.infrastructure.bin_packing import (
    BinPackingService,
    GuillotineBinPacker,
    PackingResult,
    PlacedPiece,
    SheetLayout,
    default_sheet_for,
)


def make_piece(
    piece_id: str,
    width: float,
    height: float,
    quantity: int = 1,
    thickness_id: str = "ply-3/4",
) -> CutPiece:
    return CutPiece(
        id=piece_id,
        label=piece_id.replace("-", " ").title(),
        width=width,
        height=height,
        thickness=find_thickness(thickness_id),
        quantity=quantity,
    )


def make_sheet(width: float = 48.0, height: float = 96.0, thickness_id: str = "ply-3/4") -> StockSheet:
    return StockSheet(
        id=f"sheet-{thickness_id}",
        label=f"{width:g} x {height:g}",
        width=width,
        height=height,
        thickness=find_thickness(thickness_id),
    )


def assert_valid_layout(layout: SheetLayout) -> None:
    """Every placement lies on the sheet and no two overlap."""
    placements = layout.placements
    for placed in placements:
        assert placed.x >= 0 and placed.y >= 0
        assert placed.right_edge <= layout.sheet.width + 1e-9
        assert placed.top_edge <= layout.sheet.height + 1e-9
    for i, a in enumerate(placements):
        for b in placements[i + 1 :]:
            assert not a.overlaps(b), f"{a.piece.id} overlaps {b.piece.id}"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def packer() -> GuillotineBinPacker:
    """Create a packer."""
    return GuillotineBinPacker()


@pytest.fixture
def full_sheet() -> StockSheet:
    """A 4' x 8' sheet of 3/4\" plywood."""
    return make_sheet()


# =============================================================================
# PlacedPiece
# =============================================================================


class TestPlacedPiece:
    """Tests for PlacedPiece."""

    def test_placed_dimensions_not_rotated(self) -> None:
        """Unrotated placement keeps the piece's width and height."""
        placed = PlacedPiece(piece=make_piece("a", 12, 24), x=0, y=0)

        assert placed.placed_width == 12
        assert placed.placed_height == 24

    def test_placed_dimensions_rotated(self) -> None:
        """Rotation swaps width and height."""
        placed = PlacedPiece(piece=make_piece("a", 12, 24), x=0, y=0, rotated=True)

        assert placed.placed_width == 24
        assert placed.placed_height == 12

    def test_edge_calculations(self) -> None:
        """Edges are position plus placed size."""
        placed = PlacedPiece(piece=make_piece("a", 12, 24), x=10, y=5)

        assert placed.right_edge == 22
        assert placed.top_edge == 29

    def test_invalid_position_raises(self) -> None:
        """Negative coordinates are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            PlacedPiece(piece=make_piece("a", 12, 24), x=-1, y=0)

    def test_overlaps(self) -> None:
        """Touching edges do not overlap; shared area does."""
        a = PlacedPiece(piece=make_piece("a", 10, 10), x=0, y=0)
        touching = PlacedPiece(piece=make_piece("b", 10, 10), x=10, y=0)
        crossing = PlacedPiece(piece=make_piece("c", 10, 10), x=5, y=5)

        assert not a.overlaps(touching)
        assert a.overlaps(crossing)


# =============================================================================
# SheetLayout and PackingResult
# =============================================================================


class TestSheetLayout:
    """Tests for SheetLayout."""

    def test_empty_layout(self, full_sheet: StockSheet) -> None:
        """An empty sheet is all waste."""
        layout = SheetLayout(sheet_index=0, sheet=full_sheet, placements=())

        assert layout.total_area == 4608
        assert layout.used_area == 0
        assert layout.waste_percentage == 100
        assert layout.piece_count == 0

    def test_waste_percentage_calculation(self, full_sheet: StockSheet) -> None:
        """Waste is the uncovered share of the sheet."""
        layout = SheetLayout(
            sheet_index=0,
            sheet=full_sheet,
            placements=(PlacedPiece(piece=make_piece("a", 24, 48), x=0, y=0),),
        )

        assert layout.used_area == 1152
        assert layout.waste_percentage == pytest.approx(75.0)

    def test_invalid_sheet_index_raises(self, full_sheet: StockSheet) -> None:
        """Sheet index cannot be negative."""
        with pytest.raises(ValueError, match="non-negative"):
            SheetLayout(sheet_index=-1, sheet=full_sheet, placements=())


class TestPackingResult:
    """Tests for PackingResult."""

    def test_empty_result(self) -> None:
        """No layouts means no sheets and no waste."""
        result = PackingResult()

        assert result.total_sheets == 0
        assert result.total_pieces_placed == 0
        assert result.total_waste_percentage == 0.0
        assert result.has_unplaced is False
        assert result.layouts == ()


# =============================================================================
# GuillotineBinPacker
# =============================================================================


class TestGuillotineBinPackerBasic:
    """Basic placement behavior."""

    def test_pack_empty_list(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """Packing nothing yields an empty result."""
        result = packer.pack([], full_sheet, kerf=0.125)

        assert result.total_sheets == 0
        assert result.unplaced == ()

    def test_negative_kerf_raises(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """Kerf must be non-negative."""
        with pytest.raises(ValueError, match="Kerf must be non-negative"):
            packer.pack([make_piece("a", 10, 10)], full_sheet, kerf=-0.1)

    def test_exact_sheet_size(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """A piece the size of the sheet uses it completely."""
        result = packer.pack([make_piece("a", 48, 96)], full_sheet, kerf=0.125)

        assert result.total_sheets == 1
        assert result.layouts[0].waste_percentage == pytest.approx(0.0)

    def test_quarter_sheet(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """A 24x48 piece leaves 75% of a 4' x 8' sheet."""
        result = packer.pack([make_piece("a", 24, 48)], full_sheet, kerf=0.125)

        assert result.total_sheets == 1
        assert result.total_waste_percentage == pytest.approx(75.0)

    def test_first_piece_at_origin(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """The largest piece goes in the sheet corner."""
        result = packer.pack(
            [make_piece("small", 5, 5), make_piece("big", 30, 40)], full_sheet, kerf=0.125
        )

        first = result.layouts[0].placements[0]
        assert first.piece.id == "big"
        assert (first.x, first.y) == (0, 0)

    def test_result_keyed_by_sheet_thickness(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """A single pack produces one group keyed by the sheet's thickness id."""
        result = packer.pack([make_piece("a", 10, 10)], full_sheet, kerf=0)

        assert list(result.layouts_by_thickness) == ["ply-3/4"]


class TestKerfHandling:
    """Kerf between pieces decides whether a second piece fits."""

    def test_two_halves_fit_without_kerf(self, packer: GuillotineBinPacker) -> None:
        """Two 24x47 pieces fill a 48x48 sheet side by side."""
        result = packer.pack([make_piece("half", 24, 47, quantity=2)], make_sheet(48, 48), kerf=0)

        assert result.total_sheets == 1
        assert result.total_pieces_placed == 2
        assert_valid_layout(result.layouts[0])

    def test_kerf_pushes_second_piece_to_new_sheet(self, packer: GuillotineBinPacker) -> None:
        """An eighth-inch kerf leaves 23.875" beside the first piece."""
        result = packer.pack([make_piece("half", 24, 47, quantity=2)], make_sheet(48, 48), kerf=0.125)

        assert result.total_sheets == 2
        assert [layout.sheet_index for layout in result.layouts] == [0, 1]

    def test_kerf_gap_between_neighbours(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """Adjacent pieces are separated by at least the kerf."""
        kerf = 0.125
        result = packer.pack([make_piece("p", 10, 10, quantity=4)], full_sheet, kerf=kerf)

        placements = result.layouts[0].placements
        for i, a in enumerate(placements):
            for b in placements[i + 1 :]:
                gap_x = max(b.x - a.right_edge, a.x - b.right_edge)
                gap_y = max(b.y - a.top_edge, a.y - b.top_edge)
                assert max(gap_x, gap_y) >= kerf - 1e-9


class TestRotation:
    """Rotation control."""

    def test_rotation_lets_piece_fit(self, packer: GuillotineBinPacker) -> None:
        """A 60x20 piece only fits a 48x96 sheet when turned."""
        result = packer.pack([make_piece("long", 60, 20)], make_sheet(), kerf=0.125)

        assert result.total_sheets == 1
        assert result.layouts[0].placements[0].rotated is True

    def test_no_rotation_reports_unplaced(self, packer: GuillotineBinPacker) -> None:
        """Without rotation the same piece is unplaced."""
        result = packer.pack(
            [make_piece("long", 60, 20)], make_sheet(), kerf=0.125, allow_rotation=False
        )

        assert result.total_sheets == 0
        assert [p.id for p in result.unplaced] == ["long"]

    def test_no_rotation_never_rotates(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """No placement is rotated when rotation is disabled."""
        pieces = [make_piece("a", 30, 10, quantity=3), make_piece("b", 8, 40, quantity=2)]
        result = packer.pack(pieces, full_sheet, kerf=0.125, allow_rotation=False)

        assert all(not p.rotated for layout in result.layouts for p in layout.placements)


class TestFitSelection:
    """Best-area-fit choice, tie-breaking and guillotine cut direction."""

    def test_tightest_free_rectangle_wins(self, packer: GuillotineBinPacker) -> None:
        """The smaller of two free rectangles is used when the piece fits both.

        A 30x60 piece leaves equally large remainders either way, so the cut
        is horizontal: a 48x36 strip above and an 18x60 strip beside it. The
        16x30 piece fits both and goes into the 18x60 strip.
        """
        result = packer.pack(
            [make_piece("big", 30, 60), make_piece("small", 16, 30)],
            make_sheet(),
            kerf=0.0,
        )

        placed = {p.piece.id: p for p in result.layouts[0].placements}
        assert (placed["small"].x, placed["small"].y) == (30, 0)
        assert placed["small"].rotated is False

    def test_equal_leftover_keeps_orientation(self, packer: GuillotineBinPacker) -> None:
        """When both orientations waste the same area the piece is not rotated."""
        result = packer.pack([make_piece("panel", 10, 20)], make_sheet(), kerf=0.0)

        placed = result.layouts[0].placements[0]
        assert placed.rotated is False
        assert (placed.placed_width, placed.placed_height) == (10, 20)

    def test_vertical_cut_when_it_keeps_larger_remainder(self, packer: GuillotineBinPacker) -> None:
        """A tall narrow piece is cut off with a full-height vertical cut.

        After a 10x90 piece the vertical cut leaves a 38x96 strip, larger
        than anything the horizontal cut leaves. An 8x95 piece only fits in
        that full-height strip.
        """
        result = packer.pack(
            [make_piece("stile", 10, 90), make_piece("slat", 8, 95)],
            make_sheet(),
            kerf=0.0,
        )

        assert result.total_sheets == 1
        assert result.unplaced == ()
        placed = {p.piece.id: p for p in result.layouts[0].placements}
        assert (placed["slat"].x, placed["slat"].y) == (10, 0)
        assert placed["slat"].rotated is False


class TestOversizedAndOverflow:
    """Pieces that do not fit and multi-sheet packing."""

    def test_oversized_piece_unplaced(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """A piece larger than the sheet in both orientations is reported, not raised."""
        result = packer.pack([make_piece("huge", 50, 100)], full_sheet, kerf=0.125)

        assert result.layouts == ()
        assert result.has_unplaced
        assert result.unplaced[0].id == "huge"

    def test_oversized_does_not_block_others(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """Pieces that fit are still packed alongside an oversized one."""
        result = packer.pack(
            [make_piece("huge", 50, 100), make_piece("ok", 10, 10)], full_sheet, kerf=0.125
        )

        assert result.total_pieces_placed == 1
        assert [p.id for p in result.unplaced] == ["huge"]

    @pytest.mark.parametrize(("width", "height"), [(0, 10), (-0.9375, 5.75), (12, -1)])
    def test_non_positive_piece_unplaced(
        self, packer: GuillotineBinPacker, full_sheet: StockSheet, width: float, height: float
    ) -> None:
        """Pieces with no positive size are reported and the rest still pack."""
        result = packer.pack(
            [make_piece("bad", width, height), make_piece("ok", 10, 10, quantity=2)],
            full_sheet,
            kerf=0.125,
        )

        assert [p.id for p in result.unplaced] == ["bad"]
        assert result.total_pieces_placed == 2
        assert_valid_layout(result.layouts[0])

    def test_only_non_positive_pieces(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """No sheet is opened for a group of unusable pieces."""
        result = packer.pack([make_piece("bad", -2, -2, quantity=2)], full_sheet, kerf=0.125)

        assert result.layouts == ()
        assert [p.id for p in result.unplaced] == ["bad-1", "bad-2"]

    def test_overflow_to_more_sheets(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """Three half sheets need two sheets."""
        result = packer.pack([make_piece("half", 48, 47, quantity=3)], full_sheet, kerf=0.125)

        assert result.total_sheets == 2
        assert result.total_pieces_placed == 3
        for layout in result.layouts:
            assert_valid_layout(layout)

    def test_expanded_ids_and_labels(self, packer: GuillotineBinPacker, full_sheet: StockSheet) -> None:
        """Copies of a multi-quantity piece are numbered."""
        result = packer.pack([make_piece("shelf", 20, 10, quantity=3)], full_sheet, kerf=0.125)

        placed = sorted(p.piece.id for p in result.layouts[0].placements)
        labels = sorted(p.piece.label for p in result.layouts[0].placements)
        assert placed == ["shelf-1", "shelf-2", "shelf-3"]
        assert labels == ["Shelf #1", "Shelf #2", "Shelf #3"]
        assert all(p.piece.quantity == 1 for p in result.layouts[0].placements)


class TestPackingProperties:
    """Invariants over a mixed set of pieces."""

    @pytest.fixture
    def mixed_pieces(self) -> list[CutPiece]:
        return [
            make_piece("top", 14, 18.5, quantity=2),
            make_piece("side", 18.5, 18, quantity=2),
            make_piece("face-a", 15.375, 6.75, quantity=2),
            make_piece("face-b", 15.375, 5.875),
            make_piece("strip", 3, 40, quantity=5),
            make_piece("panel", 30, 60),
            make_piece("scrap", 2.5, 2.5, quantity=7),
        ]

    @pytest.mark.parametrize("allow_rotation", [True, False])
    @pytest.mark.parametrize("kerf", [0.0, 0.125, 0.25])
    def test_in_bounds_and_no_overlap(
        self,
        packer: GuillotineBinPacker,
        full_sheet: StockSheet,
        mixed_pieces: list[CutPiece],
        kerf: float,
        allow_rotation: bool,
    ) -> None:
        """Every layout stays on the sheet with no overlapping pieces."""
        result = packer.pack(mixed_pieces, full_sheet, kerf=kerf, allow_rotation=allow_rotation)

        for layout in result.layouts:
            assert_valid_layout(layout)

    @pytest.mark.parametrize("kerf", [0.0, 0.125])
    def test_quantity_conserved(
        self,
        packer: GuillotineBinPacker,
        full_sheet: StockSheet,
        mixed_pieces: list[CutPiece],
        kerf: float,
    ) -> None:
        """Placed plus unplaced equals the total quantity."""
        result = packer.pack(mixed_pieces, full_sheet, kerf=kerf)

        expected = sum(p.quantity for p in mixed_pieces)
        assert result.total_pieces_placed + len(result.unplaced) == expected
        assert result.unplaced == ()

    def test_no_empty_sheets(
        self,
        packer: GuillotineBinPacker,
        full_sheet: StockSheet,
        mixed_pieces: list[CutPiece],
    ) -> None:
        """Every sheet in the result carries at least one piece."""
        result = packer.pack(mixed_pieces, full_sheet, kerf=0.125)

        assert all(layout.piece_count > 0 for layout in result.layouts)


# =============================================================================
# BinPackingService
# =============================================================================


class TestBinPackingService:
    """Tests for per-thickness packing coordination."""

    def test_groups_by_thickness(self) -> None:
        """Each thickness id gets its own layouts."""
        pieces = [
            make_piece("carcass", 20, 20),
            make_piece("bottom", 12, 17, thickness_id="ply-1/4"),
            make_piece("side", 18, 5, quantity=2, thickness_id="ply-1/2"),
        ]

        result = BinPackingService().optimize(pieces, kerf=0.125)

        assert list(result.layouts_by_thickness) == ["ply-3/4", "ply-1/4", "ply-1/2"]
        assert result.total_sheets == 3
        assert result.total_pieces_placed == 4

    def test_same_actual_different_ids_pack_separately(self) -> None:
        """1/4" plywood and 1/4" MDF never share a sheet."""
        pieces = [
            make_piece("a", 10, 10, thickness_id="ply-1/4"),
            make_piece("b", 10, 10, thickness_id="mdf-1/4"),
        ]

        result = BinPackingService().optimize(pieces)

        assert result.total_sheets == 2

    def test_default_sheet_is_full_sheet(self) -> None:
        """Thicknesses without a configured sheet use 4' x 8'."""
        result = BinPackingService().optimize([make_piece("a", 10, 10)])

        sheet = result.layouts[0].sheet
        assert (sheet.width, sheet.height) == (48.0, 96.0)
        assert sheet.label == "4' x 8'"

    def test_configured_sheet_used(self) -> None:
        """A configured sheet replaces the default for its thickness."""
        small = make_sheet(24, 24)

        result = BinPackingService().optimize(
            [make_piece("a", 20, 20, quantity=2)], sheets={"ply-3/4": small}, kerf=0
        )

        assert result.total_sheets == 2
        assert result.layouts[0].sheet is small

    def test_unplaced_collected_across_groups(self) -> None:
        """Oversized pieces from every group are reported together."""
        pieces = [
            make_piece("huge-a", 60, 100),
            make_piece("huge-b", 60, 100, thickness_id="ply-1/2"),
            make_piece("fine", 10, 10, thickness_id="ply-1/2"),
        ]

        result = BinPackingService().optimize(pieces)

        assert sorted(p.id for p in result.unplaced) == ["huge-a", "huge-b"]
        assert list(result.layouts_by_thickness) == ["ply-1/2"]

    def test_empty_input(self) -> None:
        """Nothing to pack gives an empty result."""
        result = BinPackingService().optimize([])

        assert result.total_sheets == 0
        assert result.layouts_by_thickness == {}


class TestDefaultSheet:
    """Tests for default_sheet_for."""

    def test_inches(self) -> None:
        """A 48x96 sheet named for its thickness."""
        sheet = default_sheet_for(find_thickness("ply-1/2"))

        assert sheet.id == "sheet-ply-1/2"
        assert sheet.thickness.id == "ply-1/2"
        assert (sheet.width, sheet.height) == (48.0, 96.0)

    def test_cm(self) -> None:
        """Default sheets follow the configuration unit."""
        sheet = default_sheet_for(find_thickness("ply-1/2"), Unit.CM)

        assert sheet.width == pytest.approx(121.92)
        assert sheet.height == pytest.approx(243.84)
