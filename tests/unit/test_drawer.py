"""Tests for drawer box sizing per construction method.

Tests cover:
- Box width, depth and height from the opening
- Bottom size and usable interior for dado and both butt joints
- Overlay and inset face sizing
- Advisory warnings and material overrides
"""

from dataclasses import replace

import pytest

from chests.domain.constants import find_thickness
from chests.domain.entities import ChestConfig, Column, Row
from chests.domain.services import (
    compute_all_drawer_boxes,
    compute_drawer_box,
    compute_face_dimensions,
    drawer_pieces,
    resolve_drawer_materials,
)
from chests.domain.value_objects import (
    ConstructionMethod,
    DrawerMaterialOverride,
    DrawerStyle,
    HeightMode,
    HorizontalRailConfig,
    WarningType,
)


def single_row_chest(
    chest: ChestConfig,
    height: float = 6.0,
    construction: ConstructionMethod = ConstructionMethod.DADO,
) -> ChestConfig:
    row = Row(
        id="r1",
        opening_height=height,
        construction=construction,
        height_mode=HeightMode.DIRECT,
    )
    return replace(chest, columns=(replace(chest.columns[0], rows=(row,)),))


def first_box(config: ChestConfig):
    column = config.columns[0]
    return compute_drawer_box(column.rows[0], column, config)


# =============================================================================
# Box sizing by construction method
# =============================================================================


class TestDadoConstruction:
    """Tests for dado drawer boxes."""

    def test_box_outer_size(self, chest: ChestConfig) -> None:
        """Width loses slide clearance, depth equals slide length."""
        box = first_box(chest)

        assert box.box_outer_width == pytest.approx(13.0)
        assert box.box_outer_height == pytest.approx(5.75)
        assert box.box_outer_depth == pytest.approx(18.0)

    def test_panels(self, chest: ChestConfig) -> None:
        """Front and back fit between the sides."""
        box = first_box(chest)

        assert box.side_length == pytest.approx(18.0)
        assert box.side_height == pytest.approx(5.75)
        assert box.front_back_length == pytest.approx(12.0625)
        assert box.front_back_height == pytest.approx(5.75)

    def test_bottom_extends_into_grooves(self, chest: ChestConfig) -> None:
        """Bottom gains two groove depths each way, rounded up to 1/8"."""
        box = first_box(chest)

        # 12.0625 + 0.5 = 12.5625 and 17.0625 + 0.5 = 17.5625
        assert box.bottom_width == 12.625
        assert box.bottom_depth == 17.625

    def test_usable_interior(self, chest: ChestConfig) -> None:
        """Groove offset and bottom thickness come off the interior height."""
        box = first_box(chest)

        assert box.usable_interior_width == pytest.approx(12.0625)
        assert box.usable_interior_height == pytest.approx(5.125)
        assert box.usable_interior_depth == pytest.approx(17.0625)


class TestButtThroughSides:
    """Tests for butt joint with the bottom between the walls."""

    def test_bottom_and_interior(self, chest: ChestConfig) -> None:
        """Bottom matches the inside of the box; only its thickness is lost."""
        box = first_box(single_row_chest(chest, construction=ConstructionMethod.BUTT_THROUGH_SIDES))

        assert box.box_outer_height == pytest.approx(5.75)
        assert box.bottom_width == 12.125
        assert box.bottom_depth == 17.125
        assert box.usable_interior_height == pytest.approx(5.5)


class TestButtThroughBottom:
    """Tests for butt joint with the walls standing on the bottom."""

    def test_walls_shorter_by_bottom(self, chest: ChestConfig) -> None:
        """Side height loses the bottom thickness; outer height does not."""
        box = first_box(single_row_chest(chest, construction=ConstructionMethod.BUTT_THROUGH_BOTTOM))

        assert box.side_height == pytest.approx(5.5)
        assert box.box_outer_height == pytest.approx(5.75)
        assert box.usable_interior_height == pytest.approx(5.5)

    def test_bottom_is_full_box_footprint(self, chest: ChestConfig) -> None:
        """Bottom spans the full box width and depth."""
        box = first_box(single_row_chest(chest, construction=ConstructionMethod.BUTT_THROUGH_BOTTOM))

        assert box.bottom_width == 13.0
        assert box.bottom_depth == 18.0


# =============================================================================
# Faces
# =============================================================================


class TestFaceDimensions:
    """Tests for overlay and inset drawer faces."""

    def test_overlay_edge_and_middle_rows(self, chest: ChestConfig) -> None:
        """Top and bottom faces cover the carcass edge; the middle shares reveals."""
        boxes = compute_all_drawer_boxes(chest)

        assert [b.face_width for b in boxes] == [15.375, 15.375, 15.375]
        assert [b.face_height for b in boxes] == [6.75, 5.875, 6.75]

    def test_overlay_single_row(self, chest: ChestConfig) -> None:
        """A lone row covers both top and bottom edges."""
        box = first_box(single_row_chest(chest))

        # 6 + 2 * 0.71875 - 0.125 = 7.3125
        assert box.face_height == 7.375

    def test_overlay_with_rails(self, chest: ChestConfig) -> None:
        """Rails between rows widen the covered area by half a rail each."""
        config = replace(
            chest,
            horizontal_rails=HorizontalRailConfig(
                enabled=True, thickness=find_thickness("ply-3/4"), width=3.0
            ),
        )
        column = config.columns[0]

        _, middle = compute_face_dimensions(column.rows[1], column, 1, 0, config)

        assert middle == pytest.approx(6.0 + 0.71875 - 0.125)

    def test_inset(self, chest: ChestConfig) -> None:
        """Inset faces sit inside the opening with a reveal on every side."""
        config = replace(chest, drawer_style=DrawerStyle.INSET)

        for box in compute_all_drawer_boxes(config):
            assert box.face_width == 13.75
            assert box.face_height == 5.75

    def test_faces_on_eighths(self, chest: ChestConfig) -> None:
        """Face dimensions are always whole eighths."""
        for box in compute_all_drawer_boxes(chest):
            assert (box.face_width * 8) == int(box.face_width * 8)
            assert (box.face_height * 8) == int(box.face_height * 8)


# =============================================================================
# Warnings
# =============================================================================


class TestDrawerWarnings:
    """Tests for advisory warnings attached to drawer boxes."""

    def test_scenario_has_no_warnings(self, chest: ChestConfig) -> None:
        """A well-proportioned chest raises nothing."""
        assert not any(box.has_warnings for box in compute_all_drawer_boxes(chest))

    def test_opening_below_slide_height(self, chest: ChestConfig) -> None:
        """An opening shorter than the slide mounting height is flagged."""
        box = first_box(single_row_chest(chest, height=1.5))

        types = [w.type for w in box.warnings]
        assert types == [WarningType.SLIDE_HEIGHT]
        assert "1.75" in box.warnings[0].message

    def test_negative_dimension(self, chest: ChestConfig) -> None:
        """A tiny opening drives dimensions negative and is flagged, not rejected."""
        box = first_box(single_row_chest(chest, height=0.2))

        types = {w.type for w in box.warnings}
        assert WarningType.NEGATIVE_DIMENSION in types
        assert WarningType.SLIDE_HEIGHT in types
        assert box.box_outer_height < 0


# =============================================================================
# Materials and pieces
# =============================================================================


class TestDrawerMaterials:
    """Tests for resolve_drawer_materials."""

    def test_defaults_from_assignments(self, chest: ChestConfig) -> None:
        """Without overrides the chest materials are used."""
        materials = resolve_drawer_materials(chest.columns[0].rows[0], chest)

        assert materials.sides.id == "ply-1/2"
        assert materials.bottom.id == "ply-1/4"
        assert materials.face.id == "ply-3/4"

    def test_override_ignored_outside_advanced_mode(self, chest: ChestConfig) -> None:
        """Row overrides only apply in advanced material mode."""
        row = replace(
            chest.columns[0].rows[0],
            material_override=DrawerMaterialOverride(sides=find_thickness("bb-1/2")),
        )

        assert resolve_drawer_materials(row, chest).sides.id == "ply-1/2"

    def test_override_in_advanced_mode(self, chest: ChestConfig) -> None:
        """In advanced mode overrides replace only the roles they name."""
        config = replace(chest, advanced_material_mode=True)
        row = replace(
            config.columns[0].rows[0],
            material_override=DrawerMaterialOverride(sides=find_thickness("bb-1/2")),
        )

        materials = resolve_drawer_materials(row, config)

        assert materials.sides.id == "bb-1/2"
        assert materials.front_back.id == "ply-1/2"

    def test_override_changes_box_sizing(self, chest: ChestConfig) -> None:
        """Thicker override sides shrink the front and back."""
        config = replace(chest, advanced_material_mode=True)
        column = config.columns[0]
        row = replace(
            column.rows[0],
            material_override=DrawerMaterialOverride(sides=find_thickness("hw-3/4")),
        )
        column = replace(column, rows=(row,) + column.rows[1:])
        config = replace(config, columns=(column,))

        box = compute_drawer_box(row, column, config)

        assert box.front_back_length == pytest.approx(11.5)


class TestDrawerPieces:
    """Tests for drawer_pieces."""

    def test_five_entries_six_pieces(self, chest: ChestConfig) -> None:
        """Two sides, front, back, bottom and face."""
        column = chest.columns[0]
        row = column.rows[0]
        pieces = drawer_pieces(compute_drawer_box(row, column, chest), row, chest)

        assert [p.id for p in pieces] == [
            "c1-r1-side",
            "c1-r1-front",
            "c1-r1-back",
            "c1-r1-bottom",
            "c1-r1-face",
        ]
        assert sum(p.quantity for p in pieces) == 6
        assert pieces[0].label == "Drawer c1-r1 Side"
        assert pieces[3].thickness.id == "ply-1/4"
        assert pieces[4].thickness.id == "ply-3/4"

    def test_boxes_in_column_then_row_order(self, chest: ChestConfig) -> None:
        """compute_all_drawer_boxes walks columns left to right, rows in order."""
        second = Column(
            id="c2",
            opening_width=10.0,
            rows=(Row(id="x", opening_height=18.0, height_mode=HeightMode.DIRECT),),
        )
        config = replace(chest, columns=chest.columns + (second,))

        ids = [(b.column_id, b.row_id) for b in compute_all_drawer_boxes(config)]

        assert ids == [("c1", "r1"), ("c1", "r2"), ("c1", "r3"), ("c2", "x")]
