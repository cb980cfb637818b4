"""Pytest configuration and shared fixtures for chest tests."""

from __future__ import annotations

from typing import Any

import pytest

from chests.domain.constants import find_thickness
from chests.domain.entities import ChestConfig, Column, Row
from chests.domain.value_objects import (
    ConstructionMethod,
    DrawerStyle,
    HeightMode,
    HorizontalRailConfig,
    MaterialAssignments,
    SlideSpec,
)


def _row(
    row_id: str,
    height: float,
    construction: ConstructionMethod = ConstructionMethod.DADO,
) -> Row:
    """A directly-sized row."""
    return Row(
        id=row_id,
        opening_height=height,
        construction=construction,
        height_mode=HeightMode.DIRECT,
    )


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def materials() -> MaterialAssignments:
    """3/4" plywood carcass, 1/4" back and bottoms, 1/2" drawer boxes."""
    return MaterialAssignments(
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


@pytest.fixture
def chest(materials: MaterialAssignments) -> ChestConfig:
    """One 14" column of three 6" dado drawers on 18" slides, no rails."""
    return ChestConfig(
        name="Three Drawer",
        columns=(
            Column(
                id="c1",
                opening_width=14.0,
                rows=(_row("r1", 6.0), _row("r2", 6.0), _row("r3", 6.0)),
            ),
        ),
        materials=materials,
        slide_spec=SlideSpec(length=18.0, clearance_per_side=0.5, min_mounting_height=1.75),
        horizontal_rails=HorizontalRailConfig(
            enabled=False,
            thickness=find_thickness("ply-3/4"),
            width=3.0,
        ),
        drawer_style=DrawerStyle.OVERLAY,
    )


@pytest.fixture
def chest_data() -> dict[str, Any]:
    """Configuration file contents matching the ``chest`` fixture."""
    return {
        "schema_version": "1.0",
        "chest": {
            "name": "Three Drawer",
            "columns": [
                {
                    "id": "c1",
                    "opening_width": 14.0,
                    "rows": [
                        {"id": "r1", "opening_height": 6.0},
                        {"id": "r2", "opening_height": 6.0},
                        {"id": "r3", "opening_height": 6.0},
                    ],
                }
            ],
        },
    }
