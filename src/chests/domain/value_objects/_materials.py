"""Material thickness value objects and per-part material assignments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MaterialCategory(str, Enum):
    """Broad category of sheet or board stock."""

    PLYWOOD = "plywood"
    HARDWOOD = "hardwood"
    MDF = "mdf"
    CUSTOM = "custom"


@dataclass(frozen=True)
class MaterialThickness:
    """A stock thickness with its nominal label and actual machined size.

    Plywood is usually thinner than its nominal size (3/4" plywood measures
    23/32"), so every calculation uses ``actual``. Pieces and sheets are
    grouped by ``id``, never by the numeric thickness.

    Attributes:
        id: Stable identifier, e.g. ``"ply-3/4"``.
        nominal: Human label, e.g. ``'3/4" plywood'``.
        actual: Measured thickness in the configuration's unit.
        material: Material category.
    """

    id: str
    nominal: str
    actual: float
    material: MaterialCategory = MaterialCategory.PLYWOOD

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Material thickness id must not be empty")
        if self.actual <= 0:
            raise ValueError("Material thickness must be positive")


@dataclass(frozen=True)
class MaterialAssignments:
    """Material thickness used for each structural role in the chest."""

    carcass_top_bottom: MaterialThickness
    carcass_sides: MaterialThickness
    carcass_dividers: MaterialThickness
    carcass_back: MaterialThickness
    horizontal_rails: MaterialThickness
    drawer_sides: MaterialThickness
    drawer_front_back: MaterialThickness
    drawer_bottom: MaterialThickness
    drawer_face: MaterialThickness


@dataclass(frozen=True)
class DrawerMaterialOverride:
    """Optional per-row replacements for the drawer material assignments."""

    sides: MaterialThickness | None = None
    front_back: MaterialThickness | None = None
    bottom: MaterialThickness | None = None
    face: MaterialThickness | None = None


@dataclass(frozen=True)
class DrawerMaterials:
    """Resolved materials for one drawer box."""

    sides: MaterialThickness
    front_back: MaterialThickness
    bottom: MaterialThickness
    face: MaterialThickness
