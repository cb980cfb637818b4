"""Enumerated design options for a chest of drawers."""

from __future__ import annotations

from enum import Enum


class Unit(str, Enum):
    """Length unit a configuration is expressed in."""

    INCHES = "inches"
    CM = "cm"


class DrawerStyle(str, Enum):
    """How drawer faces mount relative to the carcass opening."""

    OVERLAY = "overlay"
    INSET = "inset"


class ConstructionMethod(str, Enum):
    """Drawer box joinery method.

    - DADO: bottom captured in grooves cut into sides, front and back
    - BUTT_THROUGH_SIDES: bottom fits between the box walls
    - BUTT_THROUGH_BOTTOM: box walls sit on top of a full-size bottom
    """

    DADO = "dado"
    BUTT_THROUGH_SIDES = "butt-through-sides"
    BUTT_THROUGH_BOTTOM = "butt-through-bottom"


class HeightMode(str, Enum):
    """Whether a row's opening height is derived from bin units or set directly."""

    GRID = "grid"
    DIRECT = "direct"


class WarningType(str, Enum):
    """Advisory categories attached to drawer boxes."""

    SLIDE_HEIGHT = "slide-height"
    SLIDE_LENGTH = "slide-length"
    NEGATIVE_DIMENSION = "negative-dimension"
