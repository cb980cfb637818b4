"""Drawer slide and horizontal rail value objects."""

from __future__ import annotations

from dataclasses import dataclass

from ._materials import MaterialThickness


@dataclass(frozen=True)
class SlideSpec:
    """Side-mount drawer slide specification.

    Attributes:
        length: Closed slide length; sets drawer box depth.
        clearance_per_side: Horizontal gap the slide needs on each side.
        min_mounting_height: Smallest opening the slide can be mounted in.
    """

    length: float
    clearance_per_side: float
    min_mounting_height: float

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("Slide length must be positive")
        if self.clearance_per_side < 0:
            raise ValueError("Slide clearance must be non-negative")
        if self.min_mounting_height < 0:
            raise ValueError("Minimum mounting height must be non-negative")


@dataclass(frozen=True)
class HorizontalRailConfig:
    """Optional rails between stacked drawer openings.

    Attributes:
        enabled: Whether rails are built between rows.
        thickness: Rail stock; its actual thickness adds to column height.
        width: Rail face width, i.e. the rail's front-to-back depth on the cut list.
    """

    enabled: bool
    thickness: MaterialThickness
    width: float

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError("Rail width must be non-negative")


@dataclass(frozen=True)
class RailThresholds:
    """Size limits above which horizontal rails are recommended.

    Attributes:
        width: Carcass outer width limit.
        height: Carcass outer height limit.
        max_rows_before_recommend: Row count a column may have without rails.
    """

    width: float = 36.0
    height: float = 48.0
    max_rows_before_recommend: int = 5
