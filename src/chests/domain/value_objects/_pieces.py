"""Cut pieces and stock sheets."""

from __future__ import annotations

from dataclasses import dataclass

from ._materials import MaterialThickness


@dataclass(frozen=True)
class CutPiece:
    """A rectangle to be cut from sheet stock.

    Physically identical pieces share one CutPiece with a summed quantity.
    Width and height are not validated for sign: an infeasible design still
    yields its (flagged) pieces.
    """

    id: str
    label: str
    width: float
    height: float
    thickness: MaterialThickness
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")

    @property
    def area(self) -> float:
        """Area of a single piece."""
        return self.width * self.height

    @property
    def total_area(self) -> float:
        """Area of all pieces of this kind."""
        return self.area * self.quantity


@dataclass(frozen=True)
class StockSheet:
    """A sheet of raw material of one thickness."""

    id: str
    label: str
    width: float
    height: float
    thickness: MaterialThickness

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.height <= 0:
            raise ValueError("Sheet height must be positive")

    @property
    def area(self) -> float:
        """Total sheet area."""
        return self.width * self.height
