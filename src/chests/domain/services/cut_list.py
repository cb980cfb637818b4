"""Cut list generation: collect, merge and group every panel in a chest."""

from __future__ import annotations

import logging
from dataclasses import replace

from chests.domain.entities import ChestConfig
from chests.domain.value_objects import CutPiece, MaterialThickness

from .carcass import carcass_pieces, compute_carcass
from .drawer import compute_drawer_box, drawer_pieces

logger = logging.getLogger(__name__)

__all__ = [
    "aggregate_cut_pieces",
    "all_cut_pieces",
    "group_by_thickness",
    "merge_pieces",
    "unique_thicknesses",
]


def all_cut_pieces(config: ChestConfig) -> list[CutPiece]:
    """Carcass pieces followed by each drawer's pieces, unmerged."""
    pieces = carcass_pieces(config, compute_carcass(config))
    for column in config.columns:
        for row in column.rows:
            box = compute_drawer_box(row, column, config)
            pieces.extend(drawer_pieces(box, row, config))
    return pieces


def _piece_key(piece: CutPiece) -> tuple[str, float, float]:
    return (piece.thickness.id, piece.width, piece.height)


def merge_pieces(pieces: list[CutPiece]) -> list[CutPiece]:
    """Collapse physically identical pieces into one with a summed quantity.

    Pieces are identical when thickness id, width and height all match.
    Orientation matters: 10x20 and 20x10 stay separate. The first piece of
    each group keeps its id and label.
    """
    merged: dict[tuple[str, float, float], CutPiece] = {}
    for piece in pieces:
        key = _piece_key(piece)
        existing = merged.get(key)
        if existing is None:
            merged[key] = piece
        else:
            merged[key] = replace(existing, quantity=existing.quantity + piece.quantity)
    return list(merged.values())


def aggregate_cut_pieces(config: ChestConfig) -> list[CutPiece]:
    """Merged cut list for the whole chest."""
    pieces = all_cut_pieces(config)
    merged = merge_pieces(pieces)
    logger.debug(
        "Cut list for %s: %d pieces merged into %d entries",
        config.name,
        len(pieces),
        len(merged),
    )
    return merged


def group_by_thickness(pieces: list[CutPiece]) -> dict[str, list[CutPiece]]:
    """Group pieces by material thickness id, in first-seen order."""
    groups: dict[str, list[CutPiece]] = {}
    for piece in pieces:
        groups.setdefault(piece.thickness.id, []).append(piece)
    return groups


def unique_thicknesses(pieces: list[CutPiece]) -> list[MaterialThickness]:
    """Distinct thicknesses used by ``pieces``, in first-seen order."""
    seen: dict[str, MaterialThickness] = {}
    for piece in pieces:
        seen.setdefault(piece.thickness.id, piece.thickness)
    return list(seen.values())
