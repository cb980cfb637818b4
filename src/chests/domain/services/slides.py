"""Drawer slide length selection."""

from __future__ import annotations

from chests.domain.constants import STANDARD_SLIDE_LENGTHS

__all__ = ["available_slide_lengths", "recommend_slide_length"]

# Slides need about an inch behind them for the rear mounting bracket.
_REAR_BRACKET_ALLOWANCE = 1.0


def available_slide_lengths() -> tuple[float, ...]:
    """Standard slide lengths, shortest first."""
    return STANDARD_SLIDE_LENGTHS


def recommend_slide_length(available_depth: float) -> float:
    """Longest standard slide that fits in ``available_depth``.

    Falls back to the shortest standard length when none fits.
    """
    max_length = available_depth - _REAR_BRACKET_ALLOWANCE
    for length in reversed(STANDARD_SLIDE_LENGTHS):
        if length <= max_length:
            return length
    return STANDARD_SLIDE_LENGTHS[0]
