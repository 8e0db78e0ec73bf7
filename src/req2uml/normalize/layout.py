"""Fallback grid layout for nodes without a usable position."""

from __future__ import annotations

import math
from typing import Any

from req2uml.models.diagram import position_coordinates
from req2uml.normalize.tables import GRID_SPACING_X, GRID_SPACING_Y


def grid_position(index: int, count: int) -> tuple[float, float]:
    """Position of the *index*-th node in a square-ish grid of *count* nodes.

    The grid is ``ceil(sqrt(count))`` columns wide, filled row by row.
    """
    side = max(1, math.ceil(math.sqrt(count)))
    row, col = divmod(index, side)
    return (float(col * GRID_SPACING_X), float(row * GRID_SPACING_Y))


def usable_position(raw: Any) -> tuple[float, float] | None:
    """The generator position in *raw*, or None when it is degenerate.

    Degenerate means absent, unparseable, fewer than two coordinates, or the
    all-zero placeholder (``"0 0"``, ``"0 0 0 0"``).
    """
    coords = position_coordinates(raw)
    if coords is None or len(coords) < 2 or all(c == 0 for c in coords):
        return None
    return (coords[0], coords[1])


def is_degenerate(raw: Any) -> bool:
    return usable_position(raw) is None


def resolve_position(raw: Any, index: int, count: int) -> tuple[float, float]:
    """Keep a usable generator position, otherwise fall back to the grid."""
    position = usable_position(raw)
    if position is None:
        return grid_position(index, count)
    return position
