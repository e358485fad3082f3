"""Pointer anchoring — map a hovered cell to a placement origin.

Items are dragged by their middle, not their top-left corner: the
hovered cell receives the shape's center cell, and the origin is
derived from that.
"""

from __future__ import annotations

import math

from gridforge.config import GRID_RULES

from .models import Shape, Cell


def center_cell_offset(shape: Shape) -> Cell:
    """Return (center_col, center_row) of the shape's bounding box.

    Integer floor, so even sizes lean top-left: a 4-wide shape's center
    column is 2.
    """
    return len(shape[0]) // 2, len(shape) // 2


def anchor_origin(shape: Shape, grid_x: int, grid_y: int) -> Cell:
    """Origin that puts the shape's center cell on (grid_x, grid_y)."""
    cx, cy = center_cell_offset(shape)
    return grid_x - cx, grid_y - cy


def pixel_to_cell(
    rel_x: float,
    rel_y: float,
    pitch_px: float | None = None,
) -> Cell:
    """Convert a pointer offset inside a rendered grid to a cell.

    ``pitch_px`` is cell size plus gap; defaults to the configured grid.
    Offsets left of or above the grid give negative cells, which the
    validator rejects like any other out-of-bounds origin.
    """
    pitch = pitch_px if pitch_px is not None else GRID_RULES.cell_pitch_px
    return math.floor(rel_x / pitch), math.floor(rel_y / pitch)
