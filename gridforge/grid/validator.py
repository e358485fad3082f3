"""Placement legality: containment in the footprint and no overlap."""

from __future__ import annotations

import logging
from typing import Iterable

from .geometry import occupied_cells, footprint_contains, cells_overlap
from .models import Shape, Cell, ItemInstance


log = logging.getLogger(__name__)


def fits(
    footprint: Shape,
    occupied: frozenset[Cell] | set[Cell],
    shape: Shape,
    origin_x: int,
    origin_y: int,
) -> bool:
    """True if every cell of ``shape`` lands on a free footprint cell.

    ``occupied`` is the set of cells already taken by other items.
    """
    for cell in occupied_cells(shape, origin_x, origin_y):
        if not footprint_contains(footprint, cell):
            return False
        if cell in occupied:
            return False
    return True


def can_place(
    footprint: Shape,
    existing: Iterable[ItemInstance],
    shape: Shape,
    origin_x: int,
    origin_y: int,
    exclude_instance_id: str | None = None,
) -> bool:
    """Decide whether ``shape`` may sit at the origin inside a container.

    Fails if any candidate cell is outside the footprint's bounding box,
    lands on a hole, or coincides with a cell of an existing instance.
    The instance named by ``exclude_instance_id`` is ignored so an item
    can be tested against the spot it is being moved from.
    """
    candidate = occupied_cells(shape, origin_x, origin_y)
    for cell in candidate:
        if not footprint_contains(footprint, cell):
            log.debug("Reject (%d, %d): cell %s outside footprint",
                      origin_x, origin_y, cell)
            return False

    for inst in existing:
        if exclude_instance_id is not None and inst.instance_id == exclude_instance_id:
            continue
        other = occupied_cells(inst.current_shape, inst.x, inst.y)
        if cells_overlap(candidate, other):
            log.debug("Reject (%d, %d): overlaps %s",
                      origin_x, origin_y, inst.instance_id)
            return False

    return True
