"""Greedy first-fit repacking of a container's items (auto-sort)."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Mapping, Sequence

from gridforge.config import GRID_RULES

from .geometry import occupied_cells, scan_order
from .models import ItemInstance, PackResult, Shape, Cell, InvalidReferenceError
from .shapes import cell_count, orientations
from .validator import fits

if TYPE_CHECKING:
    from gridforge.layout.models import ItemDefinition, SortConfig


log = logging.getLogger(__name__)


def auto_pack(
    items: Sequence[ItemInstance],
    footprint: Shape,
    definitions: Mapping[str, ItemDefinition],
    config: SortConfig | None = None,
) -> PackResult:
    """Repack ``items`` into ``footprint`` from scratch.

    Items are placed largest first (by occupied cells of their current
    shape; ties keep their input order).  For each item the orientations
    of its definition's base shape are tried unflipped then flipped,
    0..3 clockwise turns each, and for each orientation the origins are
    scanned from the configured start corner.  The first origin that is
    inside the footprint and clear of already-packed items wins.

    Parameters
    ----------
    items : Sequence[ItemInstance]
        The container's current items.  Their positions are ignored.
    footprint : Shape
        The container definition's shape (0 cells are holes).
    definitions : Mapping[str, ItemDefinition]
        Lookup from definition id to definition.
    config : SortConfig, optional
        Rotation/flip permission and start corner.  Defaults to the
        configured grid rules.

    Returns
    -------
    PackResult
        ``placed`` in placement order with updated x, y, shape and
        rotation; ``unplaced`` for items that fit nowhere.

    Raises
    ------
    InvalidReferenceError
        If an item refers to a definition missing from ``definitions``.
    """
    rules = config if config is not None else GRID_RULES

    for item in items:
        if item.def_id not in definitions:
            raise InvalidReferenceError("item", item.def_id)

    ordered = sorted(items, key=lambda it: cell_count(it.current_shape), reverse=True)
    scan = scan_order(footprint, rules.start_corner)
    occupied: set[Cell] = set()
    result = PackResult()

    for item in ordered:
        base = definitions[item.def_id].shape
        placement = _first_fit(
            footprint, occupied, base, scan,
            rules.allow_rotate, rules.allow_flip,
        )
        if placement is None:
            log.warning("Auto-sort could not place %s (%s)",
                        item.instance_id, item.def_id)
            result.unplaced.append(item)
            continue

        x, y, shape, rotation = placement
        occupied.update(occupied_cells(shape, x, y))
        result.placed.append(replace(
            item, x=x, y=y, current_shape=shape, rotation=rotation,
        ))
        log.debug("Auto-placed %s at (%d, %d) rot=%d",
                  item.instance_id, x, y, rotation)

    log.info("Auto-sort placed %d/%d items (corner=%s)",
             len(result.placed), len(items), rules.start_corner)
    return result


def _first_fit(
    footprint: Shape,
    occupied: set[Cell],
    base: Shape,
    scan: list[Cell],
    allow_rotate: bool,
    allow_flip: bool,
) -> tuple[int, int, Shape, int] | None:
    """Return (x, y, shape, rotation) of the first legal trial, or None."""
    for _flipped, rotation, shape in orientations(base, allow_rotate, allow_flip):
        for x, y in scan:
            if fits(footprint, occupied, shape, x, y):
                return x, y, shape, rotation
    return None
