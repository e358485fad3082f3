"""Layout validation — check a parsed save payload for broken references
and illegal placements."""

from __future__ import annotations

from gridforge.grid.geometry import occupied_cells, cells_overlap
from gridforge.grid.models import ROTATIONS
from gridforge.grid.validator import can_place

from .models import Layout


def validate_layout(layout: Layout) -> list[str]:
    """Validate a Layout. Returns error messages (empty = valid)."""
    errors: list[str] = []

    # ── Definition ids must be unique ──
    item_def_ids: set[str] = set()
    for d in layout.item_defs:
        if d.id in item_def_ids:
            errors.append(f"Duplicate item definition id '{d.id}'")
        item_def_ids.add(d.id)

    container_defs = {}
    for d in layout.container_defs:
        if d.id in container_defs:
            errors.append(f"Duplicate container definition id '{d.id}'")
        container_defs[d.id] = d

    # ── Instances ──
    container_ids: set[str] = set()
    item_ids: set[str] = set()
    for c in layout.active_containers:
        if c.instance_id in container_ids:
            errors.append(f"Duplicate container instance id '{c.instance_id}'")
        container_ids.add(c.instance_id)

        cdef = container_defs.get(c.def_id)
        if cdef is None:
            errors.append(
                f"Container '{c.instance_id}': unknown container definition '{c.def_id}'"
            )

        for item in c.items:
            if item.instance_id in item_ids:
                errors.append(f"Duplicate item instance id '{item.instance_id}'")
            item_ids.add(item.instance_id)

            if item.def_id not in item_def_ids:
                errors.append(
                    f"Item '{item.instance_id}' in '{c.instance_id}': "
                    f"unknown item definition '{item.def_id}'"
                )
            if item.rotation not in ROTATIONS:
                errors.append(
                    f"Item '{item.instance_id}': rotation {item.rotation} "
                    f"not in {ROTATIONS}"
                )
            if cdef is not None and not can_place(
                cdef.shape, [], item.current_shape, item.x, item.y,
            ):
                errors.append(
                    f"Item '{item.instance_id}' at ({item.x}, {item.y}) "
                    f"is outside the footprint of '{c.instance_id}'"
                )

        # ── Pairwise overlap ──
        cells = [
            (item.instance_id, occupied_cells(item.current_shape, item.x, item.y))
            for item in c.items
        ]
        for i in range(len(cells)):
            for j in range(i + 1, len(cells)):
                if cells_overlap(cells[i][1], cells[j][1]):
                    errors.append(
                        f"Items '{cells[i][0]}' and '{cells[j][0]}' overlap "
                        f"in '{c.instance_id}'"
                    )

    return errors
