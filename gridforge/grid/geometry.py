"""Low-level cell geometry helpers for the validator and the packer."""

from __future__ import annotations

from .models import Shape, Cell, FILLED, START_CORNERS


def occupied_cells(shape: Shape, origin_x: int, origin_y: int) -> frozenset[Cell]:
    """Return the container cells covered by ``shape`` placed at the origin.

    Cells are visited row-major, but callers treat the result as a set.
    """
    return frozenset(
        (origin_x + x, origin_y + y)
        for y, row in enumerate(shape)
        for x, cell in enumerate(row)
        if cell == FILLED
    )


def footprint_contains(footprint: Shape, cell: Cell) -> bool:
    """True if ``cell`` lies inside the bounding box and is not a hole."""
    x, y = cell
    if y < 0 or y >= len(footprint):
        return False
    if x < 0 or x >= len(footprint[0]):
        return False
    return footprint[y][x] == FILLED


def footprint_cells(footprint: Shape) -> frozenset[Cell]:
    """All usable cells of a container footprint."""
    return occupied_cells(footprint, 0, 0)


def cells_overlap(a: frozenset[Cell], b: frozenset[Cell]) -> bool:
    return not a.isdisjoint(b)


def scan_order(footprint: Shape, start_corner: str = "TL") -> list[Cell]:
    """Every cell of the footprint's bounding box, in packer scan order.

    TL: ascending y, then ascending x (row-major).
    TR: ascending y, then descending x.
    BL: descending y, then ascending x.
    BR: descending y, then descending x.
    Holes are included; the validator rejects them as origins later.
    """
    if start_corner not in START_CORNERS:
        raise ValueError(
            f"Unknown start corner '{start_corner}', expected one of {START_CORNERS}"
        )
    rows = len(footprint)
    cols = len(footprint[0])
    ys = range(rows - 1, -1, -1) if start_corner in ("BL", "BR") else range(rows)
    xs = range(cols - 1, -1, -1) if start_corner in ("TR", "BR") else range(cols)
    return [(x, y) for y in ys for x in xs]
