"""Shape matrix construction and orientation transforms.

Every transform returns a new tuple-of-tuples; nothing here mutates its
input, so a definition's base shape is safe to share between instances.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .models import Shape, EMPTY, FILLED, InvalidShapeError, ROTATIONS


def make_shape(rows: Iterable[Iterable]) -> Shape:
    """Build a shape from nested rows, coercing truthy cells to 1.

    Raises InvalidShapeError for zero rows, zero columns or jagged rows.
    """
    shape = tuple(
        tuple(FILLED if cell else EMPTY for cell in row)
        for row in rows
    )
    if not shape:
        raise InvalidShapeError("shape has no rows")
    width = len(shape[0])
    if width == 0:
        raise InvalidShapeError("shape has no columns")
    for y, row in enumerate(shape):
        if len(row) != width:
            raise InvalidShapeError(
                f"row {y} has {len(row)} cells, expected {width}"
            )
    return shape


def filled_shape(width: int, height: int) -> Shape:
    """A solid width×height rectangle."""
    return make_shape([[FILLED] * width for _ in range(height)])


def shape_size(shape: Shape) -> tuple[int, int]:
    """Return (width, height) of the shape's bounding box."""
    return len(shape[0]), len(shape)


def cell_count(shape: Shape) -> int:
    """Number of occupied cells."""
    return sum(cell == FILLED for row in shape for cell in row)


def rotate_clockwise(shape: Shape) -> Shape:
    """Rotate 90° clockwise: an R×C matrix becomes C×R.

    ``new[x][R - 1 - y] = old[y][x]``.
    """
    rows = len(shape)
    cols = len(shape[0])
    return tuple(
        tuple(shape[rows - 1 - j][x] for j in range(rows))
        for x in range(cols)
    )


def rotate_counter_clockwise(shape: Shape) -> Shape:
    """Rotate 90° counter-clockwise (three clockwise turns)."""
    return rotate_clockwise(rotate_clockwise(rotate_clockwise(shape)))


def flip_horizontal(shape: Shape) -> Shape:
    """Mirror left-to-right by reversing every row."""
    return tuple(tuple(reversed(row)) for row in shape)


def orient(base: Shape, rotation: int, flipped: bool = False) -> Shape:
    """Apply an optional flip, then ``rotation`` clockwise turns."""
    shape = flip_horizontal(base) if flipped else base
    for _ in range(rotation % 4):
        shape = rotate_clockwise(shape)
    return shape


def orientations(
    base: Shape,
    allow_rotate: bool = True,
    allow_flip: bool = True,
) -> Iterator[tuple[bool, int, Shape]]:
    """Yield (flipped, rotation, shape) in auto-sort trial order.

    Outer loop: unflipped, then flipped.  Inner loop: 0..3 clockwise
    turns.  Duplicate shapes (symmetric items) are still yielded so the
    reported rotation matches the first trial that fits.
    """
    flips = (False, True) if allow_flip else (False,)
    rotations = ROTATIONS if allow_rotate else (0,)
    for flipped in flips:
        for rotation in rotations:
            yield flipped, rotation, orient(base, rotation, flipped)
