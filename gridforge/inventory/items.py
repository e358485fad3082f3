"""Creating item instances and changing their orientation.

Instances are frozen values; every helper returns a new one.
"""

from __future__ import annotations

import random
import string
from dataclasses import replace
from typing import Container

from gridforge.config import GRID_RULES
from gridforge.grid.models import ItemInstance, DIRECTIONS
from gridforge.grid.shapes import (
    rotate_clockwise, rotate_counter_clockwise, flip_horizontal,
)
from gridforge.layout.models import ItemDefinition


_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_instance_id(taken: Container[str] = ()) -> str:
    """Short random base-36 id, distinct from every id in ``taken``."""
    while True:
        iid = "".join(random.choices(_ID_ALPHABET, k=GRID_RULES.instance_id_length))
        if iid not in taken:
            return iid


def instance_from_definition(
    definition: ItemDefinition,
    instance_id: str,
    x: int = -1,
    y: int = -1,
) -> ItemInstance:
    """A fresh, unrotated instance of ``definition``.

    The default origin (-1, -1) marks an instance that has never been
    placed.
    """
    return ItemInstance(
        instance_id=instance_id,
        def_id=definition.id,
        x=x,
        y=y,
        current_shape=definition.shape,
        rotation=0,
    )


def rotate_item(item: ItemInstance, direction: str) -> ItemInstance:
    """Turn the item a quarter clockwise (``"cw"``) or counter-clockwise (``"ccw"``).

    Placement is not checked; that happens when the item is committed.
    """
    if direction == "cw":
        shape = rotate_clockwise(item.current_shape)
        rotation = (item.rotation + 1) % 4
    elif direction == "ccw":
        shape = rotate_counter_clockwise(item.current_shape)
        rotation = (item.rotation + 3) % 4
    else:
        raise ValueError(f"Unknown direction '{direction}', expected one of {DIRECTIONS}")
    return replace(item, current_shape=shape, rotation=rotation)


def flip_item(item: ItemInstance) -> ItemInstance:
    """Mirror the item left-to-right.  ``rotation`` is left unchanged."""
    return replace(item, current_shape=flip_horizontal(item.current_shape))
