"""Backpack test fixture — small hand-built definitions for engine tests.

Items:
  - sword:   3 tall × 1 wide          (3 cells, 3.5 kg)
  - shield:  2 × 2 solid              (4 cells, 2.0 kg)
  - potion:  1 × 1                    (1 cell,  0.2 kg)
  - ess:     S tetromino [[0,1,1],[1,1,0]]; its mirror is not a rotation

Containers:
  - bag:     4 × 4 solid, no weight limit
  - pouch:   2 × 2 solid, max 1.0
  - row:     1 tall × 3 wide
  - holed:   3 × 3 with a hole at (1, 1)
  - strip:   4 × 2 solid (8 cells)
  - zed:     Z tetromino [[1,1,0],[0,1,1]], exactly one mirrored ess
"""

from __future__ import annotations

from gridforge.grid.models import ItemInstance
from gridforge.grid.shapes import make_shape, filled_shape
from gridforge.layout.models import (
    ItemDefinition, ContainerDefinition, ContainerInstance, Layout,
)


SWORD = make_shape([[1], [1], [1]])
SHIELD = filled_shape(2, 2)
POTION = filled_shape(1, 1)
ESS = make_shape([[0, 1, 1], [1, 1, 0]])
ZED = make_shape([[1, 1, 0], [0, 1, 1]])
HOLED = make_shape([[1, 1, 1], [1, 0, 1], [1, 1, 1]])


def make_item_defs() -> dict[str, ItemDefinition]:
    return {
        "sword": ItemDefinition(id="sword", name="Long Sword", shape=SWORD, weight=3.5),
        "shield": ItemDefinition(id="shield", name="Wooden Shield", shape=SHIELD, weight=2.0),
        "potion": ItemDefinition(id="potion", name="Healing Potion", shape=POTION, weight=0.2),
        "ess": ItemDefinition(id="ess", name="Snake Charm", shape=ESS, weight=1.0),
    }


def make_container_defs() -> dict[str, ContainerDefinition]:
    return {
        "bag": ContainerDefinition(id="bag", name="Bag", shape=filled_shape(4, 4)),
        "pouch": ContainerDefinition(id="pouch", name="Pouch",
                                     shape=filled_shape(2, 2), max_weight=1.0),
        "row": ContainerDefinition(id="row", name="Row", shape=filled_shape(3, 1)),
        "holed": ContainerDefinition(id="holed", name="Holed", shape=HOLED),
        "strip": ContainerDefinition(id="strip", name="Strip", shape=filled_shape(4, 2)),
        "zed": ContainerDefinition(id="zed", name="Zed", shape=ZED),
    }


def item(instance_id: str, def_id: str, x: int = 0, y: int = 0,
         rotation: int = 0, shape=None) -> ItemInstance:
    """An instance in its definition's base orientation unless ``shape`` is given."""
    base = make_item_defs()[def_id].shape
    return ItemInstance(
        instance_id=instance_id,
        def_id=def_id,
        x=x,
        y=y,
        current_shape=shape if shape is not None else base,
        rotation=rotation,
    )


def make_layout(*containers: ContainerInstance) -> Layout:
    """Layout with every fixture definition and the given live containers."""
    return Layout(
        item_defs=list(make_item_defs().values()),
        container_defs=list(make_container_defs().values()),
        active_containers=list(containers),
    )
