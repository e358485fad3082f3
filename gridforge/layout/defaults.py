"""Starter definitions a fresh or reset workspace begins with."""

from __future__ import annotations

from gridforge.grid.shapes import make_shape, filled_shape

from .models import (
    ItemDefinition, ContainerDefinition, ContainerInstance,
    SortConfig, VisualSettings, Layout,
)


def default_item_defs() -> list[ItemDefinition]:
    return [
        ItemDefinition(id="i1", name="Long Sword", color="#ef4444",
                       shape=make_shape([[1], [1], [1]]), weight=3.5),
        ItemDefinition(id="i2", name="Wooden Shield", color="#3b82f6",
                       shape=filled_shape(2, 2), weight=2.0),
        ItemDefinition(id="i3", name="Healing Potion", color="#ec4899",
                       shape=filled_shape(1, 1), weight=0.2),
        ItemDefinition(id="i4", name="Leather Armor", color="#8b5c2e",
                       shape=filled_shape(2, 3), weight=5.0),
        ItemDefinition(id="i5", name="Bow and Arrow", color="#22c55e",
                       shape=filled_shape(4, 1), weight=1.5),
        ItemDefinition(id="i6", name="Spellbook", color="#a855f7",
                       shape=filled_shape(2, 2), weight=1.0),
        ItemDefinition(id="i7", name="Gold Coins", color="#eab308",
                       shape=filled_shape(1, 1), weight=0.1),
        ItemDefinition(id="i8", name="Torch", color="#f97316",
                       shape=filled_shape(1, 2), weight=0.5),
        ItemDefinition(id="i9", name="Rope", color="#94a3b8",
                       shape=filled_shape(1, 3), weight=0.8),
    ]


def default_container_defs() -> list[ContainerDefinition]:
    return [
        ContainerDefinition(id="c1", name="Adventurer's Backpack",
                            shape=filled_shape(8, 6), max_weight=10.0),
        ContainerDefinition(id="c2", name="Alchemist's Satchel",
                            shape=filled_shape(4, 4), max_weight=2.0),
        ContainerDefinition(id="c3", name="Treasure Chest",
                            shape=filled_shape(6, 5), max_weight=50.0),
        ContainerDefinition(id="c4", name="Quiver",
                            shape=filled_shape(5, 2), max_weight=5.0),
        ContainerDefinition(id="c5", name="Scroll Case",
                            shape=filled_shape(3, 1), max_weight=0.5),
        ContainerDefinition(id="c6", name="Potion Belt",
                            shape=filled_shape(4, 1), max_weight=1.0),
    ]


def default_layout() -> Layout:
    """A fresh layout: starter definitions and one empty backpack."""
    return Layout(
        item_defs=default_item_defs(),
        container_defs=default_container_defs(),
        active_containers=[ContainerInstance(instance_id="ac1", def_id="c1")],
        sort_config=SortConfig(),
        visual_settings=VisualSettings(),
    )
