"""Layout parsing — convert a save-file dict into a Layout.

The save format keeps the browser app's camelCase keys:

    {"itemDefs": [...], "containerDefs": [...], "activeContainers": [...],
     "sortConfig": {...}, "visualSettings": {...}}

Sections missing from the payload fall back to the defaults, so a file
holding only definitions still loads.
"""

from __future__ import annotations

from gridforge.grid.models import ItemInstance, MissingFieldError
from gridforge.grid.shapes import make_shape

from .defaults import default_layout
from .models import (
    ItemDefinition, ContainerDefinition, ContainerInstance,
    SortConfig, VisualSettings, Layout,
)


def parse_layout(data: dict) -> Layout:
    """Parse a raw dict (from JSON) into a Layout.

    Raises InvalidShapeError for empty or jagged shapes and MissingFieldError
    for records missing required fields.
    """
    fallback = default_layout()

    item_defs = (
        [parse_item_def(d) for d in data["itemDefs"]]
        if data.get("itemDefs") is not None else fallback.item_defs
    )
    container_defs = (
        [parse_container_def(d) for d in data["containerDefs"]]
        if data.get("containerDefs") is not None else fallback.container_defs
    )
    active_containers = (
        [parse_container_instance(c) for c in data["activeContainers"]]
        if data.get("activeContainers") is not None else fallback.active_containers
    )
    sort_config = (
        parse_sort_config(data["sortConfig"])
        if data.get("sortConfig") else fallback.sort_config
    )
    visual_settings = (
        parse_visual_settings(data["visualSettings"])
        if data.get("visualSettings") else fallback.visual_settings
    )

    return Layout(
        item_defs=item_defs,
        container_defs=container_defs,
        active_containers=active_containers,
        sort_config=sort_config,
        visual_settings=visual_settings,
    )


def _required(data: dict, key: str, record: str):
    try:
        return data[key]
    except KeyError:
        raise MissingFieldError(record, key) from None


def parse_item_def(data: dict) -> ItemDefinition:
    return ItemDefinition(
        id=_required(data, "id", "itemDef"),
        name=_required(data, "name", "itemDef"),
        shape=make_shape(_required(data, "shape", "itemDef")),
        weight=float(data.get("weight") or 0),
        color=data.get("color") or "#6366f1",
        image=data.get("image"),
        image_config=data.get("imageConfig"),
    )


def parse_container_def(data: dict) -> ContainerDefinition:
    max_weight = data.get("maxWeight")
    return ContainerDefinition(
        id=_required(data, "id", "containerDef"),
        name=_required(data, "name", "containerDef"),
        shape=make_shape(_required(data, "shape", "containerDef")),
        max_weight=float(max_weight) if max_weight is not None else None,
        image=data.get("image"),
        image_config=data.get("imageConfig"),
    )


def parse_item_instance(data: dict) -> ItemInstance:
    return ItemInstance(
        instance_id=_required(data, "instanceId", "item"),
        def_id=_required(data, "defId", "item"),
        x=int(_required(data, "x", "item")),
        y=int(_required(data, "y", "item")),
        current_shape=make_shape(_required(data, "currentShape", "item")),
        rotation=int(data.get("rotation", 0)),
    )


def parse_container_instance(data: dict) -> ContainerInstance:
    return ContainerInstance(
        instance_id=_required(data, "instanceId", "activeContainer"),
        def_id=_required(data, "defId", "activeContainer"),
        items=[parse_item_instance(i) for i in data.get("items", [])],
    )


def parse_sort_config(data: dict) -> SortConfig:
    defaults = SortConfig()
    return SortConfig(
        allow_rotate=bool(data.get("allowRotate", defaults.allow_rotate)),
        allow_flip=bool(data.get("allowFlip", defaults.allow_flip)),
        start_corner=data.get("startCorner", defaults.start_corner),
    )


def parse_visual_settings(data: dict) -> VisualSettings:
    """Merge saved values over the defaults, as the browser app does."""
    defaults = VisualSettings()
    return VisualSettings(
        thickness=data.get("thickness", defaults.thickness),
        color=data.get("color", defaults.color),
        opacity=data.get("opacity", defaults.opacity),
        grid_scale=data.get("gridScale", defaults.grid_scale),
        image_fill_color=data.get("imageFillColor", defaults.image_fill_color),
        image_fill_opacity=data.get("imageFillOpacity", defaults.image_fill_opacity),
    )
