"""Convert a Layout to the JSON-safe save-file dict."""

from __future__ import annotations

from gridforge.grid.models import Shape, ItemInstance

from .models import (
    ItemDefinition, ContainerDefinition, ContainerInstance,
    SortConfig, VisualSettings, Layout,
)


def layout_to_dict(layout: Layout) -> dict:
    """Convert a Layout to the camelCase save-file dict."""
    return {
        "itemDefs": [item_def_to_dict(d) for d in layout.item_defs],
        "containerDefs": [container_def_to_dict(d) for d in layout.container_defs],
        "activeContainers": [
            container_instance_to_dict(c) for c in layout.active_containers
        ],
        "sortConfig": sort_config_to_dict(layout.sort_config),
        "visualSettings": visual_settings_to_dict(layout.visual_settings),
    }


def shape_to_list(shape: Shape) -> list[list[int]]:
    return [list(row) for row in shape]


def item_def_to_dict(d: ItemDefinition) -> dict:
    return {
        "id": d.id,
        "name": d.name,
        "type": "item",
        "shape": shape_to_list(d.shape),
        "weight": d.weight,
        "color": d.color,
        "image": d.image,
        "imageConfig": d.image_config,
    }


def container_def_to_dict(d: ContainerDefinition) -> dict:
    return {
        "id": d.id,
        "name": d.name,
        "type": "container",
        "shape": shape_to_list(d.shape),
        **({"maxWeight": d.max_weight} if d.max_weight is not None else {}),
        "image": d.image,
        "imageConfig": d.image_config,
    }


def item_instance_to_dict(item: ItemInstance) -> dict:
    return {
        "instanceId": item.instance_id,
        "defId": item.def_id,
        "x": item.x,
        "y": item.y,
        "currentShape": shape_to_list(item.current_shape),
        "rotation": item.rotation,
    }


def container_instance_to_dict(c: ContainerInstance) -> dict:
    return {
        "instanceId": c.instance_id,
        "defId": c.def_id,
        "items": [item_instance_to_dict(i) for i in c.items],
    }


def sort_config_to_dict(cfg: SortConfig) -> dict:
    return {
        "allowRotate": cfg.allow_rotate,
        "allowFlip": cfg.allow_flip,
        "startCorner": cfg.start_corner,
    }


def visual_settings_to_dict(vs: VisualSettings) -> dict:
    return {
        "thickness": vs.thickness,
        "color": vs.color,
        "opacity": vs.opacity,
        "gridScale": vs.grid_scale,
        "imageFillColor": vs.image_fill_color,
        "imageFillOpacity": vs.image_fill_opacity,
    }
