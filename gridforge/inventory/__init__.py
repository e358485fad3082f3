"""Live containers, held items and the workspace around them."""

from .items import new_instance_id, instance_from_definition, rotate_item, flip_item
from .weight import WeightReport, current_weight, weight_report
from .store import InstanceStore
from .drag import DragSession, HoverPreview, DropResult
from .workspace import Workspace

__all__ = [
    "new_instance_id", "instance_from_definition", "rotate_item", "flip_item",
    "WeightReport", "current_weight", "weight_report",
    "InstanceStore",
    "DragSession", "HoverPreview", "DropResult",
    "Workspace",
]
