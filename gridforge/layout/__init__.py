"""Layout — definitions, container instances and the save payload."""

from .models import (
    ItemDefinition, ContainerDefinition, ContainerInstance,
    SortConfig, VisualSettings, Layout,
)
from .parsing import parse_layout
from .validation import validate_layout
from .serialization import layout_to_dict
from .defaults import default_layout

__all__ = [
    # Models
    "ItemDefinition", "ContainerDefinition", "ContainerInstance",
    "SortConfig", "VisualSettings", "Layout",
    # Parsing / Validation / Serialization
    "parse_layout", "validate_layout", "layout_to_dict",
    # Defaults
    "default_layout",
]
