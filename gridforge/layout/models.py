"""Definitions, live containers and the save payload."""

from __future__ import annotations

from dataclasses import dataclass, field

from gridforge.config import GRID_RULES
from gridforge.grid.models import Shape, ItemInstance, START_CORNERS


@dataclass
class ItemDefinition:
    """Reusable item template authored in the editor."""
    id: str
    name: str
    shape: Shape
    weight: float = 0.0
    color: str = "#6366f1"
    image: str | None = None            # data URL or asset reference
    image_config: dict | None = None    # x, y, scale, panOffset, zoom


@dataclass
class ContainerDefinition:
    """Reusable container layout.  0 cells in ``shape`` are holes."""
    id: str
    name: str
    shape: Shape
    max_weight: float | None = None     # None = unlimited
    image: str | None = None
    image_config: dict | None = None


@dataclass
class ContainerInstance:
    """A live container.  ``items`` is replaced wholesale, never edited in place."""
    instance_id: str
    def_id: str
    items: list[ItemInstance] = field(default_factory=list)


@dataclass
class SortConfig:
    allow_rotate: bool = GRID_RULES.allow_rotate
    allow_flip: bool = GRID_RULES.allow_flip
    start_corner: str = GRID_RULES.start_corner

    def __post_init__(self) -> None:
        if self.start_corner not in START_CORNERS:
            raise ValueError(
                f"Unknown start corner '{self.start_corner}', "
                f"expected one of {START_CORNERS}"
            )


@dataclass
class VisualSettings:
    """Display-only settings.  Persisted, never read by the engine."""
    thickness: float = 2
    color: str = "#000000"
    opacity: float = 0.5
    grid_scale: int = GRID_RULES.grid_scale_px
    image_fill_color: str = "#6366f1"
    image_fill_opacity: float = 0.0


@dataclass
class Layout:
    """Everything a save file holds."""
    item_defs: list[ItemDefinition]
    container_defs: list[ContainerDefinition]
    active_containers: list[ContainerInstance]
    sort_config: SortConfig = field(default_factory=SortConfig)
    visual_settings: VisualSettings = field(default_factory=VisualSettings)
