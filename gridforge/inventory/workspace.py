"""Workspace — the whole editable state behind one inventory screen.

Holds the definition registries (authored elsewhere and handed in), the
live containers, the sort configuration, display settings, and at most
one drag gesture.  A Layout goes in and comes back out unchanged apart
from the edits made in between.
"""

from __future__ import annotations

import logging

from gridforge.grid.models import (
    ItemInstance, PackResult, DragStateError, InvalidReferenceError,
)
from gridforge.layout.defaults import default_layout
from gridforge.layout.models import (
    ItemDefinition, ContainerDefinition, ContainerInstance,
    SortConfig, VisualSettings, Layout,
)

from .drag import DragSession, HoverPreview, DropResult
from .items import new_instance_id
from .store import InstanceStore
from .weight import WeightReport


log = logging.getLogger(__name__)


class Workspace:

    def __init__(self, layout: Layout | None = None) -> None:
        self.drag: DragSession | None = None
        self.load(layout if layout is not None else default_layout())

    # ── Layout in / out ────────────────────────────────────────────

    def load(self, layout: Layout) -> None:
        """Replace all state with ``layout``.  Any drag in progress is dropped."""
        self.item_defs: dict[str, ItemDefinition] = {d.id: d for d in layout.item_defs}
        self.container_defs: dict[str, ContainerDefinition] = {
            d.id: d for d in layout.container_defs
        }
        self.store = InstanceStore(
            layout.active_containers, self.container_defs, self.item_defs,
        )
        self.sort_config = layout.sort_config
        self.visual_settings = layout.visual_settings
        self.drag = None

    def to_layout(self) -> Layout:
        return Layout(
            item_defs=list(self.item_defs.values()),
            container_defs=list(self.container_defs.values()),
            active_containers=self.store.containers,
            sort_config=self.sort_config,
            visual_settings=self.visual_settings,
        )

    def reset(self) -> None:
        """Back to the starter definitions, one empty backpack, default settings."""
        self.load(default_layout())
        log.info("Workspace reset to defaults")

    # ── Authoring ──────────────────────────────────────────────────

    def upsert_item_def(self, definition: ItemDefinition) -> None:
        self.item_defs[definition.id] = definition

    def upsert_container_def(self, definition: ContainerDefinition) -> None:
        self.container_defs[definition.id] = definition

    def delete_item_def(self, def_id: str) -> int:
        """Delete an item definition and every instance of it.

        A held instance of it is discarded too.  Returns the number of
        placed instances removed.
        """
        if def_id not in self.item_defs:
            raise InvalidReferenceError("item", def_id)
        del self.item_defs[def_id]
        if self.drag is not None and self.drag.item.def_id == def_id:
            log.warning("Discarding held %s: its definition was deleted",
                        self.drag.item.instance_id)
            self.drag = None
        return self.store.purge_item_def(def_id)

    def delete_container_def(self, def_id: str) -> list[str]:
        """Delete a container definition and every active container of it."""
        if def_id not in self.container_defs:
            raise InvalidReferenceError("container", def_id)
        del self.container_defs[def_id]
        return self.store.purge_container_def(def_id)

    def search_defs(self, term: str) -> tuple[list[ItemDefinition], list[ContainerDefinition]]:
        """Definitions whose name contains ``term``, case-insensitively."""
        needle = term.lower()
        return (
            [d for d in self.item_defs.values() if needle in d.name.lower()],
            [d for d in self.container_defs.values() if needle in d.name.lower()],
        )

    # ── Containers ─────────────────────────────────────────────────

    def add_container(self, def_id: str) -> ContainerInstance:
        taken = {c.instance_id for c in self.store.containers}
        container = ContainerInstance(instance_id=new_instance_id(taken), def_id=def_id)
        return self.store.add(container)

    def remove_container(self, container_id: str) -> ContainerInstance:
        return self.store.remove(container_id)

    def auto_sort(self, container_id: str) -> PackResult:
        return self.store.auto_sort(container_id, self.sort_config)

    def set_sort_config(self, config: SortConfig) -> None:
        self.sort_config = config

    def set_visual_settings(self, settings: VisualSettings) -> None:
        self.visual_settings = settings

    def weight_report(self, container_id: str) -> WeightReport:
        return self.store.weight_report(container_id)

    # ── Drag gesture ───────────────────────────────────────────────

    def begin_drag(self, container_id: str, item_id: str) -> ItemInstance:
        self._check_idle()
        self.drag = DragSession.from_container(self.store, container_id, item_id)
        return self.drag.item

    def begin_drag_from_palette(self, def_id: str) -> ItemInstance:
        self._check_idle()
        definition = self.item_defs.get(def_id)
        if definition is None:
            raise InvalidReferenceError("item", def_id)
        self.drag = DragSession.from_definition(self.store, definition)
        return self.drag.item

    def hover(self, container_id: str, grid_x: int, grid_y: int) -> HoverPreview:
        return self._active_drag().hover(container_id, grid_x, grid_y)

    def leave(self) -> None:
        self._active_drag().leave()

    def rotate(self, direction: str) -> ItemInstance:
        return self._active_drag().rotate(direction)

    def flip(self) -> ItemInstance:
        return self._active_drag().flip()

    def release(self) -> DropResult:
        drag = self._active_drag()
        self.drag = None
        return drag.release()

    def cancel(self) -> DropResult:
        drag = self._active_drag()
        self.drag = None
        return drag.cancel()

    @property
    def held(self) -> ItemInstance | None:
        return self.drag.item if self.drag is not None else None

    def _active_drag(self) -> DragSession:
        if self.drag is None:
            raise DragStateError("No item is being dragged")
        return self.drag

    def _check_idle(self) -> None:
        if self.drag is not None:
            raise DragStateError(
                f"Already dragging '{self.drag.item.instance_id}'"
            )
