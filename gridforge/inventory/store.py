"""Instance store — the live containers and the items placed in them.

Every mutation of a container's item list is a single assignment of a
new list, so a reader never sees a half-updated container.  After any
successful commit every item in a container lies on footprint cells and
no two items share a cell.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Mapping

from gridforge.grid.models import (
    Shape, ItemInstance, PackResult,
    NotFoundError, InvalidReferenceError,
)
from gridforge.grid.packer import auto_pack
from gridforge.grid.validator import can_place
from gridforge.layout.models import (
    ContainerInstance, ContainerDefinition, ItemDefinition, SortConfig,
)

from .weight import WeightReport, current_weight, weight_report


log = logging.getLogger(__name__)


class InstanceStore:
    """Live container instances, keyed by instance id.

    Definitions are looked up through the mappings passed in; the store
    never copies them, so edits made by the owner are seen immediately.
    """

    def __init__(
        self,
        containers: Iterable[ContainerInstance],
        container_defs: Mapping[str, ContainerDefinition],
        item_defs: Mapping[str, ItemDefinition],
    ) -> None:
        self._containers: dict[str, ContainerInstance] = {
            c.instance_id: c for c in containers
        }
        self.container_defs = container_defs
        self.item_defs = item_defs

    # ── Lookup ─────────────────────────────────────────────────────

    @property
    def containers(self) -> list[ContainerInstance]:
        return list(self._containers.values())

    def __contains__(self, container_id: str) -> bool:
        return container_id in self._containers

    def get(self, container_id: str) -> ContainerInstance:
        try:
            return self._containers[container_id]
        except KeyError:
            raise NotFoundError("container", container_id) from None

    def definition_of(self, container_id: str) -> ContainerDefinition:
        container = self.get(container_id)
        cdef = self.container_defs.get(container.def_id)
        if cdef is None:
            raise InvalidReferenceError("container", container.def_id)
        return cdef

    def footprint(self, container_id: str) -> Shape:
        return self.definition_of(container_id).shape

    def item_ids(self) -> set[str]:
        return {i.instance_id for c in self._containers.values() for i in c.items}

    # ── Containers ─────────────────────────────────────────────────

    def add(self, container: ContainerInstance) -> ContainerInstance:
        if container.def_id not in self.container_defs:
            raise InvalidReferenceError("container", container.def_id)
        self._containers[container.instance_id] = container
        return container

    def remove(self, container_id: str) -> ContainerInstance:
        container = self.get(container_id)
        del self._containers[container_id]
        log.info("Removed container %s (%d items)", container_id, len(container.items))
        return container

    # ── Placement ──────────────────────────────────────────────────

    def can_place(
        self,
        container_id: str,
        shape: Shape,
        x: int,
        y: int,
        exclude_instance_id: str | None = None,
    ) -> bool:
        container = self.get(container_id)
        return can_place(
            self.footprint(container_id), container.items,
            shape, x, y, exclude_instance_id,
        )

    def pick_up(self, container_id: str, item_id: str) -> ItemInstance:
        """Remove an item from its container and hand it to the caller.

        The returned item belongs to no container until committed or
        restored.
        """
        container = self.get(container_id)
        held = next((i for i in container.items if i.instance_id == item_id), None)
        if held is None:
            raise NotFoundError("item", item_id, where=container_id)
        container.items = [i for i in container.items if i.instance_id != item_id]
        return held

    def try_commit(self, container_id: str, item: ItemInstance, x: int, y: int) -> bool:
        """Place ``item`` at (x, y) if legal.

        Returns False without touching the container when the placement
        is rejected; returning the item to where it came from is the
        caller's job.
        """
        if not self.can_place(container_id, item.current_shape, x, y):
            log.debug("Rejected %s at (%d, %d) in %s", item.instance_id, x, y, container_id)
            return False
        container = self.get(container_id)
        container.items = [*container.items, replace(item, x=x, y=y)]
        log.info("Placed %s at (%d, %d) in %s", item.instance_id, x, y, container_id)
        return True

    def restore(self, container_id: str, item: ItemInstance) -> bool:
        """Put a picked-up item back unchanged, without a fit check.

        Only valid for an item just taken from this container: its cells
        are still free.  Returns False if the container no longer exists.
        """
        if container_id not in self._containers:
            log.warning("Cannot return %s: container %s is gone",
                        item.instance_id, container_id)
            return False
        container = self._containers[container_id]
        container.items = [*container.items, item]
        return True

    def auto_sort(self, container_id: str, config: SortConfig | None = None) -> PackResult:
        """Repack every item of the container.

        The container keeps only the placed items; the caller gets the
        unplaced ones back in the result.
        """
        container = self.get(container_id)
        result = auto_pack(
            container.items, self.footprint(container_id), self.item_defs, config,
        )
        container.items = list(result.placed)
        if result.unplaced:
            log.warning("Auto-sort of %s dropped %d item(s): %s",
                        container_id, len(result.unplaced),
                        ", ".join(i.instance_id for i in result.unplaced))
        return result

    # ── Cascades ───────────────────────────────────────────────────

    def purge_item_def(self, def_id: str) -> int:
        """Remove every instance of an item definition. Returns the count."""
        removed = 0
        for container in self._containers.values():
            kept = [i for i in container.items if i.def_id != def_id]
            removed += len(container.items) - len(kept)
            container.items = kept
        if removed:
            log.warning("Removed %d instance(s) of item definition %s", removed, def_id)
        return removed

    def purge_container_def(self, def_id: str) -> list[str]:
        """Remove every container of a definition. Returns their ids."""
        doomed = [cid for cid, c in self._containers.items() if c.def_id == def_id]
        for cid in doomed:
            del self._containers[cid]
        if doomed:
            log.warning("Removed %d container(s) of definition %s", len(doomed), def_id)
        return doomed

    # ── Weight ─────────────────────────────────────────────────────

    def current_weight(self, container_id: str) -> float:
        return current_weight(self.get(container_id), self.item_defs)

    def weight_report(self, container_id: str) -> WeightReport:
        return weight_report(
            self.get(container_id), self.definition_of(container_id), self.item_defs,
        )
