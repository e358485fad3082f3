"""Drag gesture — one held item between pick-up and release.

The pointer collaborator reports the hovered cell and the release; the
session turns those into anchored origins, previews and commits.  A
rejected drop and a cancelled drag are the same thing: the item goes
back to its source container at its original coordinates.  An item
taken from the palette has no source and is simply discarded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from gridforge.grid.geometry import occupied_cells
from gridforge.grid.models import Cell, ItemInstance, DragStateError, NotFoundError
from gridforge.grid.targeting import anchor_origin
from gridforge.layout.models import ItemDefinition

from .items import instance_from_definition, new_instance_id, rotate_item, flip_item
from .store import InstanceStore


log = logging.getLogger(__name__)


@dataclass
class HoverPreview:
    """Where the held item would land, and whether it may."""
    container_id: str
    origin: Cell
    cells: list[Cell]
    valid: bool


@dataclass
class DropResult:
    item: ItemInstance
    placed: bool                    # committed at the hover target
    container_id: str | None        # where the item ended up, None if discarded
    x: int
    y: int

    @property
    def discarded(self) -> bool:
        return self.container_id is None


class DragSession:
    """A single pick-up → hover* → release gesture."""

    def __init__(
        self,
        store: InstanceStore,
        item: ItemInstance,
        source_container_id: str | None,
    ) -> None:
        self.store = store
        self.item = item
        self.source_container_id = source_container_id
        self.original = item
        self.target: tuple[str, int, int] | None = None
        self.finished = False

    @classmethod
    def from_container(
        cls, store: InstanceStore, container_id: str, item_id: str,
    ) -> DragSession:
        """Pick an item up out of a container."""
        item = store.pick_up(container_id, item_id)
        log.debug("Picked up %s from %s", item_id, container_id)
        return cls(store, item, container_id)

    @classmethod
    def from_definition(
        cls, store: InstanceStore, definition: ItemDefinition,
    ) -> DragSession:
        """Start dragging a brand-new instance taken from the palette."""
        iid = new_instance_id(store.item_ids())
        return cls(store, instance_from_definition(definition, iid), None)

    @property
    def is_palette(self) -> bool:
        return self.source_container_id is None

    # ── Pointer events ─────────────────────────────────────────────

    def hover(self, container_id: str, grid_x: int, grid_y: int) -> HoverPreview:
        """Record the hovered cell and preview the anchored placement.

        Only the transient target changes; stored containers never do.
        """
        self._check_active()
        if container_id not in self.store:
            self.target = None
            raise NotFoundError("container", container_id)
        self.target = (container_id, grid_x, grid_y)
        shape = self.item.current_shape
        x, y = anchor_origin(shape, grid_x, grid_y)
        return HoverPreview(
            container_id=container_id,
            origin=(x, y),
            cells=sorted(occupied_cells(shape, x, y), key=lambda c: (c[1], c[0])),
            valid=self.store.can_place(container_id, shape, x, y),
        )

    def leave(self) -> None:
        """The pointer left every container."""
        self._check_active()
        self.target = None

    def rotate(self, direction: str) -> ItemInstance:
        self._check_active()
        self.item = rotate_item(self.item, direction)
        return self.item

    def flip(self) -> ItemInstance:
        self._check_active()
        self.item = flip_item(self.item)
        return self.item

    def release(self) -> DropResult:
        """Drop the item at the hover target, or send it back."""
        self._check_active()
        self.finished = True

        if self.target is not None:
            container_id, gx, gy = self.target
            x, y = anchor_origin(self.item.current_shape, gx, gy)
            if container_id in self.store and self.store.try_commit(
                container_id, self.item, x, y,
            ):
                self.item = replace(self.item, x=x, y=y)
                return DropResult(self.item, True, container_id, x, y)

        return self._return_to_source()

    def cancel(self) -> DropResult:
        """End the gesture without a target; same as a rejected drop."""
        self._check_active()
        self.target = None
        return self.release()

    # ── Internals ──────────────────────────────────────────────────

    def _return_to_source(self) -> DropResult:
        if self.source_container_id is not None:
            # Orientation reverts too: only the original cells are known free.
            back = self.original
            if self.store.restore(self.source_container_id, back):
                self.item = back
                return DropResult(back, False, self.source_container_id,
                                  back.x, back.y)
        log.debug("Discarded %s", self.item.instance_id)
        return DropResult(self.item, False, None, self.item.x, self.item.y)

    def _check_active(self) -> None:
        if self.finished:
            raise DragStateError("Drag already released")
