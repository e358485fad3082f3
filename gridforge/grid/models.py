"""Grid engine value types, error kinds and constants."""

from __future__ import annotations

from dataclasses import dataclass, field


# ── Shape values ───────────────────────────────────────────────────

# A ShapeMatrix: rows of 0/1 cells, rectangular, at least 1×1.
Shape = tuple[tuple[int, ...], ...]

# A grid coordinate (x, y), container-local.
Cell = tuple[int, int]

EMPTY = 0
FILLED = 1


# ── Placed items ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ItemInstance:
    """One held or placed occurrence of an item definition.

    ``current_shape`` is the definition's shape after ``rotation``
    clockwise turns and any number of flips.  Flip state is not tracked
    separately, so the orientation cannot be rebuilt from ``rotation``
    alone once the item has been mirrored.
    """

    instance_id: str
    def_id: str
    x: int
    y: int
    current_shape: Shape
    rotation: int = 0   # 0..3 clockwise quarter turns


@dataclass
class PackResult:
    """Outcome of an auto-sort run.

    ``placed`` replaces the container's item list.  ``unplaced`` holds
    the items no orientation or origin could fit; they are no longer
    in the container.
    """

    placed: list[ItemInstance] = field(default_factory=list)
    unplaced: list[ItemInstance] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.unplaced


# ── Errors ─────────────────────────────────────────────────────────


class InventoryError(Exception):
    """Base class for every error raised by the grid engine."""


class InvalidShapeError(InventoryError):
    """Raised when a shape matrix is empty or not rectangular."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid shape: {reason}")


class InvalidReferenceError(InventoryError):
    """Raised when an id points at a definition that does not exist."""

    def __init__(self, kind: str, ref_id: str) -> None:
        self.kind = kind
        self.ref_id = ref_id
        super().__init__(f"Unknown {kind} definition '{ref_id}'")


class NotFoundError(InventoryError):
    """Raised when a container or item instance is not where it was expected."""

    def __init__(self, kind: str, instance_id: str, where: str | None = None) -> None:
        self.kind = kind
        self.instance_id = instance_id
        self.where = where
        msg = f"{kind} '{instance_id}' not found"
        if where:
            msg += f" in {where}"
        super().__init__(msg)


class MissingFieldError(InventoryError):
    """Raised when a saved record lacks a required key."""

    def __init__(self, record: str, key: str) -> None:
        self.record = record
        self.key = key
        super().__init__(f"{record} record is missing '{key}'")


class DragStateError(InventoryError):
    """Raised for drag intents that do not match the current gesture."""


# ── Configuration ──────────────────────────────────────────────────

ROTATIONS = (0, 1, 2, 3)
START_CORNERS = ("TL", "TR", "BL", "BR")
DIRECTIONS = ("cw", "ccw")
