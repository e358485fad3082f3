"""Grid engine — shapes on a cell grid, fit testing and auto-sort.

Submodules:
  models     Shape/Cell aliases, ItemInstance, PackResult, error kinds.
  shapes     Shape construction and rotate/flip transforms.
  geometry   Occupied cells, footprint containment, scan order.
  validator  Placement legality (containment + no overlap).
  targeting  Pointer anchoring (hovered cell -> origin).
  packer     Greedy first-fit auto-sort.
"""

from .models import (
    Shape, Cell, ItemInstance, PackResult,
    InventoryError, InvalidShapeError, InvalidReferenceError,
    NotFoundError, MissingFieldError, DragStateError,
)
from .shapes import (
    make_shape, filled_shape, shape_size, cell_count,
    rotate_clockwise, rotate_counter_clockwise, flip_horizontal,
    orient, orientations,
)
from .geometry import occupied_cells, footprint_contains, scan_order
from .validator import can_place, fits
from .targeting import center_cell_offset, anchor_origin, pixel_to_cell
from .packer import auto_pack

__all__ = [
    # Models
    "Shape", "Cell", "ItemInstance", "PackResult",
    "InventoryError", "InvalidShapeError", "InvalidReferenceError",
    "NotFoundError", "MissingFieldError", "DragStateError",
    # Shapes
    "make_shape", "filled_shape", "shape_size", "cell_count",
    "rotate_clockwise", "rotate_counter_clockwise", "flip_horizontal",
    "orient", "orientations",
    # Geometry / validation
    "occupied_cells", "footprint_contains", "scan_order",
    "can_place", "fits",
    # Targeting
    "center_cell_offset", "anchor_origin", "pixel_to_cell",
    # Packer
    "auto_pack",
]
