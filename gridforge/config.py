"""Shared constants for the grid engine and its collaborators.

The packer reads its default orientation permissions and start corner
from here, the pointer adapter converts pixels to cells with the grid
scale and gap, and the session store resolves its data directory.
Change a value here and every consumer picks it up.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


ROOT = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class GridRules:
    """Defaults for sorting, display geometry and instance ids."""

    allow_rotate: bool = True
    """Auto-sort may try the three clockwise turns of an item."""

    allow_flip: bool = True
    """Auto-sort may try the mirrored form of an item."""

    start_corner: str = "TL"
    """Corner the auto-sort scan starts from: TL, TR, BL or BR."""

    grid_scale_px: int = 40
    """Rendered edge length of one cell."""

    grid_gap_px: int = 2
    """Gap between two rendered cells."""

    instance_id_length: int = 9
    """Length of generated base-36 instance ids."""

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def cell_pitch_px(self) -> int:
        """Distance from one cell's left edge to the next one's."""
        return self.grid_scale_px + self.grid_gap_px


# Module-level singleton, importable everywhere.
GRID_RULES = GridRules()


def sessions_dir() -> Path:
    """Directory holding saved sessions.

    ``GRIDFORGE_DATA_DIR`` overrides the default ``outputs/sessions``
    folder next to the package.
    """
    override = os.environ.get("GRIDFORGE_DATA_DIR")
    if override:
        return Path(override)
    return ROOT / "outputs" / "sessions"
