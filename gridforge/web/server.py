"""
FastAPI web server — HTTP front for the inventory workspace.

The browser UI owns pointer tracking and rendering; it sends discrete
events here (drag start, hovered cell, rotate/flip, release) and reads
back previews and the resulting layout.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from gridforge.config import GRID_RULES
from gridforge.grid.models import InventoryError, NotFoundError
from gridforge.grid.shapes import make_shape
from gridforge.grid.targeting import pixel_to_cell
from gridforge.inventory import Workspace, new_instance_id
from gridforge.layout.models import ItemDefinition, ContainerDefinition, SortConfig, Layout
from gridforge.layout.parsing import parse_layout
from gridforge.layout.serialization import (
    layout_to_dict, item_def_to_dict, container_def_to_dict,
    container_instance_to_dict, item_instance_to_dict, sort_config_to_dict,
)
from gridforge.layout.validation import validate_layout
from gridforge.session import create_session, load_session, list_sessions


log = logging.getLogger(__name__)


# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="GridForge")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Workspace state (persists across requests) ─────────────────────

_workspace = Workspace()


@contextmanager
def _http_errors() -> Iterator[None]:
    """Translate engine errors into HTTP status codes."""
    try:
        yield
    except NotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except (InventoryError, ValueError) as exc:
        raise HTTPException(400, str(exc)) from exc


def _load_checked(layout: Layout) -> None:
    """Replace the workspace with ``layout`` unless it fails validation."""
    errors = validate_layout(layout)
    if errors:
        raise HTTPException(400, {"message": "Invalid save file", "errors": errors})
    _workspace.load(layout)


# ── Models ─────────────────────────────────────────────────────────

class ItemDefRequest(BaseModel):
    id: str | None = None
    name: str
    shape: list[list[int]]
    weight: float = 0.0
    color: str = "#6366f1"
    image: str | None = None
    image_config: dict | None = None


class ContainerDefRequest(BaseModel):
    id: str | None = None
    name: str
    shape: list[list[int]]
    max_weight: float | None = None
    image: str | None = None
    image_config: dict | None = None


class AddContainerRequest(BaseModel):
    def_id: str


class DragStartRequest(BaseModel):
    container_id: str | None = None
    item_id: str | None = None
    def_id: str | None = None       # palette pick-up when set


class HoverRequest(BaseModel):
    container_id: str
    x: int | None = None            # hovered cell
    y: int | None = None
    px: float | None = None         # or pixel offset from the grid's corner
    py: float | None = None


class RotateRequest(BaseModel):
    direction: str                  # "cw" | "ccw"


class SortConfigRequest(BaseModel):
    allow_rotate: bool = True
    allow_flip: bool = True
    start_corner: str = "TL"


class SessionSaveRequest(BaseModel):
    name: str = ""


# ── Layout ─────────────────────────────────────────────────────────

@app.get("/api/layout")
def get_layout():
    return layout_to_dict(_workspace.to_layout())


@app.post("/api/layout")
def load_layout(data: dict[str, Any]):
    """Replace the workspace with an uploaded save file."""
    with _http_errors():
        layout = parse_layout(data)
    _load_checked(layout)
    log.info("Loaded layout with %d container(s)", len(layout.active_containers))
    return layout_to_dict(_workspace.to_layout())


@app.post("/api/reset")
def reset_workspace():
    """Restore the starter definitions and settings."""
    _workspace.reset()
    return {"status": "ok"}


# ── Definitions ────────────────────────────────────────────────────

@app.get("/api/defs")
def search_defs(q: str = ""):
    items, containers = _workspace.search_defs(q)
    return {
        "items": [item_def_to_dict(d) for d in items],
        "containers": [container_def_to_dict(d) for d in containers],
    }


@app.put("/api/defs/items")
def upsert_item_def(req: ItemDefRequest):
    with _http_errors():
        definition = ItemDefinition(
            id=req.id or new_instance_id(_workspace.item_defs),
            name=req.name,
            shape=make_shape(req.shape),
            weight=req.weight,
            color=req.color,
            image=req.image,
            image_config=req.image_config,
        )
    _workspace.upsert_item_def(definition)
    return item_def_to_dict(definition)


@app.delete("/api/defs/items/{def_id}")
def delete_item_def(def_id: str):
    """Delete an item definition; all its instances go with it."""
    with _http_errors():
        removed = _workspace.delete_item_def(def_id)
    return {"status": "ok", "removed_instances": removed}


@app.put("/api/defs/containers")
def upsert_container_def(req: ContainerDefRequest):
    with _http_errors():
        definition = ContainerDefinition(
            id=req.id or new_instance_id(_workspace.container_defs),
            name=req.name,
            shape=make_shape(req.shape),
            max_weight=req.max_weight,
            image=req.image,
            image_config=req.image_config,
        )
    _workspace.upsert_container_def(definition)
    return container_def_to_dict(definition)


@app.delete("/api/defs/containers/{def_id}")
def delete_container_def(def_id: str):
    """Delete a container definition; all active containers of it go with it."""
    with _http_errors():
        removed = _workspace.delete_container_def(def_id)
    return {"status": "ok", "removed_containers": removed}


# ── Containers ─────────────────────────────────────────────────────

@app.post("/api/containers")
def add_container(req: AddContainerRequest):
    with _http_errors():
        container = _workspace.add_container(req.def_id)
    return container_instance_to_dict(container)


@app.delete("/api/containers/{container_id}")
def remove_container(container_id: str):
    with _http_errors():
        _workspace.remove_container(container_id)
    return {"status": "ok"}


@app.post("/api/containers/{container_id}/sort")
def sort_container(container_id: str):
    """Auto-sort a container.  Items that no longer fit are listed in ``unplaced``."""
    with _http_errors():
        result = _workspace.auto_sort(container_id)
    return {
        "items": [item_instance_to_dict(i) for i in result.placed],
        "unplaced": [item_instance_to_dict(i) for i in result.unplaced],
    }


@app.get("/api/containers/{container_id}/weight")
def container_weight(container_id: str):
    with _http_errors():
        report = _workspace.weight_report(container_id)
    return {
        "current": report.current,
        "maximum": report.maximum,
        "overweight": report.overweight,
        "overweight_by": report.overweight_by,
        "percent": report.percent,
    }


@app.put("/api/sort_config")
def update_sort_config(req: SortConfigRequest):
    with _http_errors():
        config = SortConfig(
            allow_rotate=req.allow_rotate,
            allow_flip=req.allow_flip,
            start_corner=req.start_corner,
        )
    _workspace.set_sort_config(config)
    return sort_config_to_dict(config)


# ── Drag gesture ───────────────────────────────────────────────────

@app.get("/api/drag")
def drag_state():
    held = _workspace.held
    return {"held": item_instance_to_dict(held) if held is not None else None}


@app.post("/api/drag/start")
def drag_start(req: DragStartRequest):
    """Pick up an item from a container, or a new one from the palette."""
    with _http_errors():
        if req.def_id is not None:
            item = _workspace.begin_drag_from_palette(req.def_id)
        elif req.container_id is not None and req.item_id is not None:
            item = _workspace.begin_drag(req.container_id, req.item_id)
        else:
            raise HTTPException(400, "Need def_id, or container_id and item_id.")
    return {"held": item_instance_to_dict(item)}


@app.post("/api/drag/hover")
def drag_hover(req: HoverRequest):
    if req.px is not None and req.py is not None:
        pitch = _workspace.visual_settings.grid_scale + GRID_RULES.grid_gap_px
        gx, gy = pixel_to_cell(req.px, req.py, pitch)
    elif req.x is not None and req.y is not None:
        gx, gy = req.x, req.y
    else:
        raise HTTPException(400, "Need x and y, or px and py.")
    with _http_errors():
        preview = _workspace.hover(req.container_id, gx, gy)
    return {
        "container_id": preview.container_id,
        "origin": list(preview.origin),
        "cells": [list(c) for c in preview.cells],
        "valid": preview.valid,
    }


@app.post("/api/drag/leave")
def drag_leave():
    with _http_errors():
        _workspace.leave()
    return {"status": "ok"}


@app.post("/api/drag/rotate")
def drag_rotate(req: RotateRequest):
    with _http_errors():
        item = _workspace.rotate(req.direction)
    return {"held": item_instance_to_dict(item)}


@app.post("/api/drag/flip")
def drag_flip():
    with _http_errors():
        item = _workspace.flip()
    return {"held": item_instance_to_dict(item)}


@app.post("/api/drag/release")
def drag_release():
    with _http_errors():
        result = _workspace.release()
    return _drop_to_dict(result)


@app.post("/api/drag/cancel")
def drag_cancel():
    with _http_errors():
        result = _workspace.cancel()
    return _drop_to_dict(result)


def _drop_to_dict(result) -> dict:
    return {
        "placed": result.placed,
        "container_id": result.container_id,
        "item": item_instance_to_dict(result.item),
    }


# ── Sessions ───────────────────────────────────────────────────────

@app.get("/api/sessions")
def get_sessions():
    return {"sessions": list_sessions()}


@app.post("/api/sessions")
def save_session(req: SessionSaveRequest | None = None):
    """Save the current layout into a new session folder."""
    session = create_session(name=req.name if req else "")
    session.write_layout(_workspace.to_layout())
    return {"status": "ok", "id": session.id}


@app.post("/api/sessions/{session_id}/load")
def restore_session(session_id: str):
    session = load_session(session_id)
    if session is None:
        raise HTTPException(404, f"Session '{session_id}' not found.")
    with _http_errors():
        layout = session.read_layout()
    if layout is None:
        raise HTTPException(400, f"Session '{session_id}' has no saved layout.")
    _load_checked(layout)
    return layout_to_dict(_workspace.to_layout())


# ── Entry point ────────────────────────────────────────────────────

def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("gridforge.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
