"""
Session management — each session is a folder on disk holding one saved
inventory layout.

Sessions are identified by a timestamp ID and stored under
  <data dir>/<session_id>/

A session folder contains:
  session.json — metadata (created, last_modified, name)
  layout.json  — the save payload (itemDefs, containerDefs,
                 activeContainers, sortConfig, visualSettings)

The data dir defaults to outputs/sessions and can be moved with the
GRIDFORGE_DATA_DIR environment variable.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from gridforge.config import sessions_dir
from gridforge.layout.models import Layout
from gridforge.layout.parsing import parse_layout
from gridforge.layout.serialization import layout_to_dict


log = logging.getLogger(__name__)

META_FILE = "session.json"
LAYOUT_FILE = "layout.json"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Session:
    id: str
    path: Path
    created: str                         # ISO 8601
    last_modified: str                   # ISO 8601
    name: str = ""

    @property
    def layout_path(self) -> Path:
        return self.path / LAYOUT_FILE

    @property
    def has_layout(self) -> bool:
        return self.layout_path.exists()

    def save(self) -> None:
        """Write session.json, bumping last_modified."""
        self.last_modified = _now()
        self.path.mkdir(parents=True, exist_ok=True)
        meta = {
            "id": self.id,
            "name": self.name,
            "created": self.created,
            "last_modified": self.last_modified,
        }
        (self.path / META_FILE).write_text(json.dumps(meta, indent=2), encoding="utf-8")

    def write_layout(self, layout: Layout) -> Path:
        """Store ``layout`` as this session's save payload."""
        self.path.mkdir(parents=True, exist_ok=True)
        self.layout_path.write_text(
            json.dumps(layout_to_dict(layout), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        self.save()
        log.info("Saved layout to session %s (%d containers)",
                 self.id, len(layout.active_containers))
        return self.layout_path

    def read_layout(self) -> Layout | None:
        """Parse the saved layout. Returns None if nothing has been saved yet."""
        if not self.has_layout:
            return None
        return parse_layout(json.loads(self.layout_path.read_text(encoding="utf-8")))


def _read_meta(folder: Path) -> dict | None:
    meta_path = folder / META_FILE
    if not meta_path.is_file():
        return None
    try:
        return json.loads(meta_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        log.warning("Unreadable session metadata in %s", folder)
        return None


def _session_from_meta(folder: Path, meta: dict) -> Session:
    return Session(
        id=meta.get("id", folder.name),
        path=folder,
        created=meta.get("created", ""),
        last_modified=meta.get("last_modified", ""),
        name=meta.get("name", ""),
    )


def create_session(name: str = "") -> Session:
    """Create a new, empty session folder."""
    root = sessions_dir()
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    sid, n = stamp, 1
    while (root / sid).exists():
        n += 1
        sid = f"{stamp}_{n}"

    now = _now()
    session = Session(id=sid, path=root / sid, created=now, last_modified=now, name=name)
    session.save()
    return session


def load_session(session_id: str) -> Session | None:
    """Look a session up by ID. Returns None if it does not exist."""
    folder = sessions_dir() / session_id
    meta = _read_meta(folder)
    if meta is None:
        return None
    return _session_from_meta(folder, meta)


def list_sessions() -> list[dict]:
    """Metadata for every session, newest first."""
    root = sessions_dir()
    if not root.is_dir():
        return []

    listed = []
    for folder in sorted(root.iterdir(), reverse=True):
        meta = _read_meta(folder) if folder.is_dir() else None
        if meta is None:
            continue
        session = _session_from_meta(folder, meta)
        listed.append({
            "id": session.id,
            "name": session.name,
            "created": session.created,
            "last_modified": session.last_modified,
            "has_layout": session.has_layout,
        })
    return listed
