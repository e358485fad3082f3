"""
GridForge — entry point.

Usage:
    python -m gridforge serve                      # web server on :8000
    python -m gridforge serve --port 3000
    python -m gridforge sort save.json --container ac1 --out sorted.json
    python -m gridforge validate save.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from gridforge.grid.models import InventoryError
from gridforge.inventory import Workspace
from gridforge.layout import SortConfig, parse_layout, layout_to_dict, validate_layout


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gridforge",
        description="Grid placement and auto-sort for inventory layouts",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sv = sub.add_parser("serve", help="Start the web server")
    sv.add_argument("--host", default="127.0.0.1", help="Host to bind")
    sv.add_argument("--port", type=int, default=8000, help="Port to bind")

    so = sub.add_parser("sort", help="Auto-sort one container of a save file")
    so.add_argument("file", help="Path to a save file (JSON)")
    so.add_argument("--container", required=True, help="Container instance id")
    so.add_argument("--out", default=None, help="Write the result here (default: stdout)")
    so.add_argument("--no-rotate", action="store_true", help="Do not try rotations")
    so.add_argument("--no-flip", action="store_true", help="Do not try mirrored forms")
    so.add_argument("--corner", default=None, choices=["TL", "TR", "BL", "BR"],
                    help="Scan start corner (default: the file's sortConfig)")

    va = sub.add_parser("validate", help="Check a save file for broken references and overlaps")
    va.add_argument("file", help="Path to a save file (JSON)")

    return p


def _load(path: str):
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_layout(data)


def _sort(args) -> int:
    workspace = Workspace(_load(args.file))
    base = workspace.sort_config
    if args.no_rotate or args.no_flip or args.corner:
        workspace.set_sort_config(SortConfig(
            allow_rotate=base.allow_rotate and not args.no_rotate,
            allow_flip=base.allow_flip and not args.no_flip,
            start_corner=args.corner or base.start_corner,
        ))

    result = workspace.auto_sort(args.container)
    for item in result.unplaced:
        print(f"unplaced: {item.instance_id} ({item.def_id})", file=sys.stderr)

    text = json.dumps(layout_to_dict(workspace.to_layout()), indent=2)
    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
        print(f"Placed {len(result.placed)} item(s), wrote {args.out}")
    else:
        print(text)
    return 0 if result.complete else 1


def _validate(args) -> int:
    errors = validate_layout(_load(args.file))
    for e in errors:
        print(e)
    if not errors:
        print("OK")
    return 1 if errors else 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "serve":
        from gridforge.web.server import main as serve
        serve(host=args.host, port=args.port)
        return 0

    try:
        if args.cmd == "sort":
            return _sort(args)
        if args.cmd == "validate":
            return _validate(args)
    except (InventoryError, ValueError, KeyError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 2


if __name__ == "__main__":
    sys.exit(main())
