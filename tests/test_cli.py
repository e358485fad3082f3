"""Tests for the command-line entry point."""

from __future__ import annotations

import json
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path

from gridforge.__main__ import main
from gridforge.layout import ContainerInstance, layout_to_dict
from tests.backpack_fixture import make_layout, item


class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, layout) -> str:
        path = self.dir / "save.json"
        path.write_text(json.dumps(layout_to_dict(layout)), encoding="utf-8")
        return str(path)

    def test_validate_ok(self):
        path = self.write(make_layout(ContainerInstance("a", "bag", [item("s", "shield")])))
        out = StringIO()
        with redirect_stdout(out):
            self.assertEqual(main(["validate", path]), 0)
        self.assertIn("OK", out.getvalue())

    def test_validate_overlap(self):
        path = self.write(make_layout(ContainerInstance("a", "bag", [
            item("s1", "shield", 0, 0), item("s2", "shield", 1, 0),
        ])))
        out = StringIO()
        with redirect_stdout(out):
            self.assertEqual(main(["validate", path]), 1)
        self.assertIn("overlap", out.getvalue())

    def test_sort_writes_result(self):
        path = self.write(make_layout(ContainerInstance("a", "strip", [
            item("p", "potion", 0, 0), item("s", "shield", 2, 0),
        ])))
        out_path = self.dir / "sorted.json"
        with redirect_stdout(StringIO()):
            code = main(["sort", path, "--container", "a", "--corner", "BR",
                         "--out", str(out_path)])
        self.assertEqual(code, 0)

        data = json.loads(out_path.read_text(encoding="utf-8"))
        placed = {i["instanceId"]: (i["x"], i["y"])
                  for i in data["activeContainers"][0]["items"]}
        self.assertEqual(placed, {"s": (2, 0), "p": (1, 1)})
        self.assertEqual(data["sortConfig"]["startCorner"], "BR")

    def test_sort_unknown_container(self):
        path = self.write(make_layout())
        self.assertEqual(main(["sort", path, "--container", "zz"]), 2)


if __name__ == "__main__":
    unittest.main()
