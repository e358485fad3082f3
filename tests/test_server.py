"""Tests for the HTTP adapter, driven through FastAPI's TestClient."""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from unittest import mock

from fastapi.testclient import TestClient

from gridforge.session import create_session
from gridforge.web.server import app


class ServerTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.assertEqual(self.client.post("/api/reset").status_code, 200)


class TestLayoutRoutes(ServerTestCase):

    def test_get_layout(self):
        data = self.client.get("/api/layout").json()
        self.assertEqual(len(data["itemDefs"]), 9)
        self.assertEqual(data["activeContainers"][0]["instanceId"], "ac1")

    def test_load_rejects_overlap(self):
        data = self.client.get("/api/layout").json()
        data["activeContainers"][0]["items"] = [
            {"instanceId": "a", "defId": "i2", "x": 0, "y": 0, "currentShape": [[1, 1], [1, 1]]},
            {"instanceId": "b", "defId": "i3", "x": 1, "y": 1, "currentShape": [[1]]},
        ]
        resp = self.client.post("/api/layout", json=data)
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(resp.json()["detail"]["errors"])

    def test_load_rejects_missing_name(self):
        resp = self.client.post("/api/layout", json={
            "itemDefs": [{"id": "x", "shape": [[1]]}],
        })
        self.assertEqual(resp.status_code, 400)
        self.assertIn("'name'", resp.json()["detail"])
        self.assertEqual(len(self.client.get("/api/layout").json()["itemDefs"]), 9)

    def test_load_rejects_bad_shape(self):
        resp = self.client.post("/api/layout", json={
            "itemDefs": [{"id": "x", "name": "Bad", "shape": []}],
        })
        self.assertEqual(resp.status_code, 400)

    def test_load_replaces_state(self):
        resp = self.client.post("/api/layout", json={
            "itemDefs": [{"id": "g", "name": "Gem", "shape": [[1]], "weight": 0.3}],
            "activeContainers": [{"instanceId": "k", "defId": "c5", "items": [
                {"instanceId": "g1", "defId": "g", "x": 2, "y": 0, "currentShape": [[1]]},
            ]}],
        })
        self.assertEqual(resp.status_code, 200)
        weight = self.client.get("/api/containers/k/weight").json()
        self.assertAlmostEqual(weight["current"], 0.3)
        self.assertEqual(weight["maximum"], 0.5)


class TestDefinitionRoutes(ServerTestCase):

    def test_upsert_and_search(self):
        resp = self.client.put("/api/defs/items", json={
            "name": "Crystal Orb", "shape": [[1, 1], [1, 1]], "weight": 1.2,
        })
        self.assertEqual(resp.status_code, 200)
        new_id = resp.json()["id"]

        found = self.client.get("/api/defs", params={"q": "orb"}).json()
        self.assertEqual([d["id"] for d in found["items"]], [new_id])

    def test_upsert_bad_shape(self):
        resp = self.client.put("/api/defs/containers", json={
            "name": "Broken", "shape": [[1, 1], [1]],
        })
        self.assertEqual(resp.status_code, 400)

    def test_delete_container_def_cascades(self):
        resp = self.client.delete("/api/defs/containers/c1")
        self.assertEqual(resp.json()["removed_containers"], ["ac1"])
        self.assertEqual(self.client.get("/api/layout").json()["activeContainers"], [])

    def test_delete_unknown_def(self):
        self.assertEqual(self.client.delete("/api/defs/items/nope").status_code, 400)


class TestContainerRoutes(ServerTestCase):

    def test_add_and_remove(self):
        resp = self.client.post("/api/containers", json={"def_id": "c6"})
        self.assertEqual(resp.status_code, 200)
        cid = resp.json()["instanceId"]
        self.assertEqual(self.client.delete(f"/api/containers/{cid}").status_code, 200)
        self.assertEqual(self.client.delete(f"/api/containers/{cid}").status_code, 404)

    def test_unknown_container(self):
        self.assertEqual(self.client.get("/api/containers/zz/weight").status_code, 404)
        self.assertEqual(self.client.post("/api/containers/zz/sort").status_code, 404)

    def test_sort_config_and_sort(self):
        self.client.post("/api/drag/start", json={"def_id": "i3"})
        self.client.post("/api/drag/hover", json={"container_id": "ac1", "x": 3, "y": 3})
        self.assertTrue(self.client.post("/api/drag/release").json()["placed"])

        resp = self.client.put("/api/sort_config", json={"start_corner": "BR"})
        self.assertEqual(resp.json()["startCorner"], "BR")
        sorted_ = self.client.post("/api/containers/ac1/sort").json()
        self.assertEqual(sorted_["unplaced"], [])
        self.assertEqual((sorted_["items"][0]["x"], sorted_["items"][0]["y"]), (7, 5))

    def test_bad_sort_config(self):
        resp = self.client.put("/api/sort_config", json={"start_corner": "MID"})
        self.assertEqual(resp.status_code, 400)


class TestDragRoutes(ServerTestCase):

    def test_palette_drop_then_move(self):
        held = self.client.post("/api/drag/start", json={"def_id": "i2"}).json()["held"]
        preview = self.client.post(
            "/api/drag/hover", json={"container_id": "ac1", "x": 1, "y": 1},
        ).json()
        self.assertEqual(preview["origin"], [0, 0])
        self.assertTrue(preview["valid"])
        self.assertTrue(self.client.post("/api/drag/release").json()["placed"])

        iid = held["instanceId"]
        self.client.post("/api/drag/start", json={"container_id": "ac1", "item_id": iid})
        self.assertEqual(self.client.get("/api/drag").json()["held"]["instanceId"], iid)
        self.client.post("/api/drag/hover", json={"container_id": "ac1", "x": 9, "y": 9})
        result = self.client.post("/api/drag/release").json()
        self.assertFalse(result["placed"])
        self.assertEqual(result["container_id"], "ac1")
        self.assertEqual((result["item"]["x"], result["item"]["y"]), (0, 0))

    def test_rotate_and_flip(self):
        self.client.post("/api/drag/start", json={"def_id": "i1"})
        turned = self.client.post("/api/drag/rotate", json={"direction": "cw"}).json()
        self.assertEqual(turned["held"]["currentShape"], [[1, 1, 1]])
        self.assertEqual(turned["held"]["rotation"], 1)
        flipped = self.client.post("/api/drag/flip").json()
        self.assertEqual(flipped["held"]["rotation"], 1)
        self.assertEqual(
            self.client.post("/api/drag/rotate", json={"direction": "up"}).status_code, 400,
        )
        cancelled = self.client.post("/api/drag/cancel").json()
        self.assertIsNone(cancelled["container_id"])

    def test_out_of_order(self):
        self.assertEqual(self.client.post("/api/drag/release").status_code, 400)
        self.assertEqual(self.client.post("/api/drag/start", json={}).status_code, 400)
        self.assertIsNone(self.client.get("/api/drag").json()["held"])

    def test_pick_up_missing_item(self):
        resp = self.client.post("/api/drag/start",
                                json={"container_id": "ac1", "item_id": "nope"})
        self.assertEqual(resp.status_code, 404)

    def test_hover_by_pixel_offset(self):
        self.client.post("/api/drag/start", json={"def_id": "i2"})
        # 40px cells + 2px gap: (90, 45) lies in cell (2, 1)
        preview = self.client.post(
            "/api/drag/hover", json={"container_id": "ac1", "px": 90, "py": 45},
        ).json()
        self.assertEqual(preview["origin"], [1, 0])
        self.assertTrue(preview["valid"])

    def test_hover_needs_a_position(self):
        self.client.post("/api/drag/start", json={"def_id": "i3"})
        resp = self.client.post("/api/drag/hover", json={"container_id": "ac1"})
        self.assertEqual(resp.status_code, 400)


class TestSessionRoutes(ServerTestCase):

    def setUp(self):
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()
        self._env = mock.patch.dict(os.environ, {"GRIDFORGE_DATA_DIR": self._tmp.name})
        self._env.start()

    def tearDown(self):
        self._env.stop()
        self._tmp.cleanup()

    def test_save_and_restore(self):
        self.client.post("/api/containers", json={"def_id": "c2"})
        sid = self.client.post("/api/sessions", json={"name": "loadout"}).json()["id"]
        self.assertEqual(self.client.get("/api/sessions").json()["sessions"][0]["id"], sid)

        self.client.post("/api/reset")
        restored = self.client.post(f"/api/sessions/{sid}/load").json()
        self.assertEqual(len(restored["activeContainers"]), 2)

    def test_restore_missing(self):
        self.assertEqual(self.client.post("/api/sessions/nope/load").status_code, 404)

    def test_restore_rejects_overlap(self):
        data = self.client.get("/api/layout").json()
        data["activeContainers"][0]["items"] = [
            {"instanceId": "s", "defId": "i2", "x": 0, "y": 0, "currentShape": [[1, 1], [1, 1]]},
            {"instanceId": "p", "defId": "i3", "x": 1, "y": 1, "currentShape": [[1]]},
        ]
        session = create_session()
        session.layout_path.write_text(json.dumps(data), encoding="utf-8")

        resp = self.client.post(f"/api/sessions/{session.id}/load")
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(any("overlap" in e for e in resp.json()["detail"]["errors"]))
        live = self.client.get("/api/layout").json()
        self.assertEqual(live["activeContainers"][0]["items"], [])

    def test_restore_rejects_missing_field(self):
        session = create_session()
        session.layout_path.write_text(json.dumps({
            "activeContainers": [{"instanceId": "k", "defId": "c1", "items": [
                {"instanceId": "g", "defId": "i3", "y": 0, "currentShape": [[1]]},
            ]}],
        }), encoding="utf-8")
        resp = self.client.post(f"/api/sessions/{session.id}/load")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("'x'", resp.json()["detail"])


if __name__ == "__main__":
    unittest.main()
