# ============================================================================
# PRIVATE API ROUTE TESTS
# ============================================================================
# STATUS: Tests - /private endpoints over in-memory services
# PURPOSE: Verify request binding, status codes and error mapping
# CREATED: 19 OCT 2026
# ============================================================================
"""
Private API Route Tests

Uses FastAPI TestClient with the in-memory service container.

Run with:
    pytest tests/test_routes.py -v
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api import register_error_handlers, router, set_services
from core.contracts import OverwriteStep
from core.errors import LockNotAcquired, OverwriteError
from services import build_memory_services


# ============================================================================
# FIXTURES
# ============================================================================

def _make_test_app(services):
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(router)
    set_services(services)
    return app


@pytest.fixture
def client():
    app = _make_test_app(build_memory_services())
    yield TestClient(app)
    set_services(None)


def _create(client, path, **body):
    response = client.post(f"/private/{path}", json=body)
    assert response.status_code == 201, response.text
    return response.json()


# ============================================================================
# CRUD
# ============================================================================

class TestCrud:

    def test_create_and_get_wall(self, client):
        wall = _create(client, "walls", name="Home", description="front")

        response = client.get(f"/private/walls/{wall['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Home"

    def test_validation_error_lists_fields(self, client):
        response = client.post("/private/walls", json={})

        assert response.status_code == 400
        body = response.json()
        assert [f["field"] for f in body["fields"]] == ["name", "description"]

    def test_not_found(self, client):
        assert client.get("/private/programs/nope").status_code == 404

    def test_partial_update(self, client):
        tag = _create(client, "tags", name="X", description="old")

        response = client.put(f"/private/tags/{tag['id']}", json={"name": "", "description": "new"})

        assert response.status_code == 200
        assert response.json()["name"] == "X"
        assert response.json()["description"] == "new"

    def test_delete(self, client):
        program = _create(client, "programs", name="Show", description="d")
        assert client.delete(f"/private/programs/{program['id']}").status_code == 204
        assert client.delete(f"/private/programs/{program['id']}").status_code == 404

    def test_list(self, client):
        _create(client, "blocks", name="A", description="d", kind="grid")
        blocks = client.get("/private/blocks").json()
        assert [(b["name"], b["kind"]) for b in blocks] == [("A", "grid")]

    def test_camel_case_bodies(self, client):
        episode = _create(client, "episodes", name="Ep", description="d", programID="P1", position=2)
        assert episode["program_id"] == "P1"

        media = _create(client, "medias", directLink="https://cdn/a.mp3", kind="audio", episodeID=episode["id"])
        assert media["episode_id"] == episode["id"]

        medias = client.get(f"/private/episodes/{episode['id']}/medias").json()
        assert [m["id"] for m in medias] == [media["id"]]


# ============================================================================
# RELATIONS
# ============================================================================

class TestOverwriteRoutes:

    def test_wall_blocks(self, client):
        wall = _create(client, "walls", name="Home", description="d")
        b1 = _create(client, "blocks", name="B1", description="d")
        b2 = _create(client, "blocks", name="B2", description="d")

        response = client.put(
            f"/private/walls/{wall['id']}/blocks/overwrite",
            json={"orderedBlocks": {b1["id"]: 1, b2["id"]: 0}},
        )
        assert response.status_code == 200
        assert response.json()["children"] == {b1["id"]: 1, b2["id"]: 0}

        blocks = client.get(f"/private/walls/{wall['id']}/blocks").json()
        assert [(b["id"], b["position"]) for b in blocks] == [(b2["id"], 0), (b1["id"], 1)]

        walls = client.get(f"/private/blocks/{b1['id']}/walls").json()
        assert [w["id"] for w in walls] == [wall["id"]]

    def test_non_integer_position(self, client):
        response = client.put(
            "/private/walls/W1/blocks/overwrite",
            json={"orderedBlocks": {"B1": "first"}},
        )
        assert response.status_code == 400
        assert response.json()["fields"][0]["field"] == "blocks[B1]"

    def test_over_long_child_is_bad_request(self, client):
        wall = _create(client, "walls", name="Home", description="d")
        block = _create(client, "blocks", name="B1", description="d")
        path = f"/private/walls/{wall['id']}/blocks"
        client.put(f"{path}/overwrite", json={"orderedBlocks": {block["id"]: 0}})

        response = client.put(f"{path}/overwrite", json={"orderedBlocks": {"B" * 40: 0}})

        assert response.status_code == 400
        assert [f["field"] for f in response.json()["fields"]] == ["blocks[]"]
        assert [b["id"] for b in client.get(path).json()] == [block["id"]]

    def test_block_programs(self, client):
        block = _create(client, "blocks", name="Top", description="d")
        program = _create(client, "programs", name="Show", description="d")

        client.put(
            f"/private/blocks/{block['id']}/programs/overwrite",
            json={"orderedPrograms": {program["id"]: 0}},
        )

        programs = client.get(f"/private/blocks/{block['id']}/programs").json()
        assert programs[0]["position"] == 0
        blocks = client.get(f"/private/programs/{program['id']}/blocks").json()
        assert [b["id"] for b in blocks] == [block["id"]]

    def test_program_tags_and_categories(self, client):
        program = _create(client, "programs", name="Show", description="d")
        tag = _create(client, "tags", name="t", description="d")
        category = _create(client, "categories", name="c", description="d")

        client.put(f"/private/programs/{program['id']}/tags/overwrite", json={"tags": [tag["id"]]})
        client.put(
            f"/private/programs/{program['id']}/categories/overwrite",
            json={"categories": [category["id"]]},
        )

        assert [t["id"] for t in client.get(f"/private/programs/{program['id']}/tags").json()] == [tag["id"]]
        assert [c["id"] for c in client.get(f"/private/programs/{program['id']}/categories").json()] == [category["id"]]
        assert [p["id"] for p in client.get(f"/private/tags/{tag['id']}/programs").json()] == [program["id"]]
        assert [p["id"] for p in client.get(f"/private/categories/{category['id']}/programs").json()] == [program["id"]]

    def test_dangling_child_is_conflict(self, client):
        program = _create(client, "programs", name="Show", description="d")
        client.put(f"/private/programs/{program['id']}/tags/overwrite", json={"tags": ["ghost"]})

        response = client.get(f"/private/programs/{program['id']}/tags")
        assert response.status_code == 409


class TestCategoryRoutes:

    def test_hierarchy(self, client):
        root = _create(client, "categories", name="Root", description="d")
        child = _create(client, "categories", name="Child", description="d", parentID=root["id"])
        assert child["parent_id"] == root["id"]

        lineage = client.get(f"/private/categories/{child['id']}/ancestors").json()
        assert [c["id"] for c in lineage["ancestors"]] == [root["id"]]

        children = client.get(f"/private/categories/{root['id']}/children").json()
        assert [c["id"] for c in children] == [child["id"]]

        response = client.put(f"/private/categories/{child['id']}", json={"clearParent": True})
        assert response.json()["parent_id"] is None

    def test_set_and_clear_rejected(self, client):
        root = _create(client, "categories", name="Root", description="d")
        response = client.put(
            f"/private/categories/{root['id']}",
            json={"parentID": "x", "clearParent": True},
        )
        assert response.status_code == 400

    def test_over_long_references_are_bad_requests(self, client):
        response = client.post(
            "/private/categories",
            json={"name": "c", "description": "d", "parentID": "P" * 40},
        )
        assert response.status_code == 400
        assert [f["field"] for f in response.json()["fields"]] == ["parent_id"]

        response = client.post(
            "/private/episodes",
            json={"name": "e", "description": "d", "programID": "P" * 40, "position": 1},
        )
        assert response.status_code == 400
        assert client.get("/private/categories").json() == []


# ============================================================================
# ERROR MAPPING
# ============================================================================

class TestErrorMapping:

    def _app_with_failing_walls(self, error):
        services = MagicMock()
        services.walls.overwrite_blocks = AsyncMock(side_effect=error)
        return TestClient(_make_test_app(services))

    def test_overwrite_error_is_500(self):
        error = OverwriteError("wall_block", "W1", OverwriteStep.CREATE, rolled_back=True)
        client = self._app_with_failing_walls(error)

        response = client.put("/private/walls/W1/blocks/overwrite", json={"orderedBlocks": {}})

        assert response.status_code == 500
        assert response.json()["step"] == "create"
        assert response.json()["rolled_back"] is True
        set_services(None)

    def test_lock_not_acquired_is_409(self):
        client = self._app_with_failing_walls(LockNotAcquired("overwrite", "wall_block:W1"))
        response = client.put("/private/walls/W1/blocks/overwrite", json={"orderedBlocks": {}})
        assert response.status_code == 409
        set_services(None)

    def test_services_not_initialized(self):
        app = _make_test_app(None)
        response = TestClient(app).get("/private/walls")
        assert response.status_code == 503
