# ============================================================================
# ENTITY SERVICE TESTS
# ============================================================================
# STATUS: Tests - Validated CRUD and relation navigation
# PURPOSE: Verify the service layer against the in-memory stores
# CREATED: 19 OCT 2026
# ============================================================================
"""
Entity Service Tests

Requests are SimpleNamespace objects: services only read attributes, so
anything shaped like core.models.requests works.

Run with:
    pytest tests/test_services.py -v
"""

import asyncio
from types import SimpleNamespace

import pytest

from core.errors import InconsistentError, NotFoundError, ValidationFailed
from services import build_memory_services


# ============================================================================
# FIXTURES
# ============================================================================

def _named(name="", description="", **extra):
    return SimpleNamespace(name=name, description=description, **extra)


def _episode(name="Ep", description="d", program_id="P1", position=1):
    return SimpleNamespace(name=name, description=description, program_id=program_id, position=position)


def _media(direct_link="https://cdn/x.mp3", kind="audio", episode_id="E1"):
    return SimpleNamespace(direct_link=direct_link, kind=kind, episode_id=episode_id)


@pytest.fixture
def services():
    return build_memory_services()


# ============================================================================
# CRUD
# ============================================================================

class TestCreate:

    def test_create_assigns_uuid(self, services):
        wall = asyncio.run(services.walls.create(_named("Home", "front page")))
        assert len(wall.id) == 36
        assert asyncio.run(services.walls.get(wall.id)).name == "Home"

    def test_missing_name_and_description_reported_together(self, services):
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.walls.create(_named()))
        assert exc_info.value.fields == ["name", "description"]

    def test_block_kind(self, services):
        block = asyncio.run(services.blocks.create(_named("Top", "d", kind="carousel")))
        assert block.kind == "carousel"

    def test_block_kind_optional(self, services):
        block = asyncio.run(services.blocks.create(_named("Top", "d")))
        assert block.kind == ""

    def test_episode_rules(self, services):
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.episodes.create(_episode(name="", program_id="", position=0)))
        assert exc_info.value.fields == ["name", "program_id", "position"]

    def test_episode_position_must_be_integer(self, services):
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.episodes.create(_episode(position=True)))
        assert exc_info.value.fields == ["position"]

    def test_media_rules(self, services):
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.medias.create(_media(direct_link="", kind="", episode_id="")))
        assert exc_info.value.fields == ["direct_link", "kind", "episode_id"]

    def test_media_create(self, services):
        media = asyncio.run(services.medias.create(_media()))
        assert media.direct_link == "https://cdn/x.mp3"

    def test_over_long_references_rejected(self, services):
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.episodes.create(_episode(program_id="P" * 40)))
        assert exc_info.value.fields == ["program_id"]

        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.medias.create(_media(episode_id="E" * 37)))
        assert exc_info.value.fields == ["episode_id"]

        assert asyncio.run(services.episodes.list_all()) == []
        assert asyncio.run(services.medias.list_all()) == []

    def test_model_limits_reported_as_validation(self, services):
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.blocks.create(_named("Top", "d", kind="k" * 51)))
        assert exc_info.value.fields == ["kind"]
        assert asyncio.run(services.blocks.list_all()) == []


class TestUpdate:

    def test_partial_update_preserves_untouched_fields(self, services):
        wall = asyncio.run(services.walls.create(_named("X", "old desc")))

        updated = asyncio.run(services.walls.update(wall.id, _named("", "new desc")))

        assert updated.name == "X"
        assert updated.description == "new desc"

    def test_empty_uuid(self, services):
        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.tags.update("", _named("a", "b")))
        assert exc_info.value.fields == ["uuid"]

    def test_missing_entity(self, services):
        with pytest.raises(NotFoundError):
            asyncio.run(services.tags.update("nope", _named("a", "b")))

    def test_episode_zero_position_unchanged(self, services):
        ep = asyncio.run(services.episodes.create(_episode(position=4)))

        updated = asyncio.run(services.episodes.update(ep.id, _episode(name="", description="", program_id="", position=0)))
        assert updated.position == 4
        assert updated.program_id == "P1"

        updated = asyncio.run(services.episodes.update(ep.id, _episode(name="", description="", program_id="P2", position=2)))
        assert (updated.position, updated.program_id) == (2, "P2")

    def test_episode_negative_position(self, services):
        ep = asyncio.run(services.episodes.create(_episode()))
        with pytest.raises(ValidationFailed):
            asyncio.run(services.episodes.update(ep.id, _episode(position=-1)))

    def test_media_update(self, services):
        media = asyncio.run(services.medias.create(_media()))
        updated = asyncio.run(services.medias.update(media.id, _media(direct_link="", kind="video", episode_id="")))
        assert updated.kind == "video"
        assert updated.episode_id == "E1"

    def test_over_long_references_rejected(self, services):
        ep = asyncio.run(services.episodes.create(_episode()))
        media = asyncio.run(services.medias.create(_media()))

        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.episodes.update(ep.id, _episode(name="", description="", program_id="P" * 40, position=0)))
        assert exc_info.value.fields == ["program_id"]

        with pytest.raises(ValidationFailed) as exc_info:
            asyncio.run(services.medias.update(media.id, _media(direct_link="", kind="", episode_id="E" * 40)))
        assert exc_info.value.fields == ["episode_id"]

        assert asyncio.run(services.episodes.get(ep.id)).program_id == "P1"
        assert asyncio.run(services.medias.get(media.id)).episode_id == "E1"


class TestFindAndDelete:

    def test_get_missing(self, services):
        with pytest.raises(NotFoundError):
            asyncio.run(services.programs.get("nope"))

    def test_get_empty_id(self, services):
        with pytest.raises(ValidationFailed):
            asyncio.run(services.programs.get(""))

    def test_list_all(self, services):
        asyncio.run(services.tags.create(_named("a", "1")))
        asyncio.run(services.tags.create(_named("b", "2")))
        assert sorted(t.name for t in asyncio.run(services.tags.list_all())) == ["a", "b"]

    def test_delete(self, services):
        tag = asyncio.run(services.tags.create(_named("a", "1")))
        asyncio.run(services.tags.delete(tag.id))
        with pytest.raises(NotFoundError):
            asyncio.run(services.tags.delete(tag.id))


# ============================================================================
# RELATIONS
# ============================================================================

def _make_wall_with_blocks(services):
    wall = asyncio.run(services.walls.create(_named("Home", "d")))
    b1 = asyncio.run(services.blocks.create(_named("B1", "d")))
    b2 = asyncio.run(services.blocks.create(_named("B2", "d")))
    b3 = asyncio.run(services.blocks.create(_named("B3", "d")))
    return wall, b1, b2, b3


class TestWallBlocks:

    def test_overwrite_then_find(self, services):
        wall, b1, b2, b3 = _make_wall_with_blocks(services)

        asyncio.run(services.walls.overwrite_blocks(wall.id, {b1.id: 0, b2.id: 1}))
        asyncio.run(services.walls.overwrite_blocks(wall.id, {b2.id: 0, b3.id: 1}))

        blocks = asyncio.run(services.walls.find_blocks(wall.id))
        assert [(b.id, b.position) for b in blocks] == [(b2.id, 0), (b3.id, 1)]

    def test_find_blocks_ordered_by_position(self, services):
        wall, b1, b2, b3 = _make_wall_with_blocks(services)
        asyncio.run(services.walls.overwrite_blocks(wall.id, {b1.id: 2, b2.id: 0, b3.id: 1}))

        blocks = asyncio.run(services.walls.find_blocks(wall.id))
        assert [b.id for b in blocks] == [b2.id, b3.id, b1.id]

    def test_dangling_child_aborts(self, services):
        wall, b1, _, _ = _make_wall_with_blocks(services)
        asyncio.run(services.walls.overwrite_blocks(wall.id, {b1.id: 0, "ghost": 1}))

        with pytest.raises(InconsistentError) as exc_info:
            asyncio.run(services.walls.find_blocks(wall.id))
        assert exc_info.value.child_id == "ghost"

    def test_reverse_lookup(self, services):
        wall, b1, _, _ = _make_wall_with_blocks(services)
        other = asyncio.run(services.walls.create(_named("Another", "d")))
        asyncio.run(services.walls.overwrite_blocks(wall.id, {b1.id: 0}))
        asyncio.run(services.walls.overwrite_blocks(other.id, {b1.id: 3}))

        walls = asyncio.run(services.blocks.find_walls(b1.id))
        assert [w.name for w in walls] == ["Another", "Home"]

    def test_empty_parent_rejected(self, services):
        with pytest.raises(ValidationFailed):
            asyncio.run(services.walls.find_blocks(""))


class TestProgramRelations:

    def test_block_programs(self, services):
        block = asyncio.run(services.blocks.create(_named("Top", "d")))
        p1 = asyncio.run(services.programs.create(_named("P1", "d")))
        p2 = asyncio.run(services.programs.create(_named("P2", "d")))

        asyncio.run(services.blocks.overwrite_programs(block.id, {p1.id: 1, p2.id: 0}))

        programs = asyncio.run(services.blocks.find_programs(block.id))
        assert [(p.id, p.position) for p in programs] == [(p2.id, 0), (p1.id, 1)]
        assert [b.id for b in asyncio.run(services.programs.find_blocks(p1.id))] == [block.id]

    def test_tags_sorted_by_name(self, services):
        program = asyncio.run(services.programs.create(_named("Show", "d")))
        zed = asyncio.run(services.tags.create(_named("zed", "d")))
        alpha = asyncio.run(services.tags.create(_named("alpha", "d")))

        asyncio.run(services.programs.overwrite_tags(program.id, [zed.id, alpha.id]))

        assert [t.name for t in asyncio.run(services.programs.find_tags(program.id))] == ["alpha", "zed"]
        assert [p.id for p in asyncio.run(services.tags.find_programs(zed.id))] == [program.id]

    def test_overwrite_tags_empty_clears(self, services):
        program = asyncio.run(services.programs.create(_named("Show", "d")))
        tag = asyncio.run(services.tags.create(_named("t", "d")))
        asyncio.run(services.programs.overwrite_tags(program.id, [tag.id]))

        asyncio.run(services.programs.overwrite_tags(program.id, []))
        assert asyncio.run(services.programs.find_tags(program.id)) == []

    def test_categories(self, services):
        program = asyncio.run(services.programs.create(_named("Show", "d")))
        cat = asyncio.run(services.categories.create(_named("News", "d")))

        asyncio.run(services.programs.overwrite_categories(program.id, [cat.id]))

        assert [c.id for c in asyncio.run(services.programs.find_categories(program.id))] == [cat.id]
        assert [p.id for p in asyncio.run(services.categories.find_programs(cat.id))] == [program.id]

    def test_episodes(self, services):
        program = asyncio.run(services.programs.create(_named("Show", "d")))
        e2 = asyncio.run(services.episodes.create(_episode(name="two", program_id=program.id, position=2)))
        e1 = asyncio.run(services.episodes.create(_episode(name="one", program_id=program.id, position=1)))

        episodes = asyncio.run(services.programs.find_episodes(program.id))
        assert [e.id for e in episodes] == [e1.id, e2.id]

    def test_medias_of_episode(self, services):
        media = asyncio.run(services.medias.create(_media(episode_id="E9")))
        assert [m.id for m in asyncio.run(services.medias.find_by_episode("E9"))] == [media.id]
