# ============================================================================
# PRIVATE API ROUTES
# ============================================================================
# STATUS: Transport - FastAPI endpoints under /private
# PURPOSE: CRUD, relation lookups and overwrites for every entity
# CREATED: 19 OCT 2026
# ============================================================================
"""
Private API Routes

Endpoints (all under /private):

    walls       POST /walls, GET /walls, GET|PUT|DELETE /walls/{uuid}
                GET /walls/{uuid}/blocks
                PUT /walls/{uuid}/blocks/overwrite        {"orderedBlocks": {...}}
    blocks      CRUD, GET /blocks/{uuid}/programs, GET /blocks/{uuid}/walls
                PUT /blocks/{uuid}/programs/overwrite     {"orderedPrograms": {...}}
    programs    CRUD, GET /programs/{uuid}/episodes|tags|categories|blocks
                PUT /programs/{uuid}/tags/overwrite       {"tags": [...]}
                PUT /programs/{uuid}/categories/overwrite {"categories": [...]}
    episodes    CRUD, GET /episodes/{uuid}/medias
    medias      CRUD
    tags        CRUD, GET /tags/{uuid}/programs
    categories  CRUD, GET /categories/{uuid}/programs|ancestors|children

Domain errors are translated by api.errors; handlers here only call the
service and shape the response.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Response

from core.models import (
    Block,
    Category,
    CategoryLineage,
    Episode,
    Media,
    PositionedBlock,
    PositionedProgram,
    Program,
    Tag,
    Wall,
)
from services.container import ServiceContainer
from .schemas import (
    BlockBody,
    CategoriesBody,
    CategoryBody,
    EpisodeBody,
    MediaBody,
    NamedBody,
    OrderedBlocksBody,
    OrderedProgramsBody,
    OverwriteResponse,
    TagsBody,
)

router = APIRouter(prefix="/private")


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================
# Set by the main app at startup

_services: Optional[ServiceContainer] = None


def set_services(services: Optional[ServiceContainer]):
    """Set the service container for dependency injection."""
    global _services
    _services = services


def get_services() -> ServiceContainer:
    if _services is None:
        raise HTTPException(503, "Services not initialized")
    return _services


def _no_content() -> Response:
    return Response(status_code=204)


# ============================================================================
# WALLS
# ============================================================================

@router.post("/walls", response_model=Wall, status_code=201, tags=["Walls"])
async def create_wall(body: NamedBody):
    return await get_services().walls.create(body)


@router.get("/walls", response_model=List[Wall], tags=["Walls"])
async def list_walls():
    return await get_services().walls.list_all()


@router.get("/walls/{uuid}", response_model=Wall, tags=["Walls"])
async def get_wall(uuid: str):
    return await get_services().walls.get(uuid)


@router.put("/walls/{uuid}", response_model=Wall, tags=["Walls"])
async def update_wall(uuid: str, body: NamedBody):
    return await get_services().walls.update(uuid, body)


@router.delete("/walls/{uuid}", status_code=204, tags=["Walls"])
async def delete_wall(uuid: str):
    await get_services().walls.delete(uuid)
    return _no_content()


@router.get("/walls/{uuid}/blocks", response_model=List[PositionedBlock], tags=["Walls"])
async def get_wall_blocks(uuid: str):
    """Blocks on the wall, ordered by position."""
    return await get_services().walls.find_blocks(uuid)


@router.put("/walls/{uuid}/blocks/overwrite", response_model=OverwriteResponse, tags=["Walls"])
async def overwrite_wall_blocks(uuid: str, body: OrderedBlocksBody):
    """Replace every block on the wall with the given block id -> position map."""
    result = await get_services().walls.overwrite_blocks(uuid, body.ordered_blocks)
    return OverwriteResponse.from_result(result)


# ============================================================================
# BLOCKS
# ============================================================================

@router.post("/blocks", response_model=Block, status_code=201, tags=["Blocks"])
async def create_block(body: BlockBody):
    return await get_services().blocks.create(body)


@router.get("/blocks", response_model=List[Block], tags=["Blocks"])
async def list_blocks():
    return await get_services().blocks.list_all()


@router.get("/blocks/{uuid}", response_model=Block, tags=["Blocks"])
async def get_block(uuid: str):
    return await get_services().blocks.get(uuid)


@router.put("/blocks/{uuid}", response_model=Block, tags=["Blocks"])
async def update_block(uuid: str, body: BlockBody):
    return await get_services().blocks.update(uuid, body)


@router.delete("/blocks/{uuid}", status_code=204, tags=["Blocks"])
async def delete_block(uuid: str):
    await get_services().blocks.delete(uuid)
    return _no_content()


@router.get("/blocks/{uuid}/programs", response_model=List[PositionedProgram], tags=["Blocks"])
async def get_block_programs(uuid: str):
    """Programs in the block, ordered by position."""
    return await get_services().blocks.find_programs(uuid)


@router.put("/blocks/{uuid}/programs/overwrite", response_model=OverwriteResponse, tags=["Blocks"])
async def overwrite_block_programs(uuid: str, body: OrderedProgramsBody):
    result = await get_services().blocks.overwrite_programs(uuid, body.ordered_programs)
    return OverwriteResponse.from_result(result)


@router.get("/blocks/{uuid}/walls", response_model=List[Wall], tags=["Blocks"])
async def get_block_walls(uuid: str):
    return await get_services().blocks.find_walls(uuid)


# ============================================================================
# PROGRAMS
# ============================================================================

@router.post("/programs", response_model=Program, status_code=201, tags=["Programs"])
async def create_program(body: NamedBody):
    return await get_services().programs.create(body)


@router.get("/programs", response_model=List[Program], tags=["Programs"])
async def list_programs():
    return await get_services().programs.list_all()


@router.get("/programs/{uuid}", response_model=Program, tags=["Programs"])
async def get_program(uuid: str):
    return await get_services().programs.get(uuid)


@router.put("/programs/{uuid}", response_model=Program, tags=["Programs"])
async def update_program(uuid: str, body: NamedBody):
    return await get_services().programs.update(uuid, body)


@router.delete("/programs/{uuid}", status_code=204, tags=["Programs"])
async def delete_program(uuid: str):
    await get_services().programs.delete(uuid)
    return _no_content()


@router.get("/programs/{uuid}/episodes", response_model=List[Episode], tags=["Programs"])
async def get_program_episodes(uuid: str):
    return await get_services().programs.find_episodes(uuid)


@router.get("/programs/{uuid}/tags", response_model=List[Tag], tags=["Programs"])
async def get_program_tags(uuid: str):
    return await get_services().programs.find_tags(uuid)


@router.get("/programs/{uuid}/categories", response_model=List[Category], tags=["Programs"])
async def get_program_categories(uuid: str):
    return await get_services().programs.find_categories(uuid)


@router.get("/programs/{uuid}/blocks", response_model=List[Block], tags=["Programs"])
async def get_program_blocks(uuid: str):
    return await get_services().programs.find_blocks(uuid)


@router.put("/programs/{uuid}/tags/overwrite", response_model=OverwriteResponse, tags=["Programs"])
async def overwrite_program_tags(uuid: str, body: TagsBody):
    result = await get_services().programs.overwrite_tags(uuid, body.tags)
    return OverwriteResponse.from_result(result)


@router.put(
    "/programs/{uuid}/categories/overwrite",
    response_model=OverwriteResponse,
    tags=["Programs"],
)
async def overwrite_program_categories(uuid: str, body: CategoriesBody):
    result = await get_services().programs.overwrite_categories(uuid, body.categories)
    return OverwriteResponse.from_result(result)


# ============================================================================
# EPISODES
# ============================================================================

@router.post("/episodes", response_model=Episode, status_code=201, tags=["Episodes"])
async def create_episode(body: EpisodeBody):
    return await get_services().episodes.create(body)


@router.get("/episodes", response_model=List[Episode], tags=["Episodes"])
async def list_episodes():
    return await get_services().episodes.list_all()


@router.get("/episodes/{uuid}", response_model=Episode, tags=["Episodes"])
async def get_episode(uuid: str):
    return await get_services().episodes.get(uuid)


@router.put("/episodes/{uuid}", response_model=Episode, tags=["Episodes"])
async def update_episode(uuid: str, body: EpisodeBody):
    return await get_services().episodes.update(uuid, body)


@router.delete("/episodes/{uuid}", status_code=204, tags=["Episodes"])
async def delete_episode(uuid: str):
    await get_services().episodes.delete(uuid)
    return _no_content()


@router.get("/episodes/{uuid}/medias", response_model=List[Media], tags=["Episodes"])
async def get_episode_medias(uuid: str):
    return await get_services().medias.find_by_episode(uuid)


# ============================================================================
# MEDIAS
# ============================================================================

@router.post("/medias", response_model=Media, status_code=201, tags=["Medias"])
async def create_media(body: MediaBody):
    return await get_services().medias.create(body)


@router.get("/medias", response_model=List[Media], tags=["Medias"])
async def list_medias():
    return await get_services().medias.list_all()


@router.get("/medias/{uuid}", response_model=Media, tags=["Medias"])
async def get_media(uuid: str):
    return await get_services().medias.get(uuid)


@router.put("/medias/{uuid}", response_model=Media, tags=["Medias"])
async def update_media(uuid: str, body: MediaBody):
    return await get_services().medias.update(uuid, body)


@router.delete("/medias/{uuid}", status_code=204, tags=["Medias"])
async def delete_media(uuid: str):
    await get_services().medias.delete(uuid)
    return _no_content()


# ============================================================================
# TAGS
# ============================================================================

@router.post("/tags", response_model=Tag, status_code=201, tags=["Tags"])
async def create_tag(body: NamedBody):
    return await get_services().tags.create(body)


@router.get("/tags", response_model=List[Tag], tags=["Tags"])
async def list_tags():
    return await get_services().tags.list_all()


@router.get("/tags/{uuid}", response_model=Tag, tags=["Tags"])
async def get_tag(uuid: str):
    return await get_services().tags.get(uuid)


@router.put("/tags/{uuid}", response_model=Tag, tags=["Tags"])
async def update_tag(uuid: str, body: NamedBody):
    return await get_services().tags.update(uuid, body)


@router.delete("/tags/{uuid}", status_code=204, tags=["Tags"])
async def delete_tag(uuid: str):
    await get_services().tags.delete(uuid)
    return _no_content()


@router.get("/tags/{uuid}/programs", response_model=List[Program], tags=["Tags"])
async def get_tag_programs(uuid: str):
    return await get_services().tags.find_programs(uuid)


# ============================================================================
# CATEGORIES
# ============================================================================

@router.post("/categories", response_model=Category, status_code=201, tags=["Categories"])
async def create_category(body: CategoryBody):
    return await get_services().categories.create(body)


@router.get("/categories", response_model=List[Category], tags=["Categories"])
async def list_categories():
    return await get_services().categories.list_all()


@router.get("/categories/{uuid}", response_model=Category, tags=["Categories"])
async def get_category(uuid: str):
    return await get_services().categories.get(uuid)


@router.put("/categories/{uuid}", response_model=Category, tags=["Categories"])
async def update_category(uuid: str, body: CategoryBody):
    """Update name/description; parentID moves it, clearParent makes it a root."""
    return await get_services().categories.update(uuid, body)


@router.delete("/categories/{uuid}", status_code=204, tags=["Categories"])
async def delete_category(uuid: str):
    await get_services().categories.delete(uuid)
    return _no_content()


@router.get("/categories/{uuid}/ancestors", response_model=CategoryLineage, tags=["Categories"])
async def get_category_ancestors(uuid: str):
    return await get_services().categories.find_ancestors(uuid)


@router.get("/categories/{uuid}/children", response_model=List[Category], tags=["Categories"])
async def get_category_children(uuid: str):
    return await get_services().categories.find_subcategories(uuid)


@router.get("/categories/{uuid}/programs", response_model=List[Program], tags=["Categories"])
async def get_category_programs(uuid: str):
    return await get_services().categories.find_programs(uuid)


__all__ = ["router", "set_services", "get_services"]
