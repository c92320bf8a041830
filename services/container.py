# ============================================================================
# SERVICE CONTAINER
# ============================================================================
# STATUS: Wiring - Builds every service over one set of stores
# PURPOSE: PostgreSQL and in-memory compositions of the service layer
# CREATED: 19 OCT 2026
# ============================================================================
"""
Service Container

Both builders share _assemble(): they differ only in which stores they
hand it. Relationship instances are shared so, for example, the
wall_block relationship serves WallService.find_blocks and
BlockService.find_walls from the same store and engine.

Usage:
    pool = await init_pool()
    services = build_services(pool)
    await services.walls.create(request)

    services = build_memory_services()   # tests, local dev
"""

from dataclasses import dataclass
from typing import Optional

from psycopg_pool import AsyncConnectionPool

from core.config import Defaults, get_defaults
from core.models.associations import BlockProgram, ProgramCategory, ProgramTag, WallBlock
from core.models.block import Block
from core.models.program import Program
from core.models.tag import Tag
from core.models.wall import Wall
from infrastructure.locking import LockService
from repositories import (
    BlockProgramRepository,
    BlockRepository,
    CategoryRepository,
    EpisodeRepository,
    MediaRepository,
    MemoryAssociationStore,
    MemoryCategoryStore,
    MemoryEntityStore,
    MemoryEpisodeStore,
    MemoryMediaStore,
    ProgramCategoryRepository,
    ProgramRepository,
    ProgramTagRepository,
    TagRepository,
    WallBlockRepository,
    WallRepository,
)
from services.block_service import BlockService
from services.category_service import CategoryService
from services.episode_service import EpisodeService
from services.media_service import MediaService
from services.program_service import ProgramService
from services.relations import Relationship
from services.tag_service import TagService
from services.wall_service import WallService


@dataclass
class ServiceContainer:
    walls: WallService
    blocks: BlockService
    programs: ProgramService
    episodes: EpisodeService
    medias: MediaService
    tags: TagService
    categories: CategoryService


def _assemble(
    defaults: Defaults,
    walls, blocks, programs, episodes, medias, tags, categories,
    wall_blocks, block_programs, program_tags, program_categories,
) -> ServiceContainer:
    overwrite = defaults.overwrite

    def relationship(associations, parents, children) -> Relationship:
        return Relationship(
            associations, parents, children,
            atomic=overwrite.atomic,
            lock_timeout_ms=overwrite.lock_timeout_ms,
        )

    wall_block = relationship(wall_blocks, walls, blocks)
    block_program = relationship(block_programs, blocks, programs)
    program_tag = relationship(program_tags, programs, tags)
    program_category = relationship(program_categories, programs, categories)

    return ServiceContainer(
        walls=WallService(walls, wall_block),
        blocks=BlockService(blocks, block_program, wall_block),
        programs=ProgramService(programs, episodes, program_tag, program_category, block_program),
        episodes=EpisodeService(episodes),
        medias=MediaService(medias),
        tags=TagService(tags, program_tag),
        categories=CategoryService(categories, program_category, defaults.hierarchy),
    )


def build_services(pool: AsyncConnectionPool, defaults: Optional[Defaults] = None) -> ServiceContainer:
    """Services backed by the PostgreSQL repositories."""
    defaults = defaults or get_defaults()
    locks = LockService(pool)
    return _assemble(
        defaults,
        walls=WallRepository(pool),
        blocks=BlockRepository(pool),
        programs=ProgramRepository(pool),
        episodes=EpisodeRepository(pool),
        medias=MediaRepository(pool),
        tags=TagRepository(pool),
        categories=CategoryRepository(pool),
        wall_blocks=WallBlockRepository(pool, locks),
        block_programs=BlockProgramRepository(pool, locks),
        program_tags=ProgramTagRepository(pool, locks),
        program_categories=ProgramCategoryRepository(pool, locks),
    )


def build_memory_services(defaults: Optional[Defaults] = None) -> ServiceContainer:
    """Services backed by the in-memory stores."""
    return _assemble(
        defaults or Defaults(),
        walls=MemoryEntityStore(Wall, "wall"),
        blocks=MemoryEntityStore(Block, "block"),
        programs=MemoryEntityStore(Program, "program"),
        episodes=MemoryEpisodeStore(),
        medias=MemoryMediaStore(),
        tags=MemoryEntityStore(Tag, "tag"),
        categories=MemoryCategoryStore(),
        wall_blocks=MemoryAssociationStore(WallBlock),
        block_programs=MemoryAssociationStore(BlockProgram),
        program_tags=MemoryAssociationStore(ProgramTag),
        program_categories=MemoryAssociationStore(ProgramCategory),
    )


__all__ = ["ServiceContainer", "build_services", "build_memory_services"]
