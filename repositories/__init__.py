# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Core - Database access layer
# PURPOSE: CRUD for entities, link-table access for associations
# CREATED: 19 OCT 2026
# ============================================================================
"""
Repositories Module

PostgreSQL stores use psycopg3 async with connection pooling. The
memory module holds dict-backed stores with the same contract.

Usage:
    from repositories import WallRepository, WallBlockRepository, get_pool

    pool = await get_pool()
    walls = WallRepository(pool)
    wall = await walls.get(wall_id)
"""

from .database import get_pool, init_pool, close_pool
from .base import EntityRepository
from .wall_repo import WallRepository
from .block_repo import BlockRepository
from .program_repo import ProgramRepository
from .episode_repo import EpisodeRepository
from .media_repo import MediaRepository
from .tag_repo import TagRepository
from .category_repo import CategoryRepository
from .association_repo import (
    AssociationRepository,
    WallBlockRepository,
    BlockProgramRepository,
    ProgramTagRepository,
    ProgramCategoryRepository,
)
from .memory import (
    MemoryEntityStore,
    MemoryEpisodeStore,
    MemoryMediaStore,
    MemoryCategoryStore,
    MemoryAssociationStore,
)

__all__ = [
    "get_pool",
    "init_pool",
    "close_pool",
    "EntityRepository",
    "WallRepository",
    "BlockRepository",
    "ProgramRepository",
    "EpisodeRepository",
    "MediaRepository",
    "TagRepository",
    "CategoryRepository",
    "AssociationRepository",
    "WallBlockRepository",
    "BlockProgramRepository",
    "ProgramTagRepository",
    "ProgramCategoryRepository",
    "MemoryEntityStore",
    "MemoryEpisodeStore",
    "MemoryMediaStore",
    "MemoryCategoryStore",
    "MemoryAssociationStore",
]
