# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Business logic layer
# PURPOSE: Entity services, relationships and the overwrite engine
# CREATED: 19 OCT 2026
# ============================================================================
"""
Services Module

Business logic for the back office. Services validate requests, call the
stores, and resolve associations to their entities.

Usage:
    from services import build_services

    services = build_services(pool)
    wall = await services.walls.create(request)
    await services.walls.overwrite_blocks(wall.id, {"B1": 0, "B2": 1})
"""

from .overwrite import OverwriteEngine, OverwriteResult
from .relations import Relationship
from .base import EntityService
from .wall_service import WallService
from .block_service import BlockService
from .program_service import ProgramService
from .episode_service import EpisodeService
from .media_service import MediaService
from .tag_service import TagService
from .category_service import CategoryService
from .container import ServiceContainer, build_services, build_memory_services

__all__ = [
    "OverwriteEngine",
    "OverwriteResult",
    "Relationship",
    "EntityService",
    "WallService",
    "BlockService",
    "ProgramService",
    "EpisodeService",
    "MediaService",
    "TagService",
    "CategoryService",
    "ServiceContainer",
    "build_services",
    "build_memory_services",
]
