# ============================================================================
# EPISODE SERVICE
# ============================================================================
# STATUS: Domain service - Episodes of a program
# PURPOSE: Episode CRUD with program/position validation
# CREATED: 19 OCT 2026
# ============================================================================
"""
EpisodeService

program_id is a weak reference: it must be supplied but is not checked
against the programs table. position is 1-based; on update a zero
position leaves the stored one unchanged.
"""

from typing import Any, Dict

from core.models.episode import Episode
from core.models.requests import EpisodeRequest
from core.contracts import POSITION_MAX
from core.validation import REQUIRED, Validator
from services.base import EntityService


def _check_position(v: Validator, position: Any) -> None:
    if position is None:
        v.add("position", REQUIRED)
    elif isinstance(position, bool) or not isinstance(position, int):
        v.add("position", "must be an integer")
    elif position <= 0:
        v.add("position", "must be greater than 0")
    elif position > POSITION_MAX:
        v.add("position", "is out of range")


class EpisodeService(EntityService[Episode]):
    """Business rules for episodes."""

    entity_name = "episode"

    def _validate_create(self, request: Any, v: Validator) -> None:
        super()._validate_create(request, v)
        program_id = getattr(request, "program_id", None)
        v.require("program_id", program_id)
        v.identifier("program_id", program_id)
        _check_position(v, getattr(request, "position", None))

    def _build(self, entity_id: str, request: EpisodeRequest) -> Episode:
        return Episode(
            id=entity_id,
            name=request.name,
            description=request.description,
            program_id=request.program_id,
            position=request.position,
        )

    def _collect_updates(self, request: Any, v: Validator) -> Dict[str, Any]:
        changes = super()._collect_updates(request, v)
        program_id = getattr(request, "program_id", None)
        v.identifier("program_id", program_id)
        self._set_if_present(changes, "program_id", program_id)

        position = getattr(request, "position", None)
        if position is not None and position != 0:
            before = len(v.errors)
            _check_position(v, position)
            if len(v.errors) == before:
                changes["position"] = position
        return changes


__all__ = ["EpisodeService"]
