"""
Recruit action.

- Marquise recruit everywhere: one warrior per recruiter, clearing by
  clearing in board order, until the supply runs dry.
- Eyrie recruit at a roost (the first roost found if none is named).
- Woodland Alliance recruit exactly one warrior at a base.
"""

from __future__ import annotations

import logging

from ..errors import ValidationError
from ..rules.board import require_clearing_definition, require_clearing_state
from ..rules.derived import refresh_derived_state
from ..state.schema import (
    BASE_TYPES,
    BoardDefinition,
    BuildingType,
    Faction,
    GameState,
)
from ..state.schemas.result import RecruitPlacement, RecruitResult

logger = logging.getLogger(__name__)


def _recruit_marquise(state: GameState) -> list[RecruitPlacement]:
    recruiter_clearings = [
        clearing for clearing in state.board.clearings.values()
        if clearing.buildings_of(Faction.MARQUISE, BuildingType.RECRUITER)
    ]
    if not recruiter_clearings:
        raise ValidationError("No recruiters on the map. Build a recruiter before recruiting.")

    available = state.factions.marquise.warriors_in_supply
    if available <= 0:
        raise ValidationError("No warriors left in supply.")

    placements = []
    for clearing in recruiter_clearings:
        if available <= 0:
            break
        recruiters = len(clearing.buildings_of(Faction.MARQUISE, BuildingType.RECRUITER))
        to_place = min(recruiters, available)
        clearing.add_warriors(Faction.MARQUISE, to_place)
        placements.append(RecruitPlacement(clearing_id=clearing.id, warriors_placed=to_place))
        available -= to_place
    return placements


def first_roost_clearing(state: GameState) -> str | None:
    """First clearing in storage order holding an Eyrie roost."""
    return next(
        (
            c.id for c in state.board.clearings.values()
            if c.buildings_of(Faction.EYRIE, BuildingType.ROOST)
        ),
        None,
    )


def _recruit_eyrie(
    state: GameState,
    board: BoardDefinition,
    clearing_id: str | None,
    warriors: int | None,
) -> list[RecruitPlacement]:
    if clearing_id is None:
        clearing_id = first_roost_clearing(state)
        if clearing_id is None:
            raise ValidationError("Eyrie have no roosts to recruit from.")

    require_clearing_definition(board, clearing_id)
    clearing = require_clearing_state(state, clearing_id)
    if not clearing.buildings_of(Faction.EYRIE, BuildingType.ROOST):
        raise ValidationError("Eyrie can only recruit in clearings with a roost.")

    available = state.factions.eyrie.warriors_in_supply
    if available <= 0:
        raise ValidationError("No Eyrie warriors left in supply.")

    to_place = min(warriors if warriors is not None else 1, available)
    clearing.add_warriors(Faction.EYRIE, to_place)
    return [RecruitPlacement(clearing_id=clearing_id, warriors_placed=to_place)]


def _recruit_alliance(
    state: GameState,
    board: BoardDefinition,
    clearing_id: str | None,
) -> list[RecruitPlacement]:
    if clearing_id is None:
        raise ValidationError("Woodland Alliance recruits must specify a base clearing.")

    require_clearing_definition(board, clearing_id)
    clearing = require_clearing_state(state, clearing_id)
    if not any(b.type in BASE_TYPES for b in clearing.buildings_of(Faction.WOODLAND_ALLIANCE)):
        raise ValidationError("Alliance can only recruit in clearings with one of their bases.")

    if state.factions.woodland_alliance.warriors_in_supply <= 0:
        raise ValidationError("No Woodland Alliance warriors left in supply.")

    clearing.add_warriors(Faction.WOODLAND_ALLIANCE, 1)
    return [RecruitPlacement(clearing_id=clearing_id, warriors_placed=1)]


def execute_recruit(
    state: GameState,
    board: BoardDefinition,
    faction: Faction,
    clearing_id: str | None = None,
    warriors: int | None = None,
) -> RecruitResult:
    """
    Place new warriors from supply.

    Args:
        clearing_id: Target clearing (Eyrie: optional, Alliance: required,
            Marquise: ignored)
        warriors: Eyrie only; requested count, default 1, capped by supply

    Raises:
        ValidationError: Non-positive warrior count, no eligible building,
            empty supply, or nothing placed
    """
    if warriors is not None and warriors <= 0:
        raise ValidationError("You must recruit at least one warrior")

    next_state = state.clone()
    refresh_derived_state(next_state)

    if faction == Faction.MARQUISE:
        placements = _recruit_marquise(next_state)
    elif faction == Faction.EYRIE:
        placements = _recruit_eyrie(next_state, board, clearing_id, warriors)
    elif faction == Faction.WOODLAND_ALLIANCE:
        placements = _recruit_alliance(next_state, board, clearing_id)
    else:
        raise ValidationError(f"Recruit not implemented for faction {faction}")

    total_placed = sum(p.warriors_placed for p in placements)
    if total_placed == 0:
        raise ValidationError("Recruit action could not place any warriors.")

    refresh_derived_state(next_state)

    logger.info("%s recruited %d warriors", faction.value, total_placed)
    return RecruitResult(state=next_state, placements=placements, total_placed=total_placed)
