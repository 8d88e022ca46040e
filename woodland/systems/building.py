"""
Build action.

Per-faction rules:
- Marquise: explicit building type; needs a warrior in the clearing.
  Sawmills, workshops and recruiters climb a six-step track of wood
  costs and VP. Keeps are free and score nothing.
- Eyrie: always a roost. No cost or presence check at this level.
- Woodland Alliance: the base must match the clearing suit.
"""

from __future__ import annotations

import logging

from ..errors import ValidationError
from ..rules.board import require_clearing_definition, require_clearing_state
from ..rules.derived import award_victory_points, refresh_derived_state
from ..state.schema import (
    BASE_TYPE_BY_SUIT,
    MARQUISE_BUILDABLE,
    MARQUISE_BUILDING_TRACKS,
    BoardDefinition,
    BuildingType,
    Faction,
    GameState,
)
from ..state.schemas.result import BuildResult
from .pieces import place_building

logger = logging.getLogger(__name__)


def resolve_building_type(faction: Faction, building_type: BuildingType | None) -> BuildingType:
    """The building a faction actually places, given what it asked for."""
    if faction == Faction.MARQUISE:
        if building_type is None:
            raise ValidationError("Marquise must specify which building to construct")
        if building_type not in MARQUISE_BUILDABLE:
            raise ValidationError(f"Invalid building type {building_type.value} for Marquise")
        return building_type
    if faction == Faction.EYRIE:
        return BuildingType.ROOST
    if faction == Faction.WOODLAND_ALLIANCE:
        if building_type is None or not building_type.value.startswith("base_"):
            raise ValidationError("Woodland Alliance must place a base matching the clearing suit")
        return building_type
    raise ValidationError(f"Unknown faction {faction}")


def execute_build(
    state: GameState,
    board: BoardDefinition,
    faction: Faction,
    clearing_id: str,
    building_type: BuildingType | None = None,
) -> BuildResult:
    """
    Place a building in a clearing with a free slot.

    The Marquise wood cost only gates the build: no wood is spent, since
    the wood supply is re-derived from the tokens on the board.

    Raises:
        ValidationError: Unknown clearing, no free slot, wrong building
            type for the faction, or a Marquise cost/presence failure
    """
    definition = require_clearing_definition(board, clearing_id)
    derived_type = resolve_building_type(faction, building_type)

    next_state = state.clone()
    refresh_derived_state(next_state)
    clearing = require_clearing_state(next_state, clearing_id)

    if len(clearing.buildings) >= definition.building_slots:
        raise ValidationError(f"No available building slots in clearing {clearing_id}")

    victory_points = 0

    if faction == Faction.MARQUISE:
        if clearing.warrior_count(Faction.MARQUISE) == 0:
            raise ValidationError("Marquise must have warriors in the clearing to build")

        if derived_type in MARQUISE_BUILDING_TRACKS:
            marquise = next_state.factions.marquise
            track = marquise.building_tracks.for_type(derived_type)
            steps = MARQUISE_BUILDING_TRACKS[derived_type]
            if track.built_count >= len(steps):
                raise ValidationError(f"All {derived_type.value}s have been built")

            step = steps[track.built_count]
            if marquise.wood_in_supply < step.cost_wood:
                raise ValidationError(
                    f"Not enough wood. Need {step.cost_wood}, have {marquise.wood_in_supply}"
                )
            victory_points = step.victory_points
            award_victory_points(next_state, Faction.MARQUISE, victory_points)

    elif faction == Faction.WOODLAND_ALLIANCE:
        expected = BASE_TYPE_BY_SUIT.get(definition.suit)
        if expected is None or derived_type != expected:
            wanted = expected.value if expected else f"base_{definition.suit.value}"
            raise ValidationError(f"Alliance must build {wanted} in {clearing_id}")

    building = place_building(board, clearing, faction, derived_type)
    refresh_derived_state(next_state)

    logger.info("%s built %s in %s", faction.value, derived_type.value, clearing_id)
    return BuildResult(state=next_state, building=building, victory_points=victory_points)
