"""
Invariant audit for a game state.

check_invariants() never raises for an inconsistent state; it lists every
violation so an imported or hand-edited state can be diagnosed in one go.
"""

from __future__ import annotations

from ..state.schema import (
    BASE_TYPE_BY_SUIT,
    FACTION_ORDER,
    MARQUISE_TOTAL_WOOD,
    TOTAL_WARRIORS,
    VICTORY_POINT_CAP,
    BoardDefinition,
    BuildingType,
    Faction,
    GameState,
    TokenType,
)


def check_invariants(state: GameState, board: BoardDefinition) -> list[str]:
    """
    Return a description of each violated invariant (empty when consistent).

    Checks warrior and wood conservation, derived building/track counters,
    base flags, building-slot capacity and victory-track bounds.
    """
    violations: list[str] = []
    clearings = state.board.clearings

    for clearing_id in board.clearing_ids:
        if clearing_id not in clearings:
            violations.append(f"Clearing {clearing_id} missing from board state")
    for clearing_id in clearings:
        if board.get(clearing_id) is None:
            violations.append(f"Clearing {clearing_id} is not on the board definition")

    # Warrior conservation
    for faction in FACTION_ORDER:
        on_board = sum(c.warrior_count(faction) for c in clearings.values())
        supply = state.factions.warriors_in_supply(faction)
        if supply + on_board != TOTAL_WARRIORS[faction]:
            violations.append(
                f"{faction.value} warriors: supply {supply} + board {on_board} "
                f"!= {TOTAL_WARRIORS[faction]}"
            )

    # Wood conservation
    wood_on_board = sum(len(c.tokens_of(Faction.MARQUISE, TokenType.WOOD)) for c in clearings.values())
    wood_supply = state.factions.marquise.wood_in_supply
    if wood_supply + wood_on_board != MARQUISE_TOTAL_WOOD:
        violations.append(
            f"wood: supply {wood_supply} + board {wood_on_board} != {MARQUISE_TOTAL_WOOD}"
        )

    def count_buildings(faction: Faction, building_type: BuildingType) -> int:
        return sum(len(c.buildings_of(faction, building_type)) for c in clearings.values())

    marquise = state.factions.marquise
    for building_type, on_map in (
        (BuildingType.SAWMILL, marquise.total_sawmills_on_map),
        (BuildingType.WORKSHOP, marquise.total_workshops_on_map),
        (BuildingType.RECRUITER, marquise.total_recruiters_on_map),
    ):
        actual = count_buildings(Faction.MARQUISE, building_type)
        track = marquise.building_tracks.for_type(building_type).built_count
        if not (actual == on_map == track):
            violations.append(
                f"marquise {building_type.value}: board {actual}, on-map {on_map}, track {track}"
            )

    eyrie = state.factions.eyrie
    roosts = count_buildings(Faction.EYRIE, BuildingType.ROOST)
    if not (roosts == eyrie.roosts_on_map == eyrie.roost_track.roosts_placed):
        violations.append(
            f"eyrie roosts: board {roosts}, on-map {eyrie.roosts_on_map}, "
            f"track {eyrie.roost_track.roosts_placed}"
        )

    alliance = state.factions.woodland_alliance
    sympathy = sum(len(c.tokens_of(Faction.WOODLAND_ALLIANCE, TokenType.SYMPATHY)) for c in clearings.values())
    if not (sympathy == alliance.sympathy_on_map == alliance.sympathy_track.sympathy_placed):
        violations.append(
            f"alliance sympathy: board {sympathy}, on-map {alliance.sympathy_on_map}, "
            f"track {alliance.sympathy_track.sympathy_placed}"
        )
    for suit, base_type in BASE_TYPE_BY_SUIT.items():
        present = count_buildings(Faction.WOODLAND_ALLIANCE, base_type) > 0
        flag = getattr(alliance.bases, suit.value)
        if present != flag:
            violations.append(f"alliance base flag {suit.value}={flag} but base present={present}")

    for clearing_id, clearing in clearings.items():
        definition = board.get(clearing_id)
        if definition is not None and len(clearing.buildings) > definition.building_slots:
            violations.append(
                f"{clearing_id} holds {len(clearing.buildings)} buildings in "
                f"{definition.building_slots} slots"
            )
        for faction, count in clearing.warriors.items():
            if count < 0:
                violations.append(f"{clearing_id} has negative {faction.value} warriors")

    for faction in FACTION_ORDER:
        score = state.victory_track.get(faction, 0)
        if not 0 <= score <= VICTORY_POINT_CAP:
            violations.append(f"{faction.value} victory points {score} outside [0, {VICTORY_POINT_CAP}]")

    return violations
