"""
Derived-state recomputation.

One pass over the board re-derives every aggregate counter: supplies,
on-map building totals, track positions, base flags and sympathy counts.
This is the only code that writes supply numbers.
"""

from __future__ import annotations

from ..state.schema import (
    BASE_TYPES,
    FACTION_ORDER,
    MARQUISE_TOTAL_WOOD,
    TOTAL_WARRIORS,
    VICTORY_POINT_CAP,
    BuildingType,
    Faction,
    GameState,
    TokenType,
)


def clamp_victory_points(value: int) -> int:
    return max(0, min(VICTORY_POINT_CAP, value))


def award_victory_points(state: GameState, faction: Faction, delta: int) -> int:
    """
    Add (or subtract) VP on the track, clamped to [0, 30].

    Mutates the given state; returns the new total.
    """
    state.victory_track[faction] = clamp_victory_points(
        state.victory_track.get(faction, 0) + delta
    )
    return state.victory_track[faction]


def _reset_derived(state: GameState) -> None:
    marquise = state.factions.marquise
    marquise.total_sawmills_on_map = 0
    marquise.total_workshops_on_map = 0
    marquise.total_recruiters_on_map = 0
    marquise.building_tracks.sawmill.built_count = 0
    marquise.building_tracks.workshop.built_count = 0
    marquise.building_tracks.recruiter.built_count = 0

    eyrie = state.factions.eyrie
    eyrie.roosts_on_map = 0
    eyrie.roost_track.roosts_placed = 0

    alliance = state.factions.woodland_alliance
    alliance.sympathy_on_map = 0
    alliance.sympathy_track.sympathy_placed = 0
    alliance.bases.mouse = False
    alliance.bases.rabbit = False
    alliance.bases.fox = False


def refresh_derived_state(state: GameState) -> None:
    """
    Recompute every derived counter in place.

    Only call this on a private working copy; use recompute_derived_state()
    when the input must stay untouched.
    """
    _reset_derived(state)
    marquise = state.factions.marquise
    eyrie = state.factions.eyrie
    alliance = state.factions.woodland_alliance

    warriors_on_map = {faction: 0 for faction in FACTION_ORDER}
    wood_on_board = 0

    for clearing in state.board.clearings.values():
        # Drop zero entries; negative counts are left for check_invariants
        for faction in [f for f, count in clearing.warriors.items() if count == 0]:
            del clearing.warriors[faction]
        for faction, count in clearing.warriors.items():
            warriors_on_map[faction] += count

        for building in clearing.buildings:
            if building.faction == Faction.MARQUISE:
                if building.type == BuildingType.SAWMILL:
                    marquise.total_sawmills_on_map += 1
                    marquise.building_tracks.sawmill.built_count += 1
                elif building.type == BuildingType.WORKSHOP:
                    marquise.total_workshops_on_map += 1
                    marquise.building_tracks.workshop.built_count += 1
                elif building.type == BuildingType.RECRUITER:
                    marquise.total_recruiters_on_map += 1
                    marquise.building_tracks.recruiter.built_count += 1
            elif building.faction == Faction.EYRIE and building.type == BuildingType.ROOST:
                eyrie.roosts_on_map += 1
                eyrie.roost_track.roosts_placed += 1
            elif building.faction == Faction.WOODLAND_ALLIANCE and building.type in BASE_TYPES:
                setattr(alliance.bases, building.type.value.removeprefix("base_"), True)

        for token in clearing.tokens:
            if token.faction == Faction.MARQUISE and token.type == TokenType.WOOD:
                wood_on_board += 1
            elif token.faction == Faction.WOODLAND_ALLIANCE and token.type == TokenType.SYMPATHY:
                alliance.sympathy_on_map += 1
                alliance.sympathy_track.sympathy_placed += 1

    marquise.warriors_in_supply = max(0, TOTAL_WARRIORS[Faction.MARQUISE] - warriors_on_map[Faction.MARQUISE])
    eyrie.warriors_in_supply = max(0, TOTAL_WARRIORS[Faction.EYRIE] - warriors_on_map[Faction.EYRIE])
    alliance.warriors_in_supply = max(
        0, TOTAL_WARRIORS[Faction.WOODLAND_ALLIANCE] - warriors_on_map[Faction.WOODLAND_ALLIANCE]
    )
    marquise.wood_in_supply = max(0, MARQUISE_TOTAL_WOOD - wood_on_board)

    for faction in FACTION_ORDER:
        state.victory_track[faction] = clamp_victory_points(state.victory_track.get(faction, 0))


def recompute_derived_state(state: GameState) -> GameState:
    """
    Pure recomputation: returns a new state, leaves the input alone.

    Idempotent: recompute_derived_state(recompute_derived_state(s)) equals
    recompute_derived_state(s).
    """
    next_state = state.clone()
    refresh_derived_state(next_state)
    return next_state
