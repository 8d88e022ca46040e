"""
Helpers for creating pieces on a working copy.

Ids are deterministic so the same action sequence always produces the
same state: ``<faction>_<type>_<clearing>_<n>`` with the smallest unused n.
"""

from __future__ import annotations

from ..state.schema import (
    BoardDefinition,
    BuildingInstance,
    BuildingType,
    ClearingState,
    Faction,
    TokenInstance,
    TokenType,
)


def next_piece_id(prefix: str, existing_ids: set[str]) -> str:
    n = 0
    while f"{prefix}_{n}" in existing_ids:
        n += 1
    return f"{prefix}_{n}"


def lowest_free_slot(clearing: ClearingState, building_slots: int) -> int:
    """Lowest slot index not taken by a building (or the next index if full)."""
    taken = {b.slot_index for b in clearing.buildings}
    for index in range(max(building_slots, len(clearing.buildings) + 1)):
        if index not in taken:
            return index
    return len(clearing.buildings)


def place_building(
    board: BoardDefinition,
    clearing: ClearingState,
    faction: Faction,
    building_type: BuildingType,
) -> BuildingInstance:
    """Append a building to a working-copy clearing. No rules are checked."""
    definition = board.get(clearing.id)
    slots = definition.building_slots if definition else len(clearing.buildings) + 1
    building = BuildingInstance(
        id=next_piece_id(
            f"{faction.value}_{building_type.value}_{clearing.id}",
            {b.id for b in clearing.buildings},
        ),
        faction=faction,
        type=building_type,
        slot_index=lowest_free_slot(clearing, slots),
    )
    clearing.buildings.append(building)
    return building


def place_token(clearing: ClearingState, faction: Faction, token_type: TokenType) -> TokenInstance:
    """Append a token to a working-copy clearing. No rules are checked."""
    token = TokenInstance(
        id=next_piece_id(
            f"{faction.value}_{token_type.value}_{clearing.id}",
            {t.id for t in clearing.tokens},
        ),
        faction=faction,
        type=token_type,
    )
    clearing.tokens.append(token)
    return token
