"""Game state digest for the tutor and status views."""

from __future__ import annotations

from ..rules.derived import recompute_derived_state
from ..state.schema import DECREE_COLUMNS, BoardDefinition, GameState
from ..state.schemas.summary import (
    AllianceSummary,
    ClearingSummary,
    EyrieSummary,
    GameSummary,
    MarquiseSummary,
    TurnSummary,
)


def summarize_game_state(state: GameState, board: BoardDefinition) -> GameSummary:
    """
    Build a GameSummary. Pure: the state is not modified, and counters
    are read from a recomputed copy.

    Clearings are listed in board order; a clearing missing from the state
    is reported empty.
    """
    state = recompute_derived_state(state)
    marquise = state.factions.marquise
    eyrie = state.factions.eyrie
    alliance = state.factions.woodland_alliance

    clearings = []
    for definition in board.clearings:
        clearing = state.clearing(definition.id)
        if clearing is None:
            clearings.append(ClearingSummary(
                id=definition.id,
                suit=definition.suit,
                slots_total=definition.building_slots,
            ))
            continue
        clearings.append(ClearingSummary(
            id=definition.id,
            suit=definition.suit,
            warriors={f: n for f, n in clearing.warriors.items() if n > 0},
            buildings=[f"{b.faction.value}:{b.type.value}" for b in clearing.buildings],
            tokens=[f"{t.faction.value}:{t.type.value}" for t in clearing.tokens],
            slots_used=len(clearing.buildings),
            slots_total=definition.building_slots,
        ))

    return GameSummary(
        turn=TurnSummary(**state.turn.model_dump()),
        victory_track=dict(state.victory_track),
        marquise=MarquiseSummary(
            warriors_in_supply=marquise.warriors_in_supply,
            wood_in_supply=marquise.wood_in_supply,
            sawmills=marquise.total_sawmills_on_map,
            workshops=marquise.total_workshops_on_map,
            recruiters=marquise.total_recruiters_on_map,
        ),
        eyrie=EyrieSummary(
            warriors_in_supply=eyrie.warriors_in_supply,
            roosts_on_map=eyrie.roosts_on_map,
            hand_size=eyrie.hand_size,
            decree_columns={c.value: len(eyrie.decree.columns[c]) for c in DECREE_COLUMNS},
        ),
        woodland_alliance=AllianceSummary(
            warriors_in_supply=alliance.warriors_in_supply,
            officers=alliance.officers,
            sympathy_on_map=alliance.sympathy_on_map,
            supporters=alliance.supporters.total(),
            bases=[suit for suit, placed in alliance.bases.model_dump().items() if placed],
        ),
        clearings=clearings,
    )
