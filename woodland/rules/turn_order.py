"""Turn sequencing helpers. The engine never advances turns on its own."""

from __future__ import annotations

from ..state.schema import FACTION_ORDER, Faction, GameState, Phase

PHASE_ORDER: list[Phase] = [Phase.BIRDSONG, Phase.DAYLIGHT, Phase.EVENING]


def next_phase(phase: Phase) -> Phase:
    return PHASE_ORDER[(PHASE_ORDER.index(phase) + 1) % len(PHASE_ORDER)]


def next_faction(faction: Faction) -> Faction:
    return FACTION_ORDER[(FACTION_ORDER.index(faction) + 1) % len(FACTION_ORDER)]


def advance_turn(state: GameState) -> GameState:
    """
    Return a copy moved to the next phase.

    After evening the next faction starts at birdsong; the round number
    increments when play wraps back to the first faction.
    """
    next_state = state.clone()
    turn = next_state.turn
    turn.action_substep = None
    if turn.phase != Phase.EVENING:
        turn.phase = next_phase(turn.phase)
        return next_state

    turn.phase = Phase.BIRDSONG
    turn.current_faction = next_faction(turn.current_faction)
    if turn.current_faction == FACTION_ORDER[0]:
        turn.round_number += 1
    return next_state
