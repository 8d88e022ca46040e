"""
Scenario builders.

Every scenario starts from the same base state (full supplies, empty
tracks), applies a fixed list of placements, recomputes derived counters
once, and finally overlays the turn and victory track. Nothing here is
random: building a scenario twice gives equal states.
"""

from __future__ import annotations

import logging
from typing import Callable

from pydantic import BaseModel

from ..rules.board import WOODLAND_BOARD
from ..rules.derived import refresh_derived_state
from ..state.schema import (
    BoardDefinition,
    BoardState,
    BuildingType,
    ClearingState,
    DecreeColumn,
    DecreeSource,
    Faction,
    GameState,
    Phase,
    Suit,
    TokenType,
)
from ..systems.eyrie import add_decree_card as _append_decree_card
from ..systems.pieces import place_building, place_token

logger = logging.getLogger(__name__)


class ScenarioInfo(BaseModel):
    """Menu metadata for a scenario."""
    index: int
    title: str
    type: str
    difficulty: int


# -----------------------------------------------------------------------------
# Primitives
# -----------------------------------------------------------------------------

def create_base_state(board: BoardDefinition = WOODLAND_BOARD) -> GameState:
    """Empty board, full supplies, zeroed tracks, Marquise birdsong of round 1."""
    return GameState(
        board=BoardState(
            clearings={c.id: ClearingState(id=c.id) for c in board.clearings}
        ),
    )


def set_warriors(state: GameState, clearing_id: str, faction: Faction, count: int) -> None:
    clearing = state.board.clearings[clearing_id]
    if count > 0:
        clearing.warriors[faction] = count
    else:
        clearing.warriors.pop(faction, None)


def add_building(
    state: GameState,
    board: BoardDefinition,
    clearing_id: str,
    faction: Faction,
    building_type: BuildingType,
) -> None:
    place_building(board, state.board.clearings[clearing_id], faction, building_type)


def add_token(state: GameState, clearing_id: str, faction: Faction, token_type: TokenType) -> None:
    place_token(state.board.clearings[clearing_id], faction, token_type)


def add_decree_card(
    state: GameState,
    column: DecreeColumn,
    suit: Suit,
    source: DecreeSource = DecreeSource.NORMAL,
    card_id: str | None = None,
) -> None:
    """Scenario decree cards are named ``<column>_<suit>_<position>`` unless given an id."""
    cards = state.factions.eyrie.decree.columns[column]
    if card_id is None:
        card_id = f"{column.value}_{suit.value}_{len(cards)}"
    _append_decree_card(state.factions.eyrie.decree, column, suit, source, card_id)


def apply_scenario(
    mutator: Callable[[GameState, BoardDefinition], None],
    board: BoardDefinition = WOODLAND_BOARD,
    turn: dict | None = None,
    victory_track: dict[Faction, int] | None = None,
) -> GameState:
    """Base state -> placements -> recompute -> overrides."""
    state = create_base_state(board)
    mutator(state, board)
    refresh_derived_state(state)

    if turn:
        state.turn = state.turn.model_copy(update=turn)
    if victory_track:
        state.victory_track.update(victory_track)
    return state


# -----------------------------------------------------------------------------
# Named scenarios
# -----------------------------------------------------------------------------

M, E, A = Faction.MARQUISE, Faction.EYRIE, Faction.WOODLAND_ALLIANCE


def _eyrie_dominion(state: GameState, board: BoardDefinition) -> None:
    add_building(state, board, "c1", M, BuildingType.KEEP)
    add_building(state, board, "c1", M, BuildingType.RECRUITER)
    add_building(state, board, "c4", M, BuildingType.SAWMILL)
    add_building(state, board, "c4", M, BuildingType.WORKSHOP)
    add_building(state, board, "c7", M, BuildingType.SAWMILL)
    add_token(state, "c4", M, TokenType.WOOD)
    add_token(state, "c7", M, TokenType.WOOD)
    for clearing_id, count in (("c1", 4), ("c4", 3), ("c7", 2), ("c5", 2)):
        set_warriors(state, clearing_id, M, count)

    for clearing_id in ("c2", "c5", "c9"):
        add_building(state, board, clearing_id, E, BuildingType.ROOST)
    for clearing_id, count in (("c2", 4), ("c5", 3), ("c9", 3)):
        set_warriors(state, clearing_id, E, count)

    add_building(state, board, "c11", A, BuildingType.BASE_RABBIT)
    set_warriors(state, "c11", A, 2)
    add_token(state, "c7", A, TokenType.SYMPATHY)
    add_token(state, "c11", A, TokenType.SYMPATHY)
    state.factions.woodland_alliance.officers = 1

    add_decree_card(state, DecreeColumn.RECRUIT, Suit.RABBIT, DecreeSource.VIZIER, "vizier_recruit")
    add_decree_card(state, DecreeColumn.MOVE, Suit.BIRD, DecreeSource.VIZIER, "vizier_move")
    add_decree_card(state, DecreeColumn.BATTLE, Suit.FOX)
    add_decree_card(state, DecreeColumn.BUILD, Suit.MOUSE)


def _martial_law(state: GameState, board: BoardDefinition) -> None:
    add_building(state, board, "c1", M, BuildingType.KEEP)
    add_building(state, board, "c4", M, BuildingType.SAWMILL)
    add_building(state, board, "c5", M, BuildingType.WORKSHOP)
    add_building(state, board, "c5", M, BuildingType.RECRUITER)
    add_building(state, board, "c8", M, BuildingType.SAWMILL)
    add_building(state, board, "c10", M, BuildingType.SAWMILL)
    add_building(state, board, "c6", M, BuildingType.RECRUITER)
    add_building(state, board, "c2", M, BuildingType.WORKSHOP)
    add_token(state, "c8", M, TokenType.WOOD)
    add_token(state, "c10", M, TokenType.WOOD)
    for clearing_id, count in (("c1", 4), ("c4", 3), ("c5", 4), ("c6", 3), ("c8", 2), ("c10", 2)):
        set_warriors(state, clearing_id, M, count)

    add_building(state, board, "c9", E, BuildingType.ROOST)
    set_warriors(state, "c9", E, 4)
    set_warriors(state, "c3", E, 2)

    add_building(state, board, "c8", A, BuildingType.BASE_MOUSE)
    set_warriors(state, "c8", A, 3)
    add_token(state, "c7", A, TokenType.SYMPATHY)
    add_token(state, "c10", A, TokenType.SYMPATHY)
    state.factions.woodland_alliance.officers = 2

    add_decree_card(state, DecreeColumn.RECRUIT, Suit.MOUSE, DecreeSource.VIZIER, "vizier_recruit")
    add_decree_card(state, DecreeColumn.RECRUIT, Suit.BIRD)
    add_decree_card(state, DecreeColumn.MOVE, Suit.RABBIT, DecreeSource.VIZIER, "vizier_move")
    add_decree_card(state, DecreeColumn.BATTLE, Suit.BIRD)


def _conquerors(state: GameState, board: BoardDefinition) -> None:
    add_building(state, board, "c1", M, BuildingType.KEEP)
    add_building(state, board, "c4", M, BuildingType.SAWMILL)
    add_building(state, board, "c5", M, BuildingType.WORKSHOP)
    add_building(state, board, "c7", M, BuildingType.RECRUITER)
    add_building(state, board, "c8", M, BuildingType.RECRUITER)
    add_building(state, board, "c11", M, BuildingType.WORKSHOP)
    add_token(state, "c4", M, TokenType.WOOD)
    add_token(state, "c7", M, TokenType.WOOD)
    for clearing_id, count in (("c1", 3), ("c4", 3), ("c5", 2), ("c7", 2), ("c8", 2)):
        set_warriors(state, clearing_id, M, count)

    for clearing_id in ("c2", "c5", "c9"):
        add_building(state, board, clearing_id, E, BuildingType.ROOST)
    for clearing_id, count in (("c2", 3), ("c5", 3), ("c9", 4), ("c6", 2)):
        set_warriors(state, clearing_id, E, count)

    add_building(state, board, "c8", A, BuildingType.BASE_MOUSE)
    add_building(state, board, "c11", A, BuildingType.BASE_RABBIT)
    set_warriors(state, "c8", A, 3)
    set_warriors(state, "c11", A, 3)
    for clearing_id in ("c7", "c8", "c11"):
        add_token(state, clearing_id, A, TokenType.SYMPATHY)
    state.factions.woodland_alliance.officers = 3

    add_decree_card(state, DecreeColumn.RECRUIT, Suit.FOX, DecreeSource.VIZIER, "vizier_recruit")
    add_decree_card(state, DecreeColumn.RECRUIT, Suit.MOUSE)
    add_decree_card(state, DecreeColumn.MOVE, Suit.BIRD, DecreeSource.VIZIER, "vizier_move")
    add_decree_card(state, DecreeColumn.MOVE, Suit.RABBIT)
    add_decree_card(state, DecreeColumn.BATTLE, Suit.MOUSE)
    add_decree_card(state, DecreeColumn.BUILD, Suit.BIRD)


def build_eyrie_dominion(board: BoardDefinition = WOODLAND_BOARD) -> GameState:
    return apply_scenario(
        _eyrie_dominion,
        board,
        turn={"current_faction": E, "phase": Phase.DAYLIGHT, "round_number": 3},
        victory_track={M: 11, E: 14, A: 6},
    )


def build_martial_law(board: BoardDefinition = WOODLAND_BOARD) -> GameState:
    return apply_scenario(
        _martial_law,
        board,
        turn={
            "current_faction": M,
            "phase": Phase.DAYLIGHT,
            "round_number": 4,
            "action_substep": "recruit",
        },
        victory_track={M: 17, E: 8, A: 5},
    )


def build_conquerors(board: BoardDefinition = WOODLAND_BOARD) -> GameState:
    return apply_scenario(
        _conquerors,
        board,
        turn={
            "current_faction": A,
            "phase": Phase.DAYLIGHT,
            "round_number": 5,
            "action_substep": "craft",
        },
        victory_track={M: 20, E: 19, A: 16},
    )


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------

SCENARIOS: list[tuple[ScenarioInfo, Callable[[BoardDefinition], GameState]]] = [
    (ScenarioInfo(index=0, title="Eyrie Dominion", type="Diplomacy", difficulty=0), build_eyrie_dominion),
    (ScenarioInfo(index=1, title="Martial Law", type="Clearing Control", difficulty=1), build_martial_law),
    (ScenarioInfo(index=2, title="Conquerors", type="Combat Skills", difficulty=2), build_conquerors),
]


def list_scenarios() -> list[ScenarioInfo]:
    return [info for info, _ in SCENARIOS]


def build_scenario(index: int, board: BoardDefinition = WOODLAND_BOARD) -> GameState:
    """Build a scenario by index. Unknown indexes fall back to Eyrie Dominion."""
    if 0 <= index < len(SCENARIOS):
        info, builder = SCENARIOS[index]
    else:
        logger.warning("Unknown scenario %s, using %s", index, SCENARIOS[0][0].title)
        info, builder = SCENARIOS[0]
    logger.info("Building scenario %d: %s", info.index, info.title)
    return builder(board)
