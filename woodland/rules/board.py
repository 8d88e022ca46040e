"""
The Woodland board: twelve clearings, their suits, slots and adjacency.

Pure data plus lookup helpers that raise the engine's ValidationError,
so every executor reports a missing clearing the same way.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import ValidationError
from ..state.schema import BoardDefinition, ClearingDefinition, Suit

if TYPE_CHECKING:
    from ..state.schema import ClearingState, GameState


BOARD_WIDTH = 1200
BOARD_HEIGHT = 900


def _clearing(id: str, suit: Suit, slots: int, adjacent: list[str], x: int, y: int) -> ClearingDefinition:
    return ClearingDefinition(
        id=id,
        suit=suit,
        building_slots=slots,
        adjacent_clearings=tuple(adjacent),
        x=x,
        y=y,
    )


WOODLAND_BOARD = BoardDefinition(
    clearings=(
        _clearing("c1", Suit.FOX, 1, ["c2", "c3", "c5"], 120, 80),
        _clearing("c2", Suit.RABBIT, 2, ["c1", "c3", "c4", "c6"], 320, 200),
        _clearing("c3", Suit.RABBIT, 2, ["c1", "c2", "c4", "c6"], 820, 130),
        _clearing("c4", Suit.MOUSE, 2, ["c2", "c3", "c6"], 560, 260),
        _clearing("c5", Suit.MOUSE, 2, ["c1", "c6", "c7"], 160, 340),
        _clearing("c6", Suit.MOUSE, 3, ["c2", "c3", "c4", "c5", "c7", "c8"], 560, 460),
        _clearing("c7", Suit.FOX, 2, ["c5", "c6", "c8", "c10"], 220, 580),
        _clearing("c8", Suit.MOUSE, 3, ["c6", "c7", "c9", "c11"], 600, 640),
        _clearing("c9", Suit.MOUSE, 3, ["c8", "c11", "c12"], 980, 560),
        _clearing("c10", Suit.FOX, 1, ["c7", "c11"], 320, 820),
        _clearing("c11", Suit.RABBIT, 2, ["c8", "c9", "c10", "c12"], 760, 820),
        _clearing("c12", Suit.MOUSE, 2, ["c9", "c11"], 1100, 820),
    )
)


def require_clearing_definition(board: BoardDefinition, clearing_id: str) -> ClearingDefinition:
    """Board definition for a clearing, or ValidationError if unknown."""
    definition = board.get(clearing_id)
    if definition is None:
        raise ValidationError(f"Clearing {clearing_id} does not exist on this board")
    return definition


def require_clearing_state(state: "GameState", clearing_id: str) -> "ClearingState":
    """Mutable clearing contents, or ValidationError if the state lacks it."""
    clearing = state.board.clearings.get(clearing_id)
    if clearing is None:
        raise ValidationError(f"Clearing state missing for {clearing_id}")
    return clearing


def free_building_slots(board: BoardDefinition, state: "GameState", clearing_id: str) -> int:
    definition = board.get(clearing_id)
    clearing = state.board.clearings.get(clearing_id)
    if definition is None or clearing is None:
        return 0
    return max(0, definition.building_slots - len(clearing.buildings))
