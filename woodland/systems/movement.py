"""
Move action.

Moves warriors of one faction between two adjacent clearings.
Rulership of either clearing is left to the tutor layer;
the engine checks adjacency and warrior counts only.
"""

import logging

from ..errors import ValidationError
from ..rules.board import require_clearing_definition, require_clearing_state
from ..rules.derived import refresh_derived_state
from ..state.schema import BoardDefinition, Faction, GameState
from ..state.schemas.result import MoveResult

logger = logging.getLogger(__name__)


def execute_move(
    state: GameState,
    board: BoardDefinition,
    faction: Faction,
    from_clearing: str,
    to_clearing: str,
    warriors: int,
) -> MoveResult:
    """
    Move warriors from one clearing to an adjacent one.

    Raises:
        ValidationError: Unknown clearing, non-adjacent destination,
            non-positive count, or fewer warriors present than requested
    """
    require_clearing_definition(board, from_clearing)
    require_clearing_definition(board, to_clearing)

    if warriors <= 0:
        raise ValidationError("You must move at least one warrior")

    if not board.is_adjacent(from_clearing, to_clearing):
        raise ValidationError(f"Clearing {from_clearing} is not adjacent to {to_clearing}")

    next_state = state.clone()
    refresh_derived_state(next_state)
    source = require_clearing_state(next_state, from_clearing)
    destination = require_clearing_state(next_state, to_clearing)

    available = source.warrior_count(faction)
    if available < warriors:
        raise ValidationError(
            f"Not enough {faction.value} warriors in {from_clearing} "
            f"(have {available}, need {warriors})"
        )

    source.add_warriors(faction, -warriors)
    destination.add_warriors(faction, warriors)
    refresh_derived_state(next_state)

    logger.info("%s moved %d warriors %s -> %s", faction.value, warriors, from_clearing, to_clearing)
    return MoveResult(state=next_state, moved=warriors)
