"""
Action executors and phase resolvers for the Woodland engine.

Every entry point takes a GameState and a BoardDefinition and returns a
result model holding a new state. Supply and track counters on the
incoming state are ignored and re-derived from the board before any
check. Illegal actions raise ValidationError before anything is committed.
"""

from ..errors import EngineError, UnknownActionError, ValidationError
from .movement import execute_move
from .battle import execute_battle
from .building import execute_build
from .recruitment import execute_recruit
from .tokens import execute_place_wood, execute_token_placement, sympathy_cost
from .eyrie import (
    check_decree_suit,
    perform_eyrie_birdsong,
    perform_eyrie_evening,
    trigger_eyrie_turmoil,
)
from .dispatch import ActionDispatcher
from .summary import summarize_game_state

__all__ = [
    "EngineError",
    "UnknownActionError",
    "ValidationError",
    # Executors
    "execute_move",
    "execute_battle",
    "execute_build",
    "execute_recruit",
    "execute_token_placement",
    "execute_place_wood",
    "sympathy_cost",
    # Eyrie phases
    "check_decree_suit",
    "perform_eyrie_birdsong",
    "perform_eyrie_evening",
    "trigger_eyrie_turmoil",
    # Dispatch & views
    "ActionDispatcher",
    "summarize_game_state",
]
