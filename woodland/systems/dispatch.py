"""
Action dispatcher for the Woodland engine.

Routes a tagged Action to its executor through a table keyed on
ActionType. The table is checked against the enum when this module is
imported, so an action type without a handler fails at startup rather
than at the first request.

Usage:
    dispatcher = ActionDispatcher(WOODLAND_BOARD)
    result = dispatcher.execute(state, parse_action({"type": "move", ...}))

The dispatcher adds two things on top of the executors:
- Eyrie decree suit checks for actions that name a decree column
- ACTION_RESOLVED / ACTION_REJECTED events on the bus
"""

from __future__ import annotations

import logging
import random
from typing import Callable

from ..errors import UnknownActionError, ValidationError
from ..state.event_bus import EventBus, EventType, get_event_bus
from ..state.schema import BoardDefinition, DecreeCard, Faction, GameState
from ..state.schemas.action import (
    Action,
    ActionType,
    BattleAction,
    BirdsongAction,
    BuildAction,
    EveningAction,
    MoveAction,
    PlaceWoodAction,
    RecruitAction,
    TokenAction,
    TurmoilAction,
)
from ..state.schemas.result import ActionResult, BattleResult, TurmoilResult
from .battle import execute_battle
from .building import execute_build
from .eyrie import (
    check_decree_suit,
    perform_eyrie_birdsong,
    perform_eyrie_evening,
    record_decree_resolution,
    trigger_eyrie_turmoil,
)
from .movement import execute_move
from .recruitment import execute_recruit, first_roost_clearing
from .tokens import execute_place_wood, execute_token_placement

logger = logging.getLogger(__name__)


Handler = Callable[["ActionDispatcher", GameState, Action], ActionResult]


def _move(dispatcher: "ActionDispatcher", state: GameState, action: MoveAction) -> ActionResult:
    return execute_move(
        state, dispatcher.board, action.faction,
        action.from_clearing, action.to_clearing, action.warriors,
    )


def _battle(dispatcher: "ActionDispatcher", state: GameState, action: BattleAction) -> ActionResult:
    return execute_battle(
        state, dispatcher.board, action.clearing_id,
        action.attacker, action.defender, rng=dispatcher.rng,
    )


def _build(dispatcher: "ActionDispatcher", state: GameState, action: BuildAction) -> ActionResult:
    return execute_build(
        state, dispatcher.board, action.faction, action.clearing_id, action.building_type,
    )


def _recruit(dispatcher: "ActionDispatcher", state: GameState, action: RecruitAction) -> ActionResult:
    return execute_recruit(
        state, dispatcher.board, action.faction, action.clearing_id, action.warriors,
    )


def _token(dispatcher: "ActionDispatcher", state: GameState, action: TokenAction) -> ActionResult:
    return execute_token_placement(
        state, dispatcher.board, action.faction, action.clearing_id, action.token_type,
    )


def _place_wood(dispatcher: "ActionDispatcher", state: GameState, action: PlaceWoodAction) -> ActionResult:
    return execute_place_wood(state, dispatcher.board, action.clearing_id)


def _birdsong(dispatcher: "ActionDispatcher", state: GameState, action: BirdsongAction) -> ActionResult:
    return perform_eyrie_birdsong(state, dispatcher.board)


def _evening(dispatcher: "ActionDispatcher", state: GameState, action: EveningAction) -> ActionResult:
    return perform_eyrie_evening(state, dispatcher.board)


def _turmoil(dispatcher: "ActionDispatcher", state: GameState, action: TurmoilAction) -> ActionResult:
    return trigger_eyrie_turmoil(state, dispatcher.board)


HANDLERS: dict[ActionType, Handler] = {
    ActionType.MOVE: _move,
    ActionType.BATTLE: _battle,
    ActionType.BUILD: _build,
    ActionType.RECRUIT: _recruit,
    ActionType.TOKEN: _token,
    ActionType.PLACE_WOOD: _place_wood,
    ActionType.BIRDSONG: _birdsong,
    ActionType.EVENING: _evening,
    ActionType.TURMOIL: _turmoil,
}

_missing = set(ActionType) - set(HANDLERS)
if _missing:
    raise RuntimeError(
        "Action types without a handler: " + ", ".join(sorted(t.value for t in _missing))
    )


def _acting_faction(action: Action) -> Faction | None:
    if isinstance(action, BattleAction):
        return action.attacker
    if isinstance(action, (BirdsongAction, EveningAction, TurmoilAction)):
        return Faction.EYRIE
    if isinstance(action, PlaceWoodAction):
        return Faction.MARQUISE
    return getattr(action, "faction", None)


def _decree_target(state: GameState, action: Action) -> str | None:
    """Clearing whose suit the decree card must match. Moves are paid for where they start."""
    if isinstance(action, MoveAction):
        return action.from_clearing
    if isinstance(action, RecruitAction) and action.clearing_id is None:
        return first_roost_clearing(state)
    return getattr(action, "clearing_id", None)


class ActionDispatcher:
    """
    Executes tagged actions against a board.

    Stateless apart from the board, dice source and event bus it was
    built with; every call takes and returns a full GameState.
    """

    def __init__(
        self,
        board: BoardDefinition,
        rng: random.Random | None = None,
        bus: EventBus | None = None,
    ):
        self.board = board
        self.rng = rng
        self._bus = bus or get_event_bus()

    def execute(self, state: GameState, action: Action) -> ActionResult:
        """
        Run one action and return the executor's result.

        Raises:
            ValidationError: The action is illegal (state untouched)
            UnknownActionError: No handler for the action's type
        """
        action_type = ActionType(action.type)
        handler = HANDLERS.get(action_type)
        if handler is None:
            raise UnknownActionError(action_type.value)

        faction = _acting_faction(action)
        try:
            decree_card = self._check_decree(state, action, faction)
            result = handler(self, state, action)
        except ValidationError as e:
            logger.warning("Rejected %s for %s: %s", action_type.value, faction, e)
            self._bus.emit(
                EventType.ACTION_REJECTED,
                round_number=state.turn.round_number,
                action_type=action_type.value,
                faction=faction.value if faction else None,
                reason=str(e),
            )
            raise

        if decree_card is not None:
            record_decree_resolution(result.state, action.decree_column, decree_card)

        self._emit_resolved(state, action_type, faction, result)
        return result

    def _check_decree(
        self,
        state: GameState,
        action: Action,
        faction: Faction | None,
    ) -> DecreeCard | None:
        """The decree card paying for the action, if it names a column."""
        decree_column = getattr(action, "decree_column", None)
        if decree_column is None:
            return None
        if faction != Faction.EYRIE:
            raise ValidationError("Only the Eyrie resolve actions from the Decree")
        target = _decree_target(state, action)
        if target is None:
            raise ValidationError("Eyrie have no roosts to recruit from.")
        return check_decree_suit(state, self.board, decree_column, target)

    def _emit_resolved(
        self,
        state: GameState,
        action_type: ActionType,
        faction: Faction | None,
        result: ActionResult,
    ) -> None:
        round_number = state.turn.round_number
        self._bus.emit(
            EventType.ACTION_RESOLVED,
            round_number=round_number,
            action_type=action_type.value,
            faction=faction.value if faction else None,
        )
        if isinstance(result, BattleResult):
            self._bus.emit(
                EventType.BATTLE_RESOLVED,
                round_number=round_number,
                dice=list(result.dice),
                attacker_hits=result.attacker_hits,
                defender_hits=result.defender_hits,
            )
        elif isinstance(result, TurmoilResult):
            self._bus.emit(EventType.TURMOIL, round_number=round_number, lost_points=result.lost_points)
        elif action_type in (ActionType.BIRDSONG, ActionType.EVENING):
            self._bus.emit(
                EventType.PHASE_RESOLVED,
                round_number=round_number,
                phase=action_type.value,
                log=list(result.log),
            )
