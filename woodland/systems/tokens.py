"""
Token placement.

Sympathy is the interesting case: the Woodland Alliance pays supporters
on an escalating schedule, matching the clearing suit first and topping
up from wild bird supporters. Three or more warriors of any one enemy
faction in the clearing (martial law) add one to the price.

Wood is Marquise-only and must come out of the wood supply.
"""

from __future__ import annotations

import logging

from ..errors import ValidationError
from ..rules.board import require_clearing_definition, require_clearing_state
from ..rules.derived import award_victory_points, refresh_derived_state
from ..state.schema import (
    BASE_SUITS,
    MARTIAL_LAW_THRESHOLD,
    SYMPATHY_SPREAD_COST,
    SYMPATHY_TRACK_VP,
    BoardDefinition,
    BuildingType,
    ClearingState,
    Faction,
    GameState,
    Suit,
    Supporters,
    TokenType,
)
from ..state.schemas.result import PlaceWoodResult, TokenResult
from .pieces import place_token

logger = logging.getLogger(__name__)


def sympathy_cost(sympathy_placed: int, martial_law: bool = False) -> int:
    """Supporters needed for the next sympathy token."""
    base = SYMPATHY_SPREAD_COST[min(sympathy_placed, len(SYMPATHY_SPREAD_COST) - 1)]
    return base + (1 if martial_law else 0)


def sympathy_victory_points(sympathy_placed: int) -> int:
    """VP for the track step filled when `sympathy_placed` tokens are already out."""
    return SYMPATHY_TRACK_VP[min(sympathy_placed, len(SYMPATHY_TRACK_VP) - 1)]


def is_martial_law(clearing: ClearingState) -> bool:
    return any(
        faction != Faction.WOODLAND_ALLIANCE and count >= MARTIAL_LAW_THRESHOLD
        for faction, count in clearing.warriors.items()
    )


def plan_supporter_spend(supporters: Supporters, suit: Suit, required: int) -> dict[str, int]:
    """
    Work out which supporters pay `required`, without spending any.

    Matching-suit supporters go first, wild birds cover the rest.
    Raises ValidationError if the pools cannot cover the cost.
    """
    spend: dict[str, int] = {}
    remaining = required
    if suit in BASE_SUITS:
        matching = min(remaining, getattr(supporters, suit.value))
        if matching > 0:
            spend[suit.value] = matching
            remaining -= matching
    if remaining > 0:
        if supporters.bird < remaining:
            raise ValidationError("Not enough supporters to spread sympathy in that clearing.")
        spend[Suit.BIRD.value] = remaining
    return spend


def _spread_sympathy(
    state: GameState,
    board: BoardDefinition,
    clearing: ClearingState,
) -> tuple[dict[str, int], int]:
    alliance = state.factions.woodland_alliance
    if clearing.tokens_of(Faction.WOODLAND_ALLIANCE, TokenType.SYMPATHY):
        raise ValidationError("Clearing already has a sympathy token")

    suit = board.get(clearing.id).suit
    placed = alliance.sympathy_track.sympathy_placed
    required = sympathy_cost(placed, is_martial_law(clearing))

    spend = plan_supporter_spend(alliance.supporters, suit, required)
    for pool, amount in spend.items():
        setattr(alliance.supporters, pool, getattr(alliance.supporters, pool) - amount)

    victory_points = sympathy_victory_points(placed)
    if victory_points > 0:
        award_victory_points(state, Faction.WOODLAND_ALLIANCE, victory_points)
    return spend, victory_points


def execute_token_placement(
    state: GameState,
    board: BoardDefinition,
    faction: Faction,
    clearing_id: str,
    token_type: TokenType,
) -> TokenResult:
    """
    Place a token in a clearing.

    Raises:
        ValidationError: Unknown clearing, sympathy by a faction other than
            the Alliance, a second sympathy token, too few supporters,
            wood by a non-Marquise faction or with no wood in supply
    """
    require_clearing_definition(board, clearing_id)
    if token_type == TokenType.SYMPATHY and faction != Faction.WOODLAND_ALLIANCE:
        raise ValidationError("Only the Woodland Alliance can place sympathy tokens")
    if token_type == TokenType.WOOD and faction != Faction.MARQUISE:
        raise ValidationError("Only the Marquise can place wood tokens")

    next_state = state.clone()
    refresh_derived_state(next_state)
    clearing = require_clearing_state(next_state, clearing_id)

    spend: dict[str, int] = {}
    victory_points = 0
    if token_type == TokenType.SYMPATHY:
        spend, victory_points = _spread_sympathy(next_state, board, clearing)
    elif token_type == TokenType.WOOD and next_state.factions.marquise.wood_in_supply <= 0:
        raise ValidationError("No wood remaining in Marquise supply")

    token = place_token(clearing, faction, token_type)
    refresh_derived_state(next_state)

    logger.info("%s placed %s in %s", faction.value, token_type.value, clearing_id)
    return TokenResult(
        state=next_state,
        token=token,
        supporters_spent=spend,
        victory_points=victory_points,
    )


def execute_place_wood(
    state: GameState,
    board: BoardDefinition,
    clearing_id: str,
) -> PlaceWoodResult:
    """
    Produce one wood at a Marquise sawmill.

    Raises:
        ValidationError: Unknown clearing, no sawmill there, or no wood left
    """
    require_clearing_definition(board, clearing_id)
    next_state = state.clone()
    refresh_derived_state(next_state)
    clearing = require_clearing_state(next_state, clearing_id)

    if not clearing.buildings_of(Faction.MARQUISE, BuildingType.SAWMILL):
        raise ValidationError("Wood can only be placed in clearings that contain a Marquise sawmill")
    if next_state.factions.marquise.wood_in_supply <= 0:
        raise ValidationError("No wood remaining in Marquise supply")

    token = place_token(clearing, Faction.MARQUISE, TokenType.WOOD)
    refresh_derived_state(next_state)

    logger.info("marquise placed wood in %s", clearing_id)
    return PlaceWoodResult(state=next_state, token=token)
