"""
Eyrie Dynasties phase resolvers and the decree suit check.

Birdsong refills the Decree and rebuilds a roost if the Eyrie has none.
Evening scores the roost track and draws a card. Turmoil is triggered by
the caller when a decree obligation cannot be met.

Each resolver returns the new state plus log lines for the tutor layer.
"""

from __future__ import annotations

import logging

from ..errors import ValidationError
from ..rules.board import free_building_slots, require_clearing_definition
from ..rules.derived import award_victory_points, refresh_derived_state
from ..state.schema import (
    DECREE_COLUMNS,
    ROOST_TRACK_VP,
    BoardDefinition,
    BuildingType,
    ClearingState,
    Decree,
    DecreeCard,
    DecreeColumn,
    DecreeResolution,
    DecreeSource,
    Faction,
    GameState,
    Phase,
    Suit,
)
from ..state.schemas.result import PhaseLogResult, TurmoilResult
from .pieces import next_piece_id, place_building

logger = logging.getLogger(__name__)

# Birdsong adds at most this many cards per turn
DECREE_CARDS_PER_BIRDSONG = 2

# Suits cycled after the first (bird) card of a Birdsong
BIRDSONG_SUIT_CYCLE = [Suit.FOX, Suit.RABBIT, Suit.MOUSE]

NEW_ROOST_WARRIORS = 3


def shortest_decree_column(decree: Decree) -> DecreeColumn:
    """Column with the fewest cards; ties go to the earlier column."""
    return min(DECREE_COLUMNS, key=lambda column: len(decree.columns[column]))


def add_decree_card(
    decree: Decree,
    column: DecreeColumn,
    suit: Suit,
    source: DecreeSource = DecreeSource.NORMAL,
    card_id: str | None = None,
) -> DecreeCard:
    """Append a card to a decree column on a working copy."""
    if card_id is None:
        card_id = next_piece_id(f"decree_{column.value}", {c.id for c in decree.all_cards()})
    card = DecreeCard(suit=suit, source=source, id=card_id)
    decree.columns[column].append(card)
    return card


def _birdsong_suit(cards_added: int) -> Suit:
    if cards_added == 0:
        return Suit.BIRD
    return BIRDSONG_SUIT_CYCLE[(cards_added - 1) % len(BIRDSONG_SUIT_CYCLE)]


def _new_roost_clearing(state: GameState, board: BoardDefinition) -> ClearingState | None:
    candidates = []
    for definition in board.clearings:
        if free_building_slots(board, state, definition.id) > 0:
            candidates.append(state.clearing(definition.id))
    if not candidates:
        return None
    # min() keeps the first of equal candidates
    return min(candidates, key=lambda clearing: clearing.total_warriors())


def perform_eyrie_birdsong(state: GameState, board: BoardDefinition) -> PhaseLogResult:
    """
    Resolve Eyrie Birdsong.

    1. Emergency Orders: an empty hand draws one card.
    2. Add up to two cards to the Decree, each into the shortest column.
       The first card is a bird, later ones cycle fox, rabbit, mouse.
    3. A New Roost: with no roost on the map, place one plus up to three
       warriors in the emptiest clearing that still has a free slot.
    """
    next_state = state.clone()
    refresh_derived_state(next_state)
    eyrie = next_state.factions.eyrie
    log: list[str] = []

    if eyrie.hand_size <= 0:
        eyrie.hand_size = 1
        log.append("Emergency Orders: drew 1 card.")

    cards_to_add = min(DECREE_CARDS_PER_BIRDSONG, eyrie.hand_size)
    for cards_added in range(cards_to_add):
        column = shortest_decree_column(eyrie.decree)
        suit = _birdsong_suit(cards_added)
        add_decree_card(eyrie.decree, column, suit)
        eyrie.hand_size = max(0, eyrie.hand_size - 1)
        log.append(f"Added a {suit.value} card to the {column.value} column of the Decree.")

    if eyrie.roosts_on_map == 0:
        clearing = _new_roost_clearing(next_state, board)
        if clearing is not None:
            place_building(board, clearing, Faction.EYRIE, BuildingType.ROOST)
            warriors = min(NEW_ROOST_WARRIORS, eyrie.warriors_in_supply)
            if warriors > 0:
                clearing.add_warriors(Faction.EYRIE, warriors)
            log.append(
                f"A New Roost: placed a roost with {warriors} warriors in {clearing.id.upper()}."
            )
        else:
            logger.debug("No clearing with a free slot for a new roost")

    refresh_derived_state(next_state)

    if not log:
        log.append("Birdsong complete: no changes required.")

    logger.info("eyrie birdsong resolved (%d log lines)", len(log))
    return PhaseLogResult(state=next_state, log=log)


def perform_eyrie_evening(state: GameState, board: BoardDefinition) -> PhaseLogResult:
    """Score the roost track and draw one card."""
    next_state = state.clone()
    refresh_derived_state(next_state)
    eyrie = next_state.factions.eyrie
    log: list[str] = []

    index = min(len(ROOST_TRACK_VP) - 1, max(0, eyrie.roost_track.roosts_placed))
    victory_points = ROOST_TRACK_VP[index]
    if victory_points > 0:
        total = award_victory_points(next_state, Faction.EYRIE, victory_points)
        log.append(f"Scored {victory_points} VP from roost track (total {total}).")
    else:
        log.append("Scored 0 VP from roost track.")

    eyrie.hand_size += 1
    log.append(f"Drew 1 card in Evening (hand size {eyrie.hand_size}).")

    refresh_derived_state(next_state)
    logger.info("eyrie evening resolved: %d VP", victory_points)
    return PhaseLogResult(state=next_state, log=log)


def trigger_eyrie_turmoil(state: GameState, board: BoardDefinition) -> TurmoilResult:
    """
    Fall into turmoil.

    The Eyrie loses one VP per bird card in the Decree, discards every
    card except the viziers, and the turn jumps straight to Evening.
    """
    next_state = state.clone()
    refresh_derived_state(next_state)
    decree = next_state.factions.eyrie.decree

    lost_points = sum(1 for card in decree.all_cards() if card.suit == Suit.BIRD)
    award_victory_points(next_state, Faction.EYRIE, -lost_points)

    discarded = 0
    for column in DECREE_COLUMNS:
        kept = [card for card in decree.columns[column] if card.source == DecreeSource.VIZIER]
        discarded += len(decree.columns[column]) - len(kept)
        decree.columns[column] = kept

    next_state.turn.phase = Phase.EVENING
    refresh_derived_state(next_state)

    log = [
        f"Turmoil: lost {lost_points} VP for bird cards in the Decree.",
        f"Discarded {discarded} decree cards; viziers remain.",
    ]
    logger.info("eyrie turmoil: lost %d VP, discarded %d cards", lost_points, discarded)
    return TurmoilResult(state=next_state, lost_points=lost_points, log=log)


def check_decree_suit(
    state: GameState,
    board: BoardDefinition,
    column: DecreeColumn,
    clearing_id: str,
) -> DecreeCard:
    """
    Find the decree card that pays for an action in a clearing.

    A card matching the clearing suit is preferred; bird cards are wild.
    Returns the card without marking it used.

    Raises:
        ValidationError: Unknown clearing or no card in the column fits
    """
    definition = require_clearing_definition(board, clearing_id)
    cards = state.factions.eyrie.decree.columns.get(column, [])
    if not cards:
        raise ValidationError(f"The {column.value} column of the Decree is empty")

    for card in cards:
        if card.suit == definition.suit:
            return card
    for card in cards:
        if card.suit == Suit.BIRD:
            return card
    raise ValidationError(
        f"No {definition.suit.value} or bird card in the {column.value} column "
        f"for clearing {clearing_id}"
    )


def record_decree_resolution(state: GameState, column: DecreeColumn, card: DecreeCard) -> None:
    """Append a successful resolution to the decree on a working copy."""
    decree = state.factions.eyrie.decree
    if decree.last_resolution_result is None:
        decree.last_resolution_result = []
    decree.last_resolution_result.append(
        DecreeResolution(column=column, card_id=card.id, success=True)
    )
