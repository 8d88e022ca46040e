"""
Battle action.

Resolution:
1. Roll two battle dice (0-3 each); the higher serves the attacker.
2. Rolled hits are capped by each side's warriors in the clearing.
3. A defender with no warriors is defenseless: the attacker gets +1 hit.
4. Hits land simultaneously. Each side loses warriors first, then
   buildings, then tokens, in storage order.
5. Each side scores 1 VP per enemy building or token it removed.

Ambush cards and other extra-hit sources are not modelled.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from ..errors import ValidationError
from ..rules.board import require_clearing_definition, require_clearing_state
from ..rules.derived import award_victory_points, refresh_derived_state
from ..state.schema import (
    BoardDefinition,
    BuildingInstance,
    ClearingState,
    Faction,
    GameState,
    TokenInstance,
)
from ..state.schemas.result import BattleResult, VictoryPointsEarned
from ..tools.dice import roll_battle_dice

logger = logging.getLogger(__name__)

DEFENSELESS_EXTRA_HITS = 1


@dataclass
class HitsApplied:
    """Pieces one side lost to the other side's hits."""
    warriors_removed: int = 0
    buildings_removed: list[BuildingInstance] = field(default_factory=list)
    tokens_removed: list[TokenInstance] = field(default_factory=list)

    @property
    def scoring_pieces(self) -> int:
        return len(self.buildings_removed) + len(self.tokens_removed)


def apply_hits(clearing: ClearingState, faction: Faction, hits: int) -> HitsApplied:
    """
    Remove up to `hits` pieces of a faction from a working-copy clearing.

    Warriors go first, then buildings, then tokens. Stops when hits run
    out or the faction has nothing left in the clearing.
    """
    result = HitsApplied()
    remaining = hits

    warriors = clearing.warrior_count(faction)
    result.warriors_removed = min(warriors, remaining)
    remaining -= result.warriors_removed
    clearing.add_warriors(faction, -result.warriors_removed)

    if remaining > 0:
        doomed = clearing.buildings_of(faction)[:remaining]
        doomed_ids = {b.id for b in doomed}
        clearing.buildings = [b for b in clearing.buildings if b.id not in doomed_ids]
        result.buildings_removed = doomed
        remaining -= len(doomed)

    if remaining > 0:
        doomed = clearing.tokens_of(faction)[:remaining]
        doomed_ids = {t.id for t in doomed}
        clearing.tokens = [t for t in clearing.tokens if t.id not in doomed_ids]
        result.tokens_removed = doomed

    return result


def execute_battle(
    state: GameState,
    board: BoardDefinition,
    clearing_id: str,
    attacker: Faction,
    defender: Faction,
    *,
    rng: random.Random | None = None,
    dice: tuple[int, int] | list[int] | None = None,
) -> BattleResult:
    """
    Resolve one battle in a clearing.

    Args:
        rng: Random source for the dice (module random if omitted)
        dice: Forced dice faces, bypassing the roll

    Raises:
        ValidationError: Unknown clearing, attacker fighting itself,
            attacker absent from the clearing, or malformed forced dice
    """
    require_clearing_definition(board, clearing_id)
    if attacker == defender:
        raise ValidationError("A faction cannot battle itself")

    next_state = state.clone()
    refresh_derived_state(next_state)
    clearing = require_clearing_state(next_state, clearing_id)

    attacker_warriors = clearing.warrior_count(attacker)
    defender_warriors = clearing.warrior_count(defender)
    if attacker_warriors == 0:
        raise ValidationError("Attacker must have warriors in the clearing to battle")

    try:
        roll = roll_battle_dice(rng=rng, forced=dice)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    attacker_rolled_hits = min(roll.attacker_roll, attacker_warriors)
    defender_rolled_hits = min(roll.defender_roll, defender_warriors)

    attacker_extra_hits = DEFENSELESS_EXTRA_HITS if defender_warriors == 0 else 0
    defender_extra_hits = 0

    attacker_hits = attacker_rolled_hits + attacker_extra_hits
    defender_hits = defender_rolled_hits + defender_extra_hits

    # Both totals are fixed above from pre-battle counts
    defender_losses = apply_hits(clearing, defender, attacker_hits)
    attacker_losses = apply_hits(clearing, attacker, defender_hits)

    attacker_vp = defender_losses.scoring_pieces
    defender_vp = attacker_losses.scoring_pieces
    award_victory_points(next_state, attacker, attacker_vp)
    award_victory_points(next_state, defender, defender_vp)

    refresh_derived_state(next_state)

    logger.info(
        "Battle in %s: %s vs %s, dice %s, hits %d/%d",
        clearing_id, attacker.value, defender.value, list(roll.dice), attacker_hits, defender_hits,
    )

    return BattleResult(
        state=next_state,
        dice=roll.dice,
        attacker_hits=attacker_hits,
        defender_hits=defender_hits,
        attacker_rolled_hits=attacker_rolled_hits,
        defender_rolled_hits=defender_rolled_hits,
        attacker_extra_hits=attacker_extra_hits,
        defender_extra_hits=defender_extra_hits,
        defender_warriors_removed=defender_losses.warriors_removed,
        attacker_warriors_removed=attacker_losses.warriors_removed,
        defender_buildings_removed=defender_losses.buildings_removed,
        attacker_buildings_removed=attacker_losses.buildings_removed,
        defender_tokens_removed=defender_losses.tokens_removed,
        attacker_tokens_removed=attacker_losses.tokens_removed,
        victory_points_earned=VictoryPointsEarned(attacker=attacker_vp, defender=defender_vp),
    )
