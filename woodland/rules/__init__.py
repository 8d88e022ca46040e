"""
Board data and pure rule functions: derived counters, invariants, turn order.

Nothing here raises for an illegal action except the clearing lookups.
"""

from .board import (
    WOODLAND_BOARD,
    free_building_slots,
    require_clearing_definition,
    require_clearing_state,
)
from .derived import (
    award_victory_points,
    clamp_victory_points,
    recompute_derived_state,
    refresh_derived_state,
)
from .invariants import check_invariants
from .turn_order import advance_turn, next_faction, next_phase

__all__ = [
    "WOODLAND_BOARD",
    "free_building_slots",
    "require_clearing_definition",
    "require_clearing_state",
    "award_victory_points",
    "clamp_victory_points",
    "recompute_derived_state",
    "refresh_derived_state",
    "check_invariants",
    "advance_turn",
    "next_faction",
    "next_phase",
]
