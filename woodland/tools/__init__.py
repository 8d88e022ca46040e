"""Tools for the Woodland engine."""

from .dice import BattleRoll, roll_battle_dice, roll_battle_die

__all__ = [
    "BattleRoll",
    "roll_battle_dice",
    "roll_battle_die",
]
