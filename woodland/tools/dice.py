"""
Battle dice for the Woodland engine.

Two twelve-sided battle dice reduced to their hit faces: each die is
uniform over 0-3. The higher die always serves the attacker.
"""

import random
from dataclasses import dataclass

BATTLE_DIE_FACES = (0, 1, 2, 3)


@dataclass
class BattleRoll:
    """Result of a battle roll."""
    dice: tuple[int, int]  # As rolled, in order

    @property
    def attacker_roll(self) -> int:
        return max(self.dice)

    @property
    def defender_roll(self) -> int:
        return min(self.dice)


def roll_battle_die(rng: random.Random | None = None) -> int:
    """Roll a single battle die."""
    return (rng or random).choice(BATTLE_DIE_FACES)


def roll_battle_dice(
    rng: random.Random | None = None,
    forced: tuple[int, int] | list[int] | None = None,
) -> BattleRoll:
    """
    Roll both battle dice.

    Args:
        rng: Random source (seeded instance for reproducible games)
        forced: Use these faces instead of rolling (tests, tutorials)

    Returns:
        BattleRoll with both faces

    Raises:
        ValueError: If forced dice are not two faces in 0-3
    """
    if forced is not None:
        faces = tuple(forced)
        if len(faces) != 2 or any(face not in BATTLE_DIE_FACES for face in faces):
            raise ValueError(f"Forced dice must be two values in 0-3, got {list(faces)}")
        return BattleRoll(dice=(faces[0], faces[1]))

    return BattleRoll(dice=(roll_battle_die(rng), roll_battle_die(rng)))
