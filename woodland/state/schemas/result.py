"""
Result schemas returned by executors and phase resolvers.

Each result carries the new state plus a breakdown the caller can narrate.
The state inside a result is always a fresh object; the input state the
caller passed in is never the same instance.
"""

from pydantic import BaseModel, Field

from ..schema import BuildingInstance, GameState, TokenInstance


class MoveResult(BaseModel):
    state: GameState
    moved: int


class VictoryPointsEarned(BaseModel):
    attacker: int = 0
    defender: int = 0


class BattleResult(BaseModel):
    """
    Full battle breakdown.

    Hits are split into rolled hits (capped by warriors present) and
    extra hits (the defenseless bonus). Removed pieces are listed in the
    order they were taken off the board.
    """
    state: GameState
    dice: tuple[int, int]
    attacker_hits: int
    defender_hits: int
    attacker_rolled_hits: int
    defender_rolled_hits: int
    attacker_extra_hits: int
    defender_extra_hits: int
    defender_warriors_removed: int
    attacker_warriors_removed: int
    defender_buildings_removed: list[BuildingInstance] = Field(default_factory=list)
    attacker_buildings_removed: list[BuildingInstance] = Field(default_factory=list)
    defender_tokens_removed: list[TokenInstance] = Field(default_factory=list)
    attacker_tokens_removed: list[TokenInstance] = Field(default_factory=list)
    victory_points_earned: VictoryPointsEarned = Field(default_factory=VictoryPointsEarned)


class BuildResult(BaseModel):
    state: GameState
    building: BuildingInstance
    victory_points: int = 0  # VP scored from the building track, if any


class RecruitPlacement(BaseModel):
    clearing_id: str
    warriors_placed: int


class RecruitResult(BaseModel):
    state: GameState
    placements: list[RecruitPlacement] = Field(default_factory=list)
    total_placed: int = 0


class TokenResult(BaseModel):
    state: GameState
    token: TokenInstance
    supporters_spent: dict[str, int] = Field(default_factory=dict)
    victory_points: int = 0


class PlaceWoodResult(BaseModel):
    state: GameState
    token: TokenInstance


class PhaseLogResult(BaseModel):
    """Birdsong / Evening outcome: new state plus human-readable log lines."""
    state: GameState
    log: list[str] = Field(default_factory=list)


class TurmoilResult(BaseModel):
    state: GameState
    lost_points: int
    log: list[str] = Field(default_factory=list)


ActionResult = (
    MoveResult
    | BattleResult
    | BuildResult
    | RecruitResult
    | TokenResult
    | PlaceWoodResult
    | PhaseLogResult
    | TurmoilResult
)
