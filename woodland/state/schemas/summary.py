"""
Read-only digest of a game state.

Compact enough to drop into a tutor prompt or a status panel without
shipping the whole GameState.
"""

from pydantic import BaseModel, Field

from ..schema import Faction, Phase, Suit


class TurnSummary(BaseModel):
    current_faction: Faction
    phase: Phase
    round_number: int
    action_substep: str | None = None


class MarquiseSummary(BaseModel):
    warriors_in_supply: int
    wood_in_supply: int
    sawmills: int
    workshops: int
    recruiters: int


class EyrieSummary(BaseModel):
    warriors_in_supply: int
    roosts_on_map: int
    hand_size: int
    decree_columns: dict[str, int] = Field(default_factory=dict)  # column -> card count


class AllianceSummary(BaseModel):
    warriors_in_supply: int
    officers: int
    sympathy_on_map: int
    supporters: int
    bases: list[str] = Field(default_factory=list)


class ClearingSummary(BaseModel):
    """One line per clearing, in board order."""
    id: str
    suit: Suit
    warriors: dict[Faction, int] = Field(default_factory=dict)
    buildings: list[str] = Field(default_factory=list)  # "faction:type"
    tokens: list[str] = Field(default_factory=list)     # "faction:type"
    slots_used: int = 0
    slots_total: int = 0


class GameSummary(BaseModel):
    turn: TurnSummary
    victory_track: dict[Faction, int]
    marquise: MarquiseSummary
    eyrie: EyrieSummary
    woodland_alliance: AllianceSummary
    clearings: list[ClearingSummary] = Field(default_factory=list)
