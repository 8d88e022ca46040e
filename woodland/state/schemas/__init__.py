"""
Schema contracts for the Woodland engine.

Three families:
- Actions: tagged request variants, one per executor or phase resolver
- Results: the new state plus a breakdown of what happened
- Summary: a read-only digest of a state

All schemas are Pydantic BaseModel for validation and JSON serialization.
"""

from .action import (
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
    parse_action,
)
from .result import (
    ActionResult,
    BattleResult,
    BuildResult,
    MoveResult,
    PhaseLogResult,
    PlaceWoodResult,
    RecruitPlacement,
    RecruitResult,
    TokenResult,
    TurmoilResult,
    VictoryPointsEarned,
)
from .summary import (
    AllianceSummary,
    ClearingSummary,
    EyrieSummary,
    GameSummary,
    MarquiseSummary,
    TurnSummary,
)

__all__ = [
    # Actions
    "Action",
    "ActionType",
    "BattleAction",
    "BirdsongAction",
    "BuildAction",
    "EveningAction",
    "MoveAction",
    "PlaceWoodAction",
    "RecruitAction",
    "TokenAction",
    "TurmoilAction",
    "parse_action",
    # Results
    "ActionResult",
    "BattleResult",
    "BuildResult",
    "MoveResult",
    "PhaseLogResult",
    "PlaceWoodResult",
    "RecruitPlacement",
    "RecruitResult",
    "TokenResult",
    "TurmoilResult",
    "VictoryPointsEarned",
    # Summary
    "AllianceSummary",
    "ClearingSummary",
    "EyrieSummary",
    "GameSummary",
    "MarquiseSummary",
    "TurnSummary",
]
