"""
Pydantic schemas for the Woodland HTTP API.

The API is stateless: every request carries the full GameState and every
response returns a new one. Game action requests reuse the engine's
action models and add the state they apply to, so a request body is
just an action with a ``state`` field.
"""

from pydantic import BaseModel, Field

from ..scenarios import ScenarioInfo
from ..state.schema import GameState
from ..state.schemas.action import (
    Action,
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


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------

class StateRequest(BaseModel):
    """Body for endpoints that only need the current state."""
    state: GameState


class MoveRequest(MoveAction):
    state: GameState


class BattleRequest(BattleAction):
    state: GameState


class BuildRequest(BuildAction):
    state: GameState


class RecruitRequest(RecruitAction):
    state: GameState


class TokenRequest(TokenAction):
    state: GameState


class PlaceWoodRequest(PlaceWoodAction):
    state: GameState


class BirdsongRequest(BirdsongAction):
    state: GameState


class EveningRequest(EveningAction):
    state: GameState


class TurmoilRequest(TurmoilAction):
    state: GameState


class ActionRequest(BaseModel):
    """Any action, tagged by ``type``."""
    state: GameState
    action: Action


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------

class ScenarioResponse(BaseModel):
    scenario: ScenarioInfo
    state: GameState


class StateResponse(BaseModel):
    state: GameState


class InvariantReport(BaseModel):
    ok: bool
    violations: list[str] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Error Models
# -----------------------------------------------------------------------------

class ErrorResponse(BaseModel):
    """Standard error response."""
    ok: bool = False
    error: str
    code: str | None = None
    details: dict = Field(default_factory=dict)
