"""
Woodland engine FastAPI server.

Thin HTTP wrapper over the action dispatcher. No sessions and no storage:
the client sends the state with each request and keeps the state that
comes back.

Endpoints:
- GET  /health                - Liveness check
- GET  /scenarios             - Scenario menu
- POST /scenarios/{index}     - Fresh state for a scenario
- POST /game/<action>         - One endpoint per action (move, battle, ...)
- POST /game/action           - Any action as a tagged union
- POST /game/advance-turn     - Step the turn marker
- POST /game/summary          - Compact digest of a state
- POST /game/invariants       - Audit a state
"""

import logging
import random

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import DEFAULT_CONFIG, EngineConfig
from ..errors import UnknownActionError, ValidationError
from ..rules import WOODLAND_BOARD, advance_turn, check_invariants
from ..scenarios import ScenarioInfo, build_scenario, list_scenarios
from ..state.event_bus import EventBus
from ..state.schema import BoardDefinition
from ..state.schemas.result import (
    BattleResult,
    BuildResult,
    MoveResult,
    PhaseLogResult,
    PlaceWoodResult,
    RecruitResult,
    TokenResult,
    TurmoilResult,
)
from ..state.schemas.summary import GameSummary
from ..systems import ActionDispatcher, summarize_game_state
from .schemas import (
    ActionRequest,
    BattleRequest,
    BirdsongRequest,
    BuildRequest,
    ErrorResponse,
    EveningRequest,
    InvariantReport,
    MoveRequest,
    PlaceWoodRequest,
    RecruitRequest,
    ScenarioResponse,
    StateRequest,
    StateResponse,
    TokenRequest,
    TurmoilRequest,
)

logger = logging.getLogger(__name__)


def create_app(
    config: EngineConfig | None = None,
    board: BoardDefinition = WOODLAND_BOARD,
    bus: EventBus | None = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Overrides merged over DEFAULT_CONFIG
        board: Board every request is played on
        bus: Event bus for dispatcher events (global bus if None)
    """
    settings: EngineConfig = {**DEFAULT_CONFIG, **(config or {})}
    seed = settings.get("dice_seed")
    rng = random.Random(seed) if seed is not None else None
    dispatcher = ActionDispatcher(board, rng=rng, bus=bus)

    app = FastAPI(
        title="Woodland Engine API",
        description="Rules engine for the Marquise, Eyrie and Woodland Alliance",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.dispatcher = dispatcher

    # -------------------------------------------------------------------------
    # Error handling
    # -------------------------------------------------------------------------

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        body = ErrorResponse(error=str(exc), code="validation_error")
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(UnknownActionError)
    async def handle_unknown_action(request: Request, exc: UnknownActionError):
        body = ErrorResponse(
            error=str(exc),
            code="unknown_action",
            details={"action_type": exc.action_type},
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    # -------------------------------------------------------------------------
    # Meta & scenarios
    # -------------------------------------------------------------------------

    @app.get("/health")
    async def health_check():
        return {"ok": True, "service": "woodland-engine"}

    @app.get("/scenarios", response_model=list[ScenarioInfo])
    async def get_scenarios():
        return list_scenarios()

    @app.post("/scenarios/{index}", response_model=ScenarioResponse)
    async def start_scenario(index: int):
        """Fresh state for a scenario. Unknown indexes start Eyrie Dominion."""
        infos = list_scenarios()
        info = infos[index] if 0 <= index < len(infos) else infos[0]
        return ScenarioResponse(scenario=info, state=build_scenario(index, board))

    # -------------------------------------------------------------------------
    # Game actions
    # -------------------------------------------------------------------------

    @app.post("/game/move", response_model=MoveResult)
    async def move(request: MoveRequest):
        return dispatcher.execute(request.state, request)

    @app.post("/game/battle", response_model=BattleResult)
    async def battle(request: BattleRequest):
        return dispatcher.execute(request.state, request)

    @app.post("/game/build", response_model=BuildResult)
    async def build(request: BuildRequest):
        return dispatcher.execute(request.state, request)

    @app.post("/game/recruit", response_model=RecruitResult)
    async def recruit(request: RecruitRequest):
        return dispatcher.execute(request.state, request)

    @app.post("/game/token", response_model=TokenResult)
    async def token(request: TokenRequest):
        return dispatcher.execute(request.state, request)

    @app.post("/game/place-wood", response_model=PlaceWoodResult)
    async def place_wood(request: PlaceWoodRequest):
        return dispatcher.execute(request.state, request)

    @app.post("/game/eyrie/birdsong", response_model=PhaseLogResult)
    async def eyrie_birdsong(request: BirdsongRequest):
        return dispatcher.execute(request.state, request)

    @app.post("/game/eyrie/evening", response_model=PhaseLogResult)
    async def eyrie_evening(request: EveningRequest):
        return dispatcher.execute(request.state, request)

    @app.post("/game/eyrie/turmoil", response_model=TurmoilResult)
    async def eyrie_turmoil(request: TurmoilRequest):
        return dispatcher.execute(request.state, request)

    @app.post("/game/action")
    async def any_action(request: ActionRequest):
        """Execute any action; the response shape follows the action type."""
        result = dispatcher.execute(request.state, request.action)
        return result.model_dump(mode="json")

    # -------------------------------------------------------------------------
    # Turn & inspection
    # -------------------------------------------------------------------------

    @app.post("/game/advance-turn", response_model=StateResponse)
    async def advance(request: StateRequest):
        return StateResponse(state=advance_turn(request.state))

    @app.post("/game/summary", response_model=GameSummary)
    async def summary(request: StateRequest):
        return summarize_game_state(request.state, board)

    @app.post("/game/invariants", response_model=InvariantReport)
    async def invariants(request: StateRequest):
        violations = check_invariants(request.state, board)
        if violations:
            logger.info("State failed %d invariant checks", len(violations))
        return InvariantReport(ok=not violations, violations=violations)

    return app
