"""
Woodland engine HTTP API.

FastAPI app exposing every engine action over stateless JSON requests.
"""

from .server import create_app
from .schemas import (
    ActionRequest,
    ErrorResponse,
    InvariantReport,
    ScenarioResponse,
    StateRequest,
    StateResponse,
)

__all__ = [
    "create_app",
    "ActionRequest",
    "ErrorResponse",
    "InvariantReport",
    "ScenarioResponse",
    "StateRequest",
    "StateResponse",
]
