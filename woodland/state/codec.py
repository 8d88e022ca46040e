"""
Plain-data round trip for GameState.

Callers hold state between requests as JSON; these helpers are the only
way back in, so an imported state always has fresh derived counters.
"""

from __future__ import annotations

import json
from typing import Any

from .schema import GameState


def dump_state(state: GameState) -> dict[str, Any]:
    """Serialize to JSON-compatible primitives."""
    return state.model_dump(mode="json")


def dump_state_json(state: GameState, indent: int | None = None) -> str:
    return state.model_dump_json(indent=indent)


def load_state(data: dict[str, Any] | str | bytes) -> GameState:
    """
    Validate externally-authored state and recompute derived counters.

    Raises pydantic.ValidationError on malformed input.
    """
    from ..rules.derived import recompute_derived_state

    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    state = GameState.model_validate(data)
    return recompute_derived_state(state)
