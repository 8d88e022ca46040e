"""State model for the Woodland engine."""

from .schema import (
    BoardDefinition,
    BoardState,
    BuildingInstance,
    BuildingType,
    ClearingDefinition,
    ClearingState,
    Decree,
    DecreeCard,
    DecreeColumn,
    DecreeResolution,
    DecreeSource,
    EyrieState,
    Faction,
    GameState,
    MarquiseState,
    Phase,
    Suit,
    TokenInstance,
    TokenType,
    TurnState,
    WoodlandAllianceState,
)
from .codec import dump_state, dump_state_json, load_state
from .event_bus import (
    EngineEvent,
    EventBus,
    EventType,
    get_event_bus,
    reset_event_bus,
)

__all__ = [
    # Schema
    "BoardDefinition",
    "BoardState",
    "BuildingInstance",
    "BuildingType",
    "ClearingDefinition",
    "ClearingState",
    "Decree",
    "DecreeCard",
    "DecreeColumn",
    "DecreeResolution",
    "DecreeSource",
    "EyrieState",
    "Faction",
    "GameState",
    "MarquiseState",
    "Phase",
    "Suit",
    "TokenInstance",
    "TokenType",
    "TurnState",
    "WoodlandAllianceState",
    # Codec
    "dump_state",
    "dump_state_json",
    "load_state",
    # Event Bus
    "EngineEvent",
    "EventBus",
    "EventType",
    "get_event_bus",
    "reset_event_bus",
]
