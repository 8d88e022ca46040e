"""Fixed starting layouts for tutorials and tests."""

from .builders import (
    SCENARIOS,
    ScenarioInfo,
    add_building,
    add_decree_card,
    add_token,
    apply_scenario,
    build_conquerors,
    build_eyrie_dominion,
    build_martial_law,
    build_scenario,
    create_base_state,
    list_scenarios,
    set_warriors,
)

__all__ = [
    "SCENARIOS",
    "ScenarioInfo",
    "add_building",
    "add_decree_card",
    "add_token",
    "apply_scenario",
    "build_conquerors",
    "build_eyrie_dominion",
    "build_martial_law",
    "build_scenario",
    "create_base_state",
    "list_scenarios",
    "set_warriors",
]
