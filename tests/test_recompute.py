"""Tests for derived-state recomputation."""

from woodland.rules import award_victory_points, recompute_derived_state
from woodland.scenarios import add_building, add_token, set_warriors
from woodland.state.schema import BuildingType, Faction, TokenType


class TestRecompute:
    """Test recompute_derived_state."""

    def test_supplies_follow_board(self, board, base_state):
        """Supplies are totals minus pieces on the board."""
        set_warriors(base_state, "c1", Faction.MARQUISE, 5)
        set_warriors(base_state, "c2", Faction.EYRIE, 4)
        set_warriors(base_state, "c3", Faction.WOODLAND_ALLIANCE, 1)
        add_token(base_state, "c4", Faction.MARQUISE, TokenType.WOOD)

        state = recompute_derived_state(base_state)

        assert state.factions.marquise.warriors_in_supply == 20
        assert state.factions.eyrie.warriors_in_supply == 16
        assert state.factions.woodland_alliance.warriors_in_supply == 9
        assert state.factions.marquise.wood_in_supply == 7

    def test_counts_buildings_and_tokens(self, board, base_state):
        """On-map totals, tracks, base flags and sympathy are derived."""
        add_building(base_state, board, "c6", Faction.MARQUISE, BuildingType.SAWMILL)
        add_building(base_state, board, "c6", Faction.MARQUISE, BuildingType.RECRUITER)
        add_building(base_state, board, "c2", Faction.EYRIE, BuildingType.ROOST)
        add_building(base_state, board, "c8", Faction.WOODLAND_ALLIANCE, BuildingType.BASE_MOUSE)
        add_token(base_state, "c8", Faction.WOODLAND_ALLIANCE, TokenType.SYMPATHY)

        state = recompute_derived_state(base_state)

        marquise = state.factions.marquise
        assert marquise.total_sawmills_on_map == 1
        assert marquise.building_tracks.sawmill.built_count == 1
        assert marquise.total_recruiters_on_map == 1
        assert marquise.total_workshops_on_map == 0
        assert state.factions.eyrie.roosts_on_map == 1
        assert state.factions.eyrie.roost_track.roosts_placed == 1
        assert state.factions.woodland_alliance.bases.mouse is True
        assert state.factions.woodland_alliance.bases.fox is False
        assert state.factions.woodland_alliance.sympathy_on_map == 1

    def test_does_not_touch_input(self, base_state):
        """The input state keeps its stale counters."""
        set_warriors(base_state, "c1", Faction.MARQUISE, 5)

        state = recompute_derived_state(base_state)

        assert state is not base_state
        assert base_state.factions.marquise.warriors_in_supply == 25
        assert state.factions.marquise.warriors_in_supply == 20

    def test_idempotent(self, dominion_state):
        """Recomputing twice equals recomputing once."""
        once = recompute_derived_state(dominion_state)
        twice = recompute_derived_state(once)
        assert twice == once

    def test_drops_zero_warrior_entries(self, base_state):
        """Zero counts are removed from the warriors map."""
        base_state.board.clearings["c1"].warriors[Faction.EYRIE] = 0

        state = recompute_derived_state(base_state)

        assert Faction.EYRIE not in state.board.clearings["c1"].warriors

    def test_clamps_victory_track(self, base_state):
        """Out-of-range scores are pulled into [0, 30]."""
        base_state.victory_track[Faction.MARQUISE] = 45
        base_state.victory_track[Faction.EYRIE] = -3

        state = recompute_derived_state(base_state)

        assert state.victory_track[Faction.MARQUISE] == 30
        assert state.victory_track[Faction.EYRIE] == 0

    def test_supply_floors_at_zero(self, base_state):
        """Over-full boards never produce a negative supply."""
        set_warriors(base_state, "c6", Faction.WOODLAND_ALLIANCE, 12)

        state = recompute_derived_state(base_state)

        assert state.factions.woodland_alliance.warriors_in_supply == 0


class TestAwardVictoryPoints:
    """Test award_victory_points clamping."""

    def test_caps_at_thirty(self, base_state):
        base_state.victory_track[Faction.EYRIE] = 28
        assert award_victory_points(base_state, Faction.EYRIE, 5) == 30

    def test_floors_at_zero(self, base_state):
        base_state.victory_track[Faction.EYRIE] = 1
        assert award_victory_points(base_state, Faction.EYRIE, -4) == 0
