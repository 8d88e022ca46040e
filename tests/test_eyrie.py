"""Tests for Eyrie phase resolvers and the decree suit check."""

import pytest

from woodland.scenarios import add_building
from woodland.state.schema import BuildingType, DecreeColumn, DecreeSource, Faction, Phase, Suit
from woodland.systems import (
    ValidationError,
    check_decree_suit,
    perform_eyrie_birdsong,
    perform_eyrie_evening,
    trigger_eyrie_turmoil,
)


class TestBirdsong:
    """Test perform_eyrie_birdsong."""

    def test_adds_two_cards_to_shortest_columns(self, board, dominion_state):
        """Bird card first, then fox; ties go to the earlier column."""
        result = perform_eyrie_birdsong(dominion_state, board)

        columns = result.state.factions.eyrie.decree.columns
        assert [c.suit for c in columns[DecreeColumn.RECRUIT]] == [Suit.RABBIT, Suit.BIRD]
        assert [c.suit for c in columns[DecreeColumn.MOVE]] == [Suit.BIRD, Suit.FOX]
        assert result.state.factions.eyrie.hand_size == 1
        assert result.log == [
            "Added a bird card to the recruit column of the Decree.",
            "Added a fox card to the move column of the Decree.",
        ]

    def test_new_cards_are_normal(self, board, dominion_state):
        result = perform_eyrie_birdsong(dominion_state, board)

        added = result.state.factions.eyrie.decree.columns[DecreeColumn.RECRUIT][-1]
        assert added.source == DecreeSource.NORMAL
        assert added.id == "decree_recruit_0"

    def test_emergency_orders_and_new_roost(self, board, base_state):
        """Empty hand draws one; no roosts places one in the emptiest clearing."""
        base_state.factions.eyrie.hand_size = 0

        result = perform_eyrie_birdsong(base_state, board)

        eyrie = result.state.factions.eyrie
        assert result.log == [
            "Emergency Orders: drew 1 card.",
            "Added a bird card to the recruit column of the Decree.",
            "A New Roost: placed a roost with 3 warriors in C1.",
        ]
        assert eyrie.hand_size == 0
        assert eyrie.roosts_on_map == 1
        assert eyrie.warriors_in_supply == 17
        assert result.state.board.clearings["c1"].warrior_count(Faction.EYRIE) == 3

    def test_new_roost_avoids_crowds_and_full_clearings(self, board, base_state):
        """Fewest warriors among clearings with a free slot."""
        for clearing_id in board.clearing_ids:
            base_state.board.clearings[clearing_id].warriors[Faction.MARQUISE] = 1
        base_state.board.clearings["c10"].warriors.clear()

        result = perform_eyrie_birdsong(base_state, board)

        assert result.state.factions.eyrie.roosts_on_map == 1
        assert result.state.board.clearings["c10"].buildings[0].faction == Faction.EYRIE

    def test_no_roost_when_one_exists(self, board, dominion_state):
        result = perform_eyrie_birdsong(dominion_state, board)

        assert result.state.factions.eyrie.roosts_on_map == 3

    def test_input_untouched(self, board, dominion_state):
        before = dominion_state.model_copy(deep=True)

        perform_eyrie_birdsong(dominion_state, board)

        assert dominion_state == before

    def test_stale_roost_counter_is_ignored(self, board, base_state):
        """A roost on the board counts even when roosts_on_map still reads 0."""
        add_building(base_state, board, "c2", Faction.EYRIE, BuildingType.ROOST)
        assert base_state.factions.eyrie.roosts_on_map == 0

        result = perform_eyrie_birdsong(base_state, board)

        assert result.state.factions.eyrie.roosts_on_map == 1
        assert not any(line.startswith("A New Roost") for line in result.log)


class TestEvening:
    """Test perform_eyrie_evening."""

    def test_scores_roost_track(self, board, dominion_state):
        """Three roosts score 3 VP."""
        result = perform_eyrie_evening(dominion_state, board)

        assert result.state.victory_track[Faction.EYRIE] == 17
        assert result.state.factions.eyrie.hand_size == 4
        assert result.log == [
            "Scored 3 VP from roost track (total 17).",
            "Drew 1 card in Evening (hand size 4).",
        ]

    def test_no_roosts_scores_zero(self, board, base_state):
        result = perform_eyrie_evening(base_state, board)

        assert result.log[0] == "Scored 0 VP from roost track."
        assert result.state.victory_track[Faction.EYRIE] == 0

    def test_capped_at_thirty(self, board, dominion_state):
        dominion_state.victory_track[Faction.EYRIE] = 29

        result = perform_eyrie_evening(dominion_state, board)

        assert result.state.victory_track[Faction.EYRIE] == 30


class TestTurmoil:
    """Test trigger_eyrie_turmoil."""

    def test_loses_bird_points_and_keeps_viziers(self, board, dominion_state):
        """One bird card (the move vizier): lose 1 VP, discard normal cards."""
        result = trigger_eyrie_turmoil(dominion_state, board)

        columns = result.state.factions.eyrie.decree.columns
        assert result.lost_points == 1
        assert result.state.victory_track[Faction.EYRIE] == 13
        assert [c.id for c in columns[DecreeColumn.RECRUIT]] == ["vizier_recruit"]
        assert [c.id for c in columns[DecreeColumn.MOVE]] == ["vizier_move"]
        assert columns[DecreeColumn.BATTLE] == []
        assert columns[DecreeColumn.BUILD] == []
        assert result.state.turn.phase == Phase.EVENING

    def test_floor_at_zero(self, board, dominion_state):
        dominion_state.victory_track[Faction.EYRIE] = 0

        result = trigger_eyrie_turmoil(dominion_state, board)

        assert result.state.victory_track[Faction.EYRIE] == 0


class TestDecreeSuitCheck:
    """Test check_decree_suit."""

    def test_matching_suit(self, board, dominion_state):
        """Battle column holds a fox card; c1 is fox."""
        card = check_decree_suit(dominion_state, board, DecreeColumn.BATTLE, "c1")

        assert card.suit == Suit.FOX

    def test_mismatched_suit(self, board, dominion_state):
        with pytest.raises(ValidationError, match="No rabbit or bird card"):
            check_decree_suit(dominion_state, board, DecreeColumn.BATTLE, "c2")

    def test_bird_is_wild(self, board, dominion_state):
        card = check_decree_suit(dominion_state, board, DecreeColumn.MOVE, "c12")

        assert card.id == "vizier_move"

    def test_empty_column(self, board, base_state):
        with pytest.raises(ValidationError, match="empty"):
            check_decree_suit(base_state, board, DecreeColumn.BUILD, "c1")
