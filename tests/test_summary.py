"""Tests for the game summary."""

from woodland.state.schema import Faction, Suit
from woodland.systems import summarize_game_state


class TestSummarizeGameState:
    """Test summarize_game_state."""

    def test_clearings_in_board_order(self, board, dominion_state):
        summary = summarize_game_state(dominion_state, board)

        assert [c.id for c in summary.clearings] == board.clearing_ids

    def test_clearing_line(self, board, dominion_state):
        c1 = summarize_game_state(dominion_state, board).clearings[0]

        assert c1.suit == Suit.FOX
        assert c1.warriors == {Faction.MARQUISE: 4}
        assert c1.buildings == ["marquise:keep", "marquise:recruiter"]
        assert c1.slots_used == 2
        assert c1.slots_total == 1

    def test_faction_figures(self, board, dominion_state):
        summary = summarize_game_state(dominion_state, board)

        assert summary.marquise.warriors_in_supply == 14
        assert summary.marquise.sawmills == 2
        assert summary.eyrie.roosts_on_map == 3
        assert summary.eyrie.decree_columns == {"recruit": 1, "move": 1, "battle": 1, "build": 1}
        assert summary.woodland_alliance.bases == ["rabbit"]
        assert summary.woodland_alliance.sympathy_on_map == 2

    def test_turn_and_score(self, board, dominion_state):
        summary = summarize_game_state(dominion_state, board)

        assert summary.turn.round_number == 3
        assert summary.victory_track[Faction.EYRIE] == 14

    def test_does_not_modify_state(self, board, dominion_state):
        before = dominion_state.model_copy(deep=True)

        summarize_game_state(dominion_state, board)

        assert dominion_state == before
