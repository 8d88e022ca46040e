"""Tests for the move action."""

import pytest

from woodland.rules import check_invariants
from woodland.state.schema import Faction
from woodland.systems import ValidationError, execute_move


class TestExecuteMove:
    """Test execute_move."""

    def test_moves_warriors(self, board, dominion_state):
        """Warriors leave the source and arrive at the destination."""
        result = execute_move(dominion_state, board, Faction.MARQUISE, "c1", "c2", 2)

        assert result.moved == 2
        assert result.state.board.clearings["c1"].warrior_count(Faction.MARQUISE) == 2
        assert result.state.board.clearings["c2"].warrior_count(Faction.MARQUISE) == 2
        assert result.state.factions.marquise.warriors_in_supply == 14

    def test_input_state_untouched(self, board, dominion_state):
        """The caller's state is never modified."""
        before = dominion_state.model_copy(deep=True)

        result = execute_move(dominion_state, board, Faction.MARQUISE, "c1", "c2", 2)

        assert dominion_state == before
        assert result.state is not dominion_state

    def test_moving_everyone_drops_entry(self, board, dominion_state):
        """An emptied clearing has no zero entry left behind."""
        result = execute_move(dominion_state, board, Faction.MARQUISE, "c5", "c6", 2)

        assert Faction.MARQUISE not in result.state.board.clearings["c5"].warriors

    def test_non_adjacent_fails(self, board, dominion_state):
        """c1 to c9 fails even with warriors available."""
        with pytest.raises(ValidationError, match="not adjacent"):
            execute_move(dominion_state, board, Faction.MARQUISE, "c1", "c9", 1)

    def test_zero_warriors_fails(self, board, dominion_state):
        with pytest.raises(ValidationError):
            execute_move(dominion_state, board, Faction.MARQUISE, "c1", "c2", 0)

    def test_too_many_warriors_fails(self, board, dominion_state):
        """Cannot move more warriors than are present."""
        before = dominion_state.model_copy(deep=True)

        with pytest.raises(ValidationError, match="Not enough"):
            execute_move(dominion_state, board, Faction.MARQUISE, "c1", "c2", 5)

        assert dominion_state == before

    def test_unknown_clearing_fails(self, board, dominion_state):
        """Existence is checked before anything else."""
        with pytest.raises(ValidationError, match="does not exist"):
            execute_move(dominion_state, board, Faction.MARQUISE, "c1", "c99", 0)

    def test_conserves_warriors(self, board, dominion_state):
        """Moves never create or destroy warriors."""
        result = execute_move(dominion_state, board, Faction.EYRIE, "c2", "c3", 4)

        assert not any("warriors" in v for v in check_invariants(result.state, board))
