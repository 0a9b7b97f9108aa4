"""
Unit tests for ranking points awarded by round reached.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from knockout import InvalidConfiguration, advance_winner, award_points, record_result, round_labels_for
from knockout.points import deepest_rounds, points_table, round_label

POINTS_8 = {'QF': 10, 'SF': 20, 'F': 40, 'C': 80}
POINTS_16 = {'R16': 1, 'QF': 2, 'SF': 3, 'F': 4, 'C': 5}


class TestRoundLabels:
    """Tests for round labels."""

    def test_labels(self):
        """Named rounds get short labels, earlier ones R<size>."""
        assert round_label(1) == 'C'
        assert round_label(2) == 'F'
        assert round_label(4) == 'SF'
        assert round_label(8) == 'QF'
        assert round_label(32) == 'R32'

    def test_labels_for_draw(self):
        """A draw uses one label per round plus the champion."""
        assert round_labels_for(16) == ['R16', 'QF', 'SF', 'F', 'C']
        assert round_labels_for(2) == ['F', 'C']
        assert round_labels_for(128)[0] == 'R128'


class TestPointsTable:
    """Tests for validating a points table against a draw."""

    def test_keeps_labels_of_the_draw(self):
        """Labels a draw does not use are dropped, missing ones become 0."""
        table = points_table({'R128': 5, 'R64': 5, 'QF': 40, 'C': 150}, 8)
        assert table == {'QF': 40, 'SF': 0, 'F': 0, 'C': 150}

    def test_empty(self):
        """No table means no points for any round."""
        assert points_table(None, 4) == {'SF': 0, 'F': 0, 'C': 0}

    @pytest.mark.parametrize('points_by_round', [
        {'QF': -1}, {'QF': 'ten'}, {'QF': True}, {'QF': None}, ['QF', 10],
    ])
    def test_invalid(self, points_by_round):
        """Points must be non-negative numbers in a mapping."""
        with pytest.raises(InvalidConfiguration):
            points_table(points_by_round, 8)


class TestAwardPoints:
    """Tests for points earned by the deepest round reached."""

    def test_fresh_bracket_counts_generation_byes(self, bracket_b):
        """Entrants with a first-round bye have already reached the semifinal."""
        assert award_points(bracket_b, POINTS_8) == {
            'E1': 20, 'E2': 20, 'E3': 20, 'E4': 10, 'E5': 10,
        }

    def test_finished_bracket(self, bracket_b):
        """The champion earns C, the finalist F, and so on down."""
        bracket = record_result(bracket_b, 'R1-M3', 6, 3)
        bracket = record_result(bracket, 'R2-M1', 6, 1)
        bracket = record_result(bracket, 'R2-M2', 2, 6)
        bracket = record_result(bracket, 'R3-M1', 6, 4)

        assert award_points(bracket, POINTS_8) == {
            'E1': 80, 'E2': 40, 'E3': 20, 'E4': 20, 'E5': 10,
        }

    def test_unfinished_bracket(self, bracket_b):
        """Points so far reflect results recorded so far."""
        bracket = record_result(bracket_b, 'R1-M3', 3, 6)
        bracket = record_result(bracket, 'R2-M1', 6, 1)

        assert award_points(bracket, POINTS_8) == {
            'E1': 40, 'E2': 20, 'E3': 20, 'E4': 10, 'E5': 20,
        }

    def test_walkover_counts_as_reached(self, bye_chain_bracket):
        """A held walkover winner is credited with the next round."""
        played = record_result(bye_chain_bracket, 'R1-M1', 6, 2)
        assert award_points(played, POINTS_16) == {'A': 3, 'B': 1}

        advanced = advance_winner(played, 'R2-M1')
        assert award_points(advanced, POINTS_16) == {'A': 4, 'B': 1}

        finished = advance_winner(advanced, 'R3-M1')
        assert award_points(finished, POINTS_16) == {'A': 5, 'B': 1}

    def test_uses_stored_table(self, bracket_a):
        """Without an explicit table the bracket's own is used."""
        bracket_a.points_by_round = {'SF': 1, 'F': 2, 'C': 3}
        assert award_points(bracket_a) == {'E1': 2, 'E2': 1, 'E3': 1}

    def test_no_table_awards_nothing(self, bracket_b):
        """A bracket without a points table awards 0 to everyone."""
        assert set(award_points(bracket_b).values()) == {0}

    def test_deepest_rounds(self, bracket_a):
        """A first-round bye takes seed 1 straight into the final."""
        assert deepest_rounds(bracket_a) == {'E1': 2, 'E2': 1, 'E3': 1}
