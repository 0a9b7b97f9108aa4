"""
Shared pytest fixtures for knockout bracket tests.

Running tests:
    pytest tests/                  - full suite
    pytest tests/ -m "not slow"   - skip the exhaustive draw checks
"""
import pytest
import sys
import os
import yaml

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from knockout import BYE, BracketState, Entrant, generate_bracket
from knockout.tree import build_match_tree


@pytest.fixture
def bracket_a():
    """Draw of 4 with 2 seeds and 3 entrants."""
    return generate_bracket(['E1', 'E2', 'E3'], draw_size=4, seed_count=2)


@pytest.fixture
def bracket_b():
    """Draw of 8 with 4 seeds and 5 entrants."""
    return generate_bracket(['E1', 'E2', 'E3', 'E4', 'E5'], draw_size=8, seed_count=4)


@pytest.fixture
def bye_chain_bracket():
    """
    Draw of 16 where only slots 0 and 1 hold entrants, so the winner of R1-M1
    faces a BYE in every later round.
    """
    slots = ['A', 'B'] + [BYE] * 14
    entrants = [Entrant('A', 1), Entrant('B', 2)]
    return BracketState(16, 0, entrants, slots, build_match_tree(slots))


@pytest.fixture
def tournament_file(tmp_path):
    """Tournament config with entrants ranked by points and a points table."""
    path = tmp_path / "club-open-config.yaml"
    path.write_text(yaml.dump({
        'name': 'Club Open',
        'draw_size': 8,
        'seed_count': 4,
        'points_by_round': {'QF': 10, 'SF': 20, 'F': 40, 'C': 80},
        'entrants': [
            {'id': 'E5', 'points': 10},
            {'id': 'E1', 'points': 500},
            {'id': 'E3', 'points': 300},
            {'id': 'E2', 'points': 400},
            {'id': 'E4', 'points': 200},
        ],
    }, default_flow_style=False))
    return str(path)
