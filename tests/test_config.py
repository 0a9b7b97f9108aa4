"""
Tests for tournament configuration files.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from knockout import InvalidConfiguration
from knockout.config import bracket_file_path, load_tournament_config, rank_entrants


class TestRankEntrants:
    """Tests for ranking entrants from a tournament file."""

    def test_plain_ids_keep_order(self):
        """A plain list is already a ranking."""
        assert rank_entrants(['c', 'a', 'b']) == ['c', 'a', 'b']

    def test_points_rank_highest_first(self):
        """Points sort descending; ties and missing points keep file order."""
        entrants = [
            {'id': 'a', 'points': 10},
            {'id': 'b', 'points': 30},
            {'id': 'c', 'points': 30},
            {'id': 'd'},
        ]
        assert rank_entrants(entrants) == ['b', 'c', 'a', 'd']

    def test_missing_id(self):
        """A mapping entry needs an id."""
        with pytest.raises(InvalidConfiguration):
            rank_entrants([{'points': 3}])

    def test_invalid_points(self):
        """Points must be numbers."""
        with pytest.raises(InvalidConfiguration):
            rank_entrants([{'id': 'a', 'points': 'lots'}])


class TestLoadTournamentConfig:
    """Tests for reading tournament files."""

    def test_load(self, tournament_file):
        """All settings are read and entrants ranked by points."""
        config = load_tournament_config(tournament_file)
        assert config == {
            'name': 'Club Open',
            'draw_size': 8,
            'seed_count': 4,
            'entrants': ['E1', 'E2', 'E3', 'E4', 'E5'],
            'points_by_round': {'QF': 10, 'SF': 20, 'F': 40, 'C': 80},
        }

    def test_defaults(self, tmp_path):
        """Name falls back to the file name; draw, seeds and points are optional."""
        path = tmp_path / "spring-cup.yaml"
        path.write_text("entrants:\n  - ana\n  - ben\n  - cy\n")
        config = load_tournament_config(str(path))
        assert config['name'] == 'spring-cup'
        assert config['draw_size'] is None
        assert config['seed_count'] == 0
        assert config['entrants'] == ['ana', 'ben', 'cy']
        assert config['points_by_round'] == {}

    def test_no_entrants(self, tmp_path):
        """A tournament needs entrants."""
        path = tmp_path / "empty.yaml"
        path.write_text("name: Empty\nentrants: []\n")
        with pytest.raises(InvalidConfiguration):
            load_tournament_config(str(path))

    def test_not_a_mapping(self, tmp_path):
        """The file must be a mapping of settings."""
        path = tmp_path / "list.yaml"
        path.write_text("- ana\n- ben\n")
        with pytest.raises(InvalidConfiguration):
            load_tournament_config(str(path))

    def test_invalid_yaml(self, tmp_path):
        """Broken YAML is a configuration error."""
        path = tmp_path / "broken.yaml"
        path.write_text("entrants: [ana, ben\n")
        with pytest.raises(InvalidConfiguration):
            load_tournament_config(str(path))

    def test_points_not_a_mapping(self, tmp_path):
        """points_by_round must map round labels to points."""
        path = tmp_path / "points.yaml"
        path.write_text("entrants: [ana, ben]\npoints_by_round: [10, 20]\n")
        with pytest.raises(InvalidConfiguration):
            load_tournament_config(str(path))

    def test_unhashable_entrant_is_kept_for_validation(self, tmp_path):
        """Nested lists reach bracket generation, which rejects them."""
        path = tmp_path / "nested.yaml"
        path.write_text("entrants:\n  - [a, b]\n  - c\n")
        assert load_tournament_config(str(path))['entrants'] == [['a', 'b'], 'c']


class TestBracketFilePath:
    """Tests for the default bracket location."""

    def test_slug_from_name(self, tmp_path):
        """The tournament name becomes a file-safe slug."""
        path = bracket_file_path('Club Open 2026!', data_dir=str(tmp_path))
        assert path == os.path.join(str(tmp_path), 'club-open-2026.yaml')

    def test_blank_name(self, tmp_path):
        """A name with nothing usable falls back to bracket.yaml."""
        assert bracket_file_path('***', data_dir=str(tmp_path)).endswith('bracket.yaml')

    def test_default_data_dir(self, monkeypatch, tmp_path):
        """Without a directory the configured data dir is used."""
        import knockout.config as config_module
        monkeypatch.setattr(config_module, 'DATA_DIR', str(tmp_path))
        assert bracket_file_path('Open') == os.path.join(str(tmp_path), 'open.yaml')
