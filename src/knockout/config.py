"""
Tournament configuration files and data locations.

A tournament file looks like::

    name: Club Open
    draw_size: 16        # optional, defaults to the smallest draw that fits
    seed_count: 4
    points_by_round:     # optional ranking points for the deepest round reached
      QF: 40
      SF: 70
      F: 120
      C: 150
    entrants:            # strongest first, or with points to rank by
      - id: ana
        points: 420
      - id: ben
        points: 380
"""
import logging
import os
import re

import yaml

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
DATA_DIR = os.environ.get('KNOCKOUT_DATA_DIR', os.path.join(BASE_DIR, 'data'))


def bracket_file_path(name, data_dir=None):
    """Default location of the stored bracket for a tournament name."""
    slug = re.sub(r'[^a-z0-9]+', '-', str(name).lower()).strip('-') or 'bracket'
    return os.path.join(data_dir or DATA_DIR, f'{slug}.yaml')


def rank_entrants(raw_entrants):
    """
    Turn the ``entrants`` list of a tournament file into ranked ids.

    Plain ids keep their listed order. When entries carry points they are
    ranked by points, highest first; equal points keep file order.
    """
    entries = []
    for index, item in enumerate(raw_entrants):
        if isinstance(item, dict):
            if 'id' not in item:
                raise InvalidConfiguration(f"Entrant #{index + 1} has no id")
            points = item.get('points', 0)
            if isinstance(points, bool) or not isinstance(points, (int, float)):
                raise InvalidConfiguration(f"Entrant {item['id']!r} has invalid points {points!r}")
            entries.append((item['id'], points))
        else:
            entries.append((item, None))

    if any(points is not None for _, points in entries):
        entries.sort(key=lambda e: -(e[1] or 0))
    return [entrant_id for entrant_id, _ in entries]


def load_tournament_config(file_path):
    try:
        with open(file_path, mode='r', encoding='utf-8') as file:
            data = yaml.safe_load(file)
    except yaml.YAMLError as e:
        logger.warning(f'Failed to parse {file_path}: {e}')
        raise InvalidConfiguration(f"{file_path} is not valid YAML") from e

    if not isinstance(data, dict):
        raise InvalidConfiguration(f"{file_path} must contain a mapping")
    entrants = data.get('entrants')
    if not isinstance(entrants, list) or not entrants:
        raise InvalidConfiguration(f"{file_path} must list at least one entrant")
    points_by_round = data.get('points_by_round') or {}
    if not isinstance(points_by_round, dict):
        raise InvalidConfiguration(f"{file_path}: points_by_round must be a mapping of round to points")

    return {
        'name': data.get('name') or os.path.splitext(os.path.basename(file_path))[0],
        'draw_size': data.get('draw_size'),
        'seed_count': data.get('seed_count', 0),
        'entrants': rank_entrants(entrants),
        'points_by_round': points_by_round,
    }
