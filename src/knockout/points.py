"""
Ranking points awarded by the deepest round an entrant reached.

A points table maps round labels to points. Labels follow the number of
entrants a round holds: ``R128``, ``R64``, ``R32``, ``R16``, ``QF``, ``SF``,
``F``, and ``C`` for the champion. Only the labels a draw actually uses are
kept, so one club-wide table serves every draw size.
"""
import logging
from typing import Dict, List

from .errors import InvalidConfiguration
from .models import BracketState

logger = logging.getLogger(__name__)

CHAMPION_LABEL = 'C'


def round_label(entrants_in_round: int) -> str:
    if entrants_in_round == 1:
        return CHAMPION_LABEL
    elif entrants_in_round == 2:
        return 'F'
    elif entrants_in_round == 4:
        return 'SF'
    elif entrants_in_round == 8:
        return 'QF'
    else:
        return f'R{entrants_in_round}'


def round_labels_for(draw_size: int) -> List[str]:
    """
    Labels used by a draw, first round first.

    For 16: ['R16', 'QF', 'SF', 'F', 'C']
    """
    labels = []
    size = draw_size
    while size >= 1:
        labels.append(round_label(size))
        size //= 2
    return labels


def points_table(points_by_round, draw_size: int) -> Dict[str, int]:
    """Validate a points table and keep only the labels of this draw, missing ones as 0."""
    if points_by_round is None:
        points_by_round = {}
    if not isinstance(points_by_round, dict):
        raise InvalidConfiguration(f"Points by round must be a mapping, got {points_by_round!r}")
    for label, points in points_by_round.items():
        if isinstance(points, bool) or not isinstance(points, (int, float)) or points < 0:
            raise InvalidConfiguration(f"Invalid points {points!r} for round {label!r}")

    labels = round_labels_for(draw_size)
    unused = [label for label in points_by_round if label not in labels]
    if unused:
        logger.debug(f"Ignoring points for rounds not in a draw of {draw_size}: {unused}")
    return {label: points_by_round.get(label, 0) for label in labels}


def deepest_rounds(bracket: BracketState) -> Dict:
    """
    Deepest round reached by each entrant, where ``total_rounds + 1`` means
    champion. Winning a match counts as reaching the next round, including
    byes and walkovers whose winner is still held.
    """
    reached = {entrant.entrant_id: 1 for entrant in bracket.entrants}
    for match in bracket.iter_matches():
        for side in match.sides:
            if side.is_entrant:
                reached[side.entrant_id] = max(reached.get(side.entrant_id, 1), match.round_number)
        if match.is_resolved:
            reached[match.winner] = max(reached.get(match.winner, 1), match.round_number + 1)
    return reached


def award_points(bracket: BracketState, points_by_round=None) -> Dict:
    """
    Points earned by every entrant so far, keyed by entrant id in rank order.

    Args:
        bracket: Bracket in any stage of play
        points_by_round: Points table; defaults to the one stored with the bracket
    """
    if points_by_round is None:
        points_by_round = bracket.points_by_round
    table = points_table(points_by_round, bracket.draw_size)
    labels = round_labels_for(bracket.draw_size)
    reached = deepest_rounds(bracket)
    return {
        entrant.entrant_id: table[labels[reached[entrant.entrant_id] - 1]]
        for entrant in bracket.entrants
    }
