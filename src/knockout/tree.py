"""
Build the match arena from a round-1 slot array.
"""
import logging
from typing import List, Optional

from .errors import BracketInvariantError
from .models import (
    AWAITING_UPSTREAM, BYE_STATE, READY_TO_PLAY,
    Match, Side,
)
from .seeding import is_power_of_two

logger = logging.getLogger(__name__)


def get_round_name(entrants_in_round: int) -> str:
    """Get the name of a round based on how many entrants it can hold."""
    if entrants_in_round == 2:
        return "Final"
    elif entrants_in_round == 4:
        return "Semifinal"
    elif entrants_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {entrants_in_round}"


def resolve_pairing(round_number: int, position: int, side_a: Side, side_b: Side) -> Optional[Match]:
    """
    Create the match for two sides known at generation time.

    BYE vs BYE yields no match. An entrant facing a BYE wins immediately.
    """
    if side_a.is_bye and side_b.is_bye:
        return None
    if side_a.is_pending or side_b.is_pending:
        return Match(round_number, position, [side_a, side_b], AWAITING_UPSTREAM)
    if side_a.is_bye or side_b.is_bye:
        winner = side_b.entrant_id if side_a.is_bye else side_a.entrant_id
        return Match(round_number, position, [side_a, side_b], BYE_STATE, winner=winner)
    return Match(round_number, position, [side_a, side_b], READY_TO_PLAY)


def _feeding_side(child: Optional[Match]) -> Side:
    if child is None:
        return Side.bye()
    if child.state == BYE_STATE:
        return Side.of(child.winner)
    return Side.pending(child.match_id)


def build_match_tree(slots: List) -> List[List[Optional[Match]]]:
    """
    Pair slots (2k, 2k+1) into round 1 and derive every later round.

    Byes are resolved all the way up: nothing is live yet, so a BYE outcome can
    never depend on a result still to be played.
    """
    if not is_power_of_two(len(slots)):
        raise BracketInvariantError(f"Slot array length {len(slots)} is not a power of two")
    for index, value in enumerate(slots):
        if value is None:
            raise BracketInvariantError(f"Slot {index} is empty")

    first_round = []
    for position in range(len(slots) // 2):
        side_a = Side.of(slots[2 * position])
        side_b = Side.of(slots[2 * position + 1])
        first_round.append(resolve_pairing(1, position, side_a, side_b))
    rounds = [first_round]

    while len(rounds[-1]) > 1:
        previous = rounds[-1]
        round_number = len(rounds) + 1
        current = []
        for position in range(len(previous) // 2):
            side_a = _feeding_side(previous[2 * position])
            side_b = _feeding_side(previous[2 * position + 1])
            current.append(resolve_pairing(round_number, position, side_a, side_b))
        rounds.append(current)

    byes = sum(1 for matches in rounds for match in matches if match is not None and match.state == BYE_STATE)
    logger.debug(f"Built {len(rounds)} rounds from {len(slots)} slots, {byes} matches resolved as byes")
    return rounds

