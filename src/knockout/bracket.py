"""
Single elimination bracket generation and management.

The functions here are the public surface of the engine. Mutating operations
work on a copy and return the new state, so a failed call leaves the caller's
bracket untouched.
"""
import copy
import logging
from typing import Dict, List, Optional

from .errors import InvalidConfiguration
from .models import BYE, BYE_STATE, READY_TO_PLAY, BracketState, Entrant, Match
from .points import points_table
from .progression import ProgressionEngine
from .seeding import assign_slots, calculate_byes, calculate_draw_size, effective_seed_count
from .tree import build_match_tree, get_round_name

logger = logging.getLogger(__name__)


def generate_bracket(ranked_entrant_ids: List, draw_size: Optional[int] = None,
                     seed_count: int = 0, points_by_round: Optional[Dict] = None) -> BracketState:
    """
    Generate a bracket from entrant ids ordered strongest first.

    Args:
        ranked_entrant_ids: Entrant ids, rank 1 first
        draw_size: Power of two >= 2; defaults to the smallest draw that fits
        seed_count: Requested number of seeded entrants
        points_by_round: Ranking points per round label, kept with the bracket

    Returns:
        BracketState with round 1 built and generation-time byes resolved
    """
    ranked_entrant_ids = list(ranked_entrant_ids)
    if draw_size is None:
        draw_size = calculate_draw_size(len(ranked_entrant_ids))

    slots = assign_slots(draw_size, seed_count, ranked_entrant_ids)
    seeds = effective_seed_count(seed_count, draw_size, len(ranked_entrant_ids))
    entrants = [
        Entrant(entrant_id, rank, seed=rank if rank <= seeds else None)
        for rank, entrant_id in enumerate(ranked_entrant_ids, start=1)
    ]
    bracket = BracketState(draw_size, seeds, entrants, slots, build_match_tree(slots),
                           points_table(points_by_round, draw_size) if points_by_round else None)

    logger.info(f"Generated bracket: {len(entrants)} entrants, draw {draw_size}, "
                f"{seeds} seeds, {calculate_byes(len(entrants), draw_size)} byes")
    return bracket


def record_result(bracket: BracketState, match_id, score_a, score_b) -> BracketState:
    updated = copy.deepcopy(bracket)
    ProgressionEngine(updated).record_result(match_id, score_a, score_b)
    return updated


def advance_winner(bracket: BracketState, match_id) -> BracketState:
    updated = copy.deepcopy(bracket)
    ProgressionEngine(updated).advance_winner(match_id)
    return updated


def held_advancements(bracket: BracketState) -> List[str]:
    return ProgressionEngine(bracket).held_advancements()


def matches_in_round(bracket: BracketState, round_number: int) -> List[Match]:
    if round_number < 1 or round_number > bracket.total_rounds:
        return []
    return [match for match in bracket.rounds[round_number - 1] if match is not None]


def current_champion(bracket: BracketState):
    return ProgressionEngine(bracket).champion


def playable_matches(bracket: BracketState) -> List[Match]:
    """Matches with both entrants known and no result yet."""
    return [match for match in bracket.iter_matches() if match.state == READY_TO_PLAY]


def round_name(bracket: BracketState, round_number: int) -> str:
    if round_number < 1 or round_number > bracket.total_rounds:
        raise InvalidConfiguration(f"Bracket has no round {round_number}")
    return get_round_name(bracket.draw_size // 2 ** (round_number - 1))


def bracket_summary(bracket: BracketState) -> Dict:
    """
    Get bracket data formatted for display.
    """
    matches_per_round = {}
    for round_number in range(1, bracket.total_rounds + 1):
        actual_matches = [m for m in matches_in_round(bracket, round_number) if m.state != BYE_STATE]
        matches_per_round[round_name(bracket, round_number)] = len(actual_matches)

    return {
        'draw_size': bracket.draw_size,
        'total_entrants': len(bracket.entrants),
        'seeds': bracket.seed_count,
        'byes': sum(1 for slot in bracket.slots if slot == BYE),
        'total_rounds': bracket.total_rounds,
        'matches_per_round': matches_per_round,
        'playable': [match.match_id for match in playable_matches(bracket)],
        'held': held_advancements(bracket),
        'champion': current_champion(bracket),
    }
