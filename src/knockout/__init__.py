"""
Single elimination bracket engine: seeding, bye placement and live progression.
"""
from .bracket import (
    advance_winner,
    bracket_summary,
    current_champion,
    generate_bracket,
    held_advancements,
    matches_in_round,
    playable_matches,
    record_result,
    round_name,
)
from .errors import (
    AdvancementNotPending,
    BracketAlreadyExists,
    BracketError,
    BracketInvariantError,
    DuplicateEntrant,
    InvalidConfiguration,
    InvalidScore,
    MatchAlreadyCompleted,
    MatchIsBye,
    MatchNotFound,
    MatchNotReady,
)
from .models import BYE, BracketState, Entrant, Match, Side
from .points import award_points, round_labels_for
from .progression import ProgressionEngine
from .seeding import MAX_SEEDS, assign_slots, seed_position_table
