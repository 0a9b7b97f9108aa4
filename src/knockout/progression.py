"""
Live progression of a generated bracket.

A recorded result completes one match and writes its winner into the next
round. When that next match is left facing a BYE it is resolved on the spot,
but its own winner stays held until a separate ``advance_winner`` call, so a
single call never resolves more than one downstream match.
"""
import logging
from typing import List, Optional

from .errors import (
    AdvancementNotPending, BracketInvariantError, InvalidScore,
    MatchAlreadyCompleted, MatchIsBye, MatchNotReady,
)
from .models import (
    AWAITING_UPSTREAM, BYE_STATE, COMPLETED, READY_TO_PLAY,
    BracketState, Match, Side,
)

logger = logging.getLogger(__name__)


def validate_scores(score_a, score_b) -> None:
    for score in (score_a, score_b):
        if isinstance(score, bool) or not isinstance(score, int):
            raise InvalidScore(f"Scores must be whole numbers, got {score!r}")
        if score < 0:
            raise InvalidScore(f"Scores must be non-negative, got {score}")
    if score_a == score_b:
        raise InvalidScore("Ties are not allowed")


class ProgressionEngine:
    """Validates and applies results to a bracket, mutating it in place."""

    def __init__(self, bracket: BracketState):
        self.bracket = bracket

    @property
    def champion(self):
        final = self.bracket.final
        if final is not None and final.is_resolved:
            return final.winner
        return None

    def record_result(self, match_id, score_a, score_b) -> List[str]:
        """
        Record the score of a playable match.

        Returns the ids of the matches that changed: the recorded one and, when
        its winner lands in a match, that next match.
        """
        match = self.bracket.get_match(match_id)
        if match.state == BYE_STATE:
            raise MatchIsBye(match.match_id)
        if match.state == COMPLETED:
            raise MatchAlreadyCompleted(match.match_id)
        if any(side.is_pending for side in match.sides):
            raise MatchNotReady(match.match_id)
        if not all(side.is_entrant for side in match.sides):
            raise BracketInvariantError(f"Open match {match.match_id} has a BYE side")
        validate_scores(score_a, score_b)
        self._parent_slot(match)

        match.score_a = score_a
        match.score_b = score_b
        match.winner = match.side_a.entrant_id if score_a > score_b else match.side_b.entrant_id
        match.state = COMPLETED
        logger.info(f"Recorded {match.match_id}: {match.side_a.entrant_id!r} {score_a}-{score_b} "
                    f"{match.side_b.entrant_id!r}, winner {match.winner!r}")

        changed = [match.match_id]
        parent = self._deliver(match)
        if parent is not None:
            changed.append(parent.match_id)
        if self.champion is not None and self.bracket.final.match_id in changed:
            logger.info(f"Tournament finished, champion {self.champion!r}")
        return changed

    def advance_winner(self, match_id) -> List[str]:
        """Write the held winner of a resolved match into the next round."""
        match = self.bracket.get_match(match_id)
        if not match.is_resolved or match.round_number == self.bracket.total_rounds:
            raise AdvancementNotPending(match.match_id)
        parent, index = self._parent_slot(match)
        side = parent.sides[index]
        if not (side.is_pending and side.source == match.match_id):
            raise AdvancementNotPending(match.match_id)

        self._deliver(match)
        logger.info(f"Advanced {match.winner!r} from {match.match_id} into {parent.match_id}")
        return [parent.match_id]

    def held_advancements(self) -> List[str]:
        """Ids of resolved matches whose winner has not reached the next round."""
        held = []
        for match in self.bracket.iter_matches():
            if not match.is_resolved or match.round_number == self.bracket.total_rounds:
                continue
            parent, index = self._parent_slot(match)
            side = parent.sides[index]
            if side.is_pending and side.source == match.match_id:
                held.append(match.match_id)
        return held

    def _parent_slot(self, match: Match):
        """Return (parent match, side index) for a non-final match."""
        if match.round_number == self.bracket.total_rounds:
            return None, None
        parent = self.bracket.parent_of(match)
        if parent is None:
            raise BracketInvariantError(f"Match {match.match_id} has no match to advance into")
        index = match.position % 2
        side = parent.sides[index]
        if side.is_bye or (side.is_pending and side.source != match.match_id):
            raise BracketInvariantError(
                f"Match {parent.match_id} side {index} is not fed by {match.match_id}")
        return parent, index

    def _deliver(self, match: Match) -> Optional[Match]:
        parent, index = self._parent_slot(match)
        if parent is None:
            return None

        parent.sides[index] = Side.of(match.winner)
        other = parent.sides[1 - index]
        if other.is_bye:
            # One hop only: this winner waits for advance_winner
            parent.state = COMPLETED
            parent.winner = match.winner
            parent.walkover = True
            logger.info(f"{match.winner!r} receives a bye through {parent.match_id}")
        elif other.is_entrant:
            parent.state = READY_TO_PLAY
        else:
            parent.state = AWAITING_UPSTREAM
        return parent
