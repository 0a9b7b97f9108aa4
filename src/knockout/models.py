"""
Closed data types for a single elimination bracket.

Matches live in an arena indexed by (round, position): round 1 is the first
round, the final is round ``total_rounds``. The winner of match (r, p) flows into
side ``p % 2`` of match (r + 1, p // 2).
"""
import re
from typing import Dict, List, Optional

from .errors import BracketInvariantError, MatchNotFound

BYE = 'BYE'

AWAITING_UPSTREAM = 'awaiting_upstream'
READY_TO_PLAY = 'ready_to_play'
COMPLETED = 'completed'
BYE_STATE = 'bye'

MATCH_STATES = (AWAITING_UPSTREAM, READY_TO_PLAY, COMPLETED, BYE_STATE)

_MATCH_ID_RE = re.compile(r"R([1-9]\d*)-M([1-9]\d*)")


def match_id_for(round_number: int, position: int) -> str:
    return f"R{round_number}-M{position + 1}"


def parse_match_id(match_id) -> Optional[tuple]:
    """Return (round_number, position) for an id like 'R2-M3', or None."""
    if not isinstance(match_id, str):
        return None
    found = _MATCH_ID_RE.fullmatch(match_id)
    if not found:
        return None
    return int(found.group(1)), int(found.group(2)) - 1


class Entrant:
    def __init__(self, entrant_id, rank, seed=None):
        self.entrant_id = entrant_id
        self.rank = rank
        self.seed = seed  # None for unseeded entrants

    def to_dict(self):
        return {'id': self.entrant_id, 'rank': self.rank, 'seed': self.seed}

    @classmethod
    def from_dict(cls, data):
        return cls(data['id'], data['rank'], data.get('seed'))

    def __eq__(self, other):
        if not isinstance(other, Entrant):
            return NotImplemented
        return (self.entrant_id, self.rank, self.seed) == (other.entrant_id, other.rank, other.seed)

    def __repr__(self):
        return f"Entrant(id={self.entrant_id!r}, rank={self.rank}, seed={self.seed})"


class Side:
    """One participant reference of a match."""

    ENTRANT = 'entrant'
    BYE = 'bye'
    PENDING = 'pending'

    def __init__(self, kind, entrant_id=None, source=None):
        self.kind = kind
        self.entrant_id = entrant_id
        self.source = source  # match id whose winner fills this side

    @classmethod
    def of(cls, entrant_id):
        if entrant_id == BYE:
            return cls.bye()
        return cls(cls.ENTRANT, entrant_id=entrant_id)

    @classmethod
    def bye(cls):
        return cls(cls.BYE)

    @classmethod
    def pending(cls, source):
        return cls(cls.PENDING, source=source)

    @property
    def is_bye(self):
        return self.kind == Side.BYE

    @property
    def is_entrant(self):
        return self.kind == Side.ENTRANT

    @property
    def is_pending(self):
        return self.kind == Side.PENDING

    def to_dict(self):
        if self.is_entrant:
            return {'kind': self.kind, 'entrant': self.entrant_id}
        if self.is_pending:
            return {'kind': self.kind, 'source': self.source}
        return {'kind': self.kind}

    @classmethod
    def from_dict(cls, data):
        kind = data['kind']
        if kind == cls.ENTRANT:
            return cls(kind, entrant_id=data['entrant'])
        if kind == cls.PENDING:
            return cls(kind, source=data['source'])
        if kind == cls.BYE:
            return cls.bye()
        raise BracketInvariantError(f"Unknown side kind {kind!r}")

    def __eq__(self, other):
        if not isinstance(other, Side):
            return NotImplemented
        return (self.kind, self.entrant_id, self.source) == (other.kind, other.entrant_id, other.source)

    def __repr__(self):
        if self.is_entrant:
            return f"Side({self.entrant_id!r})"
        if self.is_pending:
            return f"Side(winner of {self.source})"
        return "Side(BYE)"


class Match:
    def __init__(self, round_number, position, sides, state, winner=None,
                 score_a=None, score_b=None, walkover=False):
        self.round_number = round_number
        self.position = position
        self.sides = list(sides)
        self.state = state
        self.winner = winner
        self.score_a = score_a
        self.score_b = score_b
        # Completed during live play because the other side was a BYE
        self.walkover = walkover

    @property
    def match_id(self):
        return match_id_for(self.round_number, self.position)

    @property
    def side_a(self):
        return self.sides[0]

    @property
    def side_b(self):
        return self.sides[1]

    @property
    def is_resolved(self):
        return self.state in (COMPLETED, BYE_STATE)

    @property
    def loser(self):
        """The entrant knocked out here, or None for byes and open matches."""
        if self.state != COMPLETED or self.walkover:
            return None
        for side in self.sides:
            if side.is_entrant and side.entrant_id != self.winner:
                return side.entrant_id
        return None

    def to_dict(self):
        return {
            'id': self.match_id,
            'round': self.round_number,
            'position': self.position,
            'state': self.state,
            'sides': [side.to_dict() for side in self.sides],
            'winner': self.winner,
            'score_a': self.score_a,
            'score_b': self.score_b,
            'walkover': self.walkover,
        }

    @classmethod
    def from_dict(cls, data):
        state = data['state']
        if state not in MATCH_STATES:
            raise BracketInvariantError(f"Unknown match state {state!r}")
        sides = [Side.from_dict(side) for side in data['sides']]
        if len(sides) != 2:
            raise BracketInvariantError(f"Match {data.get('id')} must have exactly two sides")
        return cls(
            data['round'], data['position'], sides, state,
            winner=data.get('winner'),
            score_a=data.get('score_a'),
            score_b=data.get('score_b'),
            walkover=bool(data.get('walkover', False)),
        )

    def __repr__(self):
        return (f"Match({self.match_id}: {self.side_a!r} vs {self.side_b!r}, "
                f"state={self.state}, winner={self.winner!r})")


class BracketState:
    """Complete state of one bracket: entrants, round-1 slots and the match arena."""

    def __init__(self, draw_size: int, seed_count: int, entrants: List[Entrant],
                 slots: List, rounds: List[List[Optional[Match]]], points_by_round: Optional[Dict] = None):
        self.draw_size = draw_size
        self.seed_count = seed_count
        self.entrants = entrants
        self.slots = slots
        # rounds[r - 1][p] is match (r, p); None where BYE met BYE
        self.rounds = rounds
        # round label -> points, see knockout.points
        self.points_by_round = dict(points_by_round or {})

    @property
    def total_rounds(self) -> int:
        return len(self.rounds)

    @property
    def final(self) -> Optional[Match]:
        return self.rounds[-1][0] if self.rounds else None

    def match_at(self, round_number: int, position: int) -> Optional[Match]:
        if round_number < 1 or round_number > self.total_rounds:
            return None
        matches = self.rounds[round_number - 1]
        if position < 0 or position >= len(matches):
            return None
        return matches[position]

    def get_match(self, match_id) -> Match:
        parsed = parse_match_id(match_id)
        match = self.match_at(*parsed) if parsed else None
        if match is None:
            raise MatchNotFound(match_id)
        return match

    def parent_of(self, match: Match) -> Optional[Match]:
        """The match the winner of ``match`` advances into; None for the final."""
        return self.match_at(match.round_number + 1, match.position // 2)

    def iter_matches(self):
        for matches in self.rounds:
            for match in matches:
                if match is not None:
                    yield match

    def entrant(self, entrant_id) -> Optional[Entrant]:
        for entrant in self.entrants:
            if entrant.entrant_id == entrant_id:
                return entrant
        return None

    def to_dict(self) -> Dict:
        return {
            'draw_size': self.draw_size,
            'seed_count': self.seed_count,
            'entrants': [entrant.to_dict() for entrant in self.entrants],
            'slots': list(self.slots),
            'rounds': [
                [match.to_dict() if match is not None else None for match in matches]
                for matches in self.rounds
            ],
            'points_by_round': dict(self.points_by_round),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'BracketState':
        if not isinstance(data.get('points_by_round') or {}, dict):
            raise BracketInvariantError("Stored points by round must be a mapping")
        try:
            draw_size = data['draw_size']
            rounds = [
                [Match.from_dict(match) if match is not None else None for match in matches]
                for matches in data['rounds']
            ]
            bracket = cls(
                draw_size,
                data['seed_count'],
                [Entrant.from_dict(entrant) for entrant in data['entrants']],
                list(data['slots']),
                rounds,
                data.get('points_by_round'),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise BracketInvariantError(f"Malformed bracket state: {e}") from e

        if not isinstance(draw_size, int) or draw_size < 2:
            raise BracketInvariantError(f"Invalid stored draw size {draw_size!r}")
        if len(bracket.slots) != draw_size:
            raise BracketInvariantError(
                f"Bracket has {len(bracket.slots)} slots but draw size {draw_size}")
        expected = draw_size // 2
        for round_number, matches in enumerate(bracket.rounds, start=1):
            if len(matches) != expected:
                raise BracketInvariantError(
                    f"Round {round_number} has {len(matches)} positions, expected {expected}")
            for position, match in enumerate(matches):
                if match is not None and (match.round_number, match.position) != (round_number, position):
                    raise BracketInvariantError(f"Match {match.match_id} stored at the wrong position")
            expected //= 2
        if expected != 0:
            raise BracketInvariantError("Bracket does not end in a single final")
        return bracket

    def __repr__(self):
        return (f"BracketState(draw_size={self.draw_size}, seed_count={self.seed_count}, "
                f"entrants={len(self.entrants)}, rounds={self.total_rounds})")
