"""
Error types raised by the bracket engine.

Every BracketError is an expected validation condition that the service layer
can report back to the user; ``http_status`` is the suggested response code.
"""


class BracketError(Exception):
    http_status = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidConfiguration(BracketError):
    http_status = 422


class DuplicateEntrant(BracketError):
    http_status = 422

    def __init__(self, entrant_id):
        super().__init__(f"Entrant {entrant_id!r} appears more than once in the ranking")
        self.entrant_id = entrant_id


class InvalidScore(BracketError):
    http_status = 422


class MatchNotFound(BracketError):
    http_status = 404

    def __init__(self, match_id):
        super().__init__(f"Match {match_id!r} not found")
        self.match_id = match_id


class MatchAlreadyCompleted(BracketError):
    http_status = 409

    def __init__(self, match_id):
        super().__init__(f"Match {match_id} is already completed")
        self.match_id = match_id


class MatchIsBye(BracketError):
    http_status = 409

    def __init__(self, match_id):
        super().__init__(f"Match {match_id} is a BYE and does not take scores")
        self.match_id = match_id


class MatchNotReady(BracketError):
    http_status = 409

    def __init__(self, match_id):
        super().__init__(f"Match {match_id} is still waiting for an upstream winner")
        self.match_id = match_id


class AdvancementNotPending(BracketError):
    http_status = 409

    def __init__(self, match_id):
        super().__init__(f"Match {match_id} has no held winner to advance")
        self.match_id = match_id


class BracketAlreadyExists(BracketError):
    http_status = 409

    def __init__(self, file_path):
        super().__init__(f"A bracket is already stored at {file_path}")
        self.file_path = file_path


class BracketInvariantError(RuntimeError):
    """Structural corruption of bracket state. Never raised for user input."""
