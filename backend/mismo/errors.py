"""Rejected outcomes of game operations.

Every public operation on a Game or the session registry either succeeds or
raises one of these. They are answers to a single caller, never retried, and
carry a stable ``code`` plus the HTTP status the API renders them with.
"""


class GameError(Exception):
    code = 'game_error'
    status_code = 400
    message = 'Request rejected'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self):
        return {'error': self.message, 'code': self.code}


# ---- Taxonomy ----

class NotFound(GameError):
    code = 'not_found'
    status_code = 404
    message = 'Not found'


class InvalidPhase(GameError):
    code = 'invalid_phase'
    status_code = 409
    message = 'Not allowed in the current phase'


class Unauthorized(GameError):
    code = 'unauthorized'
    status_code = 403
    message = 'Not allowed for this player'


class PreconditionFailed(GameError):
    code = 'precondition_failed'
    status_code = 400
    message = 'Precondition failed'


# ---- Named rejections ----

class SessionNotFound(NotFound):
    code = 'session_not_found'
    message = 'Game not found'


class PlayerNotFound(NotFound):
    code = 'player_not_found'
    message = 'Player not found in this game'


class GameAlreadyStarted(InvalidPhase):
    code = 'game_already_started'
    message = 'Game has already started'


class NotPlaying(InvalidPhase):
    code = 'not_playing'
    message = 'Numbers can only be submitted while a round is in play'


class RoundNotComplete(InvalidPhase):
    code = 'round_not_complete'
    message = 'Round not completed yet'


class GameOver(InvalidPhase):
    code = 'game_over'
    message = 'Game is already over'


class NotHost(Unauthorized):
    code = 'not_host'
    message = 'Only the host can do that'


class TooFewPlayers(PreconditionFailed):
    code = 'too_few_players'

    def __init__(self, min_players):
        super().__init__(f'At least {min_players} players are required to start')
        self.min_players = min_players


class PlayerEliminated(PreconditionFailed):
    code = 'player_eliminated'
    message = 'Player is eliminated'


class AlreadySubmitted(PreconditionFailed):
    code = 'already_submitted'
    message = 'Already submitted a number this round'


class InvalidNumber(PreconditionFailed):
    code = 'invalid_number'
    message = 'Number must be a non-negative integer'
