import enum
import logging
import threading
import uuid

from mismo.errors import (
    AlreadySubmitted,
    GameAlreadyStarted,
    GameOver,
    InvalidNumber,
    NotHost,
    NotPlaying,
    PlayerEliminated,
    PlayerNotFound,
    RoundNotComplete,
    TooFewPlayers,
)
from mismo.services.games.resolution import resolve

log = logging.getLogger(__name__)

STARTING_LIVES = 7
MIN_PLAYERS = 3


class GameState(str, enum.Enum):
    WAITING = 'waiting'
    PLAYING = 'playing'
    ROUND_END = 'round_end'
    GAME_OVER = 'game_over'


class Player:
    def __init__(self, name, is_host=False, lives=STARTING_LIVES, player_id=None):
        self.id = player_id or uuid.uuid4().hex
        self.name = name
        self.lives = lives
        self.is_host = is_host
        # None means "no submission this round"; 0 is a real submission
        self.submitted_number = None

    @property
    def has_submitted(self):
        return self.submitted_number is not None

    @property
    def eliminated(self):
        return self.lives <= 0

    def to_dict(self, include_number=False):
        data = {
            'id': self.id,
            'name': self.name,
            'lives': self.lives,
            'eliminated': self.eliminated,
            'is_host': self.is_host,
            'has_submitted': self.has_submitted,
        }
        if include_number:
            data['number'] = self.submitted_number
        return data

    def __repr__(self):
        return f'<Player {self.name!r} lives={self.lives}>'


def _is_valid_number(number):
    return isinstance(number, int) and not isinstance(number, bool) and number >= 0


class Game:
    """One Mismo session.

    Every public method takes the game's lock for its whole duration, so a
    caller never sees a half-recorded submission or a half-resolved round.
    The lock is not re-entrant: public methods must not call each other.
    """

    def __init__(self, game_id, starting_lives=STARTING_LIVES, min_players=MIN_PLAYERS):
        self.id = game_id
        self.starting_lives = starting_lives
        self.min_players = min_players
        self.players = {}
        self.state = GameState.WAITING
        self.round = 1
        self.last_result = None
        self.winner = None
        self._lock = threading.Lock()

    # ---- Lobby ----

    def add_player(self, name):
        with self._lock:
            if self.state is not GameState.WAITING:
                raise GameAlreadyStarted()
            player = Player(name, is_host=not self.players, lives=self.starting_lives)
            self.players[player.id] = player
            log.info('[join] game=%s player=%s host=%s', self.id, player.id, player.is_host)
            return player

    def start(self, player_id):
        with self._lock:
            player = self._get_player(player_id)
            if not player.is_host:
                raise NotHost('Only the host can start the game')
            if self.state is not GameState.WAITING:
                raise GameAlreadyStarted()
            if len(self.players) < self.min_players:
                raise TooFewPlayers(self.min_players)
            self.state = GameState.PLAYING
            log.info('[start] game=%s players=%d', self.id, len(self.players))

    # ---- Rounds ----

    def submit(self, player_id, number):
        """Record a number; resolve the round if it was the last one missing.

        Returns the RoundResult when this submission closed the round,
        otherwise None.
        """
        with self._lock:
            if self.state is not GameState.PLAYING:
                raise NotPlaying()
            player = self._get_player(player_id)
            if player.eliminated:
                raise PlayerEliminated()
            if player.has_submitted:
                raise AlreadySubmitted()
            if not _is_valid_number(number):
                raise InvalidNumber()
            player.submitted_number = number

            if any(not p.has_submitted for p in self._active_players()):
                return None

            result = self._resolve_round()
            if self.state is not GameState.GAME_OVER:
                self.state = GameState.ROUND_END
            return result

    def next_round(self, player_id):
        with self._lock:
            player = self._get_player(player_id)
            if not player.is_host:
                raise NotHost('Only the host can start the next round')
            if self.state is GameState.GAME_OVER:
                raise GameOver()
            if self.state is not GameState.ROUND_END:
                raise RoundNotComplete()
            self.round += 1
            self.state = GameState.PLAYING
            self.last_result = None
            log.info('[next_round] game=%s round=%d', self.id, self.round)

    def _resolve_round(self):
        # Only reachable from submit() once every active player has a number,
        # and submit() leaves PLAYING straight after, so this runs once per round.
        submissions = {
            p.id: p.submitted_number for p in self._active_players()
        }
        assert self.state is GameState.PLAYING and submissions, 'resolution outside a full round'

        result = resolve(submissions, round_number=self.round)
        for player_id, lost in result.lives_lost.items():
            player = self.players[player_id]
            player.lives = max(0, player.lives - lost)
            if player.eliminated:
                result.eliminated.append(player_id)

        for player in self.players.values():
            player.submitted_number = None

        self.last_result = result
        survivors = self._active_players()
        log.info(
            '[resolve] game=%s round=%d lost=%s eliminated=%s',
            self.id, self.round, result.lives_lost, result.eliminated,
        )
        if len(survivors) <= 1:
            self.state = GameState.GAME_OVER
            self.winner = survivors[0].id if survivors else None
            log.info('[game_over] game=%s winner=%s', self.id, self.winner)
        return result

    # ---- Read side ----

    def snapshot(self, viewer_id=None):
        with self._lock:
            viewer = self.players.get(viewer_id)
            winner = self.players.get(self.winner)
            return {
                'id': self.id,
                'state': self.state.value,
                'round': self.round,
                'min_players': self.min_players,
                'player_count': len(self.players),
                'players': [
                    p.to_dict(include_number=(p.id == viewer_id))
                    for p in self.players.values()
                ],
                'is_host': bool(viewer and viewer.is_host),
                'winner': winner.to_dict() if winner else None,
                'last_result': self.last_result.to_dict() if self.last_result else None,
            }

    # ---- Helpers (caller holds the lock) ----

    def _get_player(self, player_id):
        player = self.players.get(player_id)
        if player is None:
            raise PlayerNotFound()
        return player

    def _active_players(self):
        return [p for p in self.players.values() if not p.eliminated]

    def __repr__(self):
        return f'<Game {self.id} {self.state.value} round={self.round}>'
