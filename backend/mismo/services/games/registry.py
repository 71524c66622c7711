import logging
import secrets
import threading
from typing import Dict

from mismo.errors import SessionNotFound
from mismo.models import Game, MIN_PLAYERS, STARTING_LIVES

log = logging.getLogger(__name__)

EXTENSION_KEY = 'mismo_registry'


def generate_game_id(length: int = 6) -> str:
    """Generate a short, upper-case session id."""
    return secrets.token_hex((length + 1) // 2)[:length].upper()


def normalize_game_id(value) -> str:
    if value is None:
        return ''
    return str(value).strip().upper()


class GameRegistry:
    """In-process map of session id -> Game.

    The registry lock only covers the dict itself. It is never held while a
    Game's own lock is taken, so sessions never contend with each other.
    """

    def __init__(self, app=None, starting_lives: int = STARTING_LIVES,
                 min_players: int = MIN_PLAYERS, id_length: int = 6):
        self.starting_lives = starting_lives
        self.min_players = min_players
        self.id_length = id_length
        self._games: Dict[str, Game] = {}
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.starting_lives = int(app.config.get('STARTING_LIVES', self.starting_lives))
        self.min_players = int(app.config.get('MIN_PLAYERS', self.min_players))
        self.id_length = int(app.config.get('GAME_ID_LENGTH', self.id_length))
        app.extensions[EXTENSION_KEY] = self

    def create_session(self) -> Game:
        with self._lock:
            game_id = generate_game_id(self.id_length)
            while game_id in self._games:
                game_id = generate_game_id(self.id_length)
            game = Game(game_id, starting_lives=self.starting_lives, min_players=self.min_players)
            self._games[game_id] = game
        log.info('[create] game=%s', game_id)
        return game

    def lookup(self, game_id) -> Game:
        with self._lock:
            game = self._games.get(normalize_game_id(game_id))
        if game is None:
            raise SessionNotFound()
        return game

    def clear(self):
        with self._lock:
            self._games.clear()

    def __contains__(self, game_id):
        with self._lock:
            return normalize_game_id(game_id) in self._games

    def __len__(self):
        with self._lock:
            return len(self._games)
