import functools
import threading
from typing import Any, Dict

from flask import current_app, request
from flask_socketio import emit, join_room

from mismo import registry, socketio
from mismo.api.games import clean_name, emit_state, parse_number
from mismo.errors import GameError

NAMESPACE = '/ws'

# Connection bookkeeping only; losing a socket never changes game state
_sid_to_ctx: Dict[str, Dict[str, Any]] = {}
_sid_lock = threading.Lock()


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _bind(game_id: str, player_id: str) -> None:
    with _sid_lock:
        _sid_to_ctx[_get_sid()] = {'game_id': game_id, 'player_id': player_id}


def _current_ctx():
    with _sid_lock:
        return _sid_to_ctx.get(_get_sid())


def reports_rejections(handler):
    """Turn a GameError raised by a handler into an ``error`` event for the sender."""
    @functools.wraps(handler)
    def wrapper(*args, **kwargs):
        try:
            return handler(*args, **kwargs)
        except GameError as exc:
            current_app.logger.info(f"[rejected] sid={_get_sid()} code={exc.code}")
            emit('error', exc.to_dict())
    return wrapper


def requires_player(handler):
    @functools.wraps(handler)
    def wrapper(*args, **kwargs):
        ctx = _current_ctx()
        if not ctx:
            emit('error', {'error': 'Join a game first', 'code': 'not_joined'})
            return
        game = registry.lookup(ctx['game_id'])
        return handler(game, ctx['player_id'], *args, **kwargs)
    return wrapper


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(reason=None):
    with _sid_lock:
        ctx = _sid_to_ctx.pop(_get_sid(), None)
    if ctx:
        # The player stays in the game; the round waits for them as usual
        current_app.logger.info(f"[disconnect] game={ctx['game_id']} player={ctx['player_id']}")


@reports_rejections
def handle_join_game(data):
    data = data or {}
    if _current_ctx():
        # One player per socket; a second join would orphan the first player
        emit('error', {'error': 'This connection already joined a game', 'code': 'already_joined'})
        return
    if not data.get('game_id'):
        emit('error', {'error': 'game_id is required', 'code': 'invalid_request'})
        return
    game = registry.lookup(data['game_id'])
    name = clean_name(data.get('name'))
    if not name:
        emit('error', {'error': 'Player name is required', 'code': 'invalid_name'})
        return
    player = game.add_player(name)
    join_room(f"game:{game.id}")
    _bind(game.id, player.id)
    emit('joined', {'game_id': game.id, 'player': player.to_dict()})
    emit_state(game)


@reports_rejections
def handle_watch_game(data):
    """Subscribe this socket to pushes for a player who joined over HTTP."""
    data = data or {}
    game = registry.lookup(data.get('game_id'))
    snapshot = game.snapshot(data.get('player_id'))
    if not any(p['id'] == data.get('player_id') for p in snapshot['players']):
        emit('error', {'error': 'Player not found in this game', 'code': 'player_not_found'})
        return
    join_room(f"game:{game.id}")
    _bind(game.id, data['player_id'])
    emit('state_update', snapshot)


@reports_rejections
@requires_player
def handle_start_game(game, player_id, data=None):
    game.start(player_id)
    current_app.logger.info(f"[start] game={game.id} by={player_id}")
    emit_state(game)


@reports_rejections
@requires_player
def handle_submit_number(game, player_id, data=None):
    number = parse_number((data or {}).get('number'))
    result = game.submit(player_id, number)
    emit('submitted', {'number': number})
    if result is not None:
        current_app.logger.info(f"[round_resolved] game={game.id} round={result.round}")
    emit_state(game)


@reports_rejections
@requires_player
def handle_next_round(game, player_id, data=None):
    game.next_round(player_id)
    emit_state(game)


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on the '/ws' namespace."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('join_game', handle_join_game, namespace=NAMESPACE)
    socketio.on_event('watch_game', handle_watch_game, namespace=NAMESPACE)
    socketio.on_event('start_game', handle_start_game, namespace=NAMESPACE)
    socketio.on_event('submit_number', handle_submit_number, namespace=NAMESPACE)
    socketio.on_event('next_round', handle_next_round, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)
