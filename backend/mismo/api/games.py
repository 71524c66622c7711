from flask import Blueprint, jsonify, request, current_app
from mismo import registry, socketio
from mismo.errors import GameError, InvalidNumber


games = Blueprint('games', __name__)


# Submissions are unsigned 64-bit values
MAX_NUMBER = 2 ** 64 - 1


def parse_number(value):
    """Coerce a submitted number from JSON or form input into an int.

    Accepts ints, integral floats and digit strings up to MAX_NUMBER;
    anything else (negatives, fractions, bools, text) is rejected.
    """
    if isinstance(value, bool):
        raise InvalidNumber()
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidNumber()
        value = int(value)
    elif isinstance(value, str):
        value = value.strip()
        # isdigit() alone lets through superscripts and other non-ASCII digits
        if not (value.isascii() and value.isdigit()) or len(value) > len(str(MAX_NUMBER)):
            raise InvalidNumber()
        value = int(value)
    if not isinstance(value, int) or not 0 <= value <= MAX_NUMBER:
        raise InvalidNumber()
    return value


def clean_name(value):
    if not isinstance(value, str):
        return ''
    max_len = int(current_app.config.get('MAX_NAME_LENGTH', 24))
    return value.strip()[:max_len]


def emit_state(game):
    # Public view only: nobody else's number is ever broadcast
    socketio.emit('state_update', game.snapshot(), to=f"game:{game.id}", namespace='/ws')


@games.errorhandler(GameError)
def handle_game_error(exc):
    current_app.logger.info(f"[rejected] path={request.path} code={exc.code}")
    return jsonify(exc.to_dict()), exc.status_code


@games.route('/create', methods=['POST'])
def create_game():
    data = request.get_json(silent=True) or {}
    name = clean_name(data.get('name'))
    game = registry.create_session()
    payload = {'message': 'New game created!', 'game_id': game.id}
    # Creating with a name joins the creator as host in the same call
    if name:
        payload['player'] = game.add_player(name).to_dict()
    current_app.logger.info(f"[create] game={game.id} with_host={bool(name)}")
    return jsonify(payload), 201


@games.route('/<string:game_id>/join', methods=['POST'])
def join_game(game_id):
    data = request.get_json(silent=True) or {}
    name = clean_name(data.get('name'))

    game = registry.lookup(game_id)
    if not name:
        return jsonify({'error': 'Player name is required', 'code': 'invalid_name'}), 400
    player = game.add_player(name)
    emit_state(game)
    return jsonify(player.to_dict()), 201


@games.route('/<string:game_id>/start', methods=['POST'])
def start_game(game_id):
    data = request.get_json(silent=True) or {}
    player_id = data.get('player_id')

    game = registry.lookup(game_id)
    game.start(player_id)
    current_app.logger.info(f"[start] game={game.id} by={player_id}")
    emit_state(game)
    return jsonify(game.snapshot(player_id))


@games.route('/<string:game_id>/submit', methods=['POST'])
def submit_number(game_id):
    data = request.get_json(silent=True) or {}
    player_id = data.get('player_id')

    game = registry.lookup(game_id)
    if 'number' not in data:
        return jsonify({'error': 'Number is required', 'code': 'invalid_number'}), 400
    number = parse_number(data.get('number'))
    result = game.submit(player_id, number)
    if result is not None:
        current_app.logger.info(f"[round_resolved] game={game.id} round={result.round}")
    emit_state(game)
    return jsonify({
        'status': 'ok',
        'result': result.to_dict() if result else None,
        'state': game.snapshot(player_id),
    })


@games.route('/<string:game_id>/next-round', methods=['POST'])
def next_round(game_id):
    data = request.get_json(silent=True) or {}
    player_id = data.get('player_id')

    game = registry.lookup(game_id)
    game.next_round(player_id)
    emit_state(game)
    return jsonify(game.snapshot(player_id))


@games.route('/<string:game_id>/state', methods=['GET'])
def get_game_state(game_id):
    game = registry.lookup(game_id)
    return jsonify(game.snapshot(request.args.get('player_id')))
