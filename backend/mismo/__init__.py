from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from mismo.config import Config
from mismo.services.games.registry import GameRegistry
from mismo.services.games.resolution import resolve

registry = GameRegistry()
# One worker thread per connection; game state is guarded by per-game locks
socketio = SocketIO(async_mode='threading')

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    registry.init_app(flask_app)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from mismo.main import main
    flask_app.register_blueprint(main)

    from mismo.api.games import games
    # HTTP adapter for polling clients; push clients use the /ws namespace
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Importing here ensures the handlers bind to the initialized socketio instance
    from mismo.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('resolve-round')
    @click.argument('numbers', nargs=-1, type=click.IntRange(min=0), required=True)
    def resolve_round_command(numbers):
        """Resolves one round for the given numbers and prints lives lost."""
        submissions = {f'p{i + 1}': n for i, n in enumerate(numbers)}
        result = resolve(submissions)
        for player_id, number in submissions.items():
            click.echo(f'{player_id}: {number} -> -{result.lives_lost[player_id]}')
        if result.mismo_values:
            click.echo(f"mismo: {', '.join(str(v) for v in result.mismo_values)}")

    flask_app.cli.add_command(resolve_round_command)

    return flask_app
