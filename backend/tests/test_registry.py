import threading

import pytest

from mismo.errors import NotFound, SessionNotFound
from mismo.models import GameState
from mismo.services.games.registry import GameRegistry, generate_game_id


def test_create_and_lookup():
    registry = GameRegistry()
    game = registry.create_session()
    assert game.state is GameState.WAITING
    assert game.players == {}
    assert registry.lookup(game.id) is game
    assert game.id in registry
    assert len(registry) == 1


def test_lookup_is_case_insensitive():
    registry = GameRegistry()
    game = registry.create_session()
    assert registry.lookup(f'  {game.id.lower()} ') is game


def test_unknown_session():
    registry = GameRegistry()
    with pytest.raises(SessionNotFound) as excinfo:
        registry.lookup('NOPE00')
    assert isinstance(excinfo.value, NotFound)
    with pytest.raises(SessionNotFound):
        registry.lookup(None)


def test_settings_flow_into_new_games():
    registry = GameRegistry(starting_lives=3, min_players=4, id_length=8)
    game = registry.create_session()
    assert len(game.id) == 8
    assert game.min_players == 4
    assert game.add_player('Alice').lives == 3


def test_generate_game_id_shape():
    game_id = generate_game_id(6)
    assert len(game_id) == 6
    assert game_id == game_id.upper()


def test_concurrent_creates_get_distinct_ids():
    registry = GameRegistry()
    created = []
    lock = threading.Lock()

    def worker():
        for _ in range(50):
            game = registry.create_session()
            with lock:
                created.append(game.id)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(created) == 400
    assert len(set(created)) == 400
    assert len(registry) == 400


def test_lookup_while_a_game_is_locked():
    registry = GameRegistry()
    busy = registry.create_session()
    other = registry.create_session()
    # Holding one game's lock must not block the registry or other games
    with busy._lock:
        assert registry.lookup(other.id) is other
        other.add_player('Alice')
    assert len(other.players) == 1


def test_init_app_reads_config(flask_app):
    from mismo import registry
    assert flask_app.extensions['mismo_registry'] is registry
    assert registry.min_players == 3
    assert registry.starting_lives == 7
