#!/usr/bin/env python3
"""
Flask HTTP layer for the game library.

Maps each REST route onto exactly one service operation of the global
:class:`~gamelibrary.library.GameLibrary` and turns the library's exceptions
into JSON error responses.  No domain rules live here.
"""
import argparse
import logging
import threading
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from .config import load_config
from .errors import GameLibraryError
from .library import GameLibrary, setup_logging
from .openapi_spec import build_spec
from .seed import load_seed_data

load_dotenv()

app = Flask(__name__)
app.json.sort_keys = False

web_logger = logging.getLogger('gamelibrary.web')

# Global library instance, created on first use from the environment config.
library: Optional[GameLibrary] = None
library_lock = threading.Lock()


def get_library() -> GameLibrary:
    """Return the global library, creating it from the config if needed."""
    global library
    if library is None:
        with library_lock:
            if library is None:
                config = load_config()
                library = GameLibrary.from_config(config)
                if config.get('seed'):
                    load_seed_data(library, config.get('seed_dir'))
    return library


def _not_found(message: str):
    return jsonify({'error': message}), 404


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@app.errorhandler(GameLibraryError)
def handle_library_error(exc: GameLibraryError):
    web_logger.warning("%s %s rejected: %s", request.method, request.path, exc.message)
    return jsonify(exc.to_dict()), exc.status_code


# ---------------------------------------------------------------------------
# Health & docs
# ---------------------------------------------------------------------------

@app.route('/api/health')
def api_health():
    return jsonify({'status': 'ok'})


@app.route('/api/openapi.json')
def api_openapi_spec():
    """Serve the OpenAPI 3.0 specification as JSON."""
    server_url = request.url_root.rstrip('/')
    return jsonify(build_spec(server_url=server_url))


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

@app.route('/api/players', methods=['GET'])
def api_list_players():
    web_logger.info("Received request to get all players")
    return jsonify(get_library().players.list_all())


@app.route('/api/players/<player_id>', methods=['GET'])
def api_get_player(player_id: str):
    player = get_library().players.get(player_id)
    if player is None:
        return _not_found(f'Player {player_id} not found')
    return jsonify(player)


@app.route('/api/players', methods=['POST'])
def api_create_player():
    """Create a player.

    Body JSON: {"id", "username", "email", "birth_date": "YYYY-MM-DD"}
    """
    return jsonify(get_library().players.save(_body()))


@app.route('/api/players/<player_id>', methods=['PUT'])
def api_update_player(player_id: str):
    player = get_library().players.update(player_id, _body())
    if player is None:
        return _not_found(f'Player {player_id} not found')
    return jsonify(player)


@app.route('/api/players/<player_id>', methods=['DELETE'])
def api_delete_player(player_id: str):
    if not get_library().players.delete(player_id):
        return _not_found(f'Player {player_id} not found')
    return '', 204


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------

@app.route('/api/games', methods=['GET'])
def api_list_games():
    games = get_library().games.list_all()
    if not games:
        return '', 204
    return jsonify(games)


@app.route('/api/games/<game_id>', methods=['GET'])
def api_get_game(game_id: str):
    game = get_library().games.get(game_id)
    if game is None:
        return _not_found(f'Game {game_id} not found')
    return jsonify(game)


@app.route('/api/games', methods=['POST'])
def api_create_game():
    """Create a game.

    Body JSON: {"id", "title", "genre", "platform", "release_date": "YYYY-MM-DD"}
    """
    return jsonify(get_library().games.save(_body()))


@app.route('/api/games/<game_id>', methods=['PUT'])
def api_update_game(game_id: str):
    game = get_library().games.update(game_id, _body())
    if game is None:
        return _not_found(f'Game {game_id} not found')
    return jsonify(game)


@app.route('/api/games/<game_id>', methods=['DELETE'])
def api_delete_game(game_id: str):
    if not get_library().games.delete(game_id):
        return _not_found(f'Game {game_id} not found')
    return '', 204


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

@app.route('/api/collections', methods=['GET'])
def api_list_collections():
    collections = get_library().collections.list_all()
    if not collections:
        return '', 204
    return jsonify(collections)


@app.route('/api/collections/player/<player_id>', methods=['GET'])
def api_player_collections(player_id: str):
    return jsonify(get_library().collections.list_by_player(player_id))


@app.route('/api/collections/<collection_id>', methods=['GET'])
def api_get_collection(collection_id: str):
    collection = get_library().collections.get(collection_id)
    if collection is None:
        return _not_found(f'Collection {collection_id} not found')
    return jsonify(collection)


@app.route('/api/collections', methods=['POST'])
def api_create_collection():
    """Create a collection.

    Body JSON: {"id", "name", "player_id", "game_ids": [...]}
    """
    return jsonify(get_library().collections.save(_body()))


@app.route('/api/collections/<collection_id>/add/<game_id>', methods=['PUT'])
def api_collection_add_game(collection_id: str, game_id: str):
    collection = get_library().collections.add_game(collection_id, game_id)
    if collection is None:
        return _not_found(f'Collection {collection_id} not found')
    return jsonify(collection)


@app.route('/api/collections/<collection_id>/remove/<game_id>', methods=['PUT'])
def api_collection_remove_game(collection_id: str, game_id: str):
    collection = get_library().collections.remove_game(collection_id, game_id)
    if collection is None:
        return _not_found(f'Collection {collection_id} not found')
    return jsonify(collection)


@app.route('/api/collections/<collection_id>', methods=['DELETE'])
def api_delete_collection(collection_id: str):
    if not get_library().collections.delete(collection_id):
        return _not_found(f'Collection {collection_id} not found')
    return '', 204


# ---------------------------------------------------------------------------
# Player-games
# ---------------------------------------------------------------------------

@app.route('/api/player-games/player/<player_id>', methods=['GET'])
def api_player_games_by_player(player_id: str):
    return jsonify(get_library().player_games.list_by_player(player_id))


@app.route('/api/player-games/game/<game_id>', methods=['GET'])
def api_player_games_by_game(game_id: str):
    return jsonify(get_library().player_games.list_by_game(game_id))


@app.route('/api/player-games/lookup', methods=['GET'])
def api_player_game_lookup():
    player_id = request.args.get('player_id', '')
    game_id = request.args.get('game_id', '')
    entry = get_library().player_games.get_by_player_and_game(player_id, game_id)
    if entry is None:
        return _not_found(f'No entry for player {player_id} and game {game_id}')
    return jsonify(entry)


@app.route('/api/player-games', methods=['POST'])
def api_create_player_game():
    """Start tracking a game.

    Body JSON: {"player_id", "game_id", "status"}
    """
    entry = get_library().player_games.save(_body())
    web_logger.info("PlayerGame saved with ID: %s", entry['id'])
    return jsonify(entry)


@app.route('/api/player-games/players-by-game/<game_id>', methods=['GET'])
def api_players_by_game(game_id: str):
    return jsonify(get_library().player_games.players_tracking(game_id))


@app.route('/api/player-games/status/<player_id>', methods=['GET'])
def api_games_by_status(player_id: str):
    status = request.args.get('status')
    return jsonify(get_library().player_games.games_by_status(player_id, status))


@app.route('/api/player-games/status', methods=['PUT'])
def api_update_player_game_status():
    player_id = request.args.get('player_id', '')
    game_id = request.args.get('game_id', '')
    status = request.args.get('status')
    entry = get_library().player_games.update_status(player_id, game_id, status)
    if entry is None:
        return _not_found(f'No entry for player {player_id} and game {game_id}')
    return jsonify(entry)


@app.route('/api/player-games/<entry_id>', methods=['DELETE'])
def api_delete_player_game(entry_id: str):
    if not get_library().player_games.delete(entry_id):
        return _not_found(f'PlayerGame {entry_id} not found')
    return '', 204


def main():
    """Main entry point"""
    global library

    parser = argparse.ArgumentParser(description='Game Library REST server')
    parser.add_argument('--config', '-c', default=None,
                        help='Path to a JSON config file (optional)')
    parser.add_argument('--host', default=None, help='Interface to bind (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=None, help='Port to bind (default: 5000)')
    parser.add_argument('--no-seed', action='store_true',
                        help='Do not load the bundled seed data into empty tables')
    parser.add_argument('--log-level', default=None,
                        help='DEBUG, INFO, WARNING, ERROR or CRITICAL')
    args = parser.parse_args()

    config = load_config(args.config)
    if args.host:
        config['host'] = args.host
    if args.port:
        config['port'] = args.port
    if args.no_seed:
        config['seed'] = False
    if args.log_level:
        config['log_level'] = args.log_level

    setup_logging(config['log_level'], config.get('log_file'))
    library = GameLibrary.from_config(config)
    if config['seed']:
        load_seed_data(library, config.get('seed_dir'))

    web_logger.info("Starting Game Library on %s:%s", config['host'], config['port'])
    try:
        app.run(host=config['host'], port=config['port'], debug=False)
    finally:
        library.close()


if __name__ == "__main__":
    main()
