"""Configuration loading.

Precedence, lowest to highest: built-in defaults, an optional JSON config
file, environment variables.
"""
import json
import os
from typing import Any, Dict, Optional

DEFAULT_CONFIG: Dict[str, Any] = {
    'database_url': 'sqlite:///game_library.db',
    'log_level': 'INFO',
    'log_file': None,
    'seed': True,
    'seed_dir': None,
    'host': '127.0.0.1',
    'port': 5000,
}

_FALSE_VALUES = ('0', 'false', 'no', 'off')


def _env_bool(value: str) -> bool:
    return value.strip().lower() not in _FALSE_VALUES


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from *config_path* with environment overrides.

    Environment variables take precedence over config file values:

    - ``DATABASE_URL`` overrides ``database_url``
    - ``GAMELIB_LOG_LEVEL`` overrides ``log_level``
    - ``GAMELIB_LOG_FILE`` overrides ``log_file``
    - ``GAMELIB_SEED`` overrides ``seed`` (``0``/``false``/``no``/``off`` disable)
    - ``GAMELIB_SEED_DIR`` overrides ``seed_dir``
    - ``GAMELIB_HOST`` / ``GAMELIB_PORT`` override ``host`` / ``port``

    Raises:
        FileNotFoundError: *config_path* was given but does not exist.
        ValueError: the config file is not a JSON object.
    """
    config = dict(DEFAULT_CONFIG)

    if config_path:
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Config file '{config_path}' not found")
        with open(config_path, 'r') as f:
            try:
                loaded = json.load(f)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Config file '{config_path}' is not valid JSON: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file '{config_path}' must contain a JSON object")
        config.update(loaded)

    if os.getenv('DATABASE_URL'):
        config['database_url'] = os.getenv('DATABASE_URL')
    if os.getenv('GAMELIB_LOG_LEVEL'):
        config['log_level'] = os.getenv('GAMELIB_LOG_LEVEL')
    if os.getenv('GAMELIB_LOG_FILE'):
        config['log_file'] = os.getenv('GAMELIB_LOG_FILE')
    if os.getenv('GAMELIB_SEED') is not None:
        config['seed'] = _env_bool(os.getenv('GAMELIB_SEED'))
    if os.getenv('GAMELIB_SEED_DIR'):
        config['seed_dir'] = os.getenv('GAMELIB_SEED_DIR')
    if os.getenv('GAMELIB_HOST'):
        config['host'] = os.getenv('GAMELIB_HOST')
    if os.getenv('GAMELIB_PORT'):
        config['port'] = int(os.getenv('GAMELIB_PORT'))

    return config
