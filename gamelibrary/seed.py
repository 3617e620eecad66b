"""Startup data seeding from bundled JSON files.

Each table is filled only while it is empty, so restarting the server never
duplicates or overwrites data.  Records go straight to the repositories; the
bundled files are trusted.
"""
import json
import logging
import os
from typing import Dict, Optional

logger = logging.getLogger('gamelibrary.seed')

DEFAULT_SEED_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')

# (entity label, file name, GameLibrary repository attribute), in load order.
SEED_FILES = (
    ('players', 'players.json', 'player_repository'),
    ('games', 'games.json', 'game_repository'),
    ('collections', 'collections.json', 'collection_repository'),
    ('player_games', 'player_games.json', 'player_game_repository'),
)


def _read_records(path: str):
    with open(path, 'r', encoding='utf-8') as fh:
        records = json.load(fh)
    if not isinstance(records, list):
        raise ValueError(f"Seed file {path} must contain a JSON array")
    return records


def load_seed_data(library, seed_dir: Optional[str] = None) -> Dict[str, int]:
    """Insert bundled records into every empty table of *library*.

    Args:
        library:  A :class:`~gamelibrary.library.GameLibrary`.
        seed_dir: Directory holding the seed files (defaults to the bundled
                  ``gamelibrary/data``).

    Returns:
        ``{entity: inserted_count}``; ``0`` for skipped entities.
    """
    seed_dir = seed_dir or DEFAULT_SEED_DIR
    inserted: Dict[str, int] = {}
    for label, file_name, repo_attr in SEED_FILES:
        repo = getattr(library, repo_attr)
        inserted[label] = 0
        if repo.count() > 0:
            logger.info("%s already exist, skipping %s", label.capitalize(), file_name)
            continue
        path = os.path.join(seed_dir, file_name)
        if not os.path.exists(path):
            logger.warning("Seed file %s not found, skipping %s", path, label)
            continue
        logger.info("No %s found, loading %s...", label, file_name)
        inserted[label] = repo.save_all(_read_records(path))
        logger.info("Loaded %d %s", inserted[label], label)
    logger.info("Data loading completed.")
    return inserted
