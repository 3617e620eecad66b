"""Wiring for the game library: logging setup and the :class:`GameLibrary`
object that owns one repository and one service per entity type.
"""
import logging
from typing import Any, Dict, Optional

from . import database
from .repositories import (GameCollectionRepository, GameRepository,
                           PlayerGameRepository, PlayerRepository)
from .services import (GameCollectionService, GameService, PlayerGameService,
                       PlayerService)

LOG_FORMAT = '[%(levelname)s] %(name)s: %(message)s'
FILE_LOG_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'


def setup_logging(level: str = 'WARNING',
                  log_file: Optional[str] = None) -> logging.Logger:
    """Configure the root ``gamelibrary`` logger.

    Args:
        level:    Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                  Defaults to WARNING so normal use is quiet.
        log_file: Optional path of a file that receives the same records.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, str(level).upper(), logging.WARNING)
    logger = logging.getLogger('gamelibrary')
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    if log_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        try:
            fh = logging.FileHandler(log_file)
            fh.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
            logger.addHandler(fh)
        except OSError as e:
            logger.warning("Could not create log file handler for %s: %s", log_file, e)
    logger.setLevel(numeric)
    return logger


class GameLibrary:
    """Owns the engine, repositories and services for one database.

    The four services are the public surface (``library.players``,
    ``library.games``, ``library.collections``, ``library.player_games``);
    route handlers call them directly.
    """

    def __init__(self, database_url: Optional[str] = None, engine=None) -> None:
        self._log = logging.getLogger('gamelibrary.library')
        self.engine = engine if engine is not None else database.make_engine(database_url)
        if not database.init_db(self.engine):
            raise RuntimeError("Could not initialize the game library database")
        session_factory = database.make_session_factory(self.engine)

        self.player_repository = PlayerRepository(session_factory)
        self.game_repository = GameRepository(session_factory)
        self.collection_repository = GameCollectionRepository(session_factory)
        self.player_game_repository = PlayerGameRepository(session_factory)

        self.players = PlayerService(self.player_repository)
        self.games = GameService(self.game_repository)
        self.collections = GameCollectionService(self.collection_repository,
                                                 self.players)
        self.player_games = PlayerGameService(self.player_game_repository,
                                              self.players, self.games)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'GameLibrary':
        return cls(database_url=config.get('database_url'))

    def close(self) -> None:
        self.engine.dispose()
