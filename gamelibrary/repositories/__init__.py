"""Repository package: expose all concrete repositories from one import."""
from .player_repository import PlayerRepository
from .game_repository import GameRepository
from .collection_repository import GameCollectionRepository
from .player_game_repository import PlayerGameRepository

__all__ = [
    'PlayerRepository',
    'GameRepository',
    'GameCollectionRepository',
    'PlayerGameRepository',
]
