"""Services package: expose all concrete services from one import."""
from .player_service import PlayerService
from .game_service import GameService
from .collection_service import GameCollectionService
from .player_game_service import PlayerGameService, player_game_id

__all__ = [
    'PlayerService',
    'GameService',
    'GameCollectionService',
    'PlayerGameService',
    'player_game_id',
]
