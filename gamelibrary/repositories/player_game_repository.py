"""Repository for player-game play-status entries."""
from typing import Dict, List, Optional

from .. import database
from .base import BaseRepository


class PlayerGameRepository(BaseRepository):
    """Persists player-game entries to the ``player_games`` table.

    Schema::

        {
            "id":        "<player_id>-<game_id>",
            "player_id": "<str>",
            "game_id":   "<str>",
            "status":    "NOT_STARTED" | "PLAYING" | "COMPLETED" | "ABANDONED"
        }
    """

    model = database.PlayerGame

    def find_by_player(self, player_id: str) -> List[Dict]:
        return self.find_by(player_id=player_id)

    def find_by_game(self, game_id: str) -> List[Dict]:
        return self.find_by(game_id=game_id)

    def find_by_player_and_game(self, player_id: str,
                                game_id: str) -> Optional[Dict]:
        return self.find_one_by(player_id=player_id, game_id=game_id)

    def _to_dict(self, row) -> Dict:
        return {
            'id': row.id,
            'player_id': row.player_id,
            'game_id': row.game_id,
            'status': row.status,
        }

    def _to_row(self, record: Dict):
        return database.PlayerGame(
            id=record['id'],
            player_id=record['player_id'],
            game_id=record['game_id'],
            status=record['status'],
        )
