"""Repository for named game collections ({id, name, player_id, game_ids})."""
from typing import Dict, List

from .. import database
from .base import BaseRepository


class GameCollectionRepository(BaseRepository):
    """Persists game collections to the ``game_collections`` table.

    Schema::

        {
            "id":        "<str>",
            "name":      "<str, unique per player ignoring case>",
            "player_id": "<owner player id>",
            "game_ids":  ["<game_id>", ...]
        }
    """

    model = database.GameCollection

    def find_by_player(self, player_id: str) -> List[Dict]:
        return self.find_by(player_id=player_id)

    def _to_dict(self, row) -> Dict:
        return {
            'id': row.id,
            'name': row.name,
            'player_id': row.player_id,
            'game_ids': list(row.game_ids or []),
        }

    def _to_row(self, record: Dict):
        return database.GameCollection(
            id=record['id'],
            name=record['name'],
            name_key=record['name'].lower(),
            player_id=record['player_id'],
            game_ids=list(record.get('game_ids') or []),
        )
