"""Repository for player profiles."""
from typing import Dict, Optional

from .. import database
from ..validation import parse_date
from .base import BaseRepository


class PlayerRepository(BaseRepository):
    """Persists players to the ``players`` table.

    Schema::

        {
            "id":         "<str>",
            "username":   "<str, unique>",
            "email":      "<str>",
            "birth_date": "<YYYY-MM-DD or null>"
        }
    """

    model = database.Player

    def find_by_username(self, username: str) -> Optional[Dict]:
        """Return the player with *username*, or ``None``."""
        return self.find_one_by(username=username)

    def _to_dict(self, row) -> Dict:
        return {
            'id': row.id,
            'username': row.username,
            'email': row.email,
            'birth_date': row.birth_date.isoformat() if row.birth_date else None,
        }

    def _to_row(self, record: Dict):
        return database.Player(
            id=record['id'],
            username=record['username'],
            email=record['email'],
            birth_date=parse_date(record.get('birth_date')),
        )
