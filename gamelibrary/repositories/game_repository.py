"""Repository for catalogue games."""
from typing import Dict

from .. import database
from ..validation import parse_date
from .base import BaseRepository


class GameRepository(BaseRepository):
    """Persists games to the ``games`` table.

    Schema::

        {
            "id":           "<str>",
            "title":        "<str>",
            "genre":        "<str>",
            "platform":     "PC" | "PS5" | "XBOX" | "SWITCH" | "ANDROID" | "IOS",
            "release_date": "<YYYY-MM-DD or null>"
        }
    """

    model = database.Game

    def _to_dict(self, row) -> Dict:
        return {
            'id': row.id,
            'title': row.title,
            'genre': row.genre,
            'platform': row.platform,
            'release_date': row.release_date.isoformat() if row.release_date else None,
        }

    def _to_row(self, record: Dict):
        return database.Game(
            id=record['id'],
            title=record['title'],
            genre=record['genre'],
            platform=record['platform'],
            release_date=parse_date(record.get('release_date')),
        )
