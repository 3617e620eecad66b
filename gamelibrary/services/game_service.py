"""Business logic for the game catalogue."""
import logging
from typing import Dict, List, Optional

from ..repositories.game_repository import GameRepository
from ..validation import validate_game


class GameService:
    """Lists, stores, and removes catalogue games.  No field is unique apart
    from the id, so this is a thin validating wrapper around
    :class:`~gamelibrary.repositories.game_repository.GameRepository`.
    """

    def __init__(self, repository: GameRepository) -> None:
        self._repo = repository
        self._log = logging.getLogger('gamelibrary.service.game')

    def list_all(self) -> List[Dict]:
        self._log.info("Fetching all games")
        return self._repo.find_all()

    def get(self, game_id: str) -> Optional[Dict]:
        self._log.info("Fetching game with id=%s", game_id)
        return self._repo.find_by_id(game_id)

    def exists(self, game_id: str) -> bool:
        return self._repo.exists_by_id(game_id)

    def save(self, game: Dict) -> Dict:
        record = validate_game(game)
        self._log.info("Saving game: %s", record['title'])
        return self._repo.save(record)

    def update(self, game_id: str, new_data: Dict) -> Optional[Dict]:
        """Replace title, genre, platform and release date of *game_id*.

        Returns:
            The stored game, or ``None`` if *game_id* does not exist.
        """
        self._log.info("Attempting to update game with ID: %s", game_id)
        if not self._repo.exists_by_id(game_id):
            self._log.warning("Game with id=%s not found. Update skipped.", game_id)
            return None
        record = validate_game(new_data, require_id=False)
        record['id'] = game_id
        return self._repo.save(record)

    def delete(self, game_id: str) -> bool:
        self._log.info("Attempting to delete game with id=%s", game_id)
        if self._repo.delete_by_id(game_id):
            self._log.info("Game with id=%s deleted", game_id)
            return True
        self._log.warning("Game with id=%s not found. Delete skipped.", game_id)
        return False
