"""Business logic for per-player game collections."""
import logging
from typing import Dict, List, Optional

from ..errors import (DuplicateCollectionNameError, DuplicateKeyError,
                      PlayerNotFoundError)
from ..repositories.collection_repository import GameCollectionRepository
from ..validation import validate_collection
from .player_service import PlayerService


class GameCollectionService:
    """Creates, manages, and queries named game collections, delegating
    persistence to
    :class:`~gamelibrary.repositories.collection_repository.GameCollectionRepository`.

    Rules
    -----
    * The owning player must exist when a collection is saved.
    * A player cannot own two collections whose names differ only by case.
      Re-saving a collection under its own id does not clash with itself.
    * :meth:`add_game` and :meth:`remove_game` are idempotent.
    """

    def __init__(self, repository: GameCollectionRepository,
                 players: PlayerService) -> None:
        self._repo = repository
        self._players = players
        self._log = logging.getLogger('gamelibrary.service.collection')

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_all(self) -> List[Dict]:
        self._log.info("Fetching all game collections")
        return self._repo.find_all()

    def list_by_player(self, player_id: str) -> List[Dict]:
        self._log.info("Fetching collections for playerId=%s", player_id)
        return self._repo.find_by_player(player_id)

    def get(self, collection_id: str) -> Optional[Dict]:
        self._log.info("Fetching collection with id=%s", collection_id)
        return self._repo.find_by_id(collection_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def save(self, collection: Dict) -> Dict:
        """Validate and persist *collection* under its caller-supplied id.

        Raises:
            InvalidRecordError: a field is missing or ``game_ids`` is empty.
            PlayerNotFoundError: the owner does not exist.
            DuplicateCollectionNameError: the owner already has a collection
                with the same name, ignoring case.
        """
        record = validate_collection(collection)
        self._log.info("Attempting to save collection: %s", record['name'])

        if not self._players.exists(record['player_id']):
            self._log.warning("Cannot save collection - playerId %s does not exist",
                              record['player_id'])
            raise PlayerNotFoundError(
                record['player_id'], f"Player {record['player_id']} does not exist")

        wanted = record['name'].lower()
        clash = any(
            c['name'].lower() == wanted and c['id'] != record['id']
            for c in self._repo.find_by_player(record['player_id'])
        )
        if clash:
            self._log.warning("Collection name '%s' already exists for playerId %s",
                              record['name'], record['player_id'])
            raise DuplicateCollectionNameError(
                f"Collection name '{record['name']}' already exists for this player")
        try:
            return self._repo.save(record)
        except DuplicateKeyError as exc:
            raise DuplicateCollectionNameError(
                f"Collection name '{record['name']}' already exists for this player"
            ) from exc

    def add_game(self, collection_id: str, game_id: str) -> Optional[Dict]:
        """Append *game_id* unless it is already in the collection.

        Returns:
            The stored collection, or ``None`` if *collection_id* is unknown.
        """
        collection = self._repo.find_by_id(collection_id)
        if collection is None:
            self._log.warning("Collection with id=%s not found", collection_id)
            return None
        game_ids = list(collection['game_ids'])
        if game_id not in game_ids:
            game_ids.append(game_id)
        collection['game_ids'] = game_ids
        return self._repo.save(collection)

    def remove_game(self, collection_id: str, game_id: str) -> Optional[Dict]:
        """Remove the first occurrence of *game_id*.

        Nothing is written when the game is not in the collection.

        Returns:
            The (possibly unchanged) collection, or ``None`` if
            *collection_id* is unknown.
        """
        collection = self._repo.find_by_id(collection_id)
        if collection is None:
            self._log.warning("Collection with id=%s not found", collection_id)
            return None
        if game_id not in collection['game_ids']:
            return collection
        game_ids = list(collection['game_ids'])
        game_ids.remove(game_id)
        collection['game_ids'] = game_ids
        return self._repo.save(collection)

    def delete(self, collection_id: str) -> bool:
        """Delete a collection.  Returns ``True`` if it existed."""
        self._log.info("Attempting to delete collection with id=%s", collection_id)
        if self._repo.delete_by_id(collection_id):
            self._log.info("Collection with id=%s deleted", collection_id)
            return True
        self._log.warning("Collection with id=%s not found. Delete skipped.",
                          collection_id)
        return False
