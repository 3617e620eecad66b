"""Business logic for player profiles (the player directory)."""
import logging
from typing import Dict, List, Optional

from ..errors import DuplicateKeyError, DuplicateUsernameError
from ..repositories.player_repository import PlayerRepository
from ..validation import validate_player


class PlayerService:
    """Creates, updates, and removes players, delegating persistence to
    :class:`~gamelibrary.repositories.player_repository.PlayerRepository`.

    Rules
    -----
    * ``username`` is unique across all players.  :meth:`save` checks it up
      front; the store's unique index catches anything that slips past.
    * :meth:`update` does not pre-check the new username, only the store
      index guards it.
    """

    def __init__(self, repository: PlayerRepository) -> None:
        self._repo = repository
        self._log = logging.getLogger('gamelibrary.service.player')

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_all(self) -> List[Dict]:
        self._log.info("Fetching all players")
        return self._repo.find_all()

    def get(self, player_id: str) -> Optional[Dict]:
        """Return the player for *player_id*, or ``None``."""
        self._log.info("Fetching player with id=%s", player_id)
        return self._repo.find_by_id(player_id)

    def get_many(self, player_ids: List[str]) -> List[Dict]:
        """Return the players that exist among *player_ids*, skipping the rest."""
        return self._repo.find_all_by_ids(player_ids)

    def exists(self, player_id: str) -> bool:
        return self._repo.exists_by_id(player_id)

    def save(self, player: Dict) -> Dict:
        """Validate and persist a new player.

        Raises:
            InvalidRecordError: a field is missing or malformed.
            DuplicateUsernameError: another player already uses the username.
        """
        record = validate_player(player)
        self._log.info("Attempting to save player: %s", record['username'])

        if self._repo.find_by_username(record['username']) is not None:
            self._log.warning("Username '%s' is already taken", record['username'])
            raise DuplicateUsernameError(
                f"Username '{record['username']}' already exists")
        try:
            return self._repo.save(record)
        except DuplicateKeyError as exc:
            raise DuplicateUsernameError(
                f"Username '{record['username']}' already exists") from exc

    def update(self, player_id: str, new_data: Dict) -> Optional[Dict]:
        """Replace every field of *player_id* except the id.

        Returns:
            The stored player, or ``None`` if *player_id* does not exist.
        """
        self._log.info("Attempting to update player with ID: %s", player_id)
        if not self._repo.exists_by_id(player_id):
            self._log.warning("Player with id=%s not found. Update skipped.", player_id)
            return None
        record = validate_player(new_data, require_id=False)
        record['id'] = player_id
        try:
            saved = self._repo.save(record)
        except DuplicateKeyError as exc:
            raise DuplicateUsernameError(
                f"Username '{record['username']}' already exists") from exc
        self._log.info("Player updated successfully: %s", saved['username'])
        return saved

    def delete(self, player_id: str) -> bool:
        """Delete a player.  Returns ``True`` if it existed.

        Collections and play-status entries that reference the player are
        left in place.
        """
        self._log.info("Attempting to delete player with id=%s", player_id)
        if self._repo.delete_by_id(player_id):
            self._log.info("Player with id=%s deleted", player_id)
            return True
        self._log.warning("Player with id=%s not found. Delete skipped.", player_id)
        return False
