"""Business logic for tracking which games a player has and their status."""
import logging
from typing import Dict, List, Optional

from ..errors import (DuplicateKeyError, DuplicateRelationshipError,
                      GameNotFoundError, PlayerNotFoundError)
from ..repositories.player_game_repository import PlayerGameRepository
from ..validation import validate_player_game, validate_status
from .game_service import GameService
from .player_service import PlayerService


def player_game_id(player_id: str, game_id: str) -> str:
    """Return the id of the entry linking *player_id* and *game_id*."""
    return f"{player_id}-{game_id}"


class PlayerGameService:
    """Records player-game entries and their play status, delegating
    persistence to
    :class:`~gamelibrary.repositories.player_game_repository.PlayerGameRepository`.

    Rules
    -----
    * Both the player and the game must exist when an entry is created.
    * The entry id is derived from the pair (see :func:`player_game_id`), so
      a pair can be recorded only once.  A second save raises
      :class:`~gamelibrary.errors.DuplicateRelationshipError` and keeps the
      stored status.
    * Any status may be replaced by any other status.
    """

    def __init__(self, repository: PlayerGameRepository,
                 players: PlayerService, games: GameService) -> None:
        self._repo = repository
        self._players = players
        self._games = games
        self._log = logging.getLogger('gamelibrary.service.player_game')

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_by_player(self, player_id: str) -> List[Dict]:
        self._log.info("Fetching games for playerId=%s", player_id)
        return self._repo.find_by_player(player_id)

    def list_by_game(self, game_id: str) -> List[Dict]:
        self._log.info("Fetching player-game entries for gameId=%s", game_id)
        return self._repo.find_by_game(game_id)

    def get_by_player_and_game(self, player_id: str,
                               game_id: str) -> Optional[Dict]:
        return self._repo.find_by_player_and_game(player_id, game_id)

    def players_tracking(self, game_id: str) -> List[Dict]:
        """Return the distinct players with an entry for *game_id*.

        Entries whose player has since been deleted are skipped.
        """
        self._log.info("Fetching players who are tracking gameId=%s", game_id)
        player_ids: List[str] = []
        for entry in self._repo.find_by_game(game_id):
            if entry['player_id'] not in player_ids:
                player_ids.append(entry['player_id'])
        return self._players.get_many(player_ids)

    def games_by_status(self, player_id: str, status: str) -> List[str]:
        """Return the distinct game ids *player_id* has in *status*."""
        status = validate_status(status)
        self._log.info("Fetching games for playerId=%s with status=%s",
                       player_id, status)
        game_ids: List[str] = []
        for entry in self._repo.find_by_player(player_id):
            if entry['status'] == status and entry['game_id'] not in game_ids:
                game_ids.append(entry['game_id'])
        return game_ids

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def save(self, entry: Dict) -> Dict:
        """Create a new entry for ``(player_id, game_id)``.

        Raises:
            InvalidRecordError: a field is missing or the status is unknown.
            PlayerNotFoundError: the player does not exist.
            GameNotFoundError: the game does not exist.
            DuplicateRelationshipError: the pair already has an entry.
        """
        record = validate_player_game(entry)
        player_id, game_id = record['player_id'], record['game_id']
        self._log.info("Saving game '%s' for player '%s'", game_id, player_id)

        if not self._players.exists(player_id):
            self._log.warning("Cannot save entry - playerId %s does not exist", player_id)
            raise PlayerNotFoundError(player_id, f"Player {player_id} does not exist")
        if not self._games.exists(game_id):
            self._log.warning("Cannot save entry - gameId %s does not exist", game_id)
            raise GameNotFoundError(game_id, f"Game {game_id} does not exist")

        record['id'] = player_game_id(player_id, game_id)
        if self._repo.exists_by_id(record['id']):
            self._log.warning("PlayerGame %s already exists", record['id'])
            raise DuplicateRelationshipError(
                f"Player {player_id} is already tracking game {game_id}")
        try:
            return self._repo.insert(record)
        except DuplicateKeyError as exc:
            raise DuplicateRelationshipError(
                f"Player {player_id} is already tracking game {game_id}") from exc

    def update_status(self, player_id: str, game_id: str,
                      new_status: str) -> Optional[Dict]:
        """Set the status of the entry for the pair.

        Returns:
            The stored entry, or ``None`` if the pair has no entry.
        """
        new_status = validate_status(new_status)
        self._log.info("Attempting to update status for playerId=%s and gameId=%s to %s",
                       player_id, game_id, new_status)
        existing = self._repo.find_by_player_and_game(player_id, game_id)
        if existing is None:
            self._log.warning("No PlayerGame entry found for playerId=%s and gameId=%s",
                              player_id, game_id)
            return None
        existing['status'] = new_status
        return self._repo.save(existing)

    def delete(self, entry_id: str) -> bool:
        """Delete an entry by id.  Returns ``True`` if it existed."""
        self._log.info("Attempting to delete PlayerGame with id=%s", entry_id)
        if self._repo.delete_by_id(entry_id):
            self._log.info("PlayerGame with id=%s deleted successfully", entry_id)
            return True
        self._log.warning("PlayerGame with id=%s not found. Delete operation skipped.",
                          entry_id)
        return False
