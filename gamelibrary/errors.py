"""Exceptions raised by the game library services and repositories.

``status_code`` is only read by the web layer when it turns an exception into
an HTTP response.
"""
from typing import Dict, Optional


class GameLibraryError(Exception):
    """Base class for every rule violation reported by the library."""

    status_code = 400

    def __init__(self, message: str = '') -> None:
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__

    def to_dict(self) -> Dict:
        return {'error': self.message}


class InvalidRecordError(GameLibraryError):
    """One or more fields failed validation."""

    def __init__(self, errors: Dict[str, str]) -> None:
        super().__init__('Validation failed: ' + ', '.join(
            f'{field} {msg}' for field, msg in sorted(errors.items())))
        self.errors = dict(errors)

    def to_dict(self) -> Dict:
        return dict(self.errors)


class MissingReferenceError(GameLibraryError):
    """A referenced record does not exist."""

    def __init__(self, ref_id: Optional[str] = None, message: str = '') -> None:
        super().__init__(message)
        self.ref_id = ref_id


class PlayerNotFoundError(MissingReferenceError):
    """Player does not exist"""


class GameNotFoundError(MissingReferenceError):
    """Game does not exist"""


class ConflictError(GameLibraryError):
    """The write would break a uniqueness rule."""

    status_code = 409


class DuplicateUsernameError(ConflictError):
    """Username already exists"""


class DuplicateCollectionNameError(ConflictError):
    """Collection name already exists for this player"""


class DuplicateRelationshipError(ConflictError):
    """Player is already tracking this game"""


class DuplicateKeyError(Exception):
    """The store rejected a write because of a unique constraint."""
