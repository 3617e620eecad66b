"""Field validation for incoming records.

Every ``validate_*`` function returns a normalised copy of the record (dates
as ISO strings, unknown keys dropped) or raises
:class:`~gamelibrary.errors.InvalidRecordError` listing every bad field.
"""
import datetime
import re
from typing import Any, Dict, Optional

from .errors import InvalidRecordError

PLATFORMS = ('PC', 'PS5', 'XBOX', 'SWITCH', 'ANDROID', 'IOS')
GAME_STATUSES = ('NOT_STARTED', 'PLAYING', 'COMPLETED', 'ABANDONED')

_EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def is_valid_email(value: str) -> bool:
    """Return True if *value* has the ``local@domain.tld`` shape."""
    return bool(value) and bool(_EMAIL_RE.match(value))


def parse_date(value: Any) -> Optional[datetime.date]:
    """Parse an ISO ``YYYY-MM-DD`` string (or pass a date through).

    Returns ``None`` when *value* cannot be interpreted as a date.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            return datetime.date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _require_text(data: Dict, field: str, errors: Dict[str, str]) -> None:
    if _blank(data.get(field)):
        errors[field] = 'must not be blank'


def validate_player(data: Dict, require_id: bool = True,
                    today: Optional[datetime.date] = None) -> Dict:
    """Validate a player record."""
    data = data or {}
    today = today or datetime.date.today()
    errors: Dict[str, str] = {}
    if require_id:
        _require_text(data, 'id', errors)
    _require_text(data, 'username', errors)

    email = data.get('email')
    if _blank(email):
        errors['email'] = 'must not be blank'
    elif not is_valid_email(email.strip()):
        errors['email'] = 'must be a well-formed email address'

    birth_date = None
    if data.get('birth_date') is not None:
        birth_date = parse_date(data.get('birth_date'))
        if birth_date is None:
            errors['birth_date'] = 'must be a date in YYYY-MM-DD format'
        elif birth_date >= today:
            errors['birth_date'] = 'must be a past date'

    if errors:
        raise InvalidRecordError(errors)
    return {
        'id': data['id'].strip() if require_id else data.get('id'),
        'username': data['username'].strip(),
        'email': email.strip(),
        'birth_date': birth_date.isoformat() if birth_date else None,
    }


def validate_game(data: Dict, require_id: bool = True,
                  today: Optional[datetime.date] = None) -> Dict:
    """Validate a game record."""
    data = data or {}
    today = today or datetime.date.today()
    errors: Dict[str, str] = {}
    if require_id:
        _require_text(data, 'id', errors)
    _require_text(data, 'title', errors)
    _require_text(data, 'genre', errors)

    platform = data.get('platform')
    if platform is None:
        errors['platform'] = 'must not be null'
    elif platform not in PLATFORMS:
        errors['platform'] = 'must be one of ' + ', '.join(PLATFORMS)

    release_date = None
    if data.get('release_date') is not None:
        release_date = parse_date(data.get('release_date'))
        if release_date is None:
            errors['release_date'] = 'must be a date in YYYY-MM-DD format'
        elif release_date > today:
            errors['release_date'] = 'must be a date in the past or in the present'

    if errors:
        raise InvalidRecordError(errors)
    return {
        'id': data['id'].strip() if require_id else data.get('id'),
        'title': data['title'].strip(),
        'genre': data['genre'].strip(),
        'platform': platform,
        'release_date': release_date.isoformat() if release_date else None,
    }


def validate_collection(data: Dict) -> Dict:
    """Validate a game collection record.  ``game_ids`` must be non-empty."""
    data = data or {}
    errors: Dict[str, str] = {}
    _require_text(data, 'id', errors)
    _require_text(data, 'name', errors)
    _require_text(data, 'player_id', errors)

    game_ids = data.get('game_ids')
    if not isinstance(game_ids, list) or not game_ids:
        errors['game_ids'] = 'must not be empty'
    elif any(_blank(g) for g in game_ids):
        errors['game_ids'] = 'must contain only non-blank game ids'

    if errors:
        raise InvalidRecordError(errors)
    return {
        'id': data['id'].strip(),
        'name': data['name'].strip(),
        'player_id': data['player_id'].strip(),
        'game_ids': [g.strip() for g in game_ids],
    }


def validate_status(status: Any) -> str:
    """Return *status* if it is one of :data:`GAME_STATUSES`."""
    if status not in GAME_STATUSES:
        raise InvalidRecordError(
            {'status': 'must be one of ' + ', '.join(GAME_STATUSES)})
    return status


def validate_player_game(data: Dict) -> Dict:
    """Validate a player-game entry.  Any supplied ``id`` is discarded."""
    data = data or {}
    errors: Dict[str, str] = {}
    _require_text(data, 'player_id', errors)
    _require_text(data, 'game_id', errors)
    status = data.get('status')
    if status is None:
        errors['status'] = 'must not be null'
    elif status not in GAME_STATUSES:
        errors['status'] = 'must be one of ' + ', '.join(GAME_STATUSES)

    if errors:
        raise InvalidRecordError(errors)
    return {
        'player_id': data['player_id'].strip(),
        'game_id': data['game_id'].strip(),
        'status': status,
    }
