"""Repository base class used by all concrete repositories."""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError

from ..errors import DuplicateKeyError


class BaseRepository:
    """Provides keyed document-style persistence for a single table.

    Records go in and come out as plain dicts.  Sub-classes set :attr:`model`
    and implement :meth:`_to_dict` / :meth:`_to_row`; everything else
    (lookup, upsert, delete, equality filters) lives here.

    Each call runs in its own session: committed on success, rolled back on
    error, always closed.  A unique-constraint violation is re-raised as
    :class:`~gamelibrary.errors.DuplicateKeyError` so callers never see
    SQLAlchemy exceptions.
    """

    model: Any = None

    def __init__(self, session_factory) -> None:
        self._session_factory = session_factory
        self._log = logging.getLogger(f'gamelibrary.repository.{type(self).__name__}')

    @contextmanager
    def _session(self):
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            self._log.warning("Constraint violation on %s: %s",
                              self.model.__tablename__, exc.orig)
            raise DuplicateKeyError(str(exc.orig)) from exc
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # ------------------------------------------------------------------
    # Mapping hooks
    # ------------------------------------------------------------------

    def _to_dict(self, row) -> Dict:
        raise NotImplementedError

    def _to_row(self, record: Dict):
        raise NotImplementedError

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def find_all(self) -> List[Dict]:
        with self._session() as db:
            return [self._to_dict(r) for r in db.query(self.model).all()]

    def find_by_id(self, record_id: str) -> Optional[Dict]:
        """Return the record stored under *record_id*, or ``None``."""
        with self._session() as db:
            row = db.get(self.model, record_id)
            return self._to_dict(row) if row is not None else None

    def find_all_by_ids(self, record_ids: Iterable[str]) -> List[Dict]:
        """Return the records for *record_ids* that exist, in the given order."""
        ids = list(record_ids)
        if not ids:
            return []
        with self._session() as db:
            rows = db.query(self.model).filter(self.model.id.in_(ids)).all()
            by_id = {r.id: self._to_dict(r) for r in rows}
        return [by_id[i] for i in ids if i in by_id]

    def exists_by_id(self, record_id: str) -> bool:
        with self._session() as db:
            return db.get(self.model, record_id) is not None

    def find_by(self, **filters) -> List[Dict]:
        """Return every record whose columns equal the given keyword values."""
        with self._session() as db:
            rows = db.query(self.model).filter_by(**filters).all()
            return [self._to_dict(r) for r in rows]

    def find_one_by(self, **filters) -> Optional[Dict]:
        with self._session() as db:
            row = db.query(self.model).filter_by(**filters).first()
            return self._to_dict(row) if row is not None else None

    def count(self) -> int:
        with self._session() as db:
            return db.query(self.model).count()

    def save(self, record: Dict) -> Dict:
        """Insert or replace the record keyed by ``record['id']``, then return it."""
        with self._session() as db:
            row = db.merge(self._to_row(record))
            db.flush()
            saved = self._to_dict(row)
        self._log.debug("Saved %s %s", self.model.__tablename__, saved['id'])
        return saved

    def insert(self, record: Dict) -> Dict:
        """Insert a new record.  An existing id is a constraint violation."""
        with self._session() as db:
            row = self._to_row(record)
            db.add(row)
            db.flush()
            saved = self._to_dict(row)
        self._log.debug("Inserted %s %s", self.model.__tablename__, saved['id'])
        return saved

    def save_all(self, records: Iterable[Dict]) -> int:
        """Upsert every record in a single transaction.  Returns how many."""
        count = 0
        with self._session() as db:
            for record in records:
                db.merge(self._to_row(record))
                count += 1
        return count

    def delete_by_id(self, record_id: str) -> bool:
        """Remove the record for *record_id*.  Returns ``True`` if it existed."""
        with self._session() as db:
            row = db.get(self.model, record_id)
            if row is None:
                return False
            db.delete(row)
        return True
