"""
Game library application package.

Layered the same way throughout:

  gamelibrary/repositories/  pure I/O. One SQLAlchemy-backed repository per
                             entity type, records in and out as dicts.
  gamelibrary/services/      business logic. Validation, uniqueness and
                             referential checks, one service per entity.

``GameLibrary`` (in ``library.py``) is the integration point: it creates the
repositories and services and exposes them as public attributes
(e.g. ``library.players``).  Route handlers in ``web.py`` call these services
directly, keeping the HTTP layer separate from the domain.
"""

__version__ = '1.0.0'
