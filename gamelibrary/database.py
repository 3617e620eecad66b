"""
Database models and configuration for the game library.

Each entity type lives in its own table keyed by a string id.  The tables
carry the unique constraints the services rely on, so concurrent writers that
both pass a uniqueness pre-check are still rejected by the store.
"""

import logging
import os

from sqlalchemy import (Column, Date, JSON, String, UniqueConstraint,
                        create_engine)
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger('gamelibrary.database')

DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///game_library.db')

Base = declarative_base()


class Player(Base):
    """Player profile."""
    __tablename__ = "players"

    id = Column(String(64), primary_key=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), nullable=False)
    birth_date = Column(Date, nullable=True)


class Game(Base):
    """Game metadata entry in the catalogue."""
    __tablename__ = "games"

    id = Column(String(64), primary_key=True)
    title = Column(String(500), nullable=False)
    genre = Column(String(255), nullable=False)
    platform = Column(String(20), nullable=False)  # one of PLATFORMS
    release_date = Column(Date, nullable=True)


class GameCollection(Base):
    """Named, ordered list of game ids owned by one player."""
    __tablename__ = "game_collections"
    __table_args__ = (
        UniqueConstraint('player_id', 'name_key', name='uq_collection_owner_name'),
    )

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    # Lower-cased name; backs the per-owner case-insensitive unique index.
    name_key = Column(String(255), nullable=False)
    player_id = Column(String(64), index=True, nullable=False)
    game_ids = Column(JSON, nullable=False, default=list)


class PlayerGame(Base):
    """Play status of one game for one player."""
    __tablename__ = "player_games"
    __table_args__ = (
        UniqueConstraint('player_id', 'game_id', name='uq_player_game_pair'),
    )

    id = Column(String(130), primary_key=True)  # "<player_id>-<game_id>"
    player_id = Column(String(64), index=True, nullable=False)
    game_id = Column(String(64), index=True, nullable=False)
    status = Column(String(20), nullable=False)  # one of GAME_STATUSES


def make_engine(url: str = None):
    """Create an engine for *url* (defaults to ``DATABASE_URL``).

    In-memory SQLite engines share a single connection so that every session
    sees the same database.
    """
    url = url or DATABASE_URL
    if url.startswith('sqlite') and (url in ('sqlite://', 'sqlite:///:memory:')):
        return create_engine(url, connect_args={"check_same_thread": False},
                             poolclass=StaticPool)
    if url.startswith('sqlite'):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, echo=False)


def make_session_factory(engine):
    """Return a ``sessionmaker`` bound to *engine*."""
    return sessionmaker(autocommit=False, autoflush=False,
                        expire_on_commit=False, bind=engine)


def init_db(engine) -> bool:
    """Create all tables on *engine*.  Returns ``True`` on success."""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized successfully")
        return True
    except Exception as e:
        logger.error("Failed to initialize database: %s", e)
        return False
