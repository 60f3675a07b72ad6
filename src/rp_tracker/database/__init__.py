"""Database package."""

from rp_tracker.database.engine import create_db_engine, get_session_factory, init_db
from rp_tracker.database.models import Base, PlayerRating

__all__ = [
    "Base",
    "PlayerRating",
    "create_db_engine",
    "get_session_factory",
    "init_db",
]
