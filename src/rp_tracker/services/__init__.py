"""Services package."""

from rp_tracker.services.player_store import (
    JsonPlayerStore,
    PlayerStore,
    SqlPlayerStore,
    create_player_store,
)
from rp_tracker.services.rating_engine import ArgumentError, RatingEngine, RPChange

__all__ = [
    "ArgumentError",
    "JsonPlayerStore",
    "PlayerStore",
    "RPChange",
    "RatingEngine",
    "SqlPlayerStore",
    "create_player_store",
]
