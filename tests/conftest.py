"""Pytest fixtures for RP Tracker tests."""

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from sqlalchemy import Engine

from rp_tracker.database.engine import create_db_engine, get_session_factory, init_db
from rp_tracker.ranks.definitions import DEFAULT_RANKS
from rp_tracker.ranks.table import Rank, RankTable
from rp_tracker.schemas.players import PlayerRecord
from rp_tracker.services.player_store import JsonPlayerStore, PlayerStore, SqlPlayerStore
from rp_tracker.services.rating_engine import RatingEngine

# Set environment variables for testing
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORE_BACKEND", "json")

PLACEMENT_GAMES = 3


@pytest.fixture
def rank_table() -> RankTable:
    """Create the default rank table (Bronze 0 ... Grandmaster 3000)."""
    return RankTable(Rank.from_definition(definition) for definition in DEFAULT_RANKS)


@pytest.fixture
def players_path(tmp_path: Path) -> Path:
    """Path of a players file inside a not yet existing directory."""
    return tmp_path / "data" / "players.json"


@pytest.fixture
def json_store(players_path: Path) -> JsonPlayerStore:
    """Create an empty JSON player store."""
    return JsonPlayerStore(players_path)


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Create an in-memory SQLite engine with tables."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_store(db_engine: Engine) -> Generator[SqlPlayerStore, None, None]:
    """Create an empty SQL player store."""
    store = SqlPlayerStore(get_session_factory(db_engine))
    yield store
    store.close()


@pytest.fixture(params=["json", "sql"])
def store(request: pytest.FixtureRequest) -> PlayerStore:
    """Each player store backend in turn."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def engine(rank_table: RankTable, store: PlayerStore) -> RatingEngine:
    """Create a rating engine over each store backend."""
    return RatingEngine(rank_table, store, placement_games=PLACEMENT_GAMES)


@pytest.fixture
def seed_player(store: PlayerStore) -> Callable[..., None]:
    """Store a player record in the current backend and flush it."""

    def _seed(name: str, rp: int, placement_games: int = 0, protected: bool = False) -> None:
        store.set(
            name,
            PlayerRecord(rp=rp, placement_games=placement_games, protected=protected),
        )
        store.save()

    return _seed
