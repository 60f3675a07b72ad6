"""Tests for database engine helpers."""

from pathlib import Path

from sqlalchemy import Engine, inspect, select
from sqlalchemy.pool import StaticPool

from rp_tracker.database.engine import create_db_engine, get_session_factory, init_db
from rp_tracker.database.models import PlayerRating


def test_memory_engine_shares_connection() -> None:
    """Test that in-memory SQLite keeps one connection for all sessions."""
    engine = create_db_engine("sqlite://")

    assert isinstance(engine.pool, StaticPool)
    engine.dispose()


def test_file_engine_creates_directory(tmp_path: Path) -> None:
    """Test that the SQLite file's directory is created."""
    db_path = tmp_path / "nested" / "ratings.db"

    engine = create_db_engine(f"sqlite:///{db_path}")
    init_db(engine)

    assert db_path.parent.is_dir()
    assert "player_ratings" in inspect(engine).get_table_names()
    engine.dispose()


def test_session_factory_shares_committed_rows(db_engine: Engine) -> None:
    """Test that rows committed in one session are visible to the next."""
    session_factory = get_session_factory(db_engine)

    with session_factory() as session:
        session.add(PlayerRating(name="Alice", rp=10, placement_games=0, protected=False))
        session.commit()

    with session_factory() as session:
        row = session.scalars(select(PlayerRating).where(PlayerRating.name == "Alice")).one()
        assert row.rp == 10
        assert row.created_at is not None


def test_session_factory_keeps_loaded_rows_after_commit(db_engine: Engine) -> None:
    """Test that committed objects stay readable without a refresh."""
    with get_session_factory(db_engine)() as session:
        row = PlayerRating(name="Bob", rp=5, placement_games=1, protected=True)
        session.add(row)
        session.commit()

        assert "rp" in row.__dict__
        assert row.protected is True
