"""Tests for application wiring."""

from pathlib import Path

from rp_tracker.config import Settings
from rp_tracker.main import bootstrap
from rp_tracker.services.player_store import JsonPlayerStore


def test_bootstrap_json(tmp_path: Path) -> None:
    """Test building an engine from settings with the JSON backend."""
    settings = Settings(
        _env_file=None,
        store_backend="json",
        players_path=tmp_path / "players.json",
        ranks_config_path=tmp_path / "missing.yaml",
        placement_games=2,
        log_dir=tmp_path / "logs",
    )

    engine = bootstrap(settings)
    engine.apply_match([["Alice"], ["Bob"]], [1, 0])

    assert (tmp_path / "logs").is_dir()
    assert engine.placement_games == 2
    assert engine.rank_table.get("Grandmaster") is not None
    alice = JsonPlayerStore(tmp_path / "players.json").get("Alice")
    assert alice is not None
    assert alice.placement_games == 1


def test_bootstrap_sql(tmp_path: Path) -> None:
    """Test building an engine from settings with the SQL backend."""
    settings = Settings(
        _env_file=None,
        store_backend="sql",
        database_url=f"sqlite:///{tmp_path / 'db' / 'ratings.db'}",
        ranks_config_path=tmp_path / "missing.yaml",
        log_dir=tmp_path / "logs",
    )

    engine = bootstrap(settings)
    engine.set_rp("Alice", 1200)

    assert (tmp_path / "db" / "ratings.db").exists()
    assert engine.get_rp("Alice") == 1200
