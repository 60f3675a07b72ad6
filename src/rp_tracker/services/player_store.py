"""Player record persistence backends."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from rp_tracker.config import Settings, get_settings
from rp_tracker.database.engine import create_db_engine, get_session_factory, init_db
from rp_tracker.database.models import PlayerRating
from rp_tracker.logging_config import get_logger
from rp_tracker.schemas.players import PlayerRecord

logger = get_logger(__name__)


@runtime_checkable
class PlayerStore(Protocol):
    """Keyed, durable mapping from player name to PlayerRecord."""

    def get(self, player: str) -> PlayerRecord | None: ...

    def set(self, player: str, record: PlayerRecord) -> None: ...

    def keys(self) -> list[str]: ...

    def save(self) -> None: ...


class JsonPlayerStore:
    """Player store backed by a single JSON file.

    The file maps each player name to its record::

        {"Steve": {"rp": 0, "placementGames": 3, "protected": false}}

    Records written without ``placementGames`` get the configured placement
    count. Changes are held in memory until :meth:`save` rewrites the file.
    """

    def __init__(self, path: Path | str, placement_games: int | None = None) -> None:
        if placement_games is None:
            placement_games = get_settings().placement_games

        self.path = Path(path)
        self._placement_games = placement_games
        self._records: dict[str, PlayerRecord] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.info("Players file not found, starting empty", path=str(self.path))
            return

        with open(self.path, encoding="utf-8") as f:
            data = json.load(f) or {}

        self._records = {name: self._parse(record) for name, record in data.items()}
        logger.info("Loaded players", count=len(self._records), path=str(self.path))

    def _parse(self, data: dict[str, Any]) -> PlayerRecord:
        if "placementGames" not in data and "placement_games" not in data:
            data = {**data, "placementGames": self._placement_games}
        return PlayerRecord.model_validate(data)

    def get(self, player: str) -> PlayerRecord | None:
        record = self._records.get(player)
        return record.model_copy() if record is not None else None

    def set(self, player: str, record: PlayerRecord) -> None:
        self._records[player] = record.model_copy()

    def keys(self) -> list[str]:
        return list(self._records)

    def save(self) -> None:
        """Write all records, replacing the file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            name: record.model_dump(by_alias=True) for name, record in self._records.items()
        }

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=4, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Saved players", count=len(data), path=str(self.path))


class SqlPlayerStore:
    """Player store backed by the ``player_ratings`` table.

    Writes are staged in one session and committed by :meth:`save`.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session = session_factory()

    def get(self, player: str) -> PlayerRecord | None:
        row = self._session.get(PlayerRating, player)
        if row is None:
            return None
        return PlayerRecord(
            rp=row.rp,
            placement_games=row.placement_games,
            protected=row.protected,
        )

    def set(self, player: str, record: PlayerRecord) -> None:
        row = self._session.get(PlayerRating, player)
        if row is None:
            row = PlayerRating(name=player)
            self._session.add(row)
        row.rp = record.rp
        row.placement_games = record.placement_games
        row.protected = record.protected
        # Pending rows are invisible to Session.get until flushed
        self._session.flush()

    def keys(self) -> list[str]:
        result = self._session.scalars(select(PlayerRating.name).order_by(PlayerRating.name))
        return list(result.all())

    def save(self) -> None:
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.debug("Committed player ratings")

    def close(self) -> None:
        """Release the underlying session."""
        self._session.close()


def create_player_store(settings: Settings | None = None) -> PlayerStore:
    """Create the player store selected by ``settings.store_backend``.

    Args:
        settings: Application settings (defaults to the cached settings)

    Returns:
        A JSON or SQL backed player store
    """
    if settings is None:
        settings = get_settings()

    if settings.store_backend == "sql":
        engine = create_db_engine(settings.database_url, echo=settings.log_level == "DEBUG")
        init_db(engine)
        logger.info("Using SQL player store", url=engine.url.render_as_string(hide_password=True))
        return SqlPlayerStore(get_session_factory(engine))

    logger.info("Using JSON player store", path=str(settings.players_path))
    return JsonPlayerStore(settings.players_path, placement_games=settings.placement_games)
