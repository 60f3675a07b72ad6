"""SQLAlchemy ORM models for player ratings."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class PlayerRating(Base):
    """Persisted rating state of a player."""

    __tablename__ = "player_ratings"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    rp: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    placement_games: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    protected: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<PlayerRating(name={self.name}, rp={self.rp}, "
            f"placement_games={self.placement_games}, protected={self.protected})>"
        )
