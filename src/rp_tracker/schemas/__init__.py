"""Schemas package."""

from rp_tracker.schemas.players import PlayerRecord
from rp_tracker.schemas.ranks import UNRANKED, RankDefinition, RanksConfig

__all__ = [
    "UNRANKED",
    "PlayerRecord",
    "RankDefinition",
    "RanksConfig",
]
