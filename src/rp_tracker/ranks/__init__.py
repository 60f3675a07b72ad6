"""Rank tiers package."""

from rp_tracker.ranks.definitions import DEFAULT_RANKS, load_rank_definitions, load_rank_table
from rp_tracker.ranks.table import UNRANKED_RANK, Rank, RankTable

__all__ = [
    "DEFAULT_RANKS",
    "UNRANKED_RANK",
    "Rank",
    "RankTable",
    "load_rank_definitions",
    "load_rank_table",
]
