"""Application wiring for host integrations."""

from rp_tracker.config import Settings, get_settings
from rp_tracker.logging_config import configure_logging, get_logger
from rp_tracker.ranks.definitions import load_rank_table
from rp_tracker.services.player_store import create_player_store
from rp_tracker.services.rating_engine import RatingEngine

logger = get_logger(__name__)


def bootstrap(settings: Settings | None = None) -> RatingEngine:
    """Configure logging and build a rating engine from settings.

    Args:
        settings: Application settings (defaults to the cached settings)

    Returns:
        RatingEngine over the configured rank tiers and player store
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings)
    logger.info("Starting RP tracker", store_backend=settings.store_backend)

    rank_table = load_rank_table(settings.ranks_config_path)
    store = create_player_store(settings)
    engine = RatingEngine(rank_table, store, placement_games=settings.placement_games)

    logger.info(
        "RP tracker ready",
        ranks=len(rank_table),
        players=len(store.keys()),
        placement_games=settings.placement_games,
    )
    return engine
