"""Rank tier loading from YAML configuration."""

from pathlib import Path

import yaml

from rp_tracker.config import get_settings
from rp_tracker.logging_config import get_logger
from rp_tracker.ranks.table import Rank, RankTable
from rp_tracker.schemas.ranks import RankDefinition, RanksConfig

logger = get_logger(__name__)

DEFAULT_RANKS: list[RankDefinition] = [
    RankDefinition(name="Bronze", min_rp=0, display_format="§7Bronze"),
    RankDefinition(name="Silver", min_rp=500, display_format="§fSilver"),
    RankDefinition(name="Gold", min_rp=1000, display_format="§6Gold"),
    RankDefinition(name="Platinum", min_rp=1500, display_format="§bPlatinum"),
    RankDefinition(name="Diamond", min_rp=2000, display_format="§3Diamond"),
    RankDefinition(name="Master", min_rp=2500, display_format="§dMaster"),
    RankDefinition(name="Grandmaster", min_rp=3000, display_format="§5Grandmaster"),
]


def load_rank_definitions(config_path: Path | None = None) -> list[RankDefinition]:
    """Load rank definitions from YAML file.

    Args:
        config_path: Path to ranks config file (defaults to settings)

    Returns:
        List of rank definitions, the built-in tiers if the file is missing
    """
    if config_path is None:
        settings = get_settings()
        config_path = settings.ranks_config_path

    if not config_path.exists():
        logger.warning(
            "Ranks config file not found, using default tiers",
            path=str(config_path),
        )
        return list(DEFAULT_RANKS)

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        config = RanksConfig.model_validate(data)

        logger.info(
            "Loaded ranks",
            count=len(config.ranks),
            path=str(config_path),
        )

        return config.ranks

    except yaml.YAMLError as e:
        logger.error(
            "Failed to parse ranks YAML",
            path=str(config_path),
            error=str(e),
        )
        raise

    except Exception as e:
        logger.error(
            "Failed to load ranks",
            path=str(config_path),
            error=str(e),
        )
        raise


def load_rank_table(config_path: Path | None = None) -> RankTable:
    """Build the rank table from configuration.

    Args:
        config_path: Path to ranks config file (defaults to settings)

    Returns:
        RankTable with the configured tiers plus Unranked
    """
    definitions = load_rank_definitions(config_path)
    return RankTable(Rank.from_definition(definition) for definition in definitions)
