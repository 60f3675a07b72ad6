"""Rank tiers and RP to rank resolution."""

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from rp_tracker.schemas.ranks import UNRANKED, RankDefinition


class Rank(BaseModel):
    """A named RP bracket."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_format: str = Field(..., description="Opaque display label, passed through verbatim")
    min_rp: int = Field(..., ge=0)

    @classmethod
    def from_definition(cls, definition: RankDefinition) -> "Rank":
        """Build a rank from its configuration entry."""
        return cls(
            name=definition.name,
            display_format=definition.display_format,
            min_rp=definition.min_rp,
        )

    def __str__(self) -> str:
        return self.display_format


UNRANKED_RANK = Rank(name=UNRANKED, display_format="§7Unranked", min_rp=0)


class RankTable:
    """Ordered, read-only collection of rank tiers.

    The synthetic Unranked rank is always present and is what players in
    placement resolve to.
    """

    def __init__(self, ranks: Iterable[Rank]) -> None:
        """Initialize the rank table.

        Args:
            ranks: Configured ranks in ascending ``min_rp`` order

        Raises:
            ValueError: If names repeat, Unranked is configured explicitly,
                or thresholds are not in ascending order
        """
        configured = list(ranks)
        seen: set[str] = set()
        previous_min: int | None = None

        for rank in configured:
            if rank.name == UNRANKED:
                raise ValueError(f"'{UNRANKED}' is reserved and cannot be configured")
            if rank.name in seen:
                raise ValueError(f"Duplicate rank name: {rank.name}")
            if previous_min is not None and rank.min_rp < previous_min:
                raise ValueError(
                    f"Rank {rank.name} has min_rp {rank.min_rp} below the previous "
                    f"rank's {previous_min}; ranks must be in ascending order"
                )
            seen.add(rank.name)
            previous_min = rank.min_rp

        self._configured: tuple[Rank, ...] = tuple(configured)
        self._by_name: dict[str, Rank] = {UNRANKED: UNRANKED_RANK}
        self._by_name.update((rank.name, rank) for rank in configured)

    @property
    def unranked(self) -> Rank:
        """The placement rank."""
        return UNRANKED_RANK

    @property
    def ranks(self) -> list[Rank]:
        """All ranks, Unranked first, then configured tiers ascending."""
        return [UNRANKED_RANK, *self._configured]

    def get(self, name: str) -> Rank | None:
        """Look up a rank by name."""
        return self._by_name.get(name)

    def resolve(self, rp: int, placement_games_remaining: int = 0) -> Rank:
        """Resolve an RP value to the highest qualifying rank.

        Args:
            rp: Current rank points
            placement_games_remaining: Placement matches the player still has to play

        Returns:
            Unranked while in placement, otherwise the highest configured rank
            whose ``min_rp`` is at most ``rp`` (Unranked if none qualifies)
        """
        if placement_games_remaining > 0:
            return UNRANKED_RANK

        rank = UNRANKED_RANK
        for candidate in self._configured:
            if rp >= candidate.min_rp:
                rank = candidate
        return rank

    def floor_of(self, rank: Rank) -> int:
        """RP floor a player holding ``rank`` is protected down to."""
        return rank.min_rp

    def __iter__(self) -> Iterator[Rank]:
        return iter(self.ranks)

    def __len__(self) -> int:
        return len(self._configured) + 1

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        names = ", ".join(rank.name for rank in self._configured)
        return f"<RankTable(ranks=[{names}])>"
