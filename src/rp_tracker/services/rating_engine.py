"""Match rating service.

Teams are compared pairwise with the Elo expectation formula. Each player's
RP moves by ``K_FACTOR * (actual - expected)`` once per opposing team, and a
drop below the floor of the player's current rank is blocked once by the
demotion shield before it is allowed.
"""

import math
import threading
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from rp_tracker.config import get_settings
from rp_tracker.logging_config import get_logger
from rp_tracker.ranks.table import Rank, RankTable
from rp_tracker.schemas.players import PlayerRecord
from rp_tracker.services.player_store import PlayerStore

logger = get_logger(__name__)

K_FACTOR = 32
ELO_SCALE = 400


class ArgumentError(ValueError):
    """Raised when a match is submitted with mismatched teams and results."""

    def __init__(self, teams: int, results: int) -> None:
        super().__init__(
            f"Teams and results must have the same size (got {teams} teams, {results} results)"
        )
        self.teams = teams
        self.results = results


class RPChange(BaseModel):
    """Effect of one match on a single player."""

    model_config = ConfigDict(frozen=True)

    player: str
    rp_before: int
    rp_after: int
    rank_before: Rank
    rank_after: Rank
    placement_games_after: int
    protected_after: bool

    @property
    def delta(self) -> int:
        """Net RP change."""
        return self.rp_after - self.rp_before

    @property
    def rank_changed(self) -> bool:
        """Whether the displayed rank changed."""
        return self.rank_before.name != self.rank_after.name


def expected_score(rating: float, opponent_rating: float) -> float:
    """Probability that a side rated ``rating`` beats one rated ``opponent_rating``.

    Gaps too large for a float saturate to 0 instead of raising.
    """
    try:
        return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / ELO_SCALE))
    except OverflowError:
        return 0.0


def actual_score(result: float, opponent_result: float) -> float:
    """Score of a pairwise comparison: 1 for a win, 0.5 for a tie, 0 for a loss."""
    if result > opponent_result:
        return 1.0
    if result == opponent_result:
        return 0.5
    return 0.0


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def normalize_results(results: Sequence[float]) -> list[float]:
    """Scale results by the best result of the match.

    A match whose best result is 0 is compared on the raw results instead,
    so an all-zero match is a full tie. A negative best result still divides,
    which reverses the order of the results.
    """
    if not results:
        return []

    max_result = max(results)
    if max_result == 0:
        return [float(result) for result in results]
    return [result / max_result for result in results]


class RatingEngine:
    """Service applying match outcomes to player RP and ranks."""

    def __init__(
        self,
        rank_table: RankTable,
        store: PlayerStore,
        placement_games: int | None = None,
    ) -> None:
        """Initialize the rating engine.

        Args:
            rank_table: Rank tiers used for rank floors and display ranks
            store: Player record store
            placement_games: Placement matches for new players (defaults to settings)
        """
        if placement_games is None:
            placement_games = get_settings().placement_games

        self._rank_table = rank_table
        self._store = store
        self._placement_games = placement_games
        self._lock = threading.RLock()

    @property
    def rank_table(self) -> RankTable:
        return self._rank_table

    @property
    def placement_games(self) -> int:
        """Placement matches given to new and reset players."""
        return self._placement_games

    def _record(self, player: str) -> PlayerRecord:
        """Get a player's record, creating it with defaults on first touch."""
        record = self._store.get(player)
        if record is None:
            record = PlayerRecord(placement_games=self._placement_games)
            self._store.set(player, record)
        return record

    def get_record(self, player: str) -> PlayerRecord:
        """Get a copy of a player's full rating state."""
        with self._lock:
            return self._record(player).model_copy()

    def get_rp(self, player: str) -> int:
        """Get a player's RP (0 for a new player)."""
        with self._lock:
            return self._record(player).rp

    def set_rp(self, player: str, rp: int) -> None:
        """Store a player's RP as given and persist immediately."""
        with self._lock:
            record = self._record(player)
            record.rp = rp
            self._store.set(player, record)
            self._store.save()

    def placement_games_remaining(self, player: str) -> int:
        with self._lock:
            return self._record(player).placement_games

    def is_protected(self, player: str) -> bool:
        """Whether the player's demotion shield is armed."""
        with self._lock:
            return self._record(player).protected

    def get_rank(self, player: str) -> Rank:
        """Get a player's current rank (Unranked while in placement)."""
        with self._lock:
            return self._resolve(self._record(player))

    def players(self) -> dict[str, PlayerRecord]:
        """Snapshot of every known player's record."""
        with self._lock:
            return {player: self._record(player) for player in self._store.keys()}

    def reset_all(self) -> None:
        """Reset every known player to 0 RP, full placement and no shield.

        This cannot be undone.
        """
        with self._lock:
            players = self._store.keys()
            for player in players:
                self._store.set(
                    player,
                    PlayerRecord(rp=0, placement_games=self._placement_games, protected=False),
                )
            self._store.save()

        logger.warning(
            "Reset all player RP",
            players=len(players),
            placement_games=self._placement_games,
        )

    def apply_match(
        self,
        teams: Sequence[Sequence[str]],
        results: Sequence[float],
    ) -> dict[str, RPChange]:
        """Update RP for every player of a finished match.

        Results can be a win flag (1 for the winner, 0 for everyone else), a
        score, a kill count, etc. Only their order and ties matter::

            # 1v1
            engine.apply_match([["Alice"], ["Bob"]], [1, 0])
            # free for all
            engine.apply_match([["A"], ["B"], ["C"]], [1, 0, 9])

        Args:
            teams: Player names of each team
            results: Result of each team, parallel to ``teams``

        Returns:
            Per-player changes, in order of first appearance

        Raises:
            ArgumentError: If ``teams`` and ``results`` differ in length
        """
        if len(teams) != len(results):
            raise ArgumentError(len(teams), len(results))

        with self._lock:
            # Work on copies so nothing reaches the store until the match is computed
            working: dict[str, PlayerRecord] = {}
            before: dict[str, tuple[int, Rank]] = {}
            for team in teams:
                for player in team:
                    if player not in working:
                        record = self._store.get(player)
                        if record is None:
                            record = PlayerRecord(placement_games=self._placement_games)
                        working[player] = record
                        before[player] = (record.rp, self._resolve(record))

            normalized = normalize_results(results)
            team_rp = [self._team_rp(team, working) for team in teams]

            for index, team in enumerate(teams):
                for other_index in range(len(teams)):
                    if other_index == index:
                        continue

                    expected = expected_score(team_rp[index], team_rp[other_index])
                    actual = actual_score(normalized[index], normalized[other_index])
                    delta = K_FACTOR * (actual - expected)

                    for player in team:
                        self._apply_delta(player, working[player], delta)

            for team in teams:
                for player in team:
                    record = working[player]
                    if record.placement_games > 0:
                        record.placement_games -= 1

            for player, record in working.items():
                self._store.set(player, record)
            self._store.save()

            changes: dict[str, RPChange] = {}
            for player, (rp_before, rank_before) in before.items():
                record = working[player]
                changes[player] = RPChange(
                    player=player,
                    rp_before=rp_before,
                    rp_after=record.rp,
                    rank_before=rank_before,
                    rank_after=self._resolve(record),
                    placement_games_after=record.placement_games,
                    protected_after=record.protected,
                )

        logger.info(
            "Applied match",
            teams=len(teams),
            players=len(changes),
            results=list(results),
        )
        return changes

    def _resolve(self, record: PlayerRecord) -> Rank:
        return self._rank_table.resolve(record.rp, record.placement_games)

    @staticmethod
    def _team_rp(team: Sequence[str], records: dict[str, PlayerRecord]) -> float:
        """Average RP of a team, 0 for an empty team."""
        if not team:
            return 0.0
        return sum(records[player].rp for player in team) / len(team)

    def _apply_delta(self, player: str, record: PlayerRecord, delta: float) -> None:
        """Move one player's RP by ``delta``, enforcing the rank floor."""
        current_rp = record.rp
        new_rp = max(0, round_half_away(current_rp + delta))
        floor = self._rank_table.floor_of(self._resolve(record))

        if new_rp < floor:
            if record.protected:
                record.rp = new_rp
                record.protected = False
                logger.info(
                    "Demotion shield consumed",
                    player=player,
                    rp=new_rp,
                    floor=floor,
                )
            else:
                record.rp = floor
                record.protected = True
                logger.info(
                    "Demotion blocked, shield armed",
                    player=player,
                    rp=floor,
                    blocked_rp=new_rp,
                )
        else:
            record.rp = new_rp

        logger.debug("Updated player RP", player=player, rp_before=current_rp, rp=record.rp)
