"""Persisted player record schema."""

from pydantic import BaseModel, Field


class PlayerRecord(BaseModel):
    """Rating state of a single player.

    Serialized with the camelCase keys of the players file, e.g.
    ``{"rp": 0, "placementGames": 3, "protected": false}``.
    """

    rp: int = Field(0, description="Current rank points")
    placement_games: int = Field(
        0,
        ge=0,
        alias="placementGames",
        description="Placement matches left before ranked rules apply",
    )
    protected: bool = Field(False, description="One-shot demotion shield")

    model_config = {"populate_by_name": True, "validate_assignment": True}
