"""Rank tier configuration schemas."""

from pydantic import BaseModel, Field, field_validator

UNRANKED = "Unranked"


class RankDefinition(BaseModel):
    """A single configured rank tier."""

    name: str = Field(..., min_length=1, description="Unique rank name")
    min_rp: int = Field(
        ...,
        ge=0,
        alias="minRP",
        description="Minimum RP required to hold this rank",
    )
    display_format: str = Field(
        ...,
        alias="format",
        description="Display label, may contain colour codes (e.g. '§6Gold')",
    )

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def not_reserved(cls, v: str) -> str:
        """Reject the reserved placement rank name."""
        if v == UNRANKED:
            raise ValueError(f"'{UNRANKED}' is reserved for players in placement")
        return v


class RanksConfig(BaseModel):
    """Root configuration for the ranks YAML file."""

    ranks: list[RankDefinition]
