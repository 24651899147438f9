"""Pydantic schema for the admin dashboard counters."""

from pydantic import BaseModel, ConfigDict, Field


class StatsRead(BaseModel):
    """Aggregate counters shown on the admin dashboard.

    ``approved`` counts names approved by a moderator or by reaching
    the vote threshold.
    """

    model_config = ConfigDict(populate_by_name=True)

    pending: int = 0
    approved: int = 0
    total_votes: int = Field(0, alias="totalVotes")
    contributors: int = 0
