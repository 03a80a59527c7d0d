"""Leaderboard snapshot models matching the remote JSON payload"""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from aoc_timeline.models.timeline import Anonymous, DisplayName, Named


class Completion(BaseModel):
    """A single solved star"""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    solved_at: int = Field(..., alias='get_star_ts', description="Epoch seconds of the solve")
    star_index: int = 0


class Member(BaseModel):
    """
    One leaderboard member and their per-day completions.

    completions maps day number (1-25) to star number (1 or 2) to Completion.
    Star 2 may appear without star 1; nothing here enforces the pairing.
    """
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    id: int
    display_name: Optional[str] = Field(None, alias='name')
    completions: Dict[int, Dict[int, Completion]] = Field(
        default_factory=dict, alias='completion_day_level'
    )
    stars: int = 0
    local_score: int = 0
    last_star_ts: int = 0

    @property
    def display(self) -> DisplayName:
        if self.display_name is None:
            return Anonymous(self.id)
        return Named(self.display_name)


class Snapshot(BaseModel):
    """One fetched leaderboard state"""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    event_year: int = Field(..., alias='event')
    owner_id: int
    members: Dict[str, Member] = Field(default_factory=dict)

    def to_wire(self) -> dict:
        """Serialize back into the remote payload shape"""
        data = self.model_dump(mode='json', by_alias=True)
        data['event'] = str(self.event_year)
        return data
