from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel


class TeamResponse(BaseModel):
    id: int
    display_name: str
    abbreviation: str
    roster_size: int


class LeagueSummaryResponse(BaseModel):
    league_id: str
    team_count: int
    player_count: int
    season_range: Optional[Tuple[int, int]] = None
    teams: List[TeamResponse]


class PlayerSearchResult(BaseModel):
    id: int
    name: str
    team_ids: List[int]
