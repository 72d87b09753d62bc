from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from hoopgrid.models import Grid


class GridRequest(BaseModel):
    layout: Optional[str] = Field(default=None, description="Layout name or 'weighted'")
    seed: Optional[int] = None
    min_roster: Optional[int] = Field(default=None, ge=1)
    max_attempts: Optional[int] = Field(default=None, ge=1, le=10_000)


class GridResponse(BaseModel):
    league_id: str
    grid: Grid
    answer_counts: List[List[int]]


class RarityEntry(BaseModel):
    player_id: int
    name: str
    rank: int
    score: int
    label: str


class CellRarityResponse(BaseModel):
    grid_id: str
    row: int
    col: int
    strategy: str
    results: List[RarityEntry]


class GuessRequest(BaseModel):
    row: int = Field(..., ge=0, le=2)
    col: int = Field(..., ge=0, le=2)
    player_id: int
    strategy: Optional[str] = None


class GuessResponse(BaseModel):
    player_id: int
    player_name: str
    correct: bool
    row_pass: bool
    col_pass: bool
    rarity: Optional[RarityEntry] = None
    explanation: Optional[str] = None
