"""Pydantic models for API I/O."""

from .grid import CellRarityResponse, GridRequest, GridResponse, GuessRequest, GuessResponse, RarityEntry
from .league import LeagueSummaryResponse, PlayerSearchResult, TeamResponse

__all__ = [
    "CellRarityResponse",
    "GridRequest",
    "GridResponse",
    "GuessRequest",
    "GuessResponse",
    "LeagueSummaryResponse",
    "PlayerSearchResult",
    "RarityEntry",
    "TeamResponse",
]
