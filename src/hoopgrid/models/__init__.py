"""Canonical league and grid models."""

from .grid import AchievementSpec, CellSpec, Grid, RarityResult, TeamSpec
from .league import (
    Award,
    CareerTotals,
    DraftFacts,
    GameFeat,
    GameHighs,
    League,
    Player,
    SeasonLine,
    Team,
    career_totals_from_lines,
)

__all__ = [
    "AchievementSpec",
    "Award",
    "CareerTotals",
    "CellSpec",
    "DraftFacts",
    "GameFeat",
    "GameHighs",
    "Grid",
    "League",
    "Player",
    "RarityResult",
    "SeasonLine",
    "Team",
    "TeamSpec",
    "career_totals_from_lines",
]
