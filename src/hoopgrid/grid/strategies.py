"""Criterion selection strategies for grid generation."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from hoopgrid.models import AchievementSpec, CellSpec, TeamSpec

Axes = Tuple[Tuple[CellSpec, ...], Tuple[CellSpec, ...]]


@dataclass(frozen=True)
class CriteriaPool:
    """Teams and achievements that passed the availability thresholds."""

    teams: Tuple[TeamSpec, ...]
    achievements: Tuple[AchievementSpec, ...]


class TeamOnlyStrategy:
    """Three row teams against three different column teams."""

    name = "team_only"
    retryable = True

    def select(self, pool: CriteriaPool, rng: random.Random) -> Optional[Axes]:
        if len(pool.teams) < 6:
            return None
        chosen = rng.sample(list(pool.teams), 6)
        return tuple(chosen[:3]), tuple(chosen[3:])


# (row teams, row achievements, column teams, column achievements)
LAYOUTS: Dict[str, Tuple[int, int, int, int]] = {
    "team_only": (3, 0, 3, 0),
    "mixed": (2, 1, 2, 1),
    "achievement_columns": (3, 0, 1, 2),
    "achievement_rows": (1, 2, 3, 0),
    "dual_achievement": (1, 2, 1, 2),
}

LAYOUT_WEIGHTS: Dict[str, float] = {
    "team_only": 0.04,
    "mixed": 0.23,
    "achievement_columns": 0.25,
    "achievement_rows": 0.25,
    "dual_achievement": 0.23,
}


class LayoutStrategy:
    """Draw teams and achievements for one fixed layout.

    Teams lead each axis, followed by that axis' achievements.
    """

    retryable = True

    def __init__(self, layout: str) -> None:
        if layout not in LAYOUTS:
            raise ValueError(f"Unknown grid layout {layout!r}; expected one of {', '.join(LAYOUTS)}")
        self.name = layout
        self.shape = LAYOUTS[layout]

    def select(self, pool: CriteriaPool, rng: random.Random) -> Optional[Axes]:
        row_teams, row_achievements, col_teams, col_achievements = self.shape
        team_count = row_teams + col_teams
        achievement_count = row_achievements + col_achievements
        if len(pool.teams) < team_count or len(pool.achievements) < achievement_count:
            return None
        teams = rng.sample(list(pool.teams), team_count)
        achievements = rng.sample(list(pool.achievements), achievement_count)
        rows: List[CellSpec] = [*teams[:row_teams], *achievements[:row_achievements]]
        cols: List[CellSpec] = [*teams[row_teams:], *achievements[row_achievements:]]
        return tuple(rows), tuple(cols)


class WeightedStrategy:
    """Pick a layout at random per attempt, favoring achievement-heavy grids."""

    name = "weighted"
    retryable = True

    def __init__(self, weights: Optional[Dict[str, float]] = None) -> None:
        weights = weights or LAYOUT_WEIGHTS
        self._layouts = [LayoutStrategy(layout) for layout in weights]
        self._weights = [weights[strategy.name] for strategy in self._layouts]

    def select(self, pool: CriteriaPool, rng: random.Random) -> Optional[Axes]:
        strategy = rng.choices(self._layouts, weights=self._weights, k=1)[0]
        return strategy.select(pool, rng)


class CuratedStrategy:
    """Fixed, caller-supplied criteria; tried once and never regenerated."""

    name = "curated"
    retryable = False

    def __init__(self, rows: Sequence[CellSpec], cols: Sequence[CellSpec]) -> None:
        if len(rows) != 3 or len(cols) != 3:
            raise ValueError("curated grids need exactly 3 row and 3 column criteria")
        self.rows = tuple(rows)
        self.cols = tuple(cols)

    def select(self, pool: CriteriaPool, rng: random.Random) -> Optional[Axes]:
        return self.rows, self.cols


def strategy_for_layout(layout: Optional[str]):
    """Resolve a layout name (or ``None``/``"weighted"``) to a strategy."""

    if layout in (None, "", "weighted"):
        return WeightedStrategy()
    if layout == "team_only":
        return TeamOnlyStrategy()
    return LayoutStrategy(layout)
