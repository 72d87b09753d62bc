"""Grid construction with per-cell eligible answer sets."""

from __future__ import annotations

import logging
import random
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple
from uuid import uuid4

from hoopgrid.config import GridConfig
from hoopgrid.eligibility import achievement_counts, iter_achievements, meets_spec
from hoopgrid.errors import InsufficientDataError
from hoopgrid.grid.strategies import Axes, CriteriaPool, TeamOnlyStrategy, WeightedStrategy
from hoopgrid.models import CellSpec, Grid, League, Player, TeamSpec
from hoopgrid.rarity import DEFAULT_STRATEGY, rarest_first


logger = logging.getLogger(__name__)

MIN_GRID_TEAMS = 6


def eligible_ids(league: League, spec: CellSpec) -> FrozenSet[int]:
    """Ids of league players satisfying one axis."""

    return frozenset(player.id for player in league.players if meets_spec(player, spec))


def cell_eligible_ids(league: League, row_spec: CellSpec, col_spec: CellSpec) -> FrozenSet[int]:
    return eligible_ids(league, row_spec) & eligible_ids(league, col_spec)


def build_pool(league: League, config: GridConfig) -> CriteriaPool:
    """Teams with a full enough roster and achievements held by enough players."""

    roster_sizes: Dict[int, int] = {team.id: 0 for team in league.teams}
    for player in league.players:
        for team_id in player.team_ids:
            if team_id in roster_sizes:
                roster_sizes[team_id] += 1
    teams = tuple(
        TeamSpec(team_id=team.id, team_name=team.display_name)
        for team in league.teams
        if roster_sizes[team.id] >= config.min_roster
    )
    counts = achievement_counts(league)
    achievements = tuple(
        entry.spec() for entry in iter_achievements() if counts[entry.id] >= config.min_achievement_players
    )
    return CriteriaPool(teams=teams, achievements=achievements)


def _well_formed(axes: Axes, pool: CriteriaPool) -> bool:
    rows, cols = axes
    if len(rows) != 3 or len(cols) != 3:
        return False
    keys = [spec.key for spec in (*rows, *cols)]
    if len(set(keys)) != len(keys):
        return False
    pool_team_ids = {team.team_id for team in pool.teams}
    for spec in (*rows, *cols):
        if isinstance(spec, TeamSpec) and spec.team_id not in pool_team_ids:
            logger.debug("Rejected grid: %s is below the roster minimum", spec.label)
            return False
    return True


class _EligibleIndex:
    """Memoized per-criterion eligible sets for one build call."""

    def __init__(self, league: League) -> None:
        self.league = league
        self._sets: Dict[str, FrozenSet[int]] = {}

    def get(self, spec: CellSpec) -> FrozenSet[int]:
        if spec.key not in self._sets:
            self._sets[spec.key] = eligible_ids(self.league, spec)
        return self._sets[spec.key]

    def answers(self, axes: Axes, min_eligible: int) -> Optional[List[List[Tuple[int, ...]]]]:
        rows, cols = axes
        matrix: List[List[Tuple[int, ...]]] = []
        for row_spec in rows:
            row: List[Tuple[int, ...]] = []
            for col_spec in cols:
                cell = self.get(row_spec) & self.get(col_spec)
                if len(cell) < min_eligible:
                    logger.debug("Rejected grid: %s x %s has %d answers", row_spec.label, col_spec.label, len(cell))
                    return None
                row.append(tuple(sorted(cell)))
            matrix.append(row)
        return matrix


def build_grid(
    league: League,
    config: Optional[GridConfig] = None,
    *,
    strategy=None,
    rng: Optional[random.Random] = None,
) -> Grid:
    """Select criteria and return a grid whose every cell is answerable.

    Retryable strategies get ``config.max_attempts`` selections, after which
    a team-only grid is tried. Curated strategies get a single attempt.
    Raises ``InsufficientDataError`` when no valid grid can be built.
    """

    config = config or GridConfig()
    rng = rng or random.Random(config.seed)
    strategy = strategy or WeightedStrategy()

    pool = build_pool(league, config)
    if len(pool.teams) < MIN_GRID_TEAMS:
        raise InsufficientDataError(
            f"Need at least {MIN_GRID_TEAMS} teams with {config.min_roster}+ players; "
            f"found {len(pool.teams)} of {len(league.teams)}"
        )

    index = _EligibleIndex(league)
    attempts = config.max_attempts if strategy.retryable else 1
    plans = [(strategy, attempts)]
    if strategy.retryable and not isinstance(strategy, TeamOnlyStrategy):
        plans.append((TeamOnlyStrategy(), config.max_attempts))

    for plan, plan_attempts in plans:
        for attempt in range(plan_attempts):
            axes = plan.select(pool, rng)
            if axes is None or not _well_formed(axes, pool):
                continue
            answers = index.answers(axes, config.min_eligible)
            if answers is None:
                continue
            grid = Grid(
                id=uuid4().hex,
                row_criteria=axes[0],
                col_criteria=axes[1],
                answers=answers,
            )
            logger.info(
                "Built grid %s with %s strategy after %d attempt(s)",
                grid.id,
                plan.name,
                attempt + 1,
            )
            return grid
        logger.info("Strategy %s found no valid grid in %d attempt(s)", plan.name, plan_attempts)

    raise InsufficientDataError(
        f"Could not build a grid with every cell answerable "
        f"({len(pool.teams)} eligible teams, {len(pool.achievements)} eligible achievements)"
    )


def answer_preview(
    league: League,
    grid: Grid,
    row: int,
    col: int,
    *,
    limit: int = 10,
    strategy: str = DEFAULT_STRATEGY,
) -> List[Player]:
    """Up to ``limit`` eligible players for a cell, rarest first."""

    players: Sequence[Player] = [league.player(player_id) for player_id in grid.answers[row][col]]
    return rarest_first(players, strategy)[:limit]
