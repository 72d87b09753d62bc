import random

import pytest
from pydantic import ValidationError

from hoopgrid.config import GridConfig
from hoopgrid.eligibility import achievement_counts, get_achievement, iter_achievements
from hoopgrid.errors import InsufficientDataError
from hoopgrid.grid import (
    CuratedStrategy,
    LayoutStrategy,
    TeamOnlyStrategy,
    WeightedStrategy,
    answer_preview,
    build_grid,
    build_pool,
    cell_eligible_ids,
    strategy_for_layout,
)
from hoopgrid.ingest import normalize
from hoopgrid.models import Grid, TeamSpec

from tests.sample_league import JOURNEYMEN, league_document, line, sample_league


def _team(league, team_id: int) -> TeamSpec:
    return TeamSpec(team_id=team_id, team_name=league.team(team_id).display_name)


def test_team_only_grid_cells_are_roster_intersections():
    league = sample_league()
    grid = build_grid(league, GridConfig(seed=3), strategy=TeamOnlyStrategy())

    row_ids = {spec.team_id for spec in grid.row_criteria}
    col_ids = {spec.team_id for spec in grid.col_criteria}
    assert len(row_ids | col_ids) == 6

    for row, row_spec in enumerate(grid.row_criteria):
        for col, col_spec in enumerate(grid.col_criteria):
            expected = {p.id for p in league.roster(row_spec.team_id)} & {p.id for p in league.roster(col_spec.team_id)}
            assert set(grid.answers[row][col]) == expected
            assert set(JOURNEYMEN) <= expected


def test_weighted_grid_is_valid_and_reproducible():
    league = sample_league()
    first = build_grid(league, GridConfig(seed=11))
    second = build_grid(league, GridConfig(seed=11))

    keys = [spec.key for spec in (*first.row_criteria, *first.col_criteria)]
    assert len(set(keys)) == 6
    for row in range(3):
        for col in range(3):
            row_spec, col_spec = first.cell(row, col)
            assert first.answers[row][col]
            assert set(first.answers[row][col]) == cell_eligible_ids(league, row_spec, col_spec)

    assert first.id != second.id
    assert first.row_criteria == second.row_criteria
    assert first.col_criteria == second.col_criteria
    assert first.answers == second.answers


def test_build_grid_requires_six_full_rosters():
    league = sample_league()
    with pytest.raises(InsufficientDataError):
        build_grid(league, GridConfig(min_roster=100))

    document = league_document()
    document["teams"] = document["teams"][:5]
    for player in document["players"]:
        player["stats"] = [line for line in player["stats"] if line["tid"] < 5]
    with pytest.raises(InsufficientDataError):
        build_grid(normalize(document), GridConfig(min_roster=1))


def test_curated_grid_with_unsolvable_cell_fails_without_retry():
    league = sample_league()
    strategy = CuratedStrategy(
        rows=[_team(league, 0), _team(league, 1), _team(league, 2)],
        cols=[get_achievement("mvp").spec(), _team(league, 3), _team(league, 4)],
    )
    with pytest.raises(InsufficientDataError):
        build_grid(league, GridConfig(), strategy=strategy)


def test_curated_grid_keeps_requested_criteria():
    league = sample_league()
    rows = [_team(league, 0), _team(league, 1), _team(league, 2)]
    cols = [_team(league, 3), _team(league, 4), _team(league, 5)]
    grid = build_grid(league, GridConfig(), strategy=CuratedStrategy(rows=rows, cols=cols))

    assert list(grid.row_criteria) == rows
    assert list(grid.col_criteria) == cols


def test_curated_strategy_requires_three_per_axis():
    with pytest.raises(ValueError):
        CuratedStrategy(rows=[], cols=[])


def test_pool_filters_achievements_by_holder_count():
    pool = build_pool(sample_league(), GridConfig())
    achievement_ids = {spec.achievement_id for spec in pool.achievements}

    assert {"mvp", "career_points_20k", "undrafted"} <= achievement_ids
    assert "hall_of_fame" not in achievement_ids
    assert "first_overall_pick" not in achievement_ids
    assert len(pool.teams) == 8


def test_layout_strategy_shapes():
    pool = build_pool(sample_league(), GridConfig())
    rows, cols = LayoutStrategy("achievement_columns").select(pool, random.Random(1))

    assert [spec.kind for spec in rows] == ["team", "team", "team"]
    assert [spec.kind for spec in cols] == ["team", "achievement", "achievement"]

    rows, cols = LayoutStrategy("mixed").select(pool, random.Random(1))
    assert [spec.kind for spec in rows] == ["team", "team", "achievement"]
    assert [spec.kind for spec in cols] == ["team", "team", "achievement"]


def test_strategy_for_layout_resolution():
    assert isinstance(strategy_for_layout(None), WeightedStrategy)
    assert isinstance(strategy_for_layout("team_only"), TeamOnlyStrategy)
    assert strategy_for_layout("dual_achievement").name == "dual_achievement"
    with pytest.raises(ValueError):
        strategy_for_layout("spiral")


def test_grid_model_rejects_empty_cells():
    spec = TeamSpec(team_id=0, team_name="Boston Beacons")
    axis = (spec, spec, spec)
    with pytest.raises(ValidationError):
        Grid(id="g", row_criteria=axis, col_criteria=axis, answers=[[[1], [2], []], [[1], [1], [1]], [[1], [1], [1]]])


def test_answer_preview_orders_rarest_first():
    league = sample_league()
    rows = [_team(league, 0), _team(league, 2), _team(league, 4)]
    cols = [_team(league, 1), _team(league, 3), _team(league, 5)]
    grid = build_grid(league, GridConfig(), strategy=CuratedStrategy(rows=rows, cols=cols))

    assert set(grid.answers[0][0]) == set(JOURNEYMEN)
    preview = answer_preview(league, grid, 0, 0, limit=5)
    # Equal win shares: the higher id ranks as the rarer answer.
    assert [player.id for player in preview] == [101, 100]
    assert len(answer_preview(league, grid, 0, 0, limit=1)) == 1


def test_curated_grid_rejects_team_below_roster_minimum():
    document = league_document()
    document["teams"].append({"tid": 8, "region": "Tulsa", "name": "Tornadoes", "abbrev": "TUL"})
    document["players"][0]["stats"].append(line(2006, 8, gp=30))
    document["players"][1]["stats"].append(line(2006, 8, gp=30))
    league = normalize(document)
    assert len(league.roster(8)) == 2

    rows = [_team(league, 0), _team(league, 1), _team(league, 3)]
    cols = [_team(league, 8), _team(league, 4), _team(league, 5)]
    with pytest.raises(InsufficientDataError):
        build_grid(league, GridConfig(), strategy=CuratedStrategy(rows=rows, cols=cols))

    relaxed = build_grid(league, GridConfig(min_roster=2), strategy=CuratedStrategy(rows=rows, cols=cols))
    assert relaxed.col_criteria[0].team_id == 8


def test_pool_matches_achievement_counts():
    league = sample_league()
    config = GridConfig()
    counts = achievement_counts(league)
    pool = build_pool(league, config)

    assert [spec.achievement_id for spec in pool.achievements] == [
        entry.id for entry in iter_achievements() if counts[entry.id] >= config.min_achievement_players
    ]
