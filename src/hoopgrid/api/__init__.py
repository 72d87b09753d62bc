"""FastAPI application exposing league import, grid generation and guesses."""

from __future__ import annotations

import dataclasses
import logging
import random
from typing import Any, Dict, List, Tuple
from uuid import uuid4

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile

from hoopgrid.api.schemas import (
    CellRarityResponse,
    GridRequest,
    GridResponse,
    GuessRequest,
    GuessResponse,
    LeagueSummaryResponse,
    PlayerSearchResult,
    RarityEntry,
    TeamResponse,
)
from hoopgrid.config import GridConfig, ImportLimits
from hoopgrid.errors import HoopgridError
from hoopgrid.evaluation import evaluate, explain
from hoopgrid.grid import build_grid, strategy_for_layout
from hoopgrid.ingest import decode, decode_in_worker, normalize
from hoopgrid.models import Grid, League, RarityResult
from hoopgrid.rarity import DEFAULT_STRATEGY, SCORERS, RarityCache, rarity_label


logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[str, int] = {
    "format": 400,
    "web_page": 400,
    "schema": 400,
    "too_large": 413,
    "insufficient_data": 422,
}


def _http_error(exc: HoopgridError) -> HTTPException:
    return HTTPException(status_code=ERROR_STATUS.get(exc.kind, 400), detail=exc.to_dict())


def league_summary(league_id: str, league: League) -> LeagueSummaryResponse:
    return LeagueSummaryResponse(
        league_id=league_id,
        team_count=len(league.teams),
        player_count=len(league.players),
        season_range=league.season_range,
        teams=[
            TeamResponse(
                id=team.id,
                display_name=team.display_name,
                abbreviation=team.abbreviation,
                roster_size=len(league.roster(team.id)),
            )
            for team in league.teams
        ],
    )


def _rarity_entry(league: League, result: RarityResult) -> RarityEntry:
    return RarityEntry(
        player_id=result.player_id,
        name=league.player(result.player_id).name,
        rank=result.rank,
        score=result.score,
        label=rarity_label(result.score),
    )


def create_app(
    *,
    grid_config: GridConfig | None = None,
    import_limits: ImportLimits | None = None,
    use_worker: bool = False,
) -> FastAPI:
    app = FastAPI(title="hoopgrid")
    app.state.leagues = {}
    app.state.grids = {}
    app.state.rarity_cache = RarityCache()
    app.state.grid_config = grid_config or GridConfig.from_env()
    app.state.import_limits = import_limits or ImportLimits.from_env()

    def _fetch_league_or_404(league_id: str) -> League:
        league = app.state.leagues.get(league_id)
        if league is None:
            raise HTTPException(status_code=404, detail="League not found")
        return league

    def _fetch_grid_or_404(grid_id: str) -> Tuple[str, Grid]:
        entry = app.state.grids.get(grid_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="Grid not found")
        return entry

    def _check_strategy(strategy: str) -> str:
        if strategy not in SCORERS:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown rarity strategy {strategy!r}; expected one of {', '.join(SCORERS)}",
            )
        return strategy

    def _cell_rarity(league: League, grid: Grid, row: int, col: int, strategy: str) -> Dict[int, RarityResult]:
        players = [league.player(player_id) for player_id in grid.answers[row][col]]
        return app.state.rarity_cache.get_or_compute(grid.cell_key(row, col), players, strategy)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/leagues", response_model=LeagueSummaryResponse)
    async def import_league(
        file: UploadFile = File(...),
        compression: str | None = Form(None),
    ):
        contents = await file.read()
        if not contents:
            raise HTTPException(status_code=400, detail="League file is empty")
        decoder = decode_in_worker if use_worker else decode
        try:
            document = decoder(
                contents,
                file.filename,
                compression=compression,
                limits=app.state.import_limits,
            )
            league = normalize(document)
        except HoopgridError as exc:
            logger.warning("League import failed (%s): %s", exc.kind, exc.message)
            raise _http_error(exc) from exc

        league_id = uuid4().hex
        app.state.leagues[league_id] = league
        return league_summary(league_id, league)

    @app.get("/leagues/{league_id}", response_model=LeagueSummaryResponse)
    async def get_league(league_id: str):
        return league_summary(league_id, _fetch_league_or_404(league_id))

    @app.get("/leagues/{league_id}/players", response_model=List[PlayerSearchResult])
    async def search_players(
        league_id: str,
        q: str = Query(..., min_length=1),
        limit: int = Query(20, ge=1, le=100),
    ):
        league = _fetch_league_or_404(league_id)
        needle = q.strip().lower()
        matches: List[PlayerSearchResult] = []
        for player in league.players:
            if needle in player.name.lower():
                matches.append(PlayerSearchResult(id=player.id, name=player.name, team_ids=sorted(player.team_ids)))
                if len(matches) >= limit:
                    break
        return matches

    @app.post("/leagues/{league_id}/grids", response_model=GridResponse)
    async def create_grid(league_id: str, request: GridRequest | None = None):
        league = _fetch_league_or_404(league_id)
        request = request or GridRequest()
        config: GridConfig = app.state.grid_config
        overrides: Dict[str, Any] = {}
        if request.min_roster is not None:
            overrides["min_roster"] = request.min_roster
        if request.max_attempts is not None:
            overrides["max_attempts"] = request.max_attempts
        if overrides:
            config = dataclasses.replace(config, **overrides)
        try:
            strategy = strategy_for_layout(request.layout)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        seed = request.seed if request.seed is not None else config.seed
        try:
            grid = build_grid(league, config, strategy=strategy, rng=random.Random(seed))
        except HoopgridError as exc:
            raise _http_error(exc) from exc

        app.state.grids[grid.id] = (league_id, grid)
        return GridResponse(
            league_id=league_id,
            grid=grid,
            answer_counts=[[len(cell) for cell in row] for row in grid.answers],
        )

    @app.get("/grids/{grid_id}", response_model=GridResponse)
    async def get_grid(grid_id: str):
        league_id, grid = _fetch_grid_or_404(grid_id)
        return GridResponse(
            league_id=league_id,
            grid=grid,
            answer_counts=[[len(cell) for cell in row] for row in grid.answers],
        )

    @app.delete("/grids/{grid_id}")
    async def discard_grid(grid_id: str):
        _fetch_grid_or_404(grid_id)
        del app.state.grids[grid_id]
        app.state.rarity_cache.invalidate_prefix(f"{grid_id}:")
        return {"status": "deleted", "grid_id": grid_id}

    @app.get("/grids/{grid_id}/cells/{row}/{col}/rarity", response_model=CellRarityResponse)
    async def cell_rarity(
        grid_id: str,
        row: int,
        col: int,
        strategy: str = Query(DEFAULT_STRATEGY),
    ):
        league_id, grid = _fetch_grid_or_404(grid_id)
        if not (0 <= row < 3 and 0 <= col < 3):
            raise HTTPException(status_code=404, detail="Cell not found")
        league = _fetch_league_or_404(league_id)
        results = _cell_rarity(league, grid, row, col, _check_strategy(strategy))
        ordered = sorted(results.values(), key=lambda result: result.rank)
        return CellRarityResponse(
            grid_id=grid_id,
            row=row,
            col=col,
            strategy=strategy,
            results=[_rarity_entry(league, result) for result in ordered],
        )

    @app.post("/grids/{grid_id}/guesses", response_model=GuessResponse)
    async def submit_guess(grid_id: str, guess: GuessRequest):
        league_id, grid = _fetch_grid_or_404(grid_id)
        league = _fetch_league_or_404(league_id)
        if not league.has_player(guess.player_id):
            raise HTTPException(status_code=404, detail="Player not found")
        strategy = _check_strategy(guess.strategy or DEFAULT_STRATEGY)

        player = league.player(guess.player_id)
        row_spec, col_spec = grid.cell(guess.row, guess.col)
        evaluation = evaluate(player, row_spec, col_spec)
        rarity = None
        if evaluation.correct:
            results = _cell_rarity(league, grid, guess.row, guess.col, strategy)
            if player.id in results:
                rarity = _rarity_entry(league, results[player.id])
        return GuessResponse(
            player_id=player.id,
            player_name=player.name,
            correct=evaluation.correct,
            row_pass=evaluation.row_pass,
            col_pass=evaluation.col_pass,
            rarity=rarity,
            explanation=explain(player, row_spec, col_spec, evaluation),
        )

    return app
