"""Command-line interface for importing a league and generating a grid."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import random
from pathlib import Path

from hoopgrid.config import GridConfig, ImportLimits
from hoopgrid.errors import HoopgridError
from hoopgrid.grid import LAYOUTS, answer_preview, build_grid, strategy_for_layout
from hoopgrid.ingest import decode, decode_in_worker, normalize
from hoopgrid.rarity import DEFAULT_STRATEGY, SCORERS, RarityCache, rarity_label


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a 3x3 grid puzzle from a league export")
    parser.add_argument("league", type=Path, help="Path to a league export (.json or .json.gz)")
    parser.add_argument(
        "--compression",
        default=None,
        help="Compression hint (gzip or identity); sniffed from the file when omitted",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for criterion selection")
    parser.add_argument(
        "--layout",
        default="weighted",
        choices=["weighted", *LAYOUTS],
        help="Grid layout to generate",
    )
    parser.add_argument("--min-roster", type=int, default=None, help="Minimum players per team criterion")
    parser.add_argument(
        "--strategy",
        default=DEFAULT_STRATEGY,
        choices=sorted(SCORERS),
        help="Rarity scoring strategy",
    )
    parser.add_argument("--preview", type=int, default=3, help="Rarest answers to print per cell")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write grid JSON")
    parser.add_argument(
        "--worker",
        action="store_true",
        help="Decode the league file in a separate process",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g., INFO, DEBUG)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = GridConfig.from_env(seed=args.seed)
    if args.min_roster is not None:
        config = dataclasses.replace(config, min_roster=max(1, args.min_roster))

    decoder = decode_in_worker if args.worker else decode
    try:
        document = decoder(
            args.league.read_bytes(),
            args.league.name,
            compression=args.compression,
            limits=ImportLimits.from_env(),
        )
        league = normalize(document)
        grid = build_grid(
            league,
            config,
            strategy=strategy_for_layout(args.layout),
            rng=random.Random(config.seed),
        )
    except HoopgridError as exc:
        print(f"error ({exc.kind}): {exc.message}")
        return 1

    seasons = league.season_range
    season_text = f"{seasons[0]}-{seasons[1]}" if seasons else "no seasons"
    print(f"Loaded {len(league.players)} players across {len(league.teams)} teams ({season_text})")
    print(f"Grid {grid.id}")
    print("Rows:    " + " | ".join(spec.label for spec in grid.row_criteria))
    print("Columns: " + " | ".join(spec.label for spec in grid.col_criteria))

    cache = RarityCache()
    cells = []
    for row, row_spec in enumerate(grid.row_criteria):
        for col, col_spec in enumerate(grid.col_criteria):
            players = [league.player(player_id) for player_id in grid.answers[row][col]]
            results = cache.get_or_compute(grid.cell_key(row, col), players, args.strategy)
            preview = answer_preview(league, grid, row, col, limit=max(0, args.preview), strategy=args.strategy)
            names = ", ".join(player.name for player in preview)
            print(f"  [{row},{col}] {row_spec.label} x {col_spec.label}: {len(players)} answers ({names})")
            cells.append(
                {
                    "row": row,
                    "col": col,
                    "rarity": [
                        {
                            "player_id": result.player_id,
                            "name": league.player(result.player_id).name,
                            "rank": result.rank,
                            "score": result.score,
                            "label": rarity_label(result.score),
                        }
                        for result in sorted(results.values(), key=lambda result: result.rank)
                    ],
                }
            )

    if args.output:
        payload = {
            "grid": grid.model_dump(mode="json"),
            "strategy": args.strategy,
            "cells": cells,
        }
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote grid to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
