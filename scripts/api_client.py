"""Lightweight REST client for the hoopgrid API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _print(label: str, payload) -> None:
    print(label, json.dumps(payload, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the hoopgrid REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("league", type=Path, nargs="?", help="League export (.json or .json.gz)")
    parser.add_argument("--compression", default=None, help="Compression hint sent with the upload")
    parser.add_argument("--layout", default=None, help="Grid layout (weighted, team_only, mixed, ...)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for criterion selection")
    parser.add_argument("--get-grid", metavar="GRID_ID", help="Fetch a stored grid and exit")
    parser.add_argument(
        "--guess",
        nargs=3,
        type=int,
        metavar=("ROW", "COL", "PLAYER_ID"),
        help="Submit a guess for the generated grid",
    )
    parser.add_argument("--rarity", nargs=2, type=int, metavar=("ROW", "COL"), help="Show rarity for a cell")
    parser.add_argument("--strategy", default="win_shares", help="Rarity strategy (win_shares or count)")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.get_grid:
            resp = client.get(f"/grids/{args.get_grid}")
            if resp.status_code == 404:
                raise SystemExit(f"grid {args.get_grid} not found")
            resp.raise_for_status()
            _print("Grid:", resp.json())
            return

        if args.league is None:
            raise SystemExit("a league file is required unless using --get-grid")

        files = {"file": (args.league.name, args.league.read_bytes(), "application/octet-stream")}
        data = {"compression": args.compression} if args.compression else {}
        resp = client.post("/leagues", files=files, data=data)
        if resp.status_code >= 400:
            raise SystemExit(f"import failed: {resp.json().get('detail')}")
        league = resp.json()
        print(f"Imported league {league['league_id']}: {league['player_count']} players, {league['team_count']} teams")

        resp = client.post(
            f"/leagues/{league['league_id']}/grids",
            json={"layout": args.layout, "seed": args.seed},
        )
        if resp.status_code >= 400:
            raise SystemExit(f"grid generation failed: {resp.json().get('detail')}")
        payload = resp.json()
        grid = payload["grid"]
        print("Rows:", [spec.get("team_name") or spec.get("achievement_label") for spec in grid["row_criteria"]])
        print("Columns:", [spec.get("team_name") or spec.get("achievement_label") for spec in grid["col_criteria"]])
        print("Answer counts:", payload["answer_counts"])

        if args.rarity:
            row, col = args.rarity
            resp = client.get(f"/grids/{grid['id']}/cells/{row}/{col}/rarity", params={"strategy": args.strategy})
            resp.raise_for_status()
            _print("Rarity:", resp.json())

        if args.guess:
            row, col, player_id = args.guess
            resp = client.post(
                f"/grids/{grid['id']}/guesses",
                json={"row": row, "col": col, "player_id": player_id, "strategy": args.strategy},
            )
            resp.raise_for_status()
            _print("Guess:", resp.json())


if __name__ == "__main__":
    main()
