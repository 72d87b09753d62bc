import gzip
import json

from hoopgrid.cli import main

from tests.sample_league import league_document


def test_cli_builds_grid_and_writes_json(tmp_path, capsys):
    league_path = tmp_path / "league.json.gz"
    league_path.write_bytes(gzip.compress(json.dumps(league_document()).encode("utf-8")))
    output = tmp_path / "grid.json"

    code = main([str(league_path), "--seed", "7", "--layout", "team_only", "--output", str(output)])

    assert code == 0
    stdout = capsys.readouterr().out
    assert "Loaded 52 players across 8 teams (2000-2007)" in stdout
    assert "Wrote grid to" in stdout

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["strategy"] == "win_shares"
    assert len(payload["cells"]) == 9
    first = payload["cells"][0]
    assert {entry["player_id"] for entry in first["rarity"]} == set(payload["grid"]["answers"][0][0])


def test_cli_reports_structured_errors(tmp_path, capsys):
    page = tmp_path / "league.json"
    page.write_text("<html><body>Please log in</body></html>", encoding="utf-8")

    assert main([str(page)]) == 1
    assert "error (web_page)" in capsys.readouterr().out
