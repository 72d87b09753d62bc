"""Render a canonical League back into the export document shape."""

from __future__ import annotations

from typing import Any, Dict, List

from hoopgrid.models import GameFeat, League, Player, SeasonLine


def _line_to_dict(line: SeasonLine) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "season": line.season,
        "gp": line.games_played,
        "pts": line.pts,
        "ast": line.ast,
        "stl": line.stl,
        "blk": line.blk,
        "trb": line.trb,
        "tp": line.threes_made,
        "fg": line.field_goals_made,
        "fga": line.field_goals_attempted,
        "ft": line.free_throws_made,
        "fta": line.free_throws_attempted,
        "tpa": line.threes_attempted,
        "playoffs": line.is_playoffs,
    }
    if line.team_id is not None:
        row["tid"] = line.team_id
    for key, value in (
        ("ws", line.win_shares),
        ("ows", line.offensive_win_shares),
        ("dws", line.defensive_win_shares),
    ):
        if value is not None:
            row[key] = value
    return row


def _feat_to_dict(player_id: int, feat: GameFeat) -> Dict[str, Any]:
    return {"pid": player_id, "season": feat.season, "stats": feat.model_dump(exclude={"season"})}


def _player_to_dict(player: Player) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "pid": player.id,
        "name": player.name,
        "stats": [_line_to_dict(line) for line in player.seasons],
        "statsTids": sorted(player.team_ids),
        "awards": [{"season": award.season, "type": award.type} for award in player.awards],
        "hof": player.hall_of_fame,
        "gameHighs": player.game_highs.model_dump(),
    }
    if player.birth_year is not None:
        payload["born"] = {"year": player.birth_year}
    if player.draft is not None:
        payload["draft"] = player.draft.model_dump()
    return payload


def league_to_document(league: League) -> Dict[str, List[Dict[str, Any]]]:
    """Produce a document that ``normalize`` maps back to an equivalent League."""

    return {
        "teams": [
            {"tid": team.id, "region": "", "name": team.display_name, "abbrev": team.abbreviation}
            for team in league.teams
        ],
        "players": [_player_to_dict(player) for player in league.players],
        "playerFeats": [_feat_to_dict(player.id, feat) for player in league.players for feat in player.game_feats],
    }
