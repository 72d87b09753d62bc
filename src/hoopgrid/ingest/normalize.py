"""Map loosely-typed league exports onto the canonical League model."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from pydantic import ValidationError

from hoopgrid.eligibility import predicates as p
from hoopgrid.errors import SchemaError
from hoopgrid.models import Award, DraftFacts, GameFeat, GameHighs, League, Player, SeasonLine, Team


logger = logging.getLogger(__name__)

PLAYER_ID_KEYS = ("pid", "playerId", "id")
TEAM_ID_KEYS = ("tid", "teamId", "id")
LINE_TEAM_KEYS = ("tid", "teamId", "teamID")
LINE_SEASON_KEYS = ("season", "year")
SEASON_SOURCES = ("stats", "careerStats", "teamHistory")
GAME_HIGH_KEYS = ("pts", "trb", "ast", "tp")
FEAT_PLAYER_KEYS = ("pid", "playerID", "playerId")

LEADER_AWARD_TYPES = {
    "pts": "League Scoring Leader",
    "trb": "League Rebounding Leader",
    "ast": "League Assists Leader",
    "stl": "League Steals Leader",
    "blk": "League Blocks Leader",
}

UNKNOWN_PLAYER_NAME = "Unknown Player"


def _first(raw: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    number = _as_float(value)
    if number is None:
        return None
    return int(round(number))


def _count(value: Any) -> int:
    number = _as_int(value)
    return number if number is not None and number > 0 else 0


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _locate_collections(doc: Any) -> Tuple[List[Any], List[Any], Mapping[str, Any]]:
    """Return the raw (players, teams, league root) for any supported document shape."""

    if isinstance(doc, list):
        if doc and not any(isinstance(item, Mapping) for item in doc):
            raise SchemaError("Top-level array does not contain player objects")
        return doc, [], {}
    if not isinstance(doc, Mapping):
        raise SchemaError("League document must be a JSON object or array")

    root: Mapping[str, Any] = doc
    nested = doc.get("league")
    if not isinstance(doc.get("players"), list) and isinstance(nested, Mapping):
        root = nested
    players = root.get("players")
    if not isinstance(players, list):
        raise SchemaError("League file has no players array")
    teams = root.get("teams")
    return players, teams if isinstance(teams, list) else [], root


def team_display_name(region: str, name: str, team_id: int) -> str:
    if region and name:
        return f"{region} {name}"
    return region or name or f"Team {team_id}"


def _team_abbreviation(raw: Mapping[str, Any], region: str, team_id: int) -> str:
    abbrev = _text(raw.get("abbrev"))
    if abbrev:
        return abbrev
    if region:
        return region[:3].upper()
    return f"T{team_id}"


def _normalize_team(raw: Mapping[str, Any], index: int) -> Optional[Team]:
    team_id = _as_int(_first(raw, TEAM_ID_KEYS))
    if team_id is None:
        team_id = index
    if team_id < 0:
        return None
    region = _text(raw.get("region"))
    name = _text(raw.get("name"))
    return Team(
        id=team_id,
        display_name=team_display_name(region, name, team_id),
        abbreviation=_team_abbreviation(raw, region, team_id),
    )


def _line_rebounds(raw: Mapping[str, Any]) -> int:
    if raw.get("trb") is not None:
        return _count(raw.get("trb"))
    return _count(raw.get("orb")) + _count(raw.get("drb"))


def _normalize_line(raw: Mapping[str, Any]) -> Optional[SeasonLine]:
    season = _as_int(_first(raw, LINE_SEASON_KEYS))
    if season is None:
        return None
    team_id = _as_int(_first(raw, LINE_TEAM_KEYS))
    if team_id is not None and team_id < 0:
        team_id = None
    return SeasonLine(
        season=season,
        team_id=team_id,
        games_played=_count(raw.get("gp")),
        pts=_count(raw.get("pts")),
        ast=_count(raw.get("ast")),
        stl=_count(raw.get("stl")),
        blk=_count(raw.get("blk")),
        trb=_line_rebounds(raw),
        threes_made=_count(raw.get("tp")),
        field_goals_made=_count(raw.get("fg")),
        field_goals_attempted=_count(raw.get("fga")),
        free_throws_made=_count(raw.get("ft")),
        free_throws_attempted=_count(raw.get("fta")),
        threes_attempted=_count(raw.get("tpa")),
        offensive_win_shares=_as_float(raw.get("ows")),
        defensive_win_shares=_as_float(raw.get("dws")),
        win_shares=_as_float(raw.get("ws")),
        is_playoffs=bool(raw.get("playoffs") or raw.get("isPlayoffs")),
    )


def _raw_lines(raw: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    """Season lines from the first source holding at least one line object."""

    for key in SEASON_SOURCES:
        lines = raw.get(key)
        if isinstance(lines, list):
            usable = [line for line in lines if isinstance(line, Mapping)]
            if usable:
                return usable
    return []


def _player_name(raw: Mapping[str, Any]) -> str:
    name = _text(raw.get("name"))
    if name:
        return name
    full = " ".join(part for part in (_text(raw.get("firstName")), _text(raw.get("lastName"))) if part)
    return full or UNKNOWN_PLAYER_NAME


def _birth_year(raw: Mapping[str, Any]) -> Optional[int]:
    born = raw.get("born")
    if isinstance(born, Mapping) and _as_int(born.get("year")) is not None:
        return _as_int(born.get("year"))
    return _as_int(raw.get("bornYear"))


def _draft(raw: Mapping[str, Any]) -> Optional[DraftFacts]:
    draft = raw.get("draft")
    if not isinstance(draft, Mapping):
        return None
    round_number = _as_int(_first(draft, ("round", "roundNumber")))
    pick = _as_int(draft.get("pick"))
    if round_number is None and pick is None:
        return None
    return DraftFacts(round=round_number, pick=pick, year=_as_int(draft.get("year")))


def _awards(raw: Mapping[str, Any]) -> Tuple[Award, ...]:
    awards = raw.get("awards")
    if not isinstance(awards, list):
        return ()
    result: List[Award] = []
    for entry in awards:
        if not isinstance(entry, Mapping):
            continue
        award_type = _text(entry.get("type"))
        if award_type:
            result.append(Award(season=_as_int(entry.get("season")), type=award_type))
    return tuple(result)


def _game_highs(raw: Mapping[str, Any], lines: Iterable[Mapping[str, Any]]) -> GameHighs:
    best = {key: 0 for key in GAME_HIGH_KEYS}
    sources = [raw.get("gameHighs"), *(line.get("gameHighs") for line in lines)]
    for source in sources:
        if not isinstance(source, Mapping):
            continue
        for key in GAME_HIGH_KEYS:
            best[key] = max(best[key], _count(source.get(key)))
    return GameHighs(**best)


def _feat_player_id(raw: Mapping[str, Any]) -> Optional[int]:
    player_id = _as_int(_first(raw, FEAT_PLAYER_KEYS))
    if player_id is None and isinstance(raw.get("player"), Mapping):
        player_id = _as_int(raw["player"].get("pid"))
    return player_id


def _normalize_feat(raw: Mapping[str, Any]) -> GameFeat:
    stats = _first(raw, ("stats", "s"))
    if not isinstance(stats, Mapping):
        stats = raw
    season = _first(raw, LINE_SEASON_KEYS)
    if season is None:
        season = _first(stats, LINE_SEASON_KEYS)
    return GameFeat(
        season=_as_int(season),
        pts=_count(stats.get("pts")),
        trb=_line_rebounds(stats),
        ast=_count(stats.get("ast")),
        stl=_count(stats.get("stl")),
        blk=_count(stats.get("blk")),
        tp=_count(stats.get("tp")),
        td=_count(stats.get("td")),
    )


def _raw_feats(root: Mapping[str, Any]) -> Dict[int, List[GameFeat]]:
    """Group the league-level ``playerFeats`` game log by player id."""

    feats: Dict[int, List[GameFeat]] = defaultdict(list)
    entries = root.get("playerFeats")
    if not isinstance(entries, list):
        return feats
    skipped = 0
    for entry in entries:
        player_id = _feat_player_id(entry) if isinstance(entry, Mapping) else None
        if player_id is None:
            skipped += 1
            continue
        feats[player_id].append(_normalize_feat(entry))
    if skipped:
        logger.warning("Skipped %d game feats without a player id", skipped)
    return feats


def _games_by_season(root: Mapping[str, Any], seasons: Iterable[int]) -> Dict[int, int]:
    """Scheduled games per season from ``gameAttributes.numGames``."""

    attributes = root.get("gameAttributes")
    rows = attributes.get("numGames") if isinstance(attributes, Mapping) else None
    games: Dict[int, int] = {}
    flat = _as_int(rows)
    if flat is not None and flat > 0:
        return {season: flat for season in seasons}
    if not isinstance(rows, list):
        return games
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        season = _as_int(row.get("season"))
        count = _as_int(_first(row, ("numGames", "value")))
        if season is not None and count is not None and count > 0:
            games[season] = count
    return games


def _with_leader_awards(players: Dict[int, Player], games_by_season: Dict[int, int]) -> int:
    """Add stats-derived leader awards when the export records none."""

    if any("leader" in award.type.lower() for player in players.values() for award in player.awards):
        return 0
    extra: Dict[int, List[Award]] = defaultdict(list)
    for season, by_stat in sorted(p.season_leaders(players.values(), games_by_season).items()):
        for stat, award_type in LEADER_AWARD_TYPES.items():
            for player_id in sorted(by_stat[stat]):
                extra[player_id].append(Award(season=season, type=award_type))
    for player_id, awards in extra.items():
        player = players[player_id]
        players[player_id] = player.model_copy(update={"awards": player.awards + tuple(awards)})
    return sum(len(awards) for awards in extra.values())


def _with_great_teammates(players: Dict[int, Player]) -> int:
    greats = p.all_time_greats(players.values())
    if not greats:
        return 0
    shared = p.great_teammate_ids(list(players.values()), greats)
    for player_id, great_ids in shared.items():
        if great_ids:
            players[player_id] = players[player_id].model_copy(update={"great_teammates": great_ids})
    return len(greats)


def _team_history(raw: Mapping[str, Any], lines: Iterable[SeasonLine]) -> Set[int]:
    team_ids: Set[int] = set()
    history = raw.get("statsTids")
    if isinstance(history, list):
        for value in history:
            team_id = _as_int(value)
            if team_id is not None and team_id >= 0:
                team_ids.add(team_id)
    for line in lines:
        if not line.is_playoffs and line.team_id is not None and line.games_played > 0:
            team_ids.add(line.team_id)
    return team_ids


def _normalize_player(raw: Mapping[str, Any], index: int, feats: Mapping[int, List[GameFeat]]) -> Player:
    player_id = _as_int(_first(raw, PLAYER_ID_KEYS))
    if player_id is None:
        player_id = index
    raw_lines = _raw_lines(raw)
    lines = [line for line in (_normalize_line(entry) for entry in raw_lines) if line is not None]
    awards = _awards(raw)
    hall_of_fame = (
        bool(raw.get("hof"))
        or bool(raw.get("retiredHallOfFame"))
        or any("hall of fame" in award.type.lower() for award in awards)
    )
    return Player(
        id=player_id,
        name=_player_name(raw),
        birth_year=_birth_year(raw),
        seasons=tuple(lines),
        awards=awards,
        draft=_draft(raw),
        hall_of_fame=hall_of_fame,
        team_ids=frozenset(_team_history(raw, lines)),
        game_highs=_game_highs(raw, raw_lines),
        game_feats=tuple(feats.get(player_id, ())),
    )


def normalize(doc: Any) -> League:
    """Build a League from a decoded export document.

    Team and player order follows the source arrays. Duplicate ids keep the
    first occurrence. Teams referenced by player history but missing from
    the teams array get a ``Team {id}`` placeholder.
    """

    raw_players, raw_teams, root = _locate_collections(doc)
    feats = _raw_feats(root)

    teams: Dict[int, Team] = {}
    for index, raw in enumerate(raw_teams):
        if not isinstance(raw, Mapping):
            continue
        team = _normalize_team(raw, index)
        if team is None:
            continue
        if team.id in teams:
            logger.warning("Dropping duplicate team id %d", team.id)
            continue
        teams[team.id] = team

    players: Dict[int, Player] = {}
    for index, raw in enumerate(raw_players):
        if not isinstance(raw, Mapping):
            raise SchemaError(f"Player entry {index} is not an object")
        try:
            player = _normalize_player(raw, index, feats)
        except ValidationError as exc:
            raise SchemaError(f"Player entry {index} could not be normalized: {exc}") from exc
        if player.id in players:
            logger.warning("Dropping duplicate player id %d (%s)", player.id, player.name)
            continue
        players[player.id] = player

    seasons = {line.season for player in players.values() for line in player.seasons}
    synthesized_awards = _with_leader_awards(players, _games_by_season(root, seasons))
    if synthesized_awards:
        logger.info("No leader awards in export; derived %d from season stats", synthesized_awards)
    greats = _with_great_teammates(players)
    if greats:
        logger.debug("Linked teammates of %d all-time greats", greats)

    referenced = sorted({team_id for player in players.values() for team_id in player.team_ids} - set(teams))
    for team_id in referenced:
        teams[team_id] = Team(id=team_id, display_name=f"Team {team_id}", abbreviation=f"T{team_id}")

    league = League(teams=tuple(teams.values()), players=tuple(players.values()))
    logger.info(
        "Normalized league: %d teams (%d synthesized), %d players, seasons %s",
        len(league.teams),
        len(referenced),
        len(league.players),
        league.season_range,
    )
    return league
