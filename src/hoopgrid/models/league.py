"""Canonical league models shared across ingestion, eligibility and rarity layers."""

from __future__ import annotations

import math
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from pydantic import BaseModel, Field, PrivateAttr, computed_field, field_validator, model_validator
from pydantic.config import ConfigDict


class Team(BaseModel):
    id: int = Field(..., ge=0)
    display_name: str = Field(..., min_length=1)
    abbreviation: str

    model_config = ConfigDict(frozen=True)


class SeasonLine(BaseModel):
    """One player-season-team stat line.

    ``team_id`` is ``None`` when the source line had no usable team id; such
    lines still count toward career totals but never toward team membership.
    """

    season: int
    team_id: Optional[int] = Field(default=None, ge=0)
    games_played: int = Field(default=0, ge=0)
    pts: int = Field(default=0, ge=0)
    ast: int = Field(default=0, ge=0)
    stl: int = Field(default=0, ge=0)
    blk: int = Field(default=0, ge=0)
    trb: int = Field(default=0, ge=0)
    threes_made: int = Field(default=0, ge=0)
    field_goals_made: int = Field(default=0, ge=0)
    field_goals_attempted: int = Field(default=0, ge=0)
    free_throws_made: int = Field(default=0, ge=0)
    free_throws_attempted: int = Field(default=0, ge=0)
    threes_attempted: int = Field(default=0, ge=0)
    offensive_win_shares: Optional[float] = None
    defensive_win_shares: Optional[float] = None
    win_shares: Optional[float] = None
    is_playoffs: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def win_share_value(self) -> float:
        """Win shares, falling back to offensive plus defensive when missing."""

        if self.win_shares is not None and math.isfinite(self.win_shares):
            return self.win_shares
        total = 0.0
        for part in (self.offensive_win_shares, self.defensive_win_shares):
            if part is not None and math.isfinite(part):
                total += part
        return total


class Award(BaseModel):
    season: Optional[int] = None
    type: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)


class DraftFacts(BaseModel):
    round: Optional[int] = None
    pick: Optional[int] = None
    year: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class GameHighs(BaseModel):
    """Single-game bests; zero when the export carries no game logs."""

    pts: int = Field(default=0, ge=0)
    trb: int = Field(default=0, ge=0)
    ast: int = Field(default=0, ge=0)
    tp: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class GameFeat(BaseModel):
    """One notable single-game box score from the export's game log."""

    season: Optional[int] = None
    pts: int = Field(default=0, ge=0)
    trb: int = Field(default=0, ge=0)
    ast: int = Field(default=0, ge=0)
    stl: int = Field(default=0, ge=0)
    blk: int = Field(default=0, ge=0)
    tp: int = Field(default=0, ge=0)
    td: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def double_digit_categories(self) -> int:
        return sum(1 for value in (self.pts, self.trb, self.ast, self.stl, self.blk) if value >= 10)


class CareerTotals(BaseModel):
    pts: int = 0
    ast: int = 0
    stl: int = 0
    blk: int = 0
    threes_made: int = 0
    total_rebounds: int = 0
    games_played: int = 0
    career_win_shares: float = 0.0

    model_config = ConfigDict(frozen=True)


def career_totals_from_lines(lines: Iterable[SeasonLine]) -> CareerTotals:
    """Aggregate regular-season lines; playoff lines never contribute."""

    pts = ast = stl = blk = threes = rebounds = games = 0
    win_shares = 0.0
    for line in lines:
        if line.is_playoffs:
            continue
        pts += line.pts
        ast += line.ast
        stl += line.stl
        blk += line.blk
        threes += line.threes_made
        rebounds += line.trb
        games += line.games_played
        win_shares += line.win_share_value
    return CareerTotals(
        pts=pts,
        ast=ast,
        stl=stl,
        blk=blk,
        threes_made=threes,
        total_rebounds=rebounds,
        games_played=games,
        career_win_shares=win_shares,
    )


class Player(BaseModel):
    """Normalized player with season lines and derived career totals."""

    id: int
    name: str = Field(..., min_length=1)
    birth_year: Optional[int] = None
    seasons: Tuple[SeasonLine, ...] = ()
    awards: Tuple[Award, ...] = ()
    draft: Optional[DraftFacts] = None
    hall_of_fame: bool = False
    team_ids: FrozenSet[int] = frozenset()
    game_highs: GameHighs = Field(default_factory=GameHighs)
    game_feats: Tuple[GameFeat, ...] = ()
    # Ids of all-time greats this player shared a team-season with.
    great_teammates: FrozenSet[int] = frozenset()

    model_config = ConfigDict(frozen=True)

    @field_validator("seasons")
    @classmethod
    def _order_seasons(cls, value: Tuple[SeasonLine, ...]) -> Tuple[SeasonLine, ...]:
        return tuple(sorted(value, key=lambda line: line.season))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def career_totals(self) -> CareerTotals:
        return career_totals_from_lines(self.seasons)

    @property
    def regular_seasons(self) -> Tuple[SeasonLine, ...]:
        return tuple(line for line in self.seasons if not line.is_playoffs)

    @property
    def seasons_played(self) -> int:
        """Distinct regular seasons with at least one game played."""

        return len({line.season for line in self.regular_seasons if line.games_played > 0})


class League(BaseModel):
    """Immutable league snapshot produced by the normalizer."""

    teams: Tuple[Team, ...] = ()
    players: Tuple[Player, ...] = ()

    model_config = ConfigDict(frozen=True)

    _teams_by_id: Dict[int, Team] = PrivateAttr(default_factory=dict)
    _players_by_id: Dict[int, Player] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "League":
        team_ids = [team.id for team in self.teams]
        if len(team_ids) != len(set(team_ids)):
            raise ValueError("team ids must be unique")
        player_ids = [player.id for player in self.players]
        if len(player_ids) != len(set(player_ids)):
            raise ValueError("player ids must be unique")
        return self

    def model_post_init(self, __context) -> None:
        self._teams_by_id = {team.id: team for team in self.teams}
        self._players_by_id = {player.id: player for player in self.players}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def season_range(self) -> Optional[Tuple[int, int]]:
        seasons = [line.season for player in self.players for line in player.seasons]
        if not seasons:
            return None
        return (min(seasons), max(seasons))

    def team(self, team_id: int) -> Team:
        """Fetch a team by id, raising KeyError if missing."""

        if team_id not in self._teams_by_id:
            raise KeyError(f"No team with id={team_id!r}")
        return self._teams_by_id[team_id]

    def player(self, player_id: int) -> Player:
        """Fetch a player by id, raising KeyError if missing."""

        if player_id not in self._players_by_id:
            raise KeyError(f"No player with id={player_id!r}")
        return self._players_by_id[player_id]

    def has_player(self, player_id: int) -> bool:
        return player_id in self._players_by_id

    def roster(self, team_id: int) -> Tuple[Player, ...]:
        """Players whose membership set contains ``team_id``, in league order."""

        return tuple(player for player in self.players if team_id in player.team_ids)
