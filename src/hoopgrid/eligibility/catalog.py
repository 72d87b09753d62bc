"""Achievement catalog mapping stable identifiers to labels and predicates."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterable

from hoopgrid.eligibility import predicates as p
from hoopgrid.eligibility.labels import UNKNOWN_ACHIEVEMENT, classify_label
from hoopgrid.models import AchievementSpec, CellSpec, League, Player

Predicate = Callable[[Player], bool]


@dataclass(frozen=True)
class Achievement:
    id: str
    label: str
    category: str
    predicate: Predicate

    def spec(self) -> AchievementSpec:
        return AchievementSpec(achievement_id=self.id, achievement_label=self.label)


def _career(stat: str, threshold: int) -> Predicate:
    return partial(p.career_total_at_least, stat=stat, threshold=threshold)


def _rate(stat: str, threshold: float) -> Predicate:
    return partial(p.season_rate_at_least, stat=stat, threshold=threshold)


def _award(*needles: str) -> Predicate:
    return lambda player: p.has_award(player, *needles)


def _game(stat: str, threshold: int) -> Predicate:
    return partial(p.game_high_at_least, stat=stat, threshold=threshold)


_CATALOG: Dict[str, Achievement] = {
    entry.id: entry
    for entry in (
        # Career milestones
        Achievement("career_points_20k", "20,000+ Career Points", "career", _career("pts", 20_000)),
        Achievement("career_rebounds_10k", "10,000+ Career Rebounds", "career", _career("total_rebounds", 10_000)),
        Achievement("career_assists_5k", "5,000+ Career Assists", "career", _career("ast", 5_000)),
        Achievement("career_steals_2k", "2,000+ Career Steals", "career", _career("stl", 2_000)),
        Achievement("career_blocks_1500", "1,500+ Career Blocks", "career", _career("blk", 1_500)),
        Achievement("career_threes_2k", "2,000+ Made Threes", "career", _career("threes_made", 2_000)),
        # Single-season rates
        Achievement("season_ppg_30", "Averaged 30+ PPG in a Season", "season", _rate("pts", 30)),
        Achievement("season_apg_10", "Averaged 10+ APG in a Season", "season", _rate("ast", 10)),
        Achievement("season_rpg_15", "Averaged 15+ RPG in a Season", "season", _rate("trb", 15)),
        Achievement("season_bpg_3", "Averaged 3+ BPG in a Season", "season", _rate("blk", 3)),
        Achievement("season_spg_2_5", "Averaged 2.5+ SPG in a Season", "season", _rate("stl", 2.5)),
        Achievement("season_50_40_90", "Shot 50/40/90 in a Season", "season", p.shooting_season),
        # League leaders
        Achievement("led_scoring", "Led League in Scoring", "leader", _award("Scoring Leader")),
        Achievement("led_rebounds", "Led League in Rebounds", "leader", _award("Rebounding Leader")),
        Achievement("led_assists", "Led League in Assists", "leader", _award("Assists Leader")),
        Achievement("led_steals", "Led League in Steals", "leader", _award("Steals Leader")),
        Achievement("led_blocks", "Led League in Blocks", "leader", _award("Blocks Leader")),
        # Game feats, only satisfiable when the export carries game logs or highs
        Achievement("game_50_points", "Scored 50+ in a Game", "game", _game("pts", 50)),
        Achievement("game_triple_double", "Triple-Double in a Game", "game", p.recorded_triple_double),
        Achievement("game_20_rebounds", "20+ Rebounds in a Game", "game", _game("trb", 20)),
        Achievement("game_20_assists", "20+ Assists in a Game", "game", _game("ast", 20)),
        Achievement("game_10_threes", "10+ Threes in a Game", "game", _game("tp", 10)),
        # Awards
        Achievement("mvp", "MVP Winner", "award", _award("Most Valuable Player")),
        Achievement("dpoy", "Defensive Player of the Year", "award", _award("Defensive Player of the Year")),
        Achievement("roy", "Rookie of the Year", "award", _award("Rookie of the Year")),
        Achievement("smoy", "Sixth Man of the Year", "award", _award("Sixth Man of the Year")),
        Achievement("mip", "Most Improved Player", "award", _award("Most Improved Player")),
        Achievement("finals_mvp", "Finals MVP", "award", _award("Finals MVP")),
        Achievement("all_league", "All-League Team", "award", _award("All-League")),
        Achievement("all_defensive", "All-Defensive Team", "award", _award("All-Defensive")),
        Achievement("all_star", "All-Star Selection", "award", _award("All-Star")),
        Achievement("champion", "Won a Championship", "award", _award("Won Championship")),
        Achievement("hall_of_fame", "Hall of Fame", "award", p.in_hall_of_fame),
        # Career length and draft
        Achievement("played_15_seasons", "Played 15+ Seasons", "career", partial(p.seasons_played_at_least, seasons=15)),
        Achievement("first_overall_pick", "#1 Overall Draft Pick", "draft", p.first_overall_pick),
        Achievement("first_round_pick", "First Round Pick", "draft", partial(p.drafted_in_round, round_number=1)),
        Achievement("second_round_pick", "2nd Round Pick", "draft", partial(p.drafted_in_round, round_number=2)),
        Achievement("undrafted", "Undrafted Player", "draft", p.undrafted),
        Achievement(
            "all_star_age_35",
            "Made All-Star Team at Age 35+",
            "special",
            partial(p.award_at_age, needle="All-Star", min_age=35),
        ),
        Achievement("teammate_of_greats", "Teammate of All-Time Greats", "special", p.teammate_of_greats),
        Achievement("only_one_team", "Only One Team", "special", p.franchise_lifer),
    )
}


def iter_achievements() -> Iterable[Achievement]:
    """Return an iterator over the catalog in display order."""

    return _CATALOG.values()


def get_achievement(achievement_id: str) -> Achievement:
    """Fetch an achievement by id, raising KeyError if missing."""

    if achievement_id not in _CATALOG:
        raise KeyError(f"No achievement configured for id={achievement_id!r}")
    return _CATALOG[achievement_id]


def resolve_achievement_id(spec: AchievementSpec) -> str:
    """Catalog id for an achievement criterion.

    Ids outside the catalog fall back to classifying the label, and to
    ``"unknown"`` when no rule matches.
    """

    if spec.achievement_id in _CATALOG:
        return spec.achievement_id
    return classify_label(spec.achievement_label)


def meets_spec(player: Player, spec: CellSpec) -> bool:
    """Evaluate one grid axis against a player.

    Achievements that resolve to no catalog entry evaluate to False.
    """

    if spec.kind == "team":
        return p.played_for(player, spec.team_id)
    achievement_id = resolve_achievement_id(spec)
    if achievement_id == UNKNOWN_ACHIEVEMENT:
        return False
    return _CATALOG[achievement_id].predicate(player)


def achievement_counts(league: League) -> Dict[str, int]:
    """Number of league players satisfying each achievement."""

    return {entry.id: p.count_players(league.players, entry.predicate) for entry in _CATALOG.values()}
