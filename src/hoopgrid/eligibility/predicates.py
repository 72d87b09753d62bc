"""Pure predicates evaluated against canonical players.

Every function here is total: absent statistics count as zero or false and
nothing raises for a well-formed ``Player``.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from hoopgrid.models import Player

RATE_STATS = ("pts", "ast", "stl", "blk", "trb", "threes_made")


def played_for(player: Player, team_id: int) -> bool:
    return team_id in player.team_ids


def career_total(player: Player, stat: str) -> float:
    return getattr(player.career_totals, stat, 0) or 0


def career_total_at_least(player: Player, stat: str, threshold: float) -> bool:
    return career_total(player, stat) >= threshold


def season_aggregates(player: Player) -> Dict[int, Dict[str, int]]:
    """Sum regular-season lines per season so split seasons count once."""

    totals: Dict[int, Dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for line in player.regular_seasons:
        bucket = totals[line.season]
        bucket["games_played"] += line.games_played
        for stat in RATE_STATS:
            bucket[stat] += getattr(line, stat)
        bucket["field_goals_made"] += line.field_goals_made
        bucket["field_goals_attempted"] += line.field_goals_attempted
        bucket["threes_attempted"] += line.threes_attempted
        bucket["free_throws_made"] += line.free_throws_made
        bucket["free_throws_attempted"] += line.free_throws_attempted
    return totals


def best_season_rate(player: Player, stat: str) -> Optional[float]:
    """Highest per-game rate for ``stat``; ``None`` without a played season."""

    best: Optional[float] = None
    for bucket in season_aggregates(player).values():
        games = bucket["games_played"]
        if games <= 0:
            continue
        rate = bucket[stat] / games
        if best is None or rate > best:
            best = rate
    return best


def season_rate_at_least(player: Player, stat: str, threshold: float) -> bool:
    best = best_season_rate(player, stat)
    return best is not None and best >= threshold


def _pct(made: int, attempted: int) -> float:
    return made / attempted if attempted > 0 else 0.0


def shooting_season(
    player: Player,
    *,
    fg_pct: float = 0.5,
    tp_pct: float = 0.4,
    ft_pct: float = 0.9,
    min_fga: int = 300,
    min_tpa: int = 150,
    min_fta: int = 125,
) -> bool:
    """True when one season clears every shooting split on qualifying volume."""

    for bucket in season_aggregates(player).values():
        fga = bucket["field_goals_attempted"]
        tpa = bucket["threes_attempted"]
        fta = bucket["free_throws_attempted"]
        if fga < min_fga or tpa < min_tpa or fta < min_fta:
            continue
        if (
            _pct(bucket["field_goals_made"], fga) >= fg_pct
            and _pct(bucket["threes_made"], tpa) >= tp_pct
            and _pct(bucket["free_throws_made"], fta) >= ft_pct
        ):
            return True
    return False


def has_award(player: Player, *needles: str) -> bool:
    """Case-insensitive substring match against award types."""

    lowered = [needle.lower() for needle in needles]
    return any(needle in award.type.lower() for award in player.awards for needle in lowered)


def game_high_at_least(player: Player, stat: str, threshold: int) -> bool:
    """Declared game highs or any logged game reach ``threshold``."""

    if getattr(player.game_highs, stat, 0) >= threshold:
        return True
    return any(getattr(feat, stat, 0) >= threshold for feat in player.game_feats)


def recorded_triple_double(player: Player) -> bool:
    """One logged game with double digits in three categories.

    Per-stat game highs may come from different nights and never count.
    """

    return any(feat.td > 0 or feat.double_digit_categories >= 3 for feat in player.game_feats)


def first_overall_pick(player: Player) -> bool:
    draft = player.draft
    return draft is not None and draft.pick == 1 and draft.round in (None, 1)


def drafted_in_round(player: Player, round_number: int) -> bool:
    draft = player.draft
    return draft is not None and draft.round == round_number and (draft.pick or 0) > 0


def undrafted(player: Player) -> bool:
    draft = player.draft
    if draft is None:
        return True
    return (draft.pick or 0) <= 0 or (draft.round or 0) <= 0


def seasons_played_at_least(player: Player, seasons: int) -> bool:
    return player.seasons_played >= seasons


def award_at_age(player: Player, needle: str, min_age: int) -> bool:
    if player.birth_year is None:
        return False
    lowered = needle.lower()
    return any(
        award.season is not None
        and lowered in award.type.lower()
        and award.season - player.birth_year >= min_age
        for award in player.awards
    )


def in_hall_of_fame(player: Player) -> bool:
    return player.hall_of_fame or has_award(player, "Hall of Fame")


def franchise_lifer(player: Player) -> bool:
    return len(player.team_ids) == 1


def teammate_of_greats(player: Player) -> bool:
    return bool(player.great_teammates)


def count_players(players: Iterable[Player], predicate) -> int:
    return sum(1 for player in players if predicate(player))


# League-level derivations. These need every player at once, so the
# normalizer runs them and stores the results on each Player.

LEADER_STATS = ("pts", "trb", "ast", "stl", "blk")
LEADER_MIN_GAMES_SHARE = 0.58
DEFAULT_SEASON_GAMES = 82
_EPSILON = 1e-9


def season_leaders(
    players: Iterable[Player],
    games_by_season: Optional[Dict[int, int]] = None,
) -> Dict[int, Dict[str, Set[int]]]:
    """Per-game leaders for each season and leader stat; ties all lead.

    A player qualifies in a season by playing at least 58% of that season's
    games (82 when the export does not say).
    """

    games_by_season = games_by_season or {}
    rates: Dict[int, List[Tuple[int, Dict[str, float]]]] = defaultdict(list)
    for player in players:
        for season, bucket in season_aggregates(player).items():
            games = bucket["games_played"]
            minimum = math.ceil(games_by_season.get(season, DEFAULT_SEASON_GAMES) * LEADER_MIN_GAMES_SHARE)
            if games <= 0 or games < minimum:
                continue
            rates[season].append((player.id, {stat: bucket[stat] / games for stat in LEADER_STATS}))

    leaders: Dict[int, Dict[str, Set[int]]] = {}
    for season, rows in rates.items():
        leaders[season] = {}
        for stat in LEADER_STATS:
            best = max(row[stat] for _, row in rows)
            if best <= 0:
                leaders[season][stat] = set()
                continue
            leaders[season][stat] = {player_id for player_id, row in rows if row[stat] >= best - _EPSILON}
    return leaders


def all_time_greats(players: Iterable[Player], *, min_win_shares: float = 150.0, limit: int = 20) -> List[Player]:
    """Top career win-share players above ``min_win_shares``, best first."""

    qualified = [player for player in players if player.career_totals.career_win_shares >= min_win_shares]
    qualified.sort(key=lambda player: (-player.career_totals.career_win_shares, player.id))
    return qualified[:limit]


def team_seasons(player: Player) -> Set[Tuple[int, int]]:
    """(season, team id) pairs where the player appeared in a regular-season game."""

    return {
        (line.season, line.team_id)
        for line in player.regular_seasons
        if line.team_id is not None and line.games_played > 0
    }


def great_teammate_ids(players: Sequence[Player], greats: Iterable[Player]) -> Dict[int, FrozenSet[int]]:
    """Map each player id to the greats they shared a team-season with."""

    greats_by_team_season: Dict[Tuple[int, int], Set[int]] = defaultdict(set)
    for great in greats:
        for key in team_seasons(great):
            greats_by_team_season[key].add(great.id)

    result: Dict[int, FrozenSet[int]] = {}
    for player in players:
        shared: Set[int] = set()
        for key in team_seasons(player):
            shared.update(greats_by_team_season.get(key, ()))
        shared.discard(player.id)
        result[player.id] = frozenset(shared)
    return result
