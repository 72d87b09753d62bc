"""Per-cell rarity ranking under interchangeable scoring strategies."""

from __future__ import annotations

import math
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from hoopgrid.models import Player, RarityResult

SINGLE_PLAYER_SCORE = 50

# First matching needle wins so "Finals MVP" never also counts as MVP.
ACCOLADE_WEIGHTS: Tuple[Tuple[str, float], ...] = (
    ("finals mvp", 25),
    ("all-star mvp", 5),
    ("most valuable player", 40),
    ("defensive player of the year", 15),
    ("rookie of the year", 8),
    ("sixth man", 8),
    ("most improved", 6),
    ("all-league", 8),
    ("all-defensive", 4),
    ("all-rookie", 2),
    ("all-star", 6),
    ("won championship", 6),
)

RARITY_BUCKETS: Tuple[Tuple[int, str], ...] = (
    (80, "Ultra-rare"),
    (60, "Rare"),
    (40, "Notable"),
    (20, "Uncommon"),
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def accolade_points(player: Player) -> float:
    total = 0.0
    for award in player.awards:
        lowered = award.type.lower()
        for needle, weight in ACCOLADE_WEIGHTS:
            if needle in lowered:
                total += weight
                break
    return total


def prominence(player: Player) -> float:
    """Accolade, win share and longevity blend; higher means more familiar."""

    totals = player.career_totals
    longevity = 0.5 * math.log1p(totals.games_played) + 0.5 * player.seasons_played
    return (
        0.45 * accolade_points(player)
        + 0.25 * max(0.0, totals.career_win_shares)
        + 0.10 * longevity
    )


def rank_by_key(players: Iterable[Player], key: Callable[[Player], float]) -> Dict[int, RarityResult]:
    """Rank a cell's eligible players; a larger key means a more common answer.

    Players are ordered by descending key with ascending id breaking ties.
    The last player in that order is rank 1 with score 100 and the first is
    rank N with score 0. A lone player gets the neutral score of 50.
    """

    unique = {player.id: player for player in players}
    ordered = sorted(unique.values(), key=lambda player: (-key(player), player.id))
    count = len(ordered)
    if count == 0:
        return {}
    if count == 1:
        only = ordered[0]
        return {only.id: RarityResult(player_id=only.id, rank=1, score=SINGLE_PLAYER_SCORE)}

    results: Dict[int, RarityResult] = {}
    for index, player in enumerate(ordered):
        results[player.id] = RarityResult(
            player_id=player.id,
            rank=count - index,
            score=_round_half_up(100 * index / (count - 1)),
        )
    return results


class CountPercentileScorer:
    """Percentile rank on accolade-driven prominence."""

    name = "count"

    def key(self, player: Player) -> float:
        return prominence(player)

    def score(self, players: Iterable[Player]) -> Dict[int, RarityResult]:
        return rank_by_key(players, self.key)


class WinShareScorer:
    """Percentile rank on regular-season career win shares."""

    name = "win_shares"

    def key(self, player: Player) -> float:
        return player.career_totals.career_win_shares

    def score(self, players: Iterable[Player]) -> Dict[int, RarityResult]:
        return rank_by_key(players, self.key)


SCORERS = {
    CountPercentileScorer.name: CountPercentileScorer(),
    WinShareScorer.name: WinShareScorer(),
}

DEFAULT_STRATEGY = WinShareScorer.name


def get_scorer(strategy: str = DEFAULT_STRATEGY):
    """Fetch a scorer by strategy name, raising KeyError if missing."""

    if strategy not in SCORERS:
        raise KeyError(f"No rarity strategy named {strategy!r}; expected one of {', '.join(SCORERS)}")
    return SCORERS[strategy]


def score(players: Iterable[Player], strategy: str = DEFAULT_STRATEGY) -> Dict[int, RarityResult]:
    return get_scorer(strategy).score(players)


def rarest_first(players: Sequence[Player], strategy: str = DEFAULT_STRATEGY) -> List[Player]:
    """Order players by rarity rank, rank 1 first."""

    results = score(players, strategy)
    by_id = {player.id: player for player in players}
    return [by_id[player_id] for player_id in sorted(results, key=lambda pid: results[pid].rank)]


def rarity_label(value: int) -> str:
    for threshold, label in RARITY_BUCKETS:
        if value >= threshold:
            return label
    return "Common"
