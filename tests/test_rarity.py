import pytest

from hoopgrid.models import Award, Player, SeasonLine
from hoopgrid.rarity import (
    CountPercentileScorer,
    RarityCache,
    WinShareScorer,
    get_scorer,
    rank_by_key,
    rarity_label,
    score,
)


def _player(player_id: int, win_shares: float = 0.0, **kwargs) -> Player:
    seasons = [SeasonLine(season=2000, team_id=0, games_played=50, win_shares=win_shares)]
    return Player(id=player_id, name=f"Player {player_id}", seasons=seasons, **kwargs)


@pytest.mark.parametrize("strategy", ["count", "win_shares"])
def test_empty_and_single_player_sets(strategy):
    assert score([], strategy) == {}

    results = score([_player(7, 3.0)], strategy)
    assert results[7].rank == 1
    assert results[7].score == 50


@pytest.mark.parametrize("strategy", ["count", "win_shares"])
def test_scores_span_zero_to_hundred_and_ranks_are_a_permutation(strategy):
    players = [_player(pid, pid * 1.5) for pid in range(1, 8)]
    results = score(players, strategy)

    assert sorted(result.rank for result in results.values()) == list(range(1, 8))
    by_rank = {result.rank: result for result in results.values()}
    assert by_rank[1].score == 100
    assert by_rank[7].score == 0
    assert score(list(reversed(players)), strategy) == results


def test_win_share_ties_break_by_ascending_player_id():
    results = score([_player(3, 5.0), _player(1, 5.0), _player(2, 10.0)], "win_shares")

    assert (results[2].rank, results[2].score) == (3, 0)
    assert (results[1].rank, results[1].score) == (2, 50)
    assert (results[3].rank, results[3].score) == (1, 100)


def test_two_tied_players_still_get_extreme_scores():
    results = score([_player(4, 2.0), _player(9, 2.0)], "win_shares")
    assert (results[4].rank, results[4].score) == (2, 0)
    assert (results[9].rank, results[9].score) == (1, 100)


def test_fewest_win_shares_is_rarest():
    results = score([_player(1, 120.0), _player(2, 0.4), _player(3, 45.0)], "win_shares")
    assert results[2].rank == 1
    assert results[1].rank == 3


def test_win_share_strategy_uses_offense_plus_defense_fallback():
    split = Player(
        id=5,
        name="Split",
        seasons=[SeasonLine(season=2001, team_id=0, games_played=60, offensive_win_shares=8.0, defensive_win_shares=4.0)],
    )
    assert WinShareScorer().key(split) == pytest.approx(12.0)
    results = score([split, _player(6, 10.0)], "win_shares")
    assert results[5].rank == 2


def test_count_strategy_treats_decorated_players_as_common():
    decorated = _player(
        1,
        2.0,
        awards=[Award(season=2001, type="Most Valuable Player"), Award(season=2002, type="All-Star")],
    )
    plain = _player(2, 2.0)
    results = score([decorated, plain], "count")

    assert results[1].score == 0
    assert results[2].score == 100
    assert CountPercentileScorer().key(decorated) > CountPercentileScorer().key(plain)


def test_scores_round_half_up():
    results = rank_by_key([_player(pid) for pid in range(1, 10)], key=lambda player: -player.id)
    # Nine players: the second commonest sits at 100 * 1 / 8 = 12.5.
    assert sorted(result.score for result in results.values()) == [0, 13, 25, 38, 50, 63, 75, 88, 100]


def test_unknown_strategy_raises():
    with pytest.raises(KeyError):
        get_scorer("vibes")


@pytest.mark.parametrize(
    "value, label",
    [(100, "Ultra-rare"), (80, "Ultra-rare"), (79, "Rare"), (60, "Rare"), (45, "Notable"), (20, "Uncommon"), (0, "Common")],
)
def test_rarity_label_buckets(value, label):
    assert rarity_label(value) == label


def test_cache_reuses_results_for_same_eligible_set():
    cache = RarityCache()
    players = [_player(1, 1.0), _player(2, 2.0)]

    first = cache.get_or_compute("grid:0_0", players)
    second = cache.get_or_compute("grid:0_0", list(reversed(players)))

    assert first == second
    assert first[1] is second[1]
    assert len(cache) == 1
    assert "grid:0_0" in cache


def test_cache_recomputes_when_eligible_set_changes():
    cache = RarityCache()
    cache.get_or_compute("grid:0_0", [_player(1, 1.0), _player(2, 2.0)])

    updated = cache.get_or_compute("grid:0_0", [_player(1, 1.0), _player(2, 2.0), _player(3, 0.5)])

    assert set(updated) == {1, 2, 3}
    assert updated[3].rank == 1


def test_cache_keys_strategies_separately_and_invalidates():
    cache = RarityCache()
    players = [_player(1, 1.0), _player(2, 2.0)]
    cache.get_or_compute("g1:0_0", players, "win_shares")
    cache.get_or_compute("g1:0_0", players, "count")
    cache.get_or_compute("g1:1_1", players, "count")
    cache.get_or_compute("g2:0_0", players, "count")
    assert len(cache) == 4

    cache.invalidate("g1:0_0")
    assert "g1:0_0" not in cache
    assert len(cache) == 2

    cache.invalidate_prefix("g1:")
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0
