"""Natural-language explanations for incorrect guesses.

Explanations are HTML fragments: passing clauses are wrapped in
``<span class="text-green-600">`` and failing ones in
``<span class="text-red-600">``. Player names and labels are escaped.
"""

from __future__ import annotations

from html import escape
from typing import Callable, Dict, List, Optional, Tuple

from hoopgrid.eligibility import predicates as p
from hoopgrid.eligibility import resolve_achievement_id
from hoopgrid.eligibility.labels import UNKNOWN_ACHIEVEMENT
from hoopgrid.evaluation.evaluate import Evaluation, evaluate
from hoopgrid.models import CellSpec, Player

PASS_CLASS = "text-green-600"
FAIL_CLASS = "text-red-600"

PHRASES: Dict[str, Tuple[str, str]] = {
    "first_overall_pick": ("was a first overall pick", "was not a first overall pick"),
    "first_round_pick": ("was a first-round pick", "was not a first-round pick"),
    "second_round_pick": ("was a second-round pick", "was not a second-round pick"),
    "undrafted": ("went undrafted", "was drafted"),
    "career_points_20k": ("had 20,000+ career points", "did not have 20,000+ career points"),
    "career_rebounds_10k": ("had 10,000+ career rebounds", "did not have 10,000+ career rebounds"),
    "career_assists_5k": ("had 5,000+ career assists", "did not have 5,000+ career assists"),
    "career_steals_2k": ("had 2,000+ career steals", "did not have 2,000+ career steals"),
    "career_blocks_1500": ("had 1,500+ career blocks", "did not have 1,500+ career blocks"),
    "career_threes_2k": ("made 2,000+ career threes", "did not make 2,000+ career threes"),
    "season_ppg_30": ("averaged 30+ PPG in a season", "did not average 30+ PPG in a season"),
    "season_apg_10": ("averaged 10+ APG in a season", "did not average 10+ APG in a season"),
    "season_rpg_15": ("averaged 15+ RPG in a season", "did not average 15+ RPG in a season"),
    "season_bpg_3": ("averaged 3+ BPG in a season", "did not average 3+ BPG in a season"),
    "season_spg_2_5": ("averaged 2.5+ SPG in a season", "did not average 2.5+ SPG in a season"),
    "season_50_40_90": ("recorded a 50/40/90 season", "did not record a 50/40/90 season"),
    "led_scoring": ("led the league in scoring", "did not lead the league in scoring"),
    "led_rebounds": ("led the league in rebounds", "did not lead the league in rebounds"),
    "led_assists": ("led the league in assists", "did not lead the league in assists"),
    "led_steals": ("led the league in steals", "did not lead the league in steals"),
    "led_blocks": ("led the league in blocks", "did not lead the league in blocks"),
    "game_50_points": ("scored 50+ in a game", "did not score 50+ in a game"),
    "game_triple_double": ("recorded a triple-double", "did not record a triple-double"),
    "game_20_rebounds": ("had 20+ rebounds in a game", "did not have 20+ rebounds in a game"),
    "game_20_assists": ("had 20+ assists in a game", "did not have 20+ assists in a game"),
    "game_10_threes": ("made 10+ threes in a game", "did not make 10+ threes in a game"),
    "mvp": ("won MVP", "did not win MVP"),
    "finals_mvp": ("won Finals MVP", "did not win Finals MVP"),
    "dpoy": ("won Defensive Player of the Year", "did not win Defensive Player of the Year"),
    "smoy": ("won Sixth Man of the Year", "did not win Sixth Man of the Year"),
    "roy": ("won Rookie of the Year", "did not win Rookie of the Year"),
    "mip": ("won Most Improved Player", "did not win Most Improved Player"),
    "all_star_age_35": ("made an All-Star team at 35+", "did not make an All-Star team at 35+"),
    "all_star": ("made an All-Star team", "did not make an All-Star team"),
    "all_league": ("made an All-League team", "did not make an All-League team"),
    "all_defensive": ("made an All-Defensive team", "did not make an All-Defensive team"),
    "hall_of_fame": ("is in the Hall of Fame", "is not in the Hall of Fame"),
    "champion": ("won a championship", "did not win a championship"),
    "played_15_seasons": ("played 15+ seasons", "did not play 15+ seasons"),
    "teammate_of_greats": ("was a teammate of an all-time great", "was never a teammate of an all-time great"),
    "only_one_team": ("played for only one team", "did not play for only one team"),
}


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def _career_detail(stat: str) -> Callable[[Player], Optional[str]]:
    return lambda player: f"{int(p.career_total(player, stat)):,}"


def _rate_detail(stat: str, unit: str) -> Callable[[Player], Optional[str]]:
    def render(player: Player) -> Optional[str]:
        best = p.best_season_rate(player, stat)
        return None if best is None else f"{best:.1f} {unit}"

    return render


# Actual values shown after a failed clause, e.g. "(18,250)".
DETAILS: Dict[str, Callable[[Player], Optional[str]]] = {
    "career_points_20k": _career_detail("pts"),
    "career_rebounds_10k": _career_detail("total_rebounds"),
    "career_assists_5k": _career_detail("ast"),
    "career_steals_2k": _career_detail("stl"),
    "career_blocks_1500": _career_detail("blk"),
    "career_threes_2k": _career_detail("threes_made"),
    "season_ppg_30": _rate_detail("pts", "PPG"),
    "season_apg_10": _rate_detail("ast", "APG"),
    "season_rpg_15": _rate_detail("trb", "RPG"),
    "played_15_seasons": lambda player: _plural(player.seasons_played, "season"),
    "only_one_team": lambda player: _plural(len(player.team_ids), "team"),
}


def describe(spec: CellSpec, passed: bool, player: Player) -> str:
    """Plain-text clause for one axis, without markup."""

    if spec.kind == "team":
        name = escape(spec.team_name)
        return f"played for the {name}" if passed else f"did not play for the {name}"

    achievement_id = resolve_achievement_id(spec)
    if achievement_id == UNKNOWN_ACHIEVEMENT:
        label = escape(spec.achievement_label)
        return f'met "{label}"' if passed else f'did not meet "{label}"'

    positive, negative = PHRASES[achievement_id]
    if passed:
        return positive
    detail = DETAILS.get(achievement_id)
    value = detail(player) if detail else None
    return f"{negative} ({value})" if value else negative


def _span(text: str, passed: bool) -> str:
    return f'<span class="{PASS_CLASS if passed else FAIL_CLASS}">{text}</span>'


def _explain_teams(name: str, row_spec: CellSpec, col_spec: CellSpec, evaluation: Evaluation) -> str:
    row_team = escape(row_spec.team_name)
    col_team = escape(col_spec.team_name)
    if not evaluation.row_pass and not evaluation.col_pass:
        return _span(f"{name} played for neither the {row_team} nor the {col_team}", False) + "."
    if evaluation.row_pass and evaluation.col_pass:
        return (
            f"{name} {_span(f'played for the {row_team}', True)} and "
            f"{_span(f'played for the {col_team}', True)}, but the guess was not accepted for this cell."
        )
    passed, failed = (row_team, col_team) if evaluation.row_pass else (col_team, row_team)
    return (
        f"{name} {_span(f'played for the {passed}', True)} "
        f"but {_span(f'did not play for the {failed}', False)}."
    )


def explain(
    player: Player,
    row_spec: CellSpec,
    col_spec: CellSpec,
    evaluation: Optional[Evaluation] = None,
) -> Optional[str]:
    """Explain why a guess does not fit a cell; ``None`` for correct guesses."""

    evaluation = evaluation or evaluate(player, row_spec, col_spec)
    if evaluation.correct:
        return None

    name = escape(player.name)
    if row_spec.kind == "team" and col_spec.kind == "team":
        return _explain_teams(name, row_spec, col_spec, evaluation)

    clauses: List[Tuple[bool, str]] = [
        (evaluation.row_pass, describe(row_spec, evaluation.row_pass, player)),
        (evaluation.col_pass, describe(col_spec, evaluation.col_pass, player)),
    ]
    # Team clause leads when the failure status is the same on both axes.
    if row_spec.kind != "team" and col_spec.kind == "team":
        clauses.reverse()

    if evaluation.row_pass != evaluation.col_pass:
        clauses.sort(key=lambda clause: not clause[0])
        (_, first), (_, second) = clauses
        return f"{name} {_span(first, True)} but {_span(second, False)}."
    if not evaluation.row_pass:
        (_, first), (_, second) = clauses
        return f"{name} {_span(first, False)} and {_span(second, False)}."
    (_, first), (_, second) = clauses
    return f"{name} {_span(first, True)} and {_span(second, True)}, but the guess was not accepted for this cell."
