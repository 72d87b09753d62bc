import pytest

from hoopgrid.eligibility import get_achievement, iter_achievements
from hoopgrid.evaluation import Evaluation, UNKNOWN_ACHIEVEMENT, classify_label, describe, evaluate, explain
from hoopgrid.models import AchievementSpec, Award, Player, SeasonLine, TeamSpec

GREEN = '<span class="text-green-600">'
RED = '<span class="text-red-600">'

LAKERS = TeamSpec(team_id=0, team_name="Los Angeles Lakers")
CELTICS = TeamSpec(team_id=1, team_name="Boston Celtics")
BULLS = TeamSpec(team_id=2, team_name="Chicago Bulls")


def _player(name: str = "Jordan Example", team_ids=(0,), **kwargs) -> Player:
    return Player(id=23, name=name, team_ids=frozenset(team_ids), **kwargs)


def test_evaluate_reports_each_axis():
    player = _player(team_ids=(0, 2))

    assert evaluate(player, LAKERS, BULLS) == Evaluation(row_pass=True, col_pass=True, correct=True)
    assert evaluate(player, LAKERS, CELTICS) == Evaluation(row_pass=True, col_pass=False, correct=False)
    assert evaluate(player, CELTICS, get_achievement("mvp").spec()).correct is False


def test_explain_returns_none_for_correct_guess():
    assert explain(_player(team_ids=(0, 2)), LAKERS, BULLS) is None


def test_explain_team_cell_with_one_team_missing():
    message = explain(_player(), LAKERS, CELTICS)
    assert message == (
        f"Jordan Example {GREEN}played for the Los Angeles Lakers</span> "
        f"but {RED}did not play for the Boston Celtics</span>."
    )

    # The passing team leads even when it is the column.
    message = explain(_player(team_ids=(1,)), LAKERS, CELTICS)
    assert message.startswith(f"Jordan Example {GREEN}played for the Boston Celtics</span> but")


def test_explain_team_cell_with_neither_team():
    message = explain(_player(team_ids=(2,)), LAKERS, CELTICS)
    assert message == f"{RED}Jordan Example played for neither the Los Angeles Lakers nor the Boston Celtics</span>."


def test_explain_mixed_cell_includes_actual_value():
    scorer = _player(seasons=[SeasonLine(season=2001, team_id=0, games_played=82, pts=12_000)])
    message = explain(scorer, LAKERS, get_achievement("career_points_20k").spec())

    assert message == (
        f"Jordan Example {GREEN}played for the Los Angeles Lakers</span> "
        f"but {RED}did not have 20,000+ career points (12,000)</span>."
    )


def test_explain_mixed_cell_when_both_fail_leads_with_team():
    player = _player(
        team_ids=(2,),
        seasons=[SeasonLine(season=2001, team_id=2, games_played=50, pts=1370)],
    )
    message = explain(player, get_achievement("season_ppg_30").spec(), CELTICS)

    assert message == (
        f"Jordan Example {RED}did not play for the Boston Celtics</span> "
        f"and {RED}did not average 30+ PPG in a season (27.4 PPG)</span>."
    )


def test_explain_mixed_cell_leads_with_passing_achievement():
    mvp = _player(team_ids=(2,), awards=[Award(season=1991, type="Most Valuable Player")])
    message = explain(mvp, LAKERS, get_achievement("mvp").spec())

    assert message == (
        f"Jordan Example {GREEN}won MVP</span> but {RED}did not play for the Los Angeles Lakers</span>."
    )


def test_explain_falls_back_to_label_for_unknown_achievement():
    spec = AchievementSpec(achievement_id="custom", achievement_label="Wore Number 99")
    message = explain(_player(), LAKERS, spec)

    assert f'{RED}did not meet "Wore Number 99"</span>' in message


def test_custom_id_with_recognizable_label_uses_catalog_phrase():
    spec = AchievementSpec(achievement_id="custom", achievement_label="Hall of Fame inductee")
    assert describe(spec, False, _player()) == "is not in the Hall of Fame"


@pytest.mark.parametrize("achievement", list(iter_achievements()), ids=lambda entry: entry.id)
def test_every_catalog_label_classifies_to_its_own_id(achievement):
    assert classify_label(achievement.label) == achievement.id


def test_unrecognized_label_is_unknown():
    assert classify_label("Owned a Racehorse") == UNKNOWN_ACHIEVEMENT


def test_explanations_escape_markup():
    player = _player(name="<b>Bobby</b> & Co")
    spec = TeamSpec(team_id=9, team_name="Tables <script>")
    message = explain(player, LAKERS, spec)

    assert "&lt;b&gt;Bobby&lt;/b&gt; &amp; Co" in message
    assert "Tables &lt;script&gt;" in message
    assert "<script>" not in message


def test_contradictory_evaluation_still_explains():
    both = Evaluation(row_pass=True, col_pass=True, correct=False)
    message = explain(_player(team_ids=(0, 1)), LAKERS, CELTICS, both)

    assert message.endswith("but the guess was not accepted for this cell.")
    assert f"{GREEN}played for the Boston Celtics</span>" in message


def test_custom_id_with_recognizable_label_is_evaluated_like_the_catalog_entry():
    spec = AchievementSpec(achievement_id="hof_inductee", achievement_label="Hall of Fame")
    inductee = _player(team_ids=(0,), hall_of_fame=True)

    assert evaluate(inductee, LAKERS, spec).correct is True
    assert explain(inductee, LAKERS, spec) is None

    message = explain(_player(team_ids=(1,), hall_of_fame=True), LAKERS, spec)
    assert f"{GREEN}is in the Hall of Fame</span>" in message


def test_teammate_of_greats_phrasing():
    spec = get_achievement("teammate_of_greats").spec()
    assert describe(spec, True, _player(great_teammates=frozenset({9}))) == "was a teammate of an all-time great"
    assert describe(spec, False, _player()) == "was never a teammate of an all-time great"


def test_every_catalog_entry_has_phrasing():
    for entry in iter_achievements():
        assert describe(entry.spec(), True, _player()) != f'met "{entry.label}"'
