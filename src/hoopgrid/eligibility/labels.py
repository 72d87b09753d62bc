"""Table-driven classification of free-text achievement labels."""

from __future__ import annotations

import re
from typing import Pattern, Tuple

UNKNOWN_ACHIEVEMENT = "unknown"

# Order matters: specific patterns must precede the broader ones they overlap.
LABEL_PATTERNS: Tuple[Tuple[Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), achievement_id)
    for pattern, achievement_id in (
        (r"first\s+overall\s+pick|#1\s+overall", "first_overall_pick"),
        (r"first\s+round\s+pick|1st\s+round", "first_round_pick"),
        (r"2nd\s+round\s+pick|second\s+round", "second_round_pick"),
        (r"undrafted", "undrafted"),
        (r"20,?000\+?\s*(career\s+)?points", "career_points_20k"),
        (r"10,?000\+?\s*(career\s+)?rebounds", "career_rebounds_10k"),
        (r"5,?000\+?\s*(career\s+)?assists", "career_assists_5k"),
        (r"2,?000\+?\s*(career\s+)?steals", "career_steals_2k"),
        (r"1,?500\+?\s*(career\s+)?blocks", "career_blocks_1500"),
        (r"2,?000\+?\s*(made\s+|career\s+)?threes", "career_threes_2k"),
        (r"30\+?\s*ppg|averaged\s+30", "season_ppg_30"),
        (r"10\+?\s*apg|averaged.*10.*assists", "season_apg_10"),
        (r"15\+?\s*rpg|averaged.*15.*rebounds", "season_rpg_15"),
        (r"3\+?\s*bpg|averaged.*3.*blocks", "season_bpg_3"),
        (r"2\.5\+?\s*spg|averaged.*2\.5.*steals", "season_spg_2_5"),
        (r"50/40/90", "season_50_40_90"),
        (r"led\s+league.*scoring", "led_scoring"),
        (r"led\s+league.*rebound", "led_rebounds"),
        (r"led\s+league.*assist", "led_assists"),
        (r"led\s+league.*steal", "led_steals"),
        (r"led\s+league.*block", "led_blocks"),
        (r"50\+.*game|scored\s+50", "game_50_points"),
        (r"triple.?double", "game_triple_double"),
        (r"20\+.*rebounds.*game", "game_20_rebounds"),
        (r"20\+.*assists.*game", "game_20_assists"),
        (r"10\+.*threes.*game", "game_10_threes"),
        (r"finals\s+mvp", "finals_mvp"),
        (r"mvp|most\s+valuable", "mvp"),
        (r"defensive\s+player", "dpoy"),
        (r"6th\s+man|sixth\s+man", "smoy"),
        (r"rookie.*year|roty", "roy"),
        (r"most\s+improved", "mip"),
        (r"all.?star.*35", "all_star_age_35"),
        (r"all.?star", "all_star"),
        (r"all.?league|all.?nba", "all_league"),
        (r"all.?defens", "all_defensive"),
        (r"hall\s+of\s+fame", "hall_of_fame"),
        (r"champion", "champion"),
        (r"15\+?\s*seasons|played.*15.*seasons", "played_15_seasons"),
        (r"teammate.*greats?", "teammate_of_greats"),
        (r"only\s+one\s+team", "only_one_team"),
    )
)


def classify_label(label: str) -> str:
    """Map a free-text achievement label to a catalog id, or ``"unknown"``."""

    for pattern, achievement_id in LABEL_PATTERNS:
        if pattern.search(label):
            return achievement_id
    return UNKNOWN_ACHIEVEMENT
