"""Eligibility predicates and the achievement catalog."""

from .catalog import (
    Achievement,
    achievement_counts,
    get_achievement,
    iter_achievements,
    meets_spec,
    resolve_achievement_id,
)
from .labels import UNKNOWN_ACHIEVEMENT, classify_label

__all__ = [
    "Achievement",
    "UNKNOWN_ACHIEVEMENT",
    "achievement_counts",
    "classify_label",
    "get_achievement",
    "iter_achievements",
    "meets_spec",
    "resolve_achievement_id",
]
