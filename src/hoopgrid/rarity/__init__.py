"""Rarity scoring strategies and caching."""

from .cache import RarityCache
from .scoring import (
    DEFAULT_STRATEGY,
    SCORERS,
    CountPercentileScorer,
    WinShareScorer,
    get_scorer,
    prominence,
    rank_by_key,
    rarest_first,
    rarity_label,
    score,
)

__all__ = [
    "DEFAULT_STRATEGY",
    "SCORERS",
    "CountPercentileScorer",
    "RarityCache",
    "WinShareScorer",
    "get_scorer",
    "prominence",
    "rank_by_key",
    "rarest_first",
    "rarity_label",
    "score",
]
