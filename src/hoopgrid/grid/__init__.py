"""Grid generation and criterion selection strategies."""

from .builder import answer_preview, build_grid, build_pool, cell_eligible_ids, eligible_ids
from .strategies import (
    LAYOUTS,
    CriteriaPool,
    CuratedStrategy,
    LayoutStrategy,
    TeamOnlyStrategy,
    WeightedStrategy,
    strategy_for_layout,
)

__all__ = [
    "LAYOUTS",
    "CriteriaPool",
    "CuratedStrategy",
    "LayoutStrategy",
    "TeamOnlyStrategy",
    "WeightedStrategy",
    "answer_preview",
    "build_grid",
    "build_pool",
    "cell_eligible_ids",
    "eligible_ids",
    "strategy_for_layout",
]
