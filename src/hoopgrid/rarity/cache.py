"""Cell-keyed cache for rarity results."""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Tuple

from hoopgrid.models import Player, RarityResult
from hoopgrid.rarity.scoring import DEFAULT_STRATEGY, get_scorer


logger = logging.getLogger(__name__)

_Entry = Tuple[FrozenSet[int], Dict[int, RarityResult]]


class RarityCache:
    """Rarity results keyed by cell identifier and strategy.

    Each entry remembers the eligible ids it was computed from. A lookup with
    a different eligible set recomputes and overwrites the entry, so a cell
    key reused after regeneration never serves stale results.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[str, str], _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cell_key: object) -> bool:
        return any(key == cell_key for key, _ in self._entries)

    def get_or_compute(
        self,
        cell_key: str,
        players: Iterable[Player],
        strategy: str = DEFAULT_STRATEGY,
    ) -> Dict[int, RarityResult]:
        scorer = get_scorer(strategy)
        players = list(players)
        fingerprint = frozenset(player.id for player in players)
        entry = self._entries.get((cell_key, scorer.name))
        if entry is not None and entry[0] == fingerprint:
            return dict(entry[1])
        if entry is not None:
            logger.debug("Eligible set changed for %s; recomputing rarity", cell_key)
        results = scorer.score(players)
        self._entries[(cell_key, scorer.name)] = (fingerprint, results)
        return dict(results)

    def invalidate(self, cell_key: str) -> None:
        """Drop every strategy's entry for a cell."""

        for key in [key for key in self._entries if key[0] == cell_key]:
            del self._entries[key]

    def invalidate_prefix(self, prefix: str) -> None:
        """Drop entries whose cell key starts with ``prefix`` (e.g. a grid id)."""

        for key in [key for key in self._entries if key[0].startswith(prefix)]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()
