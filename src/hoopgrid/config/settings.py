"""Import and grid generation settings with environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)

MAX_BYTES_ENV = "HOOPGRID_MAX_BYTES"
MIN_ROSTER_ENV = "HOOPGRID_MIN_ROSTER"
MIN_ELIGIBLE_ENV = "HOOPGRID_MIN_ELIGIBLE"
MAX_ATTEMPTS_ENV = "HOOPGRID_MAX_ATTEMPTS"

DEFAULT_MAX_BYTES = 50 * 1024 * 1024
DEFAULT_MIN_ROSTER = 10
DEFAULT_MIN_ELIGIBLE = 1
DEFAULT_MAX_ATTEMPTS = 200
DEFAULT_MIN_ACHIEVEMENT_PLAYERS = 2


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class ImportLimits:
    """Size ceiling applied to raw bytes and again after decompression."""

    max_bytes: int = DEFAULT_MAX_BYTES

    @classmethod
    def from_env(cls) -> "ImportLimits":
        return cls(max_bytes=_env_int(MAX_BYTES_ENV, DEFAULT_MAX_BYTES, min_value=1))


@dataclass(frozen=True)
class GridConfig:
    """Grid generation policy.

    ``min_roster`` is the number of players a team needs before it can be a
    criterion; ``min_achievement_players`` plays the same role for
    achievements. ``max_attempts`` bounds how many criterion selections the
    builder tries before falling back to a team-only grid.
    """

    min_roster: int = DEFAULT_MIN_ROSTER
    min_eligible: int = DEFAULT_MIN_ELIGIBLE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_achievement_players: int = DEFAULT_MIN_ACHIEVEMENT_PLAYERS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.min_roster < 1:
            raise ValueError("min_roster must be >= 1")
        if self.min_eligible < 1:
            raise ValueError("min_eligible must be >= 1")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @classmethod
    def from_env(cls, *, seed: Optional[int] = None) -> "GridConfig":
        return cls(
            min_roster=_env_int(MIN_ROSTER_ENV, DEFAULT_MIN_ROSTER, min_value=1),
            min_eligible=_env_int(MIN_ELIGIBLE_ENV, DEFAULT_MIN_ELIGIBLE, min_value=1),
            max_attempts=_env_int(MAX_ATTEMPTS_ENV, DEFAULT_MAX_ATTEMPTS, min_value=1),
            seed=seed,
        )
