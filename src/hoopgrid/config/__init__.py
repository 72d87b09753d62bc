"""Configuration helpers for league import and grid generation."""

from .settings import GridConfig, ImportLimits

__all__ = [
    "GridConfig",
    "ImportLimits",
]
