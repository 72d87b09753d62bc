"""Guess evaluation and incorrect-guess explanations."""

from hoopgrid.eligibility.labels import UNKNOWN_ACHIEVEMENT, classify_label

from .evaluate import Evaluation, evaluate
from .explain import describe, explain

__all__ = [
    "Evaluation",
    "UNKNOWN_ACHIEVEMENT",
    "classify_label",
    "describe",
    "evaluate",
    "explain",
]
