"""Guess evaluation against a cell's row and column criteria."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.config import ConfigDict

from hoopgrid.eligibility import meets_spec
from hoopgrid.models import CellSpec, Player


class Evaluation(BaseModel):
    row_pass: bool
    col_pass: bool
    correct: bool

    model_config = ConfigDict(frozen=True)


def evaluate(player: Player, row_spec: CellSpec, col_spec: CellSpec) -> Evaluation:
    row_pass = meets_spec(player, row_spec)
    col_pass = meets_spec(player, col_spec)
    return Evaluation(row_pass=row_pass, col_pass=col_pass, correct=row_pass and col_pass)
