"""Grid, cell criteria and rarity result models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, FrozenSet, Literal, Tuple, Union

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class TeamSpec(BaseModel):
    kind: Literal["team"] = "team"
    team_id: int = Field(..., ge=0)
    team_name: str

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return self.team_name

    @property
    def key(self) -> str:
        return f"team:{self.team_id}"


class AchievementSpec(BaseModel):
    kind: Literal["achievement"] = "achievement"
    achievement_id: str = Field(..., min_length=1)
    achievement_label: str

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return self.achievement_label

    @property
    def key(self) -> str:
        return f"achievement:{self.achievement_id}"


CellSpec = Annotated[Union[TeamSpec, AchievementSpec], Field(discriminator="kind")]

Axis = Tuple[CellSpec, CellSpec, CellSpec]
AnswerRow = Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[int, ...]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Grid(BaseModel):
    """A 3x3 puzzle with the eligible player ids for every cell.

    ``answers[row][col]`` holds player ids sorted ascending; membership is a
    set, the ordering only keeps serialized grids reproducible.
    """

    id: str = Field(..., min_length=1)
    row_criteria: Axis
    col_criteria: Axis
    answers: Tuple[AnswerRow, AnswerRow, AnswerRow]
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True)

    @field_validator("answers")
    @classmethod
    def _no_empty_cells(cls, value: Tuple[AnswerRow, AnswerRow, AnswerRow]):
        for row_index, row in enumerate(value):
            for col_index, cell in enumerate(row):
                if not cell:
                    raise ValueError(f"cell {row_index}_{col_index} has no eligible players")
        return tuple(tuple(tuple(sorted(set(cell))) for cell in row) for row in value)

    def cell(self, row: int, col: int) -> Tuple[CellSpec, CellSpec]:
        """Return the (row, column) criteria for a cell."""

        if not (0 <= row < 3 and 0 <= col < 3):
            raise IndexError(f"cell {row}_{col} is outside the 3x3 grid")
        return self.row_criteria[row], self.col_criteria[col]

    def answer_ids(self, row: int, col: int) -> FrozenSet[int]:
        self.cell(row, col)
        return frozenset(self.answers[row][col])

    def cell_key(self, row: int, col: int) -> str:
        self.cell(row, col)
        return f"{self.id}:{row}_{col}"


class RarityResult(BaseModel):
    player_id: int
    rank: int = Field(..., ge=1)
    score: int = Field(..., ge=0, le=100)

    model_config = ConfigDict(frozen=True)
