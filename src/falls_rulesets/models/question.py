"""Question definitions for the falls-assessment instruments.

Two answer domains exist:

  - categorical: pick one option id from a closed list (each option may
    carry an integer ``points`` weight, used by FRAT)
  - numeric: a finite number inside a plausible range, with a unit and a
    decimal precision (``decimals == 0`` means whole numbers only)

The discriminated ``Question`` union uses ``question_type`` as its discriminator.
Questions are frozen: they are defined once per rule table and never mutated.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Base question type ---

class BaseQuestion(BaseModel):
    """Fields shared by all question types."""

    model_config = ConfigDict(frozen=True)

    qid: str
    question: str
    # Help text shown under the prompt (e.g. "GCS < 15 or confused")
    description: Optional[str] = None


# --- Shared option model ---

class Option(BaseModel):
    """A selectable option with an id, display label and optional weight."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    points: Optional[int] = None


# --- Question types ---

class CategoricalQuestion(BaseQuestion):
    """Pick exactly one option from a closed list."""

    question_type: Literal["categorical"] = "categorical"
    options: List[Option]

    @model_validator(mode="after")
    def _chk(self):
        ids = [o.id for o in self.options]
        if not ids:
            raise ValueError(f"{self.qid}: categorical question needs options")
        if len(ids) != len(set(ids)):
            raise ValueError(f"{self.qid}: duplicate option ids")
        return self

    @property
    def option_ids(self) -> List[str]:
        return [o.id for o in self.options]

    def points_for(self, option_id: str) -> int:
        """Weight of the selected option; options without a weight score 0."""
        for opt in self.options:
            if opt.id == option_id:
                return opt.points or 0
        raise KeyError(option_id)


class NumericQuestion(BaseQuestion):
    """Numeric input constrained to a plausible range."""

    question_type: Literal["numeric"] = "numeric"
    unit: str
    min_value: float
    max_value: float
    decimals: int = 0

    @model_validator(mode="after")
    def _chk(self):
        if self.min_value >= self.max_value:
            raise ValueError("min_value must be < max_value")
        if self.decimals < 0:
            raise ValueError("decimals must be >= 0")
        return self


# --- Discriminated union of all question types ---

Question = Annotated[
    Union[CategoricalQuestion, NumericQuestion],
    Field(discriminator="question_type"),
]
