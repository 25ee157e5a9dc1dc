"""Validated inputs handed to the evaluators.

``ResponseSet`` and ``AnticoagulantStatus`` are only ever built by
:mod:`falls_rulesets.validation`, so an evaluator can trust every key and
value it sees.  Unanswered questions are absent keys.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict

# A categorical option id, or a finite number for numeric questions.
Answer = Union[str, float]


class ResponseSet(BaseModel):
    """Answers for one instrument, keyed by qid."""

    model_config = ConfigDict(frozen=True)

    instrument: str
    answers: dict[str, Answer] = {}

    def get(self, qid: str, default: Answer | None = None) -> Answer | None:
        return self.answers.get(qid, default)

    def __contains__(self, qid: object) -> bool:
        return qid in self.answers


class AnticoagulantStatus(BaseModel):
    """Selected blood thinners; empty means none selected."""

    model_config = ConfigDict(frozen=True)

    medications: tuple[str, ...] = ()

    @property
    def has_thinners(self) -> bool:
        return len(self.medications) > 0

    @property
    def display(self) -> str:
        """Comma-joined names, or ``None Selected``."""
        return ", ".join(self.medications) or "None Selected"
