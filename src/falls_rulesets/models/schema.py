"""Pydantic models for the versioned rule tables.

These models mirror the YAML files in ``rules/<version>/``:

  - istumble.yaml    → IstumbleRules: 8 red-flag questions + escalation messages
  - fast.yaml        → FastRules: 3 stroke-sign questions + messages
  - frat.yaml        → FratRules: weighted questions, unscored checklist, bands
  - news2.yaml       → News2Rules: per-parameter scoring tables, bands
  - medications.yaml → Medication list (the anticoagulant vocabulary)

A ``RuleTable`` bundles one version of all five.  Every threshold, weight
and message lives here so that a new variant is a new directory, not new
code.
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from falls_rulesets.models.enums import RiskBand
from falls_rulesets.models.question import CategoricalQuestion, NumericQuestion


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Shared building blocks
# ---------------------------------------------------------------------------

class BandThreshold(_Frozen):
    """A ``(lower_bound, band)`` cut point: totals >= lower_bound get ``band``."""

    lower_bound: int
    band: RiskBand


def _check_bands(bands: List[BandThreshold], where: str) -> None:
    """Bands must be strictly descending and reach down to zero."""
    if not bands:
        raise ValueError(f"{where}: at least one band is required")
    bounds = [b.lower_bound for b in bands]
    if any(a <= b for a, b in zip(bounds, bounds[1:])):
        raise ValueError(f"{where}: band lower bounds must be strictly descending: {bounds}")
    if bounds[-1] > 0:
        raise ValueError(f"{where}: lowest band must start at or below 0, got {bounds[-1]}")


class ScoringRule(_Frozen):
    """One row of a NEWS2 parameter table: if ``op`` matches, award ``points``.

    Operators:
      - eq: exact match
      - lt, le, gt, ge: numeric comparisons
      - between: value is [min, max] inclusive
    """

    op: Literal["eq", "lt", "le", "gt", "ge", "between"]
    value: Any
    points: int


class Medication(_Frozen):
    """An anticoagulant/antiplatelet from medications.yaml."""

    name: str
    brands: List[str] = []

    @property
    def label(self) -> str:
        """Display label, e.g. ``Warfarin (Marevan, Coumadin)``."""
        if not self.brands:
            return self.name
        return f"{self.name} ({', '.join(self.brands)})"


# ---------------------------------------------------------------------------
# ISTUMBLE — istumble.yaml
# ---------------------------------------------------------------------------

class IstumbleMessages(_Frozen):
    anticoagulant_trauma: str
    red_flag: str
    anticoagulant: str
    clear: str


class IstumbleRules(_Frozen):
    """Red-flag checklist that decides whether a lift is authorised.

    Any ``flag_value`` answer is a red flag.  Anticoagulants combined with a
    ``trauma_concern_values`` answer on ``trauma_qid`` outranks every other
    outcome.
    """

    title: str
    questions: List[CategoricalQuestion]
    flag_value: str = "Yes"
    trauma_qid: str = "trauma"
    trauma_concern_values: List[str] = ["Yes", "Unknown"]
    # answers that make the summary list an item with its detail note
    detail_values: List[str] = ["Yes", "Unknown"]
    messages: IstumbleMessages

    @model_validator(mode="after")
    def _chk(self):
        qids = {q.qid for q in self.questions}
        if self.trauma_qid not in qids:
            raise ValueError(f"istumble: trauma_qid '{self.trauma_qid}' is not a question")
        return self


# ---------------------------------------------------------------------------
# FAST — fast.yaml
# ---------------------------------------------------------------------------

class FastMessages(_Frozen):
    flagged: str
    clear: str


class FastRules(_Frozen):
    """Face-Arm-Speech stroke screen: any ``flag_value`` answer flags."""

    title: str
    questions: List[CategoricalQuestion]
    flag_value: str = "Yes"
    messages: FastMessages


# ---------------------------------------------------------------------------
# FRAT — frat.yaml
# ---------------------------------------------------------------------------

class FratRules(_Frozen):
    """Falls Risk Assessment Tool.

    ``questions`` are scored: every option carries integer ``points``.
    ``checklist`` items are recorded for documentation only.
    """

    title: str
    questions: List[CategoricalQuestion]
    checklist: List[CategoricalQuestion] = []
    bands: List[BandThreshold]

    @model_validator(mode="after")
    def _chk(self):
        for q in self.questions:
            for opt in q.options:
                if opt.points is None:
                    raise ValueError(f"frat: option {q.qid}/{opt.id} has no points")
                if opt.points < 0:
                    raise ValueError(f"frat: option {q.qid}/{opt.id} has negative points")
        _check_bands(self.bands, "frat")
        return self


# ---------------------------------------------------------------------------
# NEWS2 — news2.yaml
# ---------------------------------------------------------------------------

class News2Parameter(NumericQuestion):
    """A numeric vital sign with its ordered scoring table (first match wins)."""

    scoring: List[ScoringRule]

    @model_validator(mode="after")
    def _chk_scoring(self):
        if not self.scoring:
            raise ValueError(f"news2: parameter {self.qid} has no scoring rules")

        # Every accepted value, at the declared precision, must hit a row
        from falls_rulesets.evaluator import RuleEvaluator

        evaluator = RuleEvaluator()
        step = 10 ** -self.decimals
        steps = int(round((self.max_value - self.min_value) / step))
        for i in range(steps + 1):
            value = round(self.min_value + i * step, self.decimals)
            if evaluator.first_match(self.scoring, value) is None:
                raise ValueError(
                    f"news2: scoring rules for {self.qid} leave {value:g} "
                    f"uncovered (range {self.min_value:g}-{self.max_value:g})"
                )
        return self


class News2Rules(_Frozen):
    """National Early Warning Score 2.

    Consciousness scores 0 when it equals ``consciousness_normal`` and
    ``consciousness_penalty`` for every other level.
    """

    title: str
    parameters: List[News2Parameter]
    consciousness: CategoricalQuestion
    consciousness_normal: str = "Alert"
    consciousness_penalty: int = 3
    # a single parameter scoring this many points is a "red score"
    red_score_points: int = 3
    bands: List[BandThreshold]

    @model_validator(mode="after")
    def _chk(self):
        if self.consciousness_normal not in self.consciousness.option_ids:
            raise ValueError(
                f"news2: consciousness_normal '{self.consciousness_normal}' is not an option"
            )
        _check_bands(self.bands, "news2")
        return self


# ---------------------------------------------------------------------------
# RuleTable — one version of every instrument
# ---------------------------------------------------------------------------

class RuleTable(_Frozen):
    """A complete, versioned set of rule tables."""

    version: str
    description: Optional[str] = None
    istumble: IstumbleRules
    fast: FastRules
    frat: FratRules
    news2: News2Rules
    medications: List[Medication]

    @property
    def medication_names(self) -> List[str]:
        return [m.name for m in self.medications]
