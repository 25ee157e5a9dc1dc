"""Result models — the contract between the engine and its callers.

Every evaluation builds these from scratch; none of them keeps a reference
to the responses it was computed from.

Result types:
  - Verdict: ISTUMBLE / FAST checklist outcome
  - ScoreResult: FRAT weighted total and band
  - News2Result: NEWS2 total, band and per-parameter points
  - IncompleteResult: a score could not be produced because inputs are missing
  - Disposition: the aggregated outcome of a whole assessment

``News2Outcome`` is a union so callers can dispatch on ``type``.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from falls_rulesets.models.enums import Flag, RiskBand, Status


class Verdict(BaseModel):
    """Outcome of a checklist instrument (ISTUMBLE or FAST)."""

    model_config = ConfigDict(frozen=True)

    type: Literal["verdict"] = "verdict"
    instrument: str
    status: Status
    flag: Flag
    message: str
    score: Optional[int] = None
    # qids answered "Yes", in question order
    triggered: list[str] = []
    # every alert that applied, highest precedence first
    alerts: list[str] = []
    # answers that need a note on the summary card (ISTUMBLE Yes/Unknown), qid -> answer
    noted: dict[str, str] = {}


class ScoreResult(BaseModel):
    """FRAT outcome: literal weighted sum plus the band it falls into."""

    model_config = ConfigDict(frozen=True)

    type: Literal["score"] = "score"
    instrument: str
    total: int
    band: RiskBand
    # points contributed by each answered scored item
    item_points: dict[str, int] = {}
    # unscored checklist answers, carried for documentation
    checklist: dict[str, str] = {}


class ParameterScore(BaseModel):
    """Points one NEWS2 parameter contributed, for per-parameter colouring.

    ``points`` is the per-parameter band key: 0 normal, 1 low, 2 medium and
    3 high, matching the NEWS2 chart colours.
    """

    model_config = ConfigDict(frozen=True)

    value: Union[float, str]
    points: int


class News2Result(BaseModel):
    """NEWS2 outcome."""

    model_config = ConfigDict(frozen=True)

    type: Literal["news2"] = "news2"
    instrument: str
    total: int
    band: RiskBand
    parameters: dict[str, ParameterScore]
    # any single parameter at the maximum points; informational only
    red_score: bool = False


class IncompleteResult(BaseModel):
    """A score was requested but required inputs are absent."""

    model_config = ConfigDict(frozen=True)

    type: Literal["incomplete"] = "incomplete"
    instrument: str
    missing: list[str]


News2Outcome = Annotated[Union[News2Result, IncompleteResult], Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Aggregated disposition
# ---------------------------------------------------------------------------

class PatientDetails(BaseModel):
    """Incident and patient identifiers shown on the summary card.

    Passed through untouched; the engine never interprets them.
    """

    age: Optional[str] = None
    sex: Optional[str] = None
    cfr_id: Optional[str] = None
    esr_number: Optional[str] = None
    inc_number: Optional[str] = None
    incident_date: Optional[str] = None
    incident_time: Optional[str] = None


class FlaggedItem(BaseModel):
    """An ISTUMBLE question answered Yes/Unknown, with the responder's note."""

    qid: str
    question: str
    answer: str
    details: Optional[str] = None


class AssessmentSummary(BaseModel):
    """Rendering-ready summary of one assessment."""

    patient: PatientDetails
    blood_thinners: str
    lines: list[str]
    flagged_items: list[FlaggedItem] = []


class Disposition(BaseModel):
    """Combined outcome of the four instruments."""

    ruleset_version: str
    status: Status
    lift_authorised: bool
    stroke_pathway: bool
    actions: list[str]
    istumble: Verdict
    fast: Verdict
    frat: ScoreResult
    news2: News2Outcome
    anticoagulants: list[str] = []
    summary: AssessmentSummary
