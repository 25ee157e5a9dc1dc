"""Per-instrument endpoints — score one instrument at a time.

The UI calls these as the responder fills in each card, so every call is
independent and stateless.  Validation failures come back as 422 via the
global ``AssessmentError`` handler.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from falls_rulesets.engine import AssessmentEngine
from falls_rulesets.models.result import News2Outcome, ScoreResult, Verdict

from falls_server.dependencies import get_engine

router = APIRouter(prefix="/instruments", tags=["instruments"])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class ResponsesRequest(BaseModel):
    """Body for FAST, FRAT and NEWS2: raw answers keyed by qid."""
    responses: dict[str, Any] = Field(default_factory=dict)


class IstumbleRequest(ResponsesRequest):
    """Body for POST /instruments/istumble."""
    blood_thinners: list[str] = Field(default_factory=list)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/istumble")
def evaluate_istumble(
    body: IstumbleRequest,
    engine: AssessmentEngine = Depends(get_engine),
) -> Verdict:
    """Red-flag verdict with anticoagulant escalation."""
    return engine.evaluate_istumble(body.responses, body.blood_thinners)


@router.post("/fast")
def evaluate_fast(
    body: ResponsesRequest,
    engine: AssessmentEngine = Depends(get_engine),
) -> Verdict:
    """FAST stroke verdict."""
    return engine.evaluate_fast(body.responses)


@router.post("/frat")
def score_frat(
    body: ResponsesRequest,
    engine: AssessmentEngine = Depends(get_engine),
) -> ScoreResult:
    """FRAT total and band; unanswered items score nothing."""
    return engine.score_frat(body.responses)


@router.post("/news2")
def score_news2(
    body: ResponsesRequest,
    strict: bool = Query(False, description="Reject incomplete vitals with 422"),
    engine: AssessmentEngine = Depends(get_engine),
) -> News2Outcome:
    """NEWS2 result, or ``{"type": "incomplete", "missing": [...]}``.

    With ``?strict=true`` missing parameters are an error (422, ``incomplete``)
    for callers that need a number.
    """
    if strict:
        return engine.require_news2(body.responses)
    return engine.score_news2(body.responses)
