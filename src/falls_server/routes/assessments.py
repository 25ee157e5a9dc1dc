"""Whole-assessment endpoint — every instrument plus the aggregated disposition.

Nothing is stored: the response is the only record of the assessment.
"""

from fastapi import APIRouter, Depends

from falls_rulesets.engine import AssessmentEngine
from falls_rulesets.models.request import AssessmentRequest
from falls_rulesets.models.result import Disposition

from falls_server.dependencies import get_engine

router = APIRouter(tags=["assessments"])


@router.post("/assessments")
def assess(
    body: AssessmentRequest,
    engine: AssessmentEngine = Depends(get_engine),
) -> Disposition:
    """Validate all sections, run the four instruments and aggregate.

    A rejected value in any section fails the whole request with 422.
    """
    return engine.assess(body)
