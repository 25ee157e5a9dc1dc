"""Reference data endpoints — rule-table versions, medications, questions.

These are read-only endpoints that expose the rule tables loaded from the
``rules/`` YAML files, so a UI can build its forms from the same data the
engine scores with.
"""

from fastapi import APIRouter, Depends

from falls_rulesets.engine import AssessmentEngine
from falls_rulesets.ruleset import RulesetStore

from falls_server.dependencies import get_engine, get_store

router = APIRouter(prefix="/reference", tags=["reference"])


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/rulesets")
def list_rulesets(
    store: RulesetStore = Depends(get_store),
) -> list[dict]:
    """Return every loaded rule-table version."""
    return [
        {
            "version": table.version,
            "description": table.description,
        }
        for table in store.tables.values()
    ]


@router.get("/medications")
def list_medications(
    engine: AssessmentEngine = Depends(get_engine),
    store: RulesetStore = Depends(get_store),
) -> list[dict]:
    """Return the anticoagulant vocabulary for the selected version."""
    return [
        store.resolve_medication(name, engine.version)
        for name in engine.table.medication_names
    ]


@router.get("/questions/{instrument}")
def list_questions(
    instrument: str,
    engine: AssessmentEngine = Depends(get_engine),
) -> list[dict]:
    """Return the question definitions for one instrument.

    Unknown instruments raise ``KeyError`` → 404.
    """
    return [q.model_dump() for q in engine.questions(instrument)]
