"""Raw assessment input, as submitted by a form or API client.

Values here are unvalidated; the engine turns each section into a
``ResponseSet`` (or rejects it) before any evaluator sees it.
"""

from typing import Any

from pydantic import BaseModel, Field

from falls_rulesets.models.result import PatientDetails


class AssessmentRequest(BaseModel):
    """Everything the responder entered for one patient."""

    istumble: dict[str, Any] = Field(default_factory=dict)
    fast: dict[str, Any] = Field(default_factory=dict)
    frat: dict[str, Any] = Field(default_factory=dict)
    news2: dict[str, Any] = Field(default_factory=dict)
    # names from the medication vocabulary
    blood_thinners: list[str] = Field(default_factory=list)
    # free-text notes for ISTUMBLE items answered Yes/Unknown, keyed by qid
    istumble_details: dict[str, str] = Field(default_factory=dict)
    patient: PatientDetails = Field(default_factory=PatientDetails)
