"""Public model re-exports for falls_rulesets.

Consumers should import from ``falls_rulesets.models`` rather than
reaching into sub-modules directly.
"""

# --- Enums ---
from falls_rulesets.models.enums import Flag, RiskBand, Status

# --- Questions ---
from falls_rulesets.models.question import (
    BaseQuestion,
    CategoricalQuestion,
    NumericQuestion,
    Option,
    Question,
)

# --- Rule tables ---
from falls_rulesets.models.schema import (
    BandThreshold,
    FastRules,
    FratRules,
    IstumbleRules,
    Medication,
    News2Parameter,
    News2Rules,
    RuleTable,
    ScoringRule,
)

# --- Inputs ---
from falls_rulesets.models.request import AssessmentRequest
from falls_rulesets.models.response import AnticoagulantStatus, ResponseSet

# --- Results ---
from falls_rulesets.models.result import (
    AssessmentSummary,
    Disposition,
    FlaggedItem,
    IncompleteResult,
    News2Outcome,
    News2Result,
    ParameterScore,
    PatientDetails,
    ScoreResult,
    Verdict,
)

__all__ = [
    # Enums
    "Flag",
    "RiskBand",
    "Status",
    # Questions
    "BaseQuestion",
    "CategoricalQuestion",
    "NumericQuestion",
    "Option",
    "Question",
    # Rule tables
    "BandThreshold",
    "FastRules",
    "FratRules",
    "IstumbleRules",
    "Medication",
    "News2Parameter",
    "News2Rules",
    "RuleTable",
    "ScoringRule",
    # Inputs
    "AnticoagulantStatus",
    "AssessmentRequest",
    "ResponseSet",
    # Results
    "AssessmentSummary",
    "Disposition",
    "FlaggedItem",
    "IncompleteResult",
    "News2Outcome",
    "News2Result",
    "ParameterScore",
    "PatientDetails",
    "ScoreResult",
    "Verdict",
]
