"""falls_rulesets — clinical decision scoring for falls assessments.

Public API:
    AssessmentEngine     — facade running all four instruments for one rule-table version
    AssessmentAggregator — combines instrument results into a Disposition
    RulesetStore         — loads versioned YAML rule tables into typed models
    build_engines        — one AssessmentEngine per loaded version

Instrument evaluators:
    IstumbleEvaluator — red-flag checklist with anticoagulant escalation
    FastEvaluator     — Face/Arm/Speech stroke screen
    FratEvaluator     — weighted falls-risk score
    News2Evaluator    — early-warning score from six vital signs

Errors (all ``ValueError`` subclasses):
    InvalidAnswerError, OutOfRangeNumericError, IncompleteInputError
"""

from falls_rulesets.aggregator import AssessmentAggregator
from falls_rulesets.engine import AssessmentEngine, build_engines
from falls_rulesets.errors import (
    AssessmentError,
    IncompleteInputError,
    InvalidAnswerError,
    OutOfRangeNumericError,
)
from falls_rulesets.instruments import (
    FastEvaluator,
    FratEvaluator,
    IstumbleEvaluator,
    News2Evaluator,
)
from falls_rulesets.models import (
    AssessmentRequest,
    Disposition,
    IncompleteResult,
    News2Result,
    RiskBand,
    ScoreResult,
    Status,
    Verdict,
)
from falls_rulesets.ruleset import RulesetStore

__all__ = [
    # Engine & store
    "AssessmentAggregator",
    "AssessmentEngine",
    "RulesetStore",
    "build_engines",
    # Evaluators
    "FastEvaluator",
    "FratEvaluator",
    "IstumbleEvaluator",
    "News2Evaluator",
    # Models
    "AssessmentRequest",
    "Disposition",
    "IncompleteResult",
    "News2Result",
    "RiskBand",
    "ScoreResult",
    "Status",
    "Verdict",
    # Errors
    "AssessmentError",
    "IncompleteInputError",
    "InvalidAnswerError",
    "OutOfRangeNumericError",
]
