"""AssessmentEngine — the public facade over one rule-table version.

Stateless engine pattern: every call validates its raw input, runs the
relevant evaluator and returns a fresh result.  Nothing is remembered
between calls, so one engine can serve any number of assessments (and
threads) at once.

Operations:
    evaluate_istumble  — ISTUMBLE verdict, with anticoagulant escalation
    evaluate_fast      — FAST stroke verdict
    score_frat         — FRAT weighted total and band
    score_news2        — NEWS2 total and band, or IncompleteResult
    require_news2      — as score_news2, but raises IncompleteInputError
    aggregate          — combine four results into a Disposition
    assess             — validate a whole AssessmentRequest and aggregate it
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from falls_rulesets.aggregator import AssessmentAggregator
from falls_rulesets.constants import FAST, FRAT, ISTUMBLE, NEWS2
from falls_rulesets.errors import IncompleteInputError
from falls_rulesets.evaluator import RuleEvaluator
from falls_rulesets.instruments import (
    FastEvaluator,
    FratEvaluator,
    IstumbleEvaluator,
    News2Evaluator,
)
from falls_rulesets.models.question import Question
from falls_rulesets.models.request import AssessmentRequest
from falls_rulesets.models.response import AnticoagulantStatus, ResponseSet
from falls_rulesets.models.result import (
    Disposition,
    IncompleteResult,
    News2Outcome,
    News2Result,
    PatientDetails,
    ScoreResult,
    Verdict,
)
from falls_rulesets.models.schema import RuleTable
from falls_rulesets.ruleset import RulesetStore
from falls_rulesets.validation import build_anticoagulants, build_response_set

logger = logging.getLogger(__name__)


class AssessmentEngine:
    """Runs the four instruments against one rule-table version.

    Args:
        store: a loaded :class:`RulesetStore` instance
        version: rule-table version; ``None`` uses the default version
    """

    def __init__(self, store: RulesetStore, version: str | None = None) -> None:
        self._table: RuleTable = store.get(version)
        evaluator = RuleEvaluator()
        self._istumble = IstumbleEvaluator(self._table.istumble)
        self._fast = FastEvaluator(self._table.fast)
        self._frat = FratEvaluator(self._table.frat, evaluator)
        self._news2 = News2Evaluator(self._table.news2, evaluator)
        self._aggregator = AssessmentAggregator(self._table)

    @property
    def table(self) -> RuleTable:
        return self._table

    @property
    def version(self) -> str:
        return self._table.version

    # ==================================================================
    # Question sets
    # ==================================================================

    def questions(self, instrument: str) -> list[Question]:
        """Every question an instrument accepts, in display order.

        Raises:
            KeyError: for an unknown instrument name.
        """
        table = self._table
        if instrument == ISTUMBLE:
            return list(table.istumble.questions)
        if instrument == FAST:
            return list(table.fast.questions)
        if instrument == FRAT:
            return [*table.frat.questions, *table.frat.checklist]
        if instrument == NEWS2:
            return [*table.news2.parameters, table.news2.consciousness]
        raise KeyError(f"Unknown instrument: {instrument}")

    # ==================================================================
    # Boundary validation
    # ==================================================================

    def responses(self, instrument: str, raw: Mapping[str, Any] | None) -> ResponseSet:
        """Validate raw answers for ``instrument`` into a ``ResponseSet``."""
        return build_response_set(instrument, self.questions(instrument), raw)

    def anticoagulants(self, raw: Iterable[str] | None) -> AnticoagulantStatus:
        """Validate selected medication names against this version's vocabulary."""
        return build_anticoagulants(self._table.medication_names, raw)

    # ==================================================================
    # Instrument operations
    # ==================================================================

    def evaluate_istumble(
        self,
        responses: Mapping[str, Any] | None,
        thinners: Iterable[str] | None = None,
    ) -> Verdict:
        return self._istumble.evaluate(
            self.responses(ISTUMBLE, responses), self.anticoagulants(thinners)
        )

    def evaluate_fast(self, responses: Mapping[str, Any] | None) -> Verdict:
        return self._fast.evaluate(self.responses(FAST, responses))

    def score_frat(self, responses: Mapping[str, Any] | None) -> ScoreResult:
        return self._frat.score(self.responses(FRAT, responses))

    def score_news2(self, vitals: Mapping[str, Any] | None) -> News2Outcome:
        """NEWS2 result, or ``IncompleteResult`` if any parameter is missing."""
        return self._news2.score(self.responses(NEWS2, vitals))

    def require_news2(self, vitals: Mapping[str, Any] | None) -> News2Result:
        """As :meth:`score_news2`, for callers that cannot use a partial result.

        Raises:
            IncompleteInputError: if any parameter is missing.
        """
        result = self.score_news2(vitals)
        if isinstance(result, IncompleteResult):
            raise IncompleteInputError(
                f"NEWS2 needs every parameter; missing {', '.join(result.missing)}",
                instrument=NEWS2,
                missing=result.missing,
            )
        return result

    # ==================================================================
    # Aggregation
    # ==================================================================

    def aggregate(
        self,
        istumble: Verdict,
        fast: Verdict,
        frat: ScoreResult,
        news2: News2Outcome,
        thinners: AnticoagulantStatus | None = None,
        patient: PatientDetails | None = None,
        details: Mapping[str, str] | None = None,
    ) -> Disposition:
        """Combine already-computed results; see :class:`AssessmentAggregator`.

        ``details`` are notes keyed by ISTUMBLE qid; they are attached to the
        items the ISTUMBLE verdict noted as answered Yes/Unknown.
        """
        return self._aggregator.aggregate(
            istumble, fast, frat, news2, thinners, patient=patient, details=details
        )

    def assess(self, request: AssessmentRequest) -> Disposition:
        """Validate every section of ``request``, score it and aggregate.

        Validation happens up front so a bad value in any section rejects
        the whole request before anything is evaluated.
        """
        istumble_rs = self.responses(ISTUMBLE, request.istumble)
        fast_rs = self.responses(FAST, request.fast)
        frat_rs = self.responses(FRAT, request.frat)
        news2_rs = self.responses(NEWS2, request.news2)
        thinners = self.anticoagulants(request.blood_thinners)
        logger.debug("assess: version=%s thinners=%s", self.version, list(thinners.medications))

        return self._aggregator.aggregate(
            self._istumble.evaluate(istumble_rs, thinners),
            self._fast.evaluate(fast_rs),
            self._frat.score(frat_rs),
            self._news2.score(news2_rs),
            thinners,
            patient=request.patient or PatientDetails(),
            details=request.istumble_details,
        )


def build_engines(store: RulesetStore) -> dict[str, AssessmentEngine]:
    """One engine per loaded rule-table version."""
    return {version: AssessmentEngine(store, version) for version in store.versions()}
