"""FratEvaluator — Falls Risk Assessment Tool.

``total`` is the literal integer sum of the points attached to each selected
option; unanswered items contribute nothing, so a partially completed form
yields an under-score rather than an error.  Checklist items are carried
through for documentation and never touch the total.

The band comes from the rule table's ordered ``(lower_bound, band)`` list,
so adding a cut point is a YAML change.
"""

from __future__ import annotations

import logging

from falls_rulesets.constants import FRAT
from falls_rulesets.evaluator import RuleEvaluator
from falls_rulesets.models.response import ResponseSet
from falls_rulesets.models.result import ScoreResult
from falls_rulesets.models.schema import FratRules

logger = logging.getLogger(__name__)


class FratEvaluator:
    def __init__(self, rules: FratRules, evaluator: RuleEvaluator | None = None) -> None:
        self._rules = rules
        self._evaluator = evaluator or RuleEvaluator()

    def score(self, responses: ResponseSet) -> ScoreResult:
        """Sum the weights of the selected options and band the total."""
        item_points: dict[str, int] = {}
        for q in self._rules.questions:
            answer = responses.get(q.qid)
            if answer is None:
                continue
            item_points[q.qid] = q.points_for(str(answer))

        checklist = {
            q.qid: str(responses.get(q.qid))
            for q in self._rules.checklist
            if q.qid in responses
        }

        total = sum(item_points.values())
        band = self._evaluator.band_for(total, self._rules.bands)
        logger.debug(
            "frat: total=%d band=%s answered=%d/%d",
            total, band.value, len(item_points), len(self._rules.questions),
        )
        return ScoreResult(
            instrument=FRAT,
            total=total,
            band=band,
            item_points=item_points,
            checklist=checklist,
        )
