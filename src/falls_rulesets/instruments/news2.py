"""News2Evaluator — National Early Warning Score 2.

Each numeric vital is scored with its own ordered table (first matching row
wins).  Consciousness scores nothing when at the normal level and a fixed
penalty for any other level.  The six parameter scores are summed and the
total banded.

A missing parameter is never scored as normal: if any parameter is absent
the evaluator returns an ``IncompleteResult`` naming what is missing instead
of an understated total.
"""

from __future__ import annotations

import logging

from falls_rulesets.constants import NEWS2
from falls_rulesets.evaluator import RuleEvaluator
from falls_rulesets.models.response import ResponseSet
from falls_rulesets.models.result import IncompleteResult, News2Outcome, News2Result, ParameterScore
from falls_rulesets.models.schema import News2Rules

logger = logging.getLogger(__name__)


class News2Evaluator:
    """Table-driven NEWS2 scoring."""

    def __init__(self, rules: News2Rules, evaluator: RuleEvaluator | None = None) -> None:
        self._rules = rules
        self._evaluator = evaluator or RuleEvaluator()

    @property
    def required(self) -> list[str]:
        """Every parameter qid, in display order."""
        return [p.qid for p in self._rules.parameters] + [self._rules.consciousness.qid]

    def score(self, vitals: ResponseSet) -> News2Outcome:
        rules = self._rules

        missing = [qid for qid in self.required if qid not in vitals]
        if missing:
            logger.debug("news2: incomplete, missing %s", missing)
            return IncompleteResult(instrument=NEWS2, missing=missing)

        parameters: dict[str, ParameterScore] = {}
        for param in rules.parameters:
            value = vitals.get(param.qid)
            points = self._evaluator.points_for(param.qid, param.scoring, value)
            parameters[param.qid] = ParameterScore(value=value, points=points)

        level = vitals.get(rules.consciousness.qid)
        parameters[rules.consciousness.qid] = ParameterScore(
            value=level,
            points=0 if level == rules.consciousness_normal else rules.consciousness_penalty,
        )

        total = sum(p.points for p in parameters.values())
        band = self._evaluator.band_for(total, rules.bands)
        red_score = any(p.points >= rules.red_score_points for p in parameters.values())

        logger.debug("news2: total=%d band=%s red_score=%s", total, band.value, red_score)
        return News2Result(
            instrument=NEWS2,
            total=total,
            band=band,
            parameters=parameters,
            red_score=red_score,
        )
