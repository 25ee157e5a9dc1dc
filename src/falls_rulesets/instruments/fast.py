"""FastEvaluator — Face/Arm/Speech stroke screen.

Any explicit "Yes" flags a suspected stroke.  "Unknown" never flags on its
own, unlike the ISTUMBLE trauma question.
"""

from __future__ import annotations

import logging

from falls_rulesets.constants import FAST
from falls_rulesets.models.enums import Flag, Status
from falls_rulesets.models.response import ResponseSet
from falls_rulesets.models.result import Verdict
from falls_rulesets.models.schema import FastRules

logger = logging.getLogger(__name__)


class FastEvaluator:
    def __init__(self, rules: FastRules) -> None:
        self._rules = rules

    def evaluate(self, responses: ResponseSet) -> Verdict:
        rules = self._rules
        triggered = [
            q.qid for q in rules.questions if responses.get(q.qid) == rules.flag_value
        ]

        if triggered:
            logger.debug("fast: flagged by %s", triggered)
            return Verdict(
                instrument=FAST,
                status=Status.ESCALATE,
                flag=Flag.FLAGGED,
                message=rules.messages.flagged,
                triggered=triggered,
                alerts=[rules.messages.flagged],
            )
        return Verdict(
            instrument=FAST,
            status=Status.SAFE,
            flag=Flag.CLEAR,
            message=rules.messages.clear,
        )
