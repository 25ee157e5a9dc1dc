"""IstumbleEvaluator — red-flag checklist deciding whether a lift is authorised.

Outcomes, highest precedence first:

  1. anticoagulants + trauma answered Yes/Unknown → ESCALATE
  2. any question answered Yes                     → ESCALATE
  3. anticoagulants alone                          → CAUTION (lift still authorised)
  4. otherwise                                     → SAFE

Case 1 is checked before case 2 so the anticoagulant message is never
masked by the plain red-flag message.  "Unknown" only matters on the trauma
question; elsewhere only an explicit "Yes" flags.
"""

from __future__ import annotations

import logging

from falls_rulesets.constants import ISTUMBLE
from falls_rulesets.models.enums import Flag, Status
from falls_rulesets.models.response import AnticoagulantStatus, ResponseSet
from falls_rulesets.models.result import Verdict
from falls_rulesets.models.schema import IstumbleRules

logger = logging.getLogger(__name__)


class IstumbleEvaluator:
    """Evaluates ISTUMBLE answers together with the anticoagulant selection."""

    def __init__(self, rules: IstumbleRules) -> None:
        self._rules = rules

    def evaluate(self, responses: ResponseSet, thinners: AnticoagulantStatus) -> Verdict:
        rules = self._rules
        messages = rules.messages

        triggered = [
            q.qid for q in rules.questions if responses.get(q.qid) == rules.flag_value
        ]
        trauma_concern = responses.get(rules.trauma_qid) in rules.trauma_concern_values
        noted = {
            q.qid: str(responses.get(q.qid))
            for q in rules.questions
            if responses.get(q.qid) in rules.detail_values
        }
        has_thinners = thinners.has_thinners

        # Every applicable alert, in precedence order
        alerts: list[str] = []
        if has_thinners and trauma_concern:
            alerts.append(messages.anticoagulant_trauma)
        if triggered:
            alerts.append(messages.red_flag)
        if has_thinners:
            alerts.append(messages.anticoagulant)

        if has_thinners and trauma_concern:
            status, message = Status.ESCALATE, messages.anticoagulant_trauma
        elif triggered:
            status, message = Status.ESCALATE, messages.red_flag
        elif has_thinners:
            status, message = Status.CAUTION, messages.anticoagulant
        else:
            status, message = Status.SAFE, messages.clear

        logger.debug(
            "istumble: status=%s triggered=%s trauma_concern=%s thinners=%s",
            status.value, triggered, trauma_concern, has_thinners,
        )
        return Verdict(
            instrument=ISTUMBLE,
            status=status,
            flag=Flag.FLAGGED if status == Status.ESCALATE else Flag.CLEAR,
            message=message,
            triggered=triggered,
            alerts=alerts,
            noted=noted,
        )
