"""AssessmentAggregator — combines the four instrument results.

This is the only place where instruments meet.  It performs no clinical
judgment of its own:

  - ISTUMBLE ESCALATE or FAST FLAGGED withholds lift authorisation
  - the disposition status is the more severe of the ISTUMBLE and FAST statuses
  - FRAT and NEWS2 are carried as severity context and never gate the lift

It also builds the rendering-ready ``AssessmentSummary`` the summary card
shows (patient details, blood thinners, one line per instrument and the
ISTUMBLE items that need a note).
"""

from __future__ import annotations

import logging
from typing import Mapping

from falls_rulesets.models.enums import Flag, Status
from falls_rulesets.models.response import AnticoagulantStatus
from falls_rulesets.models.result import (
    AssessmentSummary,
    Disposition,
    FlaggedItem,
    IncompleteResult,
    News2Outcome,
    PatientDetails,
    ScoreResult,
    Verdict,
)
from falls_rulesets.models.schema import RuleTable

logger = logging.getLogger(__name__)


class AssessmentAggregator:
    """Builds a ``Disposition`` from already-computed instrument results."""

    def __init__(self, table: RuleTable) -> None:
        self._table = table

    def aggregate(
        self,
        istumble: Verdict,
        fast: Verdict,
        frat: ScoreResult,
        news2: News2Outcome,
        thinners: AnticoagulantStatus | None = None,
        *,
        patient: PatientDetails | None = None,
        details: Mapping[str, str] | None = None,
    ) -> Disposition:
        """Combine the four results into one disposition.

        Args:
            istumble, fast: checklist verdicts
            frat, news2: scores (NEWS2 may be ``IncompleteResult``), informational only
            thinners: selected anticoagulants, passed through for display
            patient: identifiers for the summary card
            details: free-text notes keyed by ISTUMBLE qid; only items the
                verdict noted (answered Yes/Unknown) keep their note
        """
        thinners = thinners or AnticoagulantStatus()

        stroke_pathway = fast.flag == Flag.FLAGGED
        lift_authorised = istumble.status != Status.ESCALATE and not stroke_pathway
        status = max(istumble.status, fast.status, key=lambda s: s.rank)

        actions = list(istumble.alerts or [istumble.message])
        if stroke_pathway:
            actions.extend(fast.alerts or [fast.message])

        summary = AssessmentSummary(
            patient=patient or PatientDetails(),
            blood_thinners=thinners.display,
            lines=[
                f"ISTUMBLE: {istumble.message}",
                f"FAST: {fast.message}",
                _score_line("FRAT", frat),
                _score_line("NEWS2", news2),
            ],
            flagged_items=self._flagged_items(istumble, details or {}),
        )

        logger.info(
            "Assessment aggregated: status=%s lift_authorised=%s stroke_pathway=%s",
            status.value, lift_authorised, stroke_pathway,
        )
        return Disposition(
            ruleset_version=self._table.version,
            status=status,
            lift_authorised=lift_authorised,
            stroke_pathway=stroke_pathway,
            actions=actions,
            istumble=istumble,
            fast=fast,
            frat=frat,
            news2=news2,
            anticoagulants=list(thinners.medications),
            summary=summary,
        )

    def _flagged_items(
        self, istumble: Verdict, details: Mapping[str, str]
    ) -> list[FlaggedItem]:
        ignored = sorted(set(details) - set(istumble.noted))
        if ignored:
            logger.warning("Ignoring details for ISTUMBLE items not answered Yes/Unknown: %s", ignored)

        questions = {q.qid: q.question for q in self._table.istumble.questions}
        return [
            FlaggedItem(
                qid=qid,
                question=questions.get(qid, qid),
                answer=answer,
                details=details.get(qid) or None,
            )
            for qid, answer in istumble.noted.items()
        ]


def _score_line(name: str, result: ScoreResult | News2Outcome) -> str:
    if isinstance(result, IncompleteResult):
        return f"{name}: incomplete (missing {', '.join(result.missing)})"
    line = f"{name}: {result.total} ({result.band.value} risk)"
    if getattr(result, "red_score", False):
        line += ", single parameter at maximum"
    return line
