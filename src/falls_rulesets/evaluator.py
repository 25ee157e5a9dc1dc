"""RuleEvaluator — matches values against rule-table rows.

Two table shapes are resolved here and shared by every instrument:

  - **scoring rows** (``ScoringRule``): ``{op, value, points}`` evaluated
    top-down, first match wins (NEWS2 parameter banding)
  - **band thresholds** (``BandThreshold``): ``(lower_bound, band)`` pairs in
    descending order; the first bound the total reaches wins (FRAT, NEWS2)

Comparisons are on raw input units, with no unit conversion and no rounding.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from falls_rulesets.models.enums import RiskBand
from falls_rulesets.models.schema import BandThreshold, ScoringRule

logger = logging.getLogger(__name__)


class RuleEvaluator:
    """Stateless matcher for scoring rows and band thresholds."""

    # ------------------------------------------------------------------
    # Scoring rows
    # ------------------------------------------------------------------

    def first_match(self, rules: Sequence[ScoringRule], value: Any) -> ScoringRule | None:
        """Return the first row whose predicate holds for ``value``."""
        for rule in rules:
            if self._compare(rule.op, value, rule.value):
                return rule
        return None

    def points_for(self, qid: str, rules: Sequence[ScoringRule], value: Any) -> int:
        """Points for ``value``; a table with a gap for ``value`` is a ruleset error.

        Raises:
            ValueError: if no row matches.
        """
        rule = self.first_match(rules, value)
        if rule is None:
            raise ValueError(f"No scoring rule for {qid}={value!r}; the rule table has a gap")
        return rule.points

    # ------------------------------------------------------------------
    # Bands
    # ------------------------------------------------------------------

    @staticmethod
    def band_for(total: int, bands: Sequence[BandThreshold]) -> RiskBand:
        """Map a total onto the ordered ``(lower_bound, band)`` list.

        Bands are validated to be strictly descending with the last bound at
        or below zero, so a non-negative total always lands somewhere.  A
        total below every bound falls into the lowest band.
        """
        for threshold in bands:
            if total >= threshold.lower_bound:
                return threshold.band
        return bands[-1].band

    # ------------------------------------------------------------------
    # Predicate evaluation
    # ------------------------------------------------------------------

    @staticmethod
    def _compare(op: str, answer: Any, value: Any) -> bool:
        """Apply an operator to an answer and an expected value."""
        if op == "eq":
            return answer == value

        # --- Numeric comparisons ---
        if op in ("lt", "le", "gt", "ge", "between"):
            try:
                ans_num = float(answer)
            except (TypeError, ValueError):
                return False

            if op == "lt":
                return ans_num < float(value)
            if op == "le":
                return ans_num <= float(value)
            if op == "gt":
                return ans_num > float(value)
            if op == "ge":
                return ans_num >= float(value)
            if op == "between":
                # value is expected to be [min, max]
                lo, hi = float(value[0]), float(value[1])
                return lo <= ans_num <= hi

        logger.warning("Unknown scoring operator: %s", op)
        return False
