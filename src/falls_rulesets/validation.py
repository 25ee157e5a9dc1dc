"""Boundary validation — raw form values in, typed ``ResponseSet`` out.

Raw answers come from a UI as a plain mapping.  Each value is checked
against its question's declared domain and rejected if it does not fit;
nothing is coerced into a "safe" default.

  - ``None`` and blank strings mean "unanswered" and are dropped
  - categorical answers must be one of the question's option ids (exact match)
  - numeric answers may be numbers or numeric strings; they must be finite,
    whole where ``decimals == 0`` and no finer than
    ``decimals`` places otherwise, and inside ``[min_value, max_value]``
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Sequence

from falls_rulesets.errors import InvalidAnswerError, OutOfRangeNumericError
from falls_rulesets.models.question import CategoricalQuestion, NumericQuestion, Question
from falls_rulesets.models.response import AnticoagulantStatus, Answer, ResponseSet

logger = logging.getLogger(__name__)


def is_unanswered(value: Any) -> bool:
    """True for the values a form submits when nothing was chosen."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def build_response_set(
    instrument: str,
    questions: Sequence[Question],
    raw: Mapping[str, Any] | None,
) -> ResponseSet:
    """Validate ``raw`` against ``questions`` and return a ``ResponseSet``.

    Raises:
        InvalidAnswerError: unknown qid, or a value outside the question's domain.
        OutOfRangeNumericError: numeric value outside the plausible range.
    """
    by_qid = {q.qid: q for q in questions}
    answers: dict[str, Answer] = {}

    for qid, value in (raw or {}).items():
        question = by_qid.get(qid)
        if question is None:
            raise InvalidAnswerError(
                f"Unknown question '{qid}' for {instrument}",
                instrument=instrument, qid=qid, value=value,
            )
        if is_unanswered(value):
            continue
        if isinstance(question, CategoricalQuestion):
            answers[qid] = _check_categorical(instrument, question, value)
        else:
            answers[qid] = _check_numeric(instrument, question, value)

    return ResponseSet(instrument=instrument, answers=answers)


def build_anticoagulants(
    vocabulary: Iterable[str],
    raw: Iterable[str] | None,
) -> AnticoagulantStatus:
    """Validate selected medication names against the reference vocabulary.

    Duplicates are dropped, selection order is kept.

    Raises:
        InvalidAnswerError: a name outside the vocabulary.
    """
    allowed = set(vocabulary)
    selected: list[str] = []
    for name in raw or ():
        if is_unanswered(name):
            continue
        if not isinstance(name, str) or name not in allowed:
            raise InvalidAnswerError(
                f"Unknown medication '{name}'",
                instrument="medications", qid="blood_thinners", value=name,
            )
        if name not in selected:
            selected.append(name)
    return AnticoagulantStatus(medications=tuple(selected))


# ---------------------------------------------------------------------------
# Per-domain checks
# ---------------------------------------------------------------------------

def _check_categorical(instrument: str, q: CategoricalQuestion, value: Any) -> str:
    if not isinstance(value, str) or value not in q.option_ids:
        logger.debug("%s/%s rejected categorical value %r", instrument, q.qid, value)
        raise InvalidAnswerError(
            f"'{value}' is not a valid answer for {q.qid}; expected one of {q.option_ids}",
            instrument=instrument, qid=q.qid, value=value,
        )
    return value


def _check_numeric(instrument: str, q: NumericQuestion, value: Any) -> float:
    # bool is an int subclass; a checkbox value is never a vital sign
    if isinstance(value, bool):
        num = None
    else:
        try:
            num = float(value)
        except (TypeError, ValueError):
            num = None

    if num is None or not math.isfinite(num):
        logger.debug("%s/%s rejected numeric value %r", instrument, q.qid, value)
        raise InvalidAnswerError(
            f"'{value}' is not a finite number for {q.qid}",
            instrument=instrument, qid=q.qid, value=value,
        )
    if q.decimals == 0 and not num.is_integer():
        raise InvalidAnswerError(
            f"{q.qid} must be a whole number of {q.unit}, got {value}",
            instrument=instrument, qid=q.qid, value=value,
        )
    # finer precision than declared would slip between scoring rows
    if q.decimals > 0 and round(num, q.decimals) != num:
        raise InvalidAnswerError(
            f"{q.qid} allows at most {q.decimals} decimal place(s), got {value}",
            instrument=instrument, qid=q.qid, value=value,
        )
    if not q.min_value <= num <= q.max_value:
        raise OutOfRangeNumericError(
            f"{q.qid}={num:g} {q.unit} is outside the plausible range "
            f"{q.min_value:g}-{q.max_value:g}",
            instrument=instrument, qid=q.qid, value=num,
        )
    return num
