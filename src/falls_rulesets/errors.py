"""Input errors raised at the validation boundary.

All errors subclass ``ValueError`` so callers that only care about "bad
input" can catch that.  Each carries the instrument, question id and the
offending value so the UI can point at the right field.
"""

from __future__ import annotations

from typing import Any


class AssessmentError(ValueError):
    """Base class for rejected assessment input."""

    def __init__(
        self,
        message: str,
        *,
        instrument: str | None = None,
        qid: str | None = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.instrument = instrument
        self.qid = qid
        self.value = value


class InvalidAnswerError(AssessmentError):
    """Value outside a question's declared domain, or an unknown question."""


class OutOfRangeNumericError(AssessmentError):
    """Numeric value outside the instrument's plausible range."""


class IncompleteInputError(AssessmentError):
    """Required parameters are missing."""

    def __init__(self, message: str, *, instrument: str | None = None, missing: list[str] | None = None) -> None:
        super().__init__(message, instrument=instrument)
        self.missing = list(missing or [])
