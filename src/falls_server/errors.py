"""Global exception handlers — map SDK exceptions to HTTP status codes.

The SDK raises typed ``AssessmentError`` subclasses for rejected input and
``KeyError`` for unknown versions or instruments.  Rather than catching
these in every route, we install global handlers.  This keeps route
handlers clean and focused on the happy path.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from falls_rulesets.errors import (
    AssessmentError,
    IncompleteInputError,
    InvalidAnswerError,
    OutOfRangeNumericError,
)

logger = logging.getLogger(__name__)

# --- Error kind reported to the client, keyed by exception class ---
# Checked in order; first isinstance match wins.
_ERROR_KINDS: list[tuple[type[AssessmentError], str]] = [
    (OutOfRangeNumericError, "out_of_range"),
    (IncompleteInputError, "incomplete"),
    (InvalidAnswerError, "invalid_answer"),
]


async def assessment_error_handler(request: Request, exc: AssessmentError) -> JSONResponse:
    """Map rejected input to 422 with enough detail to highlight the field.

    Unlike internal errors, these messages only describe the submitted
    value, so they are returned to the client as-is.
    """
    kind = "invalid_input"
    for cls, name in _ERROR_KINDS:
        if isinstance(exc, cls):
            kind = name
            break

    logger.warning("%s at %s: %s", type(exc).__name__, request.url, exc)
    content = {
        "detail": str(exc),
        "error": kind,
        "instrument": exc.instrument,
        "qid": exc.qid,
    }
    if isinstance(exc, IncompleteInputError):
        content["missing"] = exc.missing
    return JSONResponse(status_code=422, content=content)


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Map ``KeyError`` (unknown version, instrument or medication) to 404."""
    logger.warning("KeyError at %s: %s", request.url, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
