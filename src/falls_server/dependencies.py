"""FastAPI dependency injection — provides the store and the per-version engine.

Engines are built once during lifespan (one per rule-table version) and
looked up per request by the optional ``version`` query parameter.
"""

from fastapi import Query, Request

from falls_rulesets.engine import AssessmentEngine
from falls_rulesets.ruleset import RulesetStore


def get_store(request: Request) -> RulesetStore:
    """Return the RulesetStore singleton from ``app.state``."""
    return request.app.state.store


def get_engine(
    request: Request,
    version: str | None = Query(None, description="Rule-table version, e.g. v1"),
) -> AssessmentEngine:
    """Return the engine for ``version`` (server default when omitted).

    An unknown version raises ``KeyError``, which the global handler maps
    to 404.
    """
    key = version or request.app.state.settings.default_version
    engines: dict[str, AssessmentEngine] = request.app.state.engines
    try:
        return engines[key]
    except KeyError:
        raise KeyError(f"Unknown ruleset version: {key}") from None
