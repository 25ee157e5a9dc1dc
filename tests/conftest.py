import pytest

from falls_rulesets.engine import AssessmentEngine
from falls_rulesets.ruleset import RulesetStore

# Every NEWS2 parameter at its normal value (total 0).
NORMAL_VITALS = {
    "respiratory_rate": 16,
    "spo2": 97,
    "temperature": 36.5,
    "systolic_bp": 120,
    "heart_rate": 80,
    "consciousness": "Alert",
}


@pytest.fixture(scope="session")
def store():
    """Load the packaged rule tables once for the entire test session."""
    s = RulesetStore()
    s.load()
    return s


@pytest.fixture(scope="session")
def engine(store):
    return AssessmentEngine(store, "v1")


@pytest.fixture(scope="session")
def engine_v2(store):
    return AssessmentEngine(store, "v2")


@pytest.fixture
def vitals():
    """Fresh copy of the normal vitals, safe to mutate per test."""
    return dict(NORMAL_VITALS)
