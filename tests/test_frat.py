"""FRAT scoring tests — literal weighted sum, ordered bands, unscored checklist."""

import pytest

from falls_rulesets.models.enums import RiskBand

# One option per item with its v1 weight.
LOWEST = {"recent_falls": "none_12m", "medications": "none", "psychological": "none", "cognitive": "amts_9_10"}
HIGHEST = {
    "recent_falls": "within_3m_inpatient",
    "medications": "more_than_two",
    "psychological": "severe",
    "cognitive": "amts_0_4",
}


def test_empty_scores_zero_low(engine):
    result = engine.score_frat({})
    assert result.total == 0
    assert result.band == RiskBand.LOW
    assert result.item_points == {}


def test_empty_scores_zero_minimal_in_v2(engine_v2):
    result = engine_v2.score_frat({})
    assert result.total == 0
    assert result.band == RiskBand.MINIMAL


def test_exact_sum_of_weights(engine):
    result = engine.score_frat({
        "recent_falls": "within_3m",     # 6
        "medications": "two",            # 3
        "psychological": "mild",         # 2
        "cognitive": "amts_7_8",         # 2
    })
    assert result.total == 13
    assert result.item_points == {
        "recent_falls": 6, "medications": 3, "psychological": 2, "cognitive": 2,
    }
    assert result.band == RiskBand.MEDIUM


def test_range_extremes(engine):
    assert engine.score_frat(LOWEST).total == 5
    high = engine.score_frat(HIGHEST)
    assert high.total == 20
    assert high.band == RiskBand.HIGH


@pytest.mark.parametrize("answers,total,band", [
    # 8 + 1 + 1 + 1 = 11
    ({"recent_falls": "within_3m_inpatient", "medications": "none",
      "psychological": "none", "cognitive": "amts_9_10"}, 11, RiskBand.LOW),
    # 8 + 2 + 1 + 1 = 12
    ({"recent_falls": "within_3m_inpatient", "medications": "one",
      "psychological": "none", "cognitive": "amts_9_10"}, 12, RiskBand.MEDIUM),
    # 8 + 4 + 2 + 1 = 15
    ({"recent_falls": "within_3m_inpatient", "medications": "more_than_two",
      "psychological": "mild", "cognitive": "amts_9_10"}, 15, RiskBand.MEDIUM),
    # 8 + 4 + 3 + 1 = 16
    ({"recent_falls": "within_3m_inpatient", "medications": "more_than_two",
      "psychological": "moderate", "cognitive": "amts_9_10"}, 16, RiskBand.HIGH),
])
def test_band_boundaries(engine, answers, total, band):
    result = engine.score_frat(answers)
    assert result.total == total
    assert result.band == band


def test_partial_form_under_scores(engine):
    """Unanswered items add nothing; no error is raised."""
    result = engine.score_frat({"recent_falls": "within_3m"})
    assert result.total == 6
    assert result.band == RiskBand.LOW


def test_v2_low_band_starts_at_floor(engine_v2):
    assert engine_v2.score_frat(LOWEST).band == RiskBand.LOW
    assert engine_v2.score_frat({"recent_falls": "between_3_12m"}).band == RiskBand.MINIMAL


def test_checklist_is_not_scored(engine):
    answers = dict(LOWEST, vision="Yes", postural="Yes", functional_change="Unknown")
    result = engine.score_frat(answers)
    assert result.total == 5
    assert result.checklist == {"vision": "Yes", "functional_change": "Unknown", "postural": "Yes"}


def test_unknown_option_rejected(engine):
    from falls_rulesets.errors import InvalidAnswerError

    with pytest.raises(InvalidAnswerError):
        engine.score_frat({"medications": "three"})
