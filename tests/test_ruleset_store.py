"""RulesetStore loading and lookup tests.

Validates that the packaged rule tables load into typed models and that
malformed tables are rejected at load time rather than at scoring time.

Expected shape (from rules/v1/):
    8 ISTUMBLE questions, 3 FAST questions, 4 scored FRAT items,
    10 FRAT checklist items, 5 numeric NEWS2 parameters + consciousness,
    6 medications
"""

import shutil
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from falls_rulesets.models.enums import RiskBand
from falls_rulesets.ruleset import RulesetStore

PACKAGED_RULES = Path(__file__).resolve().parents[1] / "src" / "falls_rulesets" / "rules"


# =====================================================================
# Loading
# =====================================================================


def test_store_loads_all_versions(store):
    """Both packaged versions load."""
    assert store.versions() == ["v1", "v2"]


def test_default_version_is_v1(store):
    assert store.get().version == "v1"
    assert store.get(None) is store.get("v1")


def test_unknown_version_raises_key_error(store):
    with pytest.raises(KeyError, match="v99"):
        store.get("v99")


def test_v1_question_counts(store):
    table = store.get("v1")
    assert [q.qid for q in table.istumble.questions] == [
        "pain", "spine", "tingling", "unconscious",
        "mobility", "bleed", "unwell", "trauma",
    ]
    assert [q.qid for q in table.fast.questions] == ["face", "arm", "speech"]
    assert len(table.frat.questions) == 4
    assert len(table.frat.checklist) == 10
    assert [p.qid for p in table.news2.parameters] == [
        "respiratory_rate", "spo2", "temperature", "systolic_bp", "heart_rate",
    ]
    assert table.news2.consciousness.option_ids == ["Alert", "Voice", "Pain", "Unresponsive"]


def test_yes_no_answers_stay_strings(store):
    """YAML must not turn Yes/No into booleans."""
    for q in store.get("v1").istumble.questions:
        assert q.option_ids == ["Yes", "No", "Unknown"], q.qid


def test_band_tables(store):
    v1 = [(b.lower_bound, b.band) for b in store.get("v1").frat.bands]
    v2 = [(b.lower_bound, b.band) for b in store.get("v2").frat.bands]
    assert v1 == [(16, RiskBand.HIGH), (12, RiskBand.MEDIUM), (0, RiskBand.LOW)]
    assert v2[-1] == (0, RiskBand.MINIMAL)
    assert [(b.lower_bound, b.band) for b in store.get("v1").news2.bands] == [
        (7, RiskBand.HIGH), (5, RiskBand.MEDIUM), (0, RiskBand.LOW),
    ]


def test_manifest_description_loaded(store):
    assert store.get("v1").description
    assert store.get("v2").version == "v2"


def test_medications(store):
    table = store.get("v1")
    assert table.medication_names == [
        "Aspirin", "Clopidogrel", "Warfarin", "Apixaban", "Rivaroxaban", "Edoxaban",
    ]
    assert store.resolve_medication("Warfarin")["label"] == "Warfarin (Marevan, Coumadin)"
    with pytest.raises(KeyError):
        store.resolve_medication("Paracetamol")


# =====================================================================
# Rejection of malformed tables
# =====================================================================


def _copy_v1(tmp_path: Path) -> Path:
    target = tmp_path / "rules" / "v1"
    shutil.copytree(PACKAGED_RULES / "v1", target)
    return target


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        RulesetStore(tmp_path / "nope").load()


def test_missing_instrument_file(tmp_path):
    version_dir = _copy_v1(tmp_path)
    (version_dir / "news2.yaml").unlink()
    with pytest.raises(FileNotFoundError, match="news2.yaml"):
        RulesetStore(version_dir.parent).load()


def test_ascending_bands_rejected(tmp_path):
    version_dir = _copy_v1(tmp_path)
    frat = yaml.safe_load((version_dir / "frat.yaml").read_text(encoding="utf-8"))
    frat["bands"] = [
        {"lower_bound": 0, "band": "low"},
        {"lower_bound": 12, "band": "medium"},
    ]
    (version_dir / "frat.yaml").write_text(yaml.safe_dump(frat), encoding="utf-8")
    with pytest.raises(ValidationError, match="strictly descending"):
        RulesetStore(version_dir.parent).load()


def test_unweighted_frat_option_rejected(tmp_path):
    version_dir = _copy_v1(tmp_path)
    frat = yaml.safe_load((version_dir / "frat.yaml").read_text(encoding="utf-8"))
    del frat["questions"][0]["options"][0]["points"]
    (version_dir / "frat.yaml").write_text(yaml.safe_dump(frat), encoding="utf-8")
    with pytest.raises(ValidationError, match="has no points"):
        RulesetStore(version_dir.parent).load()


def test_news2_scoring_gap_rejected(tmp_path):
    """A missing row is a load error, not a failure while scoring a patient."""
    version_dir = _copy_v1(tmp_path)
    news2 = yaml.safe_load((version_dir / "news2.yaml").read_text(encoding="utf-8"))
    heart_rate = next(p for p in news2["parameters"] if p["qid"] == "heart_rate")
    heart_rate["scoring"] = [r for r in heart_rate["scoring"] if r["op"] != "ge"]
    (version_dir / "news2.yaml").write_text(yaml.safe_dump(news2), encoding="utf-8")
    with pytest.raises(ValidationError, match="heart_rate leave 131 uncovered"):
        RulesetStore(version_dir.parent).load()


def test_custom_variant_needs_no_code(tmp_path):
    """A new cut point is a data change only."""
    version_dir = _copy_v1(tmp_path)
    frat = yaml.safe_load((version_dir / "frat.yaml").read_text(encoding="utf-8"))
    frat["bands"] = [
        {"lower_bound": 10, "band": "high"},
        {"lower_bound": 0, "band": "low"},
    ]
    (version_dir / "frat.yaml").write_text(yaml.safe_dump(frat), encoding="utf-8")
    s = RulesetStore(version_dir.parent)
    s.load()
    assert [b.band for b in s.get("v1").frat.bands] == [RiskBand.HIGH, RiskBand.LOW]
