"""HTTP API tests — routes, version selection and error mapping."""

import pytest
from fastapi.testclient import TestClient

from falls_server.app import create_app
from falls_server.config import ServerSettings, load_settings

API = "/api/v1"


@pytest.fixture(scope="module")
def client():
    with TestClient(create_app(ServerSettings())) as c:
        yield c


# =====================================================================
# Health and reference data
# =====================================================================


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["versions"] == ["v1", "v2"]


class TestReference:

    def test_rulesets(self, client):
        resp = client.get(f"{API}/reference/rulesets")
        assert resp.status_code == 200
        assert [r["version"] for r in resp.json()] == ["v1", "v2"]

    def test_medications(self, client):
        resp = client.get(f"{API}/reference/medications")
        assert resp.status_code == 200
        names = [m["name"] for m in resp.json()]
        assert "Warfarin" in names
        assert all(m["label"].startswith(m["name"]) for m in resp.json())
        warfarin = next(m for m in resp.json() if m["name"] == "Warfarin")
        assert warfarin == {
            "name": "Warfarin",
            "brands": ["Marevan", "Coumadin"],
            "label": "Warfarin (Marevan, Coumadin)",
        }

    def test_questions(self, client):
        resp = client.get(f"{API}/reference/questions/news2")
        assert resp.status_code == 200
        qids = [q["qid"] for q in resp.json()]
        assert qids[-1] == "consciousness"
        assert len(qids) == 6

    def test_unknown_instrument_404(self, client):
        resp = client.get(f"{API}/reference/questions/gcs")
        assert resp.status_code == 404


# =====================================================================
# Per-instrument endpoints
# =====================================================================


class TestInstruments:

    def test_istumble(self, client):
        resp = client.post(
            f"{API}/instruments/istumble",
            json={"responses": {"trauma": "Unknown"}, "blood_thinners": ["Warfarin"]},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "escalate"
        assert body["flag"] == "flagged"

    def test_fast(self, client):
        resp = client.post(f"{API}/instruments/fast", json={"responses": {"speech": "Yes"}})
        assert resp.status_code == 200
        assert resp.json()["triggered"] == ["speech"]

    def test_frat_version_query(self, client):
        for version, band in (("v1", "low"), ("v2", "minimal")):
            resp = client.post(
                f"{API}/instruments/frat", params={"version": version}, json={"responses": {}},
            )
            assert resp.status_code == 200
            assert resp.json()["band"] == band

    def test_news2(self, client, vitals):
        resp = client.post(f"{API}/instruments/news2", json={"responses": vitals})
        assert resp.status_code == 200
        body = resp.json()
        assert body["type"] == "news2"
        assert body["total"] == 0

    def test_news2_incomplete_is_not_an_error(self, client):
        resp = client.post(f"{API}/instruments/news2", json={"responses": {"spo2": 97}})
        assert resp.status_code == 200
        body = resp.json()
        assert body["type"] == "incomplete"
        assert "heart_rate" in body["missing"]

    def test_news2_strict_rejects_incomplete(self, client):
        resp = client.post(
            f"{API}/instruments/news2", params={"strict": "true"}, json={"responses": {"spo2": 97}},
        )
        assert resp.status_code == 422
        body = resp.json()
        assert body["error"] == "incomplete"
        assert body["instrument"] == "news2"
        assert "heart_rate" in body["missing"]
        assert "spo2" not in body["missing"]

    def test_news2_strict_scores_complete(self, client, vitals):
        resp = client.post(
            f"{API}/instruments/news2", params={"strict": "true"}, json={"responses": vitals},
        )
        assert resp.status_code == 200
        assert resp.json()["type"] == "news2"

    def test_unknown_version_404(self, client):
        resp = client.post(
            f"{API}/instruments/fast", params={"version": "v9"}, json={"responses": {}},
        )
        assert resp.status_code == 404


# =====================================================================
# Error mapping
# =====================================================================


class TestErrors:

    def test_invalid_answer_422(self, client):
        resp = client.post(f"{API}/instruments/fast", json={"responses": {"face": "maybe"}})
        assert resp.status_code == 422
        body = resp.json()
        assert body["error"] == "invalid_answer"
        assert body["instrument"] == "fast"
        assert body["qid"] == "face"

    def test_out_of_range_422(self, client, vitals):
        vitals["spo2"] = 120
        resp = client.post(f"{API}/instruments/news2", json={"responses": vitals})
        assert resp.status_code == 422
        assert resp.json()["error"] == "out_of_range"
        assert resp.json()["qid"] == "spo2"

    def test_malformed_body_422(self, client):
        resp = client.post(f"{API}/instruments/fast", json={"responses": "Yes"})
        assert resp.status_code == 422


# =====================================================================
# Whole assessment
# =====================================================================


class TestAssessments:

    def test_assess(self, client, vitals):
        resp = client.post(f"{API}/assessments", json={
            "istumble": {"pain": "Yes"},
            "istumble_details": {"pain": "Right wrist"},
            "fast": {"face": "No", "arm": "No", "speech": "No"},
            "frat": {"recent_falls": "within_3m"},
            "news2": vitals,
            "patient": {"age": "79"},
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["lift_authorised"] is False
        assert body["status"] == "escalate"
        assert body["ruleset_version"] == "v1"
        assert body["news2"]["type"] == "news2"
        assert body["summary"]["patient"]["age"] == "79"
        assert body["summary"]["flagged_items"][0]["details"] == "Right wrist"

    def test_assess_rejects_bad_section(self, client):
        resp = client.post(f"{API}/assessments", json={"blood_thinners": ["Heparin"]})
        assert resp.status_code == 422
        assert resp.json()["error"] == "invalid_answer"


# =====================================================================
# Settings
# =====================================================================


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("SERVER_PORT", "9000")
    monkeypatch.setenv("SERVER_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("SERVER_RULESET_VERSION", "v2")
    monkeypatch.setenv("SERVER_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.port == 9000
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.default_version == "v2"
    assert settings.log_level == "DEBUG"
