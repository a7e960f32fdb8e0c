"""
Tests: HTTP layer via FastAPI TestClient.

Run with:
    pytest part450_portal/tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from part450_portal.api import create_app
from part450_portal.config import Settings
from part450_portal.samples import SAMPLE_MISSION_TEXT
from part450_portal.services.assist_service import AutoFillAssistant


@pytest.fixture
def client():
    settings = Settings(groq_api_key="")
    assistant = AutoFillAssistant(
        generate=lambda prompt: "LAUNCH SITE\nWallops Flight Facility, Pad 0B",
        settings=settings,
    )
    return TestClient(create_app(settings=settings, assistant=assistant))


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["rules"] == 5
        assert resp.json()["catalog_version"] == "part450-preapp-v1"


class TestExtractRoute:
    def test_extract_sample(self, client):
        resp = client.post("/api/extract", json={"text": SAMPLE_MISSION_TEXT})
        assert resp.status_code == 200
        body = resp.json()
        assert "Kennedy Space Center" in body["fields"]["launchSite"]
        assert len(body["suggestions"]) == len(body["fields"])

    def test_missing_text_is_422(self, client):
        assert client.post("/api/extract", json={}).status_code == 422


class TestComplianceRoutes:
    def test_score_empty(self, client):
        resp = client.post("/api/compliance/score", json={"fields": {}})
        assert resp.json() == {"score": 0}

    def test_validate(self, client):
        resp = client.post("/api/compliance/validate", json={"fields": {"launchSite": "KSC"}})
        body = resp.json()
        assert body["passed"] is False
        assert {"field", "message", "severity", "regulation", "fix"} <= set(body["issues"][0])

    def test_summary_keys(self, client):
        resp = client.post("/api/compliance/summary", json={"fields": {}})
        assert set(resp.json()) == {"safety", "technical", "operational", "documentation", "timeline"}

    def test_report(self, client):
        resp = client.post(
            "/api/compliance/report",
            json={"fields": {"launchReEntrySequence": "Liftoff", "launchSite": None}},
        )
        body = resp.json()
        assert body["score"] == 0
        assert body["timestamp"]
        assert body["summary"]["timeline"]["passed"] == 1


class TestAssistRoutes:
    def test_autofill(self, client):
        resp = client.post("/api/assist/autofill", json={"user_input": "Suborbital hop", "user_id": "u1"})
        body = resp.json()
        assert body["source"] == "llm"
        assert body["fields"] == {"launchSite": "Wallops Flight Facility, Pad 0B"}

    def test_autofill_rejects_blank_input(self, client):
        resp = client.post("/api/assist/autofill", json={"user_input": "   "})
        assert resp.status_code == 400

    def test_command(self, client):
        resp = client.post(
            "/api/assist/command",
            json={"text": "replace launch site with CCSFS", "form_state": {"launchSite": "KSC"}},
        )
        body = resp.json()
        assert body["command"]["kind"] == "replace_field"
        assert body["form_state"] == {"launchSite": "CCSFS"}
