"""
Tests for the public feedback and community endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, patch

from spontaneity.config import Settings
from spontaneity.main import app

client = TestClient(app)

ROUTES = "spontaneity.routes.feedback"


@pytest.fixture
def mock_service_client():
    with patch(f"{ROUTES}.get_service_role_client") as mock:
        mock.return_value = MagicMock()
        yield mock.return_value


# =============================================================================
# /feedback
# =============================================================================

class TestFeedback:

    def test_stores_feedback(self, mock_service_client):
        response = client.post("/feedback", json={
            "result_id": "rec-1",
            "rating": "positive",
            "comment": "Loved it",
        })

        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_service_client.table.assert_called_with("feedback")

    def test_invalid_rating_is_rejected(self, mock_service_client):
        response = client.post("/feedback", json={"result_id": "rec-1", "rating": "meh"})

        assert response.status_code == 422
        mock_service_client.table.assert_not_called()

    def test_missing_result_id_is_rejected(self, mock_service_client):
        response = client.post("/feedback", json={"rating": "positive"})

        assert response.status_code == 422

    def test_storage_failure_is_500(self, mock_service_client):
        mock_service_client.table.return_value.insert.return_value.execute.side_effect = Exception("down")

        response = client.post("/feedback", json={"result_id": "rec-1", "rating": "negative"})

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "storage_error"


# =============================================================================
# /abuse-signal
# =============================================================================

class TestAbuseSignal:

    PAYLOAD = {
        "reason": "unsafe",
        "recommendation_id": "rec-1",
        "session_id": "sess-1",
        "timestamp": "2026-01-15T18:30:00Z",
    }

    def test_records_signal(self, mock_service_client):
        response = client.post("/abuse-signal", json=self.PAYLOAD)

        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_service_client.table.assert_called_with("abuse_signals")

    def test_storage_failure_still_succeeds(self, mock_service_client):
        mock_service_client.table.return_value.insert.return_value.execute.side_effect = Exception("down")

        response = client.post("/abuse-signal", json=self.PAYLOAD)

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_missing_storage_config_still_succeeds(self):
        with patch(f"{ROUTES}.get_service_role_client", side_effect=ValueError("not configured")):
            response = client.post("/abuse-signal", json=self.PAYLOAD)

        assert response.status_code == 200

    def test_unknown_reason_is_rejected(self, mock_service_client):
        response = client.post("/abuse-signal", json={**self.PAYLOAD, "reason": "boring"})

        assert response.status_code == 422


# =============================================================================
# /ugc/submit
# =============================================================================

class TestUGCSubmit:

    def test_accepted_idea_is_stored(self, mock_service_client):
        response = client.post("/ugc/submit", json={
            "idea": "Explore the Saturday farmers market downtown",
            "location": "Denver",
        })

        assert response.status_code == 200
        assert response.json()["success"] is True
        row = mock_service_client.table.return_value.insert.call_args.args[0]
        assert row["status"] == "approved"

    def test_rejected_idea_answers_success_without_storing(self, mock_service_client):
        response = client.post("/ugc/submit", json={
            "idea": "Come to my place tonight and see my records",
            "location": "Denver",
        })

        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_service_client.table.assert_not_called()

    def test_kill_switch(self, mock_service_client):
        with patch.object(Settings, "UGC_ENABLED", False):
            response = client.post("/ugc/submit", json={
                "idea": "Explore the Saturday farmers market downtown",
                "location": "Denver",
            })

        assert response.status_code == 200
        mock_service_client.table.assert_not_called()

    def test_idea_too_long_is_rejected(self, mock_service_client):
        response = client.post("/ugc/submit", json={"idea": "x" * 201, "location": "Denver"})

        assert response.status_code == 422

    def test_storage_failure_still_succeeds(self, mock_service_client):
        mock_service_client.table.return_value.insert.return_value.execute.side_effect = Exception("down")

        response = client.post("/ugc/submit", json={
            "idea": "Explore the Saturday farmers market downtown",
            "location": "Denver",
        })

        assert response.status_code == 200
        assert response.json()["success"] is True


# =============================================================================
# /save-result
# =============================================================================

class TestSaveResult:

    def test_returns_share_url(self, mock_service_client):
        with patch.object(Settings, "BASE_URL", "https://example.com"):
            response = client.post("/save-result", json={
                "result_id": "rec-1",
                "result_data": '{"title": "Kayak"}',
            })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["url"].startswith("https://example.com/r/")
        assert "expires_at" in data

    def test_missing_fields_are_rejected(self, mock_service_client):
        response = client.post("/save-result", json={"result_id": "rec-1"})

        assert response.status_code == 422

    def test_storage_failure_is_500(self, mock_service_client):
        mock_service_client.table.return_value.insert.return_value.execute.side_effect = Exception("down")

        response = client.post("/save-result", json={"result_id": "rec-1", "result_data": "{}"})

        assert response.status_code == 500
