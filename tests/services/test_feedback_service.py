"""
Tests for feedback, abuse signals, community ideas and saved results.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from spontaneity.schemas.feedback import (
    AbuseSignalRequest,
    FeedbackRequest,
    SaveResultRequest,
    UGCSubmissionRequest,
)
from spontaneity.services.feedback_service import (
    record_abuse_signal,
    save_result,
    store_feedback,
    submit_ugc_idea,
)


def _inserted_row(client):
    return client.table.return_value.insert.call_args.args[0]


@pytest.mark.asyncio
async def test_store_feedback(supabase_client):
    await store_feedback(
        supabase_client,
        FeedbackRequest(result_id="rec-1", rating="positive", comment=""),
    )

    supabase_client.table.assert_called_with("feedback")
    row = _inserted_row(supabase_client)
    assert row["result_id"] == "rec-1"
    assert row["rating"] == "positive"
    assert row["comment"] is None


@pytest.mark.asyncio
async def test_store_feedback_propagates_errors(supabase_client):
    supabase_client.table.return_value.insert.return_value.execute.side_effect = Exception("down")

    with pytest.raises(Exception, match="down"):
        await store_feedback(supabase_client, FeedbackRequest(result_id="rec-1", rating="negative"))


class TestAbuseSignal:

    def _signal(self):
        return AbuseSignalRequest(
            reason="outdated",
            recommendation_id="rec-9",
            session_id="sess-1",
            timestamp=datetime(2026, 1, 15, 18, 30, tzinfo=timezone.utc),
        )

    @pytest.mark.asyncio
    async def test_recorded(self, supabase_client):
        assert await record_abuse_signal(supabase_client, self._signal()) is True

        supabase_client.table.assert_called_with("abuse_signals")
        row = _inserted_row(supabase_client)
        assert row["reason"] == "outdated"
        assert row["signaled_at"] == "2026-01-15T18:30:00+00:00"

    @pytest.mark.asyncio
    async def test_storage_failure_reported_as_false(self, supabase_client):
        supabase_client.table.return_value.insert.return_value.execute.side_effect = Exception("down")

        assert await record_abuse_signal(supabase_client, self._signal()) is False


class TestSubmitUGCIdea:

    @pytest.mark.asyncio
    async def test_accepted_idea_is_stored_as_approved(self, supabase_client):
        stored = await submit_ugc_idea(supabase_client, UGCSubmissionRequest(
            idea="  Explore the Saturday farmers market downtown ",
            location="Denver",
            timing="weekend mornings",
        ))

        assert stored is True
        supabase_client.table.assert_called_with("ugc_submissions")
        row = _inserted_row(supabase_client)
        assert row["idea"] == "Explore the Saturday farmers market downtown"
        assert row["status"] == "approved"
        assert row["timing"] == "weekend mornings"
        assert "created_at" in row

    @pytest.mark.asyncio
    async def test_short_idea_is_dropped(self, supabase_client):
        stored = await submit_ugc_idea(supabase_client, UGCSubmissionRequest(idea="Visit it", location="Denver"))

        assert stored is False
        supabase_client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsafe_idea_is_dropped(self, supabase_client):
        stored = await submit_ugc_idea(supabase_client, UGCSubmissionRequest(
            idea="Come to my place and see the vinyl collection",
            location="Denver",
        ))

        assert stored is False
        supabase_client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_street_address_location_is_dropped(self, supabase_client):
        stored = await submit_ugc_idea(supabase_client, UGCSubmissionRequest(
            idea="Explore the community garden and try the herbs",
            location="1420 Pearl Street",
        ))

        assert stored is False
        supabase_client.table.assert_not_called()


@pytest.mark.asyncio
async def test_save_result_builds_share_link(supabase_client):
    url, expires_at = await save_result(
        supabase_client,
        SaveResultRequest(result_id="rec-1", result_data='{"title": "Kayak"}'),
        base_url="https://example.com",
        token="abc123",
    )

    assert url == "https://example.com/r/abc123"
    remaining = expires_at - datetime.now(timezone.utc)
    assert timedelta(hours=23, minutes=59) < remaining <= timedelta(hours=24)

    supabase_client.table.assert_called_with("saved_results")
    row = _inserted_row(supabase_client)
    assert row["token"] == "abc123"
    assert row["result_data"] == '{"title": "Kayak"}'
    assert row["expires_at"] == expires_at.isoformat()


@pytest.mark.asyncio
async def test_save_result_generates_token():
    url, _ = await save_result(
        MagicMock(),
        SaveResultRequest(result_id="rec-1", result_data="{}"),
        base_url="https://example.com",
    )

    token = url.rsplit("/r/", 1)[1]
    assert len(token) >= 16
