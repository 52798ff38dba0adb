"""Tests for meeting scheduling endpoints"""

import json
import httpx
import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from estate_pulse.api.dependencies import get_meeting_notifier
from estate_pulse.main import app
from estate_pulse.models import Meeting
from estate_pulse.services.notification_service import MeetingNotifier


def use_email_api(handler):
    notifier = MeetingNotifier(
        api_key="re_test",
        api_url="https://mail.example.com/emails",
        transport=httpx.MockTransport(handler),
    )
    app.dependency_overrides[get_meeting_notifier] = lambda: notifier


def payload(project_id):
    return {
        "projectId": str(project_id),
        "meetingDate": "2025-09-30",
        "meetingTime": "14:30",
        "attendees": "Amina, Peter",
    }


@pytest.mark.asyncio
class TestScheduleMeeting:
    """Test POST /api/v1/meetings endpoint"""

    async def test_scheduled_and_notified(self, async_client: AsyncClient, sample_project):
        sent = []

        def handler(request: httpx.Request):
            sent.append(json.loads(request.content))
            return httpx.Response(200, json={"id": "email_1"})

        use_email_api(handler)

        response = await async_client.post("/api/v1/meetings", json=payload(sample_project.id))

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["notified"] is True
        assert data["meeting"]["meetingDate"] == "2025-09-30"
        assert data["meeting"]["meetingTime"] == "14:30"
        assert "Palm Grove" in sent[0]["html"]
        assert sent[0]["to"] == ["pm@example.com", "site@example.com"]

    async def test_email_failure_is_partial_success(
        self, async_client: AsyncClient, db_session: AsyncSession, sample_project
    ):
        use_email_api(lambda request: httpx.Response(500, json={"message": "down"}))

        response = await async_client.post("/api/v1/meetings", json=payload(sample_project.id))

        assert response.status_code == status.HTTP_207_MULTI_STATUS
        data = response.json()
        assert data["notified"] is False
        assert data["message"] == (
            "Meeting was scheduled but email notification failed. Please inform manually."
        )
        stored = (await db_session.execute(select(Meeting))).scalars().all()
        assert len(stored) == 1

    async def test_plain_text_email_reply_is_partial_success(
        self, async_client: AsyncClient, db_session: AsyncSession, sample_project
    ):
        use_email_api(lambda request: httpx.Response(200, text="OK"))

        response = await async_client.post("/api/v1/meetings", json=payload(sample_project.id))

        assert response.status_code == status.HTTP_207_MULTI_STATUS
        assert response.json()["notified"] is False
        stored = (await db_session.execute(select(Meeting))).scalars().all()
        assert len(stored) == 1

    async def test_invalid_date(self, async_client: AsyncClient, db_session: AsyncSession, sample_project):
        use_email_api(lambda request: httpx.Response(200))
        body = payload(sample_project.id)
        body["meetingDate"] = "30th September"

        response = await async_client.post("/api/v1/meetings", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "meetingDate"
        assert (await db_session.execute(select(Meeting))).scalars().all() == []

    async def test_attendees_required(self, async_client: AsyncClient, sample_project):
        use_email_api(lambda request: httpx.Response(200))
        body = payload(sample_project.id)
        body["attendees"] = ""

        response = await async_client.post("/api/v1/meetings", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
