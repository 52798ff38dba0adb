"""Tests for meeting e-mail notifications"""

import json
import httpx
import pytest

from estate_pulse.schemas.meeting import MeetingNotification
from estate_pulse.services.notification_service import MeetingNotifier, NotificationError

API_URL = "https://mail.example.com/emails"


def notification(**overrides):
    data = {
        "project_name": "Palm Grove",
        "meeting_date": "2025-09-30",
        "meeting_time": "14:30",
        "attendees": "Amina, Peter",
    }
    data.update(overrides)
    return MeetingNotification(**data)


def notifier(handler, api_key="re_test"):
    return MeetingNotifier(
        api_key=api_key,
        api_url=API_URL,
        sender="Estate Pulse <noreply@example.com>",
        recipients=["pm@example.com"],
        transport=httpx.MockTransport(handler),
    )


class TestBuildEmail:
    """E-mail body construction"""

    def test_fields(self):
        email = notifier(lambda request: httpx.Response(200)).build_email(notification())

        assert email["to"] == ["pm@example.com"]
        assert email["from"] == "Estate Pulse <noreply@example.com>"
        assert email["subject"] == "New Meeting Scheduled"
        assert "Palm Grove" in email["html"]
        assert "14:30" in email["html"]

    def test_user_text_is_escaped(self):
        email = notifier(lambda request: httpx.Response(200)).build_email(
            notification(attendees="<script>alert(1)</script>", project_name="A & B")
        )

        assert "<script>" not in email["html"]
        assert "&lt;script&gt;" in email["html"]
        assert "A &amp; B" in email["html"]


@pytest.mark.asyncio
class TestSendNotification:
    """Delivery through the e-mail API"""

    async def test_success(self):
        requests = []

        def handler(request: httpx.Request):
            requests.append(request)
            return httpx.Response(200, json={"id": "email_123"})

        response = await notifier(handler).send_meeting_notification(notification())

        assert response == {"id": "email_123"}
        assert len(requests) == 1
        assert str(requests[0].url) == API_URL
        assert requests[0].headers["Authorization"] == "Bearer re_test"
        body = json.loads(requests[0].content)
        assert body["to"] == ["pm@example.com"]

    async def test_api_error_raises(self):
        def handler(request: httpx.Request):
            return httpx.Response(422, json={"message": "invalid from"})

        with pytest.raises(NotificationError, match="422"):
            await notifier(handler).send_meeting_notification(notification())

    async def test_network_error_raises(self):
        def handler(request: httpx.Request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NotificationError, match="request failed"):
            await notifier(handler).send_meeting_notification(notification())

    async def test_non_json_reply_raises(self):
        def handler(request: httpx.Request):
            return httpx.Response(200, text="OK")

        with pytest.raises(NotificationError, match="unreadable reply"):
            await notifier(handler).send_meeting_notification(notification())

    async def test_empty_reply(self):
        response = await notifier(lambda request: httpx.Response(202)).send_meeting_notification(
            notification()
        )

        assert response == {}

    async def test_missing_api_key(self):
        calls = []

        def handler(request: httpx.Request):
            calls.append(request)
            return httpx.Response(200)

        with pytest.raises(NotificationError, match="not configured"):
            await notifier(handler, api_key="").send_meeting_notification(notification())

        assert calls == []
