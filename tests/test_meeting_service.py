"""Tests for meeting scheduling"""

import pytest
from datetime import date, time
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from estate_pulse.models import Meeting
from estate_pulse.schemas.meeting import MeetingCreate
from estate_pulse.services.meeting_service import (
    NOT_NOTIFIED_MESSAGE,
    NOTIFIED_MESSAGE,
    UNKNOWN_PROJECT,
    MeetingService,
)
from estate_pulse.services.notification_service import NotificationError


def meeting_request(project_id):
    return MeetingCreate.model_validate({
        "projectId": str(project_id),
        "meetingDate": "2025-09-30",
        "meetingTime": "14:30",
        "attendees": "Amina, Peter",
    })


@pytest.mark.asyncio
class TestScheduleMeeting:
    """Two-step scheduling: save, then notify"""

    async def test_saved_and_notified(self, db_session: AsyncSession, sample_project):
        notifier = AsyncMock()
        result = await MeetingService(db_session, notifier).schedule(meeting_request(sample_project.id))

        assert result.notified
        assert result.error is None
        assert result.message == NOTIFIED_MESSAGE
        assert result.meeting.meeting_date == "2025-09-30"
        assert result.meeting.meeting_time == "14:30"

        sent = notifier.send_meeting_notification.await_args.args[0]
        assert sent.project_name == "Palm Grove"
        assert sent.attendees == "Amina, Peter"

    async def test_notification_failure_keeps_meeting(self, db_session: AsyncSession, sample_project):
        notifier = AsyncMock()
        notifier.send_meeting_notification.side_effect = NotificationError("Email API returned 500")

        result = await MeetingService(db_session, notifier).schedule(meeting_request(sample_project.id))

        assert not result.notified
        assert result.error is None
        assert result.message == NOT_NOTIFIED_MESSAGE
        assert result.notification_error == "Email API returned 500"

        stored = (await db_session.execute(select(Meeting))).scalars().all()
        assert len(stored) == 1
        assert stored[0].id == result.meeting.id

    async def test_unexpected_notifier_fault_keeps_meeting(self, db_session: AsyncSession, sample_project):
        notifier = AsyncMock()
        notifier.send_meeting_notification.side_effect = RuntimeError("mail client misconfigured")

        result = await MeetingService(db_session, notifier).schedule(meeting_request(sample_project.id))

        assert not result.notified
        assert result.error is None
        assert result.notification_error == "mail client misconfigured"
        stored = (await db_session.execute(select(Meeting))).scalars().all()
        assert len(stored) == 1

    async def test_unknown_project_name(self, db_session: AsyncSession):
        notifier = AsyncMock()

        await MeetingService(db_session, notifier).schedule(meeting_request(uuid4()))

        sent = notifier.send_meeting_notification.await_args.args[0]
        assert sent.project_name == UNKNOWN_PROJECT

    async def test_save_failure_skips_notification(self):
        session = AsyncMock()
        session.add = MagicMock()
        session.get.return_value = None
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("database is locked"))
        notifier = AsyncMock()

        result = await MeetingService(session, notifier).schedule(meeting_request(uuid4()))

        assert result.meeting is None
        assert result.error.message == "database is locked"
        notifier.send_meeting_notification.assert_not_awaited()
        session.rollback.assert_awaited()


@pytest.mark.unit
def test_request_parses_date_and_time():
    request = meeting_request(uuid4())

    assert request.meeting_date == date(2025, 9, 30)
    assert request.meeting_time == time(14, 30)
