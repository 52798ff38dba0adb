"""Meeting scheduling: save the meeting, then notify"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from estate_pulse.models.meeting import Meeting
from estate_pulse.models.project import Project
from estate_pulse.schemas.meeting import MeetingCreate, MeetingNotification, MeetingResponse
from estate_pulse.services.notification_service import MeetingNotifier, NotificationError
from estate_pulse.services.project_gateway import StoreError
from estate_pulse.services.schema_mapper import meeting_to_insert_row, row_as_dict, row_to_meeting

logger = logging.getLogger(__name__)

UNKNOWN_PROJECT = "Unknown Project"
NOTIFIED_MESSAGE = "Meeting has been scheduled and email notification sent successfully."
NOT_NOTIFIED_MESSAGE = (
    "Meeting was scheduled but email notification failed. Please inform manually."
)


@dataclass
class MeetingScheduleResult:
    """
    Outcome of scheduling.

    ``error`` means nothing was saved. A saved meeting with
    ``notified=False`` is a partial success.
    """

    meeting: Optional[MeetingResponse] = None
    notified: bool = False
    error: Optional[StoreError] = None
    notification_error: Optional[str] = None

    @property
    def message(self) -> str:
        if self.error is not None:
            return "Failed to schedule meeting. Please try again."
        return NOTIFIED_MESSAGE if self.notified else NOT_NOTIFIED_MESSAGE


class MeetingService:
    """Persists meetings and sends the notification e-mail"""

    def __init__(self, db: AsyncSession, notifier: MeetingNotifier):
        self.db = db
        self.notifier = notifier

    async def _project_name(self, project_id) -> str:
        try:
            project = await self.db.get(Project, project_id)
        except SQLAlchemyError as e:
            logger.warning(f"Could not look up project {project_id}: {e}")
            return UNKNOWN_PROJECT
        return project.name if project else UNKNOWN_PROJECT

    async def schedule(self, request: MeetingCreate) -> MeetingScheduleResult:
        """
        Save a meeting and notify the configured recipients.

        The notification runs only after the save is committed; its failure
        is reported but never undoes the save.
        """
        project_name = await self._project_name(request.project_id)

        meeting = Meeting(**meeting_to_insert_row(request))
        try:
            self.db.add(meeting)
            await self.db.commit()
            await self.db.refresh(meeting)
        except SQLAlchemyError as e:
            await self.db.rollback()
            error = StoreError.from_exception(e)
            logger.error(f"Error scheduling meeting: [{error.code}] {error.message}")
            return MeetingScheduleResult(error=error)

        saved = row_to_meeting(row_as_dict(meeting))
        logger.info(f"Scheduled meeting {saved.id} for project {request.project_id}")

        notification = MeetingNotification(
            project_name=project_name,
            meeting_date=saved.meeting_date,
            meeting_time=saved.meeting_time,
            attendees=saved.attendees,
        )
        try:
            await self.notifier.send_meeting_notification(notification)
        except NotificationError as e:
            logger.error(f"Meeting {saved.id} saved but notification failed: {e}")
            return MeetingScheduleResult(meeting=saved, notified=False, notification_error=str(e))
        except Exception as e:
            # The meeting is already committed; any notifier fault stays partial
            logger.exception(f"Meeting {saved.id} saved but notifier raised unexpectedly: {e}")
            return MeetingScheduleResult(meeting=saved, notified=False, notification_error=str(e))

        return MeetingScheduleResult(meeting=saved, notified=True)
