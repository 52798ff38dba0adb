"""Meeting schemas"""

from datetime import date, datetime, time
from typing import Optional
from uuid import UUID
from pydantic import Field

from estate_pulse.schemas.common import CamelModel


class MeetingCreate(CamelModel):
    """Meeting scheduling request"""
    project_id: UUID = Field(..., description="Project the meeting is about")
    meeting_date: date
    meeting_time: time
    attendees: str = Field(..., min_length=1, description="Free-text list of attendees")


class MeetingResponse(CamelModel):
    """Stored meeting"""
    id: UUID
    project_id: UUID
    meeting_date: str
    meeting_time: str
    attendees: str
    created_at: Optional[datetime] = None


class MeetingScheduleResponse(CamelModel):
    """Outcome of scheduling: the meeting is saved even when notification fails"""
    meeting: MeetingResponse
    notified: bool
    message: str


class MeetingNotification(CamelModel):
    """Payload handed to the e-mail notifier"""
    project_name: str
    meeting_date: str
    meeting_time: str
    attendees: str
