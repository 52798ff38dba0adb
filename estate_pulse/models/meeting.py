"""Meeting model"""

from sqlalchemy import Column, ForeignKey, String, Text, Uuid
from estate_pulse.models.base import BaseModel


class Meeting(BaseModel):
    """Review meeting scheduled for a project"""

    __tablename__ = "meetings"

    project_id = Column(
        Uuid(as_uuid=True), ForeignKey("projects.id"), nullable=False, index=True
    )
    meeting_date = Column(String(20), nullable=False)
    meeting_time = Column(String(20), nullable=False)
    attendees = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Meeting(id={self.id}, project_id={self.project_id}, date={self.meeting_date})>"
