"""Unit model"""

from sqlalchemy import Column, ForeignKey, Integer, String, Uuid
from estate_pulse.models.base import BaseModel, JSONColumn


class Unit(BaseModel):
    """
    Unit model representing one villa, townhouse, apartment or
    infrastructure package inside a project.
    """

    __tablename__ = "units"

    project_id = Column(
        Uuid(as_uuid=True), ForeignKey("projects.id"), nullable=False, index=True
    )
    unit_number = Column(String(50), nullable=False, index=True)
    type = Column(String(100), nullable=False)
    sub_type = Column(String(100), nullable=True)
    bedrooms = Column(Integer, nullable=True)
    status = Column(
        String(50), default="in-progress", nullable=False
    )  # behind-schedule, in-progress, completed
    progress = Column(Integer, default=0, nullable=False)
    current_phase = Column(String(255), nullable=True)
    target_completion = Column(String(100), nullable=True)
    last_updated = Column(String(100), nullable=True)
    activities = Column(JSONColumn, nullable=False, default=dict)
    challenges = Column(JSONColumn, nullable=False, default=list)
    photos = Column(JSONColumn, nullable=False, default=list)

    def __repr__(self):
        return f"<Unit(id={self.id}, unit_number={self.unit_number})>"
