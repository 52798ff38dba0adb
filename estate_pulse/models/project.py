"""Project model"""

from sqlalchemy import Column, Integer, String, Text
from estate_pulse.models.base import BaseModel, JSONColumn


class Project(BaseModel):
    """
    Project model representing one estate development.

    Units reference projects through units.project_id; they are looked up
    separately and never loaded through a relationship, so deleting a project
    leaves the foreign-key decision to the database.
    """

    __tablename__ = "projects"

    name = Column(String(255), nullable=False)
    status = Column(
        String(50), default="planning", nullable=False
    )  # planning, in-progress, near-completion, completed
    progress = Column(Integer, default=0, nullable=False)
    total_units = Column(Integer, default=0, nullable=False)
    completed_units = Column(Integer, default=0, nullable=False)
    target_completion = Column(String(100), nullable=True)
    current_phase = Column(String(255), nullable=True)
    manager = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    start_date = Column(String(100), nullable=True)
    budget = Column(String(100), nullable=True)
    target_milestone = Column(Text, nullable=True)
    activities_in_progress = Column(JSONColumn, nullable=False, default=list)
    completed_activities = Column(JSONColumn, nullable=False, default=list)
    challenges = Column(JSONColumn, nullable=False, default=list)
    progress_images = Column(JSONColumn, nullable=False, default=list)
    weekly_notes = Column(Text, nullable=True)
    monthly_notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name}, status={self.status})>"
