"""Project schemas"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID
from pydantic import Field, field_validator

from estate_pulse.schemas.common import CamelModel
from estate_pulse.schemas.unit import UnitDraft, UnitResponse
from estate_pulse.utils.dates import normalize_date_text


class ProjectStatus(str, Enum):
    """Project lifecycle status; any value may be set directly"""
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    NEAR_COMPLETION = "near-completion"
    COMPLETED = "completed"


class ProjectBase(CamelModel):
    """Base project schema"""
    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    status: ProjectStatus = Field(default=ProjectStatus.PLANNING, description="Project status")
    progress: int = Field(default=0, ge=0, le=100, description="Completion percentage")
    total_units: int = Field(default=0, ge=0)
    completed_units: int = Field(default=0, ge=0)
    target_completion: str = ""
    current_phase: str = ""
    manager: str = ""
    location: str = ""
    start_date: str = ""
    budget: str = ""
    target_milestone: str = ""
    activities_in_progress: List[str] = Field(default_factory=list)
    completed_activities: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)
    progress_images: List[str] = Field(default_factory=list)
    weekly_notes: str = ""
    monthly_notes: str = ""


class ProjectCreate(ProjectBase):
    """
    Project creation schema.

    ``units`` is an optional batch inserted after the project row as a
    separate step.
    """
    units: Optional[List[UnitDraft]] = Field(None, description="Units to insert after the project")

    @field_validator("start_date", "target_completion")
    @classmethod
    def normalize_dates(cls, v: str) -> str:
        return normalize_date_text(v)


class ProjectUpdate(CamelModel):
    """Project update schema - all fields optional, only provided fields are written"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[ProjectStatus] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    total_units: Optional[int] = Field(None, ge=0)
    completed_units: Optional[int] = Field(None, ge=0)
    target_completion: Optional[str] = None
    current_phase: Optional[str] = None
    manager: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    budget: Optional[str] = None
    target_milestone: Optional[str] = None
    activities_in_progress: Optional[List[str]] = None
    completed_activities: Optional[List[str]] = None
    challenges: Optional[List[str]] = None
    progress_images: Optional[List[str]] = None
    weekly_notes: Optional[str] = None
    monthly_notes: Optional[str] = None

    @field_validator("start_date", "target_completion")
    @classmethod
    def normalize_dates(cls, v: Optional[str]) -> Optional[str]:
        return normalize_date_text(v)


class ProjectResponse(ProjectBase):
    """Project as held by the application, with its units"""
    id: UUID
    units: List[UnitResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectListResponse(CamelModel):
    """List of projects response"""
    projects: List[ProjectResponse]
    total: int = Field(..., description="Total number of projects")


class ProjectCreateResponse(CamelModel):
    """Result of a project create, which may partially fail on its units"""
    project: ProjectResponse
    units_error: Optional[str] = Field(None, description="Set when the unit batch was rejected")
