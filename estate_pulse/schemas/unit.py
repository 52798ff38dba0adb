"""Unit schemas"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator

from estate_pulse.schemas.common import CamelModel
from estate_pulse.utils.dates import normalize_date_text


class UnitStatus(str, Enum):
    """Construction status of a unit or of one of its phases"""
    BEHIND_SCHEDULE = "behind-schedule"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


ACTIVITY_PHASES = ("foundation", "structure", "roofing", "mep", "interior", "finishing")


class UnitActivities(BaseModel):
    """Status of each of the six fixed construction phases"""

    model_config = ConfigDict(extra="forbid", use_enum_values=True, validate_default=True)

    foundation: UnitStatus = UnitStatus.IN_PROGRESS
    structure: UnitStatus = UnitStatus.IN_PROGRESS
    roofing: UnitStatus = UnitStatus.IN_PROGRESS
    mep: UnitStatus = UnitStatus.IN_PROGRESS
    interior: UnitStatus = UnitStatus.IN_PROGRESS
    finishing: UnitStatus = UnitStatus.IN_PROGRESS


class UnitBase(CamelModel):
    """Base unit schema"""
    unit_number: str = Field(..., min_length=1, max_length=50, description="Unit label, unique within a project")
    type: str = Field(default="Villa", min_length=1, max_length=100, description="Unit category")
    sub_type: Optional[str] = Field(None, max_length=100)
    bedrooms: Optional[int] = Field(None, ge=0)
    status: UnitStatus = Field(default=UnitStatus.IN_PROGRESS)
    progress: int = Field(default=0, ge=0, le=100, description="Completion percentage")
    current_phase: str = ""
    target_completion: str = ""
    last_updated: str = ""
    activities: UnitActivities = Field(default_factory=UnitActivities)
    challenges: List[str] = Field(default_factory=list)
    photos: List[str] = Field(default_factory=list)


class UnitDraft(UnitBase):
    """Unit payload without its owning project (project taken from context)"""

    @field_validator("target_completion", "last_updated")
    @classmethod
    def normalize_dates(cls, v: str) -> str:
        return normalize_date_text(v)


class UnitCreate(UnitDraft):
    """Unit creation schema"""
    project_id: UUID = Field(..., description="Owning project UUID")


class UnitUpdate(CamelModel):
    """Unit update schema - all fields optional, only provided fields are written"""
    unit_number: Optional[str] = Field(None, min_length=1, max_length=50)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    sub_type: Optional[str] = Field(None, max_length=100)
    bedrooms: Optional[int] = Field(None, ge=0)
    status: Optional[UnitStatus] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    current_phase: Optional[str] = None
    target_completion: Optional[str] = None
    last_updated: Optional[str] = None
    activities: Optional[UnitActivities] = None
    challenges: Optional[List[str]] = None
    photos: Optional[List[str]] = None

    @field_validator("target_completion", "last_updated")
    @classmethod
    def normalize_dates(cls, v: Optional[str]) -> Optional[str]:
        return normalize_date_text(v)


class UnitResponse(UnitBase):
    """Unit as held by the application"""
    id: UUID
    project_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
