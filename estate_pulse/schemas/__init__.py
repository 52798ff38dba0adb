"""API schemas package"""

from .project import (
    ProjectStatus,
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectListResponse,
    ProjectCreateResponse,
)
from .unit import (
    ACTIVITY_PHASES,
    UnitStatus,
    UnitActivities,
    UnitDraft,
    UnitCreate,
    UnitUpdate,
    UnitResponse,
)
from .meeting import (
    MeetingCreate,
    MeetingResponse,
    MeetingScheduleResponse,
    MeetingNotification,
)
from .photo import PhotoUploadResponse
from .report import CustomReportRequest, ExportFormat

__all__ = [
    "ProjectStatus",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectListResponse",
    "ProjectCreateResponse",
    "ACTIVITY_PHASES",
    "UnitStatus",
    "UnitActivities",
    "UnitDraft",
    "UnitCreate",
    "UnitUpdate",
    "UnitResponse",
    "MeetingCreate",
    "MeetingResponse",
    "MeetingScheduleResponse",
    "MeetingNotification",
    "PhotoUploadResponse",
    "CustomReportRequest",
    "ExportFormat",
]
