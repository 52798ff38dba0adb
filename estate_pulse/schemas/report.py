"""Report request schemas"""

from enum import Enum
from typing import List
from uuid import UUID
from pydantic import Field

from estate_pulse.schemas.common import CamelModel


class ExportFormat(str, Enum):
    """Download formats for project and unit exports"""
    CSV = "csv"
    PDF = "pdf"


class CustomReportRequest(CamelModel):
    """Selection of projects to export together"""
    project_ids: List[UUID] = Field(..., min_length=1, description="Projects to include")
    format: ExportFormat = ExportFormat.PDF
