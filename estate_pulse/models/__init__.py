"""Database models package"""

from estate_pulse.models.base import BaseModel
from estate_pulse.models.project import Project
from estate_pulse.models.unit import Unit
from estate_pulse.models.meeting import Meeting

# Export all models
__all__ = [
    "BaseModel",
    "Project",
    "Unit",
    "Meeting",
]
