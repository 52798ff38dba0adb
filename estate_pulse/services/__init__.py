"""Services package"""

from .project_gateway import GatewayResult, ProjectGateway, StoreError
from .project_store import ProjectStore
from .photo_storage_service import PhotoStorageService
from .notification_service import MeetingNotifier, NotificationError
from .meeting_service import MeetingService

__all__ = [
    "GatewayResult",
    "ProjectGateway",
    "StoreError",
    "ProjectStore",
    "PhotoStorageService",
    "MeetingNotifier",
    "NotificationError",
    "MeetingService",
]
