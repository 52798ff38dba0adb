"""API dependencies wiring services to the request session"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from estate_pulse.database import get_db
from estate_pulse.services.meeting_service import MeetingService
from estate_pulse.services.notification_service import MeetingNotifier
from estate_pulse.services.photo_storage_service import PhotoStorageService
from estate_pulse.services.project_gateway import ProjectGateway
from estate_pulse.services.project_store import ProjectStore


async def get_gateway(db: AsyncSession = Depends(get_db)) -> ProjectGateway:
    """Gateway bound to the request's database session"""
    return ProjectGateway(db)


async def get_project_store(gateway: ProjectGateway = Depends(get_gateway)) -> ProjectStore:
    """Empty project store for this request; handlers call refresh() themselves"""
    return ProjectStore(gateway)


def get_photo_storage() -> PhotoStorageService:
    return PhotoStorageService()


def get_meeting_notifier() -> MeetingNotifier:
    return MeetingNotifier()


async def get_meeting_service(
    db: AsyncSession = Depends(get_db),
    notifier: MeetingNotifier = Depends(get_meeting_notifier),
) -> MeetingService:
    return MeetingService(db, notifier)
