"""Explicitly refreshed view of the project list"""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

from estate_pulse.schemas.project import ProjectResponse
from estate_pulse.services.project_gateway import ProjectGateway

logger = logging.getLogger(__name__)


class ProjectStore:
    """
    Project list shared by the handlers of one request.

    Holds nothing until refresh() is called and never refreshes on its own;
    callers pass the instance to whatever needs the list.
    """

    def __init__(self, gateway: ProjectGateway):
        self.gateway = gateway
        self.projects: List[ProjectResponse] = []
        self.loaded = False

    async def refresh(self) -> List[ProjectResponse]:
        """Re-fetch every project with its units"""
        self.projects = await self.gateway.fetch_all_projects()
        self.loaded = True
        logger.debug(f"Project store refreshed with {len(self.projects)} projects")
        return self.projects

    def get(self, project_id: UUID) -> Optional[ProjectResponse]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def select(self, project_ids: Iterable[UUID]) -> List[ProjectResponse]:
        """Projects whose id is in ``project_ids``, in store order"""
        wanted = set(project_ids)
        return [project for project in self.projects if project.id in wanted]
