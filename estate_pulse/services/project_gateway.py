"""Persistence gateway for projects and units"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar
from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from estate_pulse.models.project import Project
from estate_pulse.models.unit import Unit
from estate_pulse.schemas.project import ProjectBase, ProjectResponse, ProjectUpdate
from estate_pulse.schemas.unit import UnitCreate, UnitDraft, UnitResponse, UnitUpdate
from estate_pulse.services.schema_mapper import (
    project_to_insert_row,
    project_to_update_row,
    row_as_dict,
    row_to_project,
    row_to_unit,
    unit_to_insert_row,
    unit_to_update_row,
)

logger = logging.getLogger(__name__)

# SQLSTATE codes the API knows how to explain
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
CHECK_VIOLATION = "23514"
NOT_FOUND = "not_found"

# SQLite reports constraint failures by message only
_SQLITE_MESSAGE_CODES = (
    ("UNIQUE constraint failed", UNIQUE_VIOLATION),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY_VIOLATION),
    ("NOT NULL constraint failed", NOT_NULL_VIOLATION),
    ("CHECK constraint failed", CHECK_VIOLATION),
)

T = TypeVar("T")


@dataclass
class StoreError:
    """A rejection reported by the relational store"""

    message: str
    code: Optional[str] = None

    @classmethod
    def from_exception(cls, exc: SQLAlchemyError) -> "StoreError":
        """Extract the SQLSTATE code and raw message from a driver error"""
        orig = getattr(exc, "orig", None)
        code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
        message = str(orig) if orig is not None else str(exc)

        if not code:
            for fragment, fragment_code in _SQLITE_MESSAGE_CODES:
                if fragment in message:
                    code = fragment_code
                    break

        return cls(message=message, code=code)

    @classmethod
    def not_found(cls, detail: str) -> "StoreError":
        return cls(message=detail, code=NOT_FOUND)

    def __str__(self) -> str:
        return self.message


@dataclass
class GatewayResult(Generic[T]):
    """
    Outcome of a store operation.

    ``data`` and ``error`` are both set when a multi-step write succeeded
    only in part.
    """

    data: Optional[T] = None
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def partial(self) -> bool:
        return self.data is not None and self.error is not None


class ProjectGateway:
    """
    Store operations for projects and units.

    Store rejections are returned in a GatewayResult instead of raised; each
    write is committed on its own, so multi-step writes are not atomic.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def _fail(self, action: str, exc: SQLAlchemyError) -> StoreError:
        await self.db.rollback()
        error = StoreError.from_exception(exc)
        logger.error(f"Error {action}: [{error.code}] {error.message}")
        return error

    # ------------------------------------------------------------------
    # Reads

    async def fetch_all_projects(self) -> List[ProjectResponse]:
        """
        Fetch every project with its units.

        Projects are ordered by creation time, units by unit number. If
        either query fails the whole result is empty.
        """
        try:
            project_result = await self.db.execute(
                select(Project).order_by(Project.created_at.asc())
            )
            project_rows = project_result.scalars().all()
        except SQLAlchemyError as e:
            await self._fail("fetching projects", e)
            return []

        try:
            unit_result = await self.db.execute(
                select(Unit).order_by(Unit.unit_number.asc())
            )
            unit_rows = unit_result.scalars().all()
        except SQLAlchemyError as e:
            await self._fail("fetching units", e)
            return []

        units_by_project: Dict[Any, List[UnitResponse]] = {}
        for unit in unit_rows:
            units_by_project.setdefault(unit.project_id, []).append(
                row_to_unit(row_as_dict(unit))
            )

        return [
            row_to_project(row_as_dict(project), units_by_project.get(project.id, []))
            for project in project_rows
        ]

    async def fetch_one_project(self, project_id: UUID) -> Optional[ProjectResponse]:
        """
        Fetch a single project with its units.

        Returns:
            The project, or None if it does not match exactly one row or any
            query fails
        """
        try:
            result = await self.db.execute(select(Project).where(Project.id == project_id))
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            await self._fail(f"fetching project {project_id}", e)
            return None

        if len(rows) != 1:
            logger.error(f"NotFound: expected one project {project_id}, got {len(rows)}")
            return None

        try:
            unit_result = await self.db.execute(
                select(Unit)
                .where(Unit.project_id == project_id)
                .order_by(Unit.unit_number.asc())
            )
            unit_rows = unit_result.scalars().all()
        except SQLAlchemyError as e:
            await self._fail(f"fetching units for project {project_id}", e)
            return None

        units = [row_to_unit(row_as_dict(unit)) for unit in unit_rows]
        return row_to_project(row_as_dict(rows[0]), units)

    # ------------------------------------------------------------------
    # Project writes

    async def create_project(
        self,
        entity: ProjectBase,
        units: Optional[List[UnitDraft]] = None,
    ) -> GatewayResult[ProjectResponse]:
        """
        Insert a project, then optionally batch-insert its units.

        The two inserts are committed separately. If the unit batch is
        rejected the project row stays and the result carries both the
        project and the units error.
        """
        project = Project(**project_to_insert_row(entity))
        try:
            self.db.add(project)
            await self.db.commit()
            await self.db.refresh(project)
        except SQLAlchemyError as e:
            return GatewayResult(error=await self._fail("creating project", e))

        logger.info(f"Created project {project.id} ({project.name})")
        created = row_to_project(row_as_dict(project))

        if not units:
            return GatewayResult(data=created)

        rows = [unit_to_insert_row(unit, project_id=project.id) for unit in units]
        try:
            await self.db.execute(insert(Unit), rows)
            await self.db.commit()
        except SQLAlchemyError as e:
            error = await self._fail(f"inserting units for project {project.id}", e)
            return GatewayResult(data=created, error=error)

        logger.info(f"Inserted {len(rows)} units for project {project.id}")
        refreshed = await self.fetch_one_project(project.id)
        return GatewayResult(data=refreshed or created)

    async def update_project(
        self, project_id: UUID, patch: ProjectUpdate
    ) -> GatewayResult[ProjectResponse]:
        """Apply a sparse patch to one project"""
        values = project_to_update_row(patch)
        try:
            project = await self.db.get(Project, project_id)
            if project is None:
                return GatewayResult(error=StoreError.not_found(f"Project {project_id} not found"))
            for column, value in values.items():
                setattr(project, column, value)
            await self.db.commit()
            await self.db.refresh(project)
        except SQLAlchemyError as e:
            return GatewayResult(error=await self._fail(f"updating project {project_id}", e))

        logger.info(f"Updated project {project_id} fields {sorted(values)}")
        return GatewayResult(data=row_to_project(row_as_dict(project)))

    async def delete_project(self, project_id: UUID) -> GatewayResult[None]:
        """Delete one project; units are not cascaded by this call"""
        try:
            await self.db.execute(delete(Project).where(Project.id == project_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            return GatewayResult(error=await self._fail(f"deleting project {project_id}", e))

        logger.info(f"Deleted project {project_id}")
        return GatewayResult()

    # ------------------------------------------------------------------
    # Unit writes

    async def create_unit(self, entity: UnitCreate) -> GatewayResult[UnitResponse]:
        """Insert one unit scoped to ``entity.project_id``"""
        unit = Unit(**unit_to_insert_row(entity))
        try:
            self.db.add(unit)
            await self.db.commit()
            await self.db.refresh(unit)
        except SQLAlchemyError as e:
            return GatewayResult(error=await self._fail("creating unit", e))

        logger.info(f"Created unit {unit.id} ({unit.unit_number}) in project {unit.project_id}")
        return GatewayResult(data=row_to_unit(row_as_dict(unit)))

    async def update_unit(self, unit_id: UUID, patch: UnitUpdate) -> GatewayResult[UnitResponse]:
        """Apply a sparse patch to one unit"""
        values = unit_to_update_row(patch)
        try:
            unit = await self.db.get(Unit, unit_id)
            if unit is None:
                return GatewayResult(error=StoreError.not_found(f"Unit {unit_id} not found"))
            for column, value in values.items():
                setattr(unit, column, value)
            await self.db.commit()
            await self.db.refresh(unit)
        except SQLAlchemyError as e:
            return GatewayResult(error=await self._fail(f"updating unit {unit_id}", e))

        logger.info(f"Updated unit {unit_id} fields {sorted(values)}")
        return GatewayResult(data=row_to_unit(row_as_dict(unit)))

    async def delete_unit(self, unit_id: UUID) -> GatewayResult[None]:
        """Delete one unit"""
        try:
            await self.db.execute(delete(Unit).where(Unit.id == unit_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            return GatewayResult(error=await self._fail(f"deleting unit {unit_id}", e))

        logger.info(f"Deleted unit {unit_id}")
        return GatewayResult()

    async def get_unit(self, unit_id: UUID) -> Optional[UnitResponse]:
        """Fetch a single unit, or None if missing or the query fails"""
        try:
            unit = await self.db.get(Unit, unit_id)
        except SQLAlchemyError as e:
            await self._fail(f"fetching unit {unit_id}", e)
            return None
        return row_to_unit(row_as_dict(unit)) if unit else None
