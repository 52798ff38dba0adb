"""One-time import of static project data into an empty database"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence
from uuid import UUID, uuid4

from pydantic import ValidationError
from sqlalchemy import func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from estate_pulse.models.project import Project
from estate_pulse.models.unit import Unit
from estate_pulse.schemas.project import ProjectCreate
from estate_pulse.services.schema_mapper import project_to_insert_row, unit_to_insert_row

logger = logging.getLogger(__name__)


@dataclass
class MigrationResult:
    success: bool
    message: str


@dataclass
class MigrationStatus:
    migrated: bool
    project_count: int
    unit_count: int


async def migrate_static_data(
    db: AsyncSession, records: Sequence[Dict[str, Any]]
) -> MigrationResult:
    """
    Import projects and their units unless the database already has projects.

    Each record is validated as a project creation payload, which rewrites
    legacy date strings to ISO. Records and their units may carry an ``id``
    to keep references stable. Each project is committed with its units before the
    next one is imported.

    Args:
        db: Database session
        records: Project dictionaries (camelCase or snake_case) with ``units``

    Returns:
        MigrationResult describing what happened
    """
    logger.info("Starting data migration")

    try:
        existing = await db.execute(select(Project.id).limit(1))
        if existing.first() is not None:
            return MigrationResult(
                success=True,
                message="Data already exists in database. Migration skipped.",
            )

        for record in records:
            project = ProjectCreate.model_validate(record)
            project_id = UUID(str(record["id"])) if record.get("id") else uuid4()

            row = project_to_insert_row(project)
            row["id"] = project_id
            await db.execute(insert(Project).values(**row))

            unit_rows: List[Dict[str, Any]] = []
            for unit, raw_unit in zip(project.units or [], record.get("units") or []):
                unit_row = unit_to_insert_row(unit, project_id=project_id)
                if raw_unit.get("id"):
                    unit_row["id"] = UUID(str(raw_unit["id"]))
                unit_rows.append(unit_row)
            if unit_rows:
                await db.execute(insert(Unit), unit_rows)

            await db.commit()
            logger.info(f"Migrated project {project.name} with {len(unit_rows)} units")

    except (SQLAlchemyError, ValidationError) as e:
        await db.rollback()
        logger.error(f"Migration failed: {e}")
        return MigrationResult(success=False, message=f"Migration failed: {e}")

    logger.info("Data migration completed successfully")
    return MigrationResult(
        success=True,
        message=f"Successfully migrated {len(records)} projects with their units to the database.",
    )


async def check_migration_status(db: AsyncSession) -> MigrationStatus:
    """Count stored projects and units"""
    try:
        project_count = (await db.execute(select(func.count(Project.id)))).scalar_one()
        unit_count = (await db.execute(select(func.count(Unit.id)))).scalar_one()
    except SQLAlchemyError as e:
        logger.error(f"Error checking migration status: {e}")
        return MigrationStatus(migrated=False, project_count=0, unit_count=0)

    return MigrationStatus(
        migrated=project_count > 0,
        project_count=project_count,
        unit_count=unit_count,
    )
