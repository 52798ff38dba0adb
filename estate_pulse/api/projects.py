"""Project management and export endpoints"""

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from estate_pulse.api.dependencies import get_gateway, get_project_store
from estate_pulse.api.errors import not_found_error, store_error_response
from estate_pulse.reports.csv_exporter import project_to_csv, units_to_csv
from estate_pulse.reports.filenames import (
    MEDIA_TYPES,
    PROJECT_DATA,
    PROJECT_REPORT,
    UNITS_DATA,
    UNITS_REPORT,
    content_disposition,
    export_filename,
)
from estate_pulse.reports.pdf_exporter import project_to_pdf, units_to_pdf
from estate_pulse.schemas.project import (
    ProjectCreate,
    ProjectCreateResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from estate_pulse.schemas.report import ExportFormat
from estate_pulse.services.project_gateway import ProjectGateway
from estate_pulse.services.project_store import ProjectStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects", tags=["Projects"])


def _download(content: bytes, filename: str, ext: str) -> Response:
    return Response(
        content=content,
        media_type=MEDIA_TYPES[ext],
        headers={"Content-Disposition": content_disposition(filename)},
    )


@router.get("", response_model=ProjectListResponse, status_code=status.HTTP_200_OK)
async def get_projects(store: ProjectStore = Depends(get_project_store)):
    """
    Get all projects with their units

    Projects are ordered by creation time; a failed fetch yields an empty list
    """
    projects = await store.refresh()
    return ProjectListResponse(projects=projects, total=len(projects))


@router.post("", response_model=ProjectCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_create: ProjectCreate,
    request: Request,
    gateway: ProjectGateway = Depends(get_gateway),
):
    """
    Create a project, optionally with a batch of units

    If the project is stored but its units are rejected, responds with
    207 Multi-Status and the units error; the project is kept
    """
    result = await gateway.create_project(project_create, units=project_create.units)

    if result.data is None:
        return store_error_response(result.error, instance=request.url.path)

    if result.partial:
        logger.warning(f"Project {result.data.id} created without its units: {result.error}")
        body = ProjectCreateResponse(project=result.data, units_error=result.error.message)
        return JSONResponse(
            status_code=status.HTTP_207_MULTI_STATUS,
            content=body.model_dump(mode="json", by_alias=True),
        )

    return ProjectCreateResponse(project=result.data)


@router.get("/{project_id}", response_model=ProjectResponse, status_code=status.HTTP_200_OK)
async def get_project(
    project_id: UUID,
    request: Request,
    gateway: ProjectGateway = Depends(get_gateway),
):
    """Get a single project with its units"""
    project = await gateway.fetch_one_project(project_id)
    if project is None:
        return not_found_error(
            detail=f"Project with id {project_id} not found",
            instance=request.url.path,
        )
    return project


@router.patch("/{project_id}", response_model=ProjectResponse, status_code=status.HTTP_200_OK)
async def update_project(
    project_id: UUID,
    project_update: ProjectUpdate,
    request: Request,
    gateway: ProjectGateway = Depends(get_gateway),
):
    """
    Update a project

    Only the fields present in the request body are written
    """
    result = await gateway.update_project(project_id, project_update)
    if not result.ok:
        return store_error_response(result.error, instance=request.url.path)

    return await gateway.fetch_one_project(project_id) or result.data


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    request: Request,
    gateway: ProjectGateway = Depends(get_gateway),
):
    """
    Delete a project

    Units are not removed by this call; the store decides whether a project
    that still has units may be deleted
    """
    result = await gateway.delete_project(project_id)
    if not result.ok:
        return store_error_response(result.error, instance=request.url.path)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{project_id}/export/{export_format}")
async def export_project(
    project_id: UUID,
    export_format: ExportFormat,
    request: Request,
    gateway: ProjectGateway = Depends(get_gateway),
):
    """Download a project as CSV data or a PDF report"""
    project = await gateway.fetch_one_project(project_id)
    if project is None:
        return not_found_error(
            detail=f"Project with id {project_id} not found",
            instance=request.url.path,
        )

    if export_format == ExportFormat.CSV:
        filename = export_filename(project.name, PROJECT_DATA, "csv")
        return _download(project_to_csv(project).encode("utf-8"), filename, "csv")

    filename = export_filename(project.name, PROJECT_REPORT, "pdf")
    return _download(project_to_pdf(project), filename, "pdf")


@router.get("/{project_id}/units/export/{export_format}")
async def export_units(
    project_id: UUID,
    export_format: ExportFormat,
    request: Request,
    gateway: ProjectGateway = Depends(get_gateway),
):
    """Download a project's units as CSV data or a PDF report"""
    project = await gateway.fetch_one_project(project_id)
    if project is None:
        return not_found_error(
            detail=f"Project with id {project_id} not found",
            instance=request.url.path,
        )

    if export_format == ExportFormat.CSV:
        filename = export_filename(project.name, UNITS_DATA, "csv")
        return _download(units_to_csv(project.units).encode("utf-8"), filename, "csv")

    filename = export_filename(project.name, UNITS_REPORT, "pdf")
    return _download(units_to_pdf(project.units, project.name), filename, "pdf")
