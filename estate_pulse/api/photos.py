"""Photo upload endpoints"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse

from estate_pulse.api.dependencies import get_gateway, get_photo_storage
from estate_pulse.api.errors import (
    bad_gateway_error,
    not_found_error,
    store_error_response,
    validation_error,
)
from estate_pulse.schemas.photo import PhotoUploadResponse
from estate_pulse.schemas.project import ProjectUpdate
from estate_pulse.schemas.unit import UnitUpdate
from estate_pulse.services.photo_storage_service import (
    PhotoFile,
    PhotoStorageService,
    PhotoValidationError,
    TooManyFilesError,
)
from estate_pulse.services.project_gateway import ProjectGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects", tags=["Photos"])


@router.post(
    "/{project_id}/photos",
    response_model=PhotoUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_photos(
    project_id: UUID,
    request: Request,
    files: List[UploadFile] = File(..., description="Image files to upload"),
    unit_id: Optional[UUID] = Form(None, description="Unit the photos belong to"),
    gateway: ProjectGateway = Depends(get_gateway),
    storage: PhotoStorageService = Depends(get_photo_storage),
):
    """
    Upload photos for a project or one of its units

    The whole batch is validated first. Files are then uploaded concurrently;
    the URLs that were stored are appended to the unit's photos (or the
    project's progress images) and failures are counted in a 207 response
    """
    if unit_id is not None:
        unit = await gateway.get_unit(unit_id)
        if unit is None or unit.project_id != project_id:
            return not_found_error(
                detail=f"Unit with id {unit_id} not found in project {project_id}",
                instance=request.url.path,
            )
        existing = list(unit.photos)
    else:
        project = await gateway.fetch_one_project(project_id)
        if project is None:
            return not_found_error(
                detail=f"Project with id {project_id} not found",
                instance=request.url.path,
            )
        existing = list(project.progress_images)

    photos = [
        PhotoFile(
            file_name=upload_file.filename or "photo",
            content_type=upload_file.content_type or "",
            data=await upload_file.read(),
        )
        for upload_file in files
    ]

    try:
        storage.validate_batch(photos, existing_count=len(existing))
    except TooManyFilesError as e:
        return validation_error(detail=str(e), instance=request.url.path)
    except PhotoValidationError as e:
        return validation_error(
            detail="One or more files were rejected",
            errors=[{"field": "files", "message": message} for message in e.errors],
            instance=request.url.path,
        )

    upload = await storage.upload_photos(
        str(project_id), photos, str(unit_id) if unit_id else None
    )
    if not upload.urls:
        return bad_gateway_error(
            detail="Failed to upload photos. Please try again.",
            instance=request.url.path,
        )

    all_photos = existing + upload.urls
    if unit_id is not None:
        result = await gateway.update_unit(
            unit_id,
            UnitUpdate(photos=all_photos, last_updated=date.today().isoformat()),
        )
    else:
        result = await gateway.update_project(project_id, ProjectUpdate(progress_images=all_photos))

    if not result.ok:
        return store_error_response(result.error, instance=request.url.path)

    if upload.failed_count:
        body = PhotoUploadResponse(
            uploaded=upload.urls,
            failed_count=upload.failed_count,
            photos=all_photos,
            message=f"{len(upload.urls)} photo(s) uploaded, {upload.failed_count} failed",
        )
        return JSONResponse(
            status_code=status.HTTP_207_MULTI_STATUS,
            content=body.model_dump(mode="json", by_alias=True),
        )

    return PhotoUploadResponse(
        uploaded=upload.urls,
        failed_count=0,
        photos=all_photos,
        message=f"{len(upload.urls)} photo(s) uploaded successfully",
    )
