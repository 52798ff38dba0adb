"""Unit endpoints"""

import logging
from datetime import date
from uuid import UUID
from fastapi import APIRouter, Depends, Request, Response, status

from estate_pulse.api.dependencies import get_gateway
from estate_pulse.api.errors import store_error_response
from estate_pulse.schemas.unit import UnitCreate, UnitDraft, UnitResponse, UnitUpdate
from estate_pulse.services.project_gateway import ProjectGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Units"])


@router.post(
    "/projects/{project_id}/units",
    response_model=UnitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_unit(
    project_id: UUID,
    unit_draft: UnitDraft,
    request: Request,
    gateway: ProjectGateway = Depends(get_gateway),
):
    """
    Add a unit to a project

    ``lastUpdated`` defaults to today when not given
    """
    values = unit_draft.model_dump()
    if "last_updated" not in unit_draft.model_fields_set:
        values["last_updated"] = date.today().isoformat()

    result = await gateway.create_unit(UnitCreate(project_id=project_id, **values))
    if not result.ok:
        return store_error_response(result.error, instance=request.url.path)
    return result.data


@router.patch("/units/{unit_id}", response_model=UnitResponse, status_code=status.HTTP_200_OK)
async def update_unit(
    unit_id: UUID,
    unit_update: UnitUpdate,
    request: Request,
    gateway: ProjectGateway = Depends(get_gateway),
):
    """
    Update a unit

    Only the fields present in the request body are written; every save
    also stamps ``lastUpdated`` with today's date unless one is given
    """
    if "last_updated" not in unit_update.model_fields_set:
        unit_update = unit_update.model_copy(update={"last_updated": date.today().isoformat()})

    result = await gateway.update_unit(unit_id, unit_update)
    if not result.ok:
        return store_error_response(result.error, instance=request.url.path)
    return result.data


@router.delete("/units/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_unit(
    unit_id: UUID,
    request: Request,
    gateway: ProjectGateway = Depends(get_gateway),
):
    """Delete a unit"""
    result = await gateway.delete_unit(unit_id)
    if not result.ok:
        return store_error_response(result.error, instance=request.url.path)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
