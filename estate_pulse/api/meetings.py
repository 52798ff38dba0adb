"""Meeting scheduling endpoints"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from estate_pulse.api.dependencies import get_meeting_service
from estate_pulse.api.errors import store_error_response
from estate_pulse.schemas.meeting import MeetingCreate, MeetingScheduleResponse
from estate_pulse.services.meeting_service import MeetingService

router = APIRouter(prefix="/api/v1/meetings", tags=["Meetings"])


@router.post("", response_model=MeetingScheduleResponse, status_code=status.HTTP_201_CREATED)
async def schedule_meeting(
    meeting_create: MeetingCreate,
    request: Request,
    service: MeetingService = Depends(get_meeting_service),
):
    """
    Schedule a meeting and e-mail the configured recipients

    A meeting that was saved but could not be announced is returned with
    207 Multi-Status and ``notified: false``
    """
    result = await service.schedule(meeting_create)
    if result.error is not None:
        return store_error_response(result.error, instance=request.url.path)

    body = MeetingScheduleResponse(
        meeting=result.meeting,
        notified=result.notified,
        message=result.message,
    )
    if not result.notified:
        return JSONResponse(
            status_code=status.HTTP_207_MULTI_STATUS,
            content=body.model_dump(mode="json", by_alias=True),
        )
    return body
