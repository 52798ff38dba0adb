"""Custom report endpoints"""

import logging
from fastapi import APIRouter, Depends, Request, Response, status

from estate_pulse.api.dependencies import get_project_store
from estate_pulse.api.errors import not_found_error
from estate_pulse.reports.custom_report import CUSTOM_REPORT_FILENAME, build_custom_report
from estate_pulse.reports.filenames import MEDIA_TYPES, content_disposition
from estate_pulse.schemas.report import CustomReportRequest
from estate_pulse.services.project_store import ProjectStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reports", tags=["Reports"])


@router.post("/custom", status_code=status.HTTP_200_OK)
async def create_custom_report(
    report_request: CustomReportRequest,
    request: Request,
    store: ProjectStore = Depends(get_project_store),
):
    """
    Export the selected projects in one format as a ZIP archive

    Unknown project ids are skipped; if none of them exist the response is 404
    """
    if not await store.refresh():
        # Fetch failures also come back as an empty list
        logger.error(
            f"Custom report requested for {len(report_request.project_ids)} project(s) "
            "but the project store is empty or unavailable"
        )
    projects = store.select(report_request.project_ids)

    if not projects:
        return not_found_error(
            detail="None of the selected projects were found",
            instance=request.url.path,
        )

    missing = len(set(report_request.project_ids)) - len(projects)
    if missing:
        logger.warning(f"Custom report skipped {missing} unknown project(s)")

    archive = build_custom_report(projects, report_request.format)
    return Response(
        content=archive,
        media_type=MEDIA_TYPES["zip"],
        headers={"Content-Disposition": content_disposition(CUSTOM_REPORT_FILENAME)},
    )
