"""Bundle reports for several projects into one ZIP archive"""

import logging
import zipfile
from io import BytesIO
from typing import Sequence

from estate_pulse.reports.csv_exporter import project_to_csv
from estate_pulse.reports.filenames import PROJECT_DATA, PROJECT_REPORT, export_filename
from estate_pulse.reports.pdf_exporter import project_to_pdf
from estate_pulse.schemas.project import ProjectResponse

logger = logging.getLogger(__name__)

CUSTOM_REPORT_FILENAME = "custom_report.zip"


def build_custom_report(projects: Sequence[ProjectResponse], format: str) -> bytes:
    """
    Export each project in ``format`` and zip the files together.

    Args:
        projects: Projects to include, one file each
        format: "csv" or "pdf"

    Returns:
        ZIP archive bytes

    Raises:
        ValueError: If no projects are given or the format is unknown
    """
    if not projects:
        raise ValueError("Please select at least one project to generate a report.")
    if format not in ("csv", "pdf"):
        raise ValueError(f"Unsupported report format: {format}")

    buffer = BytesIO()
    used_names = set()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for project in projects:
            if format == "pdf":
                filename = export_filename(project.name, PROJECT_REPORT, "pdf")
                content = project_to_pdf(project)
            else:
                filename = export_filename(project.name, PROJECT_DATA, "csv")
                content = project_to_csv(project).encode("utf-8")

            # Two projects may share a name
            if filename in used_names:
                filename = f"{project.id}_{filename}"
            used_names.add(filename)

            archive.writestr(filename, content)

    logger.info(f"Built {format} custom report for {len(projects)} projects")
    return buffer.getvalue()
