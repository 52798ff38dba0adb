"""Download file names"""

from urllib.parse import quote

PROJECT_DATA = "project_data"
PROJECT_REPORT = "project_report"
UNITS_DATA = "units_data"
UNITS_REPORT = "units_report"

MEDIA_TYPES = {
    "csv": "text/csv",
    "pdf": "application/pdf",
    "zip": "application/zip",
}


def export_filename(name: str, kind: str, ext: str) -> str:
    """``<name>_<kind>.<ext>``, e.g. ``Palm Grove_units_report.pdf``"""
    return f"{name}_{kind}.{ext}"


def content_disposition(filename: str) -> str:
    """
    Attachment header value for ``filename``.

    Headers are latin-1, so non-ASCII names are sent as an RFC 5987
    ``filename*`` next to an ASCII fallback.
    """
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("\\", "_").replace('"', "'")
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
