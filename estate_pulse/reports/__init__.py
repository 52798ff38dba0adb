"""Report generation package"""

from estate_pulse.reports.csv_exporter import project_to_csv, units_to_csv
from estate_pulse.reports.pdf_exporter import (
    PdfReportBuilder,
    build_project_report,
    build_units_report,
    project_to_pdf,
    units_to_pdf,
)
from estate_pulse.reports.filenames import export_filename
from estate_pulse.reports.custom_report import build_custom_report

__all__ = [
    "project_to_csv",
    "units_to_csv",
    "PdfReportBuilder",
    "build_project_report",
    "build_units_report",
    "project_to_pdf",
    "units_to_pdf",
    "export_filename",
    "build_custom_report",
]
