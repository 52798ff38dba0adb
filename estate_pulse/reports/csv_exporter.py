"""CSV export of projects and units"""

import csv
import io
import json
from typing import Dict, List, Sequence

from estate_pulse.schemas.project import ProjectResponse
from estate_pulse.schemas.unit import UnitResponse

LIST_SEPARATOR = "; "

PROJECT_HEADERS = [
    "Project Name",
    "Status",
    "Progress",
    "Location",
    "Manager",
    "Start Date",
    "Target Completion",
    "Current Phase",
    "Budget",
    "Total Units",
    "Completed Units",
    "Target Milestone",
    "Weekly Notes",
    "Monthly Notes",
    "Challenges",
    "Completed Activities",
    "Activities in Progress",
]

UNIT_HEADERS = [
    "Unit Number",
    "Type",
    "Sub Type",
    "Bedrooms",
    "Status",
    "Progress",
    "Target Completion",
    "Current Phase",
    "Last Updated",
    "Activities",
    "Challenges",
    "Photos Count",
]


def _join(items: Sequence[str]) -> str:
    return LIST_SEPARATOR.join(items or [])


def _percent(value: int) -> str:
    return f"{value}%"


def project_record(project: ProjectResponse) -> Dict[str, str]:
    """Flatten a project into one CSV record"""
    return {
        "Project Name": project.name,
        "Status": project.status,
        "Progress": _percent(project.progress),
        "Location": project.location,
        "Manager": project.manager,
        "Start Date": project.start_date,
        "Target Completion": project.target_completion,
        "Current Phase": project.current_phase,
        "Budget": project.budget,
        "Total Units": str(project.total_units),
        "Completed Units": str(project.completed_units),
        "Target Milestone": project.target_milestone,
        "Weekly Notes": project.weekly_notes or "",
        "Monthly Notes": project.monthly_notes or "",
        "Challenges": _join(project.challenges),
        "Completed Activities": _join(project.completed_activities),
        "Activities in Progress": _join(project.activities_in_progress),
    }


def unit_record(unit: UnitResponse) -> Dict[str, str]:
    """Flatten a unit into one CSV record"""
    return {
        "Unit Number": unit.unit_number,
        "Type": unit.type,
        "Sub Type": unit.sub_type or "",
        "Bedrooms": "" if unit.bedrooms is None else str(unit.bedrooms),
        "Status": unit.status,
        "Progress": _percent(unit.progress),
        "Target Completion": unit.target_completion,
        "Current Phase": unit.current_phase,
        "Last Updated": unit.last_updated,
        "Activities": json.dumps(unit.activities.model_dump()),
        "Challenges": _join(unit.challenges),
        "Photos Count": str(len(unit.photos or [])),
    }


def _write(headers: List[str], records: List[Dict[str, str]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
    writer.writeheader()
    writer.writerows(records)
    return buffer.getvalue()


def project_to_csv(project: ProjectResponse) -> str:
    """
    Serialize one project as CSV text.

    Lists are joined with "; " into a single cell and percentages are
    written as "<n>%". Quoting follows standard CSV rules.
    """
    return _write(PROJECT_HEADERS, [project_record(project)])


def units_to_csv(units: Sequence[UnitResponse]) -> str:
    """Serialize units as CSV text, one row per unit"""
    return _write(UNIT_HEADERS, [unit_record(unit) for unit in units])
