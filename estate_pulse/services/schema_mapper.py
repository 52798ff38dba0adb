"""Conversion between stored rows and application entities"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import inspect

from estate_pulse.schemas.meeting import MeetingCreate, MeetingResponse
from estate_pulse.schemas.project import ProjectBase, ProjectResponse, ProjectUpdate
from estate_pulse.schemas.unit import UnitBase, UnitResponse, UnitUpdate

# Columns of the projects table that map 1:1 to entity fields
PROJECT_COLUMNS = (
    "name",
    "status",
    "progress",
    "total_units",
    "completed_units",
    "target_completion",
    "current_phase",
    "manager",
    "location",
    "start_date",
    "budget",
    "target_milestone",
    "activities_in_progress",
    "completed_activities",
    "challenges",
    "progress_images",
    "weekly_notes",
    "monthly_notes",
)
PROJECT_JSON_COLUMNS = (
    "activities_in_progress",
    "completed_activities",
    "challenges",
    "progress_images",
)
PROJECT_TEXT_COLUMNS = (
    "target_completion",
    "current_phase",
    "manager",
    "location",
    "start_date",
    "budget",
    "target_milestone",
    "weekly_notes",
    "monthly_notes",
)

UNIT_COLUMNS = (
    "project_id",
    "unit_number",
    "type",
    "sub_type",
    "bedrooms",
    "status",
    "progress",
    "current_phase",
    "target_completion",
    "last_updated",
    "activities",
    "challenges",
    "photos",
)
UNIT_JSON_LIST_COLUMNS = ("challenges", "photos")
UNIT_TEXT_COLUMNS = ("current_phase", "target_completion", "last_updated")

TIMESTAMP_COLUMNS = ("created_at", "updated_at")


def row_as_dict(instance: Any) -> Dict[str, Any]:
    """Column values of an ORM instance as a plain row mapping"""
    return {
        attr.key: getattr(instance, attr.key)
        for attr in inspect(instance).mapper.column_attrs
    }


def _read_columns(
    row: Mapping[str, Any],
    columns: Iterable[str],
    json_list_columns: Iterable[str],
    text_columns: Iterable[str],
) -> Dict[str, Any]:
    data: Dict[str, Any] = {"id": row["id"]}
    for column in TIMESTAMP_COLUMNS:
        data[column] = row.get(column)
    for column in columns:
        value = row.get(column)
        if value is None and column in json_list_columns:
            value = []
        elif value is None and column in text_columns:
            value = ""
        data[column] = value
    return data


def row_to_project(
    row: Mapping[str, Any], units: Optional[List[UnitResponse]] = None
) -> ProjectResponse:
    """
    Build a project entity from a projects row.

    Args:
        row: Row mapping keyed by column name
        units: Units already fetched for this project; the caller does the join

    Returns:
        ProjectResponse with null JSON columns read as empty lists
    """
    data = _read_columns(row, PROJECT_COLUMNS, PROJECT_JSON_COLUMNS, PROJECT_TEXT_COLUMNS)
    data["units"] = list(units or [])
    return ProjectResponse.model_validate(data)


def row_to_unit(row: Mapping[str, Any]) -> UnitResponse:
    """Build a unit entity from a units row"""
    data = _read_columns(row, UNIT_COLUMNS, UNIT_JSON_LIST_COLUMNS, UNIT_TEXT_COLUMNS)
    if data.get("activities") is None:
        data["activities"] = {}
    return UnitResponse.model_validate(data)


def project_to_insert_row(entity: ProjectBase, keep_id: bool = False) -> Dict[str, Any]:
    """
    Build a full projects row for insertion.

    Unset list columns become ``[]`` and unset notes ``""`` so the store
    never receives NULL for them.

    Args:
        entity: Project entity or creation payload
        keep_id: Carry the entity's id into the row (used when importing data)
    """
    row = entity.model_dump(include=set(PROJECT_COLUMNS))
    for column in PROJECT_JSON_COLUMNS:
        if row.get(column) is None:
            row[column] = []
    for column in ("weekly_notes", "monthly_notes"):
        if row.get(column) is None:
            row[column] = ""
    if keep_id and getattr(entity, "id", None) is not None:
        row["id"] = entity.id
    return row


def unit_to_insert_row(
    entity: UnitBase, project_id: Optional[Any] = None, keep_id: bool = False
) -> Dict[str, Any]:
    """
    Build a full units row for insertion.

    Args:
        entity: Unit entity or creation payload
        project_id: Owning project, when the payload does not carry one
        keep_id: Carry the entity's id into the row (used when importing data)
    """
    row = entity.model_dump(include=set(UNIT_COLUMNS))
    if project_id is not None:
        row["project_id"] = project_id
    for column in UNIT_JSON_LIST_COLUMNS:
        if row.get(column) is None:
            row[column] = []
    if row.get("activities") is None:
        row["activities"] = {}
    if keep_id and getattr(entity, "id", None) is not None:
        row["id"] = entity.id
    return row


def _sparse_patch(
    patch: Any, columns: Iterable[str], fields: Optional[Iterable[str]]
) -> Dict[str, Any]:
    changed = set(patch.model_fields_set if fields is None else fields)
    return patch.model_dump(include=changed & set(columns))


def project_to_update_row(
    patch: ProjectUpdate, fields: Optional[Iterable[str]] = None
) -> Dict[str, Any]:
    """
    Build a sparse projects patch.

    Only fields explicitly present on ``patch`` (or listed in ``fields``)
    are emitted, so omitted columns keep their stored values.
    """
    return _sparse_patch(patch, PROJECT_COLUMNS, fields)


def unit_to_update_row(
    patch: UnitUpdate, fields: Optional[Iterable[str]] = None
) -> Dict[str, Any]:
    """Build a sparse units patch; ``project_id`` is never part of it"""
    return _sparse_patch(patch, UNIT_COLUMNS[1:], fields)


def meeting_to_insert_row(entity: MeetingCreate) -> Dict[str, Any]:
    """Build a meetings row; date and time are stored as ISO text"""
    return {
        "project_id": entity.project_id,
        "meeting_date": entity.meeting_date.isoformat(),
        "meeting_time": entity.meeting_time.strftime("%H:%M"),
        "attendees": entity.attendees,
    }


def row_to_meeting(row: Mapping[str, Any]) -> MeetingResponse:
    return MeetingResponse.model_validate(dict(row))
