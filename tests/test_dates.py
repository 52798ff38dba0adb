"""Tests for legacy date normalization"""

import pytest
from datetime import date

from estate_pulse.schemas.project import ProjectCreate, ProjectUpdate
from estate_pulse.schemas.unit import UnitDraft
from estate_pulse.utils.dates import normalize_date_text, parse_legacy_date


@pytest.mark.unit
class TestParseLegacyDate:
    """Recognized human-entered formats"""

    @pytest.mark.parametrize("text", [
        "August 30th, 2025",
        "August 30, 2025",
        "Aug 30, 2025",
        "30 August 2025",
        "8/30/2025",
        "2025-08-30",
        "2025-08-30T10:15:00Z",
        "  August   30th,  2025 ",
    ])
    def test_recognized(self, text):
        assert parse_legacy_date(text) == date(2025, 8, 30)

    def test_ordinal_suffixes(self):
        assert parse_legacy_date("March 1st, 2026") == date(2026, 3, 1)
        assert parse_legacy_date("June 22nd, 2026") == date(2026, 6, 22)
        assert parse_legacy_date("May 3rd, 2026") == date(2026, 5, 3)

    @pytest.mark.parametrize("text", ["", None, "Q4 2025", "TBD", "31/31/2025"])
    def test_unrecognized(self, text):
        assert parse_legacy_date(text) is None


@pytest.mark.unit
class TestNormalizeDateText:
    """ISO rewrite with pass-through"""

    def test_rewrites_to_iso(self):
        assert normalize_date_text("December 15th, 2025") == "2025-12-15"

    def test_unrecognized_passes_through(self):
        assert normalize_date_text("Q4 2025") == "Q4 2025"
        assert normalize_date_text("") == ""

    def test_none(self):
        assert normalize_date_text(None) is None


@pytest.mark.unit
class TestSchemaNormalization:
    """Input schemas rewrite date fields"""

    def test_project_create(self):
        project = ProjectCreate.model_validate({
            "name": "Palm Grove",
            "startDate": "Jan 10, 2024",
            "targetCompletion": "December 15th, 2025",
        })

        assert project.start_date == "2024-01-10"
        assert project.target_completion == "2025-12-15"

    def test_project_update_keeps_unset_fields_unset(self):
        patch = ProjectUpdate.model_validate({"startDate": "8/30/2025"})

        assert patch.start_date == "2025-08-30"
        assert patch.model_fields_set == {"start_date"}

    def test_unit_draft(self):
        unit = UnitDraft.model_validate({"unitNumber": "A-01", "lastUpdated": "Sep 12, 2025"})

        assert unit.last_updated == "2025-09-12"
