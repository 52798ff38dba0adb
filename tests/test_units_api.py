"""Tests for unit API endpoints"""

import pytest
from datetime import date
from uuid import uuid4
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import add_unit
from estate_pulse.models import Unit


@pytest.mark.asyncio
class TestCreateUnit:
    """Test POST /api/v1/projects/{project_id}/units endpoint"""

    async def test_create_unit(self, async_client: AsyncClient, sample_project):
        response = await async_client.post(
            f"/api/v1/projects/{sample_project.id}/units",
            json={
                "unitNumber": "C-01",
                "type": "Townhouse",
                "bedrooms": 3,
                "targetCompletion": "November 20th, 2025",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["projectId"] == str(sample_project.id)
        assert data["unitNumber"] == "C-01"
        assert data["targetCompletion"] == "2025-11-20"
        assert data["lastUpdated"] == date.today().isoformat()
        assert data["photos"] == []
        assert set(data["activities"]) == {
            "foundation", "structure", "roofing", "mep", "interior", "finishing"
        }

    async def test_create_unit_keeps_given_last_updated(self, async_client: AsyncClient, sample_project):
        response = await async_client.post(
            f"/api/v1/projects/{sample_project.id}/units",
            json={"unitNumber": "C-02", "lastUpdated": "Sep 3, 2025"},
        )

        assert response.json()["lastUpdated"] == "2025-09-03"

    async def test_create_unit_unknown_activity_phase(self, async_client: AsyncClient, sample_project):
        response = await async_client.post(
            f"/api/v1/projects/{sample_project.id}/units",
            json={"unitNumber": "C-03", "activities": {"landscaping": "completed"}},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_create_unit_invalid_status(self, async_client: AsyncClient, sample_project):
        response = await async_client.post(
            f"/api/v1/projects/{sample_project.id}/units",
            json={"unitNumber": "C-04", "status": "on-hold"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "status"


@pytest.mark.asyncio
class TestUpdateUnit:
    """Test PATCH /api/v1/units/{unit_id} endpoint"""

    async def test_sparse_update(self, async_client: AsyncClient, db_session: AsyncSession, sample_project):
        unit = await add_unit(
            db_session, sample_project, "C-01", progress=10, challenges=["Rain"], last_updated="2025-01-01"
        )

        response = await async_client.patch(
            f"/api/v1/units/{unit.id}",
            json={"progress": 45, "activities": {"foundation": "completed"}},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["progress"] == 45
        assert data["challenges"] == ["Rain"]
        assert data["activities"]["foundation"] == "completed"
        assert data["lastUpdated"] == date.today().isoformat()

    async def test_update_missing_unit(self, async_client: AsyncClient):
        response = await async_client.patch(f"/api/v1/units/{uuid4()}", json={"progress": 45})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_update_ignores_project_id(self, async_client: AsyncClient, db_session: AsyncSession, sample_project):
        unit = await add_unit(db_session, sample_project, "C-01")

        response = await async_client.patch(
            f"/api/v1/units/{unit.id}", json={"projectId": str(uuid4()), "progress": 5}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["projectId"] == str(sample_project.id)


@pytest.mark.asyncio
class TestDeleteUnit:
    """Test DELETE /api/v1/units/{unit_id} endpoint"""

    async def test_delete_unit(self, async_client: AsyncClient, db_session: AsyncSession, sample_project):
        unit = await add_unit(db_session, sample_project, "C-01")

        response = await async_client.delete(f"/api/v1/units/{unit.id}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        numbers = (await db_session.execute(select(Unit.unit_number))).scalars().all()
        assert "C-01" not in numbers
        assert len(numbers) == 3
