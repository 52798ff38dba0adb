"""Tests for the explicitly refreshed project store"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from estate_pulse.schemas.project import ProjectResponse
from estate_pulse.services.project_store import ProjectStore


def project(name):
    return ProjectResponse(id=uuid4(), name=name)


@pytest.mark.asyncio
class TestProjectStore:
    """Lookup and refresh behaviour"""

    async def test_empty_until_refreshed(self):
        gateway = AsyncMock()
        store = ProjectStore(gateway)

        assert store.projects == []
        assert not store.loaded
        gateway.fetch_all_projects.assert_not_awaited()

    async def test_refresh_loads_projects(self):
        projects = [project("Palm Grove"), project("Coral Heights")]
        gateway = AsyncMock()
        gateway.fetch_all_projects.return_value = projects
        store = ProjectStore(gateway)

        assert await store.refresh() == projects
        assert store.loaded
        assert store.get(projects[1].id) is projects[1]
        assert store.get(uuid4()) is None

    async def test_select_keeps_store_order(self):
        projects = [project("A"), project("B"), project("C")]
        gateway = AsyncMock()
        gateway.fetch_all_projects.return_value = projects
        store = ProjectStore(gateway)
        await store.refresh()

        selected = store.select([projects[2].id, projects[0].id, uuid4()])

        assert [p.name for p in selected] == ["A", "C"]

    async def test_refresh_replaces_previous_list(self):
        gateway = AsyncMock()
        gateway.fetch_all_projects.side_effect = [[project("Old")], [project("New")]]
        store = ProjectStore(gateway)

        await store.refresh()
        await store.refresh()

        assert [p.name for p in store.projects] == ["New"]
