from datetime import datetime, timezone
from uuid import uuid4

import pytest

from admin_console.api import deps
from admin_console.domain.exceptions import ConflictError, StorageError
from admin_console.domain.groups.models import Group, GroupWithMembers
from admin_console.domain.query import Page

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class StubGroupsRepo:
    def __init__(self):
        self.calls = []
        self.error = None

    def _group(self, **overrides):
        data = {"uuid": uuid4(), "name": "QA", "description": None, "created_at": NOW, "updated_at": NOW}
        data.update(overrides)
        return data

    async def list_groups(self, query):
        self.calls.append(("list", query))
        if self.error:
            raise self.error
        return Page(items=[], page=query.sanitized_page(), limit=query.sanitized_limit(), total=0)

    async def get_group(self, group_id):
        return GroupWithMembers(**self._group(uuid=group_id))

    async def create_group(self, *, name, description=None):
        self.calls.append(("create", name, description))
        if self.error:
            raise self.error
        return Group(**self._group(name=name, description=description))

    async def update_group(self, group_id, changes):
        self.calls.append(("update", group_id, changes))
        return Group(**self._group(uuid=group_id))

    async def delete_group(self, group_id):
        self.calls.append(("delete", group_id))


@pytest.fixture
def groups_repo(app):
    repo = StubGroupsRepo()
    app.dependency_overrides[deps.get_groups_repo] = lambda: repo
    return repo


@pytest.mark.asyncio
async def test_list_groups_past_the_end_is_empty(api_client, groups_repo):
    resp = await api_client.get("/api/groups", params={"page": 9, "limit": 1000, "search": "x"})
    body = resp.json()
    assert resp.status_code == 200
    assert body["data"] == []
    assert body["pagination"] == {"page": 9, "limit": 100, "total": 0, "totalPages": 0}
    assert groups_repo.calls[0][1].search == "x"


@pytest.mark.asyncio
async def test_get_group_includes_empty_relations(api_client, groups_repo):
    resp = await api_client.get(f"/api/groups/{uuid4()}")
    data = resp.json()["data"]
    assert data["users"] == []
    assert data["events"] == []
    assert data["description"] is None


@pytest.mark.asyncio
async def test_create_group_requires_name(api_client, groups_repo):
    resp = await api_client.post("/api/groups", json={"description": "no name"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "name is required"


@pytest.mark.asyncio
async def test_create_group_name_too_long(api_client, groups_repo):
    resp = await api_client.post("/api/groups", json={"name": "x" * 31})
    assert resp.status_code == 400
    assert groups_repo.calls == []


@pytest.mark.asyncio
async def test_create_group_conflict(api_client, groups_repo):
    groups_repo.error = ConflictError("Group name already exists")
    resp = await api_client.post("/api/groups", json={"name": "QA"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Group name already exists"}


@pytest.mark.asyncio
async def test_storage_failure_is_500_with_generic_message(api_client, groups_repo):
    groups_repo.error = StorageError("Failed to fetch groups")
    resp = await api_client.get("/api/groups")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Failed to fetch groups"}
    assert "X-Request-Id" in resp.headers


@pytest.mark.asyncio
async def test_update_group_explicit_null_description(api_client, groups_repo):
    group_id = uuid4()
    resp = await api_client.put(f"/api/groups/{group_id}", json={"description": None})
    assert resp.status_code == 200
    assert groups_repo.calls[-1] == ("update", group_id, {"description": None})


@pytest.mark.asyncio
async def test_delete_group(api_client, groups_repo):
    resp = await api_client.delete(f"/api/groups/{uuid4()}")
    assert resp.json()["message"] == "Group deleted successfully"


@pytest.mark.asyncio
async def test_blank_group_description_is_stored_as_null(api_client, groups_repo):
    resp = await api_client.post("/api/groups", json={"name": "Ops", "description": ""})
    assert resp.status_code == 201
    assert groups_repo.calls[0] == ("create", "Ops", None)

    group_id = uuid4()
    await api_client.put(f"/api/groups/{group_id}", json={"description": "   "})
    assert groups_repo.calls[-1] == ("update", group_id, {"description": None})
