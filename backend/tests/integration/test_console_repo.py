from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator, Callable, Iterator

import asyncpg
import pytest
import pytest_asyncio

from admin_console.domain.dashboard.service import DashboardService
from admin_console.domain.events.repo import EventsRepository
from admin_console.domain.exceptions import ConflictError, NotFoundError, ValidationError
from admin_console.domain.groups.repo import GroupsRepository
from admin_console.domain.query import ListQuery
from admin_console.domain.relations.repo import RelationsRepository
from admin_console.domain.surveys.repo import SurveysRepository
from admin_console.domain.users.repo import UsersRepository
from admin_console.infra.password import verify_password
from admin_console.infra.schema import SCHEMA_VERSION, current_version, ensure_schema

pytestmark = pytest.mark.asyncio

START = datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)


def start_or_skip(factory: Callable[[], Any]) -> Any:
    """Build and start a container, skipping when no Docker daemon is reachable."""
    try:
        container = factory()
        container.start()
    except Exception as exc:
        pytest.skip(f"unable to start postgres container: {exc}")
    return container


@pytest.fixture(scope="module")
def postgres_container() -> Iterator[Any]:
    testcontainers = pytest.importorskip(
        "testcontainers.postgres",
        reason="testcontainers.postgres is required for integration tests",
    )
    container = start_or_skip(lambda: testcontainers.PostgresContainer("postgres:16-alpine"))
    try:
        yield container
    finally:
        container.stop()


async def test_missing_docker_skips_instead_of_erroring():
    def no_docker():
        raise FileNotFoundError(2, "No such file or directory")

    with pytest.raises(pytest.skip.Exception, match="unable to start postgres container"):
        start_or_skip(no_docker)


@pytest_asyncio.fixture(scope="function")
async def postgres_pool(postgres_container) -> AsyncIterator[asyncpg.Pool]:
    url = postgres_container.get_connection_url().replace("postgresql+psycopg2", "postgresql")
    pool = await asyncpg.create_pool(dsn=url, min_size=1, max_size=4)
    async with pool.acquire() as conn:
        await conn.execute("DROP SCHEMA IF EXISTS public CASCADE")
        await conn.execute("CREATE SCHEMA public")
        await conn.execute("GRANT ALL ON SCHEMA public TO PUBLIC")
    await ensure_schema(pool, seed=True, seed_password="seed-pass")
    try:
        yield pool
    finally:
        await pool.close()


async def test_schema_is_idempotent_and_seeded_once(postgres_pool):
    assert await ensure_schema(postgres_pool, seed=True) is False
    assert await current_version(postgres_pool) == SCHEMA_VERSION
    async with postgres_pool.acquire() as conn:
        assert await conn.fetchval("SELECT COUNT(*) FROM users") == 5
        assert await conn.fetchval("SELECT COUNT(*) FROM groups") == 7
        stored = await conn.fetchval("SELECT password FROM users WHERE username = 'john.doe'")
    assert verify_password(stored, "seed-pass")


async def test_user_lifecycle_and_conflicts(postgres_pool):
    users = UsersRepository(postgres_pool)
    created = await users.create_user(username="alice", email="alice@example.com", password="secret123")
    assert created.role.value == "user"
    assert created.status is True

    with pytest.raises(ConflictError) as excinfo:
        await users.create_user(username="alice", email="other@example.com", password="secret123")
    assert excinfo.value.detail == "Username already exists"
    with pytest.raises(ConflictError) as excinfo:
        await users.create_user(username="alice2", email="alice@example.com", password="secret123")
    assert excinfo.value.detail == "Email already exists"

    updated = await users.update_user(created.uuid, {"role": "moderator"})
    assert updated.role.value == "moderator"
    assert updated.updated_at >= created.updated_at

    await users.delete_user(created.uuid)
    with pytest.raises(NotFoundError):
        await users.get_user(created.uuid)


async def test_list_pagination_and_search(postgres_pool):
    users = UsersRepository(postgres_pool)
    page = await users.list_users(ListQuery(page=1, limit=2))
    assert page.total == 5
    assert page.total_pages == 3
    assert len(page.items) == 2

    beyond = await users.list_users(ListQuery(page=10, limit=2))
    assert beyond.items == []
    assert beyond.total == 5

    found = await users.list_users(ListQuery(search="SMITH"))
    assert [user.username for user in found.items] == ["jane.smith"]

    moderators = await users.list_users(ListQuery(filters={"role": "moderator"}))
    assert [user.username for user in moderators.items] == ["mike.johnson"]


async def test_relations_are_idempotent_and_cascade(postgres_pool):
    users = UsersRepository(postgres_pool)
    groups = GroupsRepository(postgres_pool)
    relations = RelationsRepository(postgres_pool)

    user = await users.create_user(username="bob", email="bob@example.com", password="secret123")
    group = await groups.create_group(name="Research")

    await relations.add_user_to_group(user.uuid, group.uuid)
    await relations.add_user_to_group(user.uuid, group.uuid)
    detail = await groups.get_group(group.uuid)
    assert [member.username for member in detail.users] == ["bob"]
    assert (await users.get_user(user.uuid)).groups[0].name == "Research"

    await relations.remove_user_from_group(user.uuid, group.uuid)
    await relations.remove_user_from_group(user.uuid, group.uuid)
    assert (await groups.get_group(group.uuid)).users == []

    await relations.add_user_to_group(user.uuid, group.uuid)
    await groups.delete_group(group.uuid)
    assert (await users.get_user(user.uuid)).groups == []

    with pytest.raises(NotFoundError) as excinfo:
        await relations.add_user_to_group(user.uuid, group.uuid)
    assert excinfo.value.detail == "User or group not found"


async def test_event_time_guard_and_survey_links(postgres_pool):
    events = EventsRepository(postgres_pool)
    surveys = SurveysRepository(postgres_pool)
    relations = RelationsRepository(postgres_pool)

    event = await events.create_event(name="Kickoff", time_start=START, time_end=START + timedelta(hours=2))
    with pytest.raises(ValidationError):
        await events.update_event(event.uuid, {"time_start": START + timedelta(hours=3)})
    moved = await events.update_event(event.uuid, {"time_end": START + timedelta(hours=4)})
    assert moved.time_end == START + timedelta(hours=4)

    survey = await surveys.create_survey(
        name="Retro",
        form={"fields": [{"id": "q1", "type": "text", "label": "Notes", "required": False, "options": None}]},
    )
    await relations.add_survey_to_event(survey.uuid, event.uuid, "notes.txt")
    linked = await surveys.get_survey(survey.uuid)
    assert [item.name for item in linked.events] == ["Kickoff"]
    assert linked.form["fields"][0]["id"] == "q1"

    await events.delete_event(event.uuid)
    assert (await surveys.get_survey(survey.uuid)).events == []


async def test_dashboard_counts_and_activity(postgres_pool):
    dashboard = DashboardService(postgres_pool)
    stats = await dashboard.stats()
    assert stats.total_users == 5
    assert stats.active_users == 5
    assert stats.total_groups == 7

    activity = await dashboard.recent_activity(limit=4)
    assert len(activity) == 4
    assert [item.time for item in activity] == sorted((item.time for item in activity), reverse=True)
