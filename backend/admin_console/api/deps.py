"""FastAPI dependencies wiring repositories to the application pool."""

from __future__ import annotations

import asyncpg
from fastapi import Depends, Query

from admin_console.domain.dashboard.service import DashboardService
from admin_console.domain.events.repo import EventsRepository
from admin_console.domain.groups.repo import GroupsRepository
from admin_console.domain.query import DEFAULT_LIMIT, ListQuery
from admin_console.domain.relations.repo import RelationsRepository
from admin_console.domain.surveys.repo import SurveysRepository
from admin_console.domain.users.repo import UsersRepository
from admin_console.infra.postgres import get_pool


def get_users_repo(pool: asyncpg.Pool = Depends(get_pool)) -> UsersRepository:
	return UsersRepository(pool)


def get_groups_repo(pool: asyncpg.Pool = Depends(get_pool)) -> GroupsRepository:
	return GroupsRepository(pool)


def get_events_repo(pool: asyncpg.Pool = Depends(get_pool)) -> EventsRepository:
	return EventsRepository(pool)


def get_surveys_repo(pool: asyncpg.Pool = Depends(get_pool)) -> SurveysRepository:
	return SurveysRepository(pool)


def get_relations_repo(pool: asyncpg.Pool = Depends(get_pool)) -> RelationsRepository:
	return RelationsRepository(pool)


def get_dashboard_service(pool: asyncpg.Pool = Depends(get_pool)) -> DashboardService:
	return DashboardService(pool)


def list_query(
	page: int = Query(default=1),
	limit: int = Query(default=DEFAULT_LIMIT),
	search: str | None = Query(default=None),
) -> ListQuery:
	"""Page and limit are clamped rather than rejected."""
	return ListQuery(page=page, limit=limit, search=search or None)
