"""Aggregate counts and the recent-activity feed for the dashboard."""

from __future__ import annotations

import asyncio
import math
from typing import List

from admin_console.domain.common.repository import Repository
from admin_console.domain.dashboard import schemas
from admin_console.domain.exceptions import storage_errors

DEFAULT_ACTIVITY_LIMIT = 10
MAX_ACTIVITY_LIMIT = 50

STATS_SQL = """
	SELECT
		(SELECT COUNT(*) FROM users)::bigint AS total_users,
		(SELECT COUNT(*) FROM groups)::bigint AS total_groups,
		(SELECT COUNT(*) FROM events)::bigint AS total_events,
		(SELECT COUNT(*) FROM surveys)::bigint AS total_surveys,
		(SELECT COUNT(*) FROM users WHERE status = true)::bigint AS active_users,
		(SELECT COUNT(*) FROM events WHERE status = 'active')::bigint AS active_events,
		(SELECT COUNT(*) FROM surveys WHERE status = 'active')::bigint AS active_surveys
"""

# (type, action, status, detail column, table)
ACTIVITY_SOURCES = (
	("user", "New user registered", "success", "email", "users"),
	("group", "Group created", "info", "name", "groups"),
	("event", "Event scheduled", "info", "name", "events"),
	("survey", "Survey created", "success", "name", "surveys"),
)


def clamp_activity_limit(limit: int) -> int:
	return max(1, min(limit, MAX_ACTIVITY_LIMIT))


class DashboardService(Repository):
	entity = "dashboard"

	async def stats(self) -> schemas.DashboardStats:
		with storage_errors("Failed to fetch dashboard stats"):
			row = await self._fetchrow(STATS_SQL)
		if row is None:
			return schemas.DashboardStats(
				total_users=0,
				total_groups=0,
				total_events=0,
				total_surveys=0,
				active_users=0,
				active_events=0,
				active_surveys=0,
			)
		return schemas.DashboardStats(**{key: int(row[key] or 0) for key in schemas.DashboardStats.model_fields})

	async def _source(self, kind: str, action: str, status: str, column: str, table: str, per_source: int) -> List[schemas.ActivityItem]:
		rows = await self._fetch(
			f"SELECT {column} AS details, created_at FROM {table} ORDER BY created_at DESC LIMIT $1",
			per_source,
		)
		return [
			schemas.ActivityItem(type=kind, action=action, details=row["details"], time=row["created_at"], status=status)
			for row in rows
		]

	async def recent_activity(self, limit: int = DEFAULT_ACTIVITY_LIMIT) -> List[schemas.ActivityItem]:
		limit = clamp_activity_limit(limit)
		per_source = math.ceil(limit / 2)
		with storage_errors("Failed to fetch recent activity", limit=limit):
			batches = await asyncio.gather(
				*(self._source(*source, per_source) for source in ACTIVITY_SOURCES)
			)
		items = [item for batch in batches for item in batch]
		items.sort(key=lambda item: item.time, reverse=True)
		return items[:limit]
