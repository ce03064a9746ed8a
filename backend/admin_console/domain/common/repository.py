"""Base class for the asyncpg-backed console repositories."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Sequence, TypeVar

import asyncpg

from admin_console.domain.query import ListQuery, Page, WhereBuilder
from admin_console.obs import metrics

T = TypeVar("T")


class Repository:
	"""Thin data-access layer around an injected asyncpg pool."""

	entity: str = "entity"

	def __init__(self, pool: asyncpg.Pool) -> None:
		self._pool = pool

	async def _fetch(self, query: str, *args: Any) -> list[asyncpg.Record]:
		async with self._pool.acquire() as conn:
			return await conn.fetch(query, *args)

	async def _fetchrow(self, query: str, *args: Any) -> Optional[asyncpg.Record]:
		async with self._pool.acquire() as conn:
			return await conn.fetchrow(query, *args)

	async def _fetchval(self, query: str, *args: Any) -> Any:
		async with self._pool.acquire() as conn:
			return await conn.fetchval(query, *args)

	async def _execute(self, query: str, *args: Any) -> str:
		async with self._pool.acquire() as conn:
			return await conn.execute(query, *args)

	def _mutated(self, operation: str) -> None:
		metrics.inc_entity_mutation(self.entity, operation)

	async def _exists(self, table: str, entity_id: Any) -> bool:
		row = await self._fetchval(f"SELECT 1 FROM {table} WHERE uuid = $1", entity_id)
		return row is not None

	async def _paginate(
		self,
		*,
		select_sql: str,
		count_sql: str,
		group_by: str,
		order_by: str,
		where: WhereBuilder,
		query: ListQuery,
		build: Callable[[asyncpg.Record], T],
	) -> Page[T]:
		"""Run the data and count queries concurrently over one predicate."""
		limit = query.sanitized_limit()
		page = query.sanitized_page()
		params: Sequence[Any] = list(where.params)
		where_sql = where.sql()
		limit_idx = len(params) + 1
		data_sql = (
			f"{select_sql} {where_sql} GROUP BY {group_by} ORDER BY {order_by} "
			f"LIMIT ${limit_idx} OFFSET ${limit_idx + 1}"
		)
		rows, total = await asyncio.gather(
			self._fetch(data_sql, *params, limit, query.offset()),
			self._fetchval(f"{count_sql} {where_sql}", *params),
		)
		return Page(items=[build(row) for row in rows], page=page, limit=limit, total=int(total or 0))
