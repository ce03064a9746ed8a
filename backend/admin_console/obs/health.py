"""Health check helpers for liveness and readiness probes."""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter
from typing import Any, Dict, Optional, Tuple

import asyncpg

from admin_console.infra.schema import SCHEMA_VERSION, current_version
from admin_console.obs import metrics

LOGGER = logging.getLogger(__name__)


async def _postgres_status(pool: Optional[asyncpg.Pool], timeout: float = 0.5) -> Dict[str, Any]:
	if pool is None:
		metrics.mark_postgres(False)
		return {"ok": False, "error": "pool_unavailable"}
	start = perf_counter()
	try:
		async with pool.acquire() as conn:
			await asyncio.wait_for(conn.execute("SELECT 1"), timeout=timeout)
	except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
		metrics.mark_postgres(False)
		LOGGER.warning("Postgres readiness query failed", exc_info=True)
		return {"ok": False, "error": type(exc).__name__}
	latency = perf_counter() - start
	metrics.mark_postgres(True, latency_seconds=latency)
	return {"ok": True, "latency_ms": round(latency * 1000, 2)}


async def _migration_status(pool: Optional[asyncpg.Pool], required: str = SCHEMA_VERSION) -> Dict[str, Any]:
	if pool is None:
		return {"ok": False, "error": "pool_unavailable"}
	try:
		current = await current_version(pool)
	except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
		return {"ok": False, "error": type(exc).__name__}
	if current is None:
		return {"ok": False, "error": "no_migrations"}
	return {"ok": current >= required, "version": current, "required": required}


async def liveness() -> Dict[str, Any]:
	return {"status": "ok"}


async def readiness(pool: Optional[asyncpg.Pool]) -> Tuple[int, Dict[str, Any]]:
	postgres_state = await _postgres_status(pool)
	migration_state = await _migration_status(pool) if postgres_state.get("ok") else {"ok": False, "error": "skipped"}
	ok = bool(postgres_state.get("ok") and migration_state.get("ok"))
	status_code = 200 if ok else 503
	return (
		status_code,
		{
			"status": "ok" if ok else "degraded",
			"checks": {
				"postgres": postgres_state,
				"migrations": migration_state,
			},
		},
	)
