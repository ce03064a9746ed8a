"""AsyncPG pool management for the admin console.

The pool is created once by the application lifespan, kept on ``app.state``
and handed to repositories explicitly. Nothing below reaches for a module
level pool.
"""

from __future__ import annotations

import logging
from typing import Optional

import asyncpg
from fastapi import Request

from admin_console.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

POOL_STATE_ATTR = "pool"


async def init_pool(config: Optional[Settings] = None) -> asyncpg.pool.Pool:
	"""Create the shared pool; fails fast when the database is unreachable."""
	config = config or default_settings
	pool = await asyncpg.create_pool(
		dsn=config.dsn(),
		min_size=config.postgres_min_pool_size,
		max_size=config.postgres_max_pool_size,
		max_inactive_connection_lifetime=config.postgres_idle_timeout_seconds,
		timeout=config.postgres_connect_timeout_seconds,
		ssl="require" if config.db_ssl else "disable",
	)
	logger.info(
		"postgres_pool_ready",
		extra={"min_size": config.postgres_min_pool_size, "max_size": config.postgres_max_pool_size},
	)
	return pool


async def close_pool(pool: Optional[asyncpg.pool.Pool]) -> None:
	if pool is not None:
		await pool.close()
		logger.info("postgres_pool_closed")


def get_pool(request: Request) -> asyncpg.pool.Pool:
	"""FastAPI dependency returning the pool owned by the running app."""
	pool = getattr(request.app.state, POOL_STATE_ATTR, None)
	if pool is None:
		raise RuntimeError("database pool is not initialised")
	return pool
