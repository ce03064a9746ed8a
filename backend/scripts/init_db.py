"""Create the console database if needed, then apply the schema and seed data.

Usage: python backend/scripts/init_db.py [--no-seed]
"""

import argparse
import asyncio
import logging
import sys

import asyncpg

from admin_console.infra import postgres
from admin_console.infra.schema import ensure_schema
from admin_console.obs import logging as obs_logging
from admin_console.settings import settings

logger = logging.getLogger("admin_console.init_db")


async def ensure_database() -> None:
	"""Connect to the maintenance database and create ``DB_NAME`` when missing."""
	if settings.postgres_url:
		return
	admin_dsn = settings.model_copy(update={"db_name": "postgres"}).dsn()
	conn = await asyncpg.connect(admin_dsn)
	try:
		exists = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", settings.db_name)
		if not exists:
			await conn.execute(f'CREATE DATABASE "{settings.db_name}"')
			logger.info("database_created", extra={"database": settings.db_name})
		else:
			logger.info("database_exists", extra={"database": settings.db_name})
	finally:
		await conn.close()


async def main(seed: bool) -> int:
	try:
		await ensure_database()
		pool = await postgres.init_pool(settings)
	except (asyncpg.PostgresError, OSError):
		logger.exception("database_unavailable")
		return 1
	try:
		seeded = await ensure_schema(pool, seed=seed, seed_password=settings.seed_password)
	finally:
		await postgres.close_pool(pool)
	logger.info("init_db_complete", extra={"seeded": seeded})
	return 0


if __name__ == "__main__":
	parser = argparse.ArgumentParser(description=__doc__)
	parser.add_argument("--no-seed", action="store_true", help="create tables without inserting sample rows")
	args = parser.parse_args()
	obs_logging.configure_logging()
	sys.exit(asyncio.run(main(seed=not args.no_seed)))
