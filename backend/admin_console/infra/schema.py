"""Idempotent schema creation and baseline seed data."""

from __future__ import annotations

import logging
from typing import Sequence

import asyncpg

from admin_console.infra.password import hash_password

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "0001_admin_console"

TABLES: Sequence[str] = (
	"CREATE EXTENSION IF NOT EXISTS pgcrypto",
	"""
	CREATE TABLE IF NOT EXISTS schema_migrations (
		version TEXT PRIMARY KEY,
		applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
	)
	""",
	"""
	CREATE TABLE IF NOT EXISTS users (
		uuid UUID PRIMARY KEY DEFAULT gen_random_uuid(),
		username VARCHAR(30) NOT NULL,
		email VARCHAR(100) NOT NULL,
		role VARCHAR(20) NOT NULL DEFAULT 'user',
		password VARCHAR(255) NOT NULL,
		status BOOLEAN NOT NULL DEFAULT true,
		created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		CONSTRAINT users_username_key UNIQUE (username),
		CONSTRAINT users_email_key UNIQUE (email)
	)
	""",
	"""
	CREATE TABLE IF NOT EXISTS groups (
		uuid UUID PRIMARY KEY DEFAULT gen_random_uuid(),
		name VARCHAR(30) NOT NULL,
		description TEXT,
		created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		CONSTRAINT groups_name_key UNIQUE (name)
	)
	""",
	"""
	CREATE TABLE IF NOT EXISTS events (
		uuid UUID PRIMARY KEY DEFAULT gen_random_uuid(),
		name VARCHAR(30) NOT NULL,
		description TEXT,
		time_start TIMESTAMPTZ NOT NULL,
		time_end TIMESTAMPTZ NOT NULL,
		status VARCHAR(20) NOT NULL DEFAULT 'scheduled',
		created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		CONSTRAINT events_time_order CHECK (time_end > time_start)
	)
	""",
	"""
	CREATE TABLE IF NOT EXISTS surveys (
		uuid UUID PRIMARY KEY DEFAULT gen_random_uuid(),
		name VARCHAR(30) NOT NULL,
		form JSONB NOT NULL,
		set_point TEXT,
		status VARCHAR(20) NOT NULL DEFAULT 'active',
		created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
	)
	""",
	"""
	CREATE TABLE IF NOT EXISTS relation_group_user (
		uuid UUID PRIMARY KEY DEFAULT gen_random_uuid(),
		group_id UUID NOT NULL REFERENCES groups(uuid) ON DELETE CASCADE,
		user_id UUID NOT NULL REFERENCES users(uuid) ON DELETE CASCADE,
		created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		UNIQUE (group_id, user_id)
	)
	""",
	"""
	CREATE TABLE IF NOT EXISTS relation_group_event (
		uuid UUID PRIMARY KEY DEFAULT gen_random_uuid(),
		group_id UUID NOT NULL REFERENCES groups(uuid) ON DELETE CASCADE,
		event_id UUID NOT NULL REFERENCES events(uuid) ON DELETE CASCADE,
		created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		UNIQUE (group_id, event_id)
	)
	""",
	"""
	CREATE TABLE IF NOT EXISTS relation_event_survey (
		uuid UUID PRIMARY KEY DEFAULT gen_random_uuid(),
		event_id UUID NOT NULL REFERENCES events(uuid) ON DELETE CASCADE,
		survey_id UUID NOT NULL REFERENCES surveys(uuid) ON DELETE CASCADE,
		file_final VARCHAR(225),
		created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
		UNIQUE (event_id, survey_id)
	)
	""",
)

INDEXES: Sequence[str] = (
	"CREATE INDEX IF NOT EXISTS idx_users_email ON users(email)",
	"CREATE INDEX IF NOT EXISTS idx_users_username ON users(username)",
	"CREATE INDEX IF NOT EXISTS idx_groups_name ON groups(name)",
	"CREATE INDEX IF NOT EXISTS idx_events_status ON events(status)",
	"CREATE INDEX IF NOT EXISTS idx_surveys_status ON surveys(status)",
	"CREATE INDEX IF NOT EXISTS idx_relation_group_user_group ON relation_group_user(group_id)",
	"CREATE INDEX IF NOT EXISTS idx_relation_group_user_user ON relation_group_user(user_id)",
	"CREATE INDEX IF NOT EXISTS idx_relation_group_event_group ON relation_group_event(group_id)",
	"CREATE INDEX IF NOT EXISTS idx_relation_group_event_event ON relation_group_event(event_id)",
	"CREATE INDEX IF NOT EXISTS idx_relation_event_survey_event ON relation_event_survey(event_id)",
	"CREATE INDEX IF NOT EXISTS idx_relation_event_survey_survey ON relation_event_survey(survey_id)",
)

SEED_USERS: Sequence[tuple[str, str, str]] = (
	("john.doe", "john.doe@example.com", "admin"),
	("jane.smith", "jane.smith@example.com", "user"),
	("mike.johnson", "mike.johnson@example.com", "moderator"),
	("sarah.wilson", "sarah.wilson@example.com", "user"),
	("david.brown", "david.brown@example.com", "user"),
)

SEED_GROUPS: Sequence[tuple[str, str]] = (
	("Engineering", "Software development team"),
	("Marketing", "Marketing and growth team"),
	("Support", "Customer support team"),
	("QA", "Quality assurance team"),
	("Design", "UI/UX design team"),
	("DevOps", "DevOps and infrastructure team"),
	("Management", "Management and leadership"),
)


async def _seed(conn: asyncpg.Connection, password: str) -> bool:
	count = await conn.fetchval("SELECT COUNT(*) FROM users")
	if count:
		logger.info("schema_seed_skipped", extra={"users": int(count)})
		return False
	hashed = hash_password(password)
	await conn.executemany(
		"INSERT INTO users (username, email, role, password) VALUES ($1, $2, $3, $4)",
		[(username, email, role, hashed) for username, email, role in SEED_USERS],
	)
	await conn.executemany(
		"INSERT INTO groups (name, description) VALUES ($1, $2) ON CONFLICT (name) DO NOTHING",
		list(SEED_GROUPS),
	)
	logger.info("schema_seeded", extra={"users": len(SEED_USERS), "groups": len(SEED_GROUPS)})
	return True


async def ensure_schema(pool: asyncpg.Pool, *, seed: bool = True, seed_password: str = "changeme123") -> bool:
	"""Create tables and indexes, record the version and optionally seed, all in one transaction.

	Returns whether seed rows were inserted.
	"""
	seeded = False
	try:
		async with pool.acquire() as conn:
			async with conn.transaction():
				for statement in (*TABLES, *INDEXES):
					await conn.execute(statement)
				await conn.execute(
					"INSERT INTO schema_migrations (version) VALUES ($1) ON CONFLICT (version) DO NOTHING",
					SCHEMA_VERSION,
				)
				if seed:
					seeded = await _seed(conn, seed_password)
	except (asyncpg.PostgresError, OSError):
		logger.exception("schema_setup_failed", extra={"version": SCHEMA_VERSION})
		raise
	logger.info("schema_ready", extra={"version": SCHEMA_VERSION, "seeded": seeded})
	return seeded


async def current_version(pool: asyncpg.Pool) -> str | None:
	async with pool.acquire() as conn:
		version = await conn.fetchval("SELECT version FROM schema_migrations ORDER BY version DESC LIMIT 1")
	return str(version) if version is not None else None
