"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admin_console.api import dashboard, events, groups, ops, surveys, users
from admin_console.api.errors import install_error_handlers
from admin_console.infra import postgres
from admin_console.infra.schema import ensure_schema
from admin_console.obs import init as obs_init
from admin_console.settings import settings

logger = logging.getLogger(__name__)

DEV_ORIGINS = [
	"http://localhost:3000",
	"http://127.0.0.1:3000",
	"http://localhost:5173",
	"http://127.0.0.1:5173",
	"http://localhost:8080",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
	pool = await postgres.init_pool(settings)
	setattr(app.state, postgres.POOL_STATE_ATTR, pool)
	try:
		await ensure_schema(pool, seed=settings.seed_on_startup, seed_password=settings.seed_password)
		logger.info("startup_complete", extra={"environment": settings.environment})
		yield
	finally:
		setattr(app.state, postgres.POOL_STATE_ATTR, None)
		await postgres.close_pool(pool)


def _allow_origins() -> list[str]:
	allow_origins = list(settings.cors_allow_origins)
	if not allow_origins:
		allow_origins = DEV_ORIGINS if settings.is_dev() else []
	# Starlette disallows wildcard '*' with allow_credentials=True.
	if "*" in allow_origins:
		allow_origins = DEV_ORIGINS if settings.is_dev() else [origin for origin in allow_origins if origin != "*"]
	return allow_origins


def create_app() -> FastAPI:
	app = FastAPI(title="Admin Console API", lifespan=lifespan)
	install_error_handlers(app)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=_allow_origins(),
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	obs_init(app)
	app.include_router(users.router)
	app.include_router(groups.router)
	app.include_router(events.router)
	app.include_router(surveys.router)
	app.include_router(dashboard.router)
	app.include_router(ops.router)
	return app


app = create_app()
