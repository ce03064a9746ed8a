"""Operations endpoints providing health checks, metrics and the ping probe."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from admin_console.infra.postgres import POOL_STATE_ATTR
from admin_console.obs import health
from admin_console.settings import settings

router = APIRouter(prefix="", tags=["ops"])


@router.get("/api/ping")
async def ping() -> dict[str, str]:
	return {"message": settings.ping_message}


@router.get("/health/live")
async def health_live() -> dict[str, str]:
	return await health.liveness()


@router.get("/health/ready")
async def health_ready(request: Request) -> Response:
	pool = getattr(request.app.state, POOL_STATE_ATTR, None)
	status_code, payload = await health.readiness(pool)
	return JSONResponse(content=payload, status_code=status_code)


@router.get("/metrics")
async def prometheus_metrics() -> Response:
	if not settings.obs_metrics_public:
		raise HTTPException(status.HTTP_403_FORBIDDEN, detail="forbidden")
	payload = generate_latest()
	return Response(content=payload, media_type=CONTENT_TYPE_LATEST)
