"""Dashboard API routes."""

from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Depends, Query

from admin_console.api import envelope
from admin_console.api.deps import get_dashboard_service
from admin_console.domain.dashboard.schemas import ActivityItem, DashboardStats
from admin_console.domain.dashboard.service import DEFAULT_ACTIVITY_LIMIT, DashboardService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=envelope.ApiResponse[DashboardStats])
async def dashboard_stats_endpoint(service: DashboardService = Depends(get_dashboard_service)) -> Any:
	return envelope.ok(await service.stats())


@router.get("/activity", response_model=envelope.ApiResponse[List[ActivityItem]])
async def dashboard_activity_endpoint(
	limit: int = Query(default=DEFAULT_ACTIVITY_LIMIT),
	service: DashboardService = Depends(get_dashboard_service),
) -> Any:
	return envelope.ok(await service.recent_activity(limit))
