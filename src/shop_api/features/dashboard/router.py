"""Admin dashboard routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Security, status

from shop_api.api.deps import get_dashboard_service
from shop_api.core.http import require_authenticated, require_permission

from .schemas import ActivityFeed, DashboardStats, SystemStatus
from .service import DashboardService

router = APIRouter(
    prefix="/admin/dashboard",
    tags=["admin-dashboard"],
    dependencies=[
        Security(require_authenticated),
        Security(require_permission("dashboard.read")),
    ],
)

Service = Annotated[DashboardService, Depends(get_dashboard_service)]


@router.get(
    "/stats",
    response_model=DashboardStats,
    status_code=status.HTTP_200_OK,
    summary="Headline metrics compared with the previous month",
)
def read_stats(service: Service) -> DashboardStats:
    return service.stats()


@router.get(
    "/activity",
    response_model=ActivityFeed,
    status_code=status.HTTP_200_OK,
    summary="Recent orders, registrations and product updates",
    response_model_exclude_none=True,
)
def read_activity(service: Service) -> ActivityFeed:
    return service.activity()


@router.get(
    "/system-status",
    response_model=SystemStatus,
    status_code=status.HTTP_200_OK,
    summary="Server, database and storage health",
    response_model_exclude_none=True,
)
def read_system_status(service: Service) -> SystemStatus:
    return service.system_status()


__all__ = ["router"]
