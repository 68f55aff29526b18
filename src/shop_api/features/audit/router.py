"""Admin route for browsing audit logs."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Security, status

from shop_api.api.deps import get_audit_service
from shop_api.common.pagination import PageParams, get_page_params
from shop_api.core.http import require_authenticated, require_permission
from shop_db.models import AuditAction

from .schemas import AuditLogPage
from .service import AuditService

router = APIRouter(
    prefix="/admin/audit-logs",
    tags=["admin-audit"],
    dependencies=[
        Security(require_authenticated),
        Security(require_permission("audit.read")),
    ],
)


@router.get(
    "",
    response_model=AuditLogPage,
    status_code=status.HTTP_200_OK,
    summary="List audit log entries, newest first",
    response_model_exclude_none=True,
)
def list_audit_logs(
    service: Annotated[AuditService, Depends(get_audit_service)],
    page: Annotated[PageParams, Depends(get_page_params)],
    entity_type: Annotated[str | None, Query(max_length=64)] = None,
    entity_id: Annotated[UUID | None, Query()] = None,
    action: Annotated[AuditAction | None, Query()] = None,
) -> AuditLogPage:
    return service.list_logs(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        page=page.page,
        per_page=page.per_page,
    )


__all__ = ["router"]
