"""Query the audit trail written by the ORM hooks."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from shop_api.common.pagination import paginate_sql
from shop_db.models import AuditAction, AuditLog

from .schemas import AuditLogOut, AuditLogPage

_ORDER_BY = (AuditLog.created_at.desc(), AuditLog.id.desc())


class AuditService:
    def __init__(self, *, session: Session) -> None:
        self._session = session

    def list_logs(
        self,
        *,
        entity_type: str | None,
        entity_id: UUID | None,
        action: AuditAction | None,
        page: int,
        per_page: int,
    ) -> AuditLogPage:
        stmt = select(AuditLog)
        if entity_type:
            stmt = stmt.where(AuditLog.entity_type == entity_type)
        if entity_id is not None:
            stmt = stmt.where(AuditLog.entity_id == entity_id)
        if action is not None:
            stmt = stmt.where(AuditLog.action == action)
        result = paginate_sql(
            self._session, stmt, page=page, per_page=per_page, order_by=_ORDER_BY
        )
        return result.map_into(AuditLogPage, AuditLogOut.model_validate)


__all__ = ["AuditService"]
