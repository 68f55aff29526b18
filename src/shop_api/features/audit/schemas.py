from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from shop_api.common.pagination import Page
from shop_api.common.schema import BaseSchema
from shop_db.models import AuditAction


class AuditLogOut(BaseSchema):
    id: UUID
    entity_type: str
    entity_id: UUID
    action: AuditAction
    changes: dict[str, Any] | None = None
    actor_id: UUID | None = None
    created_at: datetime


class AuditLogPage(Page[AuditLogOut]):
    pass


__all__ = ["AuditLogOut", "AuditLogPage"]
