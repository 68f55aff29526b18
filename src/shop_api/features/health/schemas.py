from __future__ import annotations

from datetime import datetime
from typing import Literal

from shop_api.common.schema import BaseSchema


class HealthComponentStatus(BaseSchema):
    name: str
    status: Literal["available", "unavailable"]
    detail: str | None = None


class HealthCheckResponse(BaseSchema):
    status: Literal["ok", "degraded"]
    timestamp: datetime
    components: list[HealthComponentStatus]


__all__ = ["HealthCheckResponse", "HealthComponentStatus"]
