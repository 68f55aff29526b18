"""ORM lifecycle hooks.

A single ``before_flush`` listener on :class:`~sqlalchemy.orm.Session` fills
in identifiers, slugs and order numbers on new rows, appends order status
history, and writes :class:`AuditLog` entries for audited entities.

The acting user is read from ``session.info["actor_id"]`` which the API sets
once a request is authenticated.
"""

from __future__ import annotations

import re
import unicodedata
import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy import event, inspect, select
from sqlalchemy.orm import Session

from .models.audit_log import AuditAction, AuditLog
from .models.catalog import Category, Product, ShippingMethod
from .models.locale import Country, Currency, Language
from .models.order import Order, OrderStatus, OrderStatusHistory
from .models.user import User

ACTOR_KEY = "actor_id"
ORDER_NUMBER_PREFIX = "ORD"
ORDER_NUMBER_UUID_LENGTH = 8

AUDITED_MODELS: dict[type, str] = {
    Category: "category",
    Product: "product",
    ShippingMethod: "shipping_method",
    Country: "country",
    Currency: "currency",
    Language: "language",
    User: "user",
}

_SLUGGED_MODELS = (Category, Product)
_REDACTED_COLUMNS = frozenset({"hashed_password"})
_IGNORED_COLUMNS = frozenset(
    {
        "created_at",
        "updated_at",
        "email_normalized",
        "failed_login_count",
        "locked_until",
        "last_login_at",
    }
)


def slugify(value: str | None) -> str:
    """Return an ASCII, hyphen-separated slug for ``value``."""

    if not value:
        return ""
    folded = (
        unicodedata.normalize("NFKD", " ".join(str(value).split()).lower())
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    return re.sub(r"[^a-z0-9]+", "-", folded).strip("-")


def generate_order_number(now: datetime | None = None) -> str:
    """Return ``ORD-YYYYMMDD-XXXXXXXX`` using the first chars of a uuid4."""

    stamp = (now or datetime.now(UTC)).strftime("%Y%m%d")
    token = uuid.uuid4().hex[:ORDER_NUMBER_UUID_LENGTH].upper()
    return f"{ORDER_NUMBER_PREFIX}-{stamp}-{token}"


def set_actor(session: Session, actor_id: uuid.UUID | None) -> None:
    session.info[ACTOR_KEY] = actor_id


def _unique_slug(session: Session, model: type, base: str, *, exclude_id: Any) -> str:
    base = base or uuid.uuid4().hex[:12]
    column = model.slug
    stmt = select(column).where((column == base) | column.like(f"{base}-%"))
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    with session.no_autoflush:
        taken = set(session.scalars(stmt))
    # Pending rows in this flush that already claimed a slug.
    taken.update(
        obj.slug
        for obj in session.new
        if isinstance(obj, model) and obj.id != exclude_id and obj.slug
    )
    if base not in taken:
        return base
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


def _column_snapshot(obj: Any) -> dict[str, Any]:
    state = inspect(obj)
    out: dict[str, Any] = {}
    for attr in state.mapper.column_attrs:
        key = attr.key
        if key in _IGNORED_COLUMNS:
            continue
        if key in _REDACTED_COLUMNS:
            out[key] = "***"
            continue
        out[key] = _plain(getattr(obj, key))
    return out


def _column_changes(obj: Any) -> dict[str, Any]:
    state = inspect(obj)
    changes: dict[str, Any] = {}
    for attr in state.mapper.column_attrs:
        key = attr.key
        if key in _IGNORED_COLUMNS:
            continue
        history = state.attrs[key].history
        if not history.has_changes():
            continue
        old = history.deleted[0] if history.deleted else None
        new = history.added[0] if history.added else None
        if old == new:
            continue
        if key in _REDACTED_COLUMNS:
            changes[key] = {"old": "***", "new": "***"}
        else:
            changes[key] = {"old": _plain(old), "new": _plain(new)}
    return changes


def _soft_delete_action(obj: Any) -> AuditAction | None:
    if not hasattr(obj, "deleted_at"):
        return None
    history = inspect(obj).attrs["deleted_at"].history
    if not history.has_changes():
        return None
    old = history.deleted[0] if history.deleted else None
    new = history.added[0] if history.added else None
    if old is None and new is not None:
        return AuditAction.DELETED
    if old is not None and new is None:
        return AuditAction.RESTORED
    return None


def _prepare_new(session: Session, obj: Any) -> None:
    if getattr(obj, "id", "missing") is None:
        obj.id = uuid.uuid4()
    if isinstance(obj, _SLUGGED_MODELS) and not obj.slug:
        obj.slug = _unique_slug(session, type(obj), slugify(obj.name), exclude_id=obj.id)
    if isinstance(obj, Order):
        if not obj.order_number:
            obj.order_number = generate_order_number()
        if obj.status is None:
            obj.status = OrderStatus.PENDING
        obj.status_history.append(
            OrderStatusHistory(
                old_status=None,
                new_status=obj.status,
                changed_by_id=session.info.get(ACTOR_KEY),
                notes="Order placed",
            )
        )


def _prepare_dirty(session: Session, obj: Any) -> None:
    if isinstance(obj, _SLUGGED_MODELS):
        state = inspect(obj)
        renamed = state.attrs["name"].history.has_changes()
        if renamed and not state.attrs["slug"].history.has_changes():
            obj.slug = _unique_slug(session, type(obj), slugify(obj.name), exclude_id=obj.id)
    if isinstance(obj, Order):
        history = inspect(obj).attrs["status"].history
        if history.deleted and history.added and history.deleted[0] != history.added[0]:
            obj.status_history.append(
                OrderStatusHistory(
                    old_status=history.deleted[0],
                    new_status=history.added[0],
                    changed_by_id=session.info.get(ACTOR_KEY),
                    notes=obj.status_note,
                )
            )
            obj.status_note = None


def _audit(
    session: Session,
    obj: Any,
    action: AuditAction,
    changes: dict[str, Any] | None,
) -> None:
    session.add(
        AuditLog(
            id=uuid.uuid4(),
            entity_type=AUDITED_MODELS[type(obj)],
            entity_id=obj.id,
            action=action,
            changes=changes or None,
            actor_id=session.info.get(ACTOR_KEY),
        )
    )


@event.listens_for(Session, "before_flush")
def _before_flush(session: Session, _flush_context: Any, _instances: Any) -> None:
    for obj in list(session.new):
        _prepare_new(session, obj)
        if type(obj) in AUDITED_MODELS:
            _audit(session, obj, AuditAction.CREATED, _column_snapshot(obj))

    for obj in list(session.dirty):
        if not session.is_modified(obj, include_collections=False):
            continue
        _prepare_dirty(session, obj)
        if type(obj) in AUDITED_MODELS:
            changes = _column_changes(obj)
            if not changes:
                continue
            action = _soft_delete_action(obj) or AuditAction.UPDATED
            _audit(session, obj, action, changes)

    for obj in list(session.deleted):
        if type(obj) in AUDITED_MODELS:
            _audit(session, obj, AuditAction.DELETED, None)


__all__ = [
    "ACTOR_KEY",
    "AUDITED_MODELS",
    "generate_order_number",
    "set_actor",
    "slugify",
]
