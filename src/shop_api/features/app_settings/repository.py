"""Persistence helpers for key/value application settings."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from shop_db.models import ApplicationSetting

from .defaults import DEFAULT_SETTINGS, DEFAULTS_BY_KEY


class ApplicationSettingsRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, key: str) -> ApplicationSetting | None:
        stmt = select(ApplicationSetting).where(ApplicationSetting.key == key)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_active(self) -> list[ApplicationSetting]:
        stmt = (
            select(ApplicationSetting)
            .where(ApplicationSetting.is_active.is_(True))
            .order_by(ApplicationSetting.group, ApplicationSetting.key)
        )
        return list(self._session.execute(stmt).scalars().all())

    def list_by_keys(self, keys: Iterable[str]) -> dict[str, ApplicationSetting]:
        wanted = list(keys)
        if not wanted:
            return {}
        stmt = select(ApplicationSetting).where(ApplicationSetting.key.in_(wanted))
        return {row.key: row for row in self._session.execute(stmt).scalars()}

    def value(self, key: str, default: Any = None) -> Any:
        """Return the typed value of an active setting, else ``default``.

        When ``default`` is omitted the seeded default for ``key`` is used.
        """

        row = self.get(key)
        if row is not None and row.is_active:
            resolved = row.typed_value
            if resolved is not None:
                return resolved
        if default is None and key in DEFAULTS_BY_KEY:
            return DEFAULTS_BY_KEY[key].value
        return default

    def ensure_defaults(self) -> int:
        """Insert any missing seeded settings; returns the number created."""

        existing = self.list_by_keys(item.key for item in DEFAULT_SETTINGS)
        created = 0
        for item in DEFAULT_SETTINGS:
            if item.key in existing:
                continue
            row = ApplicationSetting(
                key=item.key,
                group=item.group,
                type=item.type,
                description=item.description,
                is_active=True,
            )
            row.typed_value = item.value
            self._session.add(row)
            created += 1
        if created:
            self._session.flush()
        return created


__all__ = ["ApplicationSettingsRepository"]
