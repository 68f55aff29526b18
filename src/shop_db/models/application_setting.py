"""Typed key/value application settings managed from the admin panel."""

from __future__ import annotations

import enum
import json
from typing import Any

from sqlalchemy import Boolean, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.ext.mutable import MutableDict
from sqlalchemy.orm import Mapped, mapped_column

from shop_db import Base, JSONType, TimestampMixin, UUIDPrimaryKeyMixin, enum_values


class SettingType(str, enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    FLOAT = "float"
    JSON = "json"


class SettingGroup(str, enum.Enum):
    COMMERCE = "commerce"
    LOCALIZATION = "localization"
    SYSTEM = "system"
    UI = "ui"
    NOTIFICATION = "notification"


_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})


def cast_setting_value(raw: Any, setting_type: SettingType) -> Any:
    """Coerce ``raw`` into the Python value for ``setting_type``.

    Raises ``ValueError`` when the value cannot be represented.
    """

    if raw is None:
        return None
    match setting_type:
        case SettingType.BOOLEAN:
            if isinstance(raw, bool):
                return raw
            if isinstance(raw, int | float):
                return bool(raw)
            text = str(raw).strip().lower()
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
            raise ValueError(f"'{raw}' is not a boolean")
        case SettingType.INTEGER:
            if isinstance(raw, bool):
                raise ValueError("booleans are not integers")
            if isinstance(raw, float) and not raw.is_integer():
                raise ValueError(f"'{raw}' is not an integer")
            return int(raw)
        case SettingType.FLOAT:
            if isinstance(raw, bool):
                raise ValueError("booleans are not numbers")
            return float(raw)
        case SettingType.JSON:
            if isinstance(raw, str):
                return json.loads(raw)
            return raw
        case _:
            return str(raw)


class ApplicationSetting(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One setting row; the value lives under ``value["value"]``."""

    __tablename__ = "application_settings"

    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    value: Mapped[dict[str, Any]] = mapped_column(
        MutableDict.as_mutable(JSONType),
        nullable=False,
        default=dict,
    )
    type: Mapped[SettingType] = mapped_column(
        SAEnum(
            SettingType,
            name="setting_type",
            native_enum=False,
            length=20,
            values_callable=enum_values,
        ),
        nullable=False,
        default=SettingType.STRING,
    )
    group: Mapped[SettingGroup] = mapped_column(
        SAEnum(
            SettingGroup,
            name="setting_group",
            native_enum=False,
            length=20,
            values_callable=enum_values,
        ),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    @property
    def typed_value(self) -> Any:
        return cast_setting_value((self.value or {}).get("value"), SettingType(self.type))

    @typed_value.setter
    def typed_value(self, raw: Any) -> None:
        self.value = {"value": cast_setting_value(raw, SettingType(self.type))}


__all__ = ["ApplicationSetting", "SettingGroup", "SettingType", "cast_setting_value"]
