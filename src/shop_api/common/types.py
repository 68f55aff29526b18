from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias

from sqlalchemy.sql.elements import ColumnElement

OrderColumns: TypeAlias = ColumnElement[Any] | tuple[ColumnElement[Any], ...]
OrderBy: TypeAlias = tuple[ColumnElement[Any], ...]
SortAllowedMap: TypeAlias = Mapping[str, tuple[OrderColumns, OrderColumns]]

__all__ = ["OrderBy", "OrderColumns", "SortAllowedMap"]
