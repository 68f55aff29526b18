from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def validate_timezone(value: str) -> str:
    """Return ``value`` when it names an IANA timezone."""

    candidate = value.strip()
    if not candidate:
        raise ValueError("Timezone must not be empty")
    try:
        ZoneInfo(candidate)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"'{value}' is not a valid IANA timezone") from exc
    return candidate


__all__ = ["validate_timezone"]
