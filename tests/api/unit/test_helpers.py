from __future__ import annotations

import re
from datetime import UTC, datetime

import pytest

from shop_api.core.auth.permissions import has_permission, permissions_for
from shop_api.core.security.tokens import hash_opaque_token, mint_opaque_token
from shop_api.features.dashboard.service import format_change, storage_state
from shop_db.events import generate_order_number, slugify
from shop_db.models import ApplicationSetting, SettingType, ShippingMethod, User, UserType
from shop_db.models.application_setting import cast_setting_value


@pytest.mark.parametrize(
    ("current", "previous", "expected"),
    [
        (3, 0, "+100%"),
        (0, 0, "0%"),
        (150, 100, "+50.0%"),
        (50, 200, "-75.0%"),
        (100, 100, "+0.0%"),
    ],
)
def test_format_change(current: int, previous: int, expected: str) -> None:
    assert format_change(current, previous) == expected


def test_storage_state_thresholds() -> None:
    assert storage_state(74) == "online"
    assert storage_state(75) == "warning"
    assert storage_state(89) == "warning"
    assert storage_state(90) == "offline"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Home & Garden", "home-garden"),
        ("  Smart   Phone ", "smart-phone"),
        ("Café Crème", "cafe-creme"),
        ("USB-C Cable!", "usb-c-cable"),
        (None, ""),
    ],
)
def test_slugify(value: str | None, expected: str) -> None:
    assert slugify(value) == expected


def test_generate_order_number_format() -> None:
    number = generate_order_number(datetime(2024, 5, 1, tzinfo=UTC))

    assert re.fullmatch(r"ORD-20240501-[0-9A-F]{8}", number)
    assert generate_order_number() != generate_order_number()


@pytest.mark.parametrize(
    ("raw", "setting_type", "expected"),
    [
        ("true", SettingType.BOOLEAN, True),
        ("off", SettingType.BOOLEAN, False),
        (0, SettingType.BOOLEAN, False),
        ("50", SettingType.INTEGER, 50),
        (3.0, SettingType.INTEGER, 3),
        ("2.5", SettingType.FLOAT, 2.5),
        ('{"a": 1}', SettingType.JSON, {"a": 1}),
        (12, SettingType.STRING, "12"),
        (None, SettingType.INTEGER, None),
    ],
)
def test_cast_setting_value(raw: object, setting_type: SettingType, expected: object) -> None:
    assert cast_setting_value(raw, setting_type) == expected


@pytest.mark.parametrize(
    ("raw", "setting_type"),
    [
        ("maybe", SettingType.BOOLEAN),
        (True, SettingType.INTEGER),
        (2.5, SettingType.INTEGER),
        ("many", SettingType.INTEGER),
        ("{broken", SettingType.JSON),
    ],
)
def test_cast_setting_value_rejects(raw: object, setting_type: SettingType) -> None:
    with pytest.raises(ValueError):
        cast_setting_value(raw, setting_type)


def test_typed_value_wraps_stored_json() -> None:
    setting = ApplicationSetting(key="maintenance_mode", type=SettingType.BOOLEAN)

    setting.typed_value = "yes"

    assert setting.value == {"value": True}
    assert setting.typed_value is True


@pytest.mark.parametrize(
    ("low", "high", "expected"),
    [(1, 1, "1 business day"), (2, 2, "2 business days"), (3, 5, "3-5 business days")],
)
def test_shipping_delivery_time(low: int, high: int, expected: str) -> None:
    method = ShippingMethod(name="Test", min_delivery_days=low, max_delivery_days=high)

    assert method.delivery_time == expected


def test_permissions_by_user_type() -> None:
    admin = User(user_type=UserType.ADMIN)
    customer = User(user_type=UserType.USER)

    assert permissions_for(customer) < permissions_for(admin)
    assert has_permission(admin, "settings.manage")
    assert has_permission(customer, "cart.update")
    assert not has_permission(customer, "order.manage")


def test_opaque_tokens() -> None:
    token = mint_opaque_token()

    assert token != mint_opaque_token()
    assert hash_opaque_token(token) == hash_opaque_token(token)
    assert hash_opaque_token(token) != token
    assert "=" not in hash_opaque_token(token)
    with pytest.raises(ValueError):
        mint_opaque_token(0)
