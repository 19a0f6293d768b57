from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core.phone import normalize_phone
from app.db.models.client_model import Client
from app.db.models.order_model import Order
from app.schemas.client_schema import ClientForm
from app.schemas.order_schema import OrderForm
from app.services.client_service import client_service
from app.services.form_parsing import parse_form
from app.services.order_service import order_service
from app.services.restaurant_service import restaurant_service
from conftest import client_form, order_form, restaurant_form


# ========================================
# TELÉFONOS
# ========================================

def test_phone_normalized_to_international_format():
    assert normalize_phone("+16502530000", "US") == "+1 650-253-0000"


def test_phone_without_prefix_uses_region():
    assert normalize_phone("(650) 253-0000", "US") == "+1 650-253-0000"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_empty_phone_is_optional(raw):
    assert normalize_phone(raw, "US") is None


@pytest.mark.parametrize("raw", ["not-a-number", "123", "+1 000"])
def test_invalid_phone_raises(raw):
    with pytest.raises(ValueError, match="Invalid phone number format."):
        normalize_phone(raw, "US")


# ========================================
# FORMULARIOS DE CLIENTE Y RESTAURANTE
# ========================================

def test_client_form_lists_every_missing_field():
    result = parse_form(ClientForm, {"firstName": "  ", "phone": ""})

    assert not result.ok
    assert result.error.fields == ["firstName", "lastName", "address"]
    assert "firstName: This field is required." in result.error.errors


def test_client_form_strips_whitespace():
    result = parse_form(ClientForm, client_form(firstName="  Ada  "))

    assert result.ok
    assert result.value.first_name == "Ada"
    assert result.value.phone is None


def test_client_form_phone_region_from_context():
    result = parse_form(ClientForm, client_form(phone="912 34 56 78"), context={"phone_region": "ES"})

    assert result.ok
    assert result.value.phone.startswith("+34")


async def test_invalid_phone_persists_nothing(db):
    result = await client_service.create_client(db, client_form(phone="not-a-number"))

    assert not result.ok
    assert result.error.fields == ["phone"]
    assert result.error.message == "phone: Invalid phone number format."
    assert (await db.execute(select(func.count()).select_from(Client))).scalar_one() == 0


async def test_valid_client_stores_normalized_phone(db):
    result = await client_service.create_client(db, client_form(phone="+16502530000"))

    assert result.ok
    assert result.value.phone == "+1 650-253-0000"


async def test_restaurant_name_is_required(db):
    result = await restaurant_service.create_restaurant(db, restaurant_form(name=""))

    assert not result.ok
    assert result.error.fields == ["name"]


# ========================================
# FORMULARIO DE PEDIDO
# ========================================

def test_order_form_parses_items_json():
    result = parse_form(OrderForm, order_form("a", "b"))

    assert result.ok
    assert [item.description for item in result.value.items] == ["Margherita", "Tiramisu"]
    assert result.value.items[0].unit_price == Decimal("9.50")


def test_order_form_requires_items():
    result = parse_form(OrderForm, order_form("a", "b", items=[]))

    assert not result.ok
    assert result.error.errors == ["items: The order must have at least one item."]


def test_order_form_rejects_malformed_items():
    result = parse_form(OrderForm, {"clientId": "a", "restaurantId": "b", "items": "{not json"})

    assert not result.ok
    assert result.error.fields == ["items"]


def test_order_form_reports_item_position():
    items = [
        {"quantity": 1, "description": "Pizza", "unitPrice": "10"},
        {"quantity": 0, "description": "Pasta", "unitPrice": "8"},
    ]
    result = parse_form(OrderForm, order_form("a", "b", items=items))

    assert not result.ok
    assert result.error.errors == ["Item 2: quantity must be greater than 0"]


def test_order_form_rejects_non_positive_price():
    items = [{"quantity": 1, "description": "Pizza", "unitPrice": "0"}]
    result = parse_form(OrderForm, order_form("a", "b", items=items))

    assert not result.ok
    assert result.error.errors == ["Item 1: unitPrice must be greater than 0"]


async def test_zero_quantity_persists_nothing(db, make_client, make_restaurant):
    client = await make_client()
    restaurant = await make_restaurant()
    items = [{"quantity": 0, "description": "Pizza", "unitPrice": "10"}]

    result = await order_service.create_order(db, order_form(client.id, restaurant.id, items))

    assert not result.ok
    assert (await db.execute(select(func.count()).select_from(Order))).scalar_one() == 0


async def test_order_with_unknown_references(db):
    result = await order_service.create_order(
        db, order_form("00000000-0000-4000-8000-000000000000", "nope")
    )

    assert not result.ok
    assert result.error.fields == ["clientId", "restaurantId"]
    assert result.error.errors == ["clientId: Client not found.", "restaurantId: Restaurant not found."]


async def test_order_totals(db, make_client, make_restaurant, make_order):
    client = await make_client()
    restaurant = await make_restaurant()
    items = [
        {"quantity": 3, "description": "Dumpling", "unitPrice": "1.10"},
        {"quantity": 1, "description": "Tea", "unitPrice": "2"},
    ]

    order = await make_order(client.id, restaurant.id, items)

    assert [item.line_total for item in order.items] == [Decimal("3.30"), Decimal("2.00")]
    assert order.total == Decimal("5.30")
    assert [item.description for item in order.items] == ["Dumpling", "Tea"]


def test_phone_example_number_formatting():
    assert normalize_phone("+14155552671", "US") == "+1 415-555-2671"


def test_missing_keys_are_reported_with_form_names():
    result = parse_form(ClientForm, {"firstName": "Ada", "address": "12 Analytical St"})

    assert not result.ok
    assert result.error.fields == ["lastName"]
    assert result.error.errors == ["lastName: This field is required."]


def test_missing_order_references_use_form_names():
    result = parse_form(OrderForm, {"items": order_form("a", "b")["items"]})

    assert not result.ok
    assert result.error.fields == ["clientId", "restaurantId"]


@pytest.mark.parametrize("price", ["0.004", "0.001", "-3"])
def test_price_rounding_to_zero_is_rejected(price):
    items = [{"quantity": 1, "description": "Mint", "unitPrice": price}]
    result = parse_form(OrderForm, order_form("a", "b", items=items))

    assert not result.ok
    assert result.error.errors == ["Item 1: unitPrice must be greater than 0"]


def test_price_is_rounded_to_cents():
    items = [{"quantity": 1, "description": "Mint", "unitPrice": "0.005"}]
    result = parse_form(OrderForm, order_form("a", "b", items=items))

    assert result.ok
    assert result.value.items[0].unit_price == Decimal("0.01")


async def test_sub_cent_price_persists_nothing(db, make_client, make_restaurant):
    client = await make_client()
    restaurant = await make_restaurant()
    items = [{"quantity": 1, "description": "Mint", "unitPrice": "0.004"}]

    result = await order_service.create_order(db, order_form(client.id, restaurant.id, items))

    assert not result.ok
    assert (await db.execute(select(func.count()).select_from(Order))).scalar_one() == 0


def test_quantity_above_column_limit():
    items = [{"quantity": 3_000_000_000, "description": "Rice", "unitPrice": "1"}]
    result = parse_form(OrderForm, order_form("a", "b", items=items))

    assert not result.ok
    assert result.error.errors == ["Item 1: quantity must be at most 2147483647"]


@pytest.mark.parametrize("price", ["100000000", "1e30"])
def test_price_above_column_limit(price):
    items = [{"quantity": 1, "description": "Caviar", "unitPrice": price}]
    result = parse_form(OrderForm, order_form("a", "b", items=items))

    assert not result.ok
    assert result.error.errors == ["Item 1: unitPrice must be at most 99999999.99"]
