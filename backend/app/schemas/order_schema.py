# backend/app/schemas/order_schema.py
"""
Se encarga de definir los esquemas Pydantic para los modelos Order e Item.
"""

import json
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.db.models.order_model import OrderStatus
from app.schemas.client_schema import ClientResponse
from app.schemas.restaurant_schema import RestaurantResponse
from app.schemas.flash_schema import FlashMessage

# ========================================
# ESQUEMAS DE ENTRADA (FORMULARIO)
# ========================================

# Límites de las columnas Item.quantity (Integer) y Item.unit_price (Numeric(10, 2))
MAX_QUANTITY = 2_147_483_647
MAX_UNIT_PRICE = Decimal("99999999.99")


class ItemForm(BaseModel):
    """Una línea del pedido tal y como llega del formulario."""
    model_config = ConfigDict(populate_by_name=True, validate_default=True, str_strip_whitespace=True)

    quantity: int = Field(..., alias="quantity")
    description: str = Field("", alias="description")
    unit_price: Decimal = Field(..., alias="unitPrice")

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v):
        if v <= 0:
            raise ValueError("quantity must be greater than 0")
        if v > MAX_QUANTITY:
            raise ValueError(f"quantity must be at most {MAX_QUANTITY}")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        if not v:
            raise ValueError("description is required")
        return v

    @field_validator("unit_price")
    @classmethod
    def validate_unit_price(cls, v):
        # Solo se redondea dentro del rango: quantize desborda con valores enormes
        if v > MAX_UNIT_PRICE:
            raise ValueError(f"unitPrice must be at most {MAX_UNIT_PRICE}")
        if v > 0:
            v = v.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        # El mínimo se aplica al valor redondeado, que es el que se guarda
        if v <= 0:
            raise ValueError("unitPrice must be greater than 0")
        return v


class OrderForm(BaseModel):
    """
    Formulario de creación de pedidos.

    ``items`` llega como un array JSON serializado en un único campo del
    formulario; también se acepta ya deserializado.
    """
    model_config = ConfigDict(populate_by_name=True, validate_default=True, str_strip_whitespace=True)

    client_id: str = Field("", alias="clientId")
    restaurant_id: str = Field("", alias="restaurantId")
    items: List[ItemForm] = Field(default_factory=list, alias="items")

    @field_validator("client_id", "restaurant_id")
    @classmethod
    def validate_required(cls, v):
        if not v:
            raise ValueError("This field is required.")
        return v

    @field_validator("items", mode="before")
    @classmethod
    def parse_items(cls, value):
        """Permite que items se reciba como un string JSON y lo parsea."""
        if value is None or value == "":
            return []
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError:
                raise ValueError("items must be a JSON array")
        if not isinstance(value, list):
            raise ValueError("items must be a JSON array")
        return value

    @field_validator("items")
    @classmethod
    def validate_items(cls, v):
        if not v:
            raise ValueError("The order must have at least one item.")
        return v


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class ItemResponse(BaseModel):
    id: int
    quantity: int
    description: str
    unit_price: Decimal
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderSummary(BaseModel):
    """Fila del listado de pedidos."""
    id: str
    status: OrderStatus
    created_at: datetime
    completed_at: Optional[datetime] = None
    client_id: str
    client_name: str
    restaurant_id: str
    restaurant_name: str

    model_config = ConfigDict(from_attributes=True)


class OrderDetail(BaseModel):
    """Pedido completo con cliente, restaurante, líneas y total."""
    id: str
    status: OrderStatus
    created_at: datetime
    completed_at: Optional[datetime] = None
    client: ClientResponse
    restaurant: RestaurantResponse
    items: List[ItemResponse] = []
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderListPage(BaseModel):
    orders: List[OrderSummary]
    search: str = ""
    sort: str
    status: Optional[OrderStatus] = None
    flash: Optional[FlashMessage] = None


class SelectOption(BaseModel):
    """Opción de un desplegable (cliente o restaurante)."""
    id: str
    name: str


class OrderFormPage(BaseModel):
    clients: List[SelectOption]
    restaurants: List[SelectOption]
    flash: Optional[FlashMessage] = None


class OrderDetailPage(BaseModel):
    order: OrderDetail
    # Estados a los que se puede avanzar desde el actual
    allowed_statuses: List[OrderStatus]
    flash: Optional[FlashMessage] = None
