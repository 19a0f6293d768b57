# backend/app/db/models/order_model.py
"""
Este archivo contiene el modelo de pedido para la aplicación.
"""

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Column, Integer, String, DateTime, Numeric, ForeignKey, Text, Enum
)
from sqlalchemy.orm import relationship

from app.db.database import Base
# Registra Client y Restaurant antes de configurar las relaciones
from app.db.models import client_model, restaurant_model  # noqa: F401


class OrderStatus(str, enum.Enum):
    """Define los posibles estados de una orden."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    # Sin ON DELETE CASCADE: la BD rechaza borrar un padre con hijos vivos
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    restaurant_id = Column(String(36), ForeignKey("restaurants.id"), nullable=False, index=True)
    status = Column(
        Enum(OrderStatus, name="order_status_enum", native_enum=False, length=20),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    # Solo tiene valor cuando status == COMPLETED
    completed_at = Column(DateTime(timezone=True), nullable=True)

    items = relationship("Item", back_populates="order", passive_deletes="all", order_by="Item.position")
    client = relationship("Client", back_populates="orders")
    restaurant = relationship("Restaurant", back_populates="orders")

    @property
    def client_name(self) -> str:
        return self.client.full_name

    @property
    def restaurant_name(self) -> str:
        return self.restaurant.name

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0.00"))

    def __repr__(self):
        return f"<Order(id={self.id}, client_id='{self.client_id}', status='{self.status}')>"


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    # Posición dentro del pedido, para conservar el orden del formulario
    position = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")

    @property
    def line_total(self) -> Decimal:
        return Decimal(self.quantity) * Decimal(self.unit_price)

    def __repr__(self):
        return f"<Item(id={self.id}, order_id={self.order_id}, description='{self.description}')>"
