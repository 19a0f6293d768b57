# backend/app/services/order_lifecycle.py
"""
Servicio del ciclo de vida de los pedidos.

El estado de un pedido solo avanza: PENDING -> IN_PROGRESS -> COMPLETED, con
la posibilidad de completar directamente un pedido pendiente. COMPLETED es un
estado terminal. Cada transición válida se persiste con una escritura
condicional sobre la fila, de modo que completed_at solo tiene valor cuando el
estado es COMPLETED.
"""

import logging
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidStatusError, InvalidTransitionError, NotFoundError
from app.crud import order_crud
from app.crud.identifiers import ensure_valid_id
from app.db.models.order_model import Order, OrderStatus, utcnow

logger = logging.getLogger(__name__)

# Tabla de transiciones: estado actual -> estados alcanzables
ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
}


def parse_status(value: object) -> OrderStatus:
    """Convierte el texto recibido en un OrderStatus o lanza InvalidStatusError."""
    if isinstance(value, OrderStatus):
        return value
    if not isinstance(value, str):
        raise InvalidStatusError(value)
    try:
        return OrderStatus(value.strip())
    except ValueError:
        raise InvalidStatusError(value)


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS[current]


def next_statuses(current: OrderStatus) -> List[OrderStatus]:
    """Estados alcanzables desde ``current``, en el orden del flujo."""
    return [status for status in OrderStatus if status in ALLOWED_TRANSITIONS[current]]


class OrderLifecycleService:
    """
    Aplica la tabla de transiciones y sella completed_at.
    """

    async def transition(self, db: AsyncSession, order_id: str, requested_status: object) -> Order:
        """
        Avanza el estado de un pedido.

        Args:
            db: Sesión de SQLAlchemy
            order_id: ID del pedido
            requested_status: Estado solicitado (texto del formulario u OrderStatus)

        Returns:
            El pedido actualizado, con sus relaciones cargadas

        Raises:
            InvalidIdError: si el ID no tiene formato válido
            InvalidStatusError: si el estado no es uno de los tres conocidos
            NotFoundError: si el pedido no existe
            InvalidTransitionError: si la tabla no permite el cambio (incluye
                repetir el mismo estado o retroceder)
        """
        order_id = ensure_valid_id(order_id, "Order")
        requested = parse_status(requested_status)

        current: Optional[OrderStatus] = await order_crud.get_order_status(db, order_id)
        if current is None:
            raise NotFoundError("Order", order_id)

        if not can_transition(current, requested):
            logger.warning(f"Transición rechazada para el pedido {order_id}: {current.value} -> {requested.value}")
            raise InvalidTransitionError(current.value, requested.value)

        completed_at = utcnow() if requested == OrderStatus.COMPLETED else None
        updated = await order_crud.update_order_status(db, order_id, current, requested, completed_at)

        if not updated:
            # Otra petición cambió el estado entre la lectura y la escritura
            latest = await order_crud.get_order_status(db, order_id)
            if latest is None:
                raise NotFoundError("Order", order_id)
            logger.warning(f"Transición concurrente en el pedido {order_id}: ahora está en {latest.value}")
            raise InvalidTransitionError(latest.value, requested.value)

        logger.info(f"Pedido {order_id}: {current.value} -> {requested.value}")
        return await order_crud.get_order(db, order_id)


# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

order_lifecycle_service = OrderLifecycleService()
