# backend/app/services/order_service.py
"""
Servicio para operaciones de negocio relacionadas con pedidos.

Se encarga del alta de pedidos (cliente y restaurante existentes y al menos
una línea válida), del listado con filtros y del detalle. Los cambios de
estado viven en order_lifecycle.
"""

import logging
from typing import Any, List, Mapping, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.crud import client_crud, order_crud, restaurant_crud
from app.crud.identifiers import ensure_valid_id, is_valid_id
from app.db.models.order_model import Order, OrderStatus
from app.schemas.order_schema import OrderForm, SelectOption
from app.services.form_parsing import FormResult, parse_form
from app.services.order_lifecycle import parse_status

logger = logging.getLogger(__name__)


class OrderService:
    """
    Servicio para operaciones de negocio relacionadas con pedidos.
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def list_orders(
        self,
        db: AsyncSession,
        search: str = "",
        sort: str = order_crud.DEFAULT_SORT,
        status: Optional[str] = None,
    ) -> Tuple[List[Order], str, Optional[OrderStatus]]:
        """
        Lista pedidos con búsqueda, orden y filtro de estado.

        Un orden desconocido cae en el de por defecto (más recientes primero).

        Raises:
            InvalidStatusError: si el filtro de estado no es un estado conocido
        """
        status_filter = parse_status(status) if status else None
        if sort not in order_crud.SORT_ORDERINGS:
            sort = order_crud.DEFAULT_SORT
        orders = await order_crud.get_orders(db, search=search.strip(), sort=sort, status=status_filter)
        return orders, sort, status_filter

    async def get_order(self, db: AsyncSession, order_id: object) -> Order:
        """Obtiene un pedido con todas sus relaciones o lanza NotFoundError."""
        order_id = ensure_valid_id(order_id, "Order")
        order = await order_crud.get_order(db, order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    async def get_form_options(self, db: AsyncSession) -> Tuple[List[SelectOption], List[SelectOption]]:
        """Clientes y restaurantes para los desplegables del formulario de alta."""
        clients = await client_crud.get_clients(db)
        restaurants = await restaurant_crud.get_restaurants(db)
        return (
            [SelectOption(id=c.id, name=c.full_name) for c in clients],
            [SelectOption(id=r.id, name=r.name) for r in restaurants],
        )

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create_order(self, db: AsyncSession, data: Mapping[str, Any]) -> FormResult[Order]:
        """
        Crea un pedido PENDING con sus líneas.

        Valida el formulario y comprueba que el cliente y el restaurante
        existen. Si algo falla no se persiste nada.
        """
        parsed = parse_form(OrderForm, data)
        if not parsed.ok:
            logger.warning(f"Alta de pedido rechazada: {parsed.error.message}")
            return FormResult(error=parsed.error)

        order_in = parsed.value
        reference_error = await self._check_references(db, order_in)
        if reference_error is not None:
            logger.warning(f"Alta de pedido rechazada: {reference_error.message}")
            return FormResult(error=reference_error)

        try:
            order = await order_crud.create_order(db, order_in)
        except SQLAlchemyError:
            await db.rollback()
            logger.error("Error al crear el pedido", exc_info=True)
            raise

        logger.info(f"Pedido {order.id} creado con {len(order.items)} líneas")
        return FormResult(value=order)

    async def _check_references(self, db: AsyncSession, order_in: OrderForm) -> Optional[ValidationError]:
        errors: List[str] = []
        fields: List[str] = []

        if not is_valid_id(order_in.client_id) or await client_crud.get_client(db, order_in.client_id) is None:
            errors.append("clientId: Client not found.")
            fields.append("clientId")
        if not is_valid_id(order_in.restaurant_id) or await restaurant_crud.get_restaurant(db, order_in.restaurant_id) is None:
            errors.append("restaurantId: Restaurant not found.")
            fields.append("restaurantId")

        if errors:
            return ValidationError(errors, fields=fields)
        return None


order_service = OrderService()
