# backend/app/services/cascade_service.py
"""
Servicio de borrado en cascada de clientes y restaurantes.

La base de datos no borra en cascada y rechaza eliminar un padre con hijos
vivos, así que el orden es obligatorio: primero las líneas de los pedidos,
después los pedidos y por último el propio cliente o restaurante. Los tres
pasos forman una única transacción: o se confirman todos o ninguno.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DeleteFailedError, NotFoundError
from app.crud import client_crud, order_crud, restaurant_crud
from app.crud.identifiers import ensure_valid_id
from app.db.models.client_model import Client
from app.db.models.order_model import Order
from app.db.models.restaurant_model import Restaurant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CascadeResult:
    """Resumen de lo eliminado por un borrado en cascada."""
    record_id: str
    orders_deleted: int
    items_deleted: int


class CascadeDeletionService:
    """
    Orquesta el borrado en cascada dentro de una transacción.
    """

    async def delete_client(self, db: AsyncSession, client_id: object) -> CascadeResult:
        """
        Elimina un cliente junto con sus pedidos y las líneas de esos pedidos.

        Raises:
            InvalidIdError: si el ID no tiene formato válido
            NotFoundError: si el cliente no existe
            DeleteFailedError: si algún paso falla (todo se revierte)
        """
        client_id = ensure_valid_id(client_id, "Client")
        if await client_crud.get_client(db, client_id) is None:
            raise NotFoundError("Client", client_id)

        return await self._cascade(
            db,
            entity="Client",
            record_id=client_id,
            orders_condition=Order.client_id == client_id,
            parent_delete=delete(Client).where(Client.id == client_id),
        )

    async def delete_restaurant(self, db: AsyncSession, restaurant_id: object) -> CascadeResult:
        """
        Elimina un restaurante junto con sus pedidos y las líneas de esos pedidos.
        """
        restaurant_id = ensure_valid_id(restaurant_id, "Restaurant")
        if await restaurant_crud.get_restaurant(db, restaurant_id) is None:
            raise NotFoundError("Restaurant", restaurant_id)

        return await self._cascade(
            db,
            entity="Restaurant",
            record_id=restaurant_id,
            orders_condition=Order.restaurant_id == restaurant_id,
            parent_delete=delete(Restaurant).where(Restaurant.id == restaurant_id),
        )

    async def _cascade(self, db: AsyncSession, entity: str, record_id: str, orders_condition, parent_delete) -> CascadeResult:
        try:
            orders_deleted, items_deleted = await order_crud.delete_orders_where(db, orders_condition)
            result = await db.execute(parent_delete.execution_options(synchronize_session=False))
            if result.rowcount != 1:
                # Alguien lo borró entre la comprobación y el borrado
                await db.rollback()
                raise NotFoundError(entity, record_id)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"Error borrando {entity.lower()} {record_id}; cascada revertida", exc_info=True)
            raise DeleteFailedError(entity, record_id)

        # Los objetos que quedaran en la sesión ya no existen en la BD
        db.expunge_all()
        logger.info(
            f"{entity} {record_id} eliminado junto con {orders_deleted} pedidos y {items_deleted} líneas"
        )
        return CascadeResult(record_id=record_id, orders_deleted=orders_deleted, items_deleted=items_deleted)


# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

cascade_deletion_service = CascadeDeletionService()
