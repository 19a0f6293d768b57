# backend/app/crud/order_crud.py
"""
Este archivo contiene las operaciones CRUD para los modelos Order e Item.

Este módulo proporciona funciones para crear y consultar pedidos, actualizar
su estado con una escritura condicional y borrar en bloque los pedidos (y sus
líneas) de un cliente o restaurante. Las funciones de borrado no confirman la
transacción: lo hace quien orquesta la cascada.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from app.db.models.client_model import Client
from app.db.models.restaurant_model import Restaurant
from app.db.models.order_model import Order, Item, OrderStatus
from app.crud.search import LIKE_ESCAPE, contains_pattern
from app.schemas.order_schema import OrderForm

SORT_ORDERINGS = {
    "createdAt": (Order.created_at.desc(),),
    "status": (Order.status.asc(), Order.created_at.desc()),
}
DEFAULT_SORT = "createdAt"


async def create_order(db: AsyncSession, order_in: OrderForm) -> Order:
    """
    Crea un nuevo pedido con todas sus líneas en una única transacción.
    """
    db_order = Order(
        client_id=order_in.client_id,
        restaurant_id=order_in.restaurant_id,
        status=OrderStatus.PENDING,
    )
    db.add(db_order)
    await db.flush()  # Necesitamos el ID del pedido para las líneas

    for position, item_data in enumerate(order_in.items):
        db.add(
            Item(
                order_id=db_order.id,
                position=position,
                quantity=item_data.quantity,
                description=item_data.description,
                unit_price=item_data.unit_price,
            )
        )

    await db.commit()
    return await get_order(db, db_order.id)


async def get_order(db: AsyncSession, order_id: str) -> Optional[Order]:
    """
    Obtiene un pedido por su ID con cliente, restaurante y líneas precargados.
    """
    result = await db.execute(
        select(Order)
        .options(
            selectinload(Order.client),
            selectinload(Order.restaurant),
            selectinload(Order.items),
        )
        .filter(Order.id == order_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_order_status(db: AsyncSession, order_id: str) -> Optional[OrderStatus]:
    """Lee solo el estado actual de un pedido (None si no existe)."""
    result = await db.execute(select(Order.status).filter(Order.id == order_id))
    return result.scalar()


async def get_orders(
    db: AsyncSession,
    search: str = "",
    sort: str = DEFAULT_SORT,
    status: Optional[OrderStatus] = None,
) -> List[Order]:
    """
    Lista los pedidos filtrando por estado y por nombre de cliente o restaurante.
    """
    query = (
        select(Order)
        .join(Order.client)
        .join(Order.restaurant)
        .options(selectinload(Order.client), selectinload(Order.restaurant))
    )
    if status is not None:
        query = query.filter(Order.status == status)
    if search:
        pattern = contains_pattern(search)
        query = query.filter(
            or_(
                Client.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                Client.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                Restaurant.name.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    ordering = SORT_ORDERINGS.get(sort, SORT_ORDERINGS[DEFAULT_SORT])
    result = await db.execute(query.order_by(*ordering, Order.id))
    return result.scalars().all()


async def update_order_status(
    db: AsyncSession,
    order_id: str,
    current: OrderStatus,
    new_status: OrderStatus,
    completed_at: Optional[datetime],
) -> bool:
    """
    Cambia el estado solo si el pedido sigue en ``current``.

    La condición sobre el estado hace que dos peticiones concurrentes se
    serialicen en la fila: la segunda no encuentra filas que actualizar.

    Returns:
        True si se actualizó la fila, False si el estado ya había cambiado
    """
    result = await db.execute(
        update(Order)
        .where(Order.id == order_id, Order.status == current)
        .values(status=new_status, completed_at=completed_at)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount == 1


async def delete_orders_where(db: AsyncSession, condition: ColumnElement) -> Tuple[int, int]:
    """
    Borra las líneas y después los pedidos que cumplen ``condition``.

    No hace commit: forma parte de la transacción del borrado en cascada.

    Returns:
        (pedidos borrados, líneas borradas)
    """
    order_ids = select(Order.id).where(condition)

    items_result = await db.execute(
        delete(Item).where(Item.order_id.in_(order_ids)).execution_options(synchronize_session=False)
    )
    orders_result = await db.execute(
        delete(Order).where(condition).execution_options(synchronize_session=False)
    )
    return orders_result.rowcount, items_result.rowcount

