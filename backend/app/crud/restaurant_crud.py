# backend/app/crud/restaurant_crud.py
"""
Operaciones CRUD para el modelo Restaurant.
"""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from app.db.models.restaurant_model import Restaurant
from app.db.models import order_model  # noqa: F401  (registra la relación Restaurant.orders)
from app.crud.search import LIKE_ESCAPE, contains_pattern
from app.schemas.restaurant_schema import RestaurantForm

SORT_COLUMNS = {
    "name": Restaurant.name,
    "address": Restaurant.address,
}
DEFAULT_SORT = "name"


async def get_restaurant(db: AsyncSession, restaurant_id: str) -> Optional[Restaurant]:
    """Obtiene un restaurante por su ID de forma asíncrona."""
    result = await db.execute(select(Restaurant).filter(Restaurant.id == restaurant_id))
    return result.scalars().first()


async def get_restaurants(db: AsyncSession, search: str = "", sort: str = DEFAULT_SORT) -> List[Restaurant]:
    """Lista los restaurantes filtrando por nombre o dirección."""
    query = select(Restaurant)
    if search:
        pattern = contains_pattern(search)
        query = query.filter(
            or_(
                Restaurant.name.ilike(pattern, escape=LIKE_ESCAPE),
                Restaurant.address.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    column = SORT_COLUMNS.get(sort, SORT_COLUMNS[DEFAULT_SORT])
    result = await db.execute(query.order_by(column.asc(), Restaurant.id))
    return result.scalars().all()


async def create_restaurant(db: AsyncSession, restaurant_in: RestaurantForm) -> Restaurant:
    """Crea un nuevo restaurante de forma asíncrona."""
    db_restaurant = Restaurant(
        name=restaurant_in.name,
        phone=restaurant_in.phone,
        address=restaurant_in.address,
    )
    db.add(db_restaurant)
    await db.commit()
    await db.refresh(db_restaurant)
    return db_restaurant


async def update_restaurant(db: AsyncSession, db_restaurant: Restaurant, restaurant_in: RestaurantForm) -> Restaurant:
    """Sobrescribe los campos editables de un restaurante existente."""
    for key, value in restaurant_in.model_dump().items():
        setattr(db_restaurant, key, value)

    db.add(db_restaurant)
    await db.commit()
    await db.refresh(db_restaurant)
    return db_restaurant
