# backend/app/services/restaurant_service.py
"""
Servicio para operaciones de negocio relacionadas con restaurantes.
"""

import logging
from typing import Any, List, Mapping, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import NotFoundError
from app.crud import restaurant_crud
from app.crud.identifiers import ensure_valid_id
from app.db.models.restaurant_model import Restaurant
from app.schemas.restaurant_schema import RestaurantForm
from app.services.cascade_service import CascadeResult, cascade_deletion_service
from app.services.form_parsing import FormResult, parse_form

logger = logging.getLogger(__name__)


class RestaurantService:
    """
    Mismas reglas que ClientService: campos obligatorios, teléfono
    normalizado y borrado en cascada.
    """

    def __init__(self, settings: Settings = default_settings):
        self.settings = settings

    def _context(self) -> dict:
        return {"phone_region": self.settings.PHONE_DEFAULT_REGION}

    async def list_restaurants(self, db: AsyncSession, search: str = "", sort: str = restaurant_crud.DEFAULT_SORT) -> Tuple[List[Restaurant], str]:
        if sort not in restaurant_crud.SORT_COLUMNS:
            sort = restaurant_crud.DEFAULT_SORT
        restaurants = await restaurant_crud.get_restaurants(db, search=search.strip(), sort=sort)
        return restaurants, sort

    async def get_restaurant(self, db: AsyncSession, restaurant_id: object) -> Restaurant:
        restaurant_id = ensure_valid_id(restaurant_id, "Restaurant")
        restaurant = await restaurant_crud.get_restaurant(db, restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant", restaurant_id)
        return restaurant

    async def create_restaurant(self, db: AsyncSession, data: Mapping[str, Any]) -> FormResult[Restaurant]:
        """Crea un restaurante a partir de los datos del formulario."""
        parsed = parse_form(RestaurantForm, data, context=self._context())
        if not parsed.ok:
            logger.warning(f"Alta de restaurante rechazada: {parsed.error.message}")
            return FormResult(error=parsed.error)

        try:
            restaurant = await restaurant_crud.create_restaurant(db, parsed.value)
        except SQLAlchemyError:
            await db.rollback()
            logger.error("Error al crear el restaurante", exc_info=True)
            raise

        logger.info(f"Restaurante {restaurant.id} creado")
        return FormResult(value=restaurant)

    async def update_restaurant(self, db: AsyncSession, restaurant_id: object, data: Mapping[str, Any]) -> FormResult[Restaurant]:
        restaurant = await self.get_restaurant(db, restaurant_id)
        restaurant_id = restaurant.id

        parsed = parse_form(RestaurantForm, data, context=self._context())
        if not parsed.ok:
            logger.warning(f"Edición del restaurante {restaurant_id} rechazada: {parsed.error.message}")
            return FormResult(error=parsed.error)

        try:
            restaurant = await restaurant_crud.update_restaurant(db, restaurant, parsed.value)
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"Error al actualizar el restaurante {restaurant_id}", exc_info=True)
            raise

        logger.info(f"Restaurante {restaurant_id} actualizado")
        return FormResult(value=restaurant)

    async def delete_restaurant(self, db: AsyncSession, restaurant_id: object) -> CascadeResult:
        return await cascade_deletion_service.delete_restaurant(db, restaurant_id)


restaurant_service = RestaurantService()
