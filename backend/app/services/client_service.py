# backend/app/services/client_service.py
"""
Servicio para operaciones de negocio relacionadas con clientes.

Valida los formularios de alta y edición (campos obligatorios y teléfono
normalizado) antes de escribir a través de la capa CRUD. El borrado se
delega en el servicio de cascada.
"""

import logging
from typing import Any, List, Mapping, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import NotFoundError
from app.crud import client_crud
from app.crud.identifiers import ensure_valid_id
from app.db.models.client_model import Client
from app.schemas.client_schema import ClientForm
from app.services.cascade_service import CascadeResult, cascade_deletion_service
from app.services.form_parsing import FormResult, parse_form

logger = logging.getLogger(__name__)


class ClientService:
    """
    Servicio para operaciones de negocio relacionadas con clientes.
    """

    def __init__(self, settings: Settings = default_settings):
        self.settings = settings

    def _context(self) -> dict:
        return {"phone_region": self.settings.PHONE_DEFAULT_REGION}

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def list_clients(self, db: AsyncSession, search: str = "", sort: str = client_crud.DEFAULT_SORT) -> Tuple[List[Client], str]:
        """
        Lista clientes con búsqueda y orden.

        Returns:
            (clientes, orden aplicado). Un orden desconocido cae en el de por defecto.
        """
        if sort not in client_crud.SORT_COLUMNS:
            sort = client_crud.DEFAULT_SORT
        clients = await client_crud.get_clients(db, search=search.strip(), sort=sort)
        return clients, sort

    async def get_client(self, db: AsyncSession, client_id: object) -> Client:
        """
        Obtiene un cliente o lanza InvalidIdError / NotFoundError.
        """
        client_id = ensure_valid_id(client_id, "Client")
        client = await client_crud.get_client(db, client_id)
        if client is None:
            raise NotFoundError("Client", client_id)
        return client

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create_client(self, db: AsyncSession, data: Mapping[str, Any]) -> FormResult[Client]:
        """
        Crea un cliente a partir de los datos del formulario.

        Los errores de validación se devuelven en el FormResult; los errores
        del almacén se propagan tras revertir la sesión.
        """
        parsed = parse_form(ClientForm, data, context=self._context())
        if not parsed.ok:
            logger.warning(f"Alta de cliente rechazada: {parsed.error.message}")
            return FormResult(error=parsed.error)

        try:
            client = await client_crud.create_client(db, parsed.value)
        except SQLAlchemyError:
            await db.rollback()
            logger.error("Error al crear el cliente", exc_info=True)
            raise

        logger.info(f"Cliente {client.id} creado")
        return FormResult(value=client)

    async def update_client(self, db: AsyncSession, client_id: object, data: Mapping[str, Any]) -> FormResult[Client]:
        """
        Actualiza un cliente existente con las mismas reglas que el alta.

        Raises:
            InvalidIdError / NotFoundError: si el cliente no puede localizarse
        """
        client = await self.get_client(db, client_id)
        client_id = client.id

        parsed = parse_form(ClientForm, data, context=self._context())
        if not parsed.ok:
            logger.warning(f"Edición del cliente {client_id} rechazada: {parsed.error.message}")
            return FormResult(error=parsed.error)

        try:
            client = await client_crud.update_client(db, client, parsed.value)
        except SQLAlchemyError:
            await db.rollback()
            logger.error(f"Error al actualizar el cliente {client_id}", exc_info=True)
            raise

        logger.info(f"Cliente {client_id} actualizado")
        return FormResult(value=client)

    async def delete_client(self, db: AsyncSession, client_id: object) -> CascadeResult:
        """Elimina el cliente y, en cascada, sus pedidos y líneas."""
        return await cascade_deletion_service.delete_client(db, client_id)


# Instancia única del servicio para uso en endpoints
client_service = ClientService()
