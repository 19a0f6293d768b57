# backend/app/crud/client_crud.py
"""
Este archivo contiene las operaciones CRUD para el modelo Client.

Este módulo proporciona funciones para crear, buscar, listar y actualizar
clientes en la base de datos. El borrado en cascada vive en cascade_service.
"""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from app.db.models.client_model import Client
from app.db.models import order_model  # noqa: F401  (registra la relación Client.orders)
from app.crud.search import LIKE_ESCAPE, contains_pattern
from app.schemas.client_schema import ClientForm

# Columnas por las que se puede ordenar el listado (nombre del parámetro -> columna)
SORT_COLUMNS = {
    "firstName": Client.first_name,
    "lastName": Client.last_name,
    "address": Client.address,
}
DEFAULT_SORT = "firstName"


async def get_client(db: AsyncSession, client_id: str) -> Optional[Client]:
    """
    Obtiene un cliente por su ID de forma asíncrona.
    """
    result = await db.execute(select(Client).filter(Client.id == client_id))
    return result.scalars().first()


async def get_clients(db: AsyncSession, search: str = "", sort: str = DEFAULT_SORT) -> List[Client]:
    """
    Lista los clientes filtrando por nombre, apellido o dirección (sin distinguir
    mayúsculas) y ordenando de forma ascendente por la columna indicada.
    """
    query = select(Client)
    if search:
        pattern = contains_pattern(search)
        query = query.filter(
            or_(
                Client.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                Client.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                Client.address.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    column = SORT_COLUMNS.get(sort, SORT_COLUMNS[DEFAULT_SORT])
    result = await db.execute(query.order_by(column.asc(), Client.id))
    return result.scalars().all()


async def create_client(db: AsyncSession, client_in: ClientForm) -> Client:
    """
    Crea un nuevo cliente en la base de datos de forma asíncrona.
    El ID (UUID) se genera en el modelo.
    """
    db_client = Client(
        first_name=client_in.first_name,
        last_name=client_in.last_name,
        phone=client_in.phone,
        address=client_in.address,
    )
    db.add(db_client)
    await db.commit()
    await db.refresh(db_client)
    return db_client


async def update_client(db: AsyncSession, db_client: Client, client_in: ClientForm) -> Client:
    """
    Sobrescribe los campos editables de un cliente existente.
    """
    for key, value in client_in.model_dump().items():
        setattr(db_client, key, value)

    db.add(db_client)  # Marca el objeto como modificado
    await db.commit()
    await db.refresh(db_client)
    return db_client
