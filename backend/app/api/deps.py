# backend/app/api/deps.py
"""
Dependencias inyectables en los endpoints.

En los tests se sustituye get_db mediante ``app.dependency_overrides`` para
trabajar contra una base de datos en memoria.
"""

from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import Settings, settings
from app.db.database import AsyncSessionLocal


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Sesión de base de datos para una petición; se cierra al terminar.
    Las transacciones las confirman o revierten los servicios.
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_settings() -> Settings:
    """Configuración global, inyectable (y sustituible en tests)."""
    return settings
