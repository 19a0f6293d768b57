# backend/app/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo establece la conexión con la base de datos usando SQLAlchemy y define
los componentes básicos que serán utilizados por toda la aplicación:
- Motor de base de datos (engine)
- Fábrica de sesiones (AsyncSessionLocal)
- Clase base para modelos (Base)

La dependencia get_db() vive en app/api/deps.py para mantener las dependencias
de FastAPI separadas de la configuración.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from app.core.config import settings # Importamos nuestra configuración


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Activa PRAGMA foreign_keys en cada conexión SQLite.

    SQLite no comprueba las claves foráneas por defecto; sin esto el borrado
    de un cliente con pedidos vivos no fallaría como en PostgreSQL.
    """
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Crea el motor asíncrono adecuado para la URL indicada."""
    if url.startswith("sqlite"):
        # Una única conexión compartida para que la BD en memoria sobreviva
        engine = create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        enable_sqlite_foreign_keys(engine)
        return engine
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


# Crear el motor de base de datos asíncrono
engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

# Crear un sessionmaker asíncrono
# expire_on_commit=False es importante para que los objetos sigan siendo utilizables
# después de que la transacción se haya confirmado.
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Clase base declarativa para todos los modelos ORM
Base = declarative_base()


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Crea las tablas que aún no existen (útil en desarrollo y en tests)."""
    # Los modelos deben estar importados para registrarse en Base.metadata
    from app.db.models import client_model, restaurant_model, order_model  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
