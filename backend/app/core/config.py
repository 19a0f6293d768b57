# backend/app/core/config.py
"""
Configuración de la aplicación, leída de variables de entorno y de .env.
"""

from pydantic_settings import BaseSettings
from typing import Optional
import os


class Settings(BaseSettings):
    """
    Configuración de RestaurantFlow.

    Todo tiene un valor por defecto usable en desarrollo; en despliegue se
    sobrescribe con variables de entorno (sin distinguir mayúsculas).
    """
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "RestaurantFlow API"
    PROJECT_VERSION: str = "0.1.0"

    # PostgreSQL (driver asyncpg)
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "postgres")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "restaurantflow_db")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")

    # URL completa alternativa, p. ej. sqlite+aiosqlite:// en tests
    SQLALCHEMY_DATABASE_URI: Optional[str] = None
    SQL_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = False

    @property
    def DATABASE_URL(self) -> str:
        """URL de conexión asíncrona: la alternativa si existe, si no PostgreSQL."""
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # Región ISO para interpretar teléfonos escritos sin prefijo internacional
    PHONE_DEFAULT_REGION: str = "US"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    APP_ENVIRONMENT: str = "development"

    # Servidor uvicorn al ejecutar ``python -m app.main``
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

# Instancia global de la configuración
settings = Settings()
