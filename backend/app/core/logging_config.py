# backend/app/core/logging_config.py
"""
Configuración del logging de la aplicación.

Cada módulo obtiene su propio logger con ``logging.getLogger(__name__)``;
aquí solo se fija el nivel y el formato comunes a partir de settings.
"""

import logging
from typing import Optional

from app.core.config import Settings, settings as default_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Aplica LOG_LEVEL y LOG_FORMAT al logger raíz."""
    settings = settings or default_settings
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(level=level, format=settings.LOG_FORMAT, force=True)

    # El eco de SQL solo interesa cuando se pide explícitamente
    if not settings.SQL_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
