# backend/app/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación FastAPI completa,
incluyendo la configuración de rutas, el manejo global de errores del
almacén y los eventos del ciclo de vida de la aplicación.
"""

import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, settings  # Configuración centralizada de la aplicación
from app.core.logging_config import setup_logging
from app.api import deps
from app.api.v1.api_router import api_router_v1  # Router principal de la API v1

logger = logging.getLogger(__name__)

# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="API para la gestión de clientes, restaurantes y pedidos de RestaurantFlow"
)

# ========================================
# REGISTRO DE ROUTERS DE LA API
# ========================================

app.include_router(api_router_v1, prefix=settings.API_V1_STR)


# ========================================
# MANEJO GLOBAL DE ERRORES
# ========================================

# Los errores esperados se convierten en avisos dentro de cada endpoint;
# aquí solo llegan los fallos inesperados del almacén.
@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Error inesperado de base de datos en {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred. Please try again later."},
    )


# ========================================
# ENDPOINTS RAÍZ Y VERIFICACIÓN DE ESTADO
# ========================================

@app.get("/", tags=["Root"])
async def read_root(request: Request, app_settings: Settings = Depends(deps.get_settings)):
    """
    Página de inicio: nombre y versión de la API y enlaces a cada sección.

    Returns:
        dict: Mensaje de bienvenida y URLs de clientes, restaurantes y pedidos
    """
    return {
        "message": f"Bienvenido a {app_settings.PROJECT_NAME} v{app_settings.PROJECT_VERSION}",
        "sections": {
            "clients": str(request.url_for("list_clients")),
            "restaurants": str(request.url_for("list_restaurants")),
            "orders": str(request.url_for("list_orders")),
        },
    }

# ========================================
# EVENTOS DEL CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@app.on_event("startup")
async def startup_event():
    """
    Evento ejecutado al iniciar la aplicación.

    Configura el logging y, si CREATE_TABLES_ON_STARTUP está activo, crea las
    tablas que falten (útil con SQLite en desarrollo).
    """
    setup_logging(settings)

    if settings.CREATE_TABLES_ON_STARTUP:
        from app.db.database import create_tables

        await create_tables()
        logger.info("Tablas de la base de datos verificadas")

    logger.info(f"{settings.PROJECT_NAME} v{settings.PROJECT_VERSION} iniciada ({settings.APP_ENVIRONMENT})")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
