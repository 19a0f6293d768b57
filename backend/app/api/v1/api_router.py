# backend/app/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from app.api.v1.endpoints import (
    clients,
    restaurants,
    orders,
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# ROUTER DE CLIENTES
# Listado con búsqueda, alta, edición y borrado en cascada
api_router_v1.include_router(
    clients.router,
    prefix="/clients",              # Prefijo: /api/v1/clients
    tags=["Clients"]
)

# ROUTER DE RESTAURANTES
api_router_v1.include_router(
    restaurants.router,
    prefix="/restaurants",
    tags=["Restaurants"]
)

# ROUTER DE PEDIDOS
# Alta con líneas, detalle y flujo de estados
api_router_v1.include_router(
    orders.router,
    prefix="/orders",
    tags=["Orders"]
)
