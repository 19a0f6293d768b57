# backend/app/api/flash.py
"""
Mensajes flash transportados en la redirección.

Una acción de formulario termina con un 303 cuya URL lleva el aviso en la
query (``?success=...`` o ``?error=...``). El loader de la página destino lo
lee una sola vez y lo devuelve junto a sus datos; al navegar a otra URL el
aviso desaparece. No se guarda nada en el servidor ni en cookies.
"""

from typing import Optional

from fastapi import Request, status
from fastapi.responses import RedirectResponse

from app.schemas.flash_schema import FlashMessage


def read_flash(request: Request) -> Optional[FlashMessage]:
    """Extrae el aviso de la query string, si lo hay (el error tiene prioridad)."""
    error = request.query_params.get("error")
    if error:
        return FlashMessage(kind="error", text=error)
    success = request.query_params.get("success")
    if success:
        return FlashMessage(kind="success", text=success)
    return None


def redirect_with_flash(request: Request, route_name: str, kind: str, text: str, **path_params) -> RedirectResponse:
    """
    Redirige (303 See Other) a la ruta ``route_name`` adjuntando el aviso.

    Args:
        request: Petición en curso, para construir la URL absoluta
        route_name: Nombre de la ruta destino (p. ej. "list_clients")
        kind: "success" o "error"
        text: Texto que verá el usuario
        **path_params: Parámetros de ruta de la URL destino
    """
    url = request.url_for(route_name, **path_params).include_query_params(**{kind: text})
    return RedirectResponse(url=str(url), status_code=status.HTTP_303_SEE_OTHER)
