# backend/app/schemas/flash_schema.py
"""
Esquema del mensaje flash que acompaña a la siguiente página mostrada.
"""

from typing import Literal
from pydantic import BaseModel


class FlashMessage(BaseModel):
    """Aviso de un solo uso: éxito o error de la última acción."""
    kind: Literal["success", "error"]
    text: str
