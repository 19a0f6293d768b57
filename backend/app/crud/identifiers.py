# backend/app/crud/identifiers.py
"""
Comprobación del formato de los identificadores de registro.
"""

import uuid

from app.core.exceptions import InvalidIdError


def is_valid_id(value: object) -> bool:
    """True si ``value`` es un UUID en forma de texto."""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        uuid.UUID(value.strip())
    except ValueError:
        return False
    return True


def ensure_valid_id(value: object, entity: str) -> str:
    """Devuelve el identificador normalizado o lanza InvalidIdError."""
    if not is_valid_id(value):
        raise InvalidIdError(entity, value)
    return str(uuid.UUID(value.strip()))
