# backend/app/core/exceptions.py
"""
Excepciones de dominio de la aplicación.

Los servicios lanzan estas excepciones y los endpoints las convierten en
mensajes flash (acciones de formulario) o en HTTPException (loaders).
Los errores inesperados del almacén (SQLAlchemyError) no se envuelven aquí:
los captura el manejador global definido en main.py.
"""

from typing import List, Optional


class DomainError(Exception):
    """Clase base de todos los errores esperados del dominio."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """
    Datos de entrada incorrectos o incompletos, corregibles por el usuario.

    Attributes:
        fields: Nombres de los campos ausentes o inválidos (nombres del formulario)
        errors: Mensajes legibles, uno por problema detectado
    """

    def __init__(self, errors: List[str], fields: Optional[List[str]] = None):
        super().__init__("; ".join(errors))
        self.errors = errors
        self.fields = fields or []


class NotFoundError(DomainError):
    """El identificador no corresponde a ningún registro (p. ej. ya eliminado)."""

    def __init__(self, entity: str, record_id: str):
        super().__init__(f"{entity} not found.")
        self.entity = entity
        self.record_id = record_id


class InvalidIdError(DomainError):
    """El identificador recibido no tiene un formato válido."""

    def __init__(self, entity: str, record_id: object):
        super().__init__(f"Invalid {entity.lower()} ID.")
        self.entity = entity
        self.record_id = record_id


class InvalidStatusError(DomainError):
    """El estado solicitado no pertenece a la enumeración de estados de pedido."""

    def __init__(self, value: object):
        super().__init__(f"Invalid status: {value!r}.")
        self.value = value


class InvalidTransitionError(DomainError):
    """La tabla de transiciones no permite pasar del estado actual al solicitado."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Invalid status transition from {current} to {requested}.")
        self.current = current
        self.requested = requested


class DeleteFailedError(DomainError):
    """Falló algún paso del borrado en cascada; la transacción se revirtió."""

    def __init__(self, entity: str, record_id: str):
        super().__init__(f"Failed to delete the {entity.lower()}. Please try again later.")
        self.entity = entity
        self.record_id = record_id
