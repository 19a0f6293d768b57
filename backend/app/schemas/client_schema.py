# backend/app/schemas/client_schema.py

"""
Esquemas Pydantic para el modelo Client.

Patrón de esquemas utilizado:
- ClientForm: Datos del formulario de alta/edición, validados en la frontera
- ClientResponse: Representación de un cliente en las respuestas
- ClientListPage / ClientFormPage / ClientEditPage: Datos que muestra cada página
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.core.config import settings
from app.core.phone import normalize_phone
from app.schemas.flash_schema import FlashMessage

# ========================================
# ESQUEMA DE ENTRADA (FORMULARIO)
# ========================================

class ClientForm(BaseModel):
    """Campos del formulario de cliente. El teléfono es opcional."""
    model_config = ConfigDict(populate_by_name=True, validate_default=True, str_strip_whitespace=True)

    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    phone: Optional[str] = Field(None, alias="phone")
    address: str = Field("", alias="address")

    @field_validator("first_name", "last_name", "address")
    @classmethod
    def validate_required(cls, v):
        if not v:
            raise ValueError("This field is required.")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v, info: ValidationInfo):
        region = (info.context or {}).get("phone_region", settings.PHONE_DEFAULT_REGION)
        return normalize_phone(v, region)


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class ClientResponse(BaseModel):
    """Esquema para las respuestas al leer clientes."""
    id: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    address: str

    model_config = ConfigDict(from_attributes=True)


class ClientListPage(BaseModel):
    """Listado de clientes con los parámetros de búsqueda aplicados."""
    clients: List[ClientResponse]
    search: str = ""
    sort: str
    flash: Optional[FlashMessage] = None


class ClientFormPage(BaseModel):
    """Página de alta: solo el aviso de la acción anterior, si lo hay."""
    flash: Optional[FlashMessage] = None


class ClientEditPage(BaseModel):
    client: ClientResponse
    flash: Optional[FlashMessage] = None
