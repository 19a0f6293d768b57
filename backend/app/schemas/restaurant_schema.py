# backend/app/schemas/restaurant_schema.py
"""
Esquemas Pydantic para el modelo Restaurant.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.core.config import settings
from app.core.phone import normalize_phone
from app.schemas.flash_schema import FlashMessage


class RestaurantForm(BaseModel):
    """Campos del formulario de restaurante."""
    model_config = ConfigDict(populate_by_name=True, validate_default=True, str_strip_whitespace=True)

    name: str = Field("", alias="name")
    phone: Optional[str] = Field(None, alias="phone")
    address: str = Field("", alias="address")

    @field_validator("name", "address")
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


class RestaurantResponse(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    address: str

    model_config = ConfigDict(from_attributes=True)


class RestaurantListPage(BaseModel):
    restaurants: List[RestaurantResponse]
    search: str = ""
    sort: str
    flash: Optional[FlashMessage] = None


class RestaurantFormPage(BaseModel):
    flash: Optional[FlashMessage] = None


class RestaurantEditPage(BaseModel):
    restaurant: RestaurantResponse
    flash: Optional[FlashMessage] = None
