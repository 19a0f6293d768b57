# backend/app/services/form_parsing.py
"""
Validación de formularios en la frontera de la aplicación.

Convierte los datos crudos de un formulario en un esquema Pydantic tipado.
Los problemas de entrada del usuario no se lanzan como excepción: se devuelven
dentro de un FormResult para que el endpoint decida cómo mostrarlos.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar, get_args

import pydantic
from pydantic import BaseModel

from app.core.exceptions import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass
class FormResult(Generic[SchemaT]):
    """Resultado etiquetado: o bien un valor validado, o bien un ValidationError."""
    value: Optional[SchemaT] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _nested_model(annotation: Any) -> Optional[Type[BaseModel]]:
    """Modelo anidado de un campo (``List[ItemForm]`` -> ``ItemForm``), si lo hay."""
    for candidate in (annotation, *get_args(annotation)):
        if isinstance(candidate, type) and issubclass(candidate, BaseModel):
            return candidate
    return None


def _form_loc(schema: Type[BaseModel], loc: tuple) -> tuple:
    """
    Traduce la ubicación de un error a los nombres del formulario.

    Pydantic usa el alias cuando el campo llegó en los datos, pero el nombre
    Python cuando falla el valor por defecto de un campo ausente.
    """
    model: Optional[Type[BaseModel]] = schema
    translated = []
    for part in loc:
        field = model.model_fields.get(part) if model is not None and isinstance(part, str) else None
        if field is None:
            translated.append(part)
            continue
        translated.append(field.alias or part)
        model = _nested_model(field.annotation)
    return tuple(translated)


def _describe(loc: tuple, msg: str) -> str:
    """Construye un mensaje legible a partir de la ubicación del error."""
    # Los ValueError de los validadores llegan como "Value error, <texto>"
    msg = msg.removeprefix("Value error, ")

    if len(loc) >= 2 and loc[0] == "items" and isinstance(loc[1], int):
        field = loc[2] if len(loc) > 2 else None
        prefix = f"Item {loc[1] + 1}"
        if field and not msg.startswith(str(field)):
            return f"{prefix}: {field}: {msg}"
        return f"{prefix}: {msg}"

    if not loc:
        return msg
    return f"{loc[0]}: {msg}"


def parse_form(
    schema: Type[SchemaT],
    data: Mapping[str, Any],
    context: Optional[Dict[str, Any]] = None,
) -> FormResult[SchemaT]:
    """
    Valida ``data`` con ``schema``.

    Args:
        schema: Clase Pydantic del formulario (ClientForm, OrderForm...)
        data: Campos recibidos (un FormData de Starlette o un dict)
        context: Contexto de validación, p. ej. la región telefónica

    Returns:
        FormResult con el esquema validado o con el error de validación
    """
    try:
        value = schema.model_validate(dict(data), context=context)
    except pydantic.ValidationError as exc:
        errors: List[str] = []
        fields: List[str] = []
        for err in exc.errors():
            loc = _form_loc(schema, tuple(err.get("loc", ())))
            errors.append(_describe(loc, err.get("msg", "Invalid value")))
            if loc and str(loc[0]) not in fields:
                fields.append(str(loc[0]))
        return FormResult(error=ValidationError(errors, fields=fields))
    return FormResult(value=value)
