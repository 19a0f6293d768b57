# backend/app/core/phone.py
"""
Normalización de números de teléfono con la librería ``phonenumbers``.
"""

from typing import Optional

import phonenumbers


def normalize_phone(raw: Optional[str], region: str) -> Optional[str]:
    """
    Valida un número de teléfono y lo devuelve en formato internacional.

    Args:
        raw: Número tal y como llega del formulario (puede venir vacío)
        region: Código ISO de la región por defecto ("US", "ES"...) para
            números escritos sin prefijo internacional

    Returns:
        El número formateado (``+1 415-555-2671``) o None si no se indicó

    Raises:
        ValueError: si el texto no es un número válido para la región
    """
    if raw is None or not raw.strip():
        return None

    try:
        parsed = phonenumbers.parse(raw.strip(), region)
    except phonenumbers.NumberParseException:
        raise ValueError("Invalid phone number format.")

    if not phonenumbers.is_valid_number(parsed):
        raise ValueError("Invalid phone number format.")

    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.INTERNATIONAL)
