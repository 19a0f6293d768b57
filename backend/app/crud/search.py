# backend/app/crud/search.py
"""
Patrones de búsqueda "contiene" para los listados.
"""

# Carácter de escape usado en todas las búsquedas ILIKE
LIKE_ESCAPE = "\\"


def contains_pattern(search: str) -> str:
    """
    Convierte el texto buscado en un patrón ILIKE que lo contiene literalmente.

    ``%`` y ``_`` se escapan para que no actúen como comodines.
    """
    escaped = (
        search.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
