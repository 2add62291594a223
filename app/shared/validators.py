# app/shared/validators.py
from datetime import date, datetime
from typing import Optional, Union

from app.core.exceptions import InvalidInputError

# Columnas Integer: 32 bits con signo en PostgreSQL
MAX_INT = 2_147_483_647

def is_positive_int(value) -> bool:
    """Entero en (0, MAX_INT]; bool no cuenta"""
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= MAX_INT

def validate_id(value, message: str) -> int:
    """Los identificadores numéricos deben ser enteros positivos dentro del rango de la columna"""
    if not is_positive_int(value):
        raise InvalidInputError(message)
    return value

def parse_date(value: Optional[Union[str, date]], message: str) -> date:
    """Aceptar date, datetime o texto ISO (YYYY-MM-DD o fecha-hora ISO)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise InvalidInputError(message)

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidInputError(message)

def validate_date_range(start: date, end: date) -> None:
    if start > end:
        raise InvalidInputError("La fecha de inicio debe ser anterior a la fecha de fin")
