"""Content-based field scanners.

Los segmentos PRS traen un número variable de campos vacíos antes del nombre
y la fecha, así que en lugar de índices fijos se busca por forma del contenido.
"""
import re
from typing import Callable, Pattern, Sequence

NAME_FIELD_RE: Pattern[str] = re.compile(r"(?=.*\^)[A-Za-z^]+")
DATE_FIELD_RE: Pattern[str] = re.compile(r"[0-9]{8}")


def _scan(fields: Sequence[str], start_index: int, accept: Callable[[str], bool]) -> str:
    for value in fields[max(start_index, 0):]:
        if value and accept(value):
            return value
    return ""


def find_name_field(fields: Sequence[str], start_index: int) -> str:
    """First field with only letters and carets (at least one caret), or ''."""
    return _scan(fields, start_index, lambda v: NAME_FIELD_RE.fullmatch(v) is not None)


def find_date_field(fields: Sequence[str], start_index: int) -> str:
    """First field made of exactly 8 ASCII digits, or ''."""
    return _scan(fields, start_index, lambda v: DATE_FIELD_RE.fullmatch(v) is not None)
