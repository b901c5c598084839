from typing import Sequence, Tuple

from patient_parser.validation.errors import InvalidNameFormat, MissingNameField

from .base import field_at, split_components
from .dates import format_date
from .locators import find_date_field, find_name_field
from .models import FullName

# El índice 0 es la etiqueta del segmento
SCAN_START = 1


def parse_name(fields: Sequence[str]) -> FullName:
    name_field = find_name_field(fields, SCAN_START)
    if not name_field:
        raise MissingNameField("Name field is missing in PRS segment")

    # apellido^nombre[^segundo nombre]
    comp = split_components(name_field)
    last_name = field_at(comp, 0)
    first_name = field_at(comp, 1)
    if not last_name or not first_name:
        raise InvalidNameFormat(
            f"Invalid name format in PRS segment: {name_field!r} (expected Last^First[^Middle])"
        )
    middle_name = field_at(comp, 2) or None
    return FullName(last_name=last_name, first_name=first_name, middle_name=middle_name)


def parse_dob(fields: Sequence[str]) -> str:
    # Sin campo de 8 dígitos (o con forma distinta, p.ej. 1980-01-01) -> format_date lanza
    return format_date(find_date_field(fields, SCAN_START))


def interpret_prs(fields: Sequence[str]) -> Tuple[FullName, str]:
    """PRS -> (full name, ISO date of birth). Fails fast on the first broken rule."""
    full_name = parse_name(fields)
    dob = parse_dob(fields)
    return full_name, dob
