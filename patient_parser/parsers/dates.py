from datetime import datetime

from patient_parser.validation.errors import InvalidDateFormat

from .locators import DATE_FIELD_RE


def is_valid_date(value: str) -> bool:
    """Shape check only: exactly 8 digits (YYYYMMDD)."""
    return bool(value) and DATE_FIELD_RE.fullmatch(value) is not None


def format_date(value: str) -> str:
    """YYYYMMDD -> YYYY-MM-DD. Raises InvalidDateFormat on bad shape or impossible dates."""
    if not is_valid_date(value):
        raise InvalidDateFormat(f"Invalid date format in PRS segment: {value!r}")
    try:
        parsed = datetime.strptime(value, "%Y%m%d")
    except ValueError as ex:
        raise InvalidDateFormat(f"Invalid date format in PRS segment: {value!r} ({ex})") from ex
    return parsed.date().isoformat()
