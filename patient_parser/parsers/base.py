import re
from typing import List, Sequence

SEGMENT_TAG_INDEX = 0
FIELD_SEP = "|"
COMP_SEP = "^"


def split_segments(message: str) -> List[str]:
    """Divide el mensaje en segmentos (LF, CRLF o CR). No recorta ni valida."""
    if not message:
        return []
    return re.split(r"\r\n|\n|\r", message)


def split_fields(seg: str) -> List[str]:
    return seg.split(FIELD_SEP)


def split_components(val: str) -> List[str]:
    return val.split(COMP_SEP) if val else []


def field_at(fields: Sequence[str], idx: int, default: str = "") -> str:
    # Acceso seguro: segmentos sin '|' final no deben reventar
    if 0 <= idx < len(fields):
        return fields[idx] or default
    return default


def segment_tag(fields: Sequence[str]) -> str:
    return field_at(fields, SEGMENT_TAG_INDEX)
