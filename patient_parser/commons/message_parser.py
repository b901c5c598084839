import re
from typing import Callable, Dict, List, Sequence

from loguru import logger

from patient_parser.parsers.base import segment_tag, split_fields, split_segments
from patient_parser.parsers.det import interpret_det
from patient_parser.parsers.models import PatientRecord
from patient_parser.parsers.prs import interpret_prs

_BLANK_LINE = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)*")


def split_messages(text: str) -> List[str]:
    """Separa un lote de mensajes por líneas en blanco; descarta trozos vacíos."""
    normalized = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    return [chunk for chunk in _BLANK_LINE.split(normalized) if chunk.strip()]


def _apply_prs(record: PatientRecord, fields: Sequence[str]) -> None:
    record.full_name, record.date_of_birth = interpret_prs(fields)


def _apply_det(record: PatientRecord, fields: Sequence[str]) -> None:
    record.primary_condition = interpret_det(fields)


class MessageParser:
    """Parses one PRS/DET message into a PatientRecord.

    Stateless between calls: each ``parse`` builds its own accumulator, so a
    single instance can be shared by concurrent request handlers. ``log`` is any
    object with ``info``/``warning``/``error`` (loguru's logger by default).
    """

    handlers: Dict[str, Callable[[PatientRecord, Sequence[str]], None]] = {
        "PRS": _apply_prs,
        "DET": _apply_det,
    }

    def __init__(self, log=None):
        self.log = log or logger

    def parse(self, message: str) -> PatientRecord:
        record = PatientRecord()
        for line_no, seg in enumerate(split_segments(message), start=1):
            if not seg:
                continue
            fields = split_fields(seg)
            tag = segment_tag(fields)
            handler = self.handlers.get(tag)
            if handler is None:
                self.log.warning(f"Segmento no soportado '{tag}' (línea {line_no}); se ignora")
                continue
            # Último en llegar gana; los errores de validación suben tal cual
            handler(record, fields)
        return record

    def to_payload(self, record: PatientRecord) -> Dict:
        return record.to_dict()

    def parse_and_map(self, message: str) -> Dict:
        return self.to_payload(self.parse(message))


_default_parser = MessageParser()


def parse_message(message: str) -> PatientRecord:
    return _default_parser.parse(message)
