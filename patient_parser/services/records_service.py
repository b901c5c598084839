# patient_parser/services/records_service.py
import uuid
from dataclasses import dataclass
from typing import List, Optional, Protocol

from loguru import logger

from patient_parser.commons.message_parser import MessageParser, split_messages
from patient_parser.parsers.models import PatientRecord
from patient_parser.validation.errors import ValidationError


@dataclass
class SaveOutcome:
    saved: bool
    reference: Optional[str] = None


@dataclass
class BatchItem:
    index: int  # 1-based, como se muestra al usuario
    record: Optional[PatientRecord] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.record is not None:
            return {"index": self.index, "record": self.record.to_dict()}
        return {"index": self.index, **self.error.to_dict()}


class RecordRepository(Protocol):
    def save(self, record: PatientRecord) -> SaveOutcome: ...


class MockRecordRepository:
    """Stand-in for the database: only logs the record, nothing is retained."""

    def save(self, record: PatientRecord) -> SaveOutcome:
        ref = uuid.uuid4().hex
        logger.info(f"Guardado simulado en BD ({ref}): {record.to_dict()}")
        return SaveOutcome(saved=True, reference=ref)


class RecordsService:
    def __init__(self, parser: Optional[MessageParser] = None, repository: Optional[RecordRepository] = None):
        self.parser = parser or MessageParser()
        self.repository = repository or MockRecordRepository()

    def process(self, message: str) -> PatientRecord:
        record = self.parser.parse(message)
        self.repository.save(record)
        return record

    def process_batch(self, text: str) -> List[BatchItem]:
        """Un mensaje inválido no detiene el resto del lote."""
        items: List[BatchItem] = []
        for i, message in enumerate(split_messages(text), start=1):
            try:
                items.append(BatchItem(index=i, record=self.process(message)))
            except ValidationError as ve:
                logger.error(f"Mensaje {i} inválido ({ve.rule}): {ve}")
                items.append(BatchItem(index=i, error=ve))
        return items
