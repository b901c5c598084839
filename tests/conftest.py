import pytest

from patient_parser.services.records_service import SaveOutcome


class RecordingRepository:
    """Test double: keeps every saved record in memory."""

    def __init__(self):
        self.saved = []

    def save(self, record):
        self.saved.append(record)
        return SaveOutcome(saved=True, reference=str(len(self.saved)))


@pytest.fixture
def repo():
    return RecordingRepository()
