# flake8: noqa

import pytest

from patient_parser.commons.message_parser import MessageParser, parse_message, split_messages
from patient_parser.parsers.models import FullName, PatientRecord
from patient_parser.validation.errors import InvalidDateFormat, MissingNameField, MissingPrimaryCondition

HEADER = "MSG|^~\\&|SenderSystem|Location|ReceiverSystem|Location|20230502112233\nEVT|TYPE|20230502112233\n"

SMITH = HEADER + (
    "PRS|1|9876543210^^^Location^ID||Smith^John^A|||M|19800101|\n"
    "DET|1|I|^^MainDepartment^101^Room 1|Common Cold\n"
)

DOE = HEADER + (
    "PRS|1|9876543211^^^Location^ID||Doe^Jane||F|19900202|\n"
    "DET|1|I|^^MainDepartment^102^Room 2|Flu\n"
)

SMITH_DICT = {
    "fullName": {"lastName": "Smith", "firstName": "John", "middleName": "A"},
    "dateOfBirth": "1980-01-01",
    "primaryCondition": "Common Cold",
}

DOE_DICT = {
    "fullName": {"lastName": "Doe", "firstName": "Jane"},
    "dateOfBirth": "1990-02-02",
    "primaryCondition": "Flu",
}


class RecordingLog:
    def __init__(self):
        self.warnings = []

    def info(self, msg):
        pass

    def warning(self, msg):
        self.warnings.append(msg)

    def error(self, msg):
        pass


def test_valid_message():
    assert parse_message(SMITH).to_dict() == SMITH_DICT


def test_record_value():
    rec = parse_message(SMITH)
    assert rec == PatientRecord(
        full_name=FullName("Smith", "John", "A"),
        date_of_birth="1980-01-01",
        primary_condition="Common Cold",
    )


def test_missing_middle_name_key_absent():
    out = parse_message(DOE).to_dict()
    assert out == DOE_DICT
    assert "middleName" not in out["fullName"]


def test_trailing_caret_means_no_middle_name():
    msg = DOE.replace("Doe^Jane||F|19900202|", "Doe^Jane^|F|19900202|")
    assert parse_message(msg).to_dict() == DOE_DICT


def test_segments_without_trailing_pipe():
    msg = SMITH.replace("M|19800101|\n", "M|19800101\n")
    assert parse_message(msg).to_dict() == SMITH_DICT


def test_extra_fields_ignored():
    msg = SMITH.replace("19800101|\n", "19800101|ExtraField\n").replace(
        "Common Cold\n", "Common Cold|ExtraField\n"
    )
    assert parse_message(msg).to_dict() == SMITH_DICT


def test_crlf_line_endings():
    assert parse_message(SMITH.replace("\n", "\r\n")).to_dict() == SMITH_DICT


def test_wrong_date_shape_raises():
    msg = SMITH.replace("19800101", "1980-01-01")
    with pytest.raises(InvalidDateFormat):
        parse_message(msg)


def test_empty_condition_raises():
    msg = SMITH.replace("Common Cold", "")
    with pytest.raises(MissingPrimaryCondition):
        parse_message(msg)


def test_absent_condition_raises():
    msg = SMITH.replace("|^^MainDepartment^101^Room 1|Common Cold", "")
    with pytest.raises(MissingPrimaryCondition):
        parse_message(msg)


def test_missing_name_raises():
    msg = SMITH.replace("Smith^John^A", "")
    with pytest.raises(MissingNameField):
        parse_message(msg)


def test_unknown_segment_is_logged_and_skipped():
    log = RecordingLog()
    msg = SMITH.replace("PRS|", "XYZ|")
    rec = MessageParser(log=log).parse(msg)
    assert rec.to_dict() == {
        "fullName": {"lastName": "", "firstName": ""},
        "dateOfBirth": "",
        "primaryCondition": "Common Cold",
    }
    tags = [w for w in log.warnings if "'XYZ'" in w]
    assert len(tags) == 1
    # MSG y EVT tampoco son segmentos interpretados
    assert any("'MSG'" in w for w in log.warnings)
    assert any("'EVT'" in w for w in log.warnings)


def test_det_before_prs():
    lines = SMITH.strip("\n").split("\n")
    reordered = "\n".join([lines[0], lines[3], lines[2]])
    assert parse_message(reordered).to_dict() == SMITH_DICT


def test_last_segment_wins():
    msg = SMITH + "PRS|2|||Doe^Jane|||F|19900202|\nDET|2|I||Flu\n"
    out = parse_message(msg).to_dict()
    assert out == DOE_DICT


def test_empty_message_gives_defaults():
    assert parse_message("") == PatientRecord()


def test_idempotent():
    parser = MessageParser()
    a, b = parser.parse(SMITH), parser.parse(SMITH)
    assert a == b
    assert a is not b


def test_parse_and_map():
    assert MessageParser().parse_and_map(DOE) == DOE_DICT


def test_split_messages_on_blank_lines():
    batch = SMITH + "\n" + DOE + "\n  \n\n"
    parts = split_messages(batch)
    assert len(parts) == 2
    assert parse_message(parts[0]).to_dict() == SMITH_DICT
    assert parse_message(parts[1]).to_dict() == DOE_DICT


def test_split_messages_crlf_and_empty():
    assert split_messages("") == []
    assert len(split_messages(SMITH.replace("\n", "\r\n") + "\r\n" + DOE)) == 2
    assert len(split_messages(SMITH)) == 1
