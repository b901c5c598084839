"""Validation error taxonomy for parsed patient messages.

All of these are the same kind for callers (``except ValidationError``); the
subclass and its ``rule`` code say which check failed.
"""


class ValidationError(Exception):
    rule = "validation"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "rule": self.rule}


class MissingNameField(ValidationError):
    rule = "missing_name"


class InvalidNameFormat(ValidationError):
    rule = "invalid_name_format"


class InvalidDateFormat(ValidationError):
    rule = "invalid_date_format"


class MissingPrimaryCondition(ValidationError):
    rule = "missing_primary_condition"
